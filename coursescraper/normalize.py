"""
Course detail normalization (Kuali JSON -> CourseDetail).

- Removes HTML tags from the description (entities are NOT decoded)
- Splits "hoursCatalogText" ("<lecture>-<lab>-<tutorial>") into its parts
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from coursescraper.model import CourseDetail, HoursDecomposition


TAG_RE = re.compile(r"<[^>]+>")

# Raw keys that are mapped onto typed CourseDetail attributes
_MAPPED_KEYS = ("pid", "__catalogCourseId", "title", "description", "hoursCatalogText")


def strip_tags(text: str) -> str:
    """
    Remove every <...> span, including attribute-bearing and self-closing tags.
    """
    return TAG_RE.sub("", text)


def parse_hours(text: Optional[str]) -> Optional[HoursDecomposition]:
    """
    Split a hyphen-delimited hours string positionally.

    "3-0-1" -> lecture="3", lab="0", tutorial="1"
    "3-0"   -> lecture="3", lab="0", tutorial=None
    "" / None -> None
    """
    if not text:
        return None

    parts = text.split("-")[:3]
    # pad with None, never with "0"
    parts += [None] * (3 - len(parts))
    lecture, lab, tutorial = parts
    return HoursDecomposition(lecture=lecture, lab=lab, tutorial=tutorial)


def normalize_course_detail(raw: Dict[str, Any]) -> CourseDetail:
    """
    Build a CourseDetail from a raw catalog API record.

    The raw dict is left untouched; unmapped keys are passed through in `extra`.
    """
    hours_text = raw.get("hoursCatalogText")
    if not isinstance(hours_text, str):
        hours_text = None

    return CourseDetail(
        pid=raw.get("pid"),
        catalog_course_id=raw.get("__catalogCourseId"),
        title=raw.get("title"),
        description=strip_tags(raw.get("description") or ""),
        hours=parse_hours(hours_text),
        extra={k: v for k, v in raw.items() if k not in _MAPPED_KEYS},
    )
