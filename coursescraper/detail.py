"""
Parsing of the "Detailed Class Information" page (one section, one term).

Extracts:
- Seats          (capacity, actual, remaining)
- Waitlist Seats (capacity, actual, remaining)
- Enrollment restrictions (levels, fields of study)

The page structure is validated first. Field extraction only runs on
elements that were found during validation.
"""

from __future__ import annotations

import logging
import re
from typing import List, NamedTuple, Optional, Sequence, Union

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from coursescraper.errors import NumericParseFailure, WrongPageType
from coursescraper.model import DetailedClassInfo, EnrollmentRestrictions, SeatCount


logger = logging.getLogger(__name__)

SEATS_LABELS = {"seats"}
WAITLIST_LABELS = {"waitlist seats", "waitlist", "wait list seats", "wait list"}

INT_RE = re.compile(r"[^\d-]*?(-?\d+)\D*")
PAREN_RE = re.compile(r"\s*\([^)]*\)")
WHITESPACE_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _text(el: Tag) -> str:
    return WHITESPACE_RE.sub(" ", el.get_text(" ", strip=True)).strip()


def _has_class(el: Tag, name: str) -> bool:
    return name in (el.get("class") or [])


def parse_int(text: str, label: Optional[str] = None) -> int:
    """
    Read an integer from a scraped cell, e.g. " 32 ", "\\xa017", "-2".

    Raises NumericParseFailure instead of defaulting to 0.
    """
    m = INT_RE.fullmatch(text.strip())
    if not m:
        raise NumericParseFailure(text, label)
    return int(m.group(1))


def seat_count_from_cells(cells: Sequence[str], label: Optional[str] = None) -> SeatCount:
    """
    (capacity, actual, remaining) cell texts -> SeatCount.
    """
    capacity, actual, remaining = cells[:3]
    return SeatCount(
        capacity=parse_int(capacity, label),
        actual=parse_int(actual, label),
        remaining=parse_int(remaining, label),
    )


def _normalize_level(value: str) -> str:
    # "Undergraduate (UG)" -> "undergraduate"
    return PAREN_RE.sub("", value).strip().lower()


def _group_kind(heading: str) -> Optional[str]:
    low = heading.lower()
    if "level" in low:
        return "level"
    if "field of study" in low or "fields of study" in low or "major" in low:
        return "field_of_study"
    return None


def restrictions_from_lines(lines: Sequence[str]) -> EnrollmentRestrictions:
    """
    Interpret the text lines of a "Restrictions:" block.

    Each "Must be enrolled in one of the following <X>:" line opens a group,
    the lines after it are the group's values. Repeated groups are appended
    in source order.
    """
    levels: List[str] = []
    fields: List[str] = []
    kind: Optional[str] = None

    for line in lines:
        low = line.lower()
        if low.startswith("must be enrolled in"):
            kind = _group_kind(line)
            continue
        if low.startswith("cannot be enrolled in") or low.startswith("may not be enrolled in"):
            # exclusions are not requirements
            kind = None
            continue

        if kind == "level":
            level = _normalize_level(line)
            if level and level not in levels:
                levels.append(level)
        elif kind == "field_of_study":
            fields.append(line)

    return EnrollmentRestrictions(level=levels, field_of_study=fields or None)


def _restriction_lines(label: Tag) -> List[str]:
    """
    Collect the <br>-separated lines following a "Restrictions:" label,
    up to the next field label or table.
    """
    lines: List[str] = []
    current: List[str] = []

    def flush() -> None:
        line = WHITESPACE_RE.sub(" ", " ".join(current)).strip()
        if line:
            lines.append(line)
        current.clear()

    for sib in label.next_siblings:
        if isinstance(sib, Comment):
            continue
        if isinstance(sib, NavigableString):
            current.append(str(sib))
            continue
        if not isinstance(sib, Tag):
            continue
        if sib.name == "table" or (sib.name == "span" and _has_class(sib, "fieldlabeltext")):
            break
        if sib.name == "br":
            flush()
        else:
            current.append(sib.get_text(" "))
    flush()

    return lines


# ---------------------------------------------------------------------------
# Structure validation
# ---------------------------------------------------------------------------


class DetailPage(NamedTuple):
    """
    Elements located on a page that passed structure validation.
    """

    seats: List[str]
    waitlist_seats: List[str]
    restrictions_label: Optional[Tag]


def _find_seats_table(soup: Union[BeautifulSoup, Tag]) -> Optional[Tag]:
    for table in soup.find_all("table"):
        summary = (table.get("summary") or "").lower()
        caption = table.find("caption")
        caption_text = _text(caption) if caption else ""
        if "seating numbers" in summary or caption_text == "Registration Availability":
            return table
    return None


def validate_detail_page(soup: Union[BeautifulSoup, Tag]) -> DetailPage:
    """
    Locate the seats summary table and its two rows, or raise WrongPageType.
    """
    table = _find_seats_table(soup)
    if table is None:
        raise WrongPageType()

    seats: Optional[List[str]] = None
    waitlist: Optional[List[str]] = None

    for row in table.find_all("tr"):
        th = row.find("th")
        if th is None:
            continue
        label = _text(th).rstrip(":").strip().lower()
        cells = [_text(td) for td in row.find_all("td")]
        if len(cells) < 3:
            continue

        if label in SEATS_LABELS and seats is None:
            seats = cells
        elif label in WAITLIST_LABELS and waitlist is None:
            waitlist = cells

    if seats is None or waitlist is None:
        raise WrongPageType()

    container = table.find_parent("td") or soup
    restrictions_label = None
    for span in container.find_all("span", class_="fieldlabeltext"):
        if _text(span).startswith("Restrictions"):
            restrictions_label = span
            break

    return DetailPage(seats=seats, waitlist_seats=waitlist, restrictions_label=restrictions_label)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_detail(soup: Union[BeautifulSoup, Tag, str]) -> DetailedClassInfo:
    """
    Parse a detailed class information page into seats, waitlist seats
    and enrollment restrictions.
    """
    if isinstance(soup, str):
        soup = BeautifulSoup(soup, "html.parser")

    page = validate_detail_page(soup)

    if page.restrictions_label is not None:
        requirements = restrictions_from_lines(_restriction_lines(page.restrictions_label))
    else:
        requirements = EnrollmentRestrictions()

    info = DetailedClassInfo(
        seats=seat_count_from_cells(page.seats, "Seats"),
        waitlist_seats=seat_count_from_cells(page.waitlist_seats, "Waitlist Seats"),
        requirements=requirements,
    )
    logger.debug("Parsed detail page: %s", info)
    return info
