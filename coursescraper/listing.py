"""
Parsing of the "Class Schedule Listing" page (all sections of one course in one term).

Each section on the page is a pair of table rows:
- a header row (th.ddtitle) with a link to the section's detail page:
      "Algorithms and Data Structures II - 10801 - CSC 226 - A01"
- a detail row with labelled fields, bare text fields
  ("Main Campus Campus", "1.500 Credits", ...) and a nested
  "Scheduled Meeting Times" table

Important rules:
- A page without the "Sections Found" table is the wrong page,
  unless Banner says that no classes were found (-> empty list)
- 1 header row with a CRN link = 1 SectionStub, in document order
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence, Union
from urllib.parse import parse_qs, urlparse

from bs4 import BeautifulSoup, Comment, Tag

from coursescraper.errors import WrongPageType
from coursescraper.model import MeetingTime, SectionStub


logger = logging.getLogger(__name__)

SECTIONS_CAPTION = "Sections Found"
MEETING_TIMES_CAPTION = "Scheduled Meeting Times"
NO_CLASSES_RE = re.compile(r"No classes were found")

CRN_RE = re.compile(r"crn_in=(\d+)")
CREDITS_RE = re.compile(r"([\d.]+)\s+Credits")
INSTRUCTOR_ROLE_RE = re.compile(r"\s*\([^)]*\)")
WHITESPACE_RE = re.compile(r"\s+")

# Bare text lines "<value> <suffix>" in the section detail cell
SUFFIX_FIELDS = (
    ("Schedule Type", "schedule_type"),
    ("Instructional Method", "instructional_method"),
    ("Campus", "campus"),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _text(el: Tag) -> str:
    return WHITESPACE_RE.sub(" ", el.get_text(" ", strip=True)).strip()


def _caption(table: Tag) -> str:
    caption = table.find("caption")
    return _text(caption) if caption else ""


def _split_instructors(text: str) -> List[str]:
    # "Bill Bird (P), Jane Doe" -> ["Bill Bird", "Jane Doe"]
    names = []
    for part in text.split(","):
        name = INSTRUCTOR_ROLE_RE.sub("", part).strip()
        if name:
            names.append(name)
    return names


def meeting_time_from_cells(cells: Sequence[str]) -> Optional[MeetingTime]:
    """
    Parse one "Scheduled Meeting Times" row (7 cells) into a MeetingTime.

    Returns None for rows of any other shape.
    """
    if len(cells) != 7:
        return None

    kind, time, days, where, date_range, schedule_type, instructors = cells
    return MeetingTime(
        type=kind,
        time=time,
        days=days,
        where=where,
        date_range=date_range,
        schedule_type=schedule_type,
        instructors=_split_instructors(instructors),
    )


def parse_section_title(text: str) -> Dict[str, str]:
    """
    "Algorithms and Data Structures II - 10801 - CSC 226 - A01" ->
        title, crn, subject, course_number, section_code

    Course titles may themselves contain " - ", so we split from the right.
    Missing parts are returned as empty strings.
    """
    parts = [p.strip() for p in text.rsplit(" - ", 3)]
    if len(parts) < 4:
        return {"title": text.strip(), "crn": "", "subject": "", "course_number": "", "section_code": ""}

    title, crn, course, section = parts
    course_parts = course.split()
    subject = course_parts[0] if course_parts else ""
    course_number = " ".join(course_parts[1:])

    return {
        "title": title,
        "crn": crn,
        "subject": subject,
        "course_number": course_number,
        "section_code": section,
    }


def _extract_fields(detail_td: Tag) -> Dict:
    """
    Read labelled fields, bare text fields and meeting times of one section.
    """
    fields: Dict = {}

    for span in detail_td.find_all("span", class_="fieldlabeltext"):
        label = _text(span).rstrip(":").strip()
        sib = span.next_sibling
        value = WHITESPACE_RE.sub(" ", str(sib)).strip() if sib is not None and not isinstance(sib, Tag) else ""
        if label == "Associated Term":
            fields["associated_term"] = value
        elif label == "Registration Dates":
            fields["registration_dates"] = value
        elif label == "Levels":
            fields["levels"] = [v.strip() for v in value.split(",") if v.strip()]

    # Only direct text nodes of the cell, not those of the nested table
    for node in detail_td.find_all(string=True, recursive=False):
        if isinstance(node, Comment):
            continue
        t = WHITESPACE_RE.sub(" ", str(node)).strip()
        if not t:
            continue
        if t.endswith("Credits"):
            m = CREDITS_RE.search(t)
            if m:
                fields["credits"] = float(m.group(1))
            continue
        for suffix, key in SUFFIX_FIELDS:
            if t.endswith(" " + suffix):
                fields[key] = t[: -len(suffix)].strip()
                break

    meeting_times: List[MeetingTime] = []
    for table in detail_td.find_all("table"):
        if _caption(table) != MEETING_TIMES_CAPTION:
            continue
        for row in table.find_all("tr"):
            mt = meeting_time_from_cells([_text(td) for td in row.find_all("td")])
            if mt:
                meeting_times.append(mt)
    fields["meeting_times"] = meeting_times

    return fields


def _term_from_href(href: str) -> Optional[str]:
    values = parse_qs(urlparse(href).query).get("term_in")
    return values[0] if values else None


# ---------------------------------------------------------------------------
# Structure validation
# ---------------------------------------------------------------------------


def find_sections_table(soup: Union[BeautifulSoup, Tag]) -> Optional[Tag]:
    """
    Return the "Sections Found" table.

    Returns None if the page states that no classes were found.
    Raises WrongPageType for any other page.
    """
    for table in soup.find_all("table", class_="datadisplaytable"):
        if _caption(table) == SECTIONS_CAPTION:
            return table

    if soup.find(string=NO_CLASSES_RE):
        return None

    raise WrongPageType()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_listing(soup: Union[BeautifulSoup, Tag, str], term: Optional[str] = None) -> List[SectionStub]:
    """
    Parse a class schedule listing page into SectionStub records.
    """
    if isinstance(soup, str):
        soup = BeautifulSoup(soup, "html.parser")

    table = find_sections_table(soup)
    if table is None:
        logger.info("Listing page reports no classes")
        return []

    sections: List[SectionStub] = []

    for th in table.find_all("th", class_="ddtitle"):
        link = th.find("a", href=True)
        m = CRN_RE.search(link["href"]) if link else None
        if not m:
            logger.debug("Skipping row without CRN link: %s", _text(th))
            continue

        title = parse_section_title(_text(link))
        fields: Dict = {}
        header_row = th.find_parent("tr")
        detail_row = header_row.find_next_sibling("tr") if header_row else None
        if detail_row is not None:
            detail_td = detail_row.find("td", class_="dddefault")
            if detail_td is not None:
                fields = _extract_fields(detail_td)

        sections.append(
            SectionStub(
                term=term or _term_from_href(link["href"]),
                crn=m.group(1),
                section_code=title["section_code"],
                title=title["title"],
                subject=title["subject"],
                course_number=title["course_number"],
                **fields,
            )
        )

    logger.info("Parsed %d sections", len(sections))
    return sections
