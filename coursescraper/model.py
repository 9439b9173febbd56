"""
Central data model definitions used across the project.

This module defines the canonical structure of the records produced by the
extractors so that:
- all modules share the same field names
- "absent" (None) stays distinct from "empty" when records are serialized
- the orchestrator can wrap any record with its provenance (Response)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar


T = TypeVar("T")


def _compact(value: Any) -> Any:
    """
    Drop None values from (nested) dicts so absent attributes are omitted.
    """
    if isinstance(value, dict):
        return {k: _compact(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_compact(v) for v in value]
    return value


def to_jsonable(value: Any) -> Any:
    """
    Convert a record (or a list of records) into JSON-ready data.
    """
    if isinstance(value, list):
        return [to_jsonable(v) for v in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


class _Record:
    def to_dict(self) -> Dict[str, Any]:
        return _compact(asdict(self))


# ---------------------------------------------------------------------------
# Catalog (Kuali)
# ---------------------------------------------------------------------------


@dataclass
class CatalogCourseEntry(_Record):
    """
    One entry of the bulk catalog listing.
    """

    catalog_course_id: str
    pid: str
    title: Optional[str] = None


@dataclass
class HoursDecomposition(_Record):
    """
    Lecture-lab-tutorial hours, split positionally from e.g. "3-0-1".

    A field missing from the source string stays None.
    """

    lecture: Optional[str] = None
    lab: Optional[str] = None
    tutorial: Optional[str] = None


@dataclass
class CourseDetail(_Record):
    pid: Optional[str]
    catalog_course_id: Optional[str]
    title: Optional[str]
    description: str
    hours: Optional[HoursDecomposition] = None
    extra: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Class schedule listing (Banner)
# ---------------------------------------------------------------------------


@dataclass
class MeetingTime(_Record):
    """
    One row of a section's "Scheduled Meeting Times" table.
    """

    type: str
    time: str
    days: str
    where: str
    date_range: str
    schedule_type: str
    instructors: List[str]


@dataclass
class SectionStub(_Record):
    """
    Represents one section row of a class schedule listing.
    """

    term: Optional[str]
    crn: str
    section_code: str
    title: str
    subject: str
    course_number: str
    associated_term: Optional[str] = None
    registration_dates: Optional[str] = None
    levels: List[str] = field(default_factory=list)
    campus: Optional[str] = None
    schedule_type: Optional[str] = None
    instructional_method: Optional[str] = None
    credits: Optional[float] = None
    meeting_times: List[MeetingTime] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Detailed class information (Banner)
# ---------------------------------------------------------------------------


@dataclass
class SeatCount(_Record):
    """
    Capacity / actual / remaining as printed on the page.

    remaining == capacity - actual is NOT checked here.
    """

    capacity: int
    actual: int
    remaining: int


@dataclass
class EnrollmentRestrictions(_Record):
    level: List[str] = field(default_factory=list)
    # None means the page has no field-of-study restriction
    field_of_study: Optional[List[str]] = None


@dataclass
class DetailedClassInfo(_Record):
    seats: SeatCount
    waitlist_seats: SeatCount
    requirements: EnrollmentRestrictions


# ---------------------------------------------------------------------------
# Provenance
# ---------------------------------------------------------------------------


@dataclass
class Response(Generic[T]):
    """
    Extracted data together with the source URL and extraction timestamp.
    """

    data: T
    timestamp: str
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {"data": to_jsonable(self.data), "timestamp": self.timestamp, "url": self.url}
