from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

import requests
from bs4 import BeautifulSoup

from coursescraper.catalog import CatalogIdMapper, parse_catalog
from coursescraper.detail import extract_detail
from coursescraper.listing import extract_listing
from coursescraper.model import CatalogCourseEntry, CourseDetail, DetailedClassInfo, Response, SectionStub
from coursescraper.normalize import normalize_course_detail
from coursescraper.urls import (
    COURSES_URL,
    class_schedule_listing_url,
    course_detail_url,
    current_term,
    detailed_class_information_url,
)


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

REQUEST_TIMEOUT = 30
USER_AGENT = "coursescraper/0.1 (+https://github.com/coursescraper/coursescraper)"


# ---------------------------------------------------------------------------
# Document loading
# ---------------------------------------------------------------------------


def fetch_html(session: requests.Session, url: str, timeout: float = REQUEST_TIMEOUT) -> BeautifulSoup:
    """
    GET an HTML page and return the parsed document.
    """
    logger.info("GET %s", url)
    resp = session.get(url, timeout=timeout)
    resp.raise_for_status()
    return BeautifulSoup(resp.text, "html.parser")


def fetch_json(session: requests.Session, url: str, timeout: float = REQUEST_TIMEOUT) -> Any:
    """
    GET a JSON document and return the decoded value.
    """
    logger.info("GET %s", url)
    resp = session.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.json()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


class CourseScraper:
    """
    Fetches catalog and registration documents and runs the extractors.

    Every result is wrapped in a Response (data, timestamp, url).
    One scraper owns one CatalogIdMapper, so the catalog is fetched at most
    once per scraper unless the mapper is invalidated.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
        mapper: Optional[CatalogIdMapper] = None,
    ) -> None:
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = USER_AGENT
        self.session = session
        self.timeout = timeout
        self.mapper = mapper if mapper is not None else CatalogIdMapper(self._fetch_catalog)

    def _fetch_catalog(self) -> List[dict]:
        return fetch_json(self.session, COURSES_URL, self.timeout)

    def get_all_courses(self) -> Response[List[CatalogCourseEntry]]:
        """
        Get all courses from the catalog. Also fills the pid mapping.
        """
        entries = parse_catalog(self._fetch_catalog())
        self.mapper.load(entries)
        return Response(data=entries, timestamp=_now(), url=COURSES_URL)

    def get_course_details(self, subject: str, code: str) -> Response[CourseDetail]:
        """
        Map subject + code (e.g. 'CSC', '111') to a pid, then get the course details.

        Raises CatalogLookupMiss for courses that are not in the catalog.
        """
        pid = self.mapper.resolve(subject, code)
        return self.get_course_details_by_pid(pid)

    def get_course_details_by_pid(self, pid: str) -> Response[CourseDetail]:
        url = course_detail_url(pid)
        raw = fetch_json(self.session, url, self.timeout)
        return Response(data=normalize_course_detail(raw), timestamp=_now(), url=url)

    def get_course_sections(
        self,
        subject: str,
        code: str,
        term: Optional[str] = None,
    ) -> Response[List[SectionStub]]:
        """
        Get all sections of a course in a term (default: current term).
        """
        term = term or current_term()
        url = class_schedule_listing_url(term, subject.upper(), code)
        soup = fetch_html(self.session, url, self.timeout)
        return Response(data=extract_listing(soup, term=term), timestamp=_now(), url=url)

    def get_section_seats(self, term: str, crn: str) -> Response[DetailedClassInfo]:
        """
        Get seats, waitlist seats and restrictions of one section.
        """
        url = detailed_class_information_url(term, crn)
        soup = fetch_html(self.session, url, self.timeout)
        return Response(data=extract_detail(soup), timestamp=_now(), url=url)
