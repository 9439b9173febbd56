"""
Catalog identifier mapping: "CSC" + "111" -> Kuali pid.

The mapper is an explicit object owned by whoever constructs it (normally
CourseScraper). Its cache is filled lazily on the first resolve() and lives
as long as the object, unless invalidate() is called.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional

from coursescraper.errors import CatalogLookupMiss
from coursescraper.model import CatalogCourseEntry


logger = logging.getLogger(__name__)


def _split_key(catalog_course_id: str) -> str:
    """
    Upper-case the subject (leading letters) and keep the number as-is.
    """
    key = catalog_course_id.strip()
    i = 0
    while i < len(key) and key[i].isalpha():
        i += 1
    return key[:i].upper() + key[i:]


def make_key(subject: str, code: str) -> str:
    return subject.strip().upper() + code.strip()


def parse_catalog(raw_entries: Iterable[Dict[str, Any]]) -> List[CatalogCourseEntry]:
    """
    Convert the raw bulk listing into CatalogCourseEntry records.

    Entries without "__catalogCourseId" or "pid" are skipped.
    """
    entries: List[CatalogCourseEntry] = []
    for raw in raw_entries:
        course_id = raw.get("__catalogCourseId")
        pid = raw.get("pid")
        if not course_id or not pid:
            logger.debug("Skipping catalog entry without id/pid: %r", raw)
            continue
        entries.append(CatalogCourseEntry(catalog_course_id=str(course_id), pid=str(pid), title=raw.get("title")))
    return entries


def _build_mapping(entries: Iterable[CatalogCourseEntry]) -> Dict[str, str]:
    return {_split_key(entry.catalog_course_id): entry.pid for entry in entries}


class CatalogIdMapper:
    """
    Resolve subject + course number to the catalog's opaque pid.

    fetch_catalog() must return the raw bulk listing (list of dicts).
    """

    def __init__(self, fetch_catalog: Callable[[], List[Dict[str, Any]]]) -> None:
        self._fetch_catalog = fetch_catalog
        self._pids: Optional[Dict[str, str]] = None
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._pids or {})

    def __contains__(self, key: object) -> bool:
        return self._pids is not None and key in self._pids

    @property
    def loaded(self) -> bool:
        return self._pids is not None

    def load(self, entries: Iterable[CatalogCourseEntry]) -> None:
        """
        Populate the cache from an already fetched listing.
        """
        pids = _build_mapping(entries)
        with self._lock:
            self._pids = pids
        logger.info("Catalog mapping built with %d entries", len(pids))

    def invalidate(self) -> None:
        with self._lock:
            self._pids = None

    def _ensure_loaded(self) -> Dict[str, str]:
        pids = self._pids
        if pids is not None:
            return pids

        # single flight: concurrent first callers wait for one fetch
        with self._lock:
            if self._pids is None:
                logger.info("Catalog mapping empty, fetching catalog")
                pids = _build_mapping(parse_catalog(self._fetch_catalog()))
                self._pids = pids
                logger.info("Catalog mapping built with %d entries", len(pids))
            return self._pids

    def resolve(self, subject: str, code: str) -> str:
        """
        Return the pid for e.g. ("csc", "111").

        Raises CatalogLookupMiss if the course is not in the catalog.
        """
        pids = self._ensure_loaded()
        key = make_key(subject, code)
        try:
            return pids[key]
        except KeyError:
            raise CatalogLookupMiss(subject, code) from None
