from coursescraper.catalog import CatalogIdMapper
from coursescraper.detail import extract_detail
from coursescraper.errors import CatalogLookupMiss, NumericParseFailure, ScraperError, WrongPageType
from coursescraper.listing import extract_listing
from coursescraper.normalize import normalize_course_detail
from coursescraper.scrape import CourseScraper

__all__ = [
    "CatalogIdMapper",
    "CatalogLookupMiss",
    "CourseScraper",
    "NumericParseFailure",
    "ScraperError",
    "WrongPageType",
    "extract_detail",
    "extract_listing",
    "normalize_course_detail",
]
