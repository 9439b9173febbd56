"""
Exceptions raised by the extraction layer.

Network errors are not wrapped: requests exceptions reach the caller as-is.
"""

from __future__ import annotations

from typing import Optional


WRONG_PAGE_TYPE_MESSAGE = "wrong page type for parser"


class ScraperError(Exception):
    """
    Base class for all extraction-layer errors.
    """


class WrongPageType(ScraperError):
    """
    The document does not carry the structural marker the parser expects.
    """

    def __init__(self, message: str = WRONG_PAGE_TYPE_MESSAGE) -> None:
        super().__init__(message)


class NumericParseFailure(ScraperError, ValueError):
    """
    A seat-count cell could not be read as an integer.
    """

    def __init__(self, text: str, label: Optional[str] = None) -> None:
        self.text = text
        self.label = label
        where = f" in {label!r} row" if label else ""
        super().__init__(f"Cannot parse integer from {text!r}{where}")


class CatalogLookupMiss(ScraperError, KeyError):
    """
    No catalog identifier (pid) exists for the subject + course number.
    """

    def __init__(self, subject: str, code: str) -> None:
        self.subject = subject
        self.code = code
        super().__init__(f"No catalog entry for {subject} {code}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])
