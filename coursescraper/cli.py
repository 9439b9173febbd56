"""
CLI (Command Line Interface).

Quick terminal commands, e.g.:

    coursescraper catalog
    coursescraper course CSC 111
    coursescraper course --pid ByS23Pp7E
    coursescraper sections CSC 355 --term 202009
    coursescraper seats 202009 10801

Every command prints the result as JSON: {"data": ..., "timestamp": ..., "url": ...}
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

import requests

from coursescraper.errors import ScraperError
from coursescraper.model import Response
from coursescraper.scrape import REQUEST_TIMEOUT, CourseScraper


def _print_response(resp: Response[Any]) -> None:
    print(json.dumps(resp.to_dict(), ensure_ascii=False, indent=2))


def _cmd_catalog(args: argparse.Namespace, scraper: CourseScraper) -> int:
    _print_response(scraper.get_all_courses())
    return 0


def _cmd_course(args: argparse.Namespace, scraper: CourseScraper) -> int:
    """
    Course details by subject + code, or directly by pid.
    """
    if args.pid:
        _print_response(scraper.get_course_details_by_pid(args.pid.strip()))
        return 0

    subject = (args.subject or "").strip()
    code = (args.code or "").strip()
    if not subject or not code:
        print("Please provide SUBJECT and CODE, or --pid.", file=sys.stderr)
        return 1

    _print_response(scraper.get_course_details(subject, code))
    return 0


def _cmd_sections(args: argparse.Namespace, scraper: CourseScraper) -> int:
    subject = args.subject.strip()
    code = args.code.strip()
    if not subject or not code:
        print("Please provide SUBJECT and CODE.", file=sys.stderr)
        return 1

    _print_response(scraper.get_course_sections(subject, code, term=args.term))
    return 0


def _cmd_seats(args: argparse.Namespace, scraper: CourseScraper) -> int:
    term = args.term.strip()
    crn = args.crn.strip()
    if not term or not crn:
        print("Please provide TERM and CRN.", file=sys.stderr)
        return 1

    _print_response(scraper.get_section_seats(term, crn))
    return 0


COMMANDS = {
    "catalog": _cmd_catalog,
    "course": _cmd_course,
    "sections": _cmd_sections,
    "seats": _cmd_seats,
}


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="coursescraper", description="Course catalog and class section scraper")
    parser.add_argument("--timeout", type=float, default=REQUEST_TIMEOUT, help="HTTP timeout in seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("catalog", help="List all courses of the catalog")

    p_course = sub.add_parser("course", help="Show course details")
    p_course.add_argument("subject", nargs="?", type=str, help="Subject code (e.g. CSC)")
    p_course.add_argument("code", nargs="?", type=str, help="Course number (e.g. 111)")
    p_course.add_argument("--pid", type=str, help="Catalog pid (skips the subject/code lookup)")

    p_sections = sub.add_parser("sections", help="List sections of a course in a term")
    p_sections.add_argument("subject", type=str, help="Subject code (e.g. CSC)")
    p_sections.add_argument("code", type=str, help="Course number (e.g. 355)")
    p_sections.add_argument("--term", "-t", type=str, default=None, help="Term code (e.g. 202009), default: current")

    p_seats = sub.add_parser("seats", help="Show seats and restrictions of a section")
    p_seats.add_argument("term", type=str, help="Term code (e.g. 202009)")
    p_seats.add_argument("crn", type=str, help="Course reference number (e.g. 10801)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    scraper = CourseScraper(timeout=args.timeout)
    handler = COMMANDS[args.command]

    try:
        raise SystemExit(handler(args, scraper))
    except (ScraperError, requests.RequestException) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)
