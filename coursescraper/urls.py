from __future__ import annotations

from datetime import date
from typing import Optional
from urllib.parse import urlencode


# ---------------------------------------------------------------------------
# Kuali course catalog (JSON)
# ---------------------------------------------------------------------------

KUALI_BASE_URL = "https://uvic.kuali.co/api/v1/catalog"
CATALOG_ID = "5f21b66d95f09c001ac436a0"

COURSES_URL = f"{KUALI_BASE_URL}/courses/{CATALOG_ID}"
COURSE_DETAIL_URL = f"{KUALI_BASE_URL}/course/{CATALOG_ID}/"


# ---------------------------------------------------------------------------
# Banner registration pages (HTML)
# ---------------------------------------------------------------------------

BANNER_BASE_URL = "https://www.uvic.ca/BAN1P"
LISTING_URL = f"{BANNER_BASE_URL}/bwckctlg.p_disp_listcrse"
DETAIL_URL = f"{BANNER_BASE_URL}/bwckschd.p_disp_detail_sched"


def course_detail_url(pid: str) -> str:
    return COURSE_DETAIL_URL + pid


def class_schedule_listing_url(term: str, subject: str, code: str) -> str:
    """
    Sections of one course in one term, e.g. ('202009', 'CSC', '355').
    """
    query = urlencode({"term_in": term, "subj_in": subject, "crse_in": code, "schd_in": ""})
    return f"{LISTING_URL}?{query}"


def detailed_class_information_url(term: str, crn: str) -> str:
    query = urlencode({"term_in": term, "crn_in": crn})
    return f"{DETAIL_URL}?{query}"


def current_term(today: Optional[date] = None) -> str:
    """
    Return the term code (YYYYMM) for a date.

    Terms start in January, May and September:
        2020-10-01 -> '202009', 2021-02-15 -> '202101', 2021-06-30 -> '202105'
    """
    today = today or date.today()
    if today.month >= 9:
        month = "09"
    elif today.month >= 5:
        month = "05"
    else:
        month = "01"
    return f"{today.year}{month}"
