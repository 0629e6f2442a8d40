"""
Download the exam calendar page and turn it into a parsed document.
"""
from __future__ import annotations

import logging
from datetime import datetime

import requests
from bs4 import BeautifulSoup  # type: ignore[import]

from .catalog import build_catalog
from .errors import FetchError
from .models import CalendarMap

log = logging.getLogger(__name__)

DEFAULT_EXAM_CALENDAR_URL = "https://studentservices.ncsu.edu/calendars/exam-calendar/"
DEFAULT_TIMEOUT = 30


def fetch_exam_page(url: str = DEFAULT_EXAM_CALENDAR_URL, timeout: int = DEFAULT_TIMEOUT) -> str:
    """GET the page and return its body; FetchError on network or HTTP failure."""
    log.info("Fetching %s", url)
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Could not fetch {url}: {e}") from e
    return r.text


def load_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def get_calendars(
    url: str = DEFAULT_EXAM_CALENDAR_URL,
    timeout: int = DEFAULT_TIMEOUT,
    reference: datetime | None = None,
) -> CalendarMap:
    """Fetch the page and build its CalendarMap."""
    return build_catalog(load_document(fetch_exam_page(url, timeout)), reference)
