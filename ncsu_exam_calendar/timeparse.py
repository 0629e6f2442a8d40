"""
Time and date literals as they appear on the exam calendar page.

The page writes times like "9:00 a.m.", "11:59 p.m." or "8:00 a.m.–10:00 a.m."
and dates like "Monday, December 11." or "Mon. Dec 11.". Time literals are
read with dateutil; only the time-of-day part is kept. The calendar date
dateutil needs to fill in comes from an explicit reference instant, never
from the process clock.
"""
from __future__ import annotations

from datetime import date, datetime, time
from typing import List, Tuple

from dateutil import parser as dateparser

from .errors import InvalidExamDate, InvalidTimeLiteral

# Anchors time-of-day parsing; the date part is always thrown away.
DEFAULT_REFERENCE = datetime(2000, 1, 1)

_EXAM_DATE_FORMATS = ("%b %d %Y %H:%M", "%B %d %Y %H:%M")


def strip_periods(text: str) -> str:
    """'9:00 a.m.' → '9:00 am'."""
    return text.replace(".", "")


def parse_time_literal(text: str, reference: datetime | None = None) -> time:
    """
    Parse a permissive time literal ('9:00 am', '11:59 pm', '09:00:00')
    and return the time-of-day.
    """
    cleaned = text.strip()
    if not cleaned:
        raise InvalidTimeLiteral(text, "empty")
    # Two defaults an hour apart: if the text names no hour the results differ.
    base = (reference or DEFAULT_REFERENCE).replace(hour=0, minute=0, second=0, microsecond=0)
    try:
        parsed = dateparser.parse(cleaned, default=base)
        shifted = dateparser.parse(cleaned, default=base.replace(hour=1))
    except (ValueError, OverflowError) as e:
        raise InvalidTimeLiteral(text, str(e)) from e
    if parsed.time() != shifted.time():
        raise InvalidTimeLiteral(text, "no time of day")
    return parsed.time()


def parse_clock_time(text: str, reference: datetime | None = None) -> time:
    """Parse page-style times with periods: '6:00 p.m.' → 18:00."""
    return parse_time_literal(strip_periods(text), reference)


def parse_slot_range(text: str, reference: datetime | None = None) -> Tuple[time, time]:
    """
    Parse a header column like '8:00 a.m.–10:00 a.m.' into (start, end).
    The two ends are separated by an en dash.
    """
    parts: List[str] = [p.strip() for p in strip_periods(text).split("–")]
    if len(parts) != 2:
        raise InvalidTimeLiteral(text, "not a range of times separated by '–'")
    start, end = parts
    return parse_time_literal(start, reference), parse_time_literal(end, reference)


def parse_exam_date(text: str, year: str | int) -> date:
    """
    Parse a row date like 'Monday, December 11.' or 'Mon. Dec 11.' for
    the given year. The leading weekday is dropped; the month may be
    abbreviated or spelled out.
    """
    cleaned = text.replace(".", "").replace(",", "").strip()
    _, sep, rest = cleaned.partition(" ")
    if not sep:
        raise InvalidExamDate(text)
    stamp = f"{rest.strip()} {year} 00:00"
    for fmt in _EXAM_DATE_FORMATS:
        try:
            return datetime.strptime(stamp, fmt).date()
        except ValueError:
            continue
    raise InvalidExamDate(text)
