"""
Assemble every semester on the exam calendar page into a CalendarMap.

Semester headings (<h2>… 2023 Exam Calendar</h2>) and exam tables are
found independently and paired by position: the n-th exam table belongs
to the n-th heading. Tables that are not exam tables are skipped. If
the number of exam tables differs from the number of headings the
pairing cannot be trusted and the whole build fails.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import List

from bs4 import BeautifulSoup, Tag  # type: ignore[import]

from .errors import (
    DuplicateSemesterHeading,
    MissingSemesterYear,
    NotAnExamTable,
    SemesterTableCountMismatch,
)
from .exam_table import parse_exam_slots, parse_exam_table
from .models import Calendar, CalendarMap

log = logging.getLogger(__name__)

SEMESTER_SUFFIX = "Exam Calendar"
SEMESTER_HEADING_TAGS = ("h2",)
_SEMESTER_YEAR = re.compile(r"(\d{4}) Exam Calendar$")


def find_semester_headings(document: BeautifulSoup | Tag) -> List[str]:
    """Full text of every semester heading, in document order."""
    headings: List[str] = []
    for node in document.find_all(list(SEMESTER_HEADING_TAGS)):
        text = " ".join(node.get_text().split())
        if text.endswith(SEMESTER_SUFFIX):
            headings.append(text)
    return headings


def semester_year(heading: str) -> str:
    """'Fall 2023 Exam Calendar' → '2023'."""
    m = _SEMESTER_YEAR.search(heading)
    if not m:
        raise MissingSemesterYear(
            f'"{heading}" does not contain expected pattern "{_SEMESTER_YEAR.pattern}"'
        )
    return m.group(1)


def build_catalog(document: BeautifulSoup | Tag, reference: datetime | None = None) -> CalendarMap:
    """
    Build semester label → Calendar for the whole page.

    :raises MissingSemesterYear: a semester heading has no year.
    :raises DuplicateSemesterHeading: two headings have the same text.
    :raises SemesterTableCountMismatch: headings and exam tables differ in number.
    :raises ExamCalendarError: any malformed exam table content.
    """
    semesters = find_semester_headings(document)
    seen = set()
    for label in semesters:
        if label in seen:
            raise DuplicateSemesterHeading(label)
        seen.add(label)
    years = [semester_year(s) for s in semesters]

    calendars: List[Calendar] = []
    extra_tables = 0
    for table in document.find_all("table"):
        if len(calendars) < len(years):
            year = years[len(calendars)]
            try:
                calendars.append(parse_exam_table(table, year, reference))
            except NotAnExamTable as e:
                log.debug("Skipping table: %s", e)
            continue
        # No heading left for this table; only count it if it is an exam table.
        try:
            parse_exam_slots(table, reference)
        except NotAnExamTable:
            continue
        extra_tables += 1

    found = len(calendars) + extra_tables
    if found != len(semesters):
        raise SemesterTableCountMismatch(len(semesters), found)

    for label, calendar in zip(semesters, calendars):
        log.debug("%s: %d classes", label, len(calendar))
    return CalendarMap(zip(semesters, calendars))
