"""
Parse one semester's exam table into a Calendar.

The table on the exam calendar page looks like:

    | Exam Dates/Times      | 8:00 a.m.–11:00 a.m. | 12:00 p.m.–3:00 p.m. | ... |
    | Monday, December 11.  | 9:00 a.m. MWF        | 1:30 p.m. TuTh       | ... |
    |                       | 8:30 a.m. TuTh       | CSC 116, CSC 216     |     |

Header columns give the exam slots; each body row gives a date, and
every line inside a body cell names classes examined in that column's
slot on that date.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterator, List, Optional, Tuple

from bs4 import Comment, NavigableString, Tag  # type: ignore[import]

from .classes import ClassDescriptor, parse_class_lines
from .errors import InvalidExamDate, NotAnExamTable
from .models import Calendar, ExamAssignment, ExamSlot
from .timeparse import parse_exam_date, parse_slot_range

log = logging.getLogger(__name__)

EXAM_TABLE_MARKER = "Exam Dates/Times"


# ──────────────────────────────────────────────────────────────────
#  Table layout
# ──────────────────────────────────────────────────────────────────

def _header_row(table: Tag) -> Optional[Tag]:
    thead = table.find("thead")
    if thead is not None:
        return thead.find("tr")
    return table.find("tr")


def _body_rows(table: Tag, header: Tag) -> List[Tag]:
    tbody = table.find("tbody")
    if tbody is not None:
        return [tr for tr in tbody.find_all("tr") if tr is not header]
    return [tr for tr in table.find_all("tr") if tr is not header]


def _cell_lines(cell: Tag) -> Iterator[str]:
    """Text of every direct child node of a cell (one class line each)."""
    for child in cell.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            yield str(child)
        elif isinstance(child, Tag):
            yield child.get_text()


# ──────────────────────────────────────────────────────────────────
#  Header / body
# ──────────────────────────────────────────────────────────────────

def parse_exam_slots(table: Tag, reference: datetime | None = None) -> List[ExamSlot]:
    """
    Read the exam slots from the header row.

    Raises NotAnExamTable when the first header cell is not
    "Exam Dates/Times". Repeated ranges are kept once, in order.
    """
    header = _header_row(table)
    if header is None:
        raise NotAnExamTable("Table has no header row")
    cells = header.find_all(["th", "td"])
    if not cells:
        raise NotAnExamTable("Table header row is empty")
    first = cells[0].get_text(strip=True)
    if first != EXAM_TABLE_MARKER:
        raise NotAnExamTable(
            f'Table starts with {first!r}, not "{EXAM_TABLE_MARKER}"; not an exam times table'
        )

    slots: List[ExamSlot] = []
    for cell in cells[1:]:
        start, end = parse_slot_range(cell.get_text(strip=True), reference)
        slot = ExamSlot(start, end)
        if slot not in slots:
            slots.append(slot)
    return slots


def _parse_row(
    row: Tag,
    year: str,
    slots: List[ExamSlot],
    reference: datetime | None,
) -> List[Tuple[ClassDescriptor, ExamAssignment]]:
    cells = row.find_all("td")
    if not cells:
        raise InvalidExamDate(row.get_text(strip=True))
    exam_date = parse_exam_date(cells[0].get_text(), year)

    pairs: List[Tuple[ClassDescriptor, ExamAssignment]] = []
    # zip drops cells past the last known slot
    for cell, slot in zip(cells[1:], slots):
        assignment = ExamAssignment(exam_date, slot)
        for cls in parse_class_lines(_cell_lines(cell), reference):
            pairs.append((cls, assignment))
    return pairs


def parse_exam_table(table: Tag, year: str, reference: datetime | None = None) -> Calendar:
    """
    Parse an exam table for the given year.

    :param table: the <table> node.
    :param year: four-digit year of the semester, e.g. "2023".
    :param reference: anchor for time parsing; see timeparse.DEFAULT_REFERENCE.
    :raises NotAnExamTable: header does not match; callers may skip the table.
    :raises ExamCalendarError: any other malformed header, date or class text.
    """
    slots = parse_exam_slots(table, reference)
    header = _header_row(table)

    pairs: List[Tuple[ClassDescriptor, ExamAssignment]] = []
    for row in _body_rows(table, header):
        pairs.extend(_parse_row(row, year, slots, reference))

    calendar = Calendar(pairs)
    log.debug("Parsed exam table for %s: %d slots, %d classes", year, len(slots), len(calendar))
    return calendar
