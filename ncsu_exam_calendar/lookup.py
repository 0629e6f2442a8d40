"""
Helpers for finding "my" exam in a loaded catalog: list semesters,
the weekday codes and times on offer, and look up a single class.
"""
from __future__ import annotations

from datetime import datetime, time
from typing import Iterable, List, Optional

from .classes import ClassDescriptor, Named, Recurring, Span, parse_class_cell
from .models import Calendar, CalendarMap, ExamAssignment
from .weekday import Weekday


def semesters(catalog: CalendarMap) -> List[str]:
    return sorted(catalog)


def named_classes(calendar: Calendar) -> List[str]:
    return sorted(cls.label for cls in calendar if isinstance(cls, Named))


def span_classes(calendar: Calendar) -> List[Span]:
    return sorted(
        (cls for cls in calendar if isinstance(cls, Span)),
        key=lambda s: (s.start, s.end),
    )


def class_days(calendar: Calendar) -> List[Weekday]:
    """Every weekday that appears in some recurring class."""
    days = {day for cls in calendar if isinstance(cls, Recurring) for day in cls.days}
    return sorted(days)


def class_times_for_days(calendar: Calendar, days: Iterable[Weekday]) -> List[time]:
    """Start times of recurring classes meeting on all of the given days."""
    wanted = set(days)
    times = {
        cls.time
        for cls in calendar
        if isinstance(cls, Recurring) and wanted.issubset(cls.days)
    }
    return sorted(times)


def find_exam(calendar: Calendar, cls: ClassDescriptor) -> Optional[ExamAssignment]:
    return calendar.get(cls)


def find_exam_by_text(
    calendar: Calendar, text: str, reference: datetime | None = None
) -> List[tuple]:
    """
    Look up classes written the way the page writes them,
    e.g. "9:00 a.m. MWF" or "CSC 116". Returns (class, assignment)
    for every descriptor in text that has an exam.
    """
    found = []
    for cls in parse_class_cell(text, reference):
        assignment = calendar.get(cls)
        if assignment is not None:
            found.append((cls, assignment))
    return found
