"""
Scrape the NC State exam calendar page into per-semester exam calendars.
"""
from __future__ import annotations

__version__ = "0.1.0"

from .catalog import build_catalog
from .classes import Named, Recurring, Span, parse_class_cell
from .codec import decode_class, encode_class
from .errors import ExamCalendarError
from .exam_table import parse_exam_table
from .models import Calendar, CalendarMap, ExamAssignment, ExamSlot
from .weekday import Weekday

__all__ = [
    "__version__",
    "build_catalog",
    "parse_exam_table",
    "parse_class_cell",
    "encode_class",
    "decode_class",
    "Calendar",
    "CalendarMap",
    "ExamAssignment",
    "ExamSlot",
    "ExamCalendarError",
    "Named",
    "Recurring",
    "Span",
    "Weekday",
]
