"""
Text form of a class descriptor, used as the key in exams.json.

    Recurring → "[Monday, Wednesday, Friday] 09:00:00"
    Span      → "08:00:00..10:00:00"
    Named     → the label itself

decode_class(encode_class(c)) == c for every descriptor the parser makes.
"""
from __future__ import annotations

import re
from datetime import time

from .classes import ClassDescriptor, Named, Recurring, Span
from .errors import ClassDecodeError, ExamCalendarError
from .timeparse import parse_time_literal
from .weekday import Weekday

RANGE_SEPARATOR = ".."

_DAY_NAME = r"(?:Monday|Tuesday|Wednesday|Thursday|Friday)"
_ISO_TIME = r"\d{2}:\d{2}:\d{2}(?:\.\d+)?"
_RECURRING_FORM = re.compile(rf"\[({_DAY_NAME}(?:, {_DAY_NAME})*)\] ({_ISO_TIME})")
_SPAN_FORM = re.compile(rf"({_ISO_TIME})\.\.({_ISO_TIME})")


def format_time(value: time) -> str:
    if value.microsecond:
        return value.isoformat(timespec="microseconds")
    return value.isoformat(timespec="seconds")


def encode_class(cls: ClassDescriptor) -> str:
    if isinstance(cls, Recurring):
        days = ", ".join(day.label for day in cls.days)
        return f"[{days}] {format_time(cls.time)}"
    if isinstance(cls, Span):
        return f"{format_time(cls.start)}{RANGE_SEPARATOR}{format_time(cls.end)}"
    if isinstance(cls, Named):
        return cls.label
    raise TypeError(f"Not a class descriptor: {cls!r}")


def _decode_time(text: str, what: str) -> time:
    try:
        return parse_time_literal(text)
    except ExamCalendarError as e:
        raise ClassDecodeError(f"{what} is invalid: {text!r}") from e


def decode_class(text: str) -> ClassDescriptor:
    """Anything not in the exact Recurring or Span form is a Named label."""
    match = _RECURRING_FORM.fullmatch(text)
    if match:
        days = tuple(Weekday.from_name(name) for name in match.group(1).split(", "))
        return Recurring(days, _decode_time(match.group(2), "Time"))

    match = _SPAN_FORM.fullmatch(text)
    if match:
        return Span(_decode_time(match.group(1), "Range begin"), _decode_time(match.group(2), "Range end"))

    return Named(text)
