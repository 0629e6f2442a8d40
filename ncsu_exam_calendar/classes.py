"""
Class descriptors: what a single line inside an exam table cell means.

A cell line is one of
- a recurring meeting: "9:00 a.m. MWF"              → Recurring
- a time span:         "8:00 a.m. - 10:00 a.m."     → Span
                       "6:00 p.m. and later"        → Span
- anything else, e.g. course names "CSC 116, CSC 216" → Named (one per item)

Rules are tried in a fixed order (see _RULES); the first one that
matches owns the line. A rule that matches but then cannot read its
times raises instead of falling through to the next one.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, time
from typing import Callable, Iterable, List, Optional, Tuple, Union

from .timeparse import parse_clock_time
from .weekday import Weekday

NON_CLASS_SENTINEL = "Common:"
LATER_MEANS = "11:59 p.m."


@dataclass(frozen=True)
class Recurring:
    """Class meeting on fixed weekdays at a fixed start time."""

    days: Tuple[Weekday, ...]
    time: time

    def __post_init__(self) -> None:
        days = tuple(sorted(set(self.days)))
        if not days:
            raise ValueError("Recurring class needs at least one weekday")
        object.__setattr__(self, "days", days)


@dataclass(frozen=True)
class Span:
    """Class identified by an exam time range instead of a meeting pattern."""

    start: time
    end: time


@dataclass(frozen=True)
class Named:
    """Class identified by its label only (course / section name)."""

    label: str


ClassDescriptor = Union[Recurring, Span, Named]


# ──────────────────────────────────────────────────────────────────
#  Matchers / handlers
# ──────────────────────────────────────────────────────────────────

_RECURRING = re.compile(r"(\d{1,2}:\d{1,2} [ap]\.m\.).*(?:M|Tu|W|Th|F)")
_DASH = re.compile(r"[-–]")
_AND = re.compile(r"\band\b")


def _split_pair(pattern: re.Pattern, text: str) -> Optional[Tuple[str, str]]:
    parts = [p.strip() for p in pattern.split(text)]
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def _recurring(text: str, match: re.Match, reference: Optional[datetime]) -> List[ClassDescriptor]:
    at = parse_clock_time(match.group(1), reference)
    out: List[ClassDescriptor] = []
    for group in Weekday.factory(text):
        cls = Recurring(tuple(group), at)
        if cls not in out:
            out.append(cls)
    return out


def _dash_span(text: str, parts: Tuple[str, str], reference: Optional[datetime]) -> List[ClassDescriptor]:
    start, end = parts
    return [Span(parse_clock_time(start, reference), parse_clock_time(end, reference))]


def _and_span(text: str, parts: Tuple[str, str], reference: Optional[datetime]) -> List[ClassDescriptor]:
    start, end = parts
    if end.lower() == "later":
        end = LATER_MEANS
    return [Span(parse_clock_time(start, reference), parse_clock_time(end, reference))]


def _named(text: str, _match: object, _reference: Optional[datetime]) -> List[ClassDescriptor]:
    return [Named(piece) for piece in (p.strip() for p in text.split(",")) if piece]


Matcher = Callable[[str], object]
Handler = Callable[[str, object, Optional[datetime]], List[ClassDescriptor]]

# Order matters: first matcher returning something truthy wins.
_RULES: List[Tuple[str, Matcher, Handler]] = [
    ("recurring", _RECURRING.search, _recurring),
    ("dash-range", lambda text: _split_pair(_DASH, text), _dash_span),
    ("and-range", lambda text: _split_pair(_AND, text), _and_span),
    ("named", lambda text: True, _named),
]


def classify(text: str) -> Optional[str]:
    """Name of the rule that would handle text, or None for non-class lines."""
    text = text.strip()
    if not text or text == NON_CLASS_SENTINEL:
        return None
    for name, matcher, _ in _RULES:
        if matcher(text):
            return name
    return None


def parse_class_cell(text: str, reference: Optional[datetime] = None) -> List[ClassDescriptor]:
    """
    Turn one line of cell text into zero or more class descriptors.

    Empty lines and the "Common:" marker give an empty list.
    Raises InvalidTimeLiteral / InvalidWeekdayCode on malformed day/time text.
    """
    text = text.strip()
    if not text or text == NON_CLASS_SENTINEL:
        return []
    for _, matcher, handler in _RULES:
        found = matcher(text)
        if found:
            return handler(text, found, reference)
    return []


def parse_class_lines(lines: Iterable[str], reference: Optional[datetime] = None) -> List[ClassDescriptor]:
    out: List[ClassDescriptor] = []
    for line in lines:
        out.extend(parse_class_cell(line, reference))
    return out
