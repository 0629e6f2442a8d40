"""Data models for exam calendars."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, time
from typing import Dict, Iterable, Iterator, Tuple


@dataclass(frozen=True)
class ExamSlot:
    """Exam time range taken from one header column: [start, end)."""

    start: time
    end: time


@dataclass(frozen=True)
class ExamAssignment:
    """When a class sits its exam."""

    date: date
    slot: ExamSlot


class _FrozenMap(Mapping):
    """Read-only, insertion-ordered mapping compared by content."""

    def __init__(self, items: Iterable[Tuple] = ()) -> None:
        self._data: Dict = dict(items)

    def __getitem__(self, key):
        return self._data[key]

    def __iter__(self) -> Iterator:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


class Calendar(_FrozenMap):
    """
    One semester: class descriptor → exam assignment.

    Built from (descriptor, assignment) pairs; a descriptor that appears
    twice keeps its last assignment.
    """


class CalendarMap(_FrozenMap):
    """Semester label ("Fall 2023 Exam Calendar") → Calendar, in page order."""
