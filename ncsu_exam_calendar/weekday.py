"""
Weekday letter codes used in class descriptions: "MWF", "TuTh", "MTuWThF".
"""
from __future__ import annotations

import re
from enum import IntEnum
from typing import List

from .errors import InvalidWeekdayCode, UnknownWeekdayName


# One or more concatenated day codes. A lone "T" is never a day.
_WEEKDAY_RUN = re.compile(r"(?:M|Tu|W|Th|F)+")
_WEEKDAY_CODE = re.compile(r"M|Tu|W|Th|F")


class Weekday(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4

    @property
    def label(self) -> str:
        """Full day name as written in snapshots: 'Monday'."""
        return self.name.capitalize()

    @property
    def code(self) -> str:
        """Letter code used on the page: 'Tu'."""
        return _LETTER_CODES[self]

    @classmethod
    def from_code(cls, code: str) -> "Weekday":
        try:
            return _CODE_MAP[code]
        except KeyError:
            raise InvalidWeekdayCode(code) from None

    @classmethod
    def from_name(cls, name: str) -> "Weekday":
        """Case-sensitive full name, e.g. 'Thursday'."""
        for day in cls:
            if day.label == name:
                return day
        raise UnknownWeekdayName(name)

    @classmethod
    def factory(cls, text: str) -> List[List["Weekday"]]:
        """
        Find every run of day codes in text and decode each one.

        'MWF 9:00 a.m.' → [[MONDAY, WEDNESDAY, FRIDAY]]
        Days keep the order they were written in.
        """
        return [
            [cls.from_code(code) for code in _WEEKDAY_CODE.findall(run.group(0))]
            for run in _WEEKDAY_RUN.finditer(text)
        ]


_CODE_MAP = {
    "M": Weekday.MONDAY,
    "Tu": Weekday.TUESDAY,
    "W": Weekday.WEDNESDAY,
    "Th": Weekday.THURSDAY,
    "F": Weekday.FRIDAY,
}
_LETTER_CODES = {day: code for code, day in _CODE_MAP.items()}
