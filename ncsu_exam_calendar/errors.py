"""
Exception types raised while building the exam calendar.

Everything derives from ValueError so callers (and the CLI) can keep
catching ValueError the way they catch any other parse failure.
"""
from __future__ import annotations


class ExamCalendarError(ValueError):
    """Base class for all exam calendar failures."""


# ──────────────────────────────────────────────────────────────────
#  Structural: the page does not look like we expect
# ──────────────────────────────────────────────────────────────────

class NotAnExamTable(ExamCalendarError):
    """A <table> whose header does not start with "Exam Dates/Times"."""


class MissingSemesterYear(ExamCalendarError):
    """A semester heading without a trailing year before "Exam Calendar"."""


class SemesterTableCountMismatch(ExamCalendarError):
    def __init__(self, semesters: int, tables: int) -> None:
        super().__init__(
            f"Number of semesters ({semesters}) != number of exam tables ({tables})"
        )
        self.semesters = semesters
        self.tables = tables


class DuplicateSemesterHeading(ExamCalendarError):
    def __init__(self, heading: str) -> None:
        super().__init__(f"Semester heading appears more than once: {heading!r}")
        self.heading = heading


# ──────────────────────────────────────────────────────────────────
#  Lexical: a single cell / row / header could not be read
# ──────────────────────────────────────────────────────────────────

class InvalidWeekdayCode(ExamCalendarError):
    def __init__(self, code: str) -> None:
        super().__init__(f"{code!r} is not in the valid set (M, Tu, W, Th, F)")
        self.code = code


class UnknownWeekdayName(ExamCalendarError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name!r} is not a weekday")
        self.name = name


class InvalidTimeLiteral(ExamCalendarError):
    def __init__(self, text: str, reason: str = "") -> None:
        msg = f"Could not parse time {text!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.text = text


class InvalidExamDate(ExamCalendarError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Unexpected exam date format: {text!r}")
        self.text = text


# ──────────────────────────────────────────────────────────────────
#  Codec / transport
# ──────────────────────────────────────────────────────────────────

class ClassDecodeError(ExamCalendarError):
    """An encoded class (or snapshot entry) could not be decoded."""


class FetchError(ExamCalendarError):
    """The exam calendar page could not be downloaded."""
