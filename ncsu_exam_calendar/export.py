"""
Save exam calendars as JSON (the exams.json snapshot), ICS or CSV,
and load JSON snapshots back.

JSON layout:

    {
      "Fall 2023 Exam Calendar": {
        "[Monday, Wednesday, Friday] 09:00:00": ["2023-12-11", {"start": "08:00:00", "end": "11:00:00"}],
        "CSC 116": ["2023-12-12", {"start": "12:00:00", "end": "15:00:00"}]
      }
    }
"""
from __future__ import annotations

import csv
import hashlib
import json
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any, Dict, List

import icalendar
import pytz

from .classes import ClassDescriptor, Named, Recurring, Span
from .codec import decode_class, encode_class, format_time
from .errors import ClassDecodeError
from .models import Calendar, CalendarMap, ExamAssignment, ExamSlot

DEFAULT_SNAPSHOT_PATH = "exams.json"
# NC State is on US Eastern time
EXAM_TIMEZONE = "America/New_York"


# ──────────────────────────────────────────────────────────────────
#  JSON interchange
# ──────────────────────────────────────────────────────────────────

def _assignment_to_json(assignment: ExamAssignment) -> list:
    return [
        assignment.date.isoformat(),
        {"start": format_time(assignment.slot.start), "end": format_time(assignment.slot.end)},
    ]


def _assignment_from_json(value: Any) -> ExamAssignment:
    try:
        date_str, slot = value
        return ExamAssignment(
            date.fromisoformat(date_str),
            ExamSlot(time.fromisoformat(slot["start"]), time.fromisoformat(slot["end"])),
        )
    except (TypeError, ValueError, KeyError) as e:
        raise ClassDecodeError(f"Invalid exam assignment: {value!r}") from e


def catalog_to_dict(catalog: CalendarMap) -> Dict[str, Dict[str, list]]:
    return {
        label: {encode_class(cls): _assignment_to_json(a) for cls, a in calendar.items()}
        for label, calendar in catalog.items()
    }


def catalog_from_dict(data: Dict[str, Dict[str, Any]]) -> CalendarMap:
    if not isinstance(data, dict):
        raise ClassDecodeError("Snapshot must be an object of semesters")
    semesters = []
    for label, entries in data.items():
        if not isinstance(entries, dict):
            raise ClassDecodeError(f"Semester {label!r} must be an object of classes")
        calendar = Calendar(
            (decode_class(key), _assignment_from_json(value)) for key, value in entries.items()
        )
        semesters.append((label, calendar))
    return CalendarMap(semesters)


def dumps_catalog(catalog: CalendarMap, pretty: bool = False) -> str:
    return json.dumps(catalog_to_dict(catalog), indent=2 if pretty else None, ensure_ascii=False)


def loads_catalog(text: str) -> CalendarMap:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ClassDecodeError(f"Snapshot is not valid JSON: {e}") from e
    return catalog_from_dict(data)


def save_snapshot(catalog: CalendarMap, out_path: str | Path = DEFAULT_SNAPSHOT_PATH) -> None:
    Path(out_path).write_text(dumps_catalog(catalog), encoding="utf-8")


def load_snapshot(path: str | Path = DEFAULT_SNAPSHOT_PATH) -> CalendarMap:
    return loads_catalog(Path(path).read_text(encoding="utf-8"))


# ──────────────────────────────────────────────────────────────────
#  ICS / CSV
# ──────────────────────────────────────────────────────────────────

def _clock(value: time) -> str:
    return value.strftime("%I:%M %p").lstrip("0")


def describe_class(cls: ClassDescriptor) -> str:
    """Human wording: 'MWF 9:00 AM', '6:00 PM–11:59 PM', 'CSC 116'."""
    if isinstance(cls, Recurring):
        return f"{''.join(d.code for d in cls.days)} {_clock(cls.time)}"
    if isinstance(cls, Span):
        return f"{_clock(cls.start)}–{_clock(cls.end)}"
    if isinstance(cls, Named):
        return cls.label
    raise TypeError(f"Not a class descriptor: {cls!r}")


def export_ics(catalog: CalendarMap, out_path: str | Path) -> None:
    """Export every exam as a timed event in US Eastern time."""
    cal = icalendar.Calendar()
    cal.add("prodid", "-//NCSU Exam Calendar//EN")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("x-wr-calname", "NCSU Exam Calendar")
    cal.add("x-wr-timezone", EXAM_TIMEZONE)

    tz = pytz.timezone(EXAM_TIMEZONE)
    for semester, calendar in catalog.items():
        for cls, assignment in calendar.items():
            start = datetime.combine(assignment.date, assignment.slot.start)
            end = datetime.combine(assignment.date, assignment.slot.end)
            summary = f"Exam: {describe_class(cls)}"

            event = icalendar.Event()
            uid_string = f"{semester}-{encode_class(cls)}-{start.isoformat()}"
            uid_hash = hashlib.md5(uid_string.encode("utf-8")).hexdigest()
            event.add("uid", f"{uid_hash}@ncsu-exam-calendar")
            event.add("summary", summary)
            event.add("description", f"{semester}\nClass: {describe_class(cls)}")
            event.add("dtstart", tz.localize(start))
            event.add("dtend", tz.localize(end))
            event.add("dtstamp", datetime.now(timezone.utc))
            cal.add_component(event)

    Path(out_path).write_text(cal.to_ical().decode("utf-8"), encoding="utf-8")


CSV_FIELDS = ["SEMESTER", "CLASS", "EXAM_DATE", "EXAM_START", "EXAM_END"]


def export_csv(catalog: CalendarMap, out_path: str | Path) -> None:
    """One row per (semester, class)."""
    rows: List[Dict[str, str]] = []
    for semester, calendar in catalog.items():
        for cls, assignment in calendar.items():
            rows.append({
                "SEMESTER": semester,
                "CLASS": encode_class(cls),
                "EXAM_DATE": assignment.date.isoformat(),
                "EXAM_START": format_time(assignment.slot.start),
                "EXAM_END": format_time(assignment.slot.end),
            })
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        w.writeheader()
        w.writerows(rows)


def export_json(catalog: CalendarMap, out_path: str | Path) -> None:
    save_snapshot(catalog, out_path)


def export(catalog: CalendarMap, out_path: str | Path, fmt: str) -> None:
    """Export to the given format: json, ics, or csv."""
    fmt = fmt.lower()
    if fmt == "json":
        export_json(catalog, out_path)
    elif fmt == "ics":
        export_ics(catalog, out_path)
    elif fmt == "csv":
        export_csv(catalog, out_path)
    else:
        raise ValueError(f"Unsupported format: {fmt}. Use json, ics, or csv.")
