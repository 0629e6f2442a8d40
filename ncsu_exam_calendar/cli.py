"""
Command-line interface: fetch the NC State exam calendar and export it.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .catalog import build_catalog
from .export import DEFAULT_SNAPSHOT_PATH, describe_class, dumps_catalog, export, load_snapshot
from .fetch import DEFAULT_EXAM_CALENDAR_URL, DEFAULT_TIMEOUT, fetch_exam_page, load_document
from .lookup import find_exam_by_text, semesters
from .models import CalendarMap


def _load_catalog(args) -> CalendarMap:
    if args.from_json:
        return load_snapshot(args.from_json)
    if args.html:
        html = Path(args.html).read_text(encoding="utf-8", errors="ignore")
    else:
        html = fetch_exam_page(args.url, timeout=args.timeout)
    return build_catalog(load_document(html))


def main() -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Export the NC State exam calendar to JSON / ICS / CSV.\n"
            "By default the page is fetched, printed as JSON and saved to exams.json."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--url",
        default=DEFAULT_EXAM_CALENDAR_URL,
        help=f"Exam calendar page to fetch. Default: {DEFAULT_EXAM_CALENDAR_URL}",
    )
    source.add_argument(
        "--html",
        metavar="HTML_PATH",
        help="Parse a saved copy of the exam calendar page instead of fetching it.",
    )
    source.add_argument(
        "--from-json",
        metavar="JSON_PATH",
        help="Load a previously saved exams.json snapshot (no network access).",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f"Network timeout in seconds. Default: {DEFAULT_TIMEOUT}",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_SNAPSHOT_PATH,
        help=f"Output file. Default: {DEFAULT_SNAPSHOT_PATH}",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "ics", "csv"],
        default="json",
        help="Export format. Default: json",
    )
    parser.add_argument(
        "--semester",
        help='Only keep this semester, e.g. "Fall 2023 Exam Calendar".',
    )
    parser.add_argument(
        "--class",
        dest="class_text",
        metavar="CLASS",
        help='Show the exam for a class written as on the page, e.g. "9:00 a.m. MWF" or "CSC 116". '
        "Nothing is written.",
    )
    parser.add_argument(
        "--list-semesters",
        action="store_true",
        help="List the semesters found, then exit.",
    )
    parser.add_argument(
        "--no-print",
        action="store_true",
        help="Do not print the JSON to standard output.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
    )

    try:
        catalog = _load_catalog(args)
    except Exception as e:
        print(f"Error loading exam calendar: {e}", file=sys.stderr)
        return 1

    if args.list_semesters:
        for label in semesters(catalog):
            print(label)
        return 0

    if args.semester:
        if args.semester not in catalog:
            print(
                f"Error: semester {args.semester!r} not found. Use --list-semesters to see what is available.",
                file=sys.stderr,
            )
            return 1
        catalog = CalendarMap([(args.semester, catalog[args.semester])])

    if args.class_text:
        hits = 0
        for label, calendar in catalog.items():
            try:
                found = find_exam_by_text(calendar, args.class_text)
            except ValueError as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1
            for cls, assignment in found:
                hits += 1
                slot = assignment.slot
                print(
                    f"{label}: {describe_class(cls)} → {assignment.date:%A, %B %d %Y} "
                    f"{slot.start:%H:%M}-{slot.end:%H:%M}"
                )
        if not hits:
            print(f"No exam found for {args.class_text!r}", file=sys.stderr)
            return 1
        return 0

    if not args.no_print and args.format == "json":
        print(dumps_catalog(catalog, pretty=True))

    out_path = Path(args.output)
    try:
        export(catalog, out_path, args.format)
    except Exception as e:
        print(f"Error writing {out_path}: {e}", file=sys.stderr)
        return 1
    print(f"Exported {len(catalog)} semester(s) to {out_path}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
