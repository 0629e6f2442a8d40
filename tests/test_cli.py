"""Tests for cli.py, run against saved HTML / JSON files."""
import sys
import warnings

import pytest

from ncsu_exam_calendar import cli
from ncsu_exam_calendar.classes import Named
from ncsu_exam_calendar.export import load_snapshot, save_snapshot

PAGE = """
<html><body>
<h2>Fall 2023 Exam Calendar</h2>
<table>
  <thead><tr><th>Exam Dates/Times</th><th>8:00 a.m.–11:00 a.m.</th></tr></thead>
  <tbody>
    <tr><td>Monday, December 11.</td><td>9:00 a.m. MWF<br>CSC 116</td></tr>
  </tbody>
</table>
<h2>Spring 2024 Exam Calendar</h2>
<table>
  <thead><tr><th>Exam Dates/Times</th><th>8:00 a.m.–11:00 a.m.</th></tr></thead>
  <tbody>
    <tr><td>Friday, May 3.</td><td>CSC 216</td></tr>
  </tbody>
</table>
</body></html>
"""


def _run(monkeypatch, *argv) -> int:
    monkeypatch.setattr(sys, "argv", ["ncsu-exam-calendar", *argv])
    return cli.main()


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "exam-calendar.html"
    path.write_text(PAGE, encoding="utf-8")
    return path


def test_html_to_json(monkeypatch, capsys, page, tmp_path):
    out = tmp_path / "exams.json"
    assert _run(monkeypatch, "--html", str(page), "-o", str(out)) == 0

    catalog = load_snapshot(out)
    assert list(catalog) == ["Fall 2023 Exam Calendar", "Spring 2024 Exam Calendar"]
    assert Named("CSC 116") in catalog["Fall 2023 Exam Calendar"]

    printed = capsys.readouterr().out
    assert '"[Monday, Wednesday, Friday] 09:00:00"' in printed


def test_no_print(monkeypatch, capsys, page, tmp_path):
    out = tmp_path / "exams.json"
    assert _run(monkeypatch, "--html", str(page), "-o", str(out), "--no-print") == 0
    assert capsys.readouterr().out == ""
    assert out.exists()


def test_ics_for_one_semester(monkeypatch, page, tmp_path):
    out = tmp_path / "spring.ics"
    assert _run(
        monkeypatch, "--html", str(page), "-o", str(out), "-f", "ics",
        "--semester", "Spring 2024 Exam Calendar",
    ) == 0
    content = out.read_text(encoding="utf-8")
    assert content.count("BEGIN:VEVENT") == 1
    assert "20240503T080000" in content


def test_unknown_semester(monkeypatch, capsys, page, tmp_path):
    out = tmp_path / "exams.json"
    assert _run(monkeypatch, "--html", str(page), "-o", str(out), "--semester", "Fall 1999 Exam Calendar") == 1
    assert "not found" in capsys.readouterr().err
    assert not out.exists()


def test_list_semesters(monkeypatch, capsys, page):
    assert _run(monkeypatch, "--html", str(page), "--list-semesters") == 0
    assert capsys.readouterr().out.splitlines() == ["Fall 2023 Exam Calendar", "Spring 2024 Exam Calendar"]


def test_class_lookup(monkeypatch, capsys, page, tmp_path):
    snapshot = tmp_path / "exams.json"
    assert _run(monkeypatch, "--html", str(page), "-o", str(snapshot), "--no-print") == 0
    capsys.readouterr()

    assert _run(monkeypatch, "--from-json", str(snapshot), "--class", "9:00 a.m. MWF") == 0
    out = capsys.readouterr().out
    assert "Fall 2023 Exam Calendar: MWF 9:00 AM" in out
    assert "Monday, December 11 2023 08:00-11:00" in out


def test_class_lookup_miss(monkeypatch, capsys, page):
    assert _run(monkeypatch, "--html", str(page), "--class", "CSC 999") == 1
    assert "No exam found" in capsys.readouterr().err


def test_broken_page_writes_nothing(monkeypatch, capsys, tmp_path):
    page = tmp_path / "broken.html"
    page.write_text("<h2>Fall 2023 Exam Calendar</h2><p>Coming soon</p>", encoding="utf-8")
    out = tmp_path / "exams.json"
    assert _run(monkeypatch, "--html", str(page), "-o", str(out)) == 1
    assert "Number of semesters (1)" in capsys.readouterr().err
    assert not out.exists()


def test_bad_snapshot(monkeypatch, capsys, tmp_path):
    snapshot = tmp_path / "exams.json"
    snapshot.write_text("[]", encoding="utf-8")
    assert _run(monkeypatch, "--from-json", str(snapshot), "--list-semesters") == 1
    assert "Error loading exam calendar" in capsys.readouterr().err


def test_import_adds_no_message_filters():
    patterns = [f[1].pattern for f in warnings.filters if f[1] is not None]
    assert not any("urllib3" in p for p in patterns)
