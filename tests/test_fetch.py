"""Tests for fetch.py – network access is always faked."""
import pytest
import requests

from ncsu_exam_calendar import fetch
from ncsu_exam_calendar.classes import Named
from ncsu_exam_calendar.errors import FetchError

PAGE = """
<html><body>
<h2>Spring 2024 Exam Calendar</h2>
<table>
  <thead><tr><th>Exam Dates/Times</th><th>8:00 a.m.–11:00 a.m.</th></tr></thead>
  <tbody><tr><td>Friday, May 3.</td><td>CSC 116</td></tr></tbody>
</table>
</body></html>
"""


class _FakeResponse:
    def __init__(self, text: str, status: int = 200):
        self.text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


def test_fetch_returns_body(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return _FakeResponse(PAGE)

    monkeypatch.setattr(fetch.requests, "get", fake_get)
    assert fetch.fetch_exam_page() == PAGE
    assert calls == [(fetch.DEFAULT_EXAM_CALENDAR_URL, fetch.DEFAULT_TIMEOUT)]


def test_http_error(monkeypatch):
    monkeypatch.setattr(fetch.requests, "get", lambda url, timeout: _FakeResponse("", 404))
    with pytest.raises(FetchError, match="404"):
        fetch.fetch_exam_page("https://example.invalid/exams/")


def test_network_error(monkeypatch):
    def boom(url, timeout):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(fetch.requests, "get", boom)
    with pytest.raises(FetchError, match="connection refused"):
        fetch.fetch_exam_page("https://example.invalid/exams/")


def test_get_calendars(monkeypatch):
    monkeypatch.setattr(fetch.requests, "get", lambda url, timeout: _FakeResponse(PAGE))
    catalog = fetch.get_calendars()
    assert list(catalog) == ["Spring 2024 Exam Calendar"]
    assert Named("CSC 116") in catalog["Spring 2024 Exam Calendar"]
