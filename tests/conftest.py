"""Shared test fixtures for the job finder test suite."""

import json
import os

import pytest

from models import Page
from sources.base import BulkCreateSink, PageSource

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def _load_sample_settings():
    with open(os.path.join(FIXTURES_DIR, "sample_settings.json")) as f:
        return json.load(f)


@pytest.fixture(autouse=True)
def mock_settings(monkeypatch):
    """Autouse fixture that injects known settings for every test.

    Resets settings._settings so get_settings() returns the test data,
    and calls config.reload() to refresh all config globals.
    """
    import config
    import settings

    data = _load_sample_settings()
    monkeypatch.delenv("JOOBLE_API_KEY", raising=False)
    monkeypatch.setattr(settings, "_settings", data)
    config.reload()
    yield data


@pytest.fixture
def make_record():
    """Factory fixture for raw job records with defaults."""

    def _make(**overrides):
        defaults = {
            "title": "Python Developer",
            "company": "TestCorp",
            "location": "Remote",
            "type": "Full-time",
            "salary": "$100k",
            "link": "https://example.com/job/1",
            "snippet": "Write Python.",
            "updated": "2026-10-01T00:00:00",
        }
        defaults.update(overrides)
        return {k: v for k, v in defaults.items() if v is not None}

    return _make


class FakeSource(PageSource):
    """Serves pages from a dict of page number -> list of records."""

    name = "fake"

    def __init__(self, pages=None, total_count=None):
        self.pages = pages or {}
        self.total_count = total_count
        self.calls = []
        self.fail_with = None

    def fetch_page(self, keywords, location, min_salary, page, page_size):
        self.calls.append((keywords, location, min_salary, page, page_size))
        if self.fail_with is not None:
            raise self.fail_with
        jobs = self.pages.get(page, [])
        total = self.total_count
        if total is None:
            total = sum(len(p) for p in self.pages.values())
        return Page(total_count=total, jobs=list(jobs))


class FakeSink(BulkCreateSink):
    name = "fake"

    def __init__(self):
        self.created = []
        self.fail_with = None

    def insert(self, payloads):
        if self.fail_with is not None:
            raise self.fail_with
        start = len(self.created) + 1
        self.created.extend(payloads)
        return list(range(start, start + len(payloads)))


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def notify(self, title, message, severity="info"):
        self.messages.append((title, message, severity))


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture
def fake_sink():
    return FakeSink()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def fixture_path():
    """Return the path to the fixtures directory."""
    return FIXTURES_DIR


def load_fixture(filename):
    """Load a fixture file by name."""
    path = os.path.join(FIXTURES_DIR, filename)
    with open(path) as f:
        if filename.endswith(".json"):
            return json.load(f)
        return f.read()
