"""Tests for sources/jooble.py — Jooble REST API page source."""

import asyncio
import json

import pytest
import requests
import responses

from errors import FetchError
from sources.jooble import JoobleSource
from tests.conftest import load_fixture

ENDPOINT = "https://jooble.test/api/test-key"


@responses.activate
def test_fetch_page_parses_response():
    responses.add(responses.POST, ENDPOINT, json=load_fixture("jooble_response.json"), status=200)

    page = JoobleSource().fetch_page("python", "Remote", None, 1, 25)

    assert page.total_count == 101
    assert len(page.jobs) == 2
    assert page.jobs[0]["company"] == "Acme Data"


@responses.activate
def test_request_body():
    """Keywords, location, salary and paging go in the JSON body."""
    responses.add(responses.POST, ENDPOINT, json={"totalCount": 0, "jobs": []}, status=200)

    JoobleSource().fetch_page("python", "Remote", 90000, 3, 25)

    body = json.loads(responses.calls[0].request.body)
    assert body == {
        "keywords": "python",
        "location": "Remote",
        "salary": 90000,
        "page": "3",
        "ResultOnPage": 25,
    }


@responses.activate
def test_salary_omitted_when_unset():
    responses.add(responses.POST, ENDPOINT, json={"totalCount": 0, "jobs": []}, status=200)

    JoobleSource().fetch_page("python", "", None, 1, 25)

    body = json.loads(responses.calls[0].request.body)
    assert "salary" not in body


@responses.activate
def test_missing_fields_default():
    """An empty body is an empty page, not an error."""
    responses.add(responses.POST, ENDPOINT, json={}, status=200)

    page = JoobleSource().fetch_page("python", "", None, 1, 25)

    assert page.total_count == 0
    assert page.jobs == []


@responses.activate
def test_http_error_carries_body_message():
    responses.add(responses.POST, ENDPOINT, json={"message": "Invalid API key"}, status=403)

    with pytest.raises(FetchError) as excinfo:
        JoobleSource().fetch_page("python", "", None, 1, 25)

    assert excinfo.value.body == {"message": "Invalid API key"}
    assert "403" in str(excinfo.value)


@responses.activate
def test_http_error_without_json_body():
    responses.add(responses.POST, ENDPOINT, body="Bad gateway", status=502)

    with pytest.raises(FetchError) as excinfo:
        JoobleSource().fetch_page("python", "", None, 1, 25)

    assert excinfo.value.body is None


@responses.activate
def test_invalid_json_raises_fetch_error():
    responses.add(responses.POST, ENDPOINT, body="<html>not json</html>", status=200)

    with pytest.raises(FetchError):
        JoobleSource().fetch_page("python", "", None, 1, 25)


@responses.activate
def test_connection_error_raises_fetch_error():
    responses.add(responses.POST, ENDPOINT, body=requests.ConnectionError("refused"))

    with pytest.raises(FetchError):
        JoobleSource().fetch_page("python", "", None, 1, 25)


def test_missing_api_key():
    with pytest.raises(FetchError):
        JoobleSource(api_key="").fetch_page("python", "", None, 1, 25)


def test_api_key_from_environment(monkeypatch):
    import config

    monkeypatch.setenv("JOOBLE_API_KEY", "env-key")
    config.reload()
    assert JoobleSource().endpoint == "https://jooble.test/api/env-key"


@responses.activate
def test_async_fetch():
    responses.add(responses.POST, ENDPOINT, json=load_fixture("jooble_response.json"), status=200)

    page = asyncio.run(JoobleSource().fetch("python", "Remote", None, 1, 25))

    assert page.total_count == 101


@responses.activate
def test_async_fetch_wraps_errors():
    responses.add(responses.POST, ENDPOINT, json={"message": "Rate limited"}, status=429)

    with pytest.raises(FetchError) as excinfo:
        asyncio.run(JoobleSource().fetch("python", "", None, 1, 25))

    assert excinfo.value.body["message"] == "Rate limited"


@responses.activate
def test_malformed_jobs_do_not_crash_search():
    """Null entries and a jobs object instead of a list both load cleanly."""
    from reconciler import PageReconciler

    responses.add(
        responses.POST,
        ENDPOINT,
        json={"totalCount": 2, "jobs": [None, {"title": "A", "link": "https://x.com/a"}]},
        status=200,
    )
    responses.add(responses.POST, ENDPOINT, json={"totalCount": 1, "jobs": {"title": "A"}}, status=200)

    r = PageReconciler(JoobleSource(), page_size=25)
    asyncio.run(r.search())
    assert [row.key for row in r.rows] == ["k:https://x.com/a"]
    assert r.error_message == ""

    asyncio.run(r.load_page())
    assert r.rows == []
    assert r.error_message == ""
    assert r.loading is False
