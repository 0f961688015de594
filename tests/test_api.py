"""Tests for the HTTP routes."""

from datetime import datetime, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from norfork_feed.clients.http_client import DocumentFetcher
from norfork_feed.core.cache import ResultCache
from norfork_feed.core.report_service import ReportService
from norfork_feed.main import create_app


@pytest.fixture
def client(settings, upstream, clock) -> TestClient:
    service = ReportService(
        settings=settings,
        fetcher=DocumentFetcher(settings.sources, transport=httpx.MockTransport(upstream)),
        cache=ResultCache(ttl_seconds=settings.cache.ttl_seconds, clock=clock),
    )
    return TestClient(create_app(settings=settings, service=service))


@pytest.fixture
def broken_client(settings, clock) -> TestClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("sun.htm"):
            return httpx.Response(200, text="no schedule published")
        raise httpx.ConnectError("connection refused", request=request)

    service = ReportService(
        settings=settings,
        fetcher=DocumentFetcher(settings.sources, transport=httpx.MockTransport(handler)),
        cache=ResultCache(ttl_seconds=900, clock=clock),
    )
    return TestClient(create_app(settings=settings, service=service))


# ── Root ──────────────────────────────────────────────────────────────────────

def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["service"] == "norfork-feed"


# ── GET /api/v1/norfork/lake ──────────────────────────────────────────────────

def test_lake_report(client):
    response = client.get("/api/v1/norfork/lake")
    assert response.status_code == 200

    body = response.json()
    assert body["meta"] == {"topFloodPoolFt": 580.0, "currentPowerPoolFt": 555.75}
    assert len(body["hourly"]) == 6

    newest = body["hourly"][0]
    assert newest["sourceDate"] == "06DEC2025"
    assert newest["sourceTime"] == "0300"
    assert newest["elevationFt"] == 553.42
    assert newest["tailwaterFt"] is None
    timestamp = datetime.fromisoformat(newest["timestamp"].replace("Z", "+00:00"))
    assert timestamp == datetime(2025, 12, 6, 9, 0, tzinfo=timezone.utc)


def test_lake_upstream_down(broken_client):
    response = broken_client.get("/api/v1/norfork/lake")
    assert response.status_code == 502
    assert response.json()["detail"] == "Upstream report unavailable"


# ── GET /api/v1/norfork/schedule/{day} ────────────────────────────────────────

def test_schedule_report(client):
    response = client.get("/api/v1/norfork/schedule/wed")
    assert response.status_code == 200

    body = response.json()
    assert body["day"] == "wed"
    assert body["date"] == "WEDNESDAY DECEMBER 03, 2025"
    assert body["schedule"][0] == {"hourEnding": 1, "megawatts": 0}
    assert len(body["schedule"]) == 23


def test_schedule_day_is_case_insensitive(client):
    response = client.get("/api/v1/norfork/schedule/WED")
    assert response.status_code == 200
    assert response.json()["day"] == "wed"


def test_schedule_invalid_day(client):
    response = client.get("/api/v1/norfork/schedule/someday")
    assert response.status_code == 400
    assert "Invalid day" in response.json()["detail"]


def test_schedule_alias_resolves(client, monkeypatch):
    from norfork_feed.api import dependencies

    wednesday_noon = datetime(2025, 12, 3, 18, 0, tzinfo=timezone.utc)
    resolve = dependencies.resolve_day_key
    monkeypatch.setattr(
        dependencies,
        "resolve_day_key",
        lambda day, timezone: resolve(day, now=wednesday_noon, timezone=timezone),
    )

    response = client.get("/api/v1/norfork/schedule/today")
    assert response.status_code == 200
    assert response.json()["day"] == "wed"

    # Only wed is published upstream in the fixtures
    response = client.get("/api/v1/norfork/schedule/tomorrow")
    assert response.status_code == 502


def test_schedule_format_error(broken_client):
    response = broken_client.get("/api/v1/norfork/schedule/sun")
    assert response.status_code == 502
    assert response.json()["detail"] == "Upstream report format not recognised"
