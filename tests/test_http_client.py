"""Tests for the document fetcher."""

import httpx
import pytest

from norfork_feed.clients.http_client import DocumentFetcher
from norfork_feed.utils.exceptions import NetworkError


def test_fetch_returns_text(settings, upstream, reservoir_html):
    fetcher = DocumentFetcher(settings.sources, transport=httpx.MockTransport(upstream))
    assert fetcher.fetch(settings.sources.reservoir_url) == reservoir_html


def test_fetch_sends_user_agent(settings):
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["user-agent"] = request.headers["User-Agent"]
        return httpx.Response(200, text="ok")

    fetcher = DocumentFetcher(settings.sources, transport=httpx.MockTransport(handler))
    fetcher.fetch("https://reports.test/anything")
    assert seen["user-agent"] == "norfork-feed-tests"


def test_non_success_status_raises(settings):
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="busy"))
    fetcher = DocumentFetcher(settings.sources, transport=transport)
    with pytest.raises(NetworkError, match="503"):
        fetcher.fetch(settings.sources.reservoir_url)


def test_not_found_raises(settings, upstream):
    fetcher = DocumentFetcher(settings.sources, transport=httpx.MockTransport(upstream))
    with pytest.raises(NetworkError, match="404"):
        fetcher.fetch("https://schedules.test/swpa/xyz.htm")


def test_timeout_raises_network_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    fetcher = DocumentFetcher(settings.sources, transport=httpx.MockTransport(handler))
    with pytest.raises(NetworkError) as exc_info:
        fetcher.fetch(settings.sources.reservoir_url)
    assert isinstance(exc_info.value.__cause__, httpx.TimeoutException)


def test_connection_error_raises_network_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = DocumentFetcher(settings.sources, transport=httpx.MockTransport(handler))
    with pytest.raises(NetworkError):
        fetcher.fetch(settings.sources.reservoir_url)


def test_follows_redirects(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old.htm":
            return httpx.Response(301, headers={"Location": "https://reports.test/new.htm"})
        return httpx.Response(200, text="moved")

    fetcher = DocumentFetcher(settings.sources, transport=httpx.MockTransport(handler))
    assert fetcher.fetch("https://reports.test/old.htm") == "moved"
