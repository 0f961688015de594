"""Shared pytest fixtures for the Norfork feed test suite."""

from pathlib import Path
from typing import Callable

import httpx
import pytest

from norfork_feed.configuration.settings import (
    ApiConfig,
    LoggingConfig,
    Settings,
    SourcesConfig,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def reservoir_html() -> str:
    """Sample USACE reservoir page."""
    return (FIXTURES_DIR / "norfork.htm").read_text(encoding="utf-8")


@pytest.fixture
def schedule_html() -> str:
    """Sample SWPA schedule page for Wednesday."""
    return (FIXTURES_DIR / "wed.htm").read_text(encoding="utf-8")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        api=ApiConfig(host="127.0.0.1", port=8000),
        logging=LoggingConfig(level="INFO", format="text"),
        sources=SourcesConfig(
            reservoir_url="https://reports.test/norfork.htm",
            schedule_base_url="https://schedules.test/swpa/",
            user_agent="norfork-feed-tests",
            timeout=5,
        ),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream(reservoir_html: str, schedule_html: str) -> Callable[[httpx.Request], httpx.Response]:
    """Request handler serving the sample pages; other paths return 404."""
    pages = {
        "/norfork.htm": reservoir_html,
        "/swpa/wed.htm": schedule_html,
    }

    def handler(request: httpx.Request) -> httpx.Response:
        body = pages.get(request.url.path)
        if body is None:
            return httpx.Response(404, text="Not Found")
        return httpx.Response(200, text=body, headers={"Content-Type": "text/html"})

    return handler
