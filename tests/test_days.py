"""Tests for day-key resolution."""

from datetime import datetime, timezone

import pytest

from norfork_feed.utils.days import resolve_day_key
from norfork_feed.utils.exceptions import InvalidDayError

# Saturday 2025-12-06 22:00 in Chicago (Sunday 04:00 UTC)
SATURDAY_EVENING = datetime(2025, 12, 7, 4, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("day", ["sun", "mon", "tue", "wed", "thu", "fri", "sat"])
def test_day_keys_pass_through(day):
    assert resolve_day_key(day) == day


def test_day_key_case_and_whitespace():
    assert resolve_day_key(" WED ") == "wed"


def test_today_uses_regional_calendar():
    assert resolve_day_key("today", now=SATURDAY_EVENING) == "sat"


def test_tomorrow_uses_regional_calendar():
    assert resolve_day_key("tomorrow", now=SATURDAY_EVENING) == "sun"


def test_other_timezone():
    assert resolve_day_key("today", now=SATURDAY_EVENING, timezone="UTC") == "sun"


@pytest.mark.parametrize("day", ["wednesday", "yesterday", "", "1"])
def test_invalid_days(day):
    with pytest.raises(InvalidDayError):
        resolve_day_key(day)
