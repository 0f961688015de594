"""Day-key resolution for schedule requests."""

from datetime import datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from norfork_feed.core.schedule_parser import DAY_KEYS
from norfork_feed.utils.exceptions import InvalidDayError

ALIASES = {"today": 0, "tomorrow": 1}


def resolve_day_key(
    day: str,
    now: Optional[datetime] = None,
    timezone: str = "America/Chicago",
) -> str:
    """Resolve a requested day into a three-letter lowercase day key.

    Args:
        day: Weekday abbreviation, "today" or "tomorrow"
        now: Reference instant for aliases (defaults to current time)
        timezone: Regional calendar the aliases are evaluated in

    Returns:
        Day key such as "wed"

    Raises:
        InvalidDayError: If the day is not recognised
    """
    key = day.strip().lower()

    if key in ALIASES:
        tz = ZoneInfo(timezone)
        local_now = now.astimezone(tz) if now is not None else datetime.now(tz)
        target = local_now + timedelta(days=ALIASES[key])
        # DAY_KEYS starts on Sunday, weekday() on Monday
        return DAY_KEYS[(target.weekday() + 1) % 7]

    if key not in DAY_KEYS:
        raise InvalidDayError(
            "Invalid day. Use sun, mon, tue, wed, thu, fri, sat, today, or tomorrow."
        )

    return key
