"""Timestamp normalization for USACE report tokens.

Reports carry a ``DDMMMYYYY`` date token and an ``HHMM`` time token in
regional wall-clock time with no explicit offset. ``2400`` denotes midnight at
the end of the day, i.e. ``0000`` of the following day.

The UTC offset is inferred from the calendar month alone: April through
October are treated as daylight time, November through March as standard
time. Actual transition Sundays in March and November are not modelled, so
readings in those weeks may be off by one hour.
"""

import re
from datetime import datetime, timedelta, timezone

from norfork_feed.utils.exceptions import DateResolutionError

MONTHS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

DAYLIGHT_OFFSET = timezone(timedelta(hours=-5), "CDT")
STANDARD_OFFSET = timezone(timedelta(hours=-6), "CST")

DAYLIGHT_MONTHS = range(4, 11)

_DATE_TOKEN = re.compile(r"^(\d{2})([A-Za-z]{3})(\d{4})$")
_TIME_TOKEN = re.compile(r"^(\d{2})(\d{2})$")


def seasonal_offset(month: int) -> timezone:
    """Return the regional UTC offset assumed for a calendar month."""
    if month in DAYLIGHT_MONTHS:
        return DAYLIGHT_OFFSET
    return STANDARD_OFFSET


def normalize_timestamp(date_token: str, time_token: str) -> datetime:
    """Convert report date/time tokens into an aware UTC datetime.

    Args:
        date_token: Date like "06DEC2025"
        time_token: Time like "1500", or "2400" for end of day

    Returns:
        Instant in UTC

    Raises:
        DateResolutionError: If the tokens do not form a valid date and time
    """
    date_match = _DATE_TOKEN.match(date_token.strip())
    if not date_match:
        raise DateResolutionError(f"Malformed date token: {date_token!r}")

    time_match = _TIME_TOKEN.match(time_token.strip())
    if not time_match:
        raise DateResolutionError(f"Malformed time token: {time_token!r}")

    day, month_abbr, year = date_match.groups()
    month = MONTHS.get(month_abbr.upper())
    if month is None:
        raise DateResolutionError(f"Unknown month abbreviation: {month_abbr!r}")

    hour, minute = int(time_match.group(1)), int(time_match.group(2))
    rollover = hour == 24 and minute == 0
    if rollover:
        hour = 0

    try:
        local = datetime(int(year), month, int(day), hour, minute)
    except ValueError as e:
        raise DateResolutionError(
            f"Invalid date/time {date_token} {time_token}: {e}"
        ) from e

    if rollover:
        local += timedelta(days=1)

    return local.replace(tzinfo=seasonal_offset(local.month)).astimezone(timezone.utc)
