"""
Date, time and billable normalization for tool input.

The API expects UTC timestamps ('2024-03-15T08:00:00Z'); users enter
local dates ('2024-03-15') and times of day ('09:00').
"""

from datetime import date, datetime, time, timezone, tzinfo
from typing import Optional

from clockodo_mcp.api.models import Billable


API_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

DAY_START = time(0, 0, 0)
DAY_END = time(23, 59, 59)


def today(tz: Optional[tzinfo]) -> str:
    """Current calendar date in tz (system zone if None) as YYYY-MM-DD."""
    return datetime.now(tz).date().isoformat()


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")


def parse_time(value: str) -> time:
    try:
        return datetime.strptime(value, "%H:%M").time()
    except ValueError:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")


def _as_utc(day: date, clock: time, tz: Optional[tzinfo]) -> str:
    # tz None leaves the value naive; astimezone() then applies the system zone rules
    local = datetime.combine(day, clock).replace(tzinfo=tz)
    return local.astimezone(timezone.utc).strftime(API_TIMESTAMP_FORMAT)


def to_utc(day: str, clock: str, tz: Optional[tzinfo]) -> str:
    """
    Combine a local date and time of day into an API timestamp.

    Example (tz = UTC+1): to_utc('2024-03-15', '09:00') -> '2024-03-15T08:00:00Z'
    """
    return _as_utc(parse_date(day), parse_time(clock), tz)


def day_range(
    date_from: Optional[str],
    date_to: Optional[str],
    tz: Optional[tzinfo],
) -> tuple[str, str, str, str]:
    """
    Resolve a local date range to API timestamps.

    Each missing bound defaults to today on its own.

    Returns:
        (date_from, date_to, time_since, time_until) where the first two are
        the resolved YYYY-MM-DD dates and the last two cover
        date_from 00:00:00 to date_to 23:59:59 local time.
    """
    current = today(tz)
    date_from = date_from or current
    date_to = date_to or current
    return (
        date_from,
        date_to,
        _as_utc(parse_date(date_from), DAY_START, tz),
        _as_utc(parse_date(date_to), DAY_END, tz),
    )


def billable_flag(value: Optional[bool]) -> Billable:
    """Map the tool's billable switch to the API encoding. Unset means billable."""
    if value is False:
        return Billable.NOT_BILLABLE
    return Billable.BILLABLE


def parse_timestamp(value: str) -> datetime:
    """Parse an API timestamp into an aware datetime (naive values are UTC)."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
