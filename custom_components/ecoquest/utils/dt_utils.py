# File: utils/dt_utils.py
"""Date and time utilities for EcoQuest.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Uses standard library: datetime, zoneinfo, dateutil.

Functions:
    - set_default_timezone / get_default_timezone: Configure local zone
    - dt_now_utc: Current datetime in UTC
    - as_utc / as_local: Timezone conversion
    - start_of_local_day: Local midnight for a datetime
    - start_of_local_week: Local Sunday midnight for a datetime
    - calendar_days_between: Whole calendar days between two instants
    - dt_to_iso: Serialize a datetime for storage
    - dt_to_utc: Parse a stored ISO string back to UTC
    - dt_local_date_key: Local ISO date string used for day buckets
"""

from __future__ import annotations

from datetime import UTC, date, datetime
import logging
from zoneinfo import ZoneInfo

# Third-party date utilities (no HA dependency)
from dateutil.relativedelta import SU, relativedelta

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this during integration setup to configure the user's timezone.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time
# ==============================================================================


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Naive datetimes are assumed to be in the default timezone.
    """
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=DEFAULT_TIME_ZONE)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Args:
        dt_obj: Datetime object (naive values are treated as UTC)
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime in local timezone
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(tz_info)


def start_of_local_day(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Get the start of day (00:00:00) for a datetime in local timezone."""
    local_dt = as_local(dt_obj, tz)
    return local_dt.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_local_week(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Get local midnight of the Sunday on or before dt_obj.

    Returns a UTC datetime so it can be stored like every other timestamp.

    Example:
        Wednesday 2025-06-11 15:00 (UTC) → 2025-06-08 00:00 (UTC)
    """
    local_midnight = start_of_local_day(dt_obj, tz)
    sunday = local_midnight + relativedelta(weekday=SU(-1))
    return sunday.astimezone(UTC)


def calendar_days_between(
    earlier: datetime, later: datetime, tz: ZoneInfo | None = None
) -> int:
    """Return whole calendar days from earlier to later in local timezone.

    Times of day are ignored: 23:59 and 00:01 the next day are one day apart,
    while 00:01 and 23:59 on the same day are zero days apart.
    """
    earlier_date = as_local(earlier, tz).date()
    later_date = as_local(later, tz).date()
    return (later_date - earlier_date).days


def dt_local_date(dt_obj: datetime, tz: ZoneInfo | None = None) -> date:
    """Return the local calendar date of a datetime."""
    return as_local(dt_obj, tz).date()


def dt_local_date_key(dt_obj: datetime, tz: ZoneInfo | None = None) -> str:
    """Return the local calendar date of a datetime as YYYY-MM-DD."""
    return dt_local_date(dt_obj, tz).isoformat()


# ==============================================================================
# Serialization
# ==============================================================================


def dt_to_iso(dt_obj: datetime | None) -> str | None:
    """Serialize a datetime as a UTC ISO 8601 string.

    Example:
        datetime(2025, 4, 7, 14, 30, tzinfo=UTC) → "2025-04-07T14:30:00+00:00"
    """
    if dt_obj is None:
        return None
    return as_utc(dt_obj).isoformat()


def dt_to_utc(dt_str: str | None) -> datetime | None:
    """Parse an ISO 8601 string and convert it to UTC.

    Accepts the trailing "Z" form written by JavaScript clients. Naive strings
    are interpreted in the default timezone.

    Returns:
        UTC-aware datetime object, or None if the input is empty or invalid.

    Example:
        "2025-04-07T14:30:00.000Z" → datetime.datetime(2025, 4, 7, 14, 30, tzinfo=UTC)
    """
    if not dt_str or not isinstance(dt_str, str):
        return None

    try:
        parsed = datetime.fromisoformat(dt_str.replace("Z", "+00:00"))
    except ValueError:
        _LOGGER.debug("Unable to parse datetime string %r", dt_str)
        return None

    return as_utc(parsed)
