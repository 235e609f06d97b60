"""Clock helpers for the estate's local time.

The database holds naive timestamps in the estate's local zone. Everything
above the repositories works with aware datetimes, so every value crosses the
storage boundary through :func:`to_storage_time` and :func:`to_app_time`.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from estategate.config import get_settings

DEFAULT_TIMEZONE = "Africa/Lagos"

# "UTC+1", "GMT-05:30", "+0100"
_UTC_OFFSET = re.compile(
    r"^(?:utc|gmt)?\s*(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=8)
def _zone_named(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        pass
    match = _UTC_OFFSET.match(name)
    if match is None:
        return ZoneInfo(DEFAULT_TIMEZONE)
    offset = timedelta(hours=int(match["hours"]), minutes=int(match["minutes"] or 0))
    return timezone(-offset if match["sign"] == "-" else offset)


def get_app_timezone() -> tzinfo:
    """Return the zone named by ``APP_TIMEZONE``.

    IANA names and plain UTC offsets are accepted. Anything else falls back to
    ``Africa/Lagos``.
    """

    return _zone_named(get_settings().app_timezone.strip() or DEFAULT_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def to_app_time(value: datetime | None) -> datetime | None:
    """Return ``value`` as an aware datetime in the app zone.

    Naive values are read from storage and are already local.
    """

    if value is None:
        return None
    zone = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def to_storage_time(value: datetime | None) -> datetime | None:
    """Return ``value`` converted to the app zone with ``tzinfo`` stripped."""

    local = to_app_time(value)
    return local.replace(tzinfo=None) if local is not None else None


def storage_now() -> datetime:
    """Column default: the current local time, naive."""

    return now_in_app_timezone().replace(tzinfo=None)
