# src/organizer/calendar/date_keys.py

"""
Date keys: canonical "YYYY-MM-DD" strings naming one calendar day.

All day-indexed lookups (calendar index, today marker, file dates) go through
format_date_key() so that two moments map to the same key iff they fall on the
same calendar day in the configured timezone.
"""

from __future__ import annotations

import datetime as dt
import logging
from functools import lru_cache
from typing import Any, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..config import DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)

DateKey = str

# Returned for null/unparseable input. Callers must not index it.
INVALID_DATE_KEY: DateKey = ""

TzLike = Union[dt.tzinfo, str, None]

_MOMENT_FORMATS = ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M", "%Y-%m-%d")


@lru_cache(maxsize=32)
def _zone(name: str) -> dt.tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name!r}") from e


def resolve_timezone(tz: TzLike = None) -> dt.tzinfo:
    """
    Resolve a tzinfo or IANA name; None means the default calendar zone.

    Raises ValueError for unknown zone names (a configuration error).
    """
    if tz is None:
        return _zone(DEFAULT_TIMEZONE)
    if isinstance(tz, dt.tzinfo):
        return tz
    name = str(tz).strip()
    if not name:
        return _zone(DEFAULT_TIMEZONE)
    if name.upper() in {"UTC", "Z", "GMT"}:
        return dt.timezone.utc
    return _zone(name)


def parse_moment(raw: Any) -> dt.date | dt.datetime | None:
    """
    Parse a persisted task moment.

    "YYYY-MM-DD" -> date, "YYYY-MM-DDTHH:MM[:SS]" -> naive datetime.
    Other ISO-8601 datetimes (with offsets) are accepted as aware datetimes.
    Returns None on anything unparseable.
    """
    if isinstance(raw, (dt.date, dt.datetime)):
        return raw
    if not isinstance(raw, str):
        return None
    s = raw.strip()
    if not s:
        return None

    for fmt in _MOMENT_FORMATS:
        try:
            parsed = dt.datetime.strptime(s, fmt)
        except ValueError:
            continue
        return parsed.date() if fmt == "%Y-%m-%d" else parsed

    try:
        return dt.datetime.fromisoformat(s)
    except ValueError:
        return None


def parse_calendar_date(raw: Any) -> dt.date | None:
    """parse_moment() truncated to a calendar date (time of day dropped)."""
    moment = parse_moment(raw)
    if moment is None:
        return None
    if isinstance(moment, dt.datetime):
        return moment.date()
    return moment


def format_date_key(point: Any, tz: TzLike = None) -> DateKey:
    """
    Canonical day key for a point in time.

    - date: already a calendar day
    - naive datetime: wall-clock reading, its own date
    - aware datetime: converted into tz first
    - str: parsed with parse_moment()
    Returns INVALID_DATE_KEY for None or anything unresolvable; never raises.
    """
    if point is None:
        return INVALID_DATE_KEY

    if isinstance(point, str):
        parsed = parse_moment(point)
        if parsed is None:
            return INVALID_DATE_KEY
        point = parsed

    try:
        if isinstance(point, dt.datetime):
            if point.tzinfo is not None and point.utcoffset() is not None:
                point = point.astimezone(resolve_timezone(tz))
            return point.date().isoformat()
        if isinstance(point, dt.date):
            return point.isoformat()
    except (ValueError, OverflowError):
        logger.warning("Could not format date key for %r", point, exc_info=True)
        return INVALID_DATE_KEY

    return INVALID_DATE_KEY


def today(tz: TzLike = None) -> dt.date:
    return dt.datetime.now(resolve_timezone(tz)).date()


def today_key(tz: TzLike = None) -> DateKey:
    return format_date_key(today(tz), tz)
