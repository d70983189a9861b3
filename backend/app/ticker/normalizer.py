"""Turn an upstream date-keyed mapping into a newest-first time series."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidDateFormat, InvalidTimezone
from .models import DatedEntry, RawDailyEntry

DATE_FORMAT = "%Y-%m-%d"


def resolve_timezone(name: str) -> ZoneInfo:
    """Resolve an IANA timezone name, raising InvalidTimezone if unknown."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError) as e:
        raise InvalidTimezone(name) from e


def parse_date(value: str, tz: ZoneInfo) -> datetime:
    """Parse a strict 'YYYY-MM-DD' key as local midnight in `tz`.

    strptime alone accepts unpadded fields such as '2024-1-5', so the parsed
    value must format back to the original string.
    """
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except (ValueError, TypeError) as e:
        raise InvalidDateFormat(value) from e
    if parsed.strftime(DATE_FORMAT) != value:
        raise InvalidDateFormat(value)
    return parsed.replace(tzinfo=tz)


def normalize_time_series(
    series: Mapping[str, RawDailyEntry],
    timezone_name: str,
) -> list[DatedEntry]:
    """Return the entries of `series` ordered newest first.

    Every key is resolved against the same timezone. Any bad key or an
    unknown timezone aborts the whole call; no partial result is returned.
    The output depends only on the mapping's contents, not its iteration order.
    """
    tz = resolve_timezone(timezone_name)

    entries = [
        DatedEntry(date=parse_date(date_string, tz), entry=record)
        for date_string, record in series.items()
    ]
    entries.sort(key=lambda e: e.date, reverse=True)
    return entries
