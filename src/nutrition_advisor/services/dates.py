"""Local wall-clock date helpers.

All values are naive local times. Day boundaries for "today" and "this week"
follow the host clock, and nothing here converts to UTC.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

_DATE_ONLY = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of local dates as YYYY-MM-DD strings."""

    start: str
    end: str


def format_local_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_local_datetime(value: datetime) -> str:
    return value.strftime(DATETIME_FORMAT)


def now_local() -> datetime:
    return datetime.now().replace(microsecond=0)


def today() -> str:
    """Return today's local date string."""
    return format_local_date(now_local())


def day_of(created_at: object) -> str:
    """Return the YYYY-MM-DD part of a stored timestamp."""
    return str(created_at or "")[:10]


def parse_date_only(value: object) -> date | None:
    """Parse a strict YYYY-MM-DD string, returning None when invalid."""
    match = _DATE_ONLY.fullmatch(str(value or ""))
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def build_timestamp_for_date(value: object, now: datetime | None = None) -> str | None:
    """Combine a YYYY-MM-DD date with the current local time of day."""
    parsed = parse_date_only(value)
    if parsed is None:
        return None
    current = now or now_local()
    merged = datetime.combine(parsed, current.time().replace(microsecond=0))
    return format_local_datetime(merged)


def week_range(value: date) -> DateRange:
    """Return the Monday-to-Sunday week containing value."""
    start = value - timedelta(days=value.isoweekday() - 1)
    end = start + timedelta(days=6)
    return DateRange(start=format_local_date(start), end=format_local_date(end))
