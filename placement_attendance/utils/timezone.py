"""
Timezone helpers for attendance day boundaries
"""

from datetime import date, datetime
from typing import Union

import pytz

from placement_attendance.core.config import settings


def local_tz():
    return pytz.timezone(settings.TIMEZONE)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(pytz.UTC)


def as_utc(value: Union[datetime, str]) -> datetime:
    """Coerce a datetime or ISO string to an aware UTC datetime.

    Naive values are treated as UTC, which is how they are stored.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value.astimezone(pytz.UTC)


def local_day(value: Union[datetime, str]) -> date:
    """Calendar day of ``value`` in the configured timezone (IST by default)"""
    return as_utc(value).astimezone(local_tz()).date()


def to_iso(value) -> str:
    """ISO-8601 UTC string with millisecond precision, e.g. 2025-03-01T10:00:00.000Z"""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_display_date(value: Union[date, datetime, str]) -> str:
    """Long human date used in reminder mails, e.g. 'Saturday, 1 March 2025'"""
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    elif isinstance(value, datetime):
        value = value.astimezone(local_tz()).date() if value.tzinfo else value.date()
    return f"{value.strftime('%A')}, {value.day} {value.strftime('%B')} {value.year}"
