"""Locale-independent date helpers for task lines and cache annotations."""

from __future__ import annotations

from datetime import UTC, date, datetime
from email.utils import format_datetime

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 3_600
_SECONDS_PER_DAY = 86_400


def month_name(value: date) -> str:
    return MONTH_NAMES[value.month - 1]


def short_month_name(value: date) -> str:
    return month_name(value)[:3]


def day_name(value: date) -> str:
    return DAY_NAMES[value.weekday()]


def short_day_name(value: date) -> str:
    return day_name(value)[:3]


def format_short_date(value: date | None) -> str:
    """Format as `Fri, 16 Oct`; empty string when there is no date."""

    if value is None:
        return ""
    return f"{short_day_name(value)}, {value.day} {short_month_name(value)}"


def days_until(due_date: date | None, today: date) -> int | None:
    """Whole days from `today` to `due_date`; negative when overdue."""

    if due_date is None:
        return None
    return (due_date - today).days


def is_after_deadline(due_date: date | None, today: date) -> bool:
    """Due today counts as after the deadline."""

    days = days_until(due_date, today)
    return days is not None and days <= 0


def format_http_date(value: datetime) -> str:
    """RFC 1123 timestamp in GMT, e.g. `Sat, 17 Oct 2026 08:00:00 GMT`."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return format_datetime(value.astimezone(UTC).replace(microsecond=0), usegmt=True)


def format_age(saved_at: datetime, now: datetime) -> str:
    """Human readable distance between two aware timestamps."""

    if saved_at.tzinfo is None:
        saved_at = saved_at.replace(tzinfo=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    seconds = int((now - saved_at).total_seconds())
    if seconds < _SECONDS_PER_MINUTE:
        return "just now"
    if seconds < _SECONDS_PER_HOUR:
        return _plural(seconds // _SECONDS_PER_MINUTE, "minute")
    if seconds < _SECONDS_PER_DAY:
        return _plural(seconds // _SECONDS_PER_HOUR, "hour")
    return _plural(seconds // _SECONDS_PER_DAY, "day")


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"
