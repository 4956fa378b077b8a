"""UTC calendar helpers shared by the segmenter, range resolver and board."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from tripboard.contracts.common import as_utc

ONE_DAY = timedelta(days=1)

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def today_utc(now: datetime | None = None) -> date:
    """Current UTC calendar date."""
    return utc_date(now or datetime.now(tz=timezone.utc))


def utc_date(instant: datetime) -> date:
    """UTC calendar date containing *instant*."""
    return as_utc(instant).date()


def day_start(day: date) -> datetime:
    """UTC midnight opening *day*."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open ``[midnight, next midnight)`` of a UTC day.

    ``date.max`` has no next midnight; its end is the last representable
    instant instead.
    """
    start = day_start(day)
    if day == date.max:
        return start, datetime.max.replace(tzinfo=timezone.utc)
    return start, start + ONE_DAY


def minutes_since(origin: datetime, instant: datetime) -> int:
    """Whole minutes from *origin* to *instant* (seconds are floored)."""
    return int((instant - origin).total_seconds() // 60)


def date_range(first: date, last: date) -> list[date]:
    """Every day from *first* through *last* inclusive (empty if reversed)."""
    days: list[date] = []
    current = first
    while current <= last:
        days.append(current)
        if current == date.max:
            break
        current += ONE_DAY
    return days


def add_days(day: date, count: int) -> date:
    """``day + count`` days, clamped to the representable date range."""
    try:
        return day + timedelta(days=count)
    except OverflowError:
        return date.max if count > 0 else date.min


def format_zulu(instant: datetime | None) -> str:
    """``HHMMZ`` label for an instant, ``—`` when missing."""
    if instant is None:
        return "—"
    return as_utc(instant).strftime("%H%MZ")


def format_day_header(day: date) -> str:
    """Column header such as ``26 Thu``."""
    return f"{day.day:02d} {_WEEKDAYS[day.weekday()]}"
