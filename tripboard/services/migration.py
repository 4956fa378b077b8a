"""One-time migration of legacy leg payloads to UTC instants.

Older boards stored a departure ``day`` (``YYYY-MM-DD``) plus ``std`` and
``sta`` clock times (``HHMM`` or ``HH:MM``). These are converted once when
untrusted or older documents enter the system (store load, JSON import);
nothing downstream ever looks at the legacy fields.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

_HHMM = re.compile(r"^\d{3,4}$")

_STD_FIELDS = ("std_utc", "stdUtc")
_STA_FIELDS = ("sta_utc", "staUtc")


def parse_hhmm(text: str | None) -> tuple[int, int] | None:
    """Parse ``HHMM`` / ``HMM`` / ``HH:MM`` into ``(hours, minutes)``."""
    cleaned = (text or "").replace(":", "", 1).strip()
    if not _HHMM.match(cleaned):
        return None
    padded = cleaned.zfill(4)
    hours, minutes = int(padded[:2]), int(padded[2:])
    if hours > 23 or minutes > 59:
        return None
    return hours, minutes


def _parse_day(day: date | str | None) -> date | None:
    if isinstance(day, date):
        return day
    try:
        return date.fromisoformat((day or "").strip())
    except ValueError:
        return None


def legacy_to_instant(day: date | str | None, hhmm: str | None) -> datetime | None:
    """Combine a UTC day and a clock time into a UTC instant."""
    parsed_day = _parse_day(day)
    clock = parse_hhmm(hhmm)
    if parsed_day is None or clock is None:
        return None
    return datetime.combine(parsed_day, time(*clock), tzinfo=timezone.utc)


def _has_value(raw: dict[str, Any], fields: tuple[str, ...]) -> bool:
    return any(raw.get(name) for name in fields)


def migrate_leg_payload(raw: dict[str, Any]) -> dict[str, Any]:
    """Fill missing ``std_utc`` / ``sta_utc`` from legacy ``day``/``std``/``sta``.

    An arrival clock time earlier than the departure clock time is taken
    to be on the following day. Returns a new dict.
    """
    leg = dict(raw)
    if _has_value(leg, _STD_FIELDS) and _has_value(leg, _STA_FIELDS):
        return leg

    day = leg.get("day")
    std = leg.get("std")
    sta = leg.get("sta")

    if not _has_value(leg, _STD_FIELDS) and day and std:
        departure = legacy_to_instant(day, std)
        if departure is not None:
            leg["std_utc"] = departure.isoformat()

    if not _has_value(leg, _STA_FIELDS) and day and sta:
        arrival = legacy_to_instant(day, sta)
        dep_clock = parse_hhmm(std)
        arr_clock = parse_hhmm(sta)
        if arrival is not None and dep_clock is not None and arr_clock is not None:
            if arr_clock < dep_clock:
                # No next day after date.max: the arrival stays unset.
                arrival = arrival + timedelta(days=1) if arrival.date() < date.max else None
        if arrival is not None:
            leg["sta_utc"] = arrival.isoformat()

    return leg


def migrate_trip_payload(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply ``migrate_leg_payload`` to every leg of a stored trip dict."""
    trip = dict(raw)
    legs = trip.get("legs") or []
    trip["legs"] = [
        migrate_leg_payload(leg) if isinstance(leg, dict) else leg for leg in legs
    ]
    return trip
