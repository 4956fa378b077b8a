"""Split leg intervals into per-UTC-day segments.

A leg ``[std_utc, sta_utc)`` is intersected with every UTC day it touches.
Segments tile the interval exactly: no gaps, no overlaps, and an arrival
landing on midnight does not leak a zero-length segment into the next day.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from tripboard.contracts.board import DaySegment
from tripboard.contracts.leg import Leg
from tripboard.contracts.trip import Trip
from tripboard.services.utc import date_range, day_bounds, minutes_since, utc_date


def segment_leg(
    leg: Leg,
    trip_id: str = "",
    leg_index: int = 0,
    days: Iterable[date] | None = None,
) -> list[DaySegment]:
    """Return one ``DaySegment`` per UTC day overlapped by *leg*.

    An incomplete or inverted interval yields an empty list; the leg is
    simply not schedulable yet.

    When *days* is given only those days are produced, and the day walk
    is clipped to them, so a leg spanning years costs no more than the
    window.
    """
    if not leg.has_valid_interval:
        return []

    std = leg.std_utc
    sta = leg.sta_utc
    first, last = utc_date(std), utc_date(sta)

    wanted: set[date] | None = None
    if days is not None:
        wanted = set(days)
        if not wanted:
            return []
        first = max(first, min(wanted))
        last = min(last, max(wanted))

    segments: list[DaySegment] = []
    for day in date_range(first, last):
        if wanted is not None and day not in wanted:
            continue
        d_start, d_next = day_bounds(day)
        seg_start = max(std, d_start)
        seg_end = min(sta, d_next)
        if seg_end <= seg_start:
            continue

        start_minute = minutes_since(d_start, seg_start)
        end_minute = minutes_since(d_start, seg_end)
        if end_minute <= start_minute:
            # Only reachable for instants assigned without validation.
            continue

        segments.append(
            DaySegment(
                day=day,
                start_minute=start_minute,
                end_minute=end_minute,
                trip_id=trip_id,
                leg_index=leg_index,
            )
        )

    return segments


def segment_trip(trip: Trip, days: Iterable[date] | None = None) -> list[DaySegment]:
    """Segments of every leg of *trip*, in leg order."""
    wanted = set(days) if days is not None else None
    segments: list[DaySegment] = []
    for index, leg in enumerate(trip.legs):
        segments.extend(segment_leg(leg, trip_id=trip.id, leg_index=index, days=wanted))
    return segments
