"""Derive a trip's visible UTC date range from its legs."""

from __future__ import annotations

from datetime import date

from tripboard.contracts.trip import Trip
from tripboard.services.utc import today_utc, utc_date


def resolve_trip_range(trip: Trip, today: date | None = None) -> tuple[date, date]:
    """Return ``(start_date, end_date)`` for *trip*.

    Only legs with a valid interval count. The range runs from the UTC date
    of the earliest departure to the UTC date of the latest arrival.

    With no valid leg the stored range is kept as is; today's date is only
    used when the trip never had a range. A derived range therefore never
    regresses to "today" when legs are later cleared or removed.
    """
    legs = [leg for leg in trip.legs if leg.has_valid_interval]
    if not legs:
        start = trip.start_date or today or today_utc()
        end = trip.end_date or start
        return (start, end) if start <= end else (start, start)

    first_departure = min(leg.std_utc for leg in legs)
    last_arrival = max(leg.sta_utc for leg in legs)
    return utc_date(first_departure), utc_date(last_arrival)


def apply_trip_range(trip: Trip, today: date | None = None) -> Trip:
    """Recompute and store the derived range on *trip*; returns *trip*."""
    trip.start_date, trip.end_date = resolve_trip_range(trip, today=today)
    return trip
