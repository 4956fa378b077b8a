"""Trip and leg mutations.

Every edit to a trip goes through this module. Each operation leaves the
trip normalized: the derived date range is recomputed and ``updated_at``
is stamped, so nothing reads a stale range after a change.

Legs are addressed by index; inserting or removing a leg renumbers the
ones after it.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any

from pydantic import ValidationError

from tripboard.contracts.enums import StatusKey, StatusState
from tripboard.contracts.leg import Leg, StatusCheck
from tripboard.contracts.trip import Trip, clean_tags
from tripboard.services.migration import migrate_leg_payload
from tripboard.services.status import normalize_state
from tripboard.services.trip_range import apply_trip_range
from tripboard.services.utc import today_utc

EDITABLE_LEG_FIELDS = frozenset(
    {"flight_no", "adep", "ades", "altn", "std_utc", "sta_utc"}
)


# ============ Exceptions ============

class TripEditError(Exception):
    """Base exception for rejected trip edits."""


class TripNotFoundError(TripEditError):
    def __init__(self, trip_id: str):
        self.trip_id = trip_id
        super().__init__(f"Trip {trip_id} not found")


class LegNotFoundError(TripEditError):
    def __init__(self, trip_id: str, index: int):
        self.trip_id = trip_id
        self.index = index
        super().__init__(f"Trip {trip_id} has no leg at index {index}")


class UnknownStatusKeyError(TripEditError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown status key: {key}")


class InvalidTripError(TripEditError):
    """Trip or leg fields that fail validation."""


# ============ Normalization ============

def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


def normalize_trip(trip: Trip, today: date | None = None) -> Trip:
    """Bring derived fields of *trip* up to date with its legs."""
    return apply_trip_range(trip, today=today)


def normalize_trips(trips: list[Trip], today: date | None = None) -> list[Trip]:
    for trip in trips:
        normalize_trip(trip, today=today)
    return trips


def _touch(trip: Trip) -> Trip:
    normalize_trip(trip)
    trip.updated_at = _now()
    return trip


# ============ Lookup ============

def find_trip(trips: list[Trip], trip_id: str) -> Trip:
    for trip in trips:
        if trip.id == trip_id:
            return trip
    raise TripNotFoundError(trip_id)


def _check_index(trip: Trip, index: int) -> None:
    if not 0 <= index < len(trip.legs):
        raise LegNotFoundError(trip.id, index)


def _status_key(key: StatusKey | str) -> StatusKey:
    try:
        return StatusKey(key)
    except ValueError:
        raise UnknownStatusKeyError(str(key)) from None


# ============ Trips ============

def create_trip(
    client: str,
    aircraft: str,
    *,
    trip_id: str | None = None,
    tags: list[str] | str | None = None,
    notes: str = "",
    start_date: date | None = None,
    end_date: date | None = None,
    flight_no: str = "",
    adep: str = "",
    ades: str = "",
    altn: str = "",
    std: str = "",
    sta: str = "",
) -> Trip:
    """Create a trip, optionally with a first leg.

    The first leg's ``std`` / ``sta`` are ``HHMM`` clock times on
    *start_date*; an arrival time earlier than the departure time lands
    on the next day. The leg is only added when at least one of its fields
    is filled in.

    *start_date* / *end_date* seed the range until a leg has valid times.
    """
    start = start_date or today_utc()
    end = end_date or start
    if end < start:
        raise InvalidTripError(f"end_date {end} is before start_date {start}")

    first_leg = migrate_leg_payload({
        "flight_no": flight_no,
        "adep": adep,
        "ades": ades,
        "altn": altn,
        "day": start.isoformat(),
        "std": std,
        "sta": sta,
    })

    data: dict[str, Any] = {
        "client": client,
        "aircraft": aircraft,
        "tags": tags,
        "notes": notes,
        "start_date": start,
        "end_date": end,
        "legs": [],
    }
    if trip_id and trip_id.strip():
        data["id"] = trip_id.strip()

    try:
        trip = Trip.model_validate(data)
        leg = Leg.model_validate(first_leg)
    except ValidationError as exc:
        raise InvalidTripError(str(exc)) from exc

    if leg.flight_no or leg.adep or leg.ades or leg.std_utc or leg.sta_utc:
        trip.legs.append(leg)
    return _touch(trip)


def set_trip_notes(trip: Trip, notes: str | None) -> Trip:
    trip.notes = notes or ""
    return _touch(trip)


def set_trip_tags(trip: Trip, tags: list[str] | str | None) -> Trip:
    trip.tags = clean_tags(tags)
    return _touch(trip)


# ============ Legs ============

def create_blank_leg() -> Leg:
    """A leg with no schedule and every check at 'not started'."""
    return Leg()


def add_leg(trip: Trip) -> int:
    """Append a blank leg; returns its index."""
    trip.legs.append(create_blank_leg())
    _touch(trip)
    return len(trip.legs) - 1


def insert_leg_after(trip: Trip, index: int) -> int:
    """Insert a blank leg after *index* (``-1`` inserts first); returns its index."""
    if index != -1:
        _check_index(trip, index)
    position = index + 1
    trip.legs.insert(position, create_blank_leg())
    _touch(trip)
    return position


def remove_leg(trip: Trip, index: int) -> Leg:
    """Delete the leg at *index*; later legs shift down by one."""
    _check_index(trip, index)
    removed = trip.legs.pop(index)
    _touch(trip)
    return removed


def update_leg(trip: Trip, index: int, **changes: Any) -> Leg:
    """Edit schedule / routing fields of one leg.

    Only ``EDITABLE_LEG_FIELDS`` may change; an explicit ``None`` clears a
    field. When both times are set and the arrival is not after the
    departure, the arrival is moved forward one day (an overnight leg
    entered with clock times only).
    """
    _check_index(trip, index)
    unknown = set(changes) - EDITABLE_LEG_FIELDS
    if unknown:
        raise InvalidTripError(f"Fields not editable: {', '.join(sorted(unknown))}")

    current = trip.legs[index]
    data = current.model_dump()
    data.update(changes)
    try:
        leg = Leg.model_validate(data)
    except ValidationError as exc:
        raise InvalidTripError(str(exc)) from exc

    if leg.std_utc is not None and leg.sta_utc is not None and leg.sta_utc <= leg.std_utc:
        try:
            leg.sta_utc = leg.sta_utc + timedelta(days=1)
        except OverflowError:
            raise InvalidTripError(
                f"Arrival {leg.sta_utc.isoformat()} cannot move to the next day"
            ) from None

    trip.legs[index] = leg
    _touch(trip)
    return leg


def set_leg_status(
    trip: Trip, index: int, key: StatusKey | str, state: StatusState | str | None
) -> StatusCheck:
    """Change the state of one status check; unknown states read as not started."""
    _check_index(trip, index)
    status_key = _status_key(key)
    leg = trip.legs[index]
    check = leg.status[status_key.value]
    updated = StatusCheck(state=normalize_state(state), note=check.note)
    leg.status[status_key.value] = updated
    _touch(trip)
    return updated


def set_status_note(
    trip: Trip, index: int, key: StatusKey | str, note: str | None
) -> StatusCheck:
    _check_index(trip, index)
    status_key = _status_key(key)
    leg = trip.legs[index]
    check = leg.status[status_key.value]
    updated = StatusCheck(state=check.state, note=note or "")
    leg.status[status_key.value] = updated
    _touch(trip)
    return updated
