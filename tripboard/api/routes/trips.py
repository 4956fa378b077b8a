"""Trip, leg and status-check endpoints."""

from __future__ import annotations

from datetime import date, datetime

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field

from tripboard.api.deps import get_board_session, mark_persisted
from tripboard.contracts.enums import STATUS_KEY_LABELS, STATUS_LABELS, StatusKey, StatusState
from tripboard.contracts.trip import Trip
from tripboard.services import trip_editor
from tripboard.services.board_session import BoardSession
from tripboard.services.status import leg_severity, severity_of_state, trip_severity

router = APIRouter(prefix="/trips", tags=["trips"])


class TripCreate(BaseModel):
    client: str = Field(..., min_length=1)
    aircraft: str = Field(..., min_length=1, description="Registration")
    id: str | None = None
    tags: list[str] | str | None = None
    notes: str = ""
    start_date: date | None = None
    end_date: date | None = None
    flight_no: str = ""
    adep: str = ""
    ades: str = ""
    altn: str = ""
    std: str = Field(default="", description="First leg departure, HHMM UTC on start_date")
    sta: str = Field(default="", description="First leg arrival, HHMM UTC")


class TripPatch(BaseModel):
    notes: str | None = None
    tags: list[str] | str | None = None


class LegPatch(BaseModel):
    flight_no: str | None = None
    adep: str | None = None
    ades: str | None = None
    altn: str | None = None
    std_utc: datetime | None = None
    sta_utc: datetime | None = None


class StatusPatch(BaseModel):
    state: str | None = Field(default=None, description="Unknown states read as not_started")
    note: str | None = None


def _trip_payload(trip: Trip) -> dict:
    data = trip.to_firestore()
    data["severity"] = trip_severity(trip).value
    return data


# ------------------------------------------------------------------
# Trips
# ------------------------------------------------------------------


@router.get("")
async def list_trips(session: BoardSession = Depends(get_board_session)) -> list[dict]:
    trip_editor.normalize_trips(session.trips)
    return [_trip_payload(t) for t in session.trips]


@router.post("", status_code=201)
async def create_trip(
    body: TripCreate,
    response: Response,
    session: BoardSession = Depends(get_board_session),
) -> dict:
    trip = trip_editor.create_trip(
        body.client,
        body.aircraft,
        trip_id=body.id,
        tags=body.tags,
        notes=body.notes,
        start_date=body.start_date,
        end_date=body.end_date,
        flight_no=body.flight_no,
        adep=body.adep,
        ades=body.ades,
        altn=body.altn,
        std=body.std,
        sta=body.sta,
    )

    def _append(trips: list[Trip]) -> Trip:
        if any(t.id == trip.id for t in trips):
            raise trip_editor.InvalidTripError(f"Trip {trip.id} already exists")
        trips.append(trip)
        return trip

    outcome = await session.mutate(_append)
    mark_persisted(response, outcome)
    return _trip_payload(outcome.value)


@router.get("/{trip_id}")
async def get_trip(
    trip_id: str,
    session: BoardSession = Depends(get_board_session),
) -> dict:
    trip = trip_editor.normalize_trip(trip_editor.find_trip(session.trips, trip_id))
    return _trip_payload(trip)


@router.patch("/{trip_id}")
async def update_trip(
    trip_id: str,
    body: TripPatch,
    response: Response,
    session: BoardSession = Depends(get_board_session),
) -> dict:
    changes = body.model_dump(exclude_unset=True)

    def _edit(trips: list[Trip]) -> Trip:
        trip = trip_editor.find_trip(trips, trip_id)
        if "notes" in changes:
            trip_editor.set_trip_notes(trip, changes["notes"])
        if "tags" in changes:
            trip_editor.set_trip_tags(trip, changes["tags"])
        return trip

    outcome = await session.mutate(_edit)
    mark_persisted(response, outcome)
    return _trip_payload(outcome.value)


@router.get("/{trip_id}/status")
async def get_trip_status(
    trip_id: str,
    session: BoardSession = Depends(get_board_session),
) -> dict:
    """Trip and per-leg severities, with every check's state and label."""
    trip = trip_editor.find_trip(session.trips, trip_id)
    legs = []
    for index, leg in enumerate(trip.legs):
        checks = {}
        for key in StatusKey:
            check = leg.status[key.value]
            state = StatusState(check.state)
            checks[key.value] = {
                "label": STATUS_KEY_LABELS[key],
                "state": state.value,
                "state_label": STATUS_LABELS[state],
                "severity": severity_of_state(state).value,
                "note": check.note,
            }
        legs.append({
            "index": index,
            "flight_no": leg.flight_no,
            "severity": leg_severity(leg).value,
            "checks": checks,
        })
    return {
        "trip_id": trip.id,
        "severity": trip_severity(trip).value,
        "legs": legs,
    }


# ------------------------------------------------------------------
# Legs
# ------------------------------------------------------------------


@router.post("/{trip_id}/legs", status_code=201)
async def add_leg(
    trip_id: str,
    response: Response,
    after: int | None = None,
    session: BoardSession = Depends(get_board_session),
) -> dict:
    """Append a blank leg, or insert one after leg ``after``."""

    def _add(trips: list[Trip]) -> tuple[Trip, int]:
        trip = trip_editor.find_trip(trips, trip_id)
        if after is None:
            return trip, trip_editor.add_leg(trip)
        return trip, trip_editor.insert_leg_after(trip, after)

    outcome = await session.mutate(_add)
    mark_persisted(response, outcome)
    trip, index = outcome.value
    return {"index": index, "trip": _trip_payload(trip)}


@router.patch("/{trip_id}/legs/{index}")
async def update_leg(
    trip_id: str,
    index: int,
    body: LegPatch,
    response: Response,
    session: BoardSession = Depends(get_board_session),
) -> dict:
    changes = body.model_dump(exclude_unset=True)

    def _edit(trips: list[Trip]) -> Trip:
        trip = trip_editor.find_trip(trips, trip_id)
        trip_editor.update_leg(trip, index, **changes)
        return trip

    outcome = await session.mutate(_edit)
    mark_persisted(response, outcome)
    return _trip_payload(outcome.value)


@router.delete("/{trip_id}/legs/{index}")
async def delete_leg(
    trip_id: str,
    index: int,
    response: Response,
    session: BoardSession = Depends(get_board_session),
) -> dict:
    def _remove(trips: list[Trip]) -> Trip:
        trip = trip_editor.find_trip(trips, trip_id)
        trip_editor.remove_leg(trip, index)
        return trip

    outcome = await session.mutate(_remove)
    mark_persisted(response, outcome)
    return _trip_payload(outcome.value)


@router.patch("/{trip_id}/legs/{index}/status/{key}")
async def update_status_check(
    trip_id: str,
    index: int,
    key: str,
    body: StatusPatch,
    response: Response,
    session: BoardSession = Depends(get_board_session),
) -> dict:
    """Change the state and/or note of one status check."""
    changes = body.model_dump(exclude_unset=True)

    def _edit(trips: list[Trip]) -> dict:
        trip = trip_editor.find_trip(trips, trip_id)
        if not changes:
            raise trip_editor.InvalidTripError("Provide a state and/or a note")
        check = None
        if "state" in changes:
            check = trip_editor.set_leg_status(trip, index, key, changes["state"])
        if "note" in changes:
            check = trip_editor.set_status_note(trip, index, key, changes["note"])
        leg = trip.legs[index]
        return {
            "key": key,
            "state": check.state,
            "note": check.note,
            "leg_severity": leg_severity(leg).value,
            "trip_severity": trip_severity(trip).value,
        }

    outcome = await session.mutate(_edit)
    mark_persisted(response, outcome)
    return outcome.value
