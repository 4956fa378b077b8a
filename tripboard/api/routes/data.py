"""Export / import / reset of the whole trip list."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Response

from tripboard.api.deps import get_board_session, mark_persisted
from tripboard.services.board_session import BoardSession, parse_trip_list
from tripboard.services.trip_editor import normalize_trips
from tripboard.services.utc import today_utc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["data"])


@router.get("/export")
async def export_trips(
    response: Response,
    session: BoardSession = Depends(get_board_session),
) -> list[dict]:
    """The full trip list as JSON, served as a downloadable file."""
    filename = f"trips-{today_utc().isoformat()}.json"
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return [trip.to_firestore() for trip in normalize_trips(session.trips)]


@router.post("/import")
async def import_trips(
    response: Response,
    payload: Any = Body(...),
    session: BoardSession = Depends(get_board_session),
) -> dict:
    """Replace the board with an exported (or legacy) trip list."""
    trips = parse_trip_list(payload)
    outcome = await session.replace(trips)
    mark_persisted(response, outcome)
    logger.info("Imported %d trips", outcome.value)
    return {"trip_count": outcome.value}


@router.post("/reset")
async def reset_trips(
    response: Response,
    session: BoardSession = Depends(get_board_session),
) -> dict:
    """Forget saved trips and return to the seed data."""
    outcome = await session.reset()
    mark_persisted(response, outcome)
    logger.info("Board reset to %d seed trips", outcome.value)
    return {"trip_count": outcome.value}
