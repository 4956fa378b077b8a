"""Board render-input endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from tripboard.api.deps import get_board_session
from tripboard.contracts.enums import BoardView
from tripboard.services.board import build_board, trip_day_cells
from tripboard.services.board_session import BoardSession
from tripboard.services.calendar_window import shift_anchor, view_days
from tripboard.services.utc import add_days, date_range, today_utc

router = APIRouter(prefix="/board", tags=["board"])


@router.get("")
async def get_board(
    view: BoardView = BoardView.WEEK,
    anchor: date | None = None,
    session: BoardSession = Depends(get_board_session),
) -> dict:
    """Layout for the week / rolling month around *anchor* (default today, UTC)."""
    anchor = anchor or today_utc()
    days = view_days(view, anchor)
    layout = build_board(session.trips, days, view=view)
    data = layout.to_firestore()
    data["anchor"] = anchor.isoformat()
    data["previous_anchor"] = shift_anchor(view, anchor, -1).isoformat()
    data["next_anchor"] = shift_anchor(view, anchor, 1).isoformat()
    return data


@router.get("/cells")
async def get_cells(
    start: date,
    days: int = Query(default=7, ge=1, le=62),
    session: BoardSession = Depends(get_board_session),
) -> list[dict]:
    """Range flag and lane-assigned segments for every (trip, day) pair."""
    window = date_range(start, add_days(start, days - 1))
    return [cell.to_firestore() for cell in trip_day_cells(session.trips, window)]
