"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import Request, Response

from tripboard.services.board_session import BoardSession, MutationOutcome


def get_board_session(request: Request) -> BoardSession:
    """The process-wide session created at startup (``app.state``)."""
    return request.app.state.board_session


def mark_persisted(response: Response, outcome: MutationOutcome) -> None:
    """Tell the client whether the mutation reached the store."""
    response.headers["X-Persisted"] = "true" if outcome.persisted else "false"
