"""FastAPI application factory."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# Load .env file from project root (must be before other imports)
load_dotenv()
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from tripboard.api.routes import board, data, trips  # noqa: E402
from tripboard.persistence.errors import InvalidTripPayloadError  # noqa: E402
from tripboard.persistence.repositories.trip_repo import TripRepository  # noqa: E402
from tripboard.services.board_session import BoardSession  # noqa: E402
from tripboard.services.trip_editor import (  # noqa: E402
    InvalidTripError,
    LegNotFoundError,
    TripNotFoundError,
    UnknownStatusKeyError,
)

logger = logging.getLogger(__name__)


def board_id_from_env() -> str:
    return os.environ.get("TRIPBOARD_BOARD_ID", "default").strip() or "default"


def seed_demo_from_env() -> bool:
    return os.environ.get("TRIPBOARD_SEED_DEMO", "1") != "0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the board's trip list once; it stays in memory afterwards."""
    session = BoardSession(
        TripRepository(board_id_from_env()),
        seed_demo=seed_demo_from_env(),
    )
    await session.load()
    logger.info(
        "Board %s ready with %d trips", session.repo.board_id, len(session.trips)
    )
    app.state.board_session = session
    yield


app = FastAPI(
    title="Trip Status Board API",
    description="UTC trip timeline and per-leg operational status",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Persisted"],
)

app.include_router(board.router, prefix="/api")
app.include_router(trips.router, prefix="/api")
app.include_router(data.router, prefix="/api")


@app.exception_handler(TripNotFoundError)
@app.exception_handler(LegNotFoundError)
async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(UnknownStatusKeyError)
@app.exception_handler(InvalidTripError)
@app.exception_handler(InvalidTripPayloadError)
async def unprocessable_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/api/health")
async def health(request: Request):
    session = request.app.state.board_session
    return {
        "status": "ok",
        "board_id": session.repo.board_id,
        "trip_count": len(session.trips),
        "mirror_enabled": session.mirror_enabled,
    }
