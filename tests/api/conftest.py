"""Shared fixtures for API tests."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from tripboard.api.app import app
from tripboard.persistence.repositories.trip_repo import TripRepository
from tripboard.services.board_session import BoardSession
from tests.persistence.fake_firestore import FakeFirestoreClient

TEST_BOARD_ID = "api-test-board"


@pytest.fixture
def fake_client():
    """In-memory Firestore fake shared by the session's repository."""
    return FakeFirestoreClient()


@pytest.fixture
async def test_app(fake_client):
    """FastAPI app with a freshly loaded, demo-seeded board session."""
    with patch(
        "tripboard.persistence.repositories.base.get_firestore_client",
        return_value=fake_client,
    ):
        # ASGITransport does not run the lifespan
        session = BoardSession(TripRepository(TEST_BOARD_ID), seed_demo=True)
        await session.load()
        app.state.board_session = session
        yield app


@pytest.fixture
async def client(test_app):
    """httpx AsyncClient wired to the test app."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
