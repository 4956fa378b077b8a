"""Tests for BoardSession: load, mutate, mirror, import and reset."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from tripboard.contracts.trip import Trip
from tripboard.persistence.errors import InvalidTripPayloadError
from tripboard.persistence.repositories.trip_repo import TripRepository
from tripboard.services.board_session import BoardSession, parse_trip_list
from tripboard.services.demo_data import DEMO_TRIPS
from tripboard.services.trip_editor import TripNotFoundError
from tests.persistence.fake_firestore import FailingWritesClient, FakeFirestoreClient


@pytest.fixture
def fake_client():
    return FakeFirestoreClient()


@pytest.fixture(autouse=True)
def patch_firestore(fake_client):
    with patch(
        "tripboard.persistence.repositories.base.get_firestore_client",
        return_value=fake_client,
    ):
        yield


def _session(seed_demo: bool = True) -> BoardSession:
    return BoardSession(TripRepository("test"), seed_demo=seed_demo)


class TestLoad:
    async def test_never_saved_uses_demo(self):
        session = _session()
        trips = await session.load()
        assert [t.id for t in trips] == [raw["id"] for raw in DEMO_TRIPS]
        assert session.mirror_enabled

    async def test_never_saved_without_seed(self):
        session = _session(seed_demo=False)
        assert await session.load() == []

    async def test_saved_empty_stays_empty(self):
        await TripRepository("test").save([])
        assert await _session().load() == []

    async def test_unreadable_store_disables_mirroring(self):
        session = _session()
        with patch(
            "tripboard.persistence.repositories.base.get_firestore_client",
            side_effect=RuntimeError("no credentials"),
        ):
            await session.load()
        assert not session.mirror_enabled
        assert len(session.trips) == len(DEMO_TRIPS)

        outcome = await session.mutate(lambda trips: trips.pop())
        assert not outcome.persisted
        assert outcome.saved.error.code == "mirror_disabled"
        assert len(session.trips) == len(DEMO_TRIPS) - 1


class TestMutate:
    async def test_mutation_is_mirrored(self):
        session = _session()
        await session.load()
        outcome = await session.mutate(
            lambda trips: trips.append(Trip(id="NEW", client="C", aircraft="R")) or len(trips)
        )
        assert outcome.persisted
        assert outcome.value == len(DEMO_TRIPS) + 1

        reloaded = await TripRepository("test").load()
        assert [t.id for t in reloaded][-1] == "NEW"

    async def test_failed_save_keeps_mutation(self):
        session = _session()
        await session.load()
        with patch(
            "tripboard.persistence.repositories.base.get_firestore_client",
            return_value=FailingWritesClient(),
        ):
            outcome = await session.mutate(lambda trips: trips.pop())
        assert not outcome.persisted
        assert [t.id for t in session.trips] == [DEMO_TRIPS[0]["id"]]

    async def test_failed_operation_saves_nothing(self, fake_client):
        session = _session()
        await session.load()

        def _boom(trips):
            raise TripNotFoundError("nope")

        with pytest.raises(TripNotFoundError):
            await session.mutate(_boom)
        assert fake_client.store == {}


class TestReplaceAndReset:
    async def test_replace(self):
        session = _session()
        await session.load()
        outcome = await session.replace([Trip(id="ONLY", client="C", aircraft="R")])
        assert outcome.value == 1
        assert [t.id for t in session.trips] == ["ONLY"]
        assert [t.id for t in await TripRepository("test").load()] == ["ONLY"]

    async def test_reset_clears_store_and_reseeds(self):
        session = _session()
        await session.load()
        await session.replace([])
        outcome = await session.reset()
        assert outcome.persisted
        assert outcome.value == len(DEMO_TRIPS)
        assert await TripRepository("test").load() is None


class TestParseTripList:
    def test_bare_list(self):
        trips = parse_trip_list([{"id": "T1", "client": "C", "aircraft": "R"}])
        assert trips[0].id == "T1"
        assert trips[0].start_date is not None

    def test_wrapped_list(self):
        assert len(parse_trip_list({"trips": DEMO_TRIPS})) == 2

    def test_legacy_legs(self):
        trips = parse_trip_list([{
            "client": "C",
            "aircraft": "R",
            "legs": [{"day": "2026-02-26", "std": "2300", "sta": "0130"}],
        }])
        assert trips[0].end_date.isoformat() == "2026-02-27"

    def test_not_a_list(self):
        with pytest.raises(InvalidTripPayloadError):
            parse_trip_list({"client": "C"})

    def test_invalid_item_reports_index(self):
        with pytest.raises(InvalidTripPayloadError) as exc_info:
            parse_trip_list([{"client": "C", "aircraft": "R"}, {"client": "C"}])
        assert exc_info.value.index == 1

    def test_non_object_item(self):
        with pytest.raises(InvalidTripPayloadError):
            parse_trip_list(["TRIP-1"])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(InvalidTripPayloadError, match="duplicate") as exc_info:
            parse_trip_list([
                {"id": "T1", "client": "C", "aircraft": "R"},
                {"id": "T1", "client": "D", "aircraft": "S"},
            ])
        assert exc_info.value.index == 1
