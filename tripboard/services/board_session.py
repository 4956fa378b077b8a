"""In-memory trip list with best-effort mirroring to the store.

The session's list is the source of truth for every read. A mutation is
applied in memory first, then saved; a failed save is reported back to the
caller but never undoes the mutation.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from tripboard.contracts.result import ServiceResult
from tripboard.contracts.trip import Trip
from tripboard.persistence.errors import InvalidTripPayloadError, PersistenceError
from tripboard.persistence.repositories.trip_repo import TripRepository
from tripboard.services.demo_data import demo_trips
from tripboard.services.migration import migrate_trip_payload
from tripboard.services.trip_editor import normalize_trips

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass
class MutationOutcome(Generic[R]):
    """Value returned by the mutation plus the save result."""

    value: R
    saved: ServiceResult[int]

    @property
    def persisted(self) -> bool:
        return self.saved.success


def parse_trip_list(payload: Any) -> list[Trip]:
    """Validate an imported JSON document into normalized trips.

    Accepts a bare list of trips or ``{"trips": [...]}``. Legacy leg fields
    are migrated. Trip ids must be unique. Raises ``InvalidTripPayloadError``
    on anything else.
    """
    if isinstance(payload, dict) and "trips" in payload:
        payload = payload["trips"]
    if not isinstance(payload, list):
        raise InvalidTripPayloadError("Expected a JSON list of trips")

    trips: list[Trip] = []
    seen: set[str] = set()
    for index, raw in enumerate(payload):
        if not isinstance(raw, dict):
            raise InvalidTripPayloadError("not an object", index=index)
        try:
            trip = Trip.model_validate(migrate_trip_payload(raw))
        except ValidationError as exc:
            raise InvalidTripPayloadError(str(exc), index=index) from exc
        if trip.id in seen:
            raise InvalidTripPayloadError(f"duplicate id {trip.id}", index=index)
        seen.add(trip.id)
        trips.append(trip)
    return normalize_trips(trips)


class BoardSession:
    """Owns the board's trip list for the lifetime of the service.

    Mutations are serialized on a lock so at most one edit is in flight.
    """

    def __init__(self, repo: TripRepository, *, seed_demo: bool = True):
        self.repo = repo
        self.seed_demo = seed_demo
        self.trips: list[Trip] = []
        self.mirror_enabled = True
        self._lock = asyncio.Lock()

    def _seed(self) -> list[Trip]:
        return demo_trips() if self.seed_demo else []

    async def load(self) -> list[Trip]:
        """Load from the store, falling back to the seed when never saved.

        If the store cannot be read, the session runs on the seed with
        mirroring disabled so stored data is not overwritten.
        """
        try:
            stored = await self.repo.load()
        except PersistenceError as exc:
            logger.error("Board %s unreadable, mirroring disabled: %s", self.repo.board_id, exc)
            self.mirror_enabled = False
            stored = None
        else:
            self.mirror_enabled = True

        if stored is None:
            logger.info("No saved trips for board %s, using seed data", self.repo.board_id)
            stored = self._seed()
        self.trips = stored
        return self.trips

    async def _persist(self) -> ServiceResult[int]:
        if not self.mirror_enabled:
            return ServiceResult.fail(
                "mirror_disabled", "Store was unreadable at startup", board_id=self.repo.board_id
            )
        result = await self.repo.save(self.trips)
        if not result.success:
            logger.warning("Trip list not persisted: %s", result.error.message if result.error else "")
        return result

    async def mutate(self, operation: Callable[[list[Trip]], R]) -> MutationOutcome[R]:
        """Apply *operation* to the trip list, then mirror it.

        Exceptions from *operation* propagate before anything is saved.
        """
        async with self._lock:
            value = operation(self.trips)
            saved = await self._persist()
        return MutationOutcome(value=value, saved=saved)

    async def replace(self, trips: list[Trip]) -> MutationOutcome[int]:
        """Swap in a whole new trip list (import)."""

        def _swap(current: list[Trip]) -> int:
            current[:] = trips
            return len(trips)

        return await self.mutate(_swap)

    async def reset(self) -> MutationOutcome[int]:
        """Clear the store and go back to the seed data."""
        async with self._lock:
            try:
                await self.repo.clear()
            except PersistenceError as exc:
                logger.error("Reset could not clear board %s: %s", self.repo.board_id, exc)
                saved = ServiceResult.fail("clear_failed", str(exc), board_id=self.repo.board_id)
            else:
                saved = ServiceResult.ok(0)
            self.trips = self._seed()
        return MutationOutcome(value=len(self.trips), saved=saved)
