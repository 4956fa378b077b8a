"""Repository for the board's trip list."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from tripboard.contracts.result import ServiceResult
from tripboard.contracts.trip import Trip
from tripboard.persistence.errors import PersistenceError
from tripboard.persistence.repositories.base import BaseRepository
from tripboard.services.migration import migrate_trip_payload
from tripboard.services.trip_editor import normalize_trips

logger = logging.getLogger(__name__)


class TripRepository(BaseRepository[Trip]):
    """Durable mirror of one board's ordered trip list.

    The board document (``/boards/{board_id}``) records when the list was
    last saved, which tells "never saved" (``load()`` returns ``None``)
    apart from "saved empty".
    """

    def __init__(self, board_id: str = "default"):
        super().__init__(Trip, "trips", board_id)

    def _hydrate(self, data: dict[str, Any]) -> Trip:
        return super()._hydrate(migrate_trip_payload(data))

    async def load(self) -> list[Trip] | None:
        """Return the stored trips, or ``None`` if this board was never saved.

        Legacy leg fields are migrated and every trip is normalized.
        Documents that fail validation are skipped with a warning.
        Storage errors raise ``PersistenceError``.
        """
        try:
            marker = await self._board_ref().get()
            if not marker.exists:
                return None
            documents = await self.ordered_documents()
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(f"Failed to load board {self.board_id}: {exc}") from exc

        trips: list[Trip] = []
        for data in documents:
            try:
                trips.append(self._hydrate(data))
            except ValidationError as exc:
                logger.warning("Skipping invalid trip %s: %s", data.get("id"), exc)

        logger.info("Loaded %d trips from board %s", len(trips), self.board_id)
        return normalize_trips(trips)

    async def save(self, trips: list[Trip]) -> ServiceResult[int]:
        """Mirror *trips* to the store. Never raises; failures are reported."""
        started = time.perf_counter()
        try:
            count = await self.replace_all(trips)
            await self._board_ref().set({
                "saved_at": datetime.now(tz=timezone.utc).isoformat(),
                "trip_count": count,
            })
        except Exception as exc:
            logger.exception("Saving board %s failed", self.board_id)
            return ServiceResult.fail("persist_failed", str(exc), board_id=self.board_id)

        duration_ms = (time.perf_counter() - started) * 1000
        logger.debug("Saved %d trips to board %s in %.1f ms", count, self.board_id, duration_ms)
        return ServiceResult.ok(count)

    async def clear(self) -> None:
        """Forget everything stored for this board (next load returns ``None``)."""
        try:
            await self.delete_all()
            await self._board_ref().delete()
        except Exception as exc:
            raise PersistenceError(f"Failed to clear board {self.board_id}: {exc}") from exc
        logger.info("Cleared board %s", self.board_id)
