"""Trip board data contracts — Pydantic v2 models.

Data authority
--------------

**Firestore** (durable mirror of the in-memory board):
- ``Trip`` (with embedded ``Leg`` and ``StatusCheck``) —
  ``/boards/{board_id}/trips/{trip_id}``

**In memory** (source of truth while the service runs):
- the ordered trip list held by ``BoardSession``

Calculated (never persisted)
----------------------------
- ``DaySegment`` / ``BoardSegment`` — a leg projected onto one UTC day
- ``TripDayCell``, ``TripSpan``, ``TripBar``, ``AircraftRow``,
  ``ClientGroup``, ``BoardLayout`` — board render input
- ``Severity`` of legs and trips
"""

from tripboard.contracts.enums import (
    STATUS_KEY_LABELS,
    STATUS_LABELS,
    BoardView,
    Severity,
    StatusKey,
    StatusState,
)
from tripboard.contracts.common import MINUTES_PER_DAY, FirestoreModel, as_utc
from tripboard.contracts.result import ServiceError, ServiceResult
from tripboard.contracts.leg import Leg, StatusCheck, default_status, normalize_icao
from tripboard.contracts.trip import Trip, new_trip_id
from tripboard.contracts.board import (
    AircraftRow,
    BoardLayout,
    BoardSegment,
    ClientGroup,
    DaySegment,
    TripBar,
    TripDayCell,
    TripSpan,
)

__all__ = [
    # Enums
    "BoardView",
    "Severity",
    "StatusKey",
    "StatusState",
    "STATUS_KEY_LABELS",
    "STATUS_LABELS",
    # Common
    "FirestoreModel",
    "MINUTES_PER_DAY",
    "as_utc",
    # Result
    "ServiceError",
    "ServiceResult",
    # Domain models
    "Leg",
    "StatusCheck",
    "default_status",
    "normalize_icao",
    "Trip",
    "new_trip_id",
    # Board layout
    "AircraftRow",
    "BoardLayout",
    "BoardSegment",
    "ClientGroup",
    "DaySegment",
    "TripBar",
    "TripDayCell",
    "TripSpan",
]
