"""Trip — an ordered sequence of legs flown by one aircraft for one client.

Stored at: ``/boards/{board_id}/trips/{trip_id}``
"""

import time
from datetime import date, datetime
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from tripboard.contracts.common import FirestoreModel, as_utc
from tripboard.contracts.leg import Leg


# Also a Firestore document id, so no "/" and no leading "." or "_".
TRIP_ID_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9_.-]*$"
TRIP_ID_MAX_LENGTH = 128


def new_trip_id() -> str:
    """Time-based trip identifier: ``TRIP-<epoch milliseconds>``."""
    return f"TRIP-{int(time.time() * 1000)}"


def clean_tags(value: Any) -> list[str]:
    """Accept a list or a comma separated string; drop blanks."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(tag).strip() for tag in value if str(tag).strip()]


class Trip(FirestoreModel):
    """A trip on the board.

    **Persisted fields** (Firestore source of truth):
    - id, client, aircraft, tags, notes, legs, updated_at
    - start_date, end_date (stored so that a trip whose legs are all
      incomplete keeps the range it last had)

    **Derived fields** (recomputed from legs on every mutation and load):
    - start_date / end_date, see ``services.trip_range``

    ``legs`` is in flight order, which is not necessarily chronological.
    """

    id: str = Field(
        default_factory=new_trip_id,
        max_length=TRIP_ID_MAX_LENGTH,
        pattern=TRIP_ID_PATTERN,
        description="Firestore document id: letters, digits, dot, dash, underscore",
    )
    client: str = Field(..., min_length=1, description="Client the trip is flown for")
    aircraft: str = Field(..., min_length=1, description="Aircraft registration")
    tags: list[str] = Field(default_factory=list)
    notes: str = ""
    legs: list[Leg] = Field(default_factory=list)

    start_date: date | None = Field(
        default=None,
        validation_alias=AliasChoices("start_date", "startDate"),
        description="UTC date of the earliest departure",
    )
    end_date: date | None = Field(
        default=None,
        validation_alias=AliasChoices("end_date", "endDate"),
        description="UTC date of the latest arrival",
    )
    updated_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("updated_at", "updatedAt")
    )

    @field_validator("client", "aircraft", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> list[str]:
        return clean_tags(v)

    @field_validator("notes", mode="before")
    @classmethod
    def default_notes(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_date(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("updated_at")
    @classmethod
    def updated_to_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None
