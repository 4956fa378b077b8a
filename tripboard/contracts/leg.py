"""Leg — one flight segment of a trip, with its operational status checks.

Legs are embedded in their owning ``Trip`` document and have no identity
outside it: a leg is addressed by its index in ``Trip.legs``.
"""

import re
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from tripboard.contracts.common import FirestoreModel, as_utc
from tripboard.contracts.enums import StatusKey, StatusState

_ICAO_STRIP = re.compile(r"[^A-Z0-9]")


def normalize_icao(value: str | None) -> str:
    """Upper-case, strip non alphanumerics, keep at most 4 characters."""
    return _ICAO_STRIP.sub("", (value or "").upper())[:4]


class StatusCheck(FirestoreModel):
    """State and free-text note of one status check on a leg."""

    state: StatusState = StatusState.NOT_STARTED
    note: str = ""

    @field_validator("state", mode="before")
    @classmethod
    def coerce_state(cls, v: Any) -> StatusState:
        return StatusState(v)

    @field_validator("note", mode="before")
    @classmethod
    def default_note(cls, v: Any) -> str:
        return "" if v is None else str(v)


def default_status() -> dict[str, StatusCheck]:
    """Return every status key initialized to 'not started'."""
    return {key.value: StatusCheck() for key in StatusKey}


class Leg(FirestoreModel):
    """A single scheduled flight segment.

    The schedule is the half-open UTC interval ``[std_utc, sta_utc)``,
    truncated to whole minutes.
    Either endpoint may be missing while the leg is being edited; an
    incomplete or inverted interval is a normal state, not an error, and
    simply produces nothing on the board.

    ``status`` always holds exactly one ``StatusCheck`` per ``StatusKey``
    once validated: missing keys are backfilled and unknown keys dropped.
    """

    flight_no: str = Field(
        default="", validation_alias=AliasChoices("flight_no", "flightNo")
    )
    adep: str = Field(default="", description="Departure aerodrome ICAO")
    ades: str = Field(default="", description="Destination aerodrome ICAO")
    altn: str = Field(default="", description="Alternate aerodrome ICAO")
    std_utc: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("std_utc", "stdUtc"),
        description="Scheduled time of departure (UTC)",
    )
    sta_utc: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("sta_utc", "staUtc"),
        description="Scheduled time of arrival (UTC)",
    )
    status: dict[str, StatusCheck] = Field(default_factory=default_status)

    @field_validator("flight_no", mode="before")
    @classmethod
    def strip_flight_no(cls, v: Any) -> str:
        return (v or "").strip()

    @field_validator("adep", "ades", "altn", mode="before")
    @classmethod
    def clean_icao(cls, v: Any) -> str:
        return normalize_icao(v)

    @field_validator("std_utc", "sta_utc", mode="before")
    @classmethod
    def parse_instant(cls, v: Any) -> datetime | None:
        if v is None or isinstance(v, datetime):
            return v
        text = str(v).strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None

    @field_validator("std_utc", "sta_utc")
    @classmethod
    def to_utc(cls, v: datetime | None) -> datetime | None:
        # Whole minutes, the resolution of day segments.
        if v is None:
            return None
        try:
            return as_utc(v).replace(second=0, microsecond=0)
        except OverflowError as exc:
            raise ValueError(f"{v.isoformat()} is out of the UTC date range") from exc

    @field_validator("status", mode="before")
    @classmethod
    def backfill_status(cls, v: Any) -> dict[str, Any]:
        raw = v if isinstance(v, dict) else {}
        status: dict[str, Any] = {}
        for key in StatusKey:
            entry = raw.get(key.value)
            if isinstance(entry, StatusCheck):
                status[key.value] = entry
            elif isinstance(entry, dict):
                status[key.value] = {
                    "state": entry.get("state"),
                    "note": entry.get("note"),
                }
            elif isinstance(entry, str):
                status[key.value] = {"state": entry, "note": ""}
            else:
                status[key.value] = StatusCheck()
        return status

    @property
    def has_valid_interval(self) -> bool:
        """True when both endpoints are set and ``sta_utc > std_utc``."""
        return (
            self.std_utc is not None
            and self.sta_utc is not None
            and self.sta_utc > self.std_utc
        )
