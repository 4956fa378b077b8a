"""Board layout models — calculated render input, never persisted.

Returned by ``GET /api/board`` and ``GET /api/board/cells``. Everything
here is recomputed from the trip list on each request.
"""

from datetime import date
from typing import Self

from pydantic import Field, model_validator

from tripboard.contracts.common import MINUTES_PER_DAY, FirestoreModel
from tripboard.contracts.enums import BoardView, Severity


class DaySegment(FirestoreModel):
    """Projection of one leg onto one UTC calendar day.

    ``lane`` is ``None`` until the lane assigner has placed the segment.
    """

    day: date
    start_minute: int = Field(..., ge=0, lt=MINUTES_PER_DAY)
    end_minute: int = Field(..., gt=0, le=MINUTES_PER_DAY)
    trip_id: str = ""
    leg_index: int = Field(default=0, ge=0)
    lane: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_minutes(self) -> Self:
        if self.end_minute <= self.start_minute:
            raise ValueError(
                f"end_minute ({self.end_minute}) must be after "
                f"start_minute ({self.start_minute})"
            )
        return self


class BoardSegment(DaySegment):
    """A lane-assigned segment with the colour of its leg."""

    severity: Severity
    flight_no: str = ""
    adep: str = ""
    ades: str = ""
    std_label: str = Field(default="", description="Departure, HHMMZ")
    sta_label: str = Field(default="", description="Arrival, HHMMZ")


class TripDayCell(FirestoreModel):
    """What the board shows for one trip on one day."""

    trip_id: str
    day: date
    in_range: bool = Field(..., description="Trip range covers this day (trip bar drawn)")
    segments: list[DaySegment] = Field(default_factory=list)


class TripSpan(FirestoreModel):
    """Trip bar position, as inclusive indices into the view's day list."""

    start_index: int = Field(..., ge=0)
    end_index: int = Field(..., ge=0)


class TripBar(FirestoreModel):
    trip_id: str
    client: str
    aircraft: str
    tags: list[str] = Field(default_factory=list)
    severity: Severity
    span: TripSpan


class AircraftRow(FirestoreModel):
    """One registration row: trip bars plus per-day leg segments."""

    aircraft: str
    trip_ids: list[str] = Field(default_factory=list)
    bars: list[TripBar] = Field(default_factory=list)
    segments_by_day: dict[str, list[BoardSegment]] = Field(default_factory=dict)
    lane_count: int = Field(default=0, ge=0)


class ClientGroup(FirestoreModel):
    client: str
    trip_count: int = Field(default=0, ge=0)
    has_blocked_trip: bool = False
    rows: list[AircraftRow] = Field(default_factory=list)


class BoardLayout(FirestoreModel):
    """Complete render input for one calendar window."""

    view: BoardView | None = None
    days: list[date]
    day_headers: list[str] = Field(default_factory=list)
    today: date
    groups: list[ClientGroup] = Field(default_factory=list)
