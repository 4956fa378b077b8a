"""Enumerations shared across all trip board contracts."""

from enum import Enum


class StatusState(str, Enum):
    """State of a single per-leg status check."""
    NOT_REQUIRED = "not_reqd"
    OWN_MISSING_INFO = "own_missing_info"
    OWN_COMPLETE = "own_complete"
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"

    @classmethod
    def _missing_(cls, value: object) -> "StatusState":
        # Unknown values must never read as done.
        if isinstance(value, str):
            cleaned = value.strip().lower()
            for member in cls:
                if member.value == cleaned:
                    return member
        return cls.NOT_STARTED


STATUS_LABELS: dict[StatusState, str] = {
    StatusState.NOT_REQUIRED: "NOT REQD",
    StatusState.OWN_MISSING_INFO: "OWN - Missing Info",
    StatusState.OWN_COMPLETE: "OWN - Complete",
    StatusState.NOT_STARTED: "NOT STARTED",
    StatusState.IN_PROGRESS: "IN PROGRESS",
    StatusState.COMPLETE: "COMPLETE",
}


class StatusKey(str, Enum):
    """Operational checks tracked on every leg (display order)."""
    TIMES = "times"
    HANDLING = "handling"
    FLIGHT_PLAN = "flightPlan"
    CREW_PAX = "crewPax"
    APIS_GAR = "apisGar"
    FUEL = "fuel"
    CATERING = "catering"
    WX_NOTAM = "wxNotam"
    CLIENT_UPDATE = "clientUpdate"


STATUS_KEY_LABELS: dict[StatusKey, str] = {
    StatusKey.TIMES: "Times confirmed (STD/STA)",
    StatusKey.HANDLING: "Handling / Slot / PPR OK",
    StatusKey.FLIGHT_PLAN: "Flight plan filed / released",
    StatusKey.CREW_PAX: "Crew / Pax ok for leg",
    StatusKey.APIS_GAR: "APIS / GAR (if applicable)",
    StatusKey.FUEL: "Fuel confirmed",
    StatusKey.CATERING: "Catering confirmed (if applicable)",
    StatusKey.WX_NOTAM: "WX / NOTAM reviewed",
    StatusKey.CLIENT_UPDATE: "Client update sent for leg",
}


class Severity(str, Enum):
    """Four-level summary colour for legs and trips."""
    GREY = "grey"
    RED = "red"
    AMBER = "amber"
    GREEN = "green"


class BoardView(str, Enum):
    WEEK = "week"
    MONTH = "month"
