"""Status aggregation: per-check states → leg severity → trip severity.

Precedence is red > amber > green; grey means "nothing to aggregate" and
never masks or outranks a real signal. Everything here is pure and cheap,
so callers recompute on every read instead of caching a colour.
"""

from __future__ import annotations

from collections.abc import Iterable

from tripboard.contracts.enums import Severity, StatusState
from tripboard.contracts.leg import Leg
from tripboard.contracts.trip import Trip

STATE_SEVERITY: dict[StatusState, Severity] = {
    StatusState.NOT_REQUIRED: Severity.GREY,
    StatusState.NOT_STARTED: Severity.RED,
    StatusState.IN_PROGRESS: Severity.AMBER,
    StatusState.OWN_MISSING_INFO: Severity.AMBER,
    StatusState.COMPLETE: Severity.GREEN,
    StatusState.OWN_COMPLETE: Severity.GREEN,
}


def normalize_state(value: StatusState | str | None) -> StatusState:
    """Map a raw state to ``StatusState``; unknown values read as not started."""
    return StatusState(value)


def severity_of_state(value: StatusState | str | None) -> Severity:
    return STATE_SEVERITY[normalize_state(value)]


def worst_severity(severities: Iterable[Severity | str]) -> Severity:
    """Combine severities with red > amber > green, ignoring grey."""
    present = {Severity(s) for s in severities} - {Severity.GREY}
    if not present:
        return Severity.GREY
    if Severity.RED in present:
        return Severity.RED
    if Severity.AMBER in present:
        return Severity.AMBER
    return Severity.GREEN


def severity_of_states(states: Iterable[StatusState | str | None]) -> Severity:
    """Summarize a collection of check states; not-required checks are skipped."""
    return worst_severity(severity_of_state(state) for state in states)


def leg_severity(leg: Leg) -> Severity:
    return severity_of_states(check.state for check in leg.status.values())


def trip_severity(trip: Trip) -> Severity:
    """Worst leg severity of *trip*; grey when it has no legs or no signal."""
    if not trip.legs:
        return Severity.GREY
    return worst_severity(leg_severity(leg) for leg in trip.legs)


def is_trip_blocked(trip: Trip) -> bool:
    return trip_severity(trip) == Severity.RED
