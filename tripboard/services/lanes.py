"""Greedy lane assignment for overlapping segments of one aircraft-day."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from tripboard.contracts.board import DaySegment

S = TypeVar("S", bound=DaySegment)


def assign_lanes(segments: Iterable[S]) -> list[S]:
    """Place segments into the fewest non-overlapping lanes.

    Segments are sorted by ``start_minute`` (stable, so ties keep input
    order) and each goes to the lowest lane whose last segment ended at or
    before its start. Touching segments (``end == start``) share a lane.

    Returns copies with ``lane`` set, in sorted order; the input is not
    modified.
    """
    ordered = sorted(segments, key=lambda seg: seg.start_minute)
    lane_ends: list[int] = []
    placed: list[S] = []

    for seg in ordered:
        for lane, end in enumerate(lane_ends):
            if end <= seg.start_minute:
                lane_ends[lane] = seg.end_minute
                break
        else:
            lane = len(lane_ends)
            lane_ends.append(seg.end_minute)
        placed.append(seg.model_copy(update={"lane": lane}))

    return placed


def lane_count(segments: Iterable[DaySegment]) -> int:
    """Number of lanes used by already-assigned segments."""
    lanes = [seg.lane for seg in segments if seg.lane is not None]
    return max(lanes) + 1 if lanes else 0
