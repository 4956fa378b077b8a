"""Board render input: trip bars, lane-assigned leg segments, grouping.

Lanes are shared by every trip flown by the same aircraft, so two trips of
one registration that overlap on a day never draw on top of each other.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date

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
from tripboard.contracts.enums import BoardView
from tripboard.contracts.trip import Trip
from tripboard.services.lanes import assign_lanes, lane_count
from tripboard.services.segmenter import segment_trip
from tripboard.services.status import is_trip_blocked, leg_severity, trip_severity
from tripboard.services.trip_editor import normalize_trips
from tripboard.services.utc import format_day_header, format_zulu, today_utc


def trip_intersects_day(trip: Trip, day: date) -> bool:
    """Whether the trip's derived range covers *day*."""
    if trip.start_date is None or trip.end_date is None:
        return False
    return trip.start_date <= day <= trip.end_date


def trip_span_in_view(trip: Trip, days: list[date]) -> TripSpan | None:
    """Inclusive day indices of the trip bar, clipped to the window.

    ``None`` when the trip lies entirely outside *days*.
    """
    if not days or trip.start_date is None or trip.end_date is None:
        return None
    view_start, view_end = days[0], days[-1]
    if trip.end_date < view_start or trip.start_date > view_end:
        return None

    start = max(trip.start_date, view_start)
    end = min(trip.end_date, view_end)
    try:
        return TripSpan(start_index=days.index(start), end_index=days.index(end))
    except ValueError:
        # Non-contiguous day list that skips the clipped bound.
        return None


def lane_segments_by_aircraft_day(
    trips: Iterable[Trip], days: Iterable[date] | None = None
) -> dict[tuple[str, date], list[DaySegment]]:
    """Lane-assigned segments keyed by ``(aircraft, day)``.

    When *days* is given, only those days are laid out.
    """
    wanted = set(days) if days is not None else None
    grouped: dict[tuple[str, date], list[DaySegment]] = defaultdict(list)
    for trip in trips:
        for seg in segment_trip(trip, days=wanted):
            grouped[(trip.aircraft, seg.day)].append(seg)
    return {key: assign_lanes(segs) for key, segs in grouped.items()}


def trip_day_cells(trips: list[Trip], days: list[date]) -> list[TripDayCell]:
    """Answer, for every (trip, day) pair, the range flag and its segments."""
    normalize_trips(trips)
    laid_out = lane_segments_by_aircraft_day(trips, days)
    cells: list[TripDayCell] = []
    for trip in trips:
        for day in days:
            segments = [
                seg
                for seg in laid_out.get((trip.aircraft, day), [])
                if seg.trip_id == trip.id
            ]
            cells.append(
                TripDayCell(
                    trip_id=trip.id,
                    day=day,
                    in_range=trip_intersects_day(trip, day),
                    segments=segments,
                )
            )
    return cells


def build_groups(trips: Iterable[Trip]) -> list[tuple[str, list[tuple[str, list[Trip]]]]]:
    """Group trips by client, then registration, both sorted by name.

    Trips within a registration are ordered by ``start_date``.
    """
    by_client: dict[str, dict[str, list[Trip]]] = defaultdict(lambda: defaultdict(list))
    for trip in trips:
        by_client[trip.client][trip.aircraft].append(trip)

    groups = []
    for client in sorted(by_client):
        regs = by_client[client]
        groups.append((
            client,
            [
                (reg, sorted(regs[reg], key=lambda t: t.start_date or date.min))
                for reg in sorted(regs)
            ],
        ))
    return groups


def _aircraft_row(
    aircraft: str,
    trips: list[Trip],
    days: list[date],
    laid_out: dict[tuple[str, date], list[DaySegment]],
) -> AircraftRow:
    row_trip_ids = {trip.id for trip in trips}
    by_id = {trip.id: trip for trip in trips}

    bars = []
    for trip in trips:
        span = trip_span_in_view(trip, days)
        if span is None:
            continue
        bars.append(TripBar(
            trip_id=trip.id,
            client=trip.client,
            aircraft=trip.aircraft,
            tags=list(trip.tags),
            severity=trip_severity(trip),
            span=span,
        ))

    segments_by_day: dict[str, list[BoardSegment]] = {}
    for day in days:
        segs = [
            seg for seg in laid_out.get((aircraft, day), []) if seg.trip_id in row_trip_ids
        ]
        if not segs:
            continue
        rendered = []
        for seg in segs:
            leg = by_id[seg.trip_id].legs[seg.leg_index]
            rendered.append(BoardSegment(
                **seg.model_dump(),
                severity=leg_severity(leg),
                flight_no=leg.flight_no,
                adep=leg.adep,
                ades=leg.ades,
                std_label=format_zulu(leg.std_utc),
                sta_label=format_zulu(leg.sta_utc),
            ))
        segments_by_day[day.isoformat()] = rendered

    return AircraftRow(
        aircraft=aircraft,
        trip_ids=[trip.id for trip in trips],
        bars=bars,
        segments_by_day=segments_by_day,
        lane_count=max(
            (lane_count(segs) for segs in segments_by_day.values()), default=0
        ),
    )


def build_board(
    trips: list[Trip],
    days: list[date],
    view: BoardView | None = None,
    today: date | None = None,
) -> BoardLayout:
    """Full render input for *trips* over the window *days*.

    Trips are normalized first so the layout never reads a stale range.
    """
    normalize_trips(trips)
    laid_out = lane_segments_by_aircraft_day(trips, days)

    groups = []
    for client, regs in build_groups(trips):
        client_trips = [trip for _, reg_trips in regs for trip in reg_trips]
        groups.append(ClientGroup(
            client=client,
            trip_count=len(client_trips),
            has_blocked_trip=any(is_trip_blocked(trip) for trip in client_trips),
            rows=[_aircraft_row(reg, reg_trips, days, laid_out) for reg, reg_trips in regs],
        ))

    return BoardLayout(
        view=view,
        days=days,
        day_headers=[format_day_header(day) for day in days],
        today=today or today_utc(),
        groups=groups,
    )
