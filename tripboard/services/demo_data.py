"""Seed trips shown when the store has never been written."""

from __future__ import annotations

from typing import Any

from tripboard.contracts.trip import Trip
from tripboard.services.trip_editor import normalize_trips

DEMO_TRIPS: list[dict[str, Any]] = [
    {
        "id": "TRIP-2026-0142",
        "client": "Cartier Europe B.V.",
        "aircraft": "PHCBV",
        "tags": ["MED", "AOG"],
        "notes": "",
        "legs": [
            {
                "flight_no": "PH123",
                "adep": "EGSS",
                "ades": "LFPB",
                "altn": "LFPO",
                "std_utc": "2026-02-26T08:30:00Z",
                "sta_utc": "2026-02-26T10:30:00Z",
            },
            {
                "flight_no": "PH124",
                "adep": "LFPB",
                "ades": "EGSS",
                "altn": "EGGW",
                "std_utc": "2026-02-26T17:00:00Z",
                "sta_utc": "2026-02-26T18:45:00Z",
            },
        ],
        "updated_at": "2026-02-26T09:10:00Z",
    },
    {
        "id": "TRIP-2026-0146",
        "client": "Cartier Europe B.V.",
        "aircraft": "PHCFR",
        "tags": ["VIP"],
        "notes": "",
        "legs": [
            {
                "flight_no": "PH200",
                "adep": "EGGW",
                "ades": "EIDW",
                "altn": "EIME",
                "std_utc": "2026-02-27T11:00:00Z",
                "sta_utc": "2026-02-27T12:20:00Z",
            },
        ],
        "updated_at": "2026-02-26T09:15:00Z",
    },
]


def demo_trips() -> list[Trip]:
    """Fresh, normalized copies of the demo trips."""
    return normalize_trips([Trip.model_validate(raw) for raw in DEMO_TRIPS])
