"""Tests for legacy day/std/sta leg migration."""

from datetime import date, datetime, timezone

import pytest

from tripboard.contracts.leg import Leg
from tripboard.services.migration import (
    legacy_to_instant,
    migrate_leg_payload,
    migrate_trip_payload,
    parse_hhmm,
)


class TestParseHhmm:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("0830", (8, 30)),
            ("08:30", (8, 30)),
            ("830", (8, 30)),
            ("2359", (23, 59)),
            ("0000", (0, 0)),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_hhmm(text) == expected

    @pytest.mark.parametrize("text", ["", None, "2400", "0860", "8", "ab12", "12345"])
    def test_invalid(self, text):
        assert parse_hhmm(text) is None


class TestLegacyToInstant:
    def test_combines_day_and_clock(self):
        assert legacy_to_instant("2026-02-26", "1700") == datetime(
            2026, 2, 26, 17, 0, tzinfo=timezone.utc
        )

    def test_accepts_date(self):
        assert legacy_to_instant(date(2026, 2, 26), "0000").hour == 0

    def test_bad_day(self):
        assert legacy_to_instant("26/02/2026", "1700") is None


class TestMigrateLegPayload:
    def test_same_day(self):
        leg = Leg.model_validate(
            migrate_leg_payload({"day": "2026-02-26", "std": "0830", "sta": "1030"})
        )
        assert leg.std_utc == datetime(2026, 2, 26, 8, 30, tzinfo=timezone.utc)
        assert leg.sta_utc == datetime(2026, 2, 26, 10, 30, tzinfo=timezone.utc)

    def test_arrival_before_departure_rolls_to_next_day(self):
        leg = Leg.model_validate(
            migrate_leg_payload({"day": "2026-02-26", "std": "2300", "sta": "0130"})
        )
        assert leg.sta_utc == datetime(2026, 2, 27, 1, 30, tzinfo=timezone.utc)

    def test_no_roll_past_last_date(self):
        migrated = migrate_leg_payload({"day": "9999-12-31", "std": "2300", "sta": "0130"})
        assert migrated["std_utc"] == "9999-12-31T23:00:00+00:00"
        assert "sta_utc" not in migrated

    def test_existing_instants_untouched(self):
        raw = {
            "std_utc": "2026-02-26T08:00:00Z",
            "sta_utc": "2026-02-26T09:00:00Z",
            "day": "2026-01-01",
            "std": "1200",
            "sta": "1300",
        }
        assert migrate_leg_payload(raw) == raw

    def test_camel_case_instants_count_as_present(self):
        raw = {"stdUtc": "2026-02-26T08:00:00Z", "staUtc": "2026-02-26T09:00:00Z", "day": "2026-01-01", "std": "1200"}
        assert "std_utc" not in migrate_leg_payload(raw)

    def test_missing_day_leaves_times_empty(self):
        migrated = migrate_leg_payload({"std": "0830", "sta": "1030"})
        assert "std_utc" not in migrated
        assert "sta_utc" not in migrated

    def test_input_not_modified(self):
        raw = {"day": "2026-02-26", "std": "0830"}
        migrate_leg_payload(raw)
        assert raw == {"day": "2026-02-26", "std": "0830"}


class TestMigrateTripPayload:
    def test_every_leg_migrated(self):
        trip = migrate_trip_payload({
            "client": "C",
            "legs": [
                {"day": "2026-02-26", "std": "0830", "sta": "1030"},
                {"day": "2026-02-27", "std": "1100", "sta": "1220"},
            ],
        })
        assert [leg["std_utc"][:10] for leg in trip["legs"]] == ["2026-02-26", "2026-02-27"]

    def test_no_legs(self):
        assert migrate_trip_payload({"client": "C"})["legs"] == []
