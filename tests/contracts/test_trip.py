"""Tests for Trip contract."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from tripboard.contracts.trip import TRIP_ID_MAX_LENGTH, Trip, clean_tags, new_trip_id


class TestTripIds:
    def test_new_trip_id_format(self):
        trip_id = new_trip_id()
        assert trip_id.startswith("TRIP-")
        assert trip_id[5:].isdigit()

    def test_default_id(self):
        trip = Trip(client="C", aircraft="PHCBV")
        assert trip.id.startswith("TRIP-")

    @pytest.mark.parametrize("trip_id", ["TRIP-123", "T1.a_b", "x"])
    def test_document_safe_ids_accepted(self, trip_id):
        assert Trip(id=trip_id, client="C", aircraft="R").id == trip_id

    @pytest.mark.parametrize(
        "trip_id", ["A/B", ".", "..", "__x__", "", " T1", "T" * (TRIP_ID_MAX_LENGTH + 1)]
    )
    def test_unsafe_ids_rejected(self, trip_id):
        with pytest.raises(ValidationError):
            Trip(id=trip_id, client="C", aircraft="R")


class TestTripFields:
    def test_client_and_aircraft_required(self):
        with pytest.raises(Exception):
            Trip(client="  ", aircraft="PHCBV")
        with pytest.raises(Exception):
            Trip(client="C", aircraft="")

    def test_text_is_stripped(self):
        trip = Trip(client=" Cartier ", aircraft=" PHCBV ")
        assert trip.client == "Cartier"
        assert trip.aircraft == "PHCBV"

    def test_tags_from_comma_string(self):
        trip = Trip(client="C", aircraft="R", tags="VIP, Short notice, ,")
        assert trip.tags == ["VIP", "Short notice"]

    def test_none_notes(self):
        assert Trip(client="C", aircraft="R", notes=None).notes == ""

    def test_camel_case_dates(self):
        trip = Trip.model_validate({
            "client": "C",
            "aircraft": "R",
            "startDate": "2026-02-26",
            "endDate": "",
        })
        assert trip.start_date == date(2026, 2, 26)
        assert trip.end_date is None

    def test_updated_at_naive_is_utc(self):
        trip = Trip(client="C", aircraft="R", updated_at=datetime(2026, 2, 26, 12, 0))
        assert trip.updated_at == datetime(2026, 2, 26, 12, 0, tzinfo=timezone.utc)

    def test_serialization_excludes_none(self):
        data = Trip(id="T1", client="C", aircraft="R").to_firestore()
        assert data["id"] == "T1"
        assert data["legs"] == []
        assert "start_date" not in data


class TestCleanTags:
    def test_none(self):
        assert clean_tags(None) == []

    def test_list(self):
        assert clean_tags([" a ", "", "b"]) == ["a", "b"]
