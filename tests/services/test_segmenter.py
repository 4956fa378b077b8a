"""Tests for per-UTC-day leg segmentation."""

from datetime import date, datetime, timedelta, timezone

from tripboard.contracts.leg import Leg
from tripboard.contracts.trip import Trip
from tripboard.services.segmenter import segment_leg, segment_trip


def _utc(day: int, hour: int, minute: int = 0, month: int = 2) -> datetime:
    return datetime(2026, month, day, hour, minute, tzinfo=timezone.utc)


def _spans(segments):
    return [(s.day, s.start_minute, s.end_minute) for s in segments]


class TestSegmentLeg:
    def test_single_day(self):
        leg = Leg(std_utc=_utc(26, 8, 30), sta_utc=_utc(26, 10, 30))
        assert _spans(segment_leg(leg)) == [(date(2026, 2, 26), 510, 630)]

    def test_overnight_split(self):
        leg = Leg(std_utc=_utc(26, 23), sta_utc=_utc(27, 1, 30))
        assert _spans(segment_leg(leg)) == [
            (date(2026, 2, 26), 1380, 1440),
            (date(2026, 2, 27), 0, 90),
        ]

    def test_arrival_on_midnight_stays_on_departure_day(self):
        leg = Leg(std_utc=_utc(26, 22), sta_utc=_utc(27, 0))
        assert _spans(segment_leg(leg)) == [(date(2026, 2, 26), 1320, 1440)]

    def test_departure_on_midnight(self):
        leg = Leg(std_utc=_utc(27, 0), sta_utc=_utc(27, 2))
        assert _spans(segment_leg(leg)) == [(date(2026, 2, 27), 0, 120)]

    def test_multi_day_leg_covers_every_day(self):
        leg = Leg(std_utc=_utc(26, 12), sta_utc=_utc(1, 6, month=3))
        spans = _spans(segment_leg(leg))
        assert spans == [
            (date(2026, 2, 26), 720, 1440),
            (date(2026, 2, 27), 0, 1440),
            (date(2026, 2, 28), 0, 1440),
            (date(2026, 3, 1), 0, 360),
        ]

    def test_segments_tile_the_interval(self):
        std = _utc(26, 19, 17)
        sta = _utc(28, 3, 41)
        segments = segment_leg(Leg(std_utc=std, sta_utc=sta))
        total = sum(s.end_minute - s.start_minute for s in segments)
        assert total == int((sta - std).total_seconds() // 60)
        for previous, current in zip(segments, segments[1:]):
            assert previous.end_minute == 1440
            assert current.start_minute == 0
            assert current.day == previous.day + timedelta(days=1)

    def test_non_utc_offset_is_projected_to_utc(self):
        leg = Leg(std_utc="2026-02-27T01:00:00+02:00", sta_utc="2026-02-27T03:00:00+02:00")
        assert _spans(segment_leg(leg)) == [
            (date(2026, 2, 26), 1380, 1440),
            (date(2026, 2, 27), 0, 60),
        ]

    def test_missing_time_yields_nothing(self):
        assert segment_leg(Leg(std_utc=_utc(26, 8))) == []
        assert segment_leg(Leg()) == []

    def test_inverted_interval_yields_nothing(self):
        assert segment_leg(Leg(std_utc=_utc(26, 10), sta_utc=_utc(26, 8))) == []

    def test_empty_interval_yields_nothing(self):
        assert segment_leg(Leg(std_utc=_utc(26, 10), sta_utc=_utc(26, 10))) == []

    def test_trip_and_leg_identity(self):
        leg = Leg(std_utc=_utc(26, 8), sta_utc=_utc(26, 9))
        seg = segment_leg(leg, trip_id="T1", leg_index=3)[0]
        assert seg.trip_id == "T1"
        assert seg.leg_index == 3
        assert seg.lane is None


class TestSegmentTrip:
    def test_segments_in_leg_order(self):
        trip = Trip(
            id="T1",
            client="C",
            aircraft="R",
            legs=[
                Leg(std_utc=_utc(26, 17), sta_utc=_utc(26, 18)),
                Leg(),
                Leg(std_utc=_utc(26, 8), sta_utc=_utc(26, 9)),
            ],
        )
        segments = segment_trip(trip)
        assert [s.leg_index for s in segments] == [0, 2]
        assert all(s.trip_id == "T1" for s in segments)


class TestSegmentWindow:
    def test_leg_on_last_representable_day(self):
        leg = Leg(
            std_utc=datetime(9999, 12, 31, 10, tzinfo=timezone.utc),
            sta_utc=datetime(9999, 12, 31, 12, tzinfo=timezone.utc),
        )
        assert _spans(segment_leg(leg)) == [(date.max, 600, 720)]

    def test_days_clip_a_leg_spanning_decades(self):
        leg = Leg(std_utc=_utc(26, 8), sta_utc=datetime(2062, 2, 26, 10, tzinfo=timezone.utc))
        window = [date(2026, 2, 27), date(2026, 2, 28)]
        assert _spans(segment_leg(leg, days=window)) == [
            (date(2026, 2, 27), 0, 1440),
            (date(2026, 2, 28), 0, 1440),
        ]

    def test_days_outside_the_leg(self):
        leg = Leg(std_utc=_utc(26, 8), sta_utc=_utc(26, 10))
        assert segment_leg(leg, days=[date(2026, 3, 5)]) == []

    def test_empty_days(self):
        leg = Leg(std_utc=_utc(26, 8), sta_utc=_utc(26, 10))
        assert segment_leg(leg, days=[]) == []


class TestSubMinuteInstants:
    def test_thirty_second_leg_has_no_segments(self):
        leg = Leg(
            std_utc=datetime(2026, 2, 26, 10, 0, 0, tzinfo=timezone.utc),
            sta_utc=datetime(2026, 2, 26, 10, 0, 30, tzinfo=timezone.utc),
        )
        assert not leg.has_valid_interval
        assert segment_leg(leg) == []

    def test_arrival_seconds_past_midnight(self):
        leg = Leg(
            std_utc=datetime(2026, 2, 26, 23, 59, 0, tzinfo=timezone.utc),
            sta_utc=datetime(2026, 2, 27, 0, 0, 40, tzinfo=timezone.utc),
        )
        assert leg.has_valid_interval
        assert _spans(segment_leg(leg)) == [(date(2026, 2, 26), 1439, 1440)]

    def test_seconds_on_both_sides_of_midnight(self):
        leg = Leg(
            std_utc=datetime(2026, 2, 26, 23, 59, 30, tzinfo=timezone.utc),
            sta_utc=datetime(2026, 2, 27, 0, 1, 40, tzinfo=timezone.utc),
        )
        assert _spans(segment_leg(leg)) == [
            (date(2026, 2, 26), 1439, 1440),
            (date(2026, 2, 27), 0, 1),
        ]
