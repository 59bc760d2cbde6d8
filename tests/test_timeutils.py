"""Tests for local-time windows across DST changes and naive/aware alignment."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from app.core.timeutils import align, local_date, local_now, make_clock, start_of_month, start_of_week
from app.services.statistics import recompute
from tests.factories import TZ, make_record

BERLIN = ZoneInfo("Europe/Berlin")
# Wednesday after DST ended (2026-10-25 03:00 CEST -> 02:00 CET)
AFTER_DST = datetime(2026, 10, 28, 12, 0, tzinfo=BERLIN)


class TestWindows:
    def test_week_start_keeps_summer_offset(self):
        week_start = start_of_week(AFTER_DST)
        assert week_start == datetime(2026, 10, 25, 0, 0, tzinfo=BERLIN)
        assert week_start.utcoffset() == timedelta(hours=2)

    def test_month_start_keeps_summer_offset(self):
        month_start = start_of_month(AFTER_DST)
        assert (month_start.day, month_start.hour) == (1, 0)
        assert month_start.utcoffset() == timedelta(hours=2)

    def test_day_bucketing_uses_offset_of_that_day(self):
        # 22:30 UTC on the 24th is 00:30 CEST on the 25th
        finished = datetime(2026, 10, 24, 22, 30, tzinfo=timezone.utc)
        assert local_date(finished, AFTER_DST) == date(2026, 10, 25)

    def test_week_boundary_across_dst(self):
        boundary = datetime(2026, 10, 25, 0, 0, tzinfo=BERLIN)
        history = [
            make_record(boundary, record_id="on-boundary"),
            make_record(boundary - timedelta(milliseconds=1), record_id="just-before"),
        ]
        assert recompute(history, AFTER_DST).this_week_workouts == 1


class TestClock:
    def test_named_zone(self):
        assert make_clock("Europe/Berlin")().tzinfo == BERLIN

    def test_host_zone_is_aware(self):
        assert make_clock("")().tzinfo is not None
        assert local_now().tzinfo is not None


class TestAlign:
    def test_naive_value_takes_reference_zone(self):
        aligned = align(datetime(2026, 10, 14, 9, 0), datetime(2026, 10, 14, 18, 0, tzinfo=TZ))
        assert aligned == datetime(2026, 10, 14, 9, 0, tzinfo=TZ)

    def test_aware_value_against_naive_reference_becomes_naive(self):
        aligned = align(datetime(2026, 10, 14, 9, 0, tzinfo=TZ), datetime(2026, 10, 14, 18, 0))
        assert aligned.tzinfo is None

    def test_matching_kinds_are_unchanged(self):
        value = datetime(2026, 10, 14, 9, 0, tzinfo=TZ)
        assert align(value, datetime(2026, 10, 14, 18, 0, tzinfo=timezone.utc)) is value
