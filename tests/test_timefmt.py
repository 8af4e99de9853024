"""Tests for relative and calendar time labels."""

from __future__ import annotations

import time
from datetime import UTC, datetime, timedelta, timezone

import pytest

from opshub.fleet.timefmt import calendar_label, relative_label

NOW = datetime(2024, 5, 14, 12, 0, tzinfo=UTC)


class TestRelativeLabelPast:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "Now"),
            (59, "Now"),
            (60, "1 min ago"),
            (119, "1 min ago"),
            (59 * 60, "59 min ago"),
            (3600, "1 hr ago"),
            (89 * 60, "1 hr ago"),
            (90 * 60, "2 hr ago"),
            (23 * 3600, "23 hr ago"),
            (int(23.5 * 3600), "1d ago"),
            (24 * 3600, "1d ago"),
            (36 * 3600, "2d ago"),
            (7 * 24 * 3600, "7d ago"),
        ],
    )
    def test_thresholds(self, seconds: int, expected: str):
        assert relative_label(NOW, NOW - timedelta(seconds=seconds)) == expected


class TestRelativeLabelFuture:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (30, "In moments"),
            (59, "In moments"),
            (60, "In 1 min"),
            (45 * 60, "In 45 min"),
            (3600, "In 1 hr"),
            (5 * 3600, "In 5 hr"),
            (24 * 3600, "In 1d"),
            (3 * 24 * 3600, "In 3d"),
        ],
    )
    def test_thresholds(self, seconds: int, expected: str):
        assert relative_label(NOW, NOW + timedelta(seconds=seconds)) == expected


class TestRelativeLabelDeterminism:
    def test_same_inputs_same_label(self):
        target = NOW - timedelta(minutes=17)
        assert relative_label(NOW, target) == relative_label(NOW, target)

    def test_mixed_zones_compare_instants(self):
        plus_two = timezone(timedelta(hours=2))
        target = datetime(2024, 5, 14, 13, 55, tzinfo=plus_two)  # 11:55 UTC
        assert relative_label(NOW, target) == "5 min ago"


class TestCalendarLabel:
    def test_morning(self):
        assert calendar_label(datetime(2024, 5, 14, 9, 5, tzinfo=UTC)) == "May 14, 9:05 AM"

    def test_afternoon(self):
        assert calendar_label(datetime(2024, 10, 3, 15, 30, tzinfo=UTC)) == "Oct 3, 3:30 PM"

    def test_midnight_and_noon(self):
        assert calendar_label(datetime(2024, 1, 1, 0, 0, tzinfo=UTC)) == "Jan 1, 12:00 AM"
        assert calendar_label(datetime(2024, 1, 1, 12, 0, tzinfo=UTC)) == "Jan 1, 12:00 PM"

    def test_converts_to_named_zone(self):
        label = calendar_label(datetime(2024, 5, 14, 12, 0, tzinfo=UTC), "America/New_York")
        assert label == "May 14, 8:00 AM"

    def test_converts_to_tzinfo(self):
        plus_one = timezone(timedelta(hours=1))
        assert calendar_label(datetime(2024, 12, 31, 23, 30, tzinfo=UTC), plus_one) == "Jan 1, 12:30 AM"


@pytest.fixture()
def new_york_host(monkeypatch):
    """Run with the process-local zone set to New York."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


class TestNaiveTimestamps:
    def test_naive_now_against_aware_target(self):
        naive_now = datetime(2024, 5, 14, 12, 0)
        assert relative_label(naive_now, NOW - timedelta(minutes=5)) == "5 min ago"

    def test_naive_target_against_aware_now(self):
        assert relative_label(NOW, datetime(2024, 5, 14, 14, 0)) == "In 2 hr"

    def test_naive_calendar_target_read_as_utc(self, new_york_host):
        assert calendar_label(datetime(2024, 5, 14, 12, 0), "UTC") == "May 14, 12:00 PM"
        assert calendar_label(datetime(2024, 5, 14, 12, 0), "America/New_York") == "May 14, 8:00 AM"

    def test_naive_calendar_target_without_zone(self):
        assert calendar_label(datetime(2024, 5, 14, 9, 5)) == "May 14, 9:05 AM"
