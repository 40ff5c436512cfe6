"""Tests for the station duration label."""

from datetime import datetime, timedelta, timezone

import pytest

from tracker.utils.duration import derive_duration, station_duration

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "elapsed, expected",
    [
        (timedelta(minutes=30), "30 minutes"),
        (timedelta(minutes=90), "1 hour"),
        (timedelta(hours=50), "2 days"),
        (timedelta(minutes=1), "1 minute"),
        (timedelta(seconds=59), "0 minutes"),
        (timedelta(minutes=59, seconds=59), "59 minutes"),
        (timedelta(hours=23, minutes=59), "23 hours"),
        (timedelta(hours=24), "1 day"),
    ],
)
def test_derive_duration_buckets(elapsed, expected):
    assert derive_duration(NOW, NOW - elapsed) == expected


def test_singular_only_at_one():
    assert derive_duration(NOW, NOW - timedelta(hours=2)) == "2 hours"
    assert derive_duration(NOW, NOW - timedelta(hours=1)) == "1 hour"
    assert derive_duration(NOW, NOW - timedelta(days=1, hours=1)) == "1 day"


def test_naive_reference_is_read_as_utc():
    naive = (NOW - timedelta(minutes=45)).replace(tzinfo=None)
    assert derive_duration(NOW, naive) == "45 minutes"


def test_future_reference_reads_as_zero():
    assert derive_duration(NOW, NOW + timedelta(minutes=5)) == "0 minutes"


def test_station_duration_prefers_last_arrival():
    created = NOW - timedelta(days=4)
    entered = NOW - timedelta(hours=3)
    assert station_duration(NOW, created, entered) == "3 hours"
    assert station_duration(NOW, created, None) == "4 days"
