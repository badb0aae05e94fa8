"""Tests for the shared datetime helpers."""

from datetime import UTC, datetime, timedelta, timezone

from storefront.utils.dates import as_utc


def test_naive_datetime_is_taken_as_utc():
    assert as_utc(datetime(2026, 1, 1, 12, 0)) == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def test_aware_datetime_is_converted():
    paris = timezone(timedelta(hours=1))
    converted = as_utc(datetime(2026, 1, 1, 13, 0, tzinfo=paris))
    assert converted.tzinfo == UTC
    assert converted.hour == 12
