"""Tests for date window normalization."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from commit_stats.dates import normalize_timestamp, normalize_window
from commit_stats.exceptions import InvalidDateError


def test_plain_date_starts_at_midnight():
    assert normalize_timestamp("2023-08-31") == "2023-08-31T00:00:00Z"


def test_plain_date_end_of_day():
    assert normalize_timestamp("2024-09-01", end_of_day=True) == "2024-09-01T23:59:59Z"


def test_timestamp_with_zulu_suffix():
    assert normalize_timestamp("2024-01-02T03:04:05Z") == "2024-01-02T03:04:05Z"


def test_timestamp_with_offset_converted_to_utc():
    assert normalize_timestamp("2024-01-02T03:04:05+02:00") == "2024-01-02T01:04:05Z"


def test_naive_timestamp_is_utc():
    assert normalize_timestamp("2024-01-02T03:04:05") == "2024-01-02T03:04:05Z"


def test_date_and_datetime_objects():
    assert normalize_timestamp(date(2024, 5, 6)) == "2024-05-06T00:00:00Z"
    aware = datetime(2024, 5, 6, 10, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert normalize_timestamp(aware) == "2024-05-06T15:00:00Z"


def test_invalid_date():
    with pytest.raises(InvalidDateError):
        normalize_timestamp("yesterday")
    with pytest.raises(InvalidDateError):
        normalize_timestamp("2024-02-30")


def test_window():
    assert normalize_window("2023-08-31", "2024-09-01") == (
        "2023-08-31T00:00:00Z",
        "2024-09-01T23:59:59Z",
    )


def test_single_day_window():
    assert normalize_window("2024-03-01", "2024-03-01") == (
        "2024-03-01T00:00:00Z",
        "2024-03-01T23:59:59Z",
    )


def test_reversed_window():
    with pytest.raises(InvalidDateError):
        normalize_window("2024-09-01", "2023-08-31")
