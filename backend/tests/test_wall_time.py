from datetime import time

import pytest

from app.utils.wall_time import WallTime, parse_display_time, to_24_hour_time, to_display_time


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("13:30:00", "1:30 PM"),
        ("00:10:20", "12:10 AM"),
        ("12:00:00", "12:00 PM"),
        ("09:05", "9:05 AM"),
        ("23:59:59.999", "11:59 PM"),
    ],
)
def test_to_display_time_uses_twelve_hour_clock(value, expected):
    assert to_display_time(value) == expected


def test_to_display_time_keeps_twelve_hour_input():
    assert to_display_time("01:30 PM") == "1:30 PM"
    assert to_display_time(time(8, 15)) == "8:15 AM"


def test_parse_accepts_optional_seconds_and_milliseconds():
    assert WallTime.parse("10:30") == WallTime(10, 30)
    assert WallTime.parse("10:30:15") == WallTime(10, 30, 15)
    assert WallTime.parse("10:30:15.250") == WallTime(10, 30, 15, 250)
    assert str(WallTime.parse("10:30")) == "10:30:00.000"


@pytest.mark.parametrize("value", ["", "7:30", "24:00", "10:60", "10:30:61", "10:30:00.5", "1:30 PM", "noon"])
def test_parse_rejects_malformed_timestamps(value):
    with pytest.raises(ValueError):
        WallTime.parse(value)


def test_comparisons_follow_wall_clock_order():
    start = WallTime.parse("09:00")
    end = WallTime.parse("10:15:00.001")

    assert start.is_before(end)
    assert end.is_after(start)
    assert start.is_same_as(WallTime.parse("09:00:00.000"))
    assert not start.is_before(start)
    assert not start.is_after(start)


def test_request_string_keeps_milliseconds_when_present():
    assert WallTime.parse("10:00:00.500").to_request_string() == "10:00:00.500"
    assert WallTime.parse("10:00").to_request_string() == "10:00:00"
    assert WallTime.parse("10:00:59.000").to_request_string() == "10:00:59"


def test_time_column_round_trip_keeps_milliseconds():
    original = WallTime(14, 5, 9, 120)
    assert WallTime.from_time(original.to_time()) == original


@pytest.mark.parametrize("value", ["00:00", "00:10", "11:59", "12:00", "12:45", "13:30", "23:59"])
def test_display_round_trip_preserves_hour_and_minute(value):
    display = to_display_time(value)
    assert to_24_hour_time(display) == value
    assert parse_display_time(display) == WallTime.parse(value)


def test_display_round_trip_drops_seconds():
    assert to_24_hour_time(to_display_time("16:45:30.500")) == "16:45"


def test_parse_display_time_rejects_24_hour_input():
    with pytest.raises(ValueError):
        parse_display_time("13:30")
