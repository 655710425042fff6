from datetime import date, datetime, timedelta

import pytest

from meety.domain.scheduling.time_calculator import (
    format_time,
    make_clock,
    minute_of_day,
    parse_date,
    parse_time,
    range_end,
    slot_instant,
)
from meety.exceptions import ValidationError


@pytest.mark.parametrize(
    ("value", "expected"),
    [("00:00", 0), ("09:00", 540), ("9:05", 545), ("23:59", 1439), ("24:00", 1440), (" 10:30 ", 630)],
)
def test_parse_time(value: str, expected: int) -> None:
    assert parse_time(value) == expected


@pytest.mark.parametrize("value", ["24:01", "25:00", "12:60", "9:5", "0900", "abc", ""])
def test_parse_time_rejects_malformed_values(value: str) -> None:
    with pytest.raises(ValidationError):
        parse_time(value)


def test_format_time_zero_pads() -> None:
    assert format_time(0) == "00:00"
    assert format_time(545) == "09:05"
    assert format_time(1440) == "24:00"


def test_format_time_rejects_values_outside_a_day() -> None:
    with pytest.raises(ValidationError):
        format_time(-1)


def test_parse_date() -> None:
    assert parse_date("2030-01-14") == date(2030, 1, 14)

    with pytest.raises(ValidationError):
        parse_date("14/01/2030")


def test_minute_of_day_truncates_seconds() -> None:
    assert minute_of_day(datetime(2030, 1, 7, 10, 15, 59)) == 615


def test_slot_instant() -> None:
    assert slot_instant(date(2030, 1, 7), 570) == datetime(2030, 1, 7, 9, 30)


def test_make_clock_returns_naive_local_time() -> None:
    assert make_clock() == datetime.now
    local = make_clock()()
    assert local.tzinfo is None
    assert abs(local - datetime.now()) < timedelta(seconds=5)

    now = make_clock("UTC")()
    assert now.tzinfo is None


def test_range_end() -> None:
    assert range_end(date(2030, 1, 7), 7) == date(2030, 1, 13)
    assert range_end(date(2030, 1, 7), 1) == date(2030, 1, 7)


def test_range_end_stops_at_the_last_calendar_day() -> None:
    assert range_end(date(9999, 12, 30), 5) == date.max
    assert range_end(date.max, 2) == date.max
