# tests/test_time_of_day.py

from datetime import time

import pytest

from caljal import Field, LocalTime, ParseError, RangeError, Unit, UnsupportedTemporalError
from caljal.core.time import NANOS_PER_DAY


def test_of_and_accessors():
    t = LocalTime.of(13, 45, 30, 123_456_789)
    assert (t.hour, t.minute, t.second, t.nano) == (13, 45, 30, 123_456_789)
    assert t.to_second_of_day() == 13 * 3600 + 45 * 60 + 30
    assert LocalTime.of_second_of_day(3661) == LocalTime.of(1, 1, 1)
    assert LocalTime.of_nano_of_day(0) is not None
    assert LocalTime.MAX.nano_of_day == NANOS_PER_DAY - 1
    with pytest.raises(RangeError):
        LocalTime.of(24)
    with pytest.raises(RangeError):
        LocalTime(NANOS_PER_DAY)
    with pytest.raises(RangeError):
        LocalTime.of(1, 60)


def test_datetime_time_bridge():
    assert LocalTime.from_time(time(9, 5, 1, 250)) == LocalTime.of(9, 5, 1, 250_000)
    assert LocalTime.of(9, 5, 1, 250_999).to_time() == time(9, 5, 1, 250)


@pytest.mark.parametrize("t, text", [
    (LocalTime.of(12), "12:00"),
    (LocalTime.of(12, 0, 5), "12:00:05"),
    (LocalTime.of(12, 0, 0, 500_000_000), "12:00:00.500"),
    (LocalTime.of(12, 0, 0, 1000), "12:00:00.000001"),
    (LocalTime.of(12, 0, 0, 1), "12:00:00.000000001"),
    (LocalTime.of(0, 7, 59, 120_000_000), "00:07:59.120"),
])
def test_str_is_shortest_round_trip(t, text):
    assert str(t) == text
    assert LocalTime.parse(text) == t


def test_parse():
    assert LocalTime.parse("12:00:00.5") == LocalTime.of(12, 0, 0, 500_000_000)
    with pytest.raises(ParseError):
        LocalTime.parse("12")
    with pytest.raises(ParseError):
        LocalTime.parse("25:00")


def test_field_get():
    t = LocalTime.of(0, 30)
    assert t.get(Field.CLOCK_HOUR_OF_DAY) == 24
    assert t.get(Field.CLOCK_HOUR_OF_AMPM) == 12
    assert t.get(Field.AMPM_OF_DAY) == 0
    t = LocalTime.of(15, 20, 10, 7_008_009)
    assert t.get(Field.HOUR_OF_AMPM) == 3
    assert t.get(Field.AMPM_OF_DAY) == 1
    assert t.get(Field.MINUTE_OF_DAY) == 15 * 60 + 20
    assert t.get(Field.MILLI_OF_SECOND) == 7
    assert t.get(Field.MICRO_OF_SECOND) == 7008
    assert t.get(Field.NANO_OF_SECOND) == 7_008_009
    assert t.get(Field.SECOND_OF_DAY) == t.to_second_of_day()
    with pytest.raises(UnsupportedTemporalError):
        t.get(Field.DAY_OF_MONTH)


def test_field_with():
    t = LocalTime.of(3, 15)
    assert t.with_field(Field.AMPM_OF_DAY, 1) == LocalTime.of(15, 15)
    assert t.with_field(Field.CLOCK_HOUR_OF_DAY, 24) == LocalTime.of(0, 15)
    assert t.with_field(Field.CLOCK_HOUR_OF_AMPM, 12) == LocalTime.of(0, 15)
    assert t.with_field(Field.MINUTE_OF_DAY, 61) == LocalTime.of(1, 1)
    assert t.with_field(Field.SECOND_OF_DAY, 0) == LocalTime.MIDNIGHT
    assert t.with_field(Field.MILLI_OF_SECOND, 5) == LocalTime.of(3, 15, 0, 5_000_000)
    with pytest.raises(RangeError):
        t.with_field(Field.HOUR_OF_DAY, 24)
    with pytest.raises(UnsupportedTemporalError):
        t.with_field(Field.YEAR, 1)


def test_plus_wraps_midnight():
    t = LocalTime.of(23, 30)
    assert t.plus_minutes(45) == LocalTime.of(0, 15)
    assert t.plus_hours(-24) == t
    assert LocalTime.MIDNIGHT.minus_nanos(1) == LocalTime.MAX
    assert LocalTime.MIDNIGHT.plus(3, Unit.HALF_DAYS) == LocalTime.NOON
    assert t.plus_seconds(-86_400 * 3 - 60) == LocalTime.of(23, 29)
    with pytest.raises(UnsupportedTemporalError):
        t.plus(1, Unit.DAYS)


def test_truncated_to():
    t = LocalTime.of(12, 34, 56, 789)
    assert t.truncated_to(Unit.HOURS) == LocalTime.of(12)
    assert t.truncated_to(Unit.MINUTES) == LocalTime.of(12, 34)
    assert t.truncated_to(Unit.SECONDS) == LocalTime.of(12, 34, 56)
    assert t.truncated_to(Unit.NANOS) == t
    assert t.truncated_to(Unit.DAYS) == LocalTime.MIDNIGHT
    with pytest.raises(UnsupportedTemporalError):
        t.truncated_to(Unit.WEEKS)


def test_until_truncates_toward_zero():
    a = LocalTime.of(10)
    assert a.until(LocalTime.of(9, 30), Unit.MINUTES) == -30
    assert a.until(LocalTime.of(9, 30), Unit.HOURS) == 0
    assert a.until(LocalTime.of(12, 59), Unit.HOURS) == 2
    assert a.until(LocalTime.of(22), Unit.HALF_DAYS) == 1
    with pytest.raises(UnsupportedTemporalError):
        a.until(LocalTime.of(12), Unit.DAYS)
