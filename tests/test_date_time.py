# tests/test_date_time.py

import random
from datetime import datetime, timedelta

import pytest

from caljal import (
    CalendarOverflowError,
    Field,
    JalaliDate,
    JalaliDateTime,
    LocalTime,
    ParseError,
    RangeError,
    Unit,
)
from caljal.core.time import NANOS_PER_DAY


def test_of_and_accessors():
    dt = JalaliDateTime.of(1403, 1, 1, 12, 30, 15, 7)
    assert dt.date == JalaliDate(1403, 1, 1)
    assert dt.time == LocalTime.of(12, 30, 15, 7)
    assert (dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second, dt.nano) == (1403, 1, 1, 12, 30, 15, 7)
    assert dt.day_of_year == 1


def test_carry_into_date():
    dt = JalaliDateTime.of(1403, 1, 1)
    assert dt.plus_hours(-25) == JalaliDateTime.of(1402, 12, 28, 23)
    assert dt.plus_nanos(-1) == JalaliDateTime.of(1402, 12, 29, 23, 59, 59, 999_999_999)
    assert dt.plus_minutes(60 * 24 * 366) == JalaliDateTime.of(1404, 1, 1)
    assert JalaliDateTime.of(1403, 12, 30, 23, 59, 59).plus_seconds(1) == JalaliDateTime.of(1404, 1, 1)


def test_negative_delta_larger_than_a_day():
    random.seed(42)
    base = JalaliDateTime.of(1403, 6, 15, 8, 20)
    for _ in range(500):
        n = random.randint(-10 * NANOS_PER_DAY, 10 * NANOS_PER_DAY)
        moved = base.plus_nanos(n)
        assert 0 <= moved.time.nano_of_day < NANOS_PER_DAY
        assert moved.plus_nanos(-n) == base
        assert base.until(moved, Unit.NANOS) == n


def test_date_units_leave_time_alone():
    dt = JalaliDateTime.of(1403, 6, 31, 10)
    assert dt.plus_months(1) == JalaliDateTime.of(1403, 7, 30, 10)
    assert dt.plus_years(1).time == dt.time
    assert dt.plus(2, Unit.WEEKS) == JalaliDateTime.of(1403, 7, 14, 10)
    assert dt.minus(1, Unit.HALF_DAYS) == JalaliDateTime.of(1403, 6, 30, 22)


def test_overflow():
    with pytest.raises(CalendarOverflowError):
        JalaliDateTime(JalaliDate.MAX, LocalTime.MAX).plus_nanos(1)


def test_until_time_units():
    a = JalaliDateTime.of(1403, 1, 1, 10)
    b = JalaliDateTime.of(1403, 1, 2, 9)
    assert a.until(b, Unit.HOURS) == 23
    assert b.until(a, Unit.HOURS) == -23
    assert a.until(b, Unit.MINUTES) == 23 * 60
    assert a.until(JalaliDateTime.of(1403, 1, 3, 10, 0, 0, 1), Unit.DAYS) == 2
    assert a.until(JalaliDateTime.of(1403, 1, 1, 9, 30), Unit.HOURS) == 0
    assert a.until(JalaliDateTime.of(1403, 1, 4, 9, 59), Unit.HALF_DAYS) == 5


def test_until_date_units_adjust_end_day():
    a = JalaliDateTime.of(1403, 1, 1, 10)
    assert a.until(JalaliDateTime.of(1403, 1, 2, 9), Unit.DAYS) == 0
    assert a.until(JalaliDateTime.of(1403, 1, 2, 10), Unit.DAYS) == 1
    assert JalaliDateTime.of(1403, 1, 2, 9).until(a, Unit.DAYS) == 0
    assert a.until(JalaliDateTime.of(1403, 2, 1, 9), Unit.MONTHS) == 0
    assert a.until(JalaliDateTime.of(1403, 2, 1, 10), Unit.MONTHS) == 1


def test_epoch_seconds_and_offsets():
    assert JalaliDateTime.of_epoch_second(0) == JalaliDateTime.of(1348, 10, 11)
    tehran = timedelta(hours=3, minutes=30)
    dt = JalaliDateTime.of_epoch_second(0, offset=tehran)
    assert dt == JalaliDateTime.of(1348, 10, 11, 3, 30)
    assert dt.to_epoch_second(tehran) == 0
    assert JalaliDateTime.of_epoch_second(-1, 5) == JalaliDateTime.of(1348, 10, 10, 23, 59, 59, 5)
    random.seed(42)
    for _ in range(500):
        s = random.randint(-10**12, 10**12)
        assert JalaliDateTime.of_epoch_second(s, offset=tehran).to_epoch_second(tehran) == s
    with pytest.raises(RangeError):
        JalaliDateTime.of_epoch_second(0, offset=timedelta(hours=19))


def test_gregorian_bridge():
    dt = JalaliDateTime.of(1403, 1, 1, 12, 30, 0, 1500)
    assert dt.to_gregorian() == datetime(2024, 3, 20, 12, 30, 0, 1)
    assert JalaliDateTime.from_gregorian(datetime(2024, 3, 20, 12, 30, 0, 1)) == JalaliDateTime.of(1403, 1, 1, 12, 30, 0, 1000)


def test_fields_delegate():
    dt = JalaliDateTime.of(1403, 1, 1, 15)
    assert dt.get(Field.AMPM_OF_DAY) == 1
    assert dt.get(Field.DAY_OF_WEEK) == 3
    assert dt.with_field(Field.HOUR_OF_DAY, 1) == JalaliDateTime.of(1403, 1, 1, 1)
    assert dt.with_field(Field.MONTH_OF_YEAR, 12) == JalaliDateTime.of(1403, 12, 1, 15)
    assert dt.range(Field.DAY_OF_MONTH).maximum == 31
    assert dt.range(Field.HOUR_OF_DAY).maximum == 23
    assert dt.truncated_to(Unit.HOURS) == dt
    assert dt.with_minute(5).truncated_to(Unit.HOURS) == dt


def test_from_digits():
    assert JalaliDateTime.from_digits("1403/01/01") == JalaliDateTime.of(1403, 1, 1)
    assert JalaliDateTime.from_digits("1403-01-01 12:30") == JalaliDateTime.of(1403, 1, 1, 12, 30)
    assert JalaliDateTime.from_digits("1403-01-01 12:30:45.123") == JalaliDateTime.of(1403, 1, 1, 12, 30, 45, 123)
    assert JalaliDateTime.from_digits("140301011") == JalaliDateTime.of(1403, 1, 1, 1)
    with pytest.raises(ParseError):
        JalaliDateTime.from_digits("1403011")
    with pytest.raises(ParseError):
        JalaliDateTime.from_digits("1" * 24)


def test_text():
    dt = JalaliDateTime.of(1403, 1, 1, 12, 30)
    assert str(dt) == "1403-01-01T12:30"
    assert str(JalaliDateTime.of(1403, 1, 1, 12, 30, 0, 1500)) == "1403-01-01T12:30:00.000001500"
    assert JalaliDateTime.parse("1403-01-01T12:30") == dt
    assert JalaliDateTime.parse(str(JalaliDateTime.of(-5, 12, 29, 1, 2, 3, 4))) == JalaliDateTime.of(-5, 12, 29, 1, 2, 3, 4)
    with pytest.raises(ParseError):
        JalaliDateTime.parse("1403-01-01 12:30")
    with pytest.raises(ParseError):
        JalaliDateTime.parse("1403-01-01T25:00")


def test_operators_and_ordering():
    a = JalaliDateTime.of(1403, 1, 1, 10)
    assert a + timedelta(hours=-11) == JalaliDateTime.of(1402, 12, 29, 23)
    assert a - timedelta(days=1, seconds=1) == JalaliDateTime.of(1402, 12, 29, 9, 59, 59)
    assert JalaliDateTime.of(1403, 1, 2, 9) - a == timedelta(hours=23)
    assert a < JalaliDateTime.of(1403, 1, 1, 10, 0, 0, 1) < JalaliDateTime.of(1403, 1, 2)
