# tests/test_api.py

from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest

import caljal
from caljal import DayOfWeek, Field, JalaliDate, JalaliDateTime, RangeError, ResolverStyle


def test_to_jalali_and_back():
    j = caljal.to_jalali(date(2024, 3, 20))
    assert j == JalaliDate(1403, 1, 1)
    assert caljal.to_gregorian(j) == date(2024, 3, 20)

    dt = caljal.to_jalali(datetime(2024, 3, 20, 8, 15))
    assert isinstance(dt, JalaliDateTime)
    assert dt == JalaliDateTime.of(1403, 1, 1, 8, 15)
    assert caljal.to_gregorian(dt) == datetime(2024, 3, 20, 8, 15)


def test_today_and_now():
    with patch.object(JalaliDate, "from_gregorian", return_value=JalaliDate(1403, 1, 1)) as m:
        assert caljal.today() == JalaliDate(1403, 1, 1)
    m.assert_called_once()
    assert isinstance(caljal.now(timezone.utc), JalaliDateTime)


def test_year_and_month_helpers():
    assert caljal.is_leap_year(1403)
    assert not caljal.is_leap_year(1404)
    assert caljal.days_in_month(1403, 12) == 30
    assert caljal.days_in_month(1404, 12) == 29
    assert caljal.days_in_month(1403, 7) == 30
    assert caljal.days_in_month(1403, 1) == 31
    with pytest.raises(RangeError):
        caljal.days_in_month(1403, 13)


def test_new_year_and_month_bounds():
    assert caljal.new_year_day(1403).to_gregorian() == date(2024, 3, 20)
    assert caljal.new_year_day(1404).to_gregorian() == date(2025, 3, 21)
    assert caljal.first_day_of_month(1403, 7) == JalaliDate(1403, 7, 1)
    assert caljal.last_day_of_month(1403, 7) == JalaliDate(1403, 7, 30)
    assert caljal.last_day_of_month(1404, 12) == JalaliDate(1404, 12, 29)


def test_month_days():
    rows = caljal.month_days(1403, 12)
    assert len(rows) == 30
    first, last = rows[0], rows[-1]
    assert first["jalali"] == JalaliDate(1403, 12, 1)
    assert first["gregorian"] == date(2025, 2, 19)
    assert first["epoch_day"] == 20138
    assert first["weekday"] is DayOfWeek.WEDNESDAY
    assert last["jalali"] == JalaliDate(1403, 12, 30)
    assert last["gregorian"] == date(2025, 3, 20)
    assert [r["epoch_day"] for r in rows] == list(range(20138, 20168))


def test_field_values_and_resolve():
    values = caljal.field_values(JalaliDate(1403, 1, 1), [Field.YEAR, Field.MONTH_OF_YEAR, Field.DAY_OF_MONTH,
                                                          Field.HOUR_OF_DAY])
    assert values == {Field.YEAR: 1403, Field.MONTH_OF_YEAR: 1, Field.DAY_OF_MONTH: 1}
    r = caljal.resolve(values, ResolverStyle.STRICT)
    assert r.date == JalaliDate(1403, 1, 1)
    assert r.time is None
    assert caljal.resolve({**values, Field.HOUR_OF_DAY: 9}).to_date_time() == JalaliDateTime.of(1403, 1, 1, 9)


def test_public_names():
    for name in caljal.__all__:
        assert hasattr(caljal, name), name
