# tests/test_resolve.py

import logging

import pytest

from caljal import (
    CalendarStateError,
    Field,
    FieldResolver,
    JalaliDate,
    JalaliDateTime,
    LeapDayError,
    LocalTime,
    RangeError,
    ResolverStyle,
)
from caljal.core.accessor import field_values
from caljal.resolve import COMBINATIONS, resolve, resolve_date

STRICT, SMART, LENIENT = ResolverStyle.STRICT, ResolverStyle.SMART, ResolverStyle.LENIENT


def ymd(y, m, d):
    return {Field.YEAR: y, Field.MONTH_OF_YEAR: m, Field.DAY_OF_MONTH: d}


@pytest.fixture
def smart():
    return FieldResolver(SMART)


def test_combination_order():
    names = [c.name for c in COMBINATIONS]
    assert names[0] == "epoch-day"
    assert names[1] == "year-month-day"
    assert names[-1] == "week-based-year"


def test_input_is_not_mutated(smart):
    values = ymd(1403, 1, 1)
    smart.resolve(values)
    assert values == ymd(1403, 1, 1)


def test_no_combination():
    assert resolve_date({Field.MONTH_OF_YEAR: 1}) is None
    r = resolve({Field.MONTH_OF_YEAR: 1})
    assert r.date is None and r.time is None
    assert dict(r.leftovers) == {Field.MONTH_OF_YEAR: 1}
    with pytest.raises(CalendarStateError):
        r.to_date_time()


# ----------------------------------------------------------------------
# year-month-day
# ----------------------------------------------------------------------

def test_month_13():
    for style in (STRICT, SMART):
        with pytest.raises(RangeError):
            resolve_date(ymd(1400, 13, 1), style)
    assert resolve_date(ymd(1400, 13, 1), LENIENT) == JalaliDate(1401, 1, 1)


def test_esfand_30_in_common_year():
    assert resolve_date(ymd(1400, 12, 30), SMART) == JalaliDate(1400, 12, 29)
    with pytest.raises(LeapDayError):
        resolve_date(ymd(1400, 12, 30), STRICT)
    assert resolve_date(ymd(1403, 12, 30), STRICT) == JalaliDate(1403, 12, 30)
    assert resolve_date(ymd(1400, 12, 30), LENIENT) == JalaliDate(1401, 1, 1)


def test_day_31_of_autumn_month():
    assert resolve_date(ymd(1403, 7, 31), SMART) == JalaliDate(1403, 7, 30)
    with pytest.raises(CalendarStateError):
        resolve_date(ymd(1403, 7, 31), STRICT)
    with pytest.raises(RangeError):
        resolve_date(ymd(1403, 7, 32), SMART)


def test_lenient_day_overflow():
    assert resolve_date(ymd(1400, 1, 32), LENIENT) == JalaliDate(1400, 2, 1)
    assert resolve_date(ymd(1400, 0, 0), LENIENT) == JalaliDate(1399, 11, 30)


# ----------------------------------------------------------------------
# year-day
# ----------------------------------------------------------------------

def test_day_of_year_366():
    values = {Field.YEAR: 1400, Field.DAY_OF_YEAR: 366}
    assert resolve_date(values, SMART) == JalaliDate(1400, 12, 29)
    with pytest.raises(LeapDayError):
        resolve_date(values, STRICT)
    assert resolve_date(values, LENIENT) == JalaliDate(1401, 1, 1)
    assert resolve_date({Field.YEAR: 1403, Field.DAY_OF_YEAR: 366}, STRICT) == JalaliDate(1403, 12, 30)


# ----------------------------------------------------------------------
# epoch day and cross-checks
# ----------------------------------------------------------------------

def test_epoch_day_cross_check():
    assert resolve_date({Field.EPOCH_DAY: 0, Field.YEAR: 1348}) == JalaliDate.EPOCH
    with pytest.raises(CalendarStateError):
        resolve_date({Field.EPOCH_DAY: 0, Field.YEAR: 1349})


def test_redundant_fields_must_agree():
    values = {**ymd(1403, 1, 1), Field.DAY_OF_WEEK: 3, Field.DAY_OF_YEAR: 1}
    r = resolve(values, STRICT)
    assert r.date == JalaliDate(1403, 1, 1)
    assert dict(r.leftovers) == {}
    with pytest.raises(CalendarStateError):
        resolve({**values, Field.DAY_OF_WEEK: 4}, STRICT)


def test_all_fields_of_a_date_resolve_back():
    for d in (JalaliDate(1403, 1, 1), JalaliDate(1404, 1, 1), JalaliDate(-20, 12, 29)):
        r = resolve(field_values(d), STRICT)
        assert r.date == d
        assert dict(r.leftovers) == {}


def test_proleptic_month():
    assert resolve_date({Field.PROLEPTIC_MONTH: 1403 * 12, Field.DAY_OF_MONTH: 5}) == JalaliDate(1403, 1, 5)
    assert resolve_date({Field.PROLEPTIC_MONTH: -1, Field.DAY_OF_MONTH: 1}) == JalaliDate(-1, 12, 1)
    with pytest.raises(CalendarStateError):
        resolve_date({Field.PROLEPTIC_MONTH: 1403 * 12, Field.MONTH_OF_YEAR: 2, Field.YEAR: 1403, Field.DAY_OF_MONTH: 1})


def test_year_of_era():
    values = {Field.YEAR_OF_ERA: 5, Field.ERA: 0, Field.MONTH_OF_YEAR: 1, Field.DAY_OF_MONTH: 1}
    assert resolve_date(values, STRICT) == JalaliDate(-4, 1, 1)
    values = {Field.YEAR_OF_ERA: 1403, Field.MONTH_OF_YEAR: 1, Field.DAY_OF_MONTH: 1}
    assert resolve_date(values, SMART) == JalaliDate(1403, 1, 1)
    # Strict mode leaves a lone year-of-era unresolved.
    assert resolve_date(values, STRICT) is None
    with pytest.raises(RangeError):
        resolve_date({Field.YEAR: 1403, Field.ERA: 2})


# ----------------------------------------------------------------------
# aligned weeks
# ----------------------------------------------------------------------

def test_year_month_aligned_week_aligned_day():
    values = {Field.YEAR: 1403, Field.MONTH_OF_YEAR: 1, Field.ALIGNED_WEEK_OF_MONTH: 2,
              Field.ALIGNED_DAY_OF_WEEK_IN_MONTH: 3}
    assert resolve_date(values) == JalaliDate(1403, 1, 10)

    values = {Field.YEAR: 1400, Field.MONTH_OF_YEAR: 12, Field.ALIGNED_WEEK_OF_MONTH: 5,
              Field.ALIGNED_DAY_OF_WEEK_IN_MONTH: 7}
    assert resolve_date(values, SMART) == JalaliDate(1401, 1, 6)
    with pytest.raises(CalendarStateError):
        resolve_date(values, STRICT)


def test_year_month_aligned_week_day_of_week():
    values = {Field.YEAR: 1403, Field.MONTH_OF_YEAR: 1, Field.ALIGNED_WEEK_OF_MONTH: 1, Field.DAY_OF_WEEK: 1}
    assert resolve_date(values) == JalaliDate(1403, 1, 6)


def test_year_aligned_week_aligned_day():
    values = {Field.YEAR: 1403, Field.ALIGNED_WEEK_OF_YEAR: 2, Field.ALIGNED_DAY_OF_WEEK_IN_YEAR: 1}
    assert resolve_date(values) == JalaliDate(1403, 1, 8)


def test_year_aligned_week_day_of_week():
    values = {Field.YEAR: 1403, Field.ALIGNED_WEEK_OF_YEAR: 1, Field.DAY_OF_WEEK: 3}
    assert resolve_date(values) == JalaliDate(1403, 1, 1)


def test_week_based_year():
    values = {Field.WEEK_BASED_YEAR: 1403, Field.WEEK_OF_WEEK_BASED_YEAR: 1, Field.DAY_OF_WEEK: 3}
    assert resolve_date(values, STRICT) == JalaliDate(1403, 1, 1)
    values = {Field.WEEK_BASED_YEAR: 1400, Field.WEEK_OF_WEEK_BASED_YEAR: 53, Field.DAY_OF_WEEK: 1}
    with pytest.raises(RangeError):
        resolve_date(values, STRICT)
    assert resolve_date(values, SMART) == JalaliDate(1401, 1, 1)


# ----------------------------------------------------------------------
# time fields
# ----------------------------------------------------------------------

def test_hour_24():
    r = resolve({Field.HOUR_OF_DAY: 24}, SMART)
    assert (r.time, r.excess_days) == (LocalTime.MIDNIGHT, 1)
    with pytest.raises(RangeError):
        resolve({Field.HOUR_OF_DAY: 24}, STRICT)


def test_lenient_time_carries_days():
    r = resolve({Field.HOUR_OF_DAY: 25, Field.MINUTE_OF_HOUR: 30}, LENIENT)
    assert (r.time, r.excess_days) == (LocalTime.of(1, 30), 1)
    r = resolve({Field.HOUR_OF_DAY: -1}, LENIENT)
    assert (r.time, r.excess_days) == (LocalTime.of(23), -1)


def test_clock_hours_and_ampm():
    r = resolve({Field.CLOCK_HOUR_OF_AMPM: 12, Field.AMPM_OF_DAY: 0})
    assert r.time == LocalTime.MIDNIGHT
    r = resolve({Field.CLOCK_HOUR_OF_AMPM: 3, Field.AMPM_OF_DAY: 1, Field.MINUTE_OF_HOUR: 15})
    assert r.time == LocalTime.of(15, 15)
    r = resolve({Field.CLOCK_HOUR_OF_DAY: 24})
    assert r.time == LocalTime.MIDNIGHT
    with pytest.raises(CalendarStateError):
        resolve({Field.CLOCK_HOUR_OF_DAY: 13, Field.HOUR_OF_DAY: 14})


def test_of_day_fields():
    assert resolve({Field.SECOND_OF_DAY: 3661}).time == LocalTime.of(1, 1, 1)
    assert resolve({Field.MINUTE_OF_DAY: 61}).time == LocalTime.of(1, 1)
    assert resolve({Field.NANO_OF_DAY: 3_600_000_000_001}).time == LocalTime.of(1, 0, 0, 1)
    assert resolve({Field.MILLI_OF_DAY: 3_600_250}).time == LocalTime.of(1, 0, 0, 250_000_000)


def test_sub_second_fields_merge():
    values = {Field.HOUR_OF_DAY: 1, Field.MINUTE_OF_HOUR: 2, Field.SECOND_OF_MINUTE: 3,
              Field.MILLI_OF_SECOND: 4, Field.MICRO_OF_SECOND: 4005}
    assert resolve(values).time == LocalTime.of(1, 2, 3, 4_005_000)


def test_gap_leaves_time_unresolved():
    r = resolve({Field.HOUR_OF_DAY: 1, Field.SECOND_OF_MINUTE: 5})
    assert r.time is None
    assert Field.HOUR_OF_DAY in r.leftovers


def test_to_date_time():
    r = resolve({**ymd(1400, 12, 29), Field.HOUR_OF_DAY: 24}, SMART)
    assert r.to_date_time() == JalaliDateTime.of(1401, 1, 1)
    assert resolve(ymd(1403, 1, 1)).to_date_time() == JalaliDateTime.of(1403, 1, 1)
    dt = JalaliDateTime.of(1403, 6, 31, 23, 59, 59, 999)
    assert resolve(field_values(dt), STRICT).to_date_time() == dt


def test_resolution_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="caljal.resolve"):
        resolve_date(ymd(1403, 1, 1))
    assert any("year-month-day" in r.getMessage() for r in caplog.records)


def test_leftover_time_fields_must_agree():
    with pytest.raises(CalendarStateError, match="AmPmOfDay"):
        resolve({**ymd(1403, 1, 1), Field.HOUR_OF_DAY: 1, Field.AMPM_OF_DAY: 1}, STRICT)
    r = resolve({**ymd(1403, 1, 1), Field.HOUR_OF_DAY: 13, Field.AMPM_OF_DAY: 1}, STRICT)
    assert r.to_date_time() == JalaliDateTime.of(1403, 1, 1, 13)
    assert r.leftovers == {}
    with pytest.raises(CalendarStateError):
        resolve({Field.HOUR_OF_DAY: 15, Field.HOUR_OF_AMPM: 2}, SMART)
