"""
caljal.week_fields
------------------
Week-based year and week-of-week-based-year on Jalali day-of-year.

Weeks start on Monday. Week 1 of a week-based year is the week containing
4 Farvardin, so a week-based year has 53 weeks exactly when 1 Farvardin is a
Thursday, or a Wednesday in a leap year.
"""

from __future__ import annotations

from typing import Dict

from .core.time import trunc_div
from .core.types import ValueRange
from .date import JalaliDate
from .fields import DayOfWeek, Field, ResolverStyle


def week_range(week_based_year: int) -> int:
    """Number of weeks (52 or 53) in `week_based_year`."""
    first = JalaliDate(week_based_year, 1, 1)
    dow = first.day_of_week
    if dow is DayOfWeek.THURSDAY or (dow is DayOfWeek.WEDNESDAY and first.is_leap_year()):
        return 53
    return 52


def week_based_year(d: JalaliDate) -> int:
    year = d.year
    doy = d.day_of_year
    dow0 = d.day_of_week.value - 1
    if doy <= 3:
        if doy - dow0 < -2:
            year -= 1
    elif doy >= 363:
        doy = doy - 363 - (1 if d.is_leap_year() else 0)
        if doy - dow0 >= 0:
            year += 1
    return year


def week_of_week_based_year(d: JalaliDate) -> int:
    dow0 = d.day_of_week.value - 1
    doy0 = d.day_of_year - 1
    doy_thu0 = doy0 + (3 - dow0)
    aligned_week = trunc_div(doy_thu0, 7)
    first_thu_doy0 = doy_thu0 - aligned_week * 7
    first_mon_doy0 = first_thu_doy0 - 3
    if first_mon_doy0 < -3:
        first_mon_doy0 += 7
    if doy0 < first_mon_doy0:
        # Belongs to the last week of the previous week-based year.
        return week_range(d.year - 1)
    week = (doy0 - first_mon_doy0) // 7 + 1
    if week == 53 and not (first_mon_doy0 == -3 or (first_mon_doy0 == -2 and d.is_leap_year())):
        week = 1
    return week


def range_of(d: JalaliDate) -> ValueRange:
    """Week-of-week-based-year range for the week-based year containing `d`."""
    return ValueRange.of(1, week_range(week_based_year(d)))


def with_week_based_year(d: JalaliDate, value: int) -> JalaliDate:
    """Move to `value`, keeping week number (53 -> 52 if needed) and day of week."""
    new_wby = Field.WEEK_BASED_YEAR.check_valid_value(value)
    week = week_of_week_based_year(d)
    if week == 53 and week_range(new_wby) == 52:
        week = 52
    anchor = JalaliDate(new_wby, 1, 4)
    return anchor.plus_days((d.day_of_week - anchor.day_of_week) + (week - 1) * 7)


def with_week_of_week_based_year(d: JalaliDate, value: int) -> JalaliDate:
    Field.WEEK_OF_WEEK_BASED_YEAR.check_valid_value(value)
    return d.plus_weeks(value - week_of_week_based_year(d))


def resolve(fields: Dict[Field, int], style: ResolverStyle) -> JalaliDate:
    """
    Build a date from WEEK_BASED_YEAR + WEEK_OF_WEEK_BASED_YEAR + DAY_OF_WEEK,
    consuming those entries from `fields`.

    STRICT accepts only weeks that exist in the target year; SMART also
    accepts week 53 (rolling into the next year); LENIENT accepts any week
    and day-of-week as further arithmetic.
    """
    wby = Field.WEEK_BASED_YEAR.check_valid_value(fields[Field.WEEK_BASED_YEAR])
    wowby = fields[Field.WEEK_OF_WEEK_BASED_YEAR]
    dow = fields[Field.DAY_OF_WEEK]
    anchor = JalaliDate(wby, 1, 4)
    if style is ResolverStyle.LENIENT:
        weeks, dow0 = divmod(dow - 1, 7)
        d = anchor.plus_weeks(weeks).plus_weeks(wowby - 1)
        dow = dow0 + 1
    else:
        Field.DAY_OF_WEEK.check_valid_value(dow)
        if not (1 <= wowby <= 52):
            if style is ResolverStyle.STRICT:
                ValueRange.of(1, week_range(wby)).check_valid_value(wowby, Field.WEEK_OF_WEEK_BASED_YEAR)
            else:
                Field.WEEK_OF_WEEK_BASED_YEAR.check_valid_value(wowby)
        d = anchor.plus_weeks(wowby - 1)
    d = d.plus_days(dow - d.day_of_week)
    del fields[Field.WEEK_OF_WEEK_BASED_YEAR]
    del fields[Field.WEEK_BASED_YEAR]
    del fields[Field.DAY_OF_WEEK]
    return d
