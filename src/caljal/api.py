from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .core.accessor import FieldAccessor
from .core.accessor import field_values as _field_values
from .date import JalaliDate
from .date_time import JalaliDateTime
from .fields import Field, ResolverStyle
from .month import Month
from .resolve import FieldResolver, Resolved
from .year import is_leap


def to_jalali(d: date) -> JalaliDate | JalaliDateTime:
    """Gregorian date (or datetime) -> Jalali date (or date-time)."""
    if isinstance(d, datetime):
        return JalaliDateTime.from_gregorian(d)
    return JalaliDate.from_gregorian(d)


def to_gregorian(jd: JalaliDate | JalaliDateTime) -> date:
    return jd.to_gregorian()


def today(tz=None) -> JalaliDate:
    return JalaliDate.today(tz)


def now(tz=None) -> JalaliDateTime:
    return JalaliDateTime.now(tz)


def is_leap_year(y: int) -> bool:
    return is_leap(y)


def days_in_month(y: int, m: int) -> int:
    return Month.of(m).length(is_leap(y))


def new_year_day(y: int) -> JalaliDate:
    """1 Farvardin (Nowruz) of year `y`."""
    return JalaliDate.of(y, 1, 1)


def first_day_of_month(y: int, m: int) -> JalaliDate:
    return JalaliDate.of(y, m, 1)


def last_day_of_month(y: int, m: int) -> JalaliDate:
    return JalaliDate.of(y, m, days_in_month(y, m))


def month_days(y: int, m: int) -> List[Dict[str, Any]]:
    """One row per day of the month: Jalali date, Gregorian date, epoch day, weekday."""
    rows: List[Dict[str, Any]] = []
    d = first_day_of_month(y, m)
    for _ in range(days_in_month(y, m)):
        rows.append({
            "jalali": d,
            "gregorian": d.to_gregorian(),
            "epoch_day": d.to_epoch_day(),
            "weekday": d.day_of_week,
        })
        d = d.plus_days(1)
    return rows


def field_values(value: FieldAccessor, fields: Optional[Iterable[Field]] = None) -> Dict[Field, int]:
    """Read the supported `fields` (default: all) of a date, time or date-time."""
    return _field_values(value, fields)


def resolve(fields: Mapping[Field, int], style: ResolverStyle = ResolverStyle.SMART) -> Resolved:
    return FieldResolver(style).resolve(fields)
