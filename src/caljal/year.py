"""
caljal.year
-----------
Year arithmetic: leap predicate, year length, day counts and the two-era
proleptic model, plus the `JalaliYear` value.

Day counts are closed-form from the 33-year/8-leap cycle: any 33 consecutive
years hold exactly DAYS_PER_CYCLE days.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from .core.errors import CalendarOverflowError, UnsupportedTemporalError
from .core.time import trunc_div
from .core.types import ValueRange
from .fields import MAX_YEAR, MIN_YEAR, Field, Unit
from .rules import ACTIVE_RULE, get_cyclic_rule

if TYPE_CHECKING:
    from .date import JalaliDate
    from .month import MonthDay

__all__ = [
    "MIN_YEAR",
    "MAX_YEAR",
    "CYCLE_YEARS",
    "DAYS_PER_CYCLE",
    "is_leap",
    "year_length",
    "leap_years_before",
    "days_before_year",
    "era_of",
    "year_of_era",
    "proleptic_year",
    "check_year",
    "JalaliYear",
]

_RULE = get_cyclic_rule(ACTIVE_RULE)

CYCLE_YEARS = _RULE.modulus
DAYS_PER_CYCLE = _RULE.days_per_cycle  # 12053


def is_leap(year: int) -> bool:
    return _RULE.is_leap(year)


def year_length(year: int) -> int:
    return 366 if _RULE.is_leap(year) else 365


def leap_years_before(year: int) -> int:
    return _RULE.leaps_before(year)


def days_before_year(year: int) -> int:
    """Days from 1 Farvardin of year 0 to 1 Farvardin of `year` (signed)."""
    return 365 * year + _RULE.leaps_before(year)


def era_of(year: int) -> int:
    return 1 if year >= 1 else 0


def year_of_era(year: int) -> int:
    return year if year >= 1 else 1 - year


def proleptic_year(era: int, yoe: int) -> int:
    Field.ERA.check_valid_value(era)
    return yoe if era == 1 else 1 - yoe


def check_year(year: int) -> int:
    return Field.YEAR.check_valid_value(year)


def _checked_year(year: int) -> int:
    if not (MIN_YEAR <= year <= MAX_YEAR):
        raise CalendarOverflowError(f"Year {year} exceeds the supported range [{MIN_YEAR}, {MAX_YEAR}]")
    return year


_YEAR_FIELDS = (Field.YEAR, Field.YEAR_OF_ERA, Field.ERA)
_YEAR_UNITS = (Unit.YEARS, Unit.DECADES, Unit.CENTURIES, Unit.MILLENNIA, Unit.ERAS)


@dataclass(frozen=True, order=True)
class JalaliYear:
    """A bare proleptic year: leap classification, no month or day state."""
    value: int

    def __post_init__(self) -> None:
        check_year(self.value)

    @classmethod
    def of(cls, year: int) -> "JalaliYear":
        return cls(year)

    @classmethod
    def now(cls, tz=None) -> "JalaliYear":
        from .date import JalaliDate
        return cls(JalaliDate.today(tz).year)

    def is_leap(self) -> bool:
        return is_leap(self.value)

    def length(self) -> int:
        return year_length(self.value)

    # ---- field access ----

    def is_supported(self, item: Union[Field, Unit]) -> bool:
        if isinstance(item, Unit):
            return item in _YEAR_UNITS
        return item in _YEAR_FIELDS

    def range(self, field: Field) -> ValueRange:
        if field is Field.YEAR_OF_ERA:
            return ValueRange.of(1, MAX_YEAR + 1) if self.value <= 0 else ValueRange.of(1, MAX_YEAR)
        if field in _YEAR_FIELDS:
            return field.range()
        raise UnsupportedTemporalError(f"Unsupported field: {field}")

    def get(self, field: Field) -> int:
        if field is Field.YEAR:
            return self.value
        if field is Field.YEAR_OF_ERA:
            return year_of_era(self.value)
        if field is Field.ERA:
            return era_of(self.value)
        raise UnsupportedTemporalError(f"Unsupported field: {field}")

    def with_field(self, field: Field, value: int) -> "JalaliYear":
        if field not in _YEAR_FIELDS:
            raise UnsupportedTemporalError(f"Unsupported field: {field}")
        field.check_valid_value(value)
        if field is Field.YEAR:
            return JalaliYear(value)
        if field is Field.YEAR_OF_ERA:
            return JalaliYear(value if self.value >= 1 else 1 - value)
        return self if era_of(self.value) == value else JalaliYear(1 - self.value)

    # ---- arithmetic ----

    def plus_years(self, years: int) -> "JalaliYear":
        if years == 0:
            return self
        return JalaliYear(_checked_year(self.value + years))

    def minus_years(self, years: int) -> "JalaliYear":
        return self.plus_years(-years)

    def plus(self, amount: int, unit: Unit) -> "JalaliYear":
        if unit is Unit.YEARS:
            return self.plus_years(amount)
        if unit is Unit.DECADES:
            return self.plus_years(amount * 10)
        if unit is Unit.CENTURIES:
            return self.plus_years(amount * 100)
        if unit is Unit.MILLENNIA:
            return self.plus_years(amount * 1000)
        if unit is Unit.ERAS:
            return self.with_field(Field.ERA, era_of(self.value) + amount)
        raise UnsupportedTemporalError(f"Unsupported unit: {unit}")

    def minus(self, amount: int, unit: Unit) -> "JalaliYear":
        return self.plus(-amount, unit)

    def until(self, end: "JalaliYear", unit: Unit) -> int:
        """Whole units from this year to `end`, truncated toward zero."""
        years = end.value - self.value
        if unit is Unit.YEARS:
            return years
        if unit is Unit.DECADES:
            return trunc_div(years, 10)
        if unit is Unit.CENTURIES:
            return trunc_div(years, 100)
        if unit is Unit.MILLENNIA:
            return trunc_div(years, 1000)
        if unit is Unit.ERAS:
            return era_of(end.value) - era_of(self.value)
        raise UnsupportedTemporalError(f"Unsupported unit: {unit}")

    # ---- combination ----

    def at_day(self, day_of_year: int) -> "JalaliDate":
        from .date import JalaliDate
        return JalaliDate.of_year_day(self.value, day_of_year)

    def is_valid_month_day(self, month_day: Optional["MonthDay"]) -> bool:
        return month_day is not None and month_day.is_valid_year(self.value)

    def at_month_day(self, month_day: "MonthDay") -> "JalaliDate":
        return month_day.at_year(self.value)

    def __str__(self) -> str:
        return str(self.value)
