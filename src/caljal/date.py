"""
caljal.date
-----------
`JalaliDate`: an immutable, always-valid (year, month, day).

Epoch-day coordinate
~~~~~~~~~~~~~~~~~~~~
Epoch day 0 is 11 Dey 1348, which is Gregorian 1970-01-01. The forward map
is closed-form::

    to_epoch_day(y, m, d) = days_before_year(y) + day_of_year - 492634

The inverse (and `plus_days`) walks from a known position: whole 33-year
cycles are skipped first, then the remainder is consumed year by year,
forward or backward depending on its sign, and finally month by month.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Optional, Tuple, Union

from .alignment import GregorianAlignment, DEFAULT_ALIGNMENT, epoch_day_for, gregorian_date_for
from .core.errors import (
    CaljalError,
    CalendarOverflowError,
    CalendarStateError,
    LeapDayError,
    ParseError,
    UnsupportedTemporalError,
)
from .core.time import trunc_div
from .core.types import Period, ValueRange
from .fields import MAX_EPOCH_DAY, MAX_YEAR, MIN_EPOCH_DAY, MIN_YEAR, DayOfWeek, Field, Unit
from .month import Month
from .year import CYCLE_YEARS, DAYS_PER_CYCLE, days_before_year, era_of, is_leap, year_length, year_of_era

if TYPE_CHECKING:
    from .date_time import JalaliDateTime
    from .time_of_day import LocalTime

_EPOCH_SHIFT = 492634

_DATE_RE = re.compile(r"([+-]?)(\d{4,10})-(\d{2})-(\d{2})")


def _month_of_day_of_year(day_of_year: int) -> Month:
    # Months 7..12 are one day shorter, so the 31-day estimate lags by at most one month.
    m = Month((day_of_year - 1) // 31 + 1)
    if day_of_year > m.first_day_of_year() + m.length(True) - 1:
        m = m.plus(1)
    return m


def _walk(year: int, doy0: int, days: int) -> Tuple[int, int]:
    """
    Move `days` from (year, zero-based day-of-year) and return the new
    (year, zero-based day-of-year).
    """
    doy0 += days
    cycles = trunc_div(doy0, DAYS_PER_CYCLE)
    year += cycles * CYCLE_YEARS
    doy0 -= cycles * DAYS_PER_CYCLE
    while doy0 >= year_length(year):
        doy0 -= year_length(year)
        year += 1
    while doy0 < 0:
        year -= 1
        doy0 += year_length(year)
    return year, doy0


def _check_epoch_day(epoch_day: int) -> None:
    if not (MIN_EPOCH_DAY <= epoch_day <= MAX_EPOCH_DAY):
        raise CalendarOverflowError(
            f"Epoch day {epoch_day} exceeds the supported range [{MIN_EPOCH_DAY}, {MAX_EPOCH_DAY}]"
        )


def _check_year_overflow(year: int) -> None:
    if not (MIN_YEAR <= year <= MAX_YEAR):
        raise CalendarOverflowError(f"Year {year} exceeds the supported range [{MIN_YEAR}, {MAX_YEAR}]")


def _resolve_previous_valid(year: int, month: int, day: int) -> "JalaliDate":
    return JalaliDate(year, month, min(day, Month(month).length(is_leap(year))))


def _as_date(value) -> "JalaliDate":
    if isinstance(value, JalaliDate):
        return value
    inner = getattr(value, "date", None)
    if isinstance(inner, JalaliDate):
        return inner
    raise TypeError(f"Expected a JalaliDate or JalaliDateTime, got {type(value).__name__}")


@dataclass(frozen=True, order=True)
class JalaliDate:
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        Field.YEAR.check_valid_value(self.year)
        Field.MONTH_OF_YEAR.check_valid_value(self.month)
        Field.DAY_OF_MONTH.check_valid_value(self.day)
        if self.day > 29:
            m = Month(self.month)
            if self.day > m.length(is_leap(self.year)):
                if self.day == 30 and m is Month.ESFAND:
                    raise LeapDayError(
                        f"Invalid date 'Esfand 30' as '{self.year}' is not a leap year", self.year
                    )
                raise CalendarStateError(f"Invalid date '{m.display_name} {self.day}'")

    # ------------------------------------------------------------------
    # factories
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, year: int, month: int, day: int) -> "JalaliDate":
        return cls(year, int(month), day)

    @classmethod
    def of_year_day(cls, year: int, day_of_year: int) -> "JalaliDate":
        Field.YEAR.check_valid_value(year)
        Field.DAY_OF_YEAR.check_valid_value(day_of_year)
        if day_of_year == 366 and not is_leap(year):
            raise LeapDayError(f"Invalid date 'DayOfYear 366' as '{year}' is not a leap year", year)
        m = _month_of_day_of_year(day_of_year)
        return cls(year, m.value, day_of_year - m.first_day_of_year() + 1)

    @classmethod
    def _of_year_doy0(cls, year: int, doy0: int) -> "JalaliDate":
        m = _month_of_day_of_year(doy0 + 1)
        return cls(year, m.value, doy0 + 2 - m.first_day_of_year())

    @classmethod
    def of_epoch_day(cls, epoch_day: int) -> "JalaliDate":
        Field.EPOCH_DAY.check_valid_value(epoch_day)
        return cls._of_year_doy0(*_walk(EPOCH.year, EPOCH.day_of_year - 1, epoch_day))

    @classmethod
    def from_gregorian(cls, g: date, alignment: Optional[GregorianAlignment] = None) -> "JalaliDate":
        if isinstance(g, datetime):
            g = g.date()
        return cls.of_epoch_day(epoch_day_for(g, alignment or DEFAULT_ALIGNMENT))

    @classmethod
    def today(cls, tz=None) -> "JalaliDate":
        return cls.from_gregorian(datetime.now(tz).date())

    @classmethod
    def from_digits(cls, text: str) -> "JalaliDate":
        """Read yyyyMMdd from `text` after dropping every non-digit character."""
        digits = re.sub(r"\D", "", text)
        if len(digits) != 8:
            raise ParseError("Expected exactly 8 digits (yyyyMMdd)", text, index=min(len(digits), 8))
        return cls.of(int(digits[0:4]), int(digits[4:6]), int(digits[6:8]))

    @classmethod
    def parse(cls, text: str) -> "JalaliDate":
        """Parse the canonical form, e.g. ``1403-01-01``, ``-0001-12-29``, ``+10000-01-01``."""
        m = _DATE_RE.fullmatch(text)
        if m is None:
            raise ParseError("Text cannot be parsed as a date (±YYYY-MM-DD)", text)
        sign, year_text = m.group(1), m.group(2)
        if len(year_text) > 4 and not sign:
            raise ParseError("Years beyond 9999 require an explicit sign", text)
        year = -int(year_text) if sign == "-" else int(year_text)
        try:
            return cls(year, int(m.group(3)), int(m.group(4)))
        except CaljalError as exc:
            raise ParseError(str(exc), text, index=m.start(3), cause=exc) from exc

    # ------------------------------------------------------------------
    # field read
    # ------------------------------------------------------------------

    @property
    def month_of_year(self) -> Month:
        return Month(self.month)

    @property
    def day_of_year(self) -> int:
        return Month(self.month).first_day_of_year() + self.day - 1

    @property
    def day_of_week(self) -> DayOfWeek:
        return DayOfWeek((self.to_epoch_day() + 3) % 7 + 1)

    @property
    def era(self) -> int:
        return era_of(self.year)

    @property
    def year_of_era(self) -> int:
        return year_of_era(self.year)

    @property
    def proleptic_month(self) -> int:
        return self.year * 12 + self.month - 1

    def is_leap_year(self) -> bool:
        return is_leap(self.year)

    def length_of_month(self) -> int:
        return Month(self.month).length(is_leap(self.year))

    def length_of_year(self) -> int:
        return year_length(self.year)

    def to_epoch_day(self) -> int:
        return days_before_year(self.year) + self.day_of_year - _EPOCH_SHIFT

    def to_gregorian(self, alignment: Optional[GregorianAlignment] = None) -> date:
        return gregorian_date_for(self.to_epoch_day(), alignment or DEFAULT_ALIGNMENT)

    def is_supported(self, item: Union[Field, Unit]) -> bool:
        return item.is_date_based

    def range(self, field: Field) -> ValueRange:
        if field.is_time_based:
            raise UnsupportedTemporalError(f"Unsupported field: {field}")
        if field is Field.DAY_OF_MONTH:
            return ValueRange.of(1, self.length_of_month())
        if field is Field.DAY_OF_YEAR:
            return ValueRange.of(1, self.length_of_year())
        if field is Field.ALIGNED_WEEK_OF_MONTH:
            return ValueRange.of(1, 5)
        if field is Field.YEAR_OF_ERA:
            return ValueRange.of(1, MAX_YEAR + 1) if self.year <= 0 else ValueRange.of(1, MAX_YEAR)
        if field is Field.WEEK_OF_WEEK_BASED_YEAR:
            from . import week_fields
            return week_fields.range_of(self)
        return field.range()

    def get(self, field: Field) -> int:
        if field is Field.DAY_OF_WEEK:
            return self.day_of_week.value
        if field is Field.ALIGNED_DAY_OF_WEEK_IN_MONTH:
            return (self.day - 1) % 7 + 1
        if field is Field.ALIGNED_DAY_OF_WEEK_IN_YEAR:
            return (self.day_of_year - 1) % 7 + 1
        if field is Field.DAY_OF_MONTH:
            return self.day
        if field is Field.DAY_OF_YEAR:
            return self.day_of_year
        if field is Field.EPOCH_DAY:
            return self.to_epoch_day()
        if field is Field.ALIGNED_WEEK_OF_MONTH:
            return (self.day - 1) // 7 + 1
        if field is Field.ALIGNED_WEEK_OF_YEAR:
            return (self.day_of_year - 1) // 7 + 1
        if field is Field.MONTH_OF_YEAR:
            return self.month
        if field is Field.PROLEPTIC_MONTH:
            return self.proleptic_month
        if field is Field.YEAR_OF_ERA:
            return self.year_of_era
        if field is Field.YEAR:
            return self.year
        if field is Field.ERA:
            return self.era
        if field.is_week_based:
            from . import week_fields
            if field is Field.WEEK_BASED_YEAR:
                return week_fields.week_based_year(self)
            return week_fields.week_of_week_based_year(self)
        raise UnsupportedTemporalError(f"Unsupported field: {field}")

    # ------------------------------------------------------------------
    # field write
    # ------------------------------------------------------------------

    def with_field(self, field: Field, value: int) -> "JalaliDate":
        if field.is_time_based:
            raise UnsupportedTemporalError(f"Unsupported field: {field}")
        if field.is_week_based:
            from . import week_fields
            if field is Field.WEEK_BASED_YEAR:
                return week_fields.with_week_based_year(self, value)
            return week_fields.with_week_of_week_based_year(self, value)

        field.check_valid_value(value)
        if field in (Field.DAY_OF_WEEK, Field.ALIGNED_DAY_OF_WEEK_IN_MONTH, Field.ALIGNED_DAY_OF_WEEK_IN_YEAR):
            return self.plus_days(value - self.get(field))
        if field is Field.DAY_OF_MONTH:
            return self.with_day_of_month(value)
        if field is Field.DAY_OF_YEAR:
            return self.with_day_of_year(value)
        if field is Field.EPOCH_DAY:
            return JalaliDate.of_epoch_day(value)
        if field in (Field.ALIGNED_WEEK_OF_MONTH, Field.ALIGNED_WEEK_OF_YEAR):
            return self.plus_weeks(value - self.get(field))
        if field is Field.MONTH_OF_YEAR:
            return self.with_month(value)
        if field is Field.PROLEPTIC_MONTH:
            return self.plus_months(value - self.proleptic_month)
        if field is Field.YEAR_OF_ERA:
            return self.with_year(value if self.year >= 1 else 1 - value)
        if field is Field.YEAR:
            return self.with_year(value)
        # ERA
        return self if self.era == value else self.with_year(1 - self.year)

    def with_year(self, year: int) -> "JalaliDate":
        """Change the year; 30 Esfand becomes 29 Esfand in a common year."""
        if year == self.year:
            return self
        Field.YEAR.check_valid_value(year)
        return _resolve_previous_valid(year, self.month, self.day)

    def with_month(self, month: int) -> "JalaliDate":
        """Change the month, clamping the day to the new month's last day."""
        if month == self.month:
            return self
        Field.MONTH_OF_YEAR.check_valid_value(month)
        return _resolve_previous_valid(self.year, month, self.day)

    def with_day_of_month(self, day: int) -> "JalaliDate":
        if day == self.day:
            return self
        return JalaliDate(self.year, self.month, day)

    def with_day_of_year(self, day_of_year: int) -> "JalaliDate":
        if day_of_year == self.day_of_year:
            return self
        return JalaliDate.of_year_day(self.year, day_of_year)

    # ------------------------------------------------------------------
    # arithmetic
    # ------------------------------------------------------------------

    def plus_days(self, days: int) -> "JalaliDate":
        if days == 0:
            return self
        _check_epoch_day(self.to_epoch_day() + days)
        return JalaliDate._of_year_doy0(*_walk(self.year, self.day_of_year - 1, days))

    def plus_weeks(self, weeks: int) -> "JalaliDate":
        return self.plus_days(weeks * 7)

    def plus_months(self, months: int) -> "JalaliDate":
        """Add months; a day past the target month's end is clamped to its last day."""
        if months == 0:
            return self
        year, m0 = divmod(self.proleptic_month + months, 12)
        _check_year_overflow(year)
        return _resolve_previous_valid(year, m0 + 1, self.day)

    def plus_years(self, years: int) -> "JalaliDate":
        if years == 0:
            return self
        year = self.year + years
        _check_year_overflow(year)
        return _resolve_previous_valid(year, self.month, self.day)

    def minus_days(self, days: int) -> "JalaliDate":
        return self.plus_days(-days)

    def minus_weeks(self, weeks: int) -> "JalaliDate":
        return self.plus_weeks(-weeks)

    def minus_months(self, months: int) -> "JalaliDate":
        return self.plus_months(-months)

    def minus_years(self, years: int) -> "JalaliDate":
        return self.plus_years(-years)

    def plus(self, amount: int, unit: Unit) -> "JalaliDate":
        if unit is Unit.DAYS:
            return self.plus_days(amount)
        if unit is Unit.WEEKS:
            return self.plus_weeks(amount)
        if unit is Unit.MONTHS:
            return self.plus_months(amount)
        if unit is Unit.YEARS:
            return self.plus_years(amount)
        if unit is Unit.DECADES:
            return self.plus_years(amount * 10)
        if unit is Unit.CENTURIES:
            return self.plus_years(amount * 100)
        if unit is Unit.MILLENNIA:
            return self.plus_years(amount * 1000)
        if unit is Unit.ERAS:
            return self.with_field(Field.ERA, self.era + amount)
        raise UnsupportedTemporalError(f"Unsupported unit: {unit}")

    def minus(self, amount: int, unit: Unit) -> "JalaliDate":
        return self.plus(-amount, unit)

    def plus_period(self, period: Period) -> "JalaliDate":
        return self.plus_months(period.total_months()).plus_days(period.days)

    def minus_period(self, period: Period) -> "JalaliDate":
        return self.plus_period(period.negated())

    def __add__(self, other):
        if isinstance(other, timedelta):
            return self.plus_days(other.days)
        if isinstance(other, Period):
            return self.plus_period(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, timedelta):
            return self.plus_days(-other.days)
        if isinstance(other, Period):
            return self.minus_period(other)
        if isinstance(other, JalaliDate):
            return timedelta(days=self.to_epoch_day() - other.to_epoch_day())
        return NotImplemented

    # ------------------------------------------------------------------
    # differences
    # ------------------------------------------------------------------

    def days_until(self, end: "JalaliDate") -> int:
        return end.to_epoch_day() - self.to_epoch_day()

    def _months_until(self, end: "JalaliDate") -> int:
        # Pack (month, day) so a partial final month does not count.
        packed1 = self.proleptic_month * 32 + self.day
        packed2 = end.proleptic_month * 32 + end.day
        return trunc_div(packed2 - packed1, 32)

    def until(self, end, unit: Unit) -> int:
        """Whole `unit`s from this date to `end` (exclusive), truncated toward zero."""
        end = _as_date(end)
        if unit is Unit.DAYS:
            return self.days_until(end)
        if unit is Unit.WEEKS:
            return trunc_div(self.days_until(end), 7)
        if unit is Unit.MONTHS:
            return self._months_until(end)
        if unit is Unit.YEARS:
            return trunc_div(self._months_until(end), 12)
        if unit is Unit.DECADES:
            return trunc_div(self._months_until(end), 120)
        if unit is Unit.CENTURIES:
            return trunc_div(self._months_until(end), 1200)
        if unit is Unit.MILLENNIA:
            return trunc_div(self._months_until(end), 12000)
        if unit is Unit.ERAS:
            return end.era - self.era
        raise UnsupportedTemporalError(f"Unsupported unit: {unit}")

    def period_until(self, end) -> Period:
        end = _as_date(end)
        total_months = end.proleptic_month - self.proleptic_month
        days = end.day - self.day
        if total_months > 0 and days < 0:
            total_months -= 1
            days = end.to_epoch_day() - self.plus_months(total_months).to_epoch_day()
        elif total_months < 0 and days > 0:
            total_months += 1
            days -= end.length_of_month()
        years = trunc_div(total_months, 12)
        return Period(years, total_months - years * 12, days)

    # ------------------------------------------------------------------
    # combination
    # ------------------------------------------------------------------

    def at_time(self, hour, minute: int = 0, second: int = 0, nano: int = 0) -> "JalaliDateTime":
        """Combine with a time: a LocalTime, a datetime.time, or hour/minute/second/nano."""
        from .date_time import JalaliDateTime
        from .time_of_day import LocalTime
        if isinstance(hour, int):
            return JalaliDateTime(self, LocalTime.of(hour, minute, second, nano))
        return JalaliDateTime.combine(self, hour)

    def at_start_of_day(self) -> "JalaliDateTime":
        from .date_time import JalaliDateTime
        from .time_of_day import LocalTime
        return JalaliDateTime(self, LocalTime.MIDNIGHT)

    def __str__(self) -> str:
        y = self.year
        sign = "-" if y < 0 else ("+" if y > 9999 else "")
        return f"{sign}{abs(y):04d}-{self.month:02d}-{self.day:02d}"


EPOCH = JalaliDate(1348, 10, 11)
JalaliDate.EPOCH = EPOCH
JalaliDate.MIN = JalaliDate(MIN_YEAR, 1, 1)
JalaliDate.MAX = JalaliDate(MAX_YEAR, 12, 30)
