"""
caljal.date_time
----------------
`JalaliDateTime`: a `JalaliDate` paired with a nanosecond `LocalTime`.

Time arithmetic adds a combined nanosecond delta to the time of day and
carries whole days into the date with floor division, so a negative delta
larger than one day still leaves the time inside [0, 1 day).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional, Union

from .alignment import GregorianAlignment
from .core.errors import ParseError, RangeError
from .core.time import (
    NANOS_PER_DAY,
    NANOS_PER_HOUR,
    NANOS_PER_MICRO,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
    SECONDS_PER_DAY,
    trunc_div,
)
from .core.types import ValueRange
from .date import JalaliDate
from .fields import Field, Unit
from .time_of_day import LocalTime

MAX_OFFSET = timedelta(hours=18)


def check_offset(offset: timedelta) -> int:
    """Offset from UTC as whole seconds; must lie within ±18 hours."""
    if abs(offset) > MAX_OFFSET:
        raise RangeError(f"Zone offset not in valid range: -18:00 to +18:00, got {offset}")
    return offset // timedelta(seconds=1)


@dataclass(frozen=True, order=True)
class JalaliDateTime:
    date: JalaliDate
    time: LocalTime

    def __post_init__(self) -> None:
        if not isinstance(self.date, JalaliDate):
            raise TypeError(f"date must be a JalaliDate, got {type(self.date).__name__}")
        if not isinstance(self.time, LocalTime):
            raise TypeError(f"time must be a LocalTime, got {type(self.time).__name__}")

    # ------------------------------------------------------------------
    # factories
    # ------------------------------------------------------------------

    @classmethod
    def of(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nano: int = 0,
    ) -> "JalaliDateTime":
        return cls(JalaliDate.of(year, month, day), LocalTime.of(hour, minute, second, nano))

    @classmethod
    def combine(cls, d: JalaliDate, t: Union[LocalTime, time]) -> "JalaliDateTime":
        if isinstance(t, time):
            t = LocalTime.from_time(t)
        return cls(d, t)

    @classmethod
    def from_digits(cls, text: str) -> "JalaliDateTime":
        """
        Read ``yyyyMMdd[hh[mm[ss[n...]]]]`` after dropping non-digits.

        8 to 23 digits are accepted. Trailing digits after the seconds are the
        nano-of-second as an integer.
        """
        digits = re.sub(r"\D", "", text)
        if not (8 <= len(digits) <= 23):
            raise ParseError(
                "Expected 8 to 23 digits (yyyyMMddhhmmssnnnnnnnnn)", text, index=min(len(digits), 23)
            )
        d = JalaliDate.of(int(digits[0:4]), int(digits[4:6]), int(digits[6:8]))
        hour = int(digits[8:10] or 0)
        minute = int(digits[10:12] or 0)
        second = int(digits[12:14] or 0)
        nano = int(digits[14:] or 0)
        return cls(d, LocalTime.of(hour, minute, second, nano))

    @classmethod
    def parse(cls, text: str) -> "JalaliDateTime":
        """Parse the canonical form, e.g. ``1403-01-01T12:30`` or ``1403-01-01T00:00:00.5``."""
        date_text, sep, time_text = text.partition("T")
        if not sep:
            raise ParseError("Text cannot be parsed as a date-time (missing 'T')", text, index=len(text))
        try:
            d = JalaliDate.parse(date_text)
            t = LocalTime.parse(time_text)
        except ParseError as exc:
            raise ParseError("Text cannot be parsed as a date-time", text, index=exc.index, cause=exc) from exc
        return cls(d, t)

    @classmethod
    def of_epoch_second(
        cls, epoch_second: int, nano: int = 0, offset: timedelta = timedelta(0)
    ) -> "JalaliDateTime":
        Field.NANO_OF_SECOND.check_valid_value(nano)
        local = epoch_second + check_offset(offset)
        epoch_day, second_of_day = divmod(local, SECONDS_PER_DAY)
        return cls(JalaliDate.of_epoch_day(epoch_day), LocalTime.of_second_of_day(second_of_day, nano))

    @classmethod
    def from_gregorian(
        cls, dt: datetime, alignment: Optional[GregorianAlignment] = None
    ) -> "JalaliDateTime":
        return cls(JalaliDate.from_gregorian(dt.date(), alignment), LocalTime.from_time(dt.time()))

    @classmethod
    def now(cls, tz=None) -> "JalaliDateTime":
        return cls.from_gregorian(datetime.now(tz))

    # ------------------------------------------------------------------
    # conversion
    # ------------------------------------------------------------------

    def to_epoch_second(self, offset: timedelta = timedelta(0)) -> int:
        return self.date.to_epoch_day() * SECONDS_PER_DAY + self.time.to_second_of_day() - check_offset(offset)

    def to_gregorian(self, alignment: Optional[GregorianAlignment] = None) -> datetime:
        """Naive datetime; nanoseconds are truncated to microseconds."""
        return datetime.combine(self.date.to_gregorian(alignment), self.time.to_time())

    # ------------------------------------------------------------------
    # field access
    # ------------------------------------------------------------------

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def day(self) -> int:
        return self.date.day

    @property
    def hour(self) -> int:
        return self.time.hour

    @property
    def minute(self) -> int:
        return self.time.minute

    @property
    def second(self) -> int:
        return self.time.second

    @property
    def nano(self) -> int:
        return self.time.nano

    @property
    def day_of_year(self) -> int:
        return self.date.day_of_year

    @property
    def day_of_week(self):
        return self.date.day_of_week

    def is_supported(self, item: Union[Field, Unit]) -> bool:
        return item is not Unit.FOREVER

    def range(self, field: Field) -> ValueRange:
        return self.time.range(field) if field.is_time_based else self.date.range(field)

    def get(self, field: Field) -> int:
        return self.time.get(field) if field.is_time_based else self.date.get(field)

    def with_field(self, field: Field, value: int) -> "JalaliDateTime":
        if field.is_time_based:
            return self.with_time(self.time.with_field(field, value))
        return self.with_date(self.date.with_field(field, value))

    def with_date(self, d: JalaliDate) -> "JalaliDateTime":
        return self if d == self.date else JalaliDateTime(d, self.time)

    def with_time(self, t: LocalTime) -> "JalaliDateTime":
        return self if t == self.time else JalaliDateTime(self.date, t)

    def with_year(self, year: int) -> "JalaliDateTime":
        return self.with_date(self.date.with_year(year))

    def with_month(self, month: int) -> "JalaliDateTime":
        return self.with_date(self.date.with_month(month))

    def with_day_of_month(self, day: int) -> "JalaliDateTime":
        return self.with_date(self.date.with_day_of_month(day))

    def with_day_of_year(self, day_of_year: int) -> "JalaliDateTime":
        return self.with_date(self.date.with_day_of_year(day_of_year))

    def with_hour(self, hour: int) -> "JalaliDateTime":
        return self.with_time(self.time.with_hour(hour))

    def with_minute(self, minute: int) -> "JalaliDateTime":
        return self.with_time(self.time.with_minute(minute))

    def with_second(self, second: int) -> "JalaliDateTime":
        return self.with_time(self.time.with_second(second))

    def with_nano(self, nano: int) -> "JalaliDateTime":
        return self.with_time(self.time.with_nano(nano))

    # ------------------------------------------------------------------
    # arithmetic
    # ------------------------------------------------------------------

    def plus_years(self, years: int) -> "JalaliDateTime":
        return self.with_date(self.date.plus_years(years))

    def plus_months(self, months: int) -> "JalaliDateTime":
        return self.with_date(self.date.plus_months(months))

    def plus_weeks(self, weeks: int) -> "JalaliDateTime":
        return self.with_date(self.date.plus_weeks(weeks))

    def plus_days(self, days: int) -> "JalaliDateTime":
        return self.with_date(self.date.plus_days(days))

    def _plus_with_overflow(self, hours: int, minutes: int, seconds: int, nanos: int) -> "JalaliDateTime":
        delta = hours * NANOS_PER_HOUR + minutes * NANOS_PER_MINUTE + seconds * NANOS_PER_SECOND + nanos
        if delta == 0:
            return self
        day_carry, nano_of_day = divmod(self.time.nano_of_day + delta, NANOS_PER_DAY)
        return JalaliDateTime(self.date.plus_days(day_carry), LocalTime(nano_of_day))

    def plus_hours(self, hours: int) -> "JalaliDateTime":
        return self._plus_with_overflow(hours, 0, 0, 0)

    def plus_minutes(self, minutes: int) -> "JalaliDateTime":
        return self._plus_with_overflow(0, minutes, 0, 0)

    def plus_seconds(self, seconds: int) -> "JalaliDateTime":
        return self._plus_with_overflow(0, 0, seconds, 0)

    def plus_nanos(self, nanos: int) -> "JalaliDateTime":
        return self._plus_with_overflow(0, 0, 0, nanos)

    def minus_years(self, years: int) -> "JalaliDateTime":
        return self.plus_years(-years)

    def minus_months(self, months: int) -> "JalaliDateTime":
        return self.plus_months(-months)

    def minus_weeks(self, weeks: int) -> "JalaliDateTime":
        return self.plus_weeks(-weeks)

    def minus_days(self, days: int) -> "JalaliDateTime":
        return self.plus_days(-days)

    def minus_hours(self, hours: int) -> "JalaliDateTime":
        return self.plus_hours(-hours)

    def minus_minutes(self, minutes: int) -> "JalaliDateTime":
        return self.plus_minutes(-minutes)

    def minus_seconds(self, seconds: int) -> "JalaliDateTime":
        return self.plus_seconds(-seconds)

    def minus_nanos(self, nanos: int) -> "JalaliDateTime":
        return self.plus_nanos(-nanos)

    def plus(self, amount: int, unit: Unit) -> "JalaliDateTime":
        if unit.is_time_based:
            return self.plus_nanos(amount * unit.nanos)
        return self.with_date(self.date.plus(amount, unit))

    def minus(self, amount: int, unit: Unit) -> "JalaliDateTime":
        return self.plus(-amount, unit)

    def truncated_to(self, unit: Unit) -> "JalaliDateTime":
        return self.with_time(self.time.truncated_to(unit))

    def __add__(self, other):
        if isinstance(other, timedelta):
            return self.plus_nanos(
                (other.days * SECONDS_PER_DAY + other.seconds) * NANOS_PER_SECOND
                + other.microseconds * NANOS_PER_MICRO
            )
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, timedelta):
            return self + (-other)
        if isinstance(other, JalaliDateTime):
            return timedelta(microseconds=other.until(self, Unit.MICROS))
        return NotImplemented

    # ------------------------------------------------------------------
    # differences
    # ------------------------------------------------------------------

    def until(self, end: "JalaliDateTime", unit: Unit) -> int:
        """Whole `unit`s from this date-time to `end`, truncated toward zero."""
        if unit.is_time_based:
            days = self.date.days_until(end.date)
            if days == 0:
                return self.time.until(end.time, unit)
            time_part = end.time.nano_of_day - self.time.nano_of_day
            if days > 0:
                days -= 1
                time_part += NANOS_PER_DAY
            else:
                days += 1
                time_part -= NANOS_PER_DAY
            return days * (NANOS_PER_DAY // unit.nanos) + trunc_div(time_part, unit.nanos)

        end_date = end.date
        if end_date > self.date and end.time < self.time:
            end_date = end_date.minus_days(1)
        elif end_date < self.date and end.time > self.time:
            end_date = end_date.plus_days(1)
        return self.date.until(end_date, unit)

    def __str__(self) -> str:
        return f"{self.date}T{self.time}"
