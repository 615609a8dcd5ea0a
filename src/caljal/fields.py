"""
caljal.fields
-------------
Field, unit and resolver-style identifiers shared by every value type.

Field identifiers follow the standard cross-calendar set so that a
formatting/parsing engine can talk to dates and times through
`get`/`with_field`/`range` without knowing anything about the calendar.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from .core.time import (
    MICROS_PER_DAY,
    MILLIS_PER_DAY,
    MINUTES_PER_DAY,
    NANOS_PER_DAY,
    NANOS_PER_HOUR,
    NANOS_PER_MICRO,
    NANOS_PER_MILLI,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
    SECONDS_PER_DAY,
)
from .core.types import ValueRange

MIN_YEAR = -999_999_999
MAX_YEAR = 999_999_999

# Epoch days of MIN (-999999999-01-01) and MAX (+999999999-12-30).
MIN_EPOCH_DAY = -365_242_916_510
MAX_EPOCH_DAY = 365_241_931_609

_TIME = "time"
_DATE = "date"
_WEEK = "week"


class Field(Enum):
    """Calendar and clock fields with their static value ranges."""

    NANO_OF_SECOND = ("NanoOfSecond", ValueRange.of(0, NANOS_PER_SECOND - 1), _TIME)
    NANO_OF_DAY = ("NanoOfDay", ValueRange.of(0, NANOS_PER_DAY - 1), _TIME)
    MICRO_OF_SECOND = ("MicroOfSecond", ValueRange.of(0, 999_999), _TIME)
    MICRO_OF_DAY = ("MicroOfDay", ValueRange.of(0, MICROS_PER_DAY - 1), _TIME)
    MILLI_OF_SECOND = ("MilliOfSecond", ValueRange.of(0, 999), _TIME)
    MILLI_OF_DAY = ("MilliOfDay", ValueRange.of(0, MILLIS_PER_DAY - 1), _TIME)
    SECOND_OF_MINUTE = ("SecondOfMinute", ValueRange.of(0, 59), _TIME)
    SECOND_OF_DAY = ("SecondOfDay", ValueRange.of(0, SECONDS_PER_DAY - 1), _TIME)
    MINUTE_OF_HOUR = ("MinuteOfHour", ValueRange.of(0, 59), _TIME)
    MINUTE_OF_DAY = ("MinuteOfDay", ValueRange.of(0, MINUTES_PER_DAY - 1), _TIME)
    HOUR_OF_AMPM = ("HourOfAmPm", ValueRange.of(0, 11), _TIME)
    CLOCK_HOUR_OF_AMPM = ("ClockHourOfAmPm", ValueRange.of(1, 12), _TIME)
    HOUR_OF_DAY = ("HourOfDay", ValueRange.of(0, 23), _TIME)
    CLOCK_HOUR_OF_DAY = ("ClockHourOfDay", ValueRange.of(1, 24), _TIME)
    AMPM_OF_DAY = ("AmPmOfDay", ValueRange.of(0, 1), _TIME)

    DAY_OF_WEEK = ("DayOfWeek", ValueRange.of(1, 7), _DATE)
    ALIGNED_DAY_OF_WEEK_IN_MONTH = ("AlignedDayOfWeekInMonth", ValueRange.of(1, 7), _DATE)
    ALIGNED_DAY_OF_WEEK_IN_YEAR = ("AlignedDayOfWeekInYear", ValueRange.of(1, 7), _DATE)
    DAY_OF_MONTH = ("DayOfMonth", ValueRange.of(1, 31, 29), _DATE)
    DAY_OF_YEAR = ("DayOfYear", ValueRange.of(1, 366, 365), _DATE)
    EPOCH_DAY = ("EpochDay", ValueRange.of(MIN_EPOCH_DAY, MAX_EPOCH_DAY), _DATE)
    ALIGNED_WEEK_OF_MONTH = ("AlignedWeekOfMonth", ValueRange.of(1, 5), _DATE)
    ALIGNED_WEEK_OF_YEAR = ("AlignedWeekOfYear", ValueRange.of(1, 53), _DATE)
    MONTH_OF_YEAR = ("MonthOfYear", ValueRange.of(1, 12), _DATE)
    PROLEPTIC_MONTH = ("ProlepticMonth", ValueRange.of(MIN_YEAR * 12, MAX_YEAR * 12 + 11), _DATE)
    YEAR_OF_ERA = ("YearOfEra", ValueRange.of(1, MAX_YEAR + 1, MAX_YEAR), _DATE)
    YEAR = ("Year", ValueRange.of(MIN_YEAR, MAX_YEAR), _DATE)
    ERA = ("Era", ValueRange.of(0, 1), _DATE)

    WEEK_BASED_YEAR = ("WeekBasedYear", ValueRange.of(MIN_YEAR, MAX_YEAR), _WEEK)
    WEEK_OF_WEEK_BASED_YEAR = ("WeekOfWeekBasedYear", ValueRange.of(1, 53, 52), _WEEK)

    def __init__(self, label: str, value_range: ValueRange, kind: str):
        self.label = label
        self._range = value_range
        self.kind = kind

    @property
    def is_time_based(self) -> bool:
        return self.kind == _TIME

    @property
    def is_date_based(self) -> bool:
        # Week-based fields are derived from the date as well.
        return self.kind != _TIME

    @property
    def is_week_based(self) -> bool:
        return self.kind == _WEEK

    def range(self) -> ValueRange:
        """Static range, independent of any particular date or time."""
        return self._range

    def check_valid_value(self, value: int) -> int:
        return self._range.check_valid_value(value, self)

    def __str__(self) -> str:
        return self.label


class Unit(Enum):
    """Units of amount; `nanos` is the (estimated, for date units) duration."""

    NANOS = ("Nanos", 1)
    MICROS = ("Micros", NANOS_PER_MICRO)
    MILLIS = ("Millis", NANOS_PER_MILLI)
    SECONDS = ("Seconds", NANOS_PER_SECOND)
    MINUTES = ("Minutes", NANOS_PER_MINUTE)
    HOURS = ("Hours", NANOS_PER_HOUR)
    HALF_DAYS = ("HalfDays", 12 * NANOS_PER_HOUR)
    DAYS = ("Days", NANOS_PER_DAY)
    WEEKS = ("Weeks", 7 * NANOS_PER_DAY)
    # Mean solar year of 365.2425 days, as used for estimated unit durations.
    MONTHS = ("Months", 31_556_952 * NANOS_PER_SECOND // 12)
    YEARS = ("Years", 31_556_952 * NANOS_PER_SECOND)
    DECADES = ("Decades", 31_556_952 * NANOS_PER_SECOND * 10)
    CENTURIES = ("Centuries", 31_556_952 * NANOS_PER_SECOND * 100)
    MILLENNIA = ("Millennia", 31_556_952 * NANOS_PER_SECOND * 1000)
    ERAS = ("Eras", 31_556_952 * NANOS_PER_SECOND * 1_000_000_000)
    FOREVER = ("Forever", None)

    def __init__(self, label: str, nanos):
        self.label = label
        self.nanos = nanos

    @property
    def is_time_based(self) -> bool:
        return self.nanos is not None and self.nanos < NANOS_PER_DAY

    @property
    def is_date_based(self) -> bool:
        return self.nanos is not None and self.nanos >= NANOS_PER_DAY

    def __str__(self) -> str:
        return self.label


class ResolverStyle(Enum):
    """How field resolution treats invalid or overflowing values."""

    STRICT = "strict"     # fail on any invalid combination
    SMART = "smart"       # range-check, then clamp an invalid day to the last valid one
    LENIENT = "lenient"   # treat overflow as further arithmetic


class DayOfWeek(IntEnum):
    """ISO day-of-week numbering, Monday=1 .. Sunday=7."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7

    @classmethod
    def of(cls, value: int) -> "DayOfWeek":
        Field.DAY_OF_WEEK.check_valid_value(value)
        return cls(value)

    def plus(self, days: int) -> "DayOfWeek":
        return DayOfWeek((self.value - 1 + days) % 7 + 1)

    def minus(self, days: int) -> "DayOfWeek":
        return self.plus(-days)
