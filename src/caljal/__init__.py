"""caljal public API.

Jalali (Solar Hijri) calendar dates and date-times: epoch-day conversion,
overflow-checked arithmetic, Gregorian alignment and field resolution.
Most users need only the names re-exported here.
"""

import logging

from .api import (
    to_jalali,
    to_gregorian,
    today,
    now,
    is_leap_year,
    days_in_month,
    month_days,
    new_year_day,
    first_day_of_month,
    last_day_of_month,
    field_values,
    resolve,
)
from .core.errors import (
    CaljalError,
    RangeError,
    CalendarStateError,
    LeapDayError,
    CalendarOverflowError,
    UnsupportedTemporalError,
    ParseError,
)
from .core.types import Period, ValueRange
from .date import JalaliDate
from .date_time import JalaliDateTime
from .fields import DayOfWeek, Field, ResolverStyle, Unit
from .month import Month, MonthDay
from .resolve import FieldResolver, Resolved
from .time_of_day import LocalTime
from .year import JalaliYear

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "to_jalali",
    "to_gregorian",
    "today",
    "now",
    "is_leap_year",
    "days_in_month",
    "month_days",
    "new_year_day",
    "first_day_of_month",
    "last_day_of_month",
    "field_values",
    "resolve",
    "JalaliDate",
    "JalaliDateTime",
    "JalaliYear",
    "LocalTime",
    "Month",
    "MonthDay",
    "DayOfWeek",
    "Field",
    "Unit",
    "ResolverStyle",
    "FieldResolver",
    "Resolved",
    "Period",
    "ValueRange",
    "CaljalError",
    "RangeError",
    "CalendarStateError",
    "LeapDayError",
    "CalendarOverflowError",
    "UnsupportedTemporalError",
    "ParseError",
]
