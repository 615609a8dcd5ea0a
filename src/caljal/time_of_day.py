"""
caljal.time_of_day
------------------
`LocalTime`: a nanosecond-precision time of day, stored as nanos since
midnight. datetime.time stops at microseconds, so the date-time type keeps
its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import time
from typing import Union

from .core.errors import CaljalError, ParseError, UnsupportedTemporalError
from .core.time import (
    MINUTES_PER_HOUR,
    NANOS_PER_DAY,
    NANOS_PER_HOUR,
    NANOS_PER_MICRO,
    NANOS_PER_MILLI,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
    SECONDS_PER_DAY,
    trunc_div,
)
from .core.types import ValueRange
from .fields import Field, Unit

_TIME_RE = re.compile(r"(\d{2}):(\d{2})(?::(\d{2})(?:\.(\d{1,9}))?)?")


@dataclass(frozen=True, order=True)
class LocalTime:
    nano_of_day: int

    def __post_init__(self) -> None:
        Field.NANO_OF_DAY.check_valid_value(self.nano_of_day)

    @classmethod
    def of(cls, hour: int, minute: int = 0, second: int = 0, nano: int = 0) -> "LocalTime":
        Field.HOUR_OF_DAY.check_valid_value(hour)
        Field.MINUTE_OF_HOUR.check_valid_value(minute)
        Field.SECOND_OF_MINUTE.check_valid_value(second)
        Field.NANO_OF_SECOND.check_valid_value(nano)
        return cls(hour * NANOS_PER_HOUR + minute * NANOS_PER_MINUTE + second * NANOS_PER_SECOND + nano)

    @classmethod
    def of_nano_of_day(cls, nano_of_day: int) -> "LocalTime":
        return cls(nano_of_day)

    @classmethod
    def of_second_of_day(cls, second_of_day: int, nano: int = 0) -> "LocalTime":
        Field.SECOND_OF_DAY.check_valid_value(second_of_day)
        Field.NANO_OF_SECOND.check_valid_value(nano)
        return cls(second_of_day * NANOS_PER_SECOND + nano)

    @classmethod
    def from_time(cls, t: time) -> "LocalTime":
        return cls.of(t.hour, t.minute, t.second, t.microsecond * NANOS_PER_MICRO)

    @classmethod
    def parse(cls, text: str) -> "LocalTime":
        """Parse ``HH:mm``, ``HH:mm:ss`` or ``HH:mm:ss.f`` with 1 to 9 fraction digits."""
        m = _TIME_RE.fullmatch(text)
        if m is None:
            raise ParseError("Text cannot be parsed as a time (HH:mm[:ss[.f]])", text)
        fraction = m.group(4) or ""
        try:
            return cls.of(
                int(m.group(1)),
                int(m.group(2)),
                int(m.group(3) or 0),
                int(fraction.ljust(9, "0")) if fraction else 0,
            )
        except CaljalError as exc:
            raise ParseError(str(exc), text, cause=exc) from exc

    @property
    def hour(self) -> int:
        return self.nano_of_day // NANOS_PER_HOUR

    @property
    def minute(self) -> int:
        return (self.nano_of_day // NANOS_PER_MINUTE) % MINUTES_PER_HOUR

    @property
    def second(self) -> int:
        return (self.nano_of_day // NANOS_PER_SECOND) % 60

    @property
    def nano(self) -> int:
        return self.nano_of_day % NANOS_PER_SECOND

    def to_second_of_day(self) -> int:
        return self.nano_of_day // NANOS_PER_SECOND

    def to_time(self) -> time:
        """datetime.time, truncating to microseconds."""
        return time(self.hour, self.minute, self.second, self.nano // NANOS_PER_MICRO)

    # ---- fields ----

    def is_supported(self, item: Union[Field, Unit]) -> bool:
        return item.is_time_based

    def range(self, field: Field) -> ValueRange:
        if not field.is_time_based:
            raise UnsupportedTemporalError(f"Unsupported field: {field}")
        return field.range()

    def get(self, field: Field) -> int:
        nod = self.nano_of_day
        if field is Field.NANO_OF_SECOND:
            return self.nano
        if field is Field.NANO_OF_DAY:
            return nod
        if field is Field.MICRO_OF_SECOND:
            return self.nano // NANOS_PER_MICRO
        if field is Field.MICRO_OF_DAY:
            return nod // NANOS_PER_MICRO
        if field is Field.MILLI_OF_SECOND:
            return self.nano // NANOS_PER_MILLI
        if field is Field.MILLI_OF_DAY:
            return nod // NANOS_PER_MILLI
        if field is Field.SECOND_OF_MINUTE:
            return self.second
        if field is Field.SECOND_OF_DAY:
            return self.to_second_of_day()
        if field is Field.MINUTE_OF_HOUR:
            return self.minute
        if field is Field.MINUTE_OF_DAY:
            return nod // NANOS_PER_MINUTE
        if field is Field.HOUR_OF_AMPM:
            return self.hour % 12
        if field is Field.CLOCK_HOUR_OF_AMPM:
            ham = self.hour % 12
            return 12 if ham == 0 else ham
        if field is Field.HOUR_OF_DAY:
            return self.hour
        if field is Field.CLOCK_HOUR_OF_DAY:
            return 24 if self.hour == 0 else self.hour
        if field is Field.AMPM_OF_DAY:
            return self.hour // 12
        raise UnsupportedTemporalError(f"Unsupported field: {field}")

    def with_field(self, field: Field, value: int) -> "LocalTime":
        if not field.is_time_based:
            raise UnsupportedTemporalError(f"Unsupported field: {field}")
        field.check_valid_value(value)
        if field is Field.NANO_OF_SECOND:
            return self.with_nano(value)
        if field is Field.NANO_OF_DAY:
            return LocalTime(value)
        if field is Field.MICRO_OF_SECOND:
            return self.with_nano(value * NANOS_PER_MICRO)
        if field is Field.MICRO_OF_DAY:
            return LocalTime(value * NANOS_PER_MICRO)
        if field is Field.MILLI_OF_SECOND:
            return self.with_nano(value * NANOS_PER_MILLI)
        if field is Field.MILLI_OF_DAY:
            return LocalTime(value * NANOS_PER_MILLI)
        if field is Field.SECOND_OF_MINUTE:
            return self.with_second(value)
        if field is Field.SECOND_OF_DAY:
            return self.plus_seconds(value - self.to_second_of_day())
        if field is Field.MINUTE_OF_HOUR:
            return self.with_minute(value)
        if field is Field.MINUTE_OF_DAY:
            return self.plus_minutes(value - self.nano_of_day // NANOS_PER_MINUTE)
        if field is Field.HOUR_OF_AMPM:
            return self.plus_hours(value - self.hour % 12)
        if field is Field.CLOCK_HOUR_OF_AMPM:
            return self.plus_hours((0 if value == 12 else value) - self.hour % 12)
        if field is Field.HOUR_OF_DAY:
            return self.with_hour(value)
        if field is Field.CLOCK_HOUR_OF_DAY:
            return self.with_hour(0 if value == 24 else value)
        # AMPM_OF_DAY
        return self.plus_hours((value - self.hour // 12) * 12)

    def with_hour(self, hour: int) -> "LocalTime":
        return LocalTime.of(hour, self.minute, self.second, self.nano)

    def with_minute(self, minute: int) -> "LocalTime":
        return LocalTime.of(self.hour, minute, self.second, self.nano)

    def with_second(self, second: int) -> "LocalTime":
        return LocalTime.of(self.hour, self.minute, second, self.nano)

    def with_nano(self, nano: int) -> "LocalTime":
        return LocalTime.of(self.hour, self.minute, self.second, nano)

    # ---- arithmetic (wraps around midnight) ----

    def plus_nanos(self, nanos: int) -> "LocalTime":
        if nanos == 0:
            return self
        return LocalTime((self.nano_of_day + nanos) % NANOS_PER_DAY)

    def plus_seconds(self, seconds: int) -> "LocalTime":
        return self.plus_nanos((seconds % SECONDS_PER_DAY) * NANOS_PER_SECOND)

    def plus_minutes(self, minutes: int) -> "LocalTime":
        return self.plus_nanos(minutes * NANOS_PER_MINUTE)

    def plus_hours(self, hours: int) -> "LocalTime":
        return self.plus_nanos((hours % 24) * NANOS_PER_HOUR)

    def minus_nanos(self, nanos: int) -> "LocalTime":
        return self.plus_nanos(-nanos)

    def minus_seconds(self, seconds: int) -> "LocalTime":
        return self.plus_seconds(-seconds)

    def minus_minutes(self, minutes: int) -> "LocalTime":
        return self.plus_minutes(-minutes)

    def minus_hours(self, hours: int) -> "LocalTime":
        return self.plus_hours(-hours)

    def plus(self, amount: int, unit: Unit) -> "LocalTime":
        if not unit.is_time_based:
            raise UnsupportedTemporalError(f"Unsupported unit: {unit}")
        return self.plus_nanos(amount * unit.nanos)

    def minus(self, amount: int, unit: Unit) -> "LocalTime":
        return self.plus(-amount, unit)

    def truncated_to(self, unit: Unit) -> "LocalTime":
        if unit is Unit.NANOS:
            return self
        if unit is Unit.DAYS:
            return LocalTime.MIDNIGHT
        if unit.nanos is None or unit.nanos > NANOS_PER_DAY:
            raise UnsupportedTemporalError("Unit is too large to be used for truncation")
        if NANOS_PER_DAY % unit.nanos != 0:
            raise UnsupportedTemporalError("Unit must divide into a standard day without remainder")
        return LocalTime((self.nano_of_day // unit.nanos) * unit.nanos)

    def until(self, end: "LocalTime", unit: Unit) -> int:
        """Whole `unit`s from this time to `end`, truncated toward zero."""
        if not unit.is_time_based:
            raise UnsupportedTemporalError(f"Unsupported unit: {unit}")
        return trunc_div(end.nano_of_day - self.nano_of_day, unit.nanos)

    def __str__(self) -> str:
        out = f"{self.hour:02d}:{self.minute:02d}"
        second, nano = self.second, self.nano
        if second > 0 or nano > 0:
            out += f":{second:02d}"
            if nano > 0:
                if nano % NANOS_PER_MILLI == 0:
                    out += f".{nano // NANOS_PER_MILLI:03d}"
                elif nano % NANOS_PER_MICRO == 0:
                    out += f".{nano // NANOS_PER_MICRO:06d}"
                else:
                    out += f".{nano:09d}"
        return out


LocalTime.MIDNIGHT = LocalTime(0)
LocalTime.MIN = LocalTime.MIDNIGHT
LocalTime.NOON = LocalTime(12 * NANOS_PER_HOUR)
LocalTime.MAX = LocalTime(NANOS_PER_DAY - 1)
