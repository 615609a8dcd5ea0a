from __future__ import annotations

from datetime import date

from .errors import RangeError

HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = MINUTES_PER_HOUR * HOURS_PER_DAY
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = SECONDS_PER_MINUTE * MINUTES_PER_HOUR
SECONDS_PER_DAY = SECONDS_PER_HOUR * HOURS_PER_DAY
MILLIS_PER_DAY = SECONDS_PER_DAY * 1000
MICROS_PER_DAY = SECONDS_PER_DAY * 1_000_000
NANOS_PER_MICRO = 1000
NANOS_PER_MILLI = 1_000_000
NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MINUTE = NANOS_PER_SECOND * SECONDS_PER_MINUTE
NANOS_PER_HOUR = NANOS_PER_MINUTE * MINUTES_PER_HOUR
NANOS_PER_DAY = NANOS_PER_HOUR * HOURS_PER_DAY

# JDN of 1970-01-01, the shared epoch-day origin.
JDN_UNIX_EPOCH = 2440588


def gregorian_to_jdn(y: int, m: int, day: int) -> int:
    """Proleptic Gregorian (y, m, d) -> Julian Day Number."""
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def gregorian_from_jdn(jdn: int) -> tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of gregorian_to_jdn."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def gregorian_to_epoch_day(d: date) -> int:
    """Gregorian date -> days since 1970-01-01."""
    return gregorian_to_jdn(d.year, d.month, d.day) - JDN_UNIX_EPOCH


def gregorian_from_epoch_day(epoch_day: int) -> date:
    """Days since 1970-01-01 -> Gregorian date (years 1..9999 only)."""
    y, m, d = gregorian_from_jdn(epoch_day + JDN_UNIX_EPOCH)
    if not (1 <= y <= 9999):
        raise RangeError(f"Gregorian year {y} is outside the range supported by datetime.date")
    return date(y, m, d)


def trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q
