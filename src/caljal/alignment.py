"""
caljal.alignment
----------------
Bounded Gregorian alignment: for each Gregorian year in a window, the day of
Dey that falls on 1 January (10, 11 or 12).

The exception-year sets are a hand-maintained historical table, not an
algorithm, so they live here as one explicit collaborator. Inside the window
the table is authoritative; outside it, conversion counts days from the
nearest tabulated year, which is an approximation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import FrozenSet

from .core.errors import RangeError
from .core.time import JDN_UNIX_EPOCH, gregorian_from_epoch_day, gregorian_from_jdn, gregorian_to_jdn
from .month import Month
from .year import days_before_year

logger = logging.getLogger(__name__)

# Gregorian year minus Jalali year for dates from 1 January to the end of Esfand.
YEAR_OFFSET = 622

# Epoch day of 1 Farvardin of year 0 is 1 - _EPOCH_SHIFT.
_EPOCH_SHIFT = 492634


def _jalali_epoch_day(year: int, day_of_year: int) -> int:
    return days_before_year(year) + day_of_year - _EPOCH_SHIFT


def _gregorian_jan1(gy: int) -> int:
    return gregorian_to_jdn(gy, 1, 1) - JDN_UNIX_EPOCH


@dataclass(frozen=True)
class GregorianAlignment:
    first_year: int
    last_year: int
    dey_10_years: FrozenSet[int]
    dey_12_years: FrozenSet[int]
    default_day: int = 11

    def __post_init__(self) -> None:
        if self.first_year > self.last_year:
            raise ValueError("first_year must not exceed last_year")
        both = self.dey_10_years & self.dey_12_years
        if both:
            raise ValueError(f"Years listed as both Dey 10 and Dey 12: {sorted(both)}")
        outside = [y for y in self.dey_10_years | self.dey_12_years if not self.covers(y)]
        if outside:
            raise ValueError(f"Exception years outside the window: {sorted(outside)}")

    def covers(self, gy: int) -> bool:
        return self.first_year <= gy <= self.last_year

    def nearest_year(self, gy: int) -> int:
        return min(max(gy, self.first_year), self.last_year)

    def dey_day(self, gy: int) -> int:
        """Day of Dey (in Jalali year gy - 622) that is 1 January of `gy`."""
        if not self.covers(gy):
            raise RangeError(
                f"Gregorian year {gy} is outside the alignment window [{self.first_year}, {self.last_year}]"
            )
        if gy in self.dey_10_years:
            return 10
        if gy in self.dey_12_years:
            return 12
        return self.default_day

    def jan1_epoch_day(self, gy: int) -> int:
        """Epoch day (Jalali coordinate) that 1 January of `gy` maps to."""
        if self.covers(gy):
            doy = Month.DEY.first_day_of_year() + self.dey_day(gy) - 1
            return _jalali_epoch_day(gy - YEAR_OFFSET, doy)
        anchor = self.nearest_year(gy)
        return self.jan1_epoch_day(anchor) + _gregorian_jan1(gy) - _gregorian_jan1(anchor)


_DEY_10 = frozenset({
    1804, 1808, 1812, 1816, 1820, 1824, 1828,
    1903, 1904, 1907, 1908, 1911, 1912, 1915, 1916, 1919, 1920, 1923, 1924, 1927, 1928,
    1932, 1936, 1940, 1944, 1948, 1952, 1956, 1960,
})

_DEY_12 = frozenset({
    1733, 1737, 1741, 1745, 1749, 1753, 1757, 1761, 1765, 1766, 1769, 1770, 1773, 1774,
    1777, 1778, 1781, 1782, 1785, 1786, 1789, 1790, 1793, 1794, 1797, 1798, 1799,
    1865, 1869, 1873, 1877, 1881, 1885, 1889, 1893, 1897, 1898,
    1997, 2001, 2005, 2009, 2013, 2017, 2021, 2025, 2029, 2030, 2033, 2034, 2037, 2038,
    2041, 2042, 2045, 2046, 2049, 2050, 2053, 2054, 2057, 2058, 2061, 2062, 2063, 2065,
    2066, 2067, 2069, 2070, 2071, 2073, 2074, 2075, 2077, 2078, 2079, 2081, 2082, 2083,
    2085, 2086, 2087, 2089, 2090, 2091, 2093, 2094, 2095, 2096, 2097, 2098, 2099, 2100,
})

# Jalali 1100..1500.
DEFAULT_ALIGNMENT = GregorianAlignment(
    first_year=1722,
    last_year=2122,
    dey_10_years=_DEY_10,
    dey_12_years=_DEY_12,
)


def epoch_day_for(g: date, alignment: GregorianAlignment = DEFAULT_ALIGNMENT) -> int:
    """Gregorian date -> Jalali epoch day."""
    gy = g.year
    if not alignment.covers(gy):
        logger.debug(
            "Gregorian year %d outside alignment window [%d, %d]; counting days from %d",
            gy, alignment.first_year, alignment.last_year, alignment.nearest_year(gy),
        )
    g_epoch = gregorian_to_jdn(gy, g.month, g.day) - JDN_UNIX_EPOCH
    return alignment.jan1_epoch_day(gy) + g_epoch - _gregorian_jan1(gy)


def gregorian_date_for(epoch_day: int, alignment: GregorianAlignment = DEFAULT_ALIGNMENT) -> date:
    """Jalali epoch day -> Gregorian date (years 1..9999, like datetime.date)."""
    gy, _, _ = gregorian_from_jdn(epoch_day + JDN_UNIX_EPOCH)
    while epoch_day < alignment.jan1_epoch_day(gy):
        gy -= 1
    while epoch_day >= alignment.jan1_epoch_day(gy + 1):
        gy += 1
    if not alignment.covers(gy):
        logger.debug(
            "Gregorian year %d outside alignment window [%d, %d]; counting days from %d",
            gy, alignment.first_year, alignment.last_year, alignment.nearest_year(gy),
        )
    offset = epoch_day - alignment.jan1_epoch_day(gy)
    return gregorian_from_epoch_day(_gregorian_jan1(gy) + offset)
