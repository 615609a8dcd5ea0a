"""
caljal.month
------------
The twelve months and the year-less `MonthDay`.

Month lengths: 31 days for Farvardin..Shahrivar, 30 for Mehr..Bahman,
29 for Esfand (30 in a leap year).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Union

from .core.errors import CaljalError, CalendarStateError, ParseError, UnsupportedTemporalError
from .core.types import ValueRange
from .fields import Field, Unit
from .year import is_leap

if TYPE_CHECKING:
    from .date import JalaliDate

_LENGTHS = (31, 31, 31, 31, 31, 31, 30, 30, 30, 30, 30, 29)
_FIRST_DAY = (1, 32, 63, 94, 125, 156, 187, 217, 247, 277, 307, 337)
_NAMES = (
    "Farvardin", "Ordibehesht", "Khordad", "Tir", "Mordad", "Shahrivar",
    "Mehr", "Aban", "Azar", "Dey", "Bahman", "Esfand",
)


class Month(IntEnum):
    FARVARDIN = 1
    ORDIBEHESHT = 2
    KHORDAD = 3
    TIR = 4
    MORDAD = 5
    SHAHRIVAR = 6
    MEHR = 7
    ABAN = 8
    AZAR = 9
    DEY = 10
    BAHMAN = 11
    ESFAND = 12

    @classmethod
    def of(cls, month: int) -> "Month":
        Field.MONTH_OF_YEAR.check_valid_value(month)
        return cls(month)

    @property
    def display_name(self) -> str:
        return _NAMES[self.value - 1]

    def length(self, leap: bool) -> int:
        if self is Month.ESFAND and leap:
            return 30
        return _LENGTHS[self.value - 1]

    def min_length(self) -> int:
        return _LENGTHS[self.value - 1]

    def max_length(self) -> int:
        return self.length(True)

    def first_day_of_year(self, leap: bool = False) -> int:
        """1-based day-of-year of the month's first day (same in leap years)."""
        return _FIRST_DAY[self.value - 1]

    def plus(self, months: int) -> "Month":
        return Month((self.value - 1 + months) % 12 + 1)

    def minus(self, months: int) -> "Month":
        return self.plus(-months)

    def first_month_of_quarter(self) -> "Month":
        return Month(((self.value - 1) // 3) * 3 + 1)

    def is_supported(self, field: Field) -> bool:
        return field is Field.MONTH_OF_YEAR

    def range(self, field: Field) -> ValueRange:
        if field is Field.MONTH_OF_YEAR:
            return field.range()
        raise UnsupportedTemporalError(f"Unsupported field: {field}")

    def get(self, field: Field) -> int:
        if field is Field.MONTH_OF_YEAR:
            return self.value
        raise UnsupportedTemporalError(f"Unsupported field: {field}")

    def __str__(self) -> str:
        return self.display_name


_MONTH_DAY_RE = re.compile(r"--(\d{2})-(\d{2})")


@dataclass(frozen=True, order=True)
class MonthDay:
    """A month and day without a year, e.g. Nowruz as --01-01."""
    month: int
    day: int

    def __post_init__(self) -> None:
        m = Month.of(self.month)
        Field.DAY_OF_MONTH.check_valid_value(self.day)
        if self.day > m.max_length():
            raise CalendarStateError(
                f"Illegal value for DayOfMonth field, value {self.day} is not valid for month {m.display_name}"
            )

    @classmethod
    def of(cls, month: int, day: int) -> "MonthDay":
        return cls(int(month), day)

    @classmethod
    def from_date(cls, d: "JalaliDate") -> "MonthDay":
        return cls(d.month, d.day)

    @classmethod
    def now(cls, tz=None) -> "MonthDay":
        from .date import JalaliDate
        return cls.from_date(JalaliDate.today(tz))

    @classmethod
    def parse(cls, text: str) -> "MonthDay":
        m = _MONTH_DAY_RE.fullmatch(text.strip())
        if m is None:
            raise ParseError("Text cannot be parsed as a month-day (--MM-DD)", text)
        try:
            return cls(int(m.group(1)), int(m.group(2)))
        except CaljalError as exc:
            raise ParseError(str(exc), text, index=2, cause=exc) from exc

    @property
    def month_of_year(self) -> Month:
        return Month(self.month)

    def is_supported(self, field: Union[Field, Unit]) -> bool:
        return field in (Field.MONTH_OF_YEAR, Field.DAY_OF_MONTH)

    def range(self, field: Field) -> ValueRange:
        if field is Field.MONTH_OF_YEAR:
            return field.range()
        if field is Field.DAY_OF_MONTH:
            m = Month(self.month)
            return ValueRange.of(1, m.max_length(), m.min_length())
        raise UnsupportedTemporalError(f"Unsupported field: {field}")

    def get(self, field: Field) -> int:
        if field is Field.MONTH_OF_YEAR:
            return self.month
        if field is Field.DAY_OF_MONTH:
            return self.day
        raise UnsupportedTemporalError(f"Unsupported field: {field}")

    def is_valid_year(self, year: int) -> bool:
        return not (self.month == 12 and self.day == 30 and not is_leap(year))

    def with_month(self, month: int) -> "MonthDay":
        m = Month.of(month)
        return MonthDay(m.value, min(self.day, m.max_length()))

    def with_day_of_month(self, day: int) -> "MonthDay":
        if day == self.day:
            return self
        return MonthDay(self.month, day)

    def at_year(self, year: int) -> "JalaliDate":
        """Combine with `year`; 30 Esfand becomes 29 Esfand in a common year."""
        from .date import JalaliDate
        day = self.day if self.is_valid_year(year) else 29
        return JalaliDate.of(year, self.month, day)

    def __str__(self) -> str:
        return f"--{self.month:02d}-{self.day:02d}"
