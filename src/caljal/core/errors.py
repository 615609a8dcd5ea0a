from __future__ import annotations

from typing import Optional


class CaljalError(Exception):
    """Base error."""


class RangeError(CaljalError, ValueError):
    """Raised when a field value is outside its valid range (e.g. month 13)."""


class CalendarStateError(CaljalError, ValueError):
    """Raised when individually valid fields do not form a valid date."""


class LeapDayError(CalendarStateError):
    """Raised for 30 Esfand or day-of-year 366 in a common (non-leap) year."""

    def __init__(self, message: str, year: int):
        super().__init__(message)
        self.year = year


class CalendarOverflowError(CaljalError, OverflowError):
    """Raised when arithmetic would move a value outside the supported year range."""


class UnsupportedTemporalError(CaljalError):
    """Raised when a field or unit is not supported by the value it is applied to."""


class ParseError(CaljalError, ValueError):
    """Raised when text cannot be read as a date, time or date-time."""

    def __init__(self, message: str, text: str, index: int = 0, cause: Optional[BaseException] = None):
        super().__init__(f"{message}: {text!r} (at index {index})")
        self.text = text
        self.index = index
        if cause is not None:
            self.__cause__ = cause
