from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .errors import RangeError


@dataclass(frozen=True)
class ValueRange:
    """
    Range of valid values for a field.

    `largest_minimum`/`smallest_maximum` describe how the bounds move with
    context: day-of-month is 1..29/31 statically, 1..length for a given month.
    """
    minimum: int
    largest_minimum: int
    smallest_maximum: int
    maximum: int

    def __post_init__(self) -> None:
        if self.minimum > self.largest_minimum:
            raise ValueError("minimum must not exceed largest_minimum")
        if self.smallest_maximum > self.maximum:
            raise ValueError("smallest_maximum must not exceed maximum")
        if self.largest_minimum > self.maximum:
            raise ValueError("largest_minimum must not exceed maximum")

    @classmethod
    def of(cls, minimum: int, maximum: int, smallest_maximum: Optional[int] = None) -> "ValueRange":
        if smallest_maximum is None:
            return cls(minimum, minimum, maximum, maximum)
        return cls(minimum, minimum, smallest_maximum, maximum)

    @property
    def is_fixed(self) -> bool:
        return self.minimum == self.largest_minimum and self.smallest_maximum == self.maximum

    def is_valid_value(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum

    def check_valid_value(self, value: int, field: Any = None) -> int:
        if not self.is_valid_value(value):
            name = getattr(field, "label", field) or "value"
            raise RangeError(f"Invalid value for {name} (valid values {self}): {value}")
        return value

    def __str__(self) -> str:
        lo = str(self.minimum)
        if self.minimum != self.largest_minimum:
            lo += f"/{self.largest_minimum}"
        hi = str(self.maximum)
        if self.smallest_maximum != self.maximum:
            hi = f"{self.smallest_maximum}/{self.maximum}"
        return f"{lo} - {hi}"


@dataclass(frozen=True)
class Period:
    """A date-based amount of time: years, months and days."""
    years: int = 0
    months: int = 0
    days: int = 0

    def total_months(self) -> int:
        return self.years * 12 + self.months

    def is_zero(self) -> bool:
        return self.years == 0 and self.months == 0 and self.days == 0

    def negated(self) -> "Period":
        return Period(-self.years, -self.months, -self.days)

    def __str__(self) -> str:
        if self.is_zero():
            return "P0D"
        out = "P"
        if self.years:
            out += f"{self.years}Y"
        if self.months:
            out += f"{self.months}M"
        if self.days:
            out += f"{self.days}D"
        return out
