"""
caljal.rules
------------
Leap-year rules as data.

The calendar core runs on exactly one rule, ACTIVE_RULE: the 33-year cycle
with eight leap years at fixed residues. The 128-year remainder-table rule is
kept alongside it so the two can be compared (see caljal.diagnostics.leap_rules).
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Dict, Protocol, Tuple


class LeapRule(Protocol):
    @property
    def name(self) -> str: ...

    def is_leap(self, year: int) -> bool: ...


class CyclicLeapRule(LeapRule, Protocol):
    """A rule whose leap years repeat every `modulus` years, with closed-form counts."""

    @property
    def modulus(self) -> int: ...

    @property
    def days_per_cycle(self) -> int: ...

    def leaps_before(self, year: int) -> int: ...


@dataclass(frozen=True)
class ResidueLeapRule:
    """
    Leap iff ``year mod modulus`` is one of `residues`.

    Python's floor modulo keeps the rule uniform across year 0 and negative
    years, so every run of `modulus` consecutive years holds the same number
    of leap years. That is what makes `leaps_before` closed-form.
    """
    name: str
    modulus: int
    residues: Tuple[int, ...]

    def __post_init__(self) -> None:
        if self.modulus <= 0:
            raise ValueError("modulus must be positive")
        if list(self.residues) != sorted(set(self.residues)):
            raise ValueError("residues must be sorted and unique")
        if self.residues and not (0 <= self.residues[0] and self.residues[-1] < self.modulus):
            raise ValueError(f"residues must lie in [0, {self.modulus})")

    @property
    def leaps_per_cycle(self) -> int:
        return len(self.residues)

    @property
    def days_per_cycle(self) -> int:
        return self.modulus * 365 + self.leaps_per_cycle

    def is_leap(self, year: int) -> bool:
        return (year % self.modulus) in self.residues

    def leaps_before(self, year: int) -> int:
        """Signed count of leap years in [0, year); negative for year < 0."""
        cycles, rem = divmod(year, self.modulus)
        return cycles * self.leaps_per_cycle + bisect_left(self.residues, rem)


@dataclass(frozen=True)
class RemainderTableLeapRule:
    """
    Leap iff ``year mod modulus`` appears in the remainder table for the
    year's side of `split_year`.
    """
    name: str
    modulus: int
    split_year: int
    remainders_after: Tuple[int, ...]
    remainders_before: Tuple[int, ...]

    def table_for(self, year: int) -> Tuple[int, ...]:
        return self.remainders_after if year >= self.split_year else self.remainders_before

    def is_leap(self, year: int) -> bool:
        return (year % self.modulus) in self.table_for(year)


RESIDUE_33 = ResidueLeapRule(
    name="residue33",
    modulus=33,
    residues=(1, 5, 9, 13, 17, 22, 26, 30),
)

REMAINDER_128 = RemainderTableLeapRule(
    name="remainder128",
    modulus=128,
    split_year=474,
    remainders_after=(
        0, 4, 8, 12, 16, 20, 24, 29, 33, 37, 41, 45, 49, 53, 57, 62,
        66, 70, 74, 78, 82, 86, 90, 95, 99, 103, 107, 111, 115, 119, 124,
    ),
    remainders_before=(
        0, 4, 8, 12, 16, 20, 25, 29, 33, 37, 41, 45, 49, 53, 58, 62,
        66, 70, 74, 78, 82, 86, 91, 95, 99, 103, 107, 111, 115, 120, 124,
    ),
)

ALL_RULES: Dict[str, LeapRule] = {
    RESIDUE_33.name: RESIDUE_33,
    REMAINDER_128.name: REMAINDER_128,
}

ACTIVE_RULE = RESIDUE_33.name


def get_rule(name: str) -> LeapRule:
    if name not in ALL_RULES:
        raise KeyError(f"Unknown leap rule '{name}'. Available: {sorted(ALL_RULES)}")
    return ALL_RULES[name]


def get_cyclic_rule(name: str) -> CyclicLeapRule:
    """Like `get_rule`, but only for rules the day-count arithmetic can run on."""
    rule = get_rule(name)
    if not isinstance(rule, ResidueLeapRule):
        raise TypeError(f"Leap rule '{name}' has no closed-form cycle")
    return rule


def count_leap_years(rule: LeapRule, start: int, end: int) -> int:
    """Number of leap years in [start, end) under any rule (linear scan)."""
    return sum(1 for y in range(start, end) if rule.is_leap(y))
