"""
caljal.resolve
--------------
Field resolution: turn a (possibly redundant) field -> value map, as produced
by a text parser, into a concrete date and time.

Date fields are matched against a closed, ordered table of combinations; the
first combination whose fields are all present wins and consumes them. Any
date field left over afterwards must agree with the resolved date.

Three styles:

* STRICT  - every value must be valid as given.
* SMART   - values are range-checked, then an invalid day (31 Mehr,
            30 Esfand or day-of-year 366 in a common year) is clamped to the
            last valid day.
* LENIENT - overflow is further arithmetic: month 13 of 1400 is Farvardin 1401.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Tuple

from . import week_fields
from .core.errors import CaljalError, CalendarStateError
from .core.time import NANOS_PER_DAY, NANOS_PER_HOUR, NANOS_PER_MINUTE, NANOS_PER_SECOND
from .date import JalaliDate
from .date_time import JalaliDateTime
from .fields import DayOfWeek, Field, ResolverStyle
from .month import Month
from .time_of_day import LocalTime
from .year import is_leap, proleptic_year

logger = logging.getLogger(__name__)

FieldMap = Dict[Field, int]


@dataclass(frozen=True)
class Resolved:
    """Outcome of one resolve call."""
    date: Optional[JalaliDate]
    time: Optional[LocalTime]
    excess_days: int = 0
    leftovers: Mapping[Field, int] = field(default_factory=dict)

    def to_date_time(self) -> JalaliDateTime:
        if self.date is None:
            raise CalendarStateError("Unable to obtain a date-time: no date could be resolved")
        return JalaliDateTime(self.date.plus_days(self.excess_days), self.time or LocalTime.MIDNIGHT)


@dataclass(frozen=True)
class Combination:
    name: str
    fields: Tuple[Field, ...]
    resolver: Callable[["FieldResolver", FieldMap], JalaliDate]

    def matches(self, values: Mapping[Field, int]) -> bool:
        return all(f in values for f in self.fields)


def _next_or_same(d: JalaliDate, dow: int) -> JalaliDate:
    return d.plus_days((dow - d.day_of_week) % 7)


def _resolve_aligned(base: JalaliDate, months: int, weeks: int, dow: int) -> JalaliDate:
    d = base.plus_months(months).plus_weeks(weeks)
    extra_weeks, dow0 = divmod(dow - 1, 7)
    return _next_or_same(d.plus_weeks(extra_weeks), dow0 + 1)


class FieldResolver:
    """
    Resolves field maps under one `ResolverStyle`.

    Stateless apart from the style: every call copies its input, so one
    resolver may be shared freely.
    """

    def __init__(self, style: ResolverStyle = ResolverStyle.SMART):
        self.style = style

    @property
    def lenient(self) -> bool:
        return self.style is ResolverStyle.LENIENT

    # ------------------------------------------------------------------
    # public entry points
    # ------------------------------------------------------------------

    def resolve_date(self, values: Mapping[Field, int]) -> Optional[JalaliDate]:
        """Resolve only the date fields; None if no combination matched."""
        work = dict(values)
        return self._resolve_date_fields(work)

    def resolve(self, values: Mapping[Field, int]) -> Resolved:
        work = dict(values)
        d = self._resolve_date_fields(work)
        t, excess = self._resolve_time_fields(work)
        if t is not None:
            self._cross_check_time(t, work)
        return Resolved(date=d, time=t, excess_days=excess, leftovers=work)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _add(work: FieldMap, f: Field, value: int) -> None:
        old = work.get(f)
        if old is not None and old != value:
            raise CalendarStateError(f"Conflict found: {f} {old} differs from {f} {value}")
        work[f] = value

    def _check(self, f: Field, value: int) -> int:
        return value if self.lenient else f.check_valid_value(value)

    # ------------------------------------------------------------------
    # date fields
    # ------------------------------------------------------------------

    def _resolve_date_fields(self, work: FieldMap) -> Optional[JalaliDate]:
        self._resolve_proleptic_month(work)
        self._resolve_year_of_era(work)
        for combo in COMBINATIONS:
            if combo.matches(work):
                logger.debug("Resolving %s with %s (%s)", combo.name, self.style.name, work)
                d = combo.resolver(self, work)
                self._cross_check(d, work)
                return d
        return None

    def _resolve_proleptic_month(self, work: FieldMap) -> None:
        if Field.PROLEPTIC_MONTH not in work:
            return
        pm = self._check(Field.PROLEPTIC_MONTH, work.pop(Field.PROLEPTIC_MONTH))
        year, m0 = divmod(pm, 12)
        self._add(work, Field.MONTH_OF_YEAR, m0 + 1)
        self._add(work, Field.YEAR, year)

    def _resolve_year_of_era(self, work: FieldMap) -> None:
        if Field.YEAR_OF_ERA not in work:
            if Field.ERA in work:
                Field.ERA.check_valid_value(work[Field.ERA])
            return
        yoe_value = work.pop(Field.YEAR_OF_ERA)
        era = work.pop(Field.ERA, None)
        yoe = self._check(Field.YEAR_OF_ERA, yoe_value)
        if era is not None:
            self._add(work, Field.YEAR, proleptic_year(era, yoe))
        elif Field.YEAR in work:
            year = Field.YEAR.check_valid_value(work[Field.YEAR])
            self._add(work, Field.YEAR, proleptic_year(1 if year >= 1 else 0, yoe))
        elif self.style is ResolverStyle.STRICT:
            # Strict mode does not invent an era.
            work[Field.YEAR_OF_ERA] = yoe_value
        else:
            self._add(work, Field.YEAR, yoe)

    def _cross_check(self, d: JalaliDate, work: FieldMap) -> None:
        for f in [f for f in work if f.is_date_based]:
            try:
                actual = d.get(f)
            except CaljalError:
                continue
            expected = work.pop(f)
            if actual != expected:
                raise CalendarStateError(
                    f"Conflict found: Field {f} {actual} differs from {f} {expected} derived from {d}"
                )

    def _year(self, work: FieldMap) -> int:
        return Field.YEAR.check_valid_value(work.pop(Field.YEAR))

    def _epoch_day(self, work: FieldMap) -> JalaliDate:
        return JalaliDate.of_epoch_day(work.pop(Field.EPOCH_DAY))

    def _ymd(self, work: FieldMap) -> JalaliDate:
        y = self._year(work)
        if self.lenient:
            months = work.pop(Field.MONTH_OF_YEAR) - 1
            days = work.pop(Field.DAY_OF_MONTH) - 1
            return JalaliDate(y, 1, 1).plus_months(months).plus_days(days)
        moy = Field.MONTH_OF_YEAR.check_valid_value(work.pop(Field.MONTH_OF_YEAR))
        dom = Field.DAY_OF_MONTH.check_valid_value(work.pop(Field.DAY_OF_MONTH))
        if self.style is ResolverStyle.SMART:
            dom = min(dom, Month(moy).length(is_leap(y)))
        return JalaliDate(y, moy, dom)

    def _yd(self, work: FieldMap) -> JalaliDate:
        y = self._year(work)
        if self.lenient:
            days = work.pop(Field.DAY_OF_YEAR) - 1
            return JalaliDate(y, 1, 1).plus_days(days)
        doy = Field.DAY_OF_YEAR.check_valid_value(work.pop(Field.DAY_OF_YEAR))
        if self.style is ResolverStyle.SMART and doy == 366 and not is_leap(y):
            doy = 365
        return JalaliDate.of_year_day(y, doy)

    def _strict_same(self, d: JalaliDate, f: Field, expected: int, what: str) -> JalaliDate:
        if self.style is ResolverStyle.STRICT and d.get(f) != expected:
            raise CalendarStateError(f"Strict mode rejected resolved date as it is in a different {what}")
        return d

    def _ymaa(self, work: FieldMap) -> JalaliDate:
        y = self._year(work)
        if self.lenient:
            months = work.pop(Field.MONTH_OF_YEAR) - 1
            weeks = work.pop(Field.ALIGNED_WEEK_OF_MONTH) - 1
            days = work.pop(Field.ALIGNED_DAY_OF_WEEK_IN_MONTH) - 1
            return JalaliDate(y, 1, 1).plus_months(months).plus_weeks(weeks).plus_days(days)
        moy = Field.MONTH_OF_YEAR.check_valid_value(work.pop(Field.MONTH_OF_YEAR))
        aw = Field.ALIGNED_WEEK_OF_MONTH.check_valid_value(work.pop(Field.ALIGNED_WEEK_OF_MONTH))
        ad = Field.ALIGNED_DAY_OF_WEEK_IN_MONTH.check_valid_value(work.pop(Field.ALIGNED_DAY_OF_WEEK_IN_MONTH))
        d = JalaliDate(y, moy, 1).plus_days((aw - 1) * 7 + (ad - 1))
        return self._strict_same(d, Field.MONTH_OF_YEAR, moy, "month")

    def _ymad(self, work: FieldMap) -> JalaliDate:
        y = self._year(work)
        if self.lenient:
            months = work.pop(Field.MONTH_OF_YEAR) - 1
            weeks = work.pop(Field.ALIGNED_WEEK_OF_MONTH) - 1
            dow = work.pop(Field.DAY_OF_WEEK)
            return _resolve_aligned(JalaliDate(y, 1, 1), months, weeks, dow)
        moy = Field.MONTH_OF_YEAR.check_valid_value(work.pop(Field.MONTH_OF_YEAR))
        aw = Field.ALIGNED_WEEK_OF_MONTH.check_valid_value(work.pop(Field.ALIGNED_WEEK_OF_MONTH))
        dow = DayOfWeek.of(work.pop(Field.DAY_OF_WEEK))
        d = _next_or_same(JalaliDate(y, moy, 1).plus_days((aw - 1) * 7), dow)
        return self._strict_same(d, Field.MONTH_OF_YEAR, moy, "month")

    def _yaa(self, work: FieldMap) -> JalaliDate:
        y = self._year(work)
        if self.lenient:
            weeks = work.pop(Field.ALIGNED_WEEK_OF_YEAR) - 1
            days = work.pop(Field.ALIGNED_DAY_OF_WEEK_IN_YEAR) - 1
            return JalaliDate(y, 1, 1).plus_weeks(weeks).plus_days(days)
        aw = Field.ALIGNED_WEEK_OF_YEAR.check_valid_value(work.pop(Field.ALIGNED_WEEK_OF_YEAR))
        ad = Field.ALIGNED_DAY_OF_WEEK_IN_YEAR.check_valid_value(work.pop(Field.ALIGNED_DAY_OF_WEEK_IN_YEAR))
        d = JalaliDate(y, 1, 1).plus_days((aw - 1) * 7 + (ad - 1))
        return self._strict_same(d, Field.YEAR, y, "year")

    def _yad(self, work: FieldMap) -> JalaliDate:
        y = self._year(work)
        if self.lenient:
            weeks = work.pop(Field.ALIGNED_WEEK_OF_YEAR) - 1
            dow = work.pop(Field.DAY_OF_WEEK)
            return _resolve_aligned(JalaliDate(y, 1, 1), 0, weeks, dow)
        aw = Field.ALIGNED_WEEK_OF_YEAR.check_valid_value(work.pop(Field.ALIGNED_WEEK_OF_YEAR))
        dow = DayOfWeek.of(work.pop(Field.DAY_OF_WEEK))
        d = _next_or_same(JalaliDate(y, 1, 1).plus_days((aw - 1) * 7), dow)
        return self._strict_same(d, Field.YEAR, y, "year")

    def _week_based(self, work: FieldMap) -> JalaliDate:
        return week_fields.resolve(work, self.style)

    # ------------------------------------------------------------------
    # time fields
    # ------------------------------------------------------------------

    def _resolve_time_fields(self, work: FieldMap) -> Tuple[Optional[LocalTime], int]:
        style = self.style
        if Field.CLOCK_HOUR_OF_DAY in work:
            ch = work.pop(Field.CLOCK_HOUR_OF_DAY)
            if style is ResolverStyle.STRICT or (style is ResolverStyle.SMART and ch != 0):
                Field.CLOCK_HOUR_OF_DAY.check_valid_value(ch)
            self._add(work, Field.HOUR_OF_DAY, 0 if ch == 24 else ch)
        if Field.CLOCK_HOUR_OF_AMPM in work:
            ch = work.pop(Field.CLOCK_HOUR_OF_AMPM)
            if style is ResolverStyle.STRICT or (style is ResolverStyle.SMART and ch != 0):
                Field.CLOCK_HOUR_OF_AMPM.check_valid_value(ch)
            self._add(work, Field.HOUR_OF_AMPM, 0 if ch == 12 else ch)
        if Field.AMPM_OF_DAY in work and Field.HOUR_OF_AMPM in work:
            ap = self._check(Field.AMPM_OF_DAY, work.pop(Field.AMPM_OF_DAY))
            hap = self._check(Field.HOUR_OF_AMPM, work.pop(Field.HOUR_OF_AMPM))
            self._add(work, Field.HOUR_OF_DAY, ap * 12 + hap)
        if Field.NANO_OF_DAY in work:
            nod = self._check(Field.NANO_OF_DAY, work.pop(Field.NANO_OF_DAY))
            self._add(work, Field.HOUR_OF_DAY, nod // NANOS_PER_HOUR)
            self._add(work, Field.MINUTE_OF_HOUR, (nod // NANOS_PER_MINUTE) % 60)
            self._add(work, Field.SECOND_OF_MINUTE, (nod // NANOS_PER_SECOND) % 60)
            self._add(work, Field.NANO_OF_SECOND, nod % NANOS_PER_SECOND)
        if Field.MICRO_OF_DAY in work:
            cod = self._check(Field.MICRO_OF_DAY, work.pop(Field.MICRO_OF_DAY))
            self._add(work, Field.SECOND_OF_DAY, cod // 1_000_000)
            self._add(work, Field.MICRO_OF_SECOND, cod % 1_000_000)
        if Field.MILLI_OF_DAY in work:
            lod = self._check(Field.MILLI_OF_DAY, work.pop(Field.MILLI_OF_DAY))
            self._add(work, Field.SECOND_OF_DAY, lod // 1000)
            self._add(work, Field.MILLI_OF_SECOND, lod % 1000)
        if Field.SECOND_OF_DAY in work:
            sod = self._check(Field.SECOND_OF_DAY, work.pop(Field.SECOND_OF_DAY))
            self._add(work, Field.HOUR_OF_DAY, sod // 3600)
            self._add(work, Field.MINUTE_OF_HOUR, (sod // 60) % 60)
            self._add(work, Field.SECOND_OF_MINUTE, sod % 60)
        if Field.MINUTE_OF_DAY in work:
            mod = self._check(Field.MINUTE_OF_DAY, work.pop(Field.MINUTE_OF_DAY))
            self._add(work, Field.HOUR_OF_DAY, mod // 60)
            self._add(work, Field.MINUTE_OF_HOUR, mod % 60)

        # Fold milli/micro-of-second into nano-of-second.
        if Field.MILLI_OF_SECOND in work and Field.MICRO_OF_SECOND in work:
            los = self._check(Field.MILLI_OF_SECOND, work.pop(Field.MILLI_OF_SECOND))
            cos = self._check(Field.MICRO_OF_SECOND, work[Field.MICRO_OF_SECOND])
            work[Field.MICRO_OF_SECOND] = los * 1000 + cos % 1000
        if Field.MICRO_OF_SECOND in work:
            cos = self._check(Field.MICRO_OF_SECOND, work.pop(Field.MICRO_OF_SECOND))
            nos = work.get(Field.NANO_OF_SECOND, 0)
            work[Field.NANO_OF_SECOND] = cos * 1000 + nos % 1000
        if Field.MILLI_OF_SECOND in work:
            los = self._check(Field.MILLI_OF_SECOND, work.pop(Field.MILLI_OF_SECOND))
            nos = work.get(Field.NANO_OF_SECOND, 0)
            work[Field.NANO_OF_SECOND] = los * 1_000_000 + nos % 1_000_000

        if Field.HOUR_OF_DAY not in work:
            return None, 0
        moh = work.get(Field.MINUTE_OF_HOUR)
        som = work.get(Field.SECOND_OF_MINUTE)
        nos = work.get(Field.NANO_OF_SECOND)
        # A gap (seconds without minutes, nanos without seconds) leaves the time unresolved.
        if (moh is None and (som is not None or nos is not None)) or (som is None and nos is not None):
            return None, 0
        hod = work.pop(Field.HOUR_OF_DAY)
        moh = work.pop(Field.MINUTE_OF_HOUR, 0)
        som = work.pop(Field.SECOND_OF_MINUTE, 0)
        nos = work.pop(Field.NANO_OF_SECOND, 0)
        return self._resolve_time(hod, moh, som, nos)

    def _cross_check_time(self, t: LocalTime, work: FieldMap) -> None:
        # Whatever time fields the merge above did not consume (a lone
        # AMPM_OF_DAY, say) must agree with the resolved time.
        for f in [f for f in work if f.is_time_based]:
            expected = work.pop(f)
            actual = t.get(f)
            if actual != expected:
                raise CalendarStateError(
                    f"Conflict found: Field {f} {actual} differs from {f} {expected} derived from {t}"
                )

    def _resolve_time(self, hod: int, moh: int, som: int, nos: int) -> Tuple[LocalTime, int]:
        if self.lenient:
            total = hod * NANOS_PER_HOUR + moh * NANOS_PER_MINUTE + som * NANOS_PER_SECOND + nos
            excess, nod = divmod(total, NANOS_PER_DAY)
            return LocalTime(nod), excess
        Field.MINUTE_OF_HOUR.check_valid_value(moh)
        Field.NANO_OF_SECOND.check_valid_value(nos)
        if self.style is ResolverStyle.SMART and hod == 24 and moh == 0 and som == 0 and nos == 0:
            return LocalTime.MIDNIGHT, 1
        return LocalTime.of(hod, moh, som, nos), 0


# Tried in order; the first combination whose fields are all present wins.
COMBINATIONS: Tuple[Combination, ...] = (
    Combination("epoch-day", (Field.EPOCH_DAY,), FieldResolver._epoch_day),
    Combination(
        "year-month-day",
        (Field.YEAR, Field.MONTH_OF_YEAR, Field.DAY_OF_MONTH),
        FieldResolver._ymd,
    ),
    Combination("year-day", (Field.YEAR, Field.DAY_OF_YEAR), FieldResolver._yd),
    Combination(
        "year-month-aligned-week-aligned-day",
        (Field.YEAR, Field.MONTH_OF_YEAR, Field.ALIGNED_WEEK_OF_MONTH, Field.ALIGNED_DAY_OF_WEEK_IN_MONTH),
        FieldResolver._ymaa,
    ),
    Combination(
        "year-month-aligned-week-day-of-week",
        (Field.YEAR, Field.MONTH_OF_YEAR, Field.ALIGNED_WEEK_OF_MONTH, Field.DAY_OF_WEEK),
        FieldResolver._ymad,
    ),
    Combination(
        "year-aligned-week-aligned-day",
        (Field.YEAR, Field.ALIGNED_WEEK_OF_YEAR, Field.ALIGNED_DAY_OF_WEEK_IN_YEAR),
        FieldResolver._yaa,
    ),
    Combination(
        "year-aligned-week-day-of-week",
        (Field.YEAR, Field.ALIGNED_WEEK_OF_YEAR, Field.DAY_OF_WEEK),
        FieldResolver._yad,
    ),
    Combination(
        "week-based-year",
        (Field.WEEK_BASED_YEAR, Field.WEEK_OF_WEEK_BASED_YEAR, Field.DAY_OF_WEEK),
        FieldResolver._week_based,
    ),
)


def resolve(values: Mapping[Field, int], style: ResolverStyle = ResolverStyle.SMART) -> Resolved:
    return FieldResolver(style).resolve(values)


def resolve_date(values: Mapping[Field, int], style: ResolverStyle = ResolverStyle.SMART) -> Optional[JalaliDate]:
    return FieldResolver(style).resolve_date(values)
