#!/usr/bin/env python3
"""
Compare the leap-year rules year by year.

Three columns per Jalali year:

* residue33    - the active 33-year residue rule,
* remainder128 - the alternative 128-year remainder-table rule,
* equinox      - an astronomical estimate: Nowruz is the day whose Tehran
                 noon follows the (mean) March equinox, and a year is leap
                 when the next Nowruz is 366 days later.

The mean equinox ignores nutation, aberration and Delta T, so isolated
disagreements near the noon boundary are expected.
"""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from caljal.core.time import JDN_UNIX_EPOCH
from caljal.date import JalaliDate
from caljal.rules import ALL_RULES


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "caljal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "caljal[diagnostics]"') from e


# Tehran standard time (UTC+03:30).
TEHRAN_OFFSET_DAYS = 3.5 / 24.0
GREGORIAN_YEAR_OFFSET = 621


def mean_vernal_equinox_jd(year: int) -> float:
    """Meeus mean March equinox (JDE) for Gregorian `year`."""
    t = (year - 2000) / 1000.0
    return 2451623.80984 + 365242.37404 * t + 0.05169 * (t * t) - 0.00411 * (t * t * t)


def nowruz_epoch_day(jalali_year: int) -> int:
    """Epoch day of 1 Farvardin by the Tehran-noon rule on the mean equinox."""
    jd_local = mean_vernal_equinox_jd(jalali_year + GREGORIAN_YEAR_OFFSET) + TEHRAN_OFFSET_DAYS
    jdn = math.floor(jd_local + 0.5)
    before_noon = (jd_local + 0.5 - jdn) < 0.5
    return (jdn if before_noon else jdn + 1) - JDN_UNIX_EPOCH


@dataclass(frozen=True)
class YearRow:
    year: int
    leaps: Dict[str, bool]
    nowruz: int            # epoch day under the active rule
    nowruz_equinox: int    # epoch day by the equinox estimate

    @property
    def agree(self) -> bool:
        return len(set(self.leaps.values())) == 1


def compare_rules(start_year: int, end_year: int) -> List[YearRow]:
    rows: List[YearRow] = []
    next_nowruz = nowruz_epoch_day(start_year)
    for y in range(start_year, end_year + 1):
        nowruz, next_nowruz = next_nowruz, nowruz_epoch_day(y + 1)
        leaps = {name: rule.is_leap(y) for name, rule in ALL_RULES.items()}
        leaps["equinox"] = (next_nowruz - nowruz) == 366
        rows.append(YearRow(y, leaps, JalaliDate(y, 1, 1).to_epoch_day(), nowruz))
    return rows


def print_table(rows: List[YearRow], *, all_rows: bool = False) -> int:
    names = list(rows[0].leaps) if rows else []
    header = f"{'year':>6}  " + "  ".join(f"{n:>12}" for n in names) + f"  {'nowruz':>10}  {'equinox':>10}"
    print(header)
    shown = 0
    for r in rows:
        if r.agree and r.nowruz == r.nowruz_equinox and not all_rows:
            continue
        marks = "  ".join(f"{('leap' if r.leaps[n] else '-'):>12}" for n in names)
        g1 = JalaliDate.of_epoch_day(r.nowruz).to_gregorian()
        g2 = JalaliDate.of_epoch_day(r.nowruz_equinox).to_gregorian()
        print(f"{r.year:>6}  {marks}  {g1.isoformat():>10}  {g2.isoformat():>10}")
        shown += 1
    return shown


def plot_barcode(rows: List[YearRow], out: str, title: str) -> None:
    np = _need_numpy()
    plt = _need_matplotlib()
    from matplotlib.colors import ListedColormap

    names = list(rows[0].leaps)
    years = np.array([r.year for r in rows], dtype=int)
    start_year, end_year = int(years[0]), int(years[-1])

    fig, ax = plt.subplots(figsize=(16, 1.2 + 0.6 * len(names)))

    x_edges = np.arange(start_year - 0.5, end_year + 1.5, 1.0)
    y_edges = np.arange(0.5, len(names) + 1.0, 1.0)
    Z = np.zeros((len(names), len(rows)), dtype=float)
    ax.pcolormesh(
        x_edges,
        y_edges,
        Z,
        shading="flat",
        cmap=ListedColormap(["white"]),
        vmin=0, vmax=1,
        edgecolors="0.88",
        linewidth=0.6,
        antialiased=True,
        zorder=0,
    )

    for i, name in enumerate(names, start=1):
        mask = np.array([r.leaps[name] for r in rows], dtype=bool)
        ax.scatter(years[mask], np.full(mask.sum(), i), s=22, marker="o", c="0.15", linewidths=0.0, zorder=5)

    # Columns where the rules disagree.
    bad = np.array([not r.agree for r in rows], dtype=bool)
    for x in years[bad]:
        ax.axvspan(x - 0.5, x + 0.5, color="tab:red", alpha=0.15, zorder=1)

    ax.set_xlim(start_year - 0.5, end_year + 0.5)
    ax.set_ylim(0.5, len(names) + 0.5)
    ax.tick_params(axis="both", which="both", length=0)
    ax.set_yticks(list(range(1, len(names) + 1)))
    ax.set_yticklabels(names)
    ax.set_xlabel("Jalali year")
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(out, dpi=250)
    print(f"Saved: {out}")


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Leap-year rules compared against a mean-equinox Nowruz estimate.")
    p.add_argument("--start-year", type=int, default=1300)
    p.add_argument("--end-year", type=int, default=1500)
    p.add_argument("--all", action="store_true", help="Print every year, not only disagreements.")
    p.add_argument("--plot", action="store_true", help="Draw a barcode plot (needs numpy + matplotlib).")
    p.add_argument("--out", default="leap_rules_barcode.png")
    p.add_argument("--title", default="Jalali leap years by rule")
    args = p.parse_args(argv)

    if args.end_year < args.start_year:
        raise SystemExit("--end-year must be >= --start-year")

    rows = compare_rules(args.start_year, args.end_year)
    shown = print_table(rows, all_rows=args.all)
    disagree = sum(1 for r in rows if not r.agree)
    print(f"{len(rows)} years, {disagree} with rule disagreements, {shown} rows shown")

    if args.plot:
        plot_barcode(rows, args.out, args.title)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
