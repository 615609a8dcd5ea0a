from __future__ import annotations

import argparse
import random
from datetime import date, timedelta

from caljal.alignment import DEFAULT_ALIGNMENT
from caljal.date import JalaliDate
from caljal.fields import MAX_EPOCH_DAY, MIN_EPOCH_DAY


def parse_date(s: str) -> date:
    y, m, d = s.split("-")
    return date(int(y), int(m), int(d))


def random_date(start: date, end: date) -> date:
    span = (end - start).days
    return start + timedelta(days=random.randint(0, span))


def gregorian_round_trip(N: int, start: date, end: date, seed: int, *, max_failures: int) -> int:
    random.seed(seed)
    failures = 0
    for _ in range(N):
        g0 = random_date(start, end)
        j = JalaliDate.from_gregorian(g0)
        back = j.to_gregorian()
        if back != g0:
            failures += 1
            print("\nFAIL (gregorian)")
            print("g0:", g0)
            print("jalali:", j, "epoch_day:", j.to_epoch_day())
            print("back:", back)
            if failures >= max_failures:
                return failures
    return failures


def epoch_round_trip(N: int, seed: int, *, max_failures: int) -> int:
    random.seed(seed)
    failures = 0
    for _ in range(N):
        e = random.randint(MIN_EPOCH_DAY, MAX_EPOCH_DAY)
        j = JalaliDate.of_epoch_day(e)
        back = j.to_epoch_day()
        rebuilt = JalaliDate.of(j.year, j.month, j.day)
        if back != e or rebuilt != j:
            failures += 1
            print("\nFAIL (epoch)")
            print("e:", e, "jalali:", j, "back:", back)
            if failures >= max_failures:
                return failures
    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: gregorian <-> jalali and epoch day <-> jalali.")
    p.add_argument("--N", type=int, default=5000, help="Trials per check.")
    p.add_argument("--start", type=str, default=f"{DEFAULT_ALIGNMENT.first_year}-01-01", help="Start date YYYY-MM-DD.")
    p.add_argument("--end", type=str, default=f"{DEFAULT_ALIGNMENT.last_year}-12-31", help="End date YYYY-MM-DD.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per check.")
    args = p.parse_args(argv)

    start = parse_date(args.start)
    end = parse_date(args.end)
    if end < start:
        raise SystemExit("--end must be >= --start")

    print("Testing gregorian -> jalali -> gregorian ...")
    total_fail = gregorian_round_trip(args.N, start, end, args.seed, max_failures=args.max_failures)
    print("Testing epoch day -> jalali -> epoch day ...")
    total_fail += epoch_round_trip(args.N, args.seed, max_failures=args.max_failures)

    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
