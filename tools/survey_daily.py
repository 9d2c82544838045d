from __future__ import annotations

import argparse
import os
import sys
import time
from datetime import date, timedelta
from typing import Iterable

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from game import daily_difficulty, daily_seed, generate_until_solvable  # type: ignore


def iter_days(start: date, count: int) -> Iterable[date]:
    for n in range(count):
        yield start + timedelta(days=n)


def process(args: argparse.Namespace) -> None:
    start = date.fromisoformat(args.start) if args.start else date.today()
    count = max(1, int(args.days))
    start_time = time.time()
    verified = 0
    fallbacks = 0
    attempts_total = 0

    for day in iter_days(start, count):
        t0 = time.time()
        difficulty = daily_difficulty(day)
        puzzle = generate_until_solvable(daily_seed(day), difficulty, max_attempts=args.attempts)
        dt = time.time() - t0
        attempts_total += puzzle.attempt + 1
        if puzzle.verified:
            verified += 1
        else:
            fallbacks += 1
        print(f"{day.isoformat()}  {difficulty.value:<6}  attempt={puzzle.attempt:<3}  "
              f"atoms={len(puzzle.board.atom_cells()):<3}  {puzzle.status.value:<19}  {dt:6.2f}s")

    elapsed = time.time() - start_time
    print(f"\n{count} days: {verified} verified, {fallbacks} fallback, "
          f"{attempts_total / count:.2f} attempts/day, {elapsed:.1f}s total")


def main() -> None:
    ap = argparse.ArgumentParser(description="Generate daily puzzles over a date range and report outcomes")
    ap.add_argument("--start", default=None, help="First day (YYYY-MM-DD), default today")
    ap.add_argument("--days", type=int, default=7, help="Number of consecutive days")
    ap.add_argument("--attempts", type=int, default=50, help="Attempt cap per day")
    args = ap.parse_args()
    process(args)


if __name__ == "__main__":
    main()
