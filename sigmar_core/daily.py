from __future__ import annotations

import logging
import random
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Callable, Optional, Union

from .board import Board, build_grid
from .config import max_generation_attempts, solver_node_limit
from .difficulty import Difficulty
from .generator import generate_board
from .solver import is_solvable

log = logging.getLogger(__name__)

REFERENCE_DATE = date(2001, 1, 1)
SEED_MULTIPLIER = 31415926
ATTEMPT_SEED_STRIDE = 1000

_DAILY_CHOICES = (Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD)

DateLike = Union[date, datetime]
Solver = Callable[[Board], bool]


class PuzzleStatus(Enum):
    VERIFIED = 'verified'
    UNVERIFIED_FALLBACK = 'unverified_fallback'


@dataclass
class GeneratedPuzzle:
    """A board with the seed that built it and whether the solver accepted it."""
    board: Board
    difficulty: Difficulty
    seed: int
    attempt: int
    status: PuzzleStatus
    day: Optional[date] = None

    @property
    def verified(self) -> bool:
        return self.status is PuzzleStatus.VERIFIED

    def copy(self) -> 'GeneratedPuzzle':
        return replace(self, board=self.board.copy())


def _as_date(day: DateLike) -> date:
    if isinstance(day, datetime):
        return day.date()
    return day


def daily_seed(day: DateLike) -> int:
    """Base seed for a calendar day: days since 2001-01-01 times a fixed multiplier."""
    days = (_as_date(day) - REFERENCE_DATE).days
    return abs(days * SEED_MULTIPLIER)


def daily_difficulty(day: DateLike) -> Difficulty:
    rng = random.Random(daily_seed(day))
    return _DAILY_CHOICES[rng.randrange(len(_DAILY_CHOICES))]


def generate_seeded(seed: int, difficulty: Difficulty) -> Board:
    """One deterministic attempt: template and every placement come from random.Random(seed)."""
    rng = random.Random(seed)
    profile = difficulty.profile(rng)
    return generate_board(build_grid(difficulty.grid_size), profile, rng)


def _verify(board: Board) -> bool:
    return is_solvable(board, max_nodes=solver_node_limit())


def generate_until_solvable(
    base_seed: int,
    difficulty: Difficulty,
    max_attempts: Optional[int] = None,
    solver: Optional[Solver] = None,
) -> GeneratedPuzzle:
    """
    Tries seeds base_seed, base_seed + 1000, ... and returns the first board the
    solver accepts. When every attempt fails the last board is returned with
    status UNVERIFIED_FALLBACK instead of raising.
    """
    attempts = max_attempts if max_attempts is not None else max_generation_attempts()
    if attempts < 1:
        raise ValueError(f'max_attempts must be at least 1, got {attempts}')
    check = solver or _verify

    for attempt in range(attempts):
        seed = base_seed + attempt * ATTEMPT_SEED_STRIDE
        board = generate_seeded(seed, difficulty)
        if check(board):
            log.debug('seed %d (%s) verified on attempt %d', base_seed, difficulty.value, attempt)
            return GeneratedPuzzle(board, difficulty, seed, attempt, PuzzleStatus.VERIFIED)
        log.debug('seed %d (%s) attempt %d not solvable', base_seed, difficulty.value, attempt)

    log.warning('no solvable board for seed %d (%s) in %d attempts; returning unverified board',
                base_seed, difficulty.value, attempts)
    return GeneratedPuzzle(board, difficulty, seed, attempts - 1, PuzzleStatus.UNVERIFIED_FALLBACK)


class DailyPuzzleGenerator:
    """
    Produces the same puzzle for every caller on a given day.

    Today's puzzle is cached for the rest of the calendar day; puzzles for
    other dates are built on demand and not kept. The cache is the only
    shared state and is guarded by a lock; concurrent writers for the same
    day produce identical puzzles, so the last write wins.
    """

    def __init__(
        self,
        max_attempts: Optional[int] = None,
        solver: Optional[Solver] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.max_attempts = max_attempts
        self.solver = solver
        self._today = today
        self._lock = threading.Lock()
        self._cached: Optional[GeneratedPuzzle] = None
        self._executor: Optional[ThreadPoolExecutor] = None

    def cached(self, day: Optional[DateLike] = None) -> Optional[GeneratedPuzzle]:
        """Copy of the cached puzzle for the day, if it is today's and still held."""
        target = _as_date(day) if day is not None else self._today()
        with self._lock:
            if self._cached is not None and self._cached.day != self._today():
                self._cached = None
            if self._cached is None or self._cached.day != target:
                return None
            return self._cached.copy()

    def clear_cache(self) -> None:
        with self._lock:
            self._cached = None

    def generate(self, day: Optional[DateLike] = None) -> GeneratedPuzzle:
        target = _as_date(day) if day is not None else self._today()
        hit = self.cached(target)
        if hit is not None:
            return hit
        puzzle = generate_until_solvable(
            daily_seed(target),
            daily_difficulty(target),
            max_attempts=self.max_attempts,
            solver=self.solver,
        )
        puzzle.day = target
        if target != self._today():
            return puzzle
        with self._lock:
            self._cached = puzzle
        return puzzle.copy()

    def generate_async(self, day: Optional[DateLike] = None) -> 'Future[GeneratedPuzzle]':
        """Runs generate on a worker thread; the future completes once, there is no cancellation."""
        hit = self.cached(day)
        if hit is not None:
            done: 'Future[GeneratedPuzzle]' = Future()
            done.set_result(hit)
            return done
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='sigmar-daily')
            executor = self._executor
        return executor.submit(self.generate, day)

    def shutdown(self) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)


_default_generator = DailyPuzzleGenerator()


def generate_daily(day: Optional[DateLike] = None) -> GeneratedPuzzle:
    """Today's (or the given day's) puzzle from the shared, cached generator."""
    return _default_generator.generate(day)


def default_generator() -> DailyPuzzleGenerator:
    return _default_generator


def time_until_next_puzzle(now: Optional[datetime] = None) -> timedelta:
    current = now or datetime.now()
    tomorrow = datetime.combine(current.date() + timedelta(days=1), datetime.min.time(), tzinfo=current.tzinfo)
    return tomorrow - current


def format_remaining_time(remaining: Union[timedelta, float]) -> str:
    """HH:MM:SS, hours not wrapped at 24."""
    seconds = remaining.total_seconds() if isinstance(remaining, timedelta) else remaining
    total = max(0, int(seconds))
    return f'{total // 3600:02d}:{(total % 3600) // 60:02d}:{total % 60:02d}'
