from __future__ import annotations

import argparse
import random
from datetime import date
from typing import List, Optional

from .config import configure_logging, max_generation_attempts
from .daily import (
    GeneratedPuzzle,
    daily_difficulty,
    daily_seed,
    format_remaining_time,
    generate_until_solvable,
    time_until_next_puzzle,
)
from .difficulty import parse_difficulty
from .moves import apply_move, describe_move
from .session import PlaySession
from .solver import solve

TODAY = 'today'


def _parse_day(text: str) -> date:
    if text == TODAY:
        return date.today()
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise SystemExit(f'error: expected YYYY-MM-DD for --daily, got {text!r}') from None


def _parse_tap_ids(text: str) -> List[int]:
    sep = ',' if ',' in text else ' '
    return [int(t) for t in text.split(sep) if t.strip() != '']


def _build_puzzle(args: argparse.Namespace) -> GeneratedPuzzle:
    attempts = args.attempts if args.attempts is not None else max_generation_attempts()
    if args.daily is not None:
        day = _parse_day(args.daily)
        difficulty = daily_difficulty(day)
        print(f'Daily puzzle for {day.isoformat()} ({difficulty.value})')
        puzzle = generate_until_solvable(daily_seed(day), difficulty, max_attempts=attempts)
        puzzle.day = day
        return puzzle
    try:
        difficulty = parse_difficulty(args.difficulty)
    except ValueError as e:
        raise SystemExit(f'error: {e}') from None
    seed = args.seed if args.seed is not None else random.SystemRandom().randrange(2 ** 31)
    return generate_until_solvable(seed, difficulty, max_attempts=attempts)


def _print_solution(puzzle: GeneratedPuzzle) -> None:
    res = solve(puzzle.board)
    if not res.solvable:
        print(f'\nNo clearing sequence exists ({res.nodes} positions searched).')
        return
    print(f'\nSolution ({len(res.moves)} moves, {res.nodes} positions searched):')
    board = puzzle.board.copy()
    for n, move in enumerate(res.moves, 1):
        print(f'{n:3d}. {describe_move(board, move)}')
        apply_move(board, move)


def _play(puzzle: GeneratedPuzzle) -> None:
    session = PlaySession(puzzle.board)
    while True:
        print(session.board.pretty(set(session.selected)))
        if session.is_won():
            print(f'Board cleared in {len(session.history)} moves.')
            return
        if session.is_stuck():
            print('No moves left.')
            return
        print('Selectable cells:', session.board.selectable_ids())
        imbalanced = session.imbalanced_atoms()
        if imbalanced:
            print('Unpaired:', ', '.join(a.value for a in imbalanced))
        text = input('Tap cell id(s), e.g. 12 or 12,30 (q to quit): ').strip()
        if text.lower() in ('q', 'quit', 'exit'):
            return
        try:
            ids = _parse_tap_ids(text)
        except ValueError:
            print('Could not parse. Try again.')
            continue
        for cell_id in ids:
            before = session.board.copy()
            result = session.tap(cell_id)
            if result.move is not None:
                print('Removed', describe_move(before, result.move))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Sigmar's Garden board generator and solver")
    parser.add_argument('--difficulty', default='easy', help='easy, medium or hard')
    parser.add_argument('--seed', type=int, default=None, help='Base RNG seed for generation')
    parser.add_argument('--daily', nargs='?', const=TODAY, default=None,
                        help='Generate the daily puzzle for today or for YYYY-MM-DD')
    parser.add_argument('--attempts', type=int, default=None, help='Maximum generation attempts')
    parser.add_argument('--show-solution', action='store_true', help='Print one clearing move sequence')
    parser.add_argument('--play', action='store_true', help='Play the generated board in the terminal')
    args = parser.parse_args(argv)
    configure_logging()

    puzzle = _build_puzzle(args)
    print(f'Seed {puzzle.seed} (attempt {puzzle.attempt}), {puzzle.difficulty.value}, '
          f'{len(puzzle.board.atom_cells())} atoms, status: {puzzle.status.value}')
    print(puzzle.board.pretty())
    if puzzle.day is not None and puzzle.day == date.today():
        print('Next daily puzzle in', format_remaining_time(time_until_next_puzzle()))

    if args.show_solution:
        _print_solution(puzzle)
    if args.play:
        _play(puzzle)


if __name__ == '__main__':
    main()
