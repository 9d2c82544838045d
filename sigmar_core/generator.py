from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Sequence, Tuple

from .atoms import ATOM_COUNT, CARDINALS, METAL_ORDER, Atom, MaterialClass
from .board import EMPTY, PLACEHOLDER, Board
from .difficulty import DifficultyProfile, Goals, ProfileError
from .freedom import free_placeholders

log = logging.getLogger(__name__)

# Consecutive passes without a change in free placeholders before giving up.
MAX_STALLED_ITERATIONS = 500

# Gold is placed up front, so quicksilver only ever pairs with lead..silver.
_CHAIN_METALS: Tuple[Atom, ...] = METAL_ORDER[:-1]

_GROUPS: Dict[MaterialClass, Tuple[Atom, ...]] = {
    MaterialClass.CARDINAL: CARDINALS,
    MaterialClass.METAL: (Atom.QUICKSILVER,) + _CHAIN_METALS,
    MaterialClass.LIFE_DEATH: (Atom.MORS, Atom.VITAE),
}

Pair = Tuple[Atom, Atom]


def _group_unmet(group: Sequence[Atom], generated: List[int], goals: Goals) -> bool:
    have = sum(generated[a.index] for a in group)
    want = sum(goals[a.index] for a in group)
    return have < want


def _cardinal_picks(generated: List[int], goals: Goals) -> List[Atom]:
    return [a for a in CARDINALS if generated[a.index] < goals[a.index]]


def _next_chain_metal(generated: List[int], goals: Goals) -> Optional[Atom]:
    for metal in _CHAIN_METALS:
        if generated[metal.index] < goals[metal.index]:
            return metal
    return None


def open_categories(generated: List[int], goals: Goals) -> List[MaterialClass]:
    """Pair categories with unmet goals that can still produce a concrete pair."""
    out: List[MaterialClass] = []
    for category, group in _GROUPS.items():
        if not _group_unmet(group, generated, goals):
            continue
        if category is MaterialClass.CARDINAL and not _cardinal_picks(generated, goals):
            continue
        if category is MaterialClass.METAL and _next_chain_metal(generated, goals) is None:
            continue
        out.append(category)
    return out


def pick_pair(category: MaterialClass, generated: List[int], goals: Goals, rng: random.Random) -> Pair:
    """Concrete atoms for one placement; only called for categories from open_categories."""
    if category is MaterialClass.CARDINAL:
        picks = _cardinal_picks(generated, goals)
        atom = picks[rng.randrange(len(picks))]
        return atom, atom
    if category is MaterialClass.LIFE_DEATH:
        return Atom.MORS, Atom.VITAE
    metal = _next_chain_metal(generated, goals)
    if metal is None:
        raise ValueError('no chain metal left below its goal')
    return Atom.QUICKSILVER, metal


def _mark_template(board: Board, profile: DifficultyProfile) -> None:
    for c in board.cells:
        c.contents = PLACEHOLDER if c.rendered and profile.template[c.id] else EMPTY


def generate_board(board: Board, profile: DifficultyProfile, rng: random.Random) -> Board:
    """Fills the board in place for the profile and returns it.

    Pairs go onto placeholder cells that are free at the moment of placement,
    so each placement changes what the next one can use. The result is a
    candidate only: solvability is checked separately. Goals that the
    geometry cannot satisfy leave the board under-filled rather than failing.
    """
    profile.validate()
    if board.size != profile.size:
        raise ProfileError(f'board size {board.size} does not match profile size {profile.size}')

    goals = profile.goals
    generated = [0] * ATOM_COUNT
    generated[Atom.GOLD.index] = 1

    _mark_template(board, profile)
    board.cell(board.center_id).contents = Atom.GOLD

    free = free_placeholders(board)
    stalled = 0
    while free:
        categories = open_categories(generated, goals)
        if not categories:
            break
        previous = len(free)
        category = categories[rng.randrange(len(categories))]
        first_atom, second_atom = pick_pair(category, generated, goals, rng)
        if len(free) >= 2:
            first = free.pop(rng.randrange(len(free)))
            second = free.pop(rng.randrange(len(free)))
            board.cell(first).contents = first_atom
            board.cell(second).contents = second_atom
            generated[first_atom.index] += 1
            generated[second_atom.index] += 1
        free = free_placeholders(board)
        if len(free) == previous:
            stalled += 1
            if stalled >= MAX_STALLED_ITERATIONS:
                log.debug('generation stalled after %d idle iterations', stalled)
                break
        else:
            stalled = 0

    leftover = 0
    for c in board.cells:
        if c.contents == PLACEHOLDER:
            c.contents = EMPTY
            leftover += 1

    if log.isEnabledFor(logging.DEBUG):
        short = {
            a.value: goals[a.index] - generated[a.index]
            for a in Atom if generated[a.index] < goals[a.index]
        }
        log.debug('generated %d atoms on size %d, %d placeholders cleared, unmet goals: %s',
                  sum(generated), board.size, leftover, short or 'none')
    return board
