from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .atoms import ATOM_COUNT, ATOM_ORDER, CARDINALS, LIFE_DEATH, METAL_ORDER, Atom, can_match, metal_rank
from .board import Board, holds_atom
from .freedom import update_selectability
from .moves import IllegalMoveError, Move, apply_move, is_legal, legal_moves, undo_move

log = logging.getLogger(__name__)

# Dead positions remembered before the memo is dropped and started again.
MEMO_LIMIT = 1_000_000

_SELF_PAIRING = tuple(a for a in CARDINALS if a != Atom.SALT)
_CHAIN_METALS = METAL_ORDER[:-1]


def _can_pair_in_play(a: Atom, b: Atom) -> bool:
    # The metal gate never leaves two different chain metals selectable together.
    if metal_rank(a) is not None and metal_rank(b) is not None:
        return False
    return can_match(a, b)


_PARTNERS: Dict[Atom, Tuple[Atom, ...]] = {
    a: tuple(b for b in ATOM_ORDER if _can_pair_in_play(a, b)) for a in ATOM_ORDER
}


@dataclass
class SolveResult:
    """Outcome of a search. moves is one clearing sequence when solvable.

    complete is False when the node budget ran out before an answer was found;
    solvable is then False but proves nothing.
    """
    solvable: bool
    moves: List[Move] = field(default_factory=list)
    nodes: int = 0
    complete: bool = True


class _BudgetExceeded(Exception):
    pass


def atom_counts(board: Board) -> List[int]:
    """Atoms on the board per kind, indexed like ATOM_ORDER."""
    counts = [0] * ATOM_COUNT
    for c in board.cells:
        if holds_atom(c.contents):
            counts[c.contents.index] += 1  # type: ignore[union-attr]
    return counts


def counts_feasible(counts: Sequence[int]) -> bool:
    """
    Necessary conditions on the remaining counts alone.

    Mors and vitae only leave together. Each self-pairing cardinal left with
    an odd count needs one salt, and the salt left after that pairs off. Each
    chain metal needs its own quicksilver, and spare quicksilver pairs off.
    """
    if counts[Atom.MORS.index] != counts[Atom.VITAE.index]:
        return False
    odd = sum(1 for a in _SELF_PAIRING if counts[a.index] % 2)
    salt = counts[Atom.SALT.index]
    if salt < odd or (salt - odd) % 2:
        return False
    quicksilver = counts[Atom.QUICKSILVER.index]
    chain = sum(counts[m.index] for m in _CHAIN_METALS)
    return quicksilver >= chain and (quicksilver - chain) % 2 == 0


def _partner_count(atom: Atom, counts: Sequence[int]) -> int:
    n = sum(counts[p.index] for p in _PARTNERS[atom])
    return n - 1 if atom in _PARTNERS[atom] else n


def _forced_move(board: Board, moves: List[Move], counts: Sequence[int]) -> Optional[Move]:
    """
    A move that some solution plays first, if one is obvious.

    Removing atoms never locks another cell, so a removal that every solution
    must make can be made now: a free gold, or a pair whose atoms have no
    other possible partner on the board.
    """
    for move in moves:
        if move.second is None:
            return move
        a = board.cell(move.first).contents
        b = board.cell(move.second).contents
        if _partner_count(a, counts) == 1 and _partner_count(b, counts) == 1:  # type: ignore[arg-type]
            return move
    return None


def _move_rank(board: Board, move: Move) -> int:
    # Same-kind pairs before wildcards; salt and spare quicksilver are spent last.
    if move.second is None:
        return 0
    a = board.cell(move.first).contents
    b = board.cell(move.second).contents
    if Atom.QUICKSILVER in (a, b):
        return 5 if a == b else 1
    if Atom.SALT in (a, b):
        return 6 if a == b else 4
    if a in LIFE_DEATH:
        return 2
    return 3


def solve(board: Board, memoize: bool = True, max_nodes: Optional[int] = None) -> SolveResult:
    """
    Depth-first search with backtracking over legal move sequences.
    Works on a private copy, so the caller's board is never modified.

    Positions whose counts cannot pair off are cut without listing moves, and
    forced removals are played without branching. With memoize, positions
    already proven dead (keyed by the bitmask of occupied cells) are not
    searched again. None of this changes the answer. max_nodes bounds the
    work; when it runs out the result is incomplete.
    """
    work = board.copy()
    counts = atom_counts(work)
    dead: Set[int] = set()
    path: List[Move] = []
    nodes = 0
    mask = work.occupied_mask()

    def dfs() -> bool:
        nonlocal nodes, mask
        nodes += 1
        if max_nodes is not None and nodes > max_nodes:
            raise _BudgetExceeded
        if mask == 0:
            return True
        if memoize and mask in dead:
            return False
        if not counts_feasible(counts):
            return False
        update_selectability(work)
        moves = legal_moves(work)
        forced = _forced_move(work, moves, counts)
        if forced is not None:
            moves = [forced]
        else:
            moves.sort(key=lambda m: _move_rank(work, m))
        for move in moves:
            before = mask
            undo = apply_move(work, move)
            for cell_id, atom in undo:
                counts[atom.index] -= 1  # type: ignore[union-attr]
                mask ^= 1 << cell_id
            path.append(move)
            if dfs():
                return True
            path.pop()
            undo_move(work, undo)
            for _, atom in undo:
                counts[atom.index] += 1  # type: ignore[union-attr]
            mask = before
        if memoize:
            if len(dead) >= MEMO_LIMIT:
                log.debug('solve: dead-position memo reached %d entries, clearing', len(dead))
                dead.clear()
            dead.add(mask)
        return False

    try:
        solvable = dfs()
        complete = True
    except _BudgetExceeded:
        solvable, complete = False, False
        log.debug('solve: node budget %s exhausted', max_nodes)
    log.debug('solve: solvable=%s complete=%s nodes=%d atoms=%d',
              solvable, complete, nodes, len(board.atom_cells()))
    return SolveResult(solvable=solvable, moves=list(path) if solvable else [], nodes=nodes, complete=complete)


def is_solvable(board: Board, max_nodes: Optional[int] = None) -> bool:
    return solve(board, max_nodes=max_nodes).solvable


def replay(board: Board, moves: List[Move]) -> Board:
    """Applies a move sequence to a copy, checking each move against fresh selectability."""
    work = board.copy()
    for move in moves:
        update_selectability(work)
        if not is_legal(work, move):
            raise IllegalMoveError(f'illegal move in sequence: {move}')
        apply_move(work, move)
    update_selectability(work)
    return work
