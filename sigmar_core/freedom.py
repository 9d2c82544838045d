from __future__ import annotations

from typing import Callable, List, Optional, Set

from .atoms import METAL_ORDER, Atom, metal_rank
from .board import Board, Cell, Contents, holds_atom, is_placeholder
from .grid import NO_NEIGHBOR

OccupiedTest = Callable[[Contents], bool]

_OPEN = ' '
_TAKEN = 'e'
_RUN = _OPEN * 3


def neighbor_ring(board: Board, cell: Cell, is_occupied: OccupiedTest) -> str:
    """Six characters, one per neighbour slot: 'e' when occupied, ' ' when open or off the board."""
    ring: List[str] = []
    for nid in cell.neighbors:
        if nid != NO_NEIGHBOR and is_occupied(board.cells[nid].contents):
            ring.append(_TAKEN)
        else:
            ring.append(_OPEN)
    return ''.join(ring)


def has_open_run(board: Board, cell: Cell, is_occupied: OccupiedTest) -> bool:
    """True when three consecutive neighbour slots around the cell are open.

    The ring is doubled so a run may wrap from the last slot to the first.
    """
    ring = neighbor_ring(board, cell, is_occupied)
    return _RUN in ring + ring


def free_placeholders(board: Board) -> List[int]:
    """Ids of placeholder cells that may receive an atom now, placeholders counting as occupied."""
    return [
        c.id for c in board.cells
        if is_placeholder(c.contents) and has_open_run(board, c, is_placeholder)
    ]


def _present_chain_ranks(board: Board) -> Set[int]:
    ranks: Set[int] = set()
    for c in board.cells:
        if holds_atom(c.contents):
            rank = metal_rank(c.contents)  # type: ignore[arg-type]
            if rank is not None:
                ranks.add(rank)
    return ranks


def is_metal_locked(atom: Atom, present_ranks: Set[int]) -> bool:
    rank = metal_rank(atom)
    if rank is None:
        return False
    return any(r < rank for r in present_ranks)


def update_selectability(board: Board) -> Board:
    """Recomputes every cell's selectable flag in place for play and returns the board.

    A chain metal stays locked while any earlier metal in METAL_ORDER is still
    anywhere on the board, however free it is locally.
    """
    present = _present_chain_ranks(board)
    for c in board.cells:
        free = has_open_run(board, c, holds_atom)
        if free and holds_atom(c.contents) and is_metal_locked(c.contents, present):  # type: ignore[arg-type]
            free = False
        c.selectable = free
    return board


def lowest_metal_present(board: Board) -> Optional[Atom]:
    """The earliest chain metal still on the board, or None."""
    present = _present_chain_ranks(board)
    if not present:
        return None
    return METAL_ORDER[min(present)]
