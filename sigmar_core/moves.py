from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .atoms import Atom, can_match
from .board import EMPTY, Board, Contents, holds_atom


class IllegalMoveError(ValueError):
    """A move that the current board does not allow."""


@dataclass(frozen=True)
class Move:
    """Either a matched pair of cell ids or a lone Gold cell (second is None)."""
    first: int
    second: Optional[int] = None

    @property
    def is_single(self) -> bool:
        return self.second is None

    def cell_ids(self) -> Tuple[int, ...]:
        if self.second is None:
            return (self.first,)
        return (self.first, self.second)


Undo = Tuple[Tuple[int, Contents], ...]


def legal_moves(board: Board) -> List[Move]:
    """All moves allowed by the board's current selectable flags.

    Callers recompute selectability after every change first. Gold singles
    come first, then every unordered pair of selectable cells whose atoms match.
    """
    ready = [c for c in board.cells if c.selectable and holds_atom(c.contents)]
    moves: List[Move] = [Move(c.id) for c in ready if c.contents == Atom.GOLD]
    for i in range(len(ready)):
        a = ready[i]
        for j in range(i + 1, len(ready)):
            b = ready[j]
            if can_match(a.contents, b.contents):  # type: ignore[arg-type]
                moves.append(Move(a.id, b.id))
    return moves


def is_legal(board: Board, move: Move) -> bool:
    ids = move.cell_ids()
    if any(not (0 <= i < len(board)) for i in ids):
        return False
    cells = [board.cell(i) for i in ids]
    if any(not (c.selectable and holds_atom(c.contents)) for c in cells):
        return False
    if move.second is None:
        return cells[0].contents == Atom.GOLD
    if move.first == move.second:
        return False
    return can_match(cells[0].contents, cells[1].contents)  # type: ignore[arg-type]


def apply_move(board: Board, move: Move) -> Undo:
    """Clears the move's cells in place and returns what undo_move needs to put them back."""
    undo = tuple((i, board.cell(i).contents) for i in move.cell_ids())
    for i in move.cell_ids():
        board.cell(i).contents = EMPTY
    return undo


def undo_move(board: Board, undo: Undo) -> None:
    for i, contents in undo:
        board.cell(i).contents = contents


def describe_move(board: Board, move: Move) -> str:
    parts = []
    for i in move.cell_ids():
        c = board.cell(i)
        name = c.contents.value if holds_atom(c.contents) else 'empty'  # type: ignore[union-attr]
        parts.append(f'{name}@({c.x},{c.y})')
    return ' + '.join(parts)
