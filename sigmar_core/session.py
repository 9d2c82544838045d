from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .atoms import Atom
from .board import Board, holds_atom
from .freedom import lowest_metal_present, update_selectability
from .moves import IllegalMoveError, Move, apply_move, is_legal, legal_moves

# Atoms that pair with their own kind and so should be left in even numbers.
_SELF_PAIRING = (Atom.WATER, Atom.FIRE, Atom.AIR, Atom.EARTH, Atom.QUINTESSENCE, Atom.SALT)


@dataclass
class TapResult:
    """What a single tap did: the move it completed (if any) and the selection left behind."""
    move: Optional[Move] = None
    selected: List[int] = field(default_factory=list)


class PlaySession:
    """A board being cleared by a player; selectability is kept current after every change."""

    def __init__(self, board: Board) -> None:
        self.board = board.copy()
        self.selected: List[int] = []
        self.history: List[Move] = []
        update_selectability(self.board)

    def legal_moves(self) -> List[Move]:
        return legal_moves(self.board)

    def is_won(self) -> bool:
        return self.board.is_empty()

    def is_stuck(self) -> bool:
        return not self.is_won() and not self.legal_moves()

    def next_metal(self) -> Optional[Atom]:
        return lowest_metal_present(self.board)

    def play(self, move: Move) -> None:
        if not is_legal(self.board, move):
            raise IllegalMoveError(f'move {move.cell_ids()} is not legal on this board')
        apply_move(self.board, move)
        self.history.append(move)
        self.selected = [i for i in self.selected if i not in move.cell_ids()]
        update_selectability(self.board)

    def tap(self, cell_id: int) -> TapResult:
        """
        Handles one tap. Non-selectable or empty cells are ignored and tapping a
        selected cell deselects it. A lone Gold is taken at once; a second
        selected cell either completes a matching pair or resets the selection.
        """
        if not (0 <= cell_id < len(self.board)):
            return TapResult(selected=list(self.selected))
        cell = self.board.cell(cell_id)
        if not cell.selectable or not holds_atom(cell.contents):
            return TapResult(selected=list(self.selected))

        if cell_id in self.selected:
            self.selected.remove(cell_id)
            return TapResult(selected=list(self.selected))
        self.selected.append(cell_id)

        if len(self.selected) == 1 and cell.contents == Atom.GOLD:
            move = Move(cell_id)
            self.play(move)
            return TapResult(move=move, selected=list(self.selected))

        if len(self.selected) == 2:
            move = Move(self.selected[0], self.selected[1])
            if is_legal(self.board, move):
                self.play(move)
                return TapResult(move=move, selected=list(self.selected))
            self.selected = []
        return TapResult(selected=list(self.selected))

    def atom_counts(self) -> Dict[Atom, int]:
        counts: Dict[Atom, int] = {}
        for c in self.board.atom_cells():
            counts[c.contents] = counts.get(c.contents, 0) + 1  # type: ignore[index]
        return counts

    def imbalanced_atoms(self) -> List[Atom]:
        """Atoms whose remaining count can no longer pair off cleanly.

        Self-pairing elements are flagged on odd counts, mors and vitae when
        their counts differ. Metals and gold are never flagged.
        """
        counts = self.atom_counts()
        out: List[Atom] = [a for a in _SELF_PAIRING if counts.get(a, 0) % 2 != 0]
        mors = counts.get(Atom.MORS, 0)
        vitae = counts.get(Atom.VITAE, 0)
        if mors != vitae:
            out.extend(a for a in (Atom.MORS, Atom.VITAE) if counts.get(a, 0) > 0)
        return out
