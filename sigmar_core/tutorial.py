from __future__ import annotations

from typing import Dict

from .atoms import Atom
from .board import Board, build_grid
from .freedom import update_selectability

TUTORIAL_SIZE = 7

# One pair per rule, gold in the centre (3, 3) = id 24.
TUTORIAL_LAYOUT: Dict[int, Atom] = {
    10: Atom.FIRE,
    12: Atom.FIRE,
    16: Atom.SALT,
    18: Atom.WATER,
    29: Atom.MORS,
    33: Atom.VITAE,
    22: Atom.QUICKSILVER,
    26: Atom.LEAD,
    24: Atom.GOLD,
}


def tutorial_board() -> Board:
    board = build_grid(TUTORIAL_SIZE)
    for cell_id, atom in TUTORIAL_LAYOUT.items():
        board.cell(cell_id).contents = atom
    return update_selectability(board)
