from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple, Union

from .atoms import Atom
from .grid import check_size, is_rendered, neighbor_ids

EMPTY = ''
PLACEHOLDER = 'ph'  # generation-time marker: must eventually hold an atom

Contents = Union[Atom, str]  # an Atom, EMPTY or PLACEHOLDER

_SYMBOLS: Dict[Atom, str] = {
    Atom.WATER: 'Wa',
    Atom.FIRE: 'Fi',
    Atom.AIR: 'Ai',
    Atom.EARTH: 'Ea',
    Atom.SALT: 'Sa',
    Atom.QUINTESSENCE: 'Qu',
    Atom.QUICKSILVER: 'Hg',
    Atom.LEAD: 'Pb',
    Atom.TIN: 'Sn',
    Atom.IRON: 'Fe',
    Atom.COPPER: 'Cu',
    Atom.SILVER: 'Ag',
    Atom.GOLD: 'Au',
    Atom.MORS: 'Mo',
    Atom.VITAE: 'Vi',
}


def holds_atom(contents: Contents) -> bool:
    return isinstance(contents, Atom)


def is_placeholder(contents: Contents) -> bool:
    return contents == PLACEHOLDER


def serialize_contents(contents: Contents) -> str:
    return contents.value if isinstance(contents, Atom) else str(contents)


def parse_contents(value: str) -> Contents:
    """Parses a serialized cell value ('' / 'ph' / atom name)."""
    if value == EMPTY or value == PLACEHOLDER:
        return value
    return Atom(value)


@dataclass
class Cell:
    """One grid position. Identity, position and neighbours never change; contents and selectable do."""
    id: int
    x: int
    y: int
    z: int
    rendered: bool
    neighbors: Tuple[int, ...]  # six ids in DIRECTIONS order, NO_NEIGHBOR when absent
    contents: Contents = EMPTY
    selectable: bool = True


@dataclass
class Board:
    """All cells of a size x size grid in row-major order (id == y * size + x)."""
    size: int
    cells: List[Cell]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def cell(self, cell_id: int) -> Cell:
        return self.cells[cell_id]

    @property
    def center_id(self) -> int:
        return (self.size * self.size) // 2

    def rendered_cells(self) -> List[Cell]:
        return [c for c in self.cells if c.rendered]

    def atom_cells(self) -> List[Cell]:
        return [c for c in self.cells if holds_atom(c.contents)]

    def occupied_mask(self) -> int:
        """Bit i set when cell i holds an atom."""
        mask = 0
        for c in self.cells:
            if holds_atom(c.contents):
                mask |= 1 << c.id
        return mask

    def is_empty(self) -> bool:
        return not any(holds_atom(c.contents) for c in self.cells)

    def contents(self) -> Tuple[Contents, ...]:
        return tuple(c.contents for c in self.cells)

    def count(self, atom: Atom) -> int:
        return sum(1 for c in self.cells if c.contents == atom)

    def selectable_ids(self) -> List[int]:
        return [c.id for c in self.cells if c.selectable and holds_atom(c.contents)]

    def copy(self) -> 'Board':
        """Independent copy; mutating it never touches this board."""
        return Board(self.size, [replace(c) for c in self.cells])

    def clear(self) -> None:
        for c in self.cells:
            c.contents = EMPTY
            c.selectable = True

    def load(self, contents: Sequence[Contents]) -> None:
        if len(contents) != len(self.cells):
            raise ValueError(f'Expected {len(self.cells)} cell values, got {len(contents)}')
        for c, value in zip(self.cells, contents):
            c.contents = value

    @classmethod
    def from_contents(cls, size: int, contents: Iterable[str]) -> 'Board':
        """Builds a grid and loads serialized cell values into it."""
        board = build_grid(size)
        parsed: List[Contents] = []
        for value in contents:
            try:
                parsed.append(parse_contents(value))
            except ValueError:
                raise ValueError(f'Unknown cell value: {value!r}') from None
        board.load(parsed)
        return board

    def pretty(self, selected: Optional[Set[int]] = None) -> str:
        """Text rendering of the hexagon; rows shift by half a cell, '..' is empty, '##' a placeholder."""
        marks = selected or set()
        lines: List[str] = []
        for y in range(self.size):
            row: List[str] = [' ' * (2 * y)]
            for x in range(self.size):
                c = self.cells[y * self.size + x]
                if not c.rendered:
                    row.append('    ')
                    continue
                if holds_atom(c.contents):
                    sym = _SYMBOLS[c.contents]  # type: ignore[index]
                elif c.contents == PLACEHOLDER:
                    sym = '##'
                else:
                    sym = '..'
                row.append(sym + ('* ' if c.id in marks else '  '))
            lines.append(''.join(row).rstrip())
        return '\n'.join(lines)


def build_grid(size: int) -> Board:
    """All cells for an odd grid size with neighbours resolved. Pure and idempotent."""
    check_size(size)
    cells: List[Cell] = []
    for y in range(size):
        for x in range(size):
            cells.append(Cell(
                id=y * size + x,
                x=x,
                y=y,
                z=x + y,
                rendered=is_rendered(size, x, y),
                neighbors=neighbor_ids(size, x, y),
            ))
    return Board(size=size, cells=cells)
