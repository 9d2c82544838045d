from __future__ import annotations

import random
from typing import List, Sequence, Tuple

from .grid import check_size, is_rendered

Template = Tuple[bool, ...]  # row-major, True where a rendered cell must receive an atom

MARK = 'X'

# Hand-authored 11x11 layouts; one row per line, 'X' marks a cell to fill.
HARD_LAYOUTS: Tuple[Tuple[str, ...], ...] = (
    (
        '      XXX  ',
        '       XX X',
        '   XX  X  X',
        '  XXXXXX XX',
        ' X  XXXXXX ',
        '   XXXXX   ',
        ' XXXXXX  X ',
        'XX XXXXXX  ',
        'X  X  XX   ',
        'X XX       ',
        '  XXX      ',
    ),
    (
        '     XX  XX',
        '    XXX XXX',
        '    XX  XX ',
        '     X X   ',
        ' XX  XX  XX',
        'XXXXXXXXXXX',
        'XX  XX  XX ',
        '   X X     ',
        ' XX  XX    ',
        'XXX XXX    ',
        'XX  XX     ',
    ),
    (
        '     XXXXXX',
        '    XXXXXXX',
        '   XX    XX',
        '  XX     XX',
        ' XX      XX',
        'XX   X   XX',
        'XX      XX ',
        'XX     XX  ',
        'XX    XX   ',
        'XXXXXXX    ',
        'XXXXXX     ',
    ),
    (
        '     X  X X',
        '     XXX X ',
        '   X X XXX ',
        '   XX X  XX',
        '  X XXXXX  ',
        'XXX XXX XXX',
        '  XXXXX X  ',
        'XX  X XX   ',
        ' XXX X X   ',
        ' X XXX     ',
        'X X  X     ',
    ),
    (
        '     XXXX  ',
        '    XXX   X',
        '   XXX   XX',
        '  XXX    XX',
        ' XX XXXXXXX',
        '    XXX XXX',
        '    XX  XX ',
        'X   X   X  ',
        'XXXX   X   ',
        'XXXXX      ',
        'XXXXX      ',
    ),
    (
        '     X    X',
        '    X XX  X',
        '   X XX XXX',
        '  X  X XXXX',
        ' X    XXXXX',
        'XXX  X  XXX',
        'XXXXX    X ',
        'XXXX X  X  ',
        'XXX XX X   ',
        'X  XX X    ',
        'X    X     ',
    ),
    (
        '     XXXXXX',
        '    XX   XX',
        '   XX    XX',
        '  XX  X  XX',
        ' XX  XX  XX',
        'XX  XXX  XX',
        'X  XXXX  X ',
        'X       X  ',
        'X      X   ',
        'XXXXXXX    ',
        'XXXXXX     ',
    ),
)

# Share of hexagon cells kept by the procedural template, out of ten.
FILL_TENTHS = 8


def template_from_rows(rows: Sequence[str]) -> Template:
    """Parses an 'X'/space layout into a mask; rows may be shorter than the grid."""
    size = len(rows)
    mask: List[bool] = []
    for row in rows:
        padded = row.ljust(size)
        mask.extend(ch == MARK for ch in padded[:size])
    return tuple(mask)


def full_template(size: int) -> Template:
    """Marks every rendered cell of the hexagon."""
    check_size(size)
    return tuple(is_rendered(size, x, y) for y in range(size) for x in range(size))


def hex_template(size: int, rng: random.Random) -> Template:
    """Procedural layout: each hexagon cell within reach of the centre is kept with probability 8/10.

    Hex distance is (|dx| + |dy| + |dx + dy|) / 2 over the axial offset from
    the centre; every rendered cell lies within size // 2 of it.
    """
    check_size(size)
    center = size // 2
    mask: List[bool] = []
    for y in range(size):
        for x in range(size):
            if not is_rendered(size, x, y):
                mask.append(False)
                continue
            dx = x - center
            dy = y - center
            if abs(dx) + abs(dy) + abs(dx + dy) <= center * 2:
                mask.append(rng.randrange(10) < FILL_TENTHS)
            else:
                mask.append(False)
    return tuple(mask)


def hard_template(rng: random.Random) -> Template:
    return template_from_rows(HARD_LAYOUTS[rng.randrange(len(HARD_LAYOUTS))])


def marked_count(template: Template, size: int) -> int:
    """Marked cells that fall inside the hexagon (marks outside it are ignored)."""
    return sum(
        1 for y in range(size) for x in range(size)
        if template[y * size + x] and is_rendered(size, x, y)
    )

