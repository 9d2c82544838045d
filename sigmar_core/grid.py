from __future__ import annotations

from typing import Tuple

NO_NEIGHBOR = -1

# Hex directions over (x, y): north, north-east, east, south, south-west, west.
# Direction d and (d + 3) % 6 are opposite.
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, -1),
    (1, -1),
    (1, 0),
    (0, 1),
    (-1, 1),
    (-1, 0),
)


def opposite(direction: int) -> int:
    return (direction + 3) % 6


def check_size(size: int) -> None:
    if size <= 0 or size % 2 == 0:
        raise ValueError(f'Grid size must be a positive odd integer, got {size}')


def hex_bounds(size: int) -> Tuple[float, float]:
    """(min_z, max_z) carving a regular hexagon out of the size x size square.

    A cell is inside when min_z < x + y < max_z.
    """
    return size * 0.5 - 1.5, size * 1.5 - 0.5


def is_rendered(size: int, x: int, y: int) -> bool:
    min_z, max_z = hex_bounds(size)
    return min_z < x + y < max_z


def cell_index_at(size: int, x: int, y: int) -> int:
    """Linear index of (x, y), or NO_NEIGHBOR when it falls outside the square or the hexagon."""
    if 0 <= x < size and 0 <= y < size and is_rendered(size, x, y):
        return y * size + x
    return NO_NEIGHBOR


def neighbor_ids(size: int, x: int, y: int) -> Tuple[int, ...]:
    return tuple(cell_index_at(size, x + dx, y + dy) for dx, dy in DIRECTIONS)


def hex_cell_count(size: int) -> int:
    """Number of rendered cells for an odd size: the centred hexagonal number 3k(k+1)+1."""
    check_size(size)
    k = (size - 1) // 2
    return 3 * k * (k + 1) + 1
