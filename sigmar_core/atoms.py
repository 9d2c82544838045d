from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple


class Atom(str, Enum):
    """The fifteen tile types. Declaration order is the goal-vector index order."""
    WATER = 'water'
    FIRE = 'fire'
    AIR = 'air'
    EARTH = 'earth'
    SALT = 'salt'
    QUINTESSENCE = 'quintessence'
    QUICKSILVER = 'quicksilver'
    LEAD = 'lead'
    TIN = 'tin'
    IRON = 'iron'
    COPPER = 'copper'
    SILVER = 'silver'
    GOLD = 'gold'
    MORS = 'mors'
    VITAE = 'vitae'

    @property
    def index(self) -> int:
        return ATOM_ORDER.index(self)


class MaterialClass(Enum):
    CARDINAL = 'cardinal'
    METAL = 'metal'
    LIFE_DEATH = 'life_death'


ATOM_ORDER: Tuple[Atom, ...] = tuple(Atom)
ATOM_COUNT = len(ATOM_ORDER)

CARDINALS: Tuple[Atom, ...] = (
    Atom.WATER, Atom.FIRE, Atom.AIR, Atom.EARTH, Atom.SALT, Atom.QUINTESSENCE,
)
# Transmutation order; a metal is locked while an earlier one is on the board.
METAL_ORDER: Tuple[Atom, ...] = (
    Atom.LEAD, Atom.TIN, Atom.IRON, Atom.COPPER, Atom.SILVER, Atom.GOLD,
)
LIFE_DEATH: Tuple[Atom, ...] = (Atom.MORS, Atom.VITAE)


def atom_from_index(index: int) -> Optional[Atom]:
    if 0 <= index < ATOM_COUNT:
        return ATOM_ORDER[index]
    return None


def material_class(atom: Atom) -> MaterialClass:
    """Total over the fifteen atoms; quicksilver and gold both count as metal."""
    if atom in CARDINALS:
        return MaterialClass.CARDINAL
    if atom in LIFE_DEATH:
        return MaterialClass.LIFE_DEATH
    return MaterialClass.METAL


def metal_rank(atom: Atom) -> Optional[int]:
    """Position in the transmutation order, or None for non-chain atoms (quicksilver included)."""
    try:
        return METAL_ORDER.index(atom)
    except ValueError:
        return None


def can_match(a: Atom, b: Atom) -> bool:
    """Whether two atoms can be removed together as a pair.

    Gold never pairs; it is taken alone. Salt is a wildcard among cardinals,
    mors and vitae only take each other, and quicksilver takes any metal.
    Two chain metals match when they are neighbours in the transmutation order.
    """
    if a == Atom.GOLD or b == Atom.GOLD:
        return False
    class_a = material_class(a)
    class_b = material_class(b)
    if class_a != class_b:
        return False
    if class_a == MaterialClass.CARDINAL:
        return a == b or a == Atom.SALT or b == Atom.SALT
    if class_a == MaterialClass.LIFE_DEATH:
        return a != b
    if a == Atom.QUICKSILVER or b == Atom.QUICKSILVER:
        return True
    rank_a = metal_rank(a)
    rank_b = metal_rank(b)
    if rank_a is None or rank_b is None:
        return False
    return abs(rank_a - rank_b) == 1
