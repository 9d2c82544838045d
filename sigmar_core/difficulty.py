from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .atoms import ATOM_COUNT
from .templates import Template, full_template, hard_template, hex_template

Goals = Tuple[int, ...]  # one target count per atom, in Atom declaration order


class ProfileError(ValueError):
    """A difficulty profile that cannot drive generation."""


class Difficulty(Enum):
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'

    @property
    def grid_size(self) -> int:
        return _GRID_SIZES[self]

    @property
    def goals(self) -> Goals:
        return _GOALS[self]

    def template(self, rng: random.Random) -> Template:
        """Hard draws from the hand-authored layouts; smaller grids get a procedural one."""
        if self is Difficulty.HARD:
            return hard_template(rng)
        return hex_template(self.grid_size, rng)

    def profile(self, rng: random.Random) -> 'DifficultyProfile':
        return DifficultyProfile(self.grid_size, self.goals, self.template(rng))


_GRID_SIZES = {
    Difficulty.EASY: 7,
    Difficulty.MEDIUM: 9,
    Difficulty.HARD: 11,
}

#            Wa Fi Ai Ea Sa Qu Hg Pb Sn Fe Cu Ag Au Mo Vi
_GOALS = {
    Difficulty.EASY: (2, 2, 2, 2, 2, 0, 5, 1, 1, 1, 1, 1, 1, 2, 2),
    Difficulty.MEDIUM: (4, 4, 4, 4, 2, 0, 5, 1, 1, 1, 1, 1, 1, 2, 2),
    Difficulty.HARD: (8, 8, 8, 8, 4, 0, 5, 1, 1, 1, 1, 1, 1, 4, 4),
}


def parse_difficulty(name: str) -> Difficulty:
    try:
        return Difficulty(name.strip().lower())
    except ValueError:
        choices = ', '.join(d.value for d in Difficulty)
        raise ValueError(f'Unknown difficulty {name!r}; expected one of: {choices}') from None


@dataclass(frozen=True)
class DifficultyProfile:
    """Everything the generator needs: grid size, per-atom goals and the placeholder mask."""
    size: int
    goals: Goals
    template: Template

    @classmethod
    def full(cls, size: int, goals: Goals) -> 'DifficultyProfile':
        return cls(size, tuple(goals), full_template(size))

    def validate(self) -> None:
        if self.size <= 0 or self.size % 2 == 0:
            raise ProfileError(f'grid size must be a positive odd integer, got {self.size}')
        if len(self.goals) != ATOM_COUNT:
            raise ProfileError(f'goal vector must have {ATOM_COUNT} entries, got {len(self.goals)}')
        if any(g < 0 for g in self.goals):
            raise ProfileError(f'goal counts must be non-negative: {list(self.goals)}')
        cells = self.size * self.size
        if len(self.template) < cells:
            raise ProfileError(f'template covers {len(self.template)} cells, grid has {cells}')
