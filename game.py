from __future__ import annotations

# Facade module that re-exports the Sigmar's Garden core.
# Used by the Flask app, the tools and the tests as their single import surface.
# Single-responsibility modules live under sigmar_core/*.

from sigmar_core.atoms import (
    ATOM_ORDER,
    CARDINALS,
    LIFE_DEATH,
    METAL_ORDER,
    Atom,
    MaterialClass,
    atom_from_index,
    can_match,
    material_class,
    metal_rank,
)
from sigmar_core.board import (
    EMPTY,
    PLACEHOLDER,
    Board,
    Cell,
    build_grid,
    holds_atom,
    is_placeholder,
)
from sigmar_core.grid import (
    DIRECTIONS,
    NO_NEIGHBOR,
    cell_index_at,
    hex_bounds,
    hex_cell_count,
    opposite,
)
from sigmar_core.freedom import (
    free_placeholders,
    has_open_run,
    neighbor_ring,
    update_selectability,
)
from sigmar_core.difficulty import (
    Difficulty,
    DifficultyProfile,
    ProfileError,
    parse_difficulty,
)
from sigmar_core.templates import (
    HARD_LAYOUTS,
    full_template,
    hex_template,
    marked_count,
    template_from_rows,
)
from sigmar_core.generator import (
    MAX_STALLED_ITERATIONS,
    generate_board,
    open_categories,
    pick_pair,
)
from sigmar_core.moves import (
    IllegalMoveError,
    Move,
    apply_move,
    describe_move,
    is_legal,
    legal_moves,
    undo_move,
)
from sigmar_core.solver import SolveResult, atom_counts, counts_feasible, is_solvable, replay, solve
from sigmar_core.daily import (
    ATTEMPT_SEED_STRIDE,
    DailyPuzzleGenerator,
    GeneratedPuzzle,
    PuzzleStatus,
    daily_difficulty,
    daily_seed,
    default_generator,
    format_remaining_time,
    generate_daily,
    generate_seeded,
    generate_until_solvable,
    time_until_next_puzzle,
)
from sigmar_core.session import PlaySession, TapResult
from sigmar_core.tutorial import tutorial_board


def main() -> None:
    # CLI driver delegated to sigmar_core.cli
    from sigmar_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
