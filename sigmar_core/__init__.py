"""
Sigmar's Garden core Python package.

Board topology, matching rules, generation and the solvability search, kept
free of any UI so the Flask app, the CLI and the tests share one engine.
Modules:
- grid.py: hex clipping and neighbour lookup
- board.py: Cell, Board, build_grid
- atoms.py: Atom, MaterialClass, can_match
- freedom.py: selectability (three open neighbour slots, metal chain gate)
- difficulty.py, templates.py: difficulty profiles and placeholder layouts
- generator.py: constrained random pair placement
- moves.py, solver.py: legal moves and the backtracking verifier
- daily.py: seeded retry-until-solvable pipeline and the daily cache
- session.py, tutorial.py: play-session helpers and the teaching board
"""
