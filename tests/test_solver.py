import random
import unittest
from datetime import date

from game import (
    Atom,
    Difficulty,
    DifficultyProfile,
    IllegalMoveError,
    Move,
    atom_counts,
    build_grid,
    counts_feasible,
    daily_seed,
    full_template,
    generate_board,
    generate_seeded,
    is_solvable,
    legal_moves,
    replay,
    solve,
    tutorial_board,
    update_selectability,
)


def make_board(size, placed):
    board = build_grid(size)
    for cell_id, atom in placed.items():
        board.cell(cell_id).contents = atom
    return board


class TestLegalMoves(unittest.TestCase):
    def test_given_free_pair_and_gold_when_listing_moves_then_gold_single_and_pairs(self):
        board = make_board(7, {3: Atom.FIRE, 45: Atom.FIRE, 24: Atom.GOLD, 42: Atom.WATER})
        update_selectability(board)
        moves = legal_moves(board)
        self.assertEqual(moves[0], Move(24))
        self.assertIn(Move(3, 45), moves)
        self.assertNotIn(Move(3, 42), moves)
        self.assertEqual(len(moves), 2)


def counts_of(**kinds):
    counts = [0] * 15
    for name, n in kinds.items():
        counts[Atom(name).index] = n
    return counts


class TestCountFeasibility(unittest.TestCase):
    def test_given_unequal_mors_and_vitae_when_checking_then_infeasible(self):
        self.assertFalse(counts_feasible(counts_of(mors=2, vitae=1)))
        self.assertTrue(counts_feasible(counts_of(mors=2, vitae=2)))

    def test_given_odd_cardinals_when_checking_then_salt_must_cover_them(self):
        self.assertTrue(counts_feasible(counts_of(fire=1, salt=1)))
        self.assertFalse(counts_feasible(counts_of(fire=1, water=1, salt=1)))
        self.assertTrue(counts_feasible(counts_of(fire=1, water=3, salt=2)))
        self.assertTrue(counts_feasible(counts_of(salt=2)))
        self.assertFalse(counts_feasible(counts_of(salt=1)))
        self.assertFalse(counts_feasible(counts_of(fire=2, salt=3)))

    def test_given_chain_metals_when_checking_then_each_needs_quicksilver(self):
        self.assertFalse(counts_feasible(counts_of(quicksilver=1, lead=1, tin=1)))
        self.assertTrue(counts_feasible(counts_of(quicksilver=2, lead=1, tin=1, gold=1)))
        self.assertTrue(counts_feasible(counts_of(quicksilver=3, lead=1)))
        self.assertFalse(counts_feasible(counts_of(quicksilver=2, lead=1)))
        self.assertTrue(counts_feasible(counts_of(gold=1)))

    def test_given_tutorial_when_counting_then_feasible(self):
        counts = atom_counts(tutorial_board())
        self.assertEqual(sum(counts), 9)
        self.assertTrue(counts_feasible(counts))


class TestSolvabilityVerifier(unittest.TestCase):
    def test_given_one_free_matching_pair_when_solving_then_true(self):
        board = make_board(7, {3: Atom.FIRE, 45: Atom.FIRE})
        res = solve(board)
        self.assertTrue(res.solvable)
        self.assertEqual(res.moves, [Move(3, 45)])

    def test_given_lone_cardinal_when_solving_then_false(self):
        board = make_board(7, {24: Atom.WATER})
        self.assertFalse(is_solvable(board))
        self.assertEqual(solve(board).moves, [])

    def test_given_lone_free_gold_when_solving_then_true(self):
        self.assertTrue(is_solvable(make_board(7, {24: Atom.GOLD})))

    def test_given_gold_behind_unpairable_silver_when_solving_then_false(self):
        self.assertFalse(is_solvable(make_board(7, {24: Atom.GOLD, 3: Atom.SILVER})))
        self.assertTrue(is_solvable(make_board(7, {24: Atom.GOLD, 3: Atom.SILVER, 45: Atom.QUICKSILVER})))

    def test_given_empty_board_when_solving_then_true(self):
        self.assertTrue(is_solvable(build_grid(7)))

    def test_given_tutorial_board_when_solving_then_solution_replays_to_empty(self):
        board = tutorial_board()
        res = solve(board)
        self.assertTrue(res.solvable)
        self.assertEqual(len(res.moves), 5)
        self.assertTrue(replay(board, res.moves).is_empty())

    def test_given_board_when_solving_twice_then_same_answer_and_board_untouched(self):
        board = generate_board(build_grid(7), DifficultyProfile.full(7, Difficulty.EASY.goals), random.Random(11))
        before = board.contents()
        first = is_solvable(board)
        second = is_solvable(board)
        self.assertEqual(first, second)
        self.assertEqual(board.contents(), before)

    def test_given_small_boards_when_searching_without_memo_then_same_answer(self):
        boards = [
            tutorial_board(),
            make_board(7, {3: Atom.SALT, 45: Atom.AIR, 42: Atom.AIR}),
            make_board(7, {3: Atom.MORS, 45: Atom.VITAE, 42: Atom.VITAE}),
            make_board(7, {3: Atom.LEAD, 45: Atom.TIN, 24: Atom.GOLD}),
        ]
        for board in boards:
            self.assertEqual(solve(board, memoize=True).solvable, solve(board, memoize=False).solvable)

    def test_given_bad_sequence_when_replaying_then_illegal_move(self):
        board = tutorial_board()
        with self.assertRaises(IllegalMoveError):
            replay(board, [Move(24)])  # gold is locked while lead remains

    def test_given_tutorial_when_solving_then_no_backtracking_needed(self):
        res = solve(tutorial_board())
        self.assertEqual(res.nodes, 6)
        self.assertTrue(res.complete)

    def test_given_counts_that_cannot_pair_off_when_solving_then_cut_at_root(self):
        # one quicksilver for two chain metals
        board = make_board(7, {3: Atom.LEAD, 45: Atom.TIN, 42: Atom.QUICKSILVER})
        res = solve(board)
        self.assertFalse(res.solvable)
        self.assertEqual(res.nodes, 1)

    def test_given_tiny_budget_when_solving_then_incomplete_and_not_solvable(self):
        res = solve(tutorial_board(), max_nodes=2)
        self.assertFalse(res.complete)
        self.assertFalse(res.solvable)
        self.assertEqual(res.moves, [])
        self.assertFalse(is_solvable(tutorial_board(), max_nodes=2))

    def test_given_seeded_hard_board_when_solving_then_answer_within_node_budget(self):
        board = generate_seeded(daily_seed(date(2024, 1, 7)), Difficulty.HARD)
        self.assertEqual(board.size, 11)
        res = solve(board, max_nodes=200_000)
        self.assertTrue(res.complete)
        self.assertTrue(res.solvable)
        self.assertTrue(replay(board, res.moves).is_empty())

    def test_given_easy_profile_when_retrying_seeds_then_solvable_board_found(self):
        profile = DifficultyProfile(7, (2, 2, 2, 2, 2, 0, 5, 1, 1, 1, 1, 1, 1, 2, 2), full_template(7))
        found = None
        for attempt in range(50):
            board = generate_board(build_grid(7), profile, random.Random(1000 + attempt * 1000))
            if is_solvable(board):
                found = board
                break
        self.assertIsNotNone(found)
        assert found is not None
        self.assertTrue(is_solvable(found))
        res = solve(found)
        self.assertTrue(replay(found, res.moves).is_empty())


if __name__ == '__main__':
    unittest.main(verbosity=2)
