import unittest

from game import (
    NO_NEIGHBOR,
    PLACEHOLDER,
    Atom,
    Cell,
    build_grid,
    free_placeholders,
    has_open_run,
    holds_atom,
    neighbor_ring,
    update_selectability,
)


def make_board(size, placed):
    board = build_grid(size)
    for cell_id, contents in placed.items():
        board.cell(cell_id).contents = contents
    return board


# Centre of the 7-grid is id 24 at (3, 3); its neighbours in direction order.
CENTER = 24
N, NE, E, S, SW, W = 17, 18, 25, 31, 30, 23


class TestFreedomRule(unittest.TestCase):
    def test_given_no_neighbours_when_checking_then_free(self):
        board = make_board(7, {CENTER: Atom.WATER})
        self.assertTrue(has_open_run(board, board.cell(CENTER), holds_atom))
        update_selectability(board)
        self.assertTrue(board.cell(CENTER).selectable)

    def test_given_five_occupied_and_one_absent_when_checking_then_never_free(self):
        board = make_board(7, {i: Atom.FIRE for i in (N, NE, E, S, SW)})
        probe = Cell(id=99, x=0, y=0, z=0, rendered=True, neighbors=(N, NE, E, S, SW, NO_NEIGHBOR))
        self.assertEqual(neighbor_ring(board, probe, holds_atom), 'eeeee ')
        self.assertFalse(has_open_run(board, probe, holds_atom))

    def test_given_alternating_neighbours_when_checking_then_not_free(self):
        board = make_board(7, {CENTER: Atom.AIR, N: Atom.AIR, E: Atom.AIR, SW: Atom.AIR})
        self.assertEqual(neighbor_ring(board, board.cell(CENTER), holds_atom), 'e e e ')
        self.assertFalse(has_open_run(board, board.cell(CENTER), holds_atom))

    def test_given_open_run_across_ring_end_when_checking_then_free(self):
        # SW, W and N are open: the run wraps from the last slot to the first.
        board = make_board(7, {CENTER: Atom.AIR, NE: Atom.AIR, E: Atom.AIR, S: Atom.AIR})
        self.assertEqual(neighbor_ring(board, board.cell(CENTER), holds_atom), ' eee  ')
        self.assertTrue(has_open_run(board, board.cell(CENTER), holds_atom))

    def test_given_only_two_open_slots_when_checking_then_not_free(self):
        board = make_board(7, {CENTER: Atom.AIR, N: Atom.AIR, NE: Atom.AIR, E: Atom.AIR, S: Atom.AIR})
        self.assertFalse(has_open_run(board, board.cell(CENTER), holds_atom))

    def test_given_full_placeholder_hexagon_when_listing_free_then_only_corners(self):
        board = build_grid(7)
        for c in board.rendered_cells():
            c.contents = PLACEHOLDER
        self.assertEqual(free_placeholders(board), [3, 6, 21, 27, 42, 45])

    def test_given_placeholders_when_checking_atoms_then_placeholders_do_not_block_play_rule(self):
        board = make_board(7, {CENTER: Atom.AIR, N: PLACEHOLDER, E: PLACEHOLDER, SW: PLACEHOLDER})
        update_selectability(board)
        self.assertTrue(board.cell(CENTER).selectable)

    def test_given_metal_chain_when_updating_then_later_metals_locked(self):
        board = make_board(7, {3: Atom.LEAD, 45: Atom.TIN, 42: Atom.IRON, 6: Atom.QUICKSILVER})
        update_selectability(board)
        self.assertTrue(board.cell(3).selectable)
        self.assertFalse(board.cell(45).selectable)
        self.assertFalse(board.cell(42).selectable)
        self.assertTrue(board.cell(6).selectable)

        board.cell(3).contents = ''
        update_selectability(board)
        self.assertTrue(board.cell(45).selectable)
        self.assertFalse(board.cell(42).selectable)

    def test_given_gap_in_chain_when_updating_then_any_earlier_metal_locks(self):
        board = make_board(7, {3: Atom.LEAD, 42: Atom.IRON})
        update_selectability(board)
        self.assertFalse(board.cell(42).selectable)

    def test_given_silver_on_board_when_updating_then_gold_locked(self):
        board = make_board(7, {CENTER: Atom.GOLD, 3: Atom.SILVER})
        update_selectability(board)
        self.assertFalse(board.cell(CENTER).selectable)
        board.cell(3).contents = ''
        update_selectability(board)
        self.assertTrue(board.cell(CENTER).selectable)


if __name__ == '__main__':
    unittest.main(verbosity=2)
