import random
import unittest

from game import (
    MAX_OBSTACLES,
    Board,
    BoardConfigurationError,
    CellRole,
    Highlight,
    fisher_yates,
)


class TestShuffle(unittest.TestCase):
    def test_given_seeded_rng_when_shuffling_then_permutation_and_deterministic(self):
        items = [(x, y) for x in range(4) for y in range(4)]
        a = fisher_yates(items, random.Random(7))
        b = fisher_yates(items, random.Random(7))
        self.assertEqual(a, b)
        self.assertEqual(sorted(a), sorted(items))
        self.assertEqual(items, [(x, y) for x in range(4) for y in range(4)])  # input untouched

    def test_given_empty_or_single_when_shuffling_then_returned_as_is(self):
        self.assertEqual(fisher_yates([], random.Random(1)), [])
        self.assertEqual(fisher_yates([(0, 0)], random.Random(1)), [(0, 0)])


class TestBoardGeneration(unittest.TestCase):
    def test_given_board_too_small_when_constructed_then_fails_fast(self):
        with self.assertRaises(BoardConfigurationError):
            Board(width=2, height=3)
        with self.assertRaises(BoardConfigurationError):
            Board(width=0, height=10)
        with self.assertRaises(ValueError):  # configuration errors are ValueErrors
            Board(width=1, height=1)

    def test_given_default_board_when_queried_then_ten_by_ten_with_centre_start(self):
        board = Board()
        self.assertEqual((board.width, board.height), (10, 10))
        self.assertEqual(board.start, (5, 5))
        self.assertEqual(Board(width=5, height=5).start, (2, 2))

    def test_given_many_seeds_when_generating_then_targets_and_obstacles_respect_exclusions(self):
        for seed in range(50):
            board = Board(width=5, height=5, rng=random.Random(seed))
            targets = board.generate_targets()
            self.assertEqual(len(targets), 6)
            self.assertEqual(sorted(targets.values()), [1, 2, 3, 4, 5, 6])
            self.assertNotIn(board.start, targets)
            die_cell = (seed % 5, (seed // 5) % 5)
            obstacles = board.generate_obstacles(die_cell)
            self.assertLessEqual(len(obstacles), MAX_OBSTACLES)
            self.assertFalse(obstacles & set(targets))
            self.assertNotIn(board.start, obstacles)
            self.assertNotIn(die_cell, obstacles)
            for x, y in obstacles:
                self.assertTrue(board.in_bounds(x, y))

    def test_given_generated_targets_when_obstacles_regenerated_then_targets_unchanged(self):
        board = Board(width=8, height=8, rng=random.Random(3))
        targets = board.generate_targets()
        first = board.generate_obstacles((0, 0))
        for _ in range(10):
            board.generate_obstacles((0, 0))
        self.assertEqual(board.targets, targets)
        self.assertEqual(len(first), MAX_OBSTACLES)
        self.assertEqual(len(board.obstacles), MAX_OBSTACLES)

    def test_given_few_free_cells_when_generating_obstacles_then_uses_what_is_left(self):
        # 3x3: 9 cells minus start, 6 targets and the excluded cell leaves 1
        board = Board(width=3, height=3, rng=random.Random(0))
        board.generate_targets()
        free = [c for c in board.coords() if c != board.start and c not in board.targets]
        self.assertEqual(len(free), 2)
        obstacles = board.generate_obstacles(free[0])
        self.assertEqual(obstacles, {free[1]})
        # 1x7: every non-start cell is a target, so no obstacles fit
        thin = Board(width=1, height=7, rng=random.Random(0))
        thin.generate_targets()
        self.assertEqual(thin.generate_obstacles(None), set())


class TestBoardQueries(unittest.TestCase):
    def setUp(self):
        self.board = Board(width=5, height=5, rng=random.Random(0))
        self.board.targets = {(0, 0): 1, (4, 0): 2, (0, 4): 3, (4, 4): 4, (1, 3): 5, (3, 1): 6}
        self.board.obstacles = {(2, 3), (1, 1)}
        self.board.update_target_highlight(1)

    def test_given_cells_when_checking_obstacles_then_out_of_range_is_false(self):
        self.assertTrue(self.board.is_obstacle(2, 3))
        self.assertFalse(self.board.is_obstacle(2, 2))
        self.assertFalse(self.board.is_obstacle(-1, 0))
        self.assertFalse(self.board.is_obstacle(5, 5))

    def test_given_targets_when_checking_then_role_and_value_must_match(self):
        self.assertTrue(self.board.check_target(0, 0, 1))
        self.assertFalse(self.board.check_target(0, 0, 2))
        self.assertFalse(self.board.check_target(2, 2, 1))
        self.assertFalse(self.board.check_target(-1, 0, 1))
        self.assertEqual(self.board.role_at(0, 0), CellRole.TARGET)
        self.assertEqual(self.board.role_at(1, 1), CellRole.OBSTACLE)
        self.assertEqual(self.board.role_at(2, 2), CellRole.NORMAL)
        self.assertEqual(self.board.target_cell(4), (4, 4))
        self.assertIsNone(self.board.target_cell(7))
        self.assertEqual(self.board.target_value_at(3, 1), 6)
        self.assertEqual(self.board.target_count(), 6)

    def test_given_next_value_when_updating_highlight_then_dimmed_active_neutral(self):
        self.board.update_target_highlight(3)
        self.assertEqual(self.board.highlights[1], Highlight.DIMMED)
        self.assertEqual(self.board.highlights[2], Highlight.DIMMED)
        self.assertEqual(self.board.highlights[3], Highlight.ACTIVE)
        self.assertEqual(self.board.highlights[6], Highlight.NEUTRAL)

    def test_given_board_when_pretty_then_symbols_rendered_with_up_on_top(self):
        txt = self.board.pretty((2, 2))
        rows = txt.split('\n')
        self.assertEqual(len(rows), 5)
        self.assertEqual(rows[0], '3 . . . 4')  # y == 4
        self.assertEqual(rows[-1], '1 . . . 2')  # y == 0
        self.assertIn('@', rows[2])
        self.assertIn('#', txt)

    def test_given_cells_when_mapping_to_world_then_centred_on_start(self):
        self.assertEqual(self.board.grid_to_world(2, 2), (0, 0))
        self.assertEqual(self.board.grid_to_world(0, 4), (-2, 2))

    def test_given_even_board_when_mapping_to_world_then_cell_centres_straddle_origin(self):
        board = Board(width=10, height=10, cell_size=1.0)
        self.assertEqual(board.grid_to_world(0, 0), (-4.5, -4.5))
        self.assertEqual(board.grid_to_world(9, 9), (4.5, 4.5))
        self.assertEqual(Board(width=10, height=10, cell_size=2.0).grid_to_world(0, 9), (-9.0, 9.0))


if __name__ == '__main__':
    unittest.main(verbosity=2)
