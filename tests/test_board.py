import random
import unittest

from llmtictactoe.board import Board, EMPTY, O, WIN_LINES, X, opponent

from helpers import board_from


class BoardTests(unittest.TestCase):
    def test_new_board_is_empty(self):
        board = Board()
        self.assertEqual(board.snapshot(), (EMPTY,) * 9)
        self.assertEqual(board.available_positions(), list(range(9)))
        self.assertEqual(board.taken_positions(), [])
        self.assertIsNone(board.winner())
        self.assertFalse(board.is_full())

    def test_is_valid_move_bounds_and_occupancy(self):
        board = Board()
        for pos in range(9):
            self.assertTrue(board.is_valid_move(pos))
        for bad in (-1, 9, 12, "4", None, 4.0, True):
            self.assertFalse(board.is_valid_move(bad), bad)
        board.apply(4, X)
        self.assertFalse(board.is_valid_move(4))

    def test_apply_rejects_occupied_cell_without_mutation(self):
        board = Board()
        self.assertTrue(board.apply(0, X))
        before = board.snapshot()
        self.assertFalse(board.apply(0, O))
        self.assertFalse(board.apply(9, O))
        self.assertFalse(board.apply(1, "Z"))
        self.assertEqual(board.snapshot(), before)
        self.assertEqual(board.cell(0), X)

    def test_position_addressing_is_row_major(self):
        board = Board()
        board.apply(5, O)
        self.assertEqual(board._cells[1][2], O)
        board.apply(6, X)
        self.assertEqual(board._cells[2][0], X)

    def test_every_win_line_detected_for_both_marks(self):
        for mark in (X, O):
            for line in WIN_LINES:
                board = Board()
                for pos in line:
                    board.apply(pos, mark)
                self.assertEqual(board.winner(), mark, line)

    def test_two_in_a_line_is_not_a_win(self):
        for line in WIN_LINES:
            board = Board()
            board.apply(line[0], X)
            board.apply(line[1], X)
            board.apply(line[2], O)
            self.assertIsNone(board.winner(), line)

    def test_full_board_without_winner(self):
        board = board_from("XOXXOOOXX")
        self.assertIsNone(board.winner())
        self.assertTrue(board.is_full())
        self.assertEqual(board.available_positions(), [])

    def test_filling_all_cells_in_any_order_makes_board_full(self):
        rng = random.Random(7)
        for _ in range(25):
            order = list(range(9))
            rng.shuffle(order)
            board = Board()
            mark = X
            for pos in order:
                self.assertFalse(board.is_full())
                self.assertTrue(board.apply(pos, mark))
                mark = opponent(mark)
            self.assertTrue(board.is_full())
            self.assertEqual(len(board.taken_positions()), 9)

    def test_copy_is_independent(self):
        board = board_from("X........")
        clone = board.copy()
        clone.apply(4, O)
        self.assertEqual(board.cell(4), EMPTY)
        self.assertNotEqual(board, clone)

    def test_render_shows_marks(self):
        board = board_from("X...O....")
        lines = board.render().splitlines()
        self.assertEqual(lines[0], "  0 | 1 | 2")
        self.assertEqual(lines[2], "0 X |   |  ")
        self.assertEqual(lines[4], "1   | O |  ")

    def test_opponent(self):
        self.assertEqual(opponent(X), O)
        self.assertEqual(opponent(O), X)


if __name__ == "__main__":
    unittest.main()
