from __future__ import annotations

import unittest

import numpy as np

from senet.board import Board
from senet.config import config
from senet.types import Occupant, Player


class BoardTests(unittest.TestCase):
    def setUp(self) -> None:
        self.board = Board()

    def test_starting_layout(self) -> None:
        cells = self.board.snapshot()
        self.assertEqual(len(cells), 30)
        self.assertEqual(cells[0:5], (Occupant.LIGHT,) * 5)
        self.assertEqual(cells[5:10], (Occupant.DARK,) * 5)
        self.assertTrue(all(c is Occupant.EMPTY for c in cells[10:]))
        self.assertEqual(self.board.positions(Player.LIGHT), [0, 1, 2, 3, 4])
        self.assertEqual(self.board.positions(Player.DARK), [5, 6, 7, 8, 9])

    def test_piece_counts_and_borne_off(self) -> None:
        self.assertEqual(self.board.piece_count(Player.LIGHT), 5)
        self.assertEqual(self.board.piece_count(Player.DARK), 5)
        self.assertEqual(self.board.borne_off[Player.LIGHT], 0)
        self.assertEqual(self.board.borne_off[Player.DARK], 0)

    def test_special_cells_are_attributes(self) -> None:
        self.assertEqual(Board.special_at(14), "safe_house")
        self.assertEqual(Board.special_at(25), "house_of_happiness")
        self.assertEqual(Board.special_at(26), "house_of_water")
        self.assertEqual(Board.special_at(27), "house_of_three_truths")
        self.assertEqual(Board.special_at(28), "house_of_re_atum")
        self.assertIsNone(Board.special_at(13))
        self.assertTrue(Board.is_safe(14))
        self.assertFalse(Board.is_safe(15))
        # An occupied special cell keeps its attribute
        board = Board.from_positions(light=[14], dark=[26])
        self.assertEqual(board.occupant(14), Occupant.LIGHT)
        self.assertEqual(Board.special_at(14), "safe_house")

    def test_from_positions_counts_missing_pieces_as_borne_off(self) -> None:
        board = Board.from_positions(light=[20, 21], dark=[3, 4, 5, 6, 7])
        self.assertEqual(board.piece_count(Player.LIGHT), 2)
        self.assertEqual(board.borne_off[Player.LIGHT], 3)
        self.assertEqual(board.borne_off[Player.DARK], 0)

    def test_invalid_boards_raise(self) -> None:
        with self.assertRaises(ValueError):
            Board.from_positions(light=[1], dark=[1])
        with self.assertRaises(ValueError):
            Board.from_positions(light=range(6))
        with self.assertRaises(ValueError):
            Board.from_occupants([Occupant.EMPTY] * 29)
        with self.assertRaises(ValueError):
            Board.from_occupants([7] + [0] * 29)

    def test_first_empty(self) -> None:
        self.assertEqual(self.board.first_empty(config.LIGHT_RESTART_ZONE), None)
        self.assertEqual(self.board.first_empty(config.DARK_RESTART_ZONE), 10)
        self.board.clear(3)
        self.assertEqual(self.board.first_empty(config.LIGHT_RESTART_ZONE), 3)

    def test_copy_is_independent(self) -> None:
        clone = self.board.copy()
        clone.clear(0)
        clone.bear_off(Player.LIGHT)
        self.assertEqual(self.board.occupant(0), Occupant.LIGHT)
        self.assertEqual(self.board.borne_off[Player.LIGHT], 0)

    def test_build_tensor_channels(self) -> None:
        tensor = self.board.build_tensor()
        self.assertEqual(tensor.shape, (3, config.BOARD_SIZE))
        self.assertEqual(tensor.dtype, np.float32)
        self.assertEqual(tensor[0].sum(), 5.0)
        self.assertEqual(tensor[1].sum(), 5.0)
        self.assertEqual(tensor[0, 0], 1.0)
        self.assertEqual(tensor[1, 5], 1.0)
        self.assertEqual(list(np.flatnonzero(tensor[2])), [14, 25, 26, 27, 28])

    def test_build_tensor_rejects_wrong_buffer(self) -> None:
        with self.assertRaises(ValueError):
            self.board.build_tensor(out=np.zeros((2, 30), dtype=np.float32))


if __name__ == "__main__":
    unittest.main()
