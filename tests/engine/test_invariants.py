from __future__ import annotations

import random
import unittest

from senet.config import config
from senet.game import Game
from senet.types import Occupant, Player


class RandomPlayoutInvariantTests(unittest.TestCase):
    """Play seeded random games and check the board after every call."""

    def assert_consistent(self, game: Game) -> None:
        board = game.board
        self.assertEqual(len(board), config.BOARD_SIZE)
        self.assertTrue(all(isinstance(cell, Occupant) for cell in board))
        for player in Player:
            on_board = sum(1 for cell in board if cell.player is player)
            self.assertEqual(on_board, game.piece_count(player))
            self.assertEqual(
                on_board + game.borne_off(player), config.PIECES_PER_PLAYER
            )
        someone_done = any(game.piece_count(p) == 0 for p in Player)
        self.assertEqual(game.game_over, someone_done)
        if game.game_over:
            self.assertEqual(game.piece_count(game.winner), 0)

    def test_random_games_conserve_pieces_and_finish(self) -> None:
        chooser = random.Random(2024)
        for seed in range(15):
            game = Game(seed=seed)
            rolls = 0
            while not game.game_over and rolls < 5000:
                rolls += 1
                game.roll_dice()
                moves = sorted(game.get_valid_moves())
                if not moves:
                    self.assertTrue(game.pass_turn())
                else:
                    origin = chooser.choice(moves)
                    before = game.piece_count(game.current_player)
                    dice = game.dice_value
                    mover = game.current_player
                    self.assertTrue(game.make_move(origin))
                    if origin + dice >= config.BOARD_SIZE:
                        self.assertEqual(game.piece_count(mover), before - 1)
                    else:
                        self.assertEqual(game.piece_count(mover), before)
                self.assert_consistent(game)
            self.assertTrue(game.game_over, f"game with seed {seed} did not finish")

    def test_safe_house_never_offered_when_opponent_holds_it(self) -> None:
        chooser = random.Random(77)
        game = Game(seed=77)
        for _ in range(3000):
            if game.game_over:
                game.reset()
            game.roll_dice()
            moves = game.get_valid_moves()
            opponent = game.current_player.opponent
            for origin in moves:
                dest = origin + game.dice_value
                if dest == config.SAFE_HOUSE:
                    self.assertIsNot(game.board[dest].player, opponent)
            if moves:
                game.make_move(chooser.choice(sorted(moves)))
            else:
                game.pass_turn()


if __name__ == "__main__":
    unittest.main()
