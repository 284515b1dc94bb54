from __future__ import annotations

import tempfile
import unittest

from senet.game import Game
from senet.history import GameArchive, MoveRecorder
from senet.simulator import Simulator


class SimulatorTests(unittest.TestCase):
    def test_run_finishes_a_game(self) -> None:
        game = Game(seed=10)
        sim = Simulator.for_game(game, seed=10)
        self.assertTrue(sim.run())
        self.assertTrue(game.game_over)
        self.assertIsNotNone(game.winner)
        self.assertGreater(sim.turns, 0)
        self.assertFalse(sim.step())

    def test_max_turns_stops_early(self) -> None:
        game = Game(seed=10)
        sim = Simulator.for_game(game, seed=10, max_turns=3)
        self.assertFalse(sim.run())
        self.assertEqual(sim.turns, 3)
        self.assertFalse(game.game_over)

    def test_on_step_sees_every_roll(self) -> None:
        seen: list[int] = []
        game = Game(seed=3)
        sim = Simulator.for_game(
            game, seed=3, max_turns=10, on_step=lambda g: seen.append(g.dice_value)
        )
        sim.run()
        self.assertEqual(len(seen), 10)
        # Every roll is consumed by a move or a pass
        self.assertEqual(set(seen), {0})

    def test_recorded_game_matches_engine_count(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            archive = GameArchive(tmp)
            game = Game(seed=8)
            recorder = MoveRecorder(archive)
            game_id = recorder.attach(game)
            Simulator.for_game(game, seed=8).run()
            moves = archive.game_moves(game_id)
            self.assertEqual(len(moves), game.move_count)
            self.assertEqual(
                [m["move_number"] for m in moves], list(range(1, game.move_count + 1))
            )
            record = archive.get_game(game_id)
            self.assertEqual(record["winner"], game.winner.label)
            self.assertEqual(record["moves_count"], game.move_count)


if __name__ == "__main__":
    unittest.main()
