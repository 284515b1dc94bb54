from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Optional

from loguru import logger

from .config import config
from .game import Game


@dataclass(slots=True)
class Simulator:
    """Drives both seats of a ``Game`` with uniformly random legal moves.

    Used for smoke runs and soak testing of the engine and its observers;
    it makes no attempt to play well.
    """

    game: Game
    rng: random.Random = field(default_factory=random.Random)
    max_turns: int = config.MAX_TURNS
    on_step: Optional[Callable[[Game], None]] = None
    turns: int = field(default=0, init=False)
    passes: int = field(default=0, init=False)

    @classmethod
    def for_game(cls, game: Game, seed: Optional[int] = None, **kwargs) -> "Simulator":
        return cls(game=game, rng=random.Random(seed), **kwargs)

    def step(self) -> bool:
        """Roll once and move (or pass). Returns False when the game is over."""
        if self.game.game_over:
            return False
        self.turns += 1
        self.game.roll_dice()
        moves = sorted(self.game.get_valid_moves())
        if moves:
            self.game.make_move(self.rng.choice(moves))
        else:
            self.passes += 1
            self.game.pass_turn()
        if self.on_step is not None:
            self.on_step(self.game)
        return not self.game.game_over

    def run(self) -> bool:
        """Play until someone wins or ``max_turns`` rolls were made."""
        self.turns = 0
        self.passes = 0
        while self.turns < self.max_turns and self.step():
            pass
        if not self.game.game_over:
            logger.warning(f"Stopped after {self.turns} rolls without a winner")
        return self.game.game_over
