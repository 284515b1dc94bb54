from __future__ import annotations

import random
from typing import Callable, List, Optional

import numpy as np
from loguru import logger

from .board import Board
from .config import config
from .types import (
    GameState,
    MoveEvents,
    MoveRecord,
    MoveResult,
    Occupant,
    Player,
    Rejection,
)

MoveListener = Callable[[MoveRecord], None]


class Game:
    """Senet engine: owns the board and the turn/dice state of one session.

    Callers drive it only through ``roll_dice``, ``get_valid_moves``,
    ``make_move``/``apply_move``, ``pass_turn`` and ``reset``, and observe it
    through read-only accessors. Refused calls never mutate state; the reason
    is kept in ``last_rejection``.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed if seed is not None else config.SEED)
        self._listeners: List[MoveListener] = []
        self._init_state()

    def _init_state(self) -> None:
        self._board = Board()
        self._current_player = Player.LIGHT
        self._dice_value = 0
        self._game_over = False
        self._winner: Optional[Player] = None
        self._move_count = 0
        self.last_rejection: Optional[Rejection] = None

    @classmethod
    def from_state(cls, state: GameState, seed: Optional[int] = None) -> "Game":
        """Rebuild an engine from a snapshot (or a hand-built test position)."""
        board = Board.from_occupants(state.board)
        borne_off = (board.borne_off[Player.LIGHT], board.borne_off[Player.DARK])
        if tuple(state.borne_off) != borne_off and state.borne_off != (0, 0):
            raise ValueError(
                f"Borne-off counts {state.borne_off} do not match the board {borne_off}"
            )
        if state.dice_value < 0:
            raise ValueError("dice_value must be non-negative")
        game = cls(seed=seed)
        game._board = board
        game._current_player = Player(state.current_player)
        game._dice_value = int(state.dice_value)
        game._game_over = bool(state.game_over)
        game._winner = state.winner
        game._move_count = int(state.move_count)
        return game

    def snapshot(self) -> GameState:
        return GameState(
            board=self._board.snapshot(),
            current_player=self._current_player,
            dice_value=self._dice_value,
            game_over=self._game_over,
            winner=self._winner,
            borne_off=(
                self._board.borne_off[Player.LIGHT],
                self._board.borne_off[Player.DARK],
            ),
            move_count=self._move_count,
        )

    # --- Read accessors ---
    @property
    def board(self) -> tuple[Occupant, ...]:
        return self._board.snapshot()

    @property
    def current_player(self) -> Player:
        return self._current_player

    @property
    def dice_value(self) -> int:
        return self._dice_value

    @property
    def game_over(self) -> bool:
        return self._game_over

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def move_count(self) -> int:
        return self._move_count

    def piece_count(self, player: Player) -> int:
        return self._board.piece_count(player)

    def borne_off(self, player: Player) -> int:
        return self._board.borne_off[player]

    def build_board_tensor(self, out: np.ndarray | None = None) -> np.ndarray:
        return self._board.build_tensor(out)

    # --- Observers ---
    def subscribe(self, listener: MoveListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: MoveListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # --- Dice ---
    def roll_dice(self) -> int:
        if self._game_over:
            return self._reject(Rejection.GAME_ALREADY_OVER, self._dice_value)
        if self._dice_value != 0:
            return self._reject(Rejection.REROLL_NOT_ALLOWED, self._dice_value)
        self.last_rejection = None
        self._dice_value = self.rng.randint(config.DICE_MIN, config.DICE_MAX)
        logger.debug(f"{self._current_player.label} rolled {self._dice_value}")
        return self._dice_value

    def force_dice(self, value: int) -> None:
        """Set the pending dice value directly (test hook)."""
        if value < 0:
            raise ValueError("dice value must be non-negative")
        self._dice_value = int(value)

    # --- Rules: destinations and legality ---
    @staticmethod
    def destination(origin: int, dice: int) -> int:
        """Target index; anything >= BOARD_SIZE means the piece is borne off."""
        return origin + dice

    def can_move(self, origin: int) -> bool:
        if self._game_over or self._dice_value == 0:
            return False
        if not isinstance(origin, (int, np.integer)) or isinstance(origin, bool):
            return False
        if not 0 <= origin < config.BOARD_SIZE:
            return False
        if self._board.owner(origin) is not self._current_player:
            return False

        dest = self.destination(origin, self._dice_value)
        if dest >= config.BOARD_SIZE:
            return True

        occupant = self._board.owner(dest)
        if occupant is self._current_player:
            return False
        # Protected cell blocks landing as well as capture
        if occupant is not None and self._board.is_safe(dest):
            return False
        # House of Water must be empty to enter
        if occupant is not None and dest == config.HOUSE_OF_WATER:
            return False
        return True

    def get_valid_moves(self) -> set[int]:
        if self._game_over or self._dice_value == 0:
            return set()
        return {
            origin
            for origin in self._board.positions(self._current_player)
            if self.can_move(origin)
        }

    # --- Applying a move ---
    def make_move(self, origin: int) -> bool:
        return self.apply_move(origin).success

    def apply_move(self, origin: int) -> MoveResult:
        dice = self._dice_value
        if self._game_over:
            return self._reject_move(Rejection.GAME_ALREADY_OVER, origin)
        if dice == 0:
            return self._reject_move(Rejection.NO_ROLL_PENDING, origin)
        if not self.can_move(origin):
            return self._reject_move(Rejection.INVALID_MOVE, origin)

        self.last_rejection = None
        origin = int(origin)
        player = self._current_player
        dest = self.destination(origin, dice)
        events = MoveEvents()
        new_position = dest

        self._board.clear(origin)
        if dest >= config.BOARD_SIZE:
            self._board.bear_off(player)
            events.borne_off = True
        else:
            opponent = self._board.owner(dest)
            if opponent is not None:
                # Exchange: the captured piece takes the vacated cell
                self._board.place(origin, opponent)
                events.captured = origin
            self._board.place(dest, player)
            events.house = self._board.special_at(dest)
            if dest == config.HOUSE_OF_WATER:
                new_position = self._wash_back(player, dest)
                events.washed_back = new_position

        self._move_count += 1
        self._dice_value = 0
        self._check_win_condition()
        if not self._game_over:
            self._switch_player()

        logger.debug(
            f"Move #{self._move_count}: {player.label} {origin} -> {new_position} "
            f"(dice {dice}, captured={events.captured}, borne_off={events.borne_off})"
        )
        self._notify(
            MoveRecord(
                move_number=self._move_count,
                player=player,
                square_from=origin,
                square_to=new_position,
                dice_value=dice,
                events=events,
                game_over=self._game_over,
                winner=self._winner,
            )
        )
        return MoveResult(
            old_position=origin,
            new_position=new_position,
            dice_roll=dice,
            events=events,
        )

    def _wash_back(self, player: Player, dest: int) -> int:
        zone = (
            config.LIGHT_RESTART_ZONE
            if player is Player.LIGHT
            else config.DARK_RESTART_ZONE
        )
        restart = self._board.first_empty(zone)
        if restart is None:
            raise RuntimeError(f"No free restart cell for {player.label}")
        self._board.clear(dest)
        self._board.place(restart, player)
        return restart

    # --- Turn sequencing ---
    def pass_turn(self) -> bool:
        """Give up the pending roll; meant for rolls with no valid move."""
        if self._game_over:
            return self._reject(Rejection.GAME_ALREADY_OVER, False)
        if self._dice_value == 0:
            return self._reject(Rejection.NO_ROLL_PENDING, False)
        self.last_rejection = None
        logger.debug(f"{self._current_player.label} passes on {self._dice_value}")
        self._dice_value = 0
        self._switch_player()
        return True

    def reset(self) -> None:
        self._init_state()
        logger.info("Senet game reset")

    def _switch_player(self) -> None:
        self._current_player = self._current_player.opponent

    def _check_win_condition(self) -> None:
        for player in (self._current_player, self._current_player.opponent):
            if self._board.piece_count(player) == 0:
                self._game_over = True
                self._winner = player
                logger.info(f"{player.label} bore off every piece and wins")
                return

    def _notify(self, record: MoveRecord) -> None:
        for listener in list(self._listeners):
            listener(record)

    def _reject(self, reason: Rejection, value):
        self.last_rejection = reason
        logger.debug(f"Rejected ({reason.value}) for {self._current_player.label}")
        return value

    def _reject_move(self, reason: Rejection, origin: int) -> MoveResult:
        return self._reject(
            reason, MoveResult(origin, origin, self._dice_value, rejection=reason)
        )
