from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional


class Player(IntEnum):
    LIGHT = 1
    DARK = 2

    @property
    def opponent(self) -> "Player":
        return Player.DARK if self is Player.LIGHT else Player.LIGHT

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Occupant(IntEnum):
    EMPTY = 0
    LIGHT = 1
    DARK = 2

    @property
    def player(self) -> Optional[Player]:
        return None if self is Occupant.EMPTY else Player(int(self))


class Rejection(str, Enum):
    """Why a call was refused. Rejections never mutate state."""

    INVALID_MOVE = "invalid_move"
    NO_ROLL_PENDING = "no_roll_pending"
    GAME_ALREADY_OVER = "game_already_over"
    REROLL_NOT_ALLOWED = "reroll_not_allowed"


@dataclass(slots=True)
class MoveEvents:
    captured: Optional[int] = None  # cell the captured piece was sent back to
    borne_off: bool = False
    washed_back: Optional[int] = None  # restart cell after the House of Water
    house: Optional[str] = None  # special cell landed on, if any


@dataclass(slots=True)
class MoveResult:
    old_position: int
    new_position: int
    dice_roll: int
    events: MoveEvents = field(default_factory=MoveEvents)
    rejection: Optional[Rejection] = None

    @property
    def success(self) -> bool:
        return self.rejection is None


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """What observers see of every successful move."""

    move_number: int
    player: Player
    square_from: int
    square_to: int  # >= board size when the piece was borne off
    dice_value: int
    events: MoveEvents
    game_over: bool = False
    winner: Optional[Player] = None


@dataclass(frozen=True, slots=True)
class GameState:
    """Immutable snapshot of one game session."""

    board: tuple[Occupant, ...]
    current_player: Player = Player.LIGHT
    dice_value: int = 0
    game_over: bool = False
    winner: Optional[Player] = None
    borne_off: tuple[int, int] = (0, 0)  # (light, dark)
    move_count: int = 0
