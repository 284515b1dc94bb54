from .board import Board
from .config import config
from .game import Game
from .history import GameArchive, MoveRecorder
from .simulator import Simulator
from .types import (
    GameState,
    MoveEvents,
    MoveRecord,
    MoveResult,
    Occupant,
    Player,
    Rejection,
)
from .view import CellView, cell_views, encode_board, render_text, status_text

__all__ = [
    "config",
    "Board",
    "Game",
    "GameState",
    "GameArchive",
    "MoveRecorder",
    "Simulator",
    "MoveEvents",
    "MoveRecord",
    "MoveResult",
    "Occupant",
    "Player",
    "Rejection",
    "CellView",
    "cell_views",
    "encode_board",
    "render_text",
    "status_text",
]
