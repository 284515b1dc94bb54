"""
Move history for Senet games.

The engine never persists anything itself. ``MoveRecorder`` subscribes to a
``Game`` and forwards every successful move to a ``GameArchive``, a small
JSON store holding three tables: games, moves and board snapshots.
"""

from __future__ import annotations

import json
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from loguru import logger

from .config import config
from .game import Game
from .types import MoveRecord, Player

ARCHIVE_FILENAME = "senet_history.json"
TABLES = ("games", "moves", "game_states")


class GameArchive:
    def __init__(self, save_dir: Optional[str] = None):
        self.save_dir = save_dir or config.HISTORY_DIR
        os.makedirs(self.save_dir, exist_ok=True)
        self.path = os.path.join(self.save_dir, ARCHIVE_FILENAME)
        self._data = self._load()

    def _empty(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {table: [] for table in TABLES}
        data["next_ids"] = {table: 1 for table in TABLES}
        return data

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return self._empty()
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load saved history, starting a new one: {e}")
            return self._empty()
        if not isinstance(data, dict) or not all(t in data for t in TABLES):
            logger.warning(f"History file {self.path} has no tables, starting a new one")
            return self._empty()
        data.setdefault(
            "next_ids",
            {t: max((row["id"] for row in data[t]), default=0) + 1 for t in TABLES},
        )
        return data

    def _save(self) -> None:
        with open(self.path, "w") as f:
            json.dump(self._data, f, indent=2)

    def _insert(self, table: str, row: Dict[str, Any]) -> int:
        row_id = self._data["next_ids"][table]
        self._data["next_ids"][table] = row_id + 1
        row = {"id": row_id, **row, "created_at": datetime.now().isoformat()}
        self._data[table].append(row)
        self._save()
        return row_id

    # --- Writes ---
    def create_game(self, player1: str = "Light", player2: str = "Dark") -> int:
        game_id = self._insert(
            "games",
            {"player1": player1, "player2": player2, "winner": None, "moves_count": 0},
        )
        logger.info(f"Created game record {game_id}")
        return game_id

    def record_move(self, game_id: int, record: MoveRecord) -> int:
        return self._insert(
            "moves",
            {
                "game_id": game_id,
                "player": record.player.label,
                "square_from": record.square_from,
                "square_to": record.square_to,
                "dice_value": record.dice_value,
                "move_number": record.move_number,
            },
        )

    def save_state(self, game_id: int, game: Game) -> int:
        """Store a board snapshot (numeric codes, one per cell)."""
        state = game.snapshot()
        return self._insert(
            "game_states",
            {
                "game_id": game_id,
                "board_state": json.dumps([int(cell) for cell in state.board]),
                "current_player": state.current_player.label,
                "dice_value": state.dice_value,
            },
        )

    def finish_game(
        self, game_id: int, winner: Optional[Player], moves_count: int
    ) -> None:
        game = self.get_game(game_id)
        if game is None:
            raise KeyError(f"Unknown game id {game_id}")
        game["winner"] = winner.label if winner else None
        game["moves_count"] = moves_count
        self._save()
        logger.info(
            f"Game {game_id} finished after {moves_count} moves, winner: {game['winner']}"
        )

    def clear(self) -> None:
        self._data = self._empty()
        self._save()
        logger.info(f"Cleared history in {self.path}")

    # --- Reads ---
    def get_game(self, game_id: int) -> Optional[Dict[str, Any]]:
        return next((g for g in self._data["games"] if g["id"] == game_id), None)

    def all_games(self) -> List[Dict[str, Any]]:
        """All game records, newest first."""
        return sorted(
            self._data["games"], key=lambda g: (g["created_at"], g["id"]), reverse=True
        )

    def game_moves(self, game_id: int) -> List[Dict[str, Any]]:
        moves = [m for m in self._data["moves"] if m["game_id"] == game_id]
        return sorted(moves, key=lambda m: m["move_number"])

    def game_states(self, game_id: int) -> List[Dict[str, Any]]:
        return [s for s in self._data["game_states"] if s["game_id"] == game_id]

    def stats(self, games: Optional[List[Dict[str, Any]]] = None) -> Dict[str, int]:
        games = games if games is not None else self.all_games()
        return {
            "total_games": len(games),
            "light_wins": sum(1 for g in games if g["winner"] == Player.LIGHT.label),
            "dark_wins": sum(1 for g in games if g["winner"] == Player.DARK.label),
            "total_moves": len(self._data["moves"]),
        }


class MoveRecorder:
    """Persists each successful move of a ``Game`` into a ``GameArchive``."""

    def __init__(self, archive: GameArchive, snapshot_every_move: bool = False):
        self.archive = archive
        self.snapshot_every_move = snapshot_every_move
        self.game: Optional[Game] = None
        self.game_id: Optional[int] = None
        self.records: List[MoveRecord] = []

    def attach(self, game: Game) -> int:
        """Start recording ``game``; opens a new game record."""
        self.detach()
        self.game = game
        self.records = []
        self.game_id = self.archive.create_game()
        game.subscribe(self)
        return self.game_id

    def detach(self) -> None:
        if self.game is not None:
            self.game.unsubscribe(self)
        self.game = None

    def new_game(self) -> int:
        """Open a fresh record after the attached game was reset."""
        if self.game is None:
            raise RuntimeError("MoveRecorder is not attached to a game")
        return self.attach(self.game)

    def __call__(self, record: MoveRecord) -> None:
        if self.game_id is None:
            return
        self.records.append(record)
        self.archive.record_move(self.game_id, record)
        if self.snapshot_every_move and self.game is not None:
            self.archive.save_state(self.game_id, self.game)
        if record.game_over:
            self.archive.finish_game(self.game_id, record.winner, record.move_number)
