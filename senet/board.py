from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import numpy as np

from .config import config
from .types import Occupant, Player


def _starting_cells() -> np.ndarray:
    cells = np.full(config.BOARD_SIZE, int(Occupant.EMPTY), dtype=np.int8)
    cells[config.LIGHT_START] = int(Occupant.LIGHT)
    cells[config.DARK_START] = int(Occupant.DARK)
    return cells


@dataclass(slots=True)
class Board:
    """Owns piece placement on the 30-cell track (no rule logic)."""

    cells: np.ndarray = field(default_factory=_starting_cells)
    # Pieces permanently removed from the track, per player
    borne_off: dict[Player, int] = field(
        default_factory=lambda: {Player.LIGHT: 0, Player.DARK: 0}
    )
    _tensor_buffer: np.ndarray | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.cells = np.asarray(self.cells, dtype=np.int8)
        if self.cells.shape != (config.BOARD_SIZE,):
            raise ValueError(f"Board must have exactly {config.BOARD_SIZE} cells")
        if not np.isin(self.cells, [int(o) for o in Occupant]).all():
            raise ValueError("Board cells must hold Occupant values")
        for player in Player:
            total = self.piece_count(player) + self.borne_off[player]
            if self.borne_off[player] < 0 or total != config.PIECES_PER_PLAYER:
                raise ValueError(
                    f"{player.label} has {total} pieces, expected {config.PIECES_PER_PLAYER}"
                )

    @classmethod
    def from_occupants(cls, occupants: Sequence[Occupant | int]) -> "Board":
        """Build a board from 30 occupants; missing pieces count as borne off."""
        cells = np.array([int(o) for o in occupants], dtype=np.int8)
        borne_off = {
            player: config.PIECES_PER_PLAYER - int(np.count_nonzero(cells == int(player)))
            for player in Player
        }
        return cls(cells=cells, borne_off=borne_off)

    @classmethod
    def from_positions(
        cls, light: Iterable[int] = (), dark: Iterable[int] = ()
    ) -> "Board":
        light, dark = set(light), set(dark)
        if light & dark:
            raise ValueError("A cell cannot hold both players")
        occupants = [Occupant.EMPTY] * config.BOARD_SIZE
        for index in light:
            occupants[index] = Occupant.LIGHT
        for index in dark:
            occupants[index] = Occupant.DARK
        return cls.from_occupants(occupants)

    # --- Queries ---
    def occupant(self, index: int) -> Occupant:
        return Occupant(int(self.cells[index]))

    def owner(self, index: int) -> Optional[Player]:
        return self.occupant(index).player

    def is_empty(self, index: int) -> bool:
        return bool(self.cells[index] == int(Occupant.EMPTY))

    def piece_count(self, player: Player) -> int:
        return int(np.count_nonzero(self.cells == int(player)))

    def positions(self, player: Player) -> list[int]:
        return [int(i) for i in np.flatnonzero(self.cells == int(player))]

    def first_empty(self, zone: Iterable[int]) -> Optional[int]:
        for index in zone:
            if self.is_empty(index):
                return index
        return None

    @staticmethod
    def special_at(index: int) -> Optional[str]:
        return config.SPECIAL_CELLS.get(index)

    @staticmethod
    def is_safe(index: int) -> bool:
        return index == config.SAFE_HOUSE

    def snapshot(self) -> tuple[Occupant, ...]:
        return tuple(Occupant(int(v)) for v in self.cells)

    # --- Mutation (engine only) ---
    def place(self, index: int, player: Player) -> None:
        self.cells[index] = int(player)

    def clear(self, index: int) -> None:
        self.cells[index] = int(Occupant.EMPTY)

    def bear_off(self, player: Player) -> None:
        self.borne_off[player] += 1

    def copy(self) -> "Board":
        return Board(cells=self.cells.copy(), borne_off=dict(self.borne_off))

    # --- Observation ---
    def build_tensor(self, out: np.ndarray | None = None) -> np.ndarray:
        """Build a (3, BOARD_SIZE) tensor of the board.

        Channels:
        0: Light pieces
        1: Dark pieces
        2: Special cells (fixed)
        """
        if out is not None:
            board = out
            if board.shape != (3, config.BOARD_SIZE):
                raise ValueError("Expected board tensor of shape (3, BOARD_SIZE)")
        else:
            if self._tensor_buffer is None:
                self._tensor_buffer = np.zeros((3, config.BOARD_SIZE), dtype=np.float32)
            board = self._tensor_buffer

        board.fill(0.0)
        board[0] = self.cells == int(Occupant.LIGHT)
        board[1] = self.cells == int(Occupant.DARK)
        board[2, list(config.SPECIAL_CELLS)] = 1.0
        return board
