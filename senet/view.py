"""
Boundary views of a Senet game for rendering layers.

Everything here is derived from the engine's enumerated board on demand;
the engine never stores hieroglyphs or class names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .config import config
from .game import Game
from .types import Occupant, Player

# Numeric board codes for renderers: 3..7 mark empty special cells
SPECIAL_CODES: Dict[int, int] = {
    config.SAFE_HOUSE: 3,
    config.HOUSE_OF_HAPPINESS: 4,
    config.HOUSE_OF_WATER: 5,
    config.HOUSE_OF_THREE_TRUTHS: 6,
    config.HOUSE_OF_RE_ATUM: 7,
}

HIEROGLYPHS: Dict[int, str] = {
    config.SAFE_HOUSE: "\U00013283",
    config.HOUSE_OF_HAPPINESS: "\U00013124",
    config.HOUSE_OF_WATER: "\U00013217",
    config.HOUSE_OF_THREE_TRUTHS: "\U00013079",
    config.HOUSE_OF_RE_ATUM: "\U000131F3",
}

PIECE_SYMBOLS: Dict[Occupant, str] = {
    Occupant.LIGHT: "○",
    Occupant.DARK: "●",
}

# Display order: the track snakes back along the middle row
LAYOUT: List[List[int]] = [
    list(range(0, 10)),
    list(range(19, 9, -1)),
    list(range(20, 30)),
]


@dataclass(slots=True)
class CellView:
    index: int
    number: int  # 1-based label shown on the board
    occupant: Occupant
    special: Optional[str] = None
    hieroglyph: str = ""
    classes: List[str] = field(default_factory=list)
    selectable: bool = False

    @property
    def class_name(self) -> str:
        return " ".join(self.classes)


def encode_board(board: Sequence[Occupant]) -> List[int]:
    """0 empty, 1 light, 2 dark, 3..7 empty special cells."""
    codes: List[int] = []
    for index, occupant in enumerate(board):
        if occupant is not Occupant.EMPTY:
            codes.append(int(occupant))
        else:
            codes.append(SPECIAL_CODES.get(index, 0))
    return codes


def cell_views(game: Game) -> List[CellView]:
    valid = game.get_valid_moves()
    views: List[CellView] = []
    for index, occupant in enumerate(game.board):
        special = config.SPECIAL_CELLS.get(index)
        classes = ["square"]
        if index in config.LIGHT_START:
            classes.append("start-light")
        elif index in config.DARK_START:
            classes.append("start-dark")
        if special:
            classes.append(special.replace("_", "-"))
        if occupant is Occupant.LIGHT:
            classes.append("light-piece")
        elif occupant is Occupant.DARK:
            classes.append("dark-piece")
        elif not special:
            classes.append("empty")
        if index in valid:
            classes.append("valid-move")
        views.append(
            CellView(
                index=index,
                number=index + 1,
                occupant=occupant,
                special=special,
                hieroglyph=HIEROGLYPHS.get(index, ""),
                classes=classes,
                selectable=index in valid,
            )
        )
    return views


def status_text(game: Game) -> str:
    if game.game_over:
        return f"{game.winner.label} wins!" if game.winner else "Game over"
    player = game.current_player.label
    if game.dice_value == 0:
        return f"{player} to roll"
    if not game.get_valid_moves():
        return f"{player} rolled {game.dice_value}: no valid moves, turn passes"
    return f"{player} rolled {game.dice_value}: choose a piece"


def render_text(game: Game) -> str:
    """Plain-text board: one row per line of the track, then a status line."""
    views = cell_views(game)
    rows = []
    for row in LAYOUT:
        cells = []
        for index in row:
            view = views[index]
            symbol = PIECE_SYMBOLS.get(view.occupant) or view.hieroglyph or "."
            marker = "*" if view.selectable else " "
            cells.append(f"{view.number:>2}{symbol}{marker}")
        rows.append(" ".join(cells))
    off = ", ".join(f"{p.label} off: {game.borne_off(p)}" for p in Player)
    rows.append(f"{status_text(game)} | {off}")
    return "\n".join(rows)
