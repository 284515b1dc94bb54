import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


@dataclass(slots=True)
class Config:
    # --- Constants ---
    BOARD_SIZE: int = 30  # cells 0..29; >= 30 means borne off
    PIECES_PER_PLAYER: int = 5
    LIGHT_START: list[int] = field(default_factory=lambda: [0, 1, 2, 3, 4])
    DARK_START: list[int] = field(default_factory=lambda: [5, 6, 7, 8, 9])

    # Throwing sticks: uniform 1..4
    DICE_MIN: int = 1
    DICE_MAX: int = 4

    # Special cells (0-indexed)
    SAFE_HOUSE: int = 14
    HOUSE_OF_HAPPINESS: int = 25
    HOUSE_OF_WATER: int = 26
    HOUSE_OF_THREE_TRUTHS: int = 27
    HOUSE_OF_RE_ATUM: int = 28

    # Where a piece washed out of the House of Water restarts (first empty cell)
    LIGHT_RESTART_ZONE: range = range(0, 10)
    DARK_RESTART_ZONE: range = range(5, 15)

    # --- Environment ---
    LOG_LEVEL: str = os.getenv("SENET_LOG_LEVEL", "INFO")
    HISTORY_DIR: str = os.getenv("SENET_HISTORY_DIR", "senet_history")
    SEED: int | None = _optional_int("SENET_SEED")
    MAX_TURNS: int = int(os.getenv("SENET_MAX_TURNS", 2000))

    # Derived (populated in __post_init__ due to slots)
    SPECIAL_CELLS: dict[int, str] = field(default_factory=dict)

    def __post_init__(self):
        self.SPECIAL_CELLS = {
            self.SAFE_HOUSE: "safe_house",
            self.HOUSE_OF_HAPPINESS: "house_of_happiness",
            self.HOUSE_OF_WATER: "house_of_water",
            self.HOUSE_OF_THREE_TRUTHS: "house_of_three_truths",
            self.HOUSE_OF_RE_ATUM: "house_of_re_atum",
        }
        if self.DICE_MIN < 1 or self.DICE_MAX < self.DICE_MIN:
            raise ValueError("Dice range must be positive and non-empty")


config = Config()
