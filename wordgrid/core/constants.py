"""Shared constants and enumerations for the puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class GameType(str, Enum):
    """Puzzle games backed by the engine."""

    CROSSWORD = "crossword"
    WORDSEARCH = "wordsearch"


class Direction(str, Enum):
    """Crossword word directions."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    def toggled(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


class SessionState(str, Enum):
    """Puzzle session lifecycle."""

    SETUP = "SETUP"
    PLAYING = "PLAYING"
    FINISHED = "FINISHED"


class FinishReason(str, Enum):
    SOLVED = "solved"
    TIMEOUT = "timeout"


# right, down, diagonal down-right, diagonal down-left
SEARCH_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))

ARROW_STEPS = {
    "ArrowUp": (-1, 0),
    "ArrowDown": (1, 0),
    "ArrowLeft": (0, -1),
    "ArrowRight": (0, 1),
}

ERASE_KEYS = frozenset({"Backspace", "Delete"})
TOGGLE_KEY = "Tab"

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
MIN_WORD_LENGTH = 2
DEFAULT_SEARCH_TRIALS = 100
TICK_SECONDS = 1.0


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
