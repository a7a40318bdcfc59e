"""Immutable read-only views handed to the rendering collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.constants import GameType, SessionState
from ..core.models import Coord, WordId


@dataclass(frozen=True)
class CellView:
    letter: str
    filled: bool
    number: Optional[int] = None
    selected: bool = False
    found: bool = False
    entry: str = ""
    correct: bool = False
    in_current_word: bool = False


@dataclass(frozen=True)
class WordView:
    id: WordId
    word: str
    clue: str
    solved: bool
    number: Optional[int] = None
    direction: Optional[str] = None
    anchor: Optional[Coord] = None


@dataclass(frozen=True)
class BoardSnapshot:
    game_type: GameType
    state: SessionState
    cells: Tuple[Tuple[CellView, ...], ...]
    words: Tuple[WordView, ...]
    score: int
    seconds_left: int
    solved_count: int
    total_words: int
    cursor: Optional[Coord] = None
    direction: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.cells)

    def cell(self, row: int, col: int) -> CellView:
        return self.cells[row][col]
