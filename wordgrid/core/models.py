"""Data models supporting the puzzle builders and sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .constants import Direction

WordId = Union[int, str]
Coord = Tuple[int, int]


@dataclass(frozen=True)
class WordDefinition:
    """A word and its clue as supplied by the content collaborator."""

    id: WordId
    word: str
    clue: str = ""


@dataclass
class Cell:
    """Represents a grid cell with placement metadata."""

    letter: str = ""
    filled: bool = False
    number: Optional[int] = None
    across_word_id: Optional[WordId] = None
    down_word_id: Optional[WordId] = None

    def is_black(self) -> bool:
        return not self.filled

    def word_id(self, direction: Direction) -> Optional[WordId]:
        if direction == Direction.ACROSS:
            return self.across_word_id
        return self.down_word_id


@dataclass
class PlacedWord:
    """A crossword entry located on the grid."""

    id: WordId
    number: int
    word: str
    clue: str
    direction: Direction
    anchor_row: int
    anchor_col: int
    solved: bool = False
    _cells: Optional[List[Coord]] = field(default=None, init=False, repr=False, compare=False)

    @property
    def length(self) -> int:
        return len(self.word)

    @property
    def cells(self) -> List[Coord]:
        if self._cells is None:
            dr, dc = self.direction.step
            self._cells = [
                (self.anchor_row + dr * i, self.anchor_col + dc * i) for i in range(self.length)
            ]
        return self._cells

    def mark_solved(self) -> bool:
        """Flip ``solved`` on; returns False when it was already set."""

        if self.solved:
            return False
        self.solved = True
        return True


@dataclass(frozen=True)
class SearchPlacement:
    """A word-search entry and the straight path it was written along."""

    id: WordId
    word: str
    row: int
    col: int
    step: Coord

    @property
    def cells(self) -> List[Coord]:
        dr, dc = self.step
        return [(self.row + dr * i, self.col + dc * i) for i in range(len(self.word))]
