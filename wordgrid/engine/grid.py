"""Grid representation and helper utilities."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence

from ..core.constants import Bounds, Direction
from ..core.exceptions import PlacementError
from ..core.models import Cell, Coord, WordId
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class LetterGrid:
    """Square board of :class:`Cell` objects shared by both puzzle kinds.

    Cells refer to words by id only; the word records themselves live in the
    builder results, so the grid can be copied or serialised without chasing
    references.
    """

    def __init__(self, size: int) -> None:
        if size < 2:
            raise ValueError(f"Grid size must be at least 2, got {size}")
        self.size = size
        self.bounds = Bounds(rows=size, cols=size)
        self.cells: List[List[Cell]] = [[Cell() for _ in range(size)] for _ in range(size)]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def contains(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col)

    def is_open(self, row: int, col: int) -> bool:
        """True when the position is inside the grid and holds a letter."""

        return self.contains(row, col) and self.cells[row][col].filled

    def letter_at(self, row: int, col: int) -> str:
        return self.cells[row][col].letter

    def coords(self) -> Iterator[Coord]:
        """Row-major walk over every position."""

        for r in range(self.size):
            for c in range(self.size):
                yield r, c

    def read(self, path: Iterable[Coord]) -> str:
        return "".join(self.cells[r][c].letter for r, c in path)

    def filled_count(self) -> int:
        return sum(1 for r, c in self.coords() if self.cells[r][c].filled)

    def first_open(self) -> Optional[Coord]:
        for r, c in self.coords():
            if self.cells[r][c].filled:
                return r, c
        return None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def write(
        self,
        path: Sequence[Coord],
        text: str,
        word_id: Optional[WordId] = None,
        direction: Optional[Direction] = None,
    ) -> None:
        """Write ``text`` along ``path``; conflicting letters raise."""

        if len(path) != len(text):
            raise PlacementError("Word length mismatch")
        for index, (row, col) in enumerate(path):
            if not self.contains(row, col):
                raise PlacementError(f"Word extends outside grid at {(row, col)}")
            existing = self.cells[row][col].letter
            if existing and existing != text[index]:
                raise PlacementError(
                    f"Letter conflict at {(row, col)}: {existing} vs {text[index]}"
                )

        for index, (row, col) in enumerate(path):
            cell = self.cells[row][col]
            cell.letter = text[index]
            cell.filled = True
            if direction == Direction.ACROSS:
                cell.across_word_id = word_id
            elif direction == Direction.DOWN:
                cell.down_word_id = word_id

    def fill(self, row: int, col: int, letter: str) -> None:
        cell = self.cells[row][col]
        cell.letter = letter
        cell.filled = True

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def rows_as_text(self, blank: str = "#") -> List[str]:
        return [
            "".join(cell.letter if cell.filled else blank for cell in row) for row in self.cells
        ]

    def to_jsonable(self) -> List[List[dict]]:
        serialized: List[List[dict]] = []
        for row in self.cells:
            serialized.append(
                [
                    {
                        "letter": cell.letter,
                        "filled": cell.filled,
                        "number": cell.number,
                        "across": cell.across_word_id,
                        "down": cell.down_word_id,
                    }
                    for cell in row
                ]
            )
        return serialized
