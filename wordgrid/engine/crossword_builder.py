"""Crossword layout construction.

Single-pass constructive placement:
  1. Longest word across the middle of the grid.
  2. Every other word (longest first) crossing an existing letter.
  3. Failing that, the first free spot anywhere in the grid.
Words that still do not fit are dropped; there is no backtracking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..core.constants import MIN_WORD_LENGTH, Direction
from ..core.models import Coord, PlacedWord, WordDefinition
from ..data.normalization import clean_word
from ..utils.logger import get_logger
from .grid import LetterGrid


LOGGER = get_logger(__name__)


@dataclass
class CrosswordConfig:
    """Configuration values driving the crossword layout."""

    size: int

    def __post_init__(self) -> None:
        if self.size < 2:
            raise ValueError(f"Crossword size must be at least 2, got {self.size}")


@dataclass
class CrosswordLayout:
    grid: LetterGrid
    words: List[PlacedWord]
    dropped: List[WordDefinition] = field(default_factory=list)

    def word(self, word_id) -> Optional[PlacedWord]:
        for placed in self.words:
            if placed.id == word_id:
                return placed
        return None


class CrosswordBuilder:
    """Builds an intersecting crossword grid and its clue list."""

    def __init__(self, config: CrosswordConfig) -> None:
        self.config = config

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def build(self, definitions: Sequence[WordDefinition]) -> CrosswordLayout:
        grid = LetterGrid(self.config.size)
        layout = CrosswordLayout(grid=grid, words=[])

        candidates: List[Tuple[WordDefinition, str]] = []
        for definition in definitions:
            text = clean_word(definition.word)
            if len(text) < MIN_WORD_LENGTH or len(text) > grid.size:
                LOGGER.warning(
                    "Dropping '%s': %s letters cannot fit a %sx%s grid",
                    definition.word,
                    len(text),
                    grid.size,
                    grid.size,
                )
                layout.dropped.append(definition)
                continue
            candidates.append((definition, text))

        # sorted() is stable, so equal lengths keep their input order
        candidates = sorted(candidates, key=lambda item: len(item[1]), reverse=True)
        if not candidates:
            LOGGER.info("No placeable crossword words supplied")
            return layout

        first, first_text = candidates[0]
        row = grid.size // 2
        col = (grid.size - len(first_text)) // 2
        self._place(layout, first, first_text, row, col, Direction.ACROSS)

        for definition, text in candidates[1:]:
            spot = self._find_crossing(grid, text) or self._find_free_spot(grid, text)
            if spot is None:
                LOGGER.warning("Could not place '%s'; dropping it from the puzzle", text)
                layout.dropped.append(definition)
                continue
            self._place(layout, definition, text, *spot)

        LOGGER.info(
            "Crossword built: %s placed, %s dropped on %sx%s",
            len(layout.words),
            len(layout.dropped),
            grid.size,
            grid.size,
        )
        return layout

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def _find_crossing(
        self, grid: LetterGrid, text: str
    ) -> Optional[Tuple[int, int, Direction]]:
        for index, letter in enumerate(text):
            for row, col in grid.coords():
                cell = grid.cell(row, col)
                if not cell.filled or cell.letter != letter:
                    continue
                # a cell owned by an across word can only be crossed going down
                for direction in (Direction.DOWN, Direction.ACROSS):
                    if cell.word_id(direction) is not None:
                        continue
                    dr, dc = direction.step
                    start_row, start_col = row - dr * index, col - dc * index
                    if can_place(grid, text, start_row, start_col, direction):
                        return start_row, start_col, direction
        return None

    def _find_free_spot(
        self, grid: LetterGrid, text: str
    ) -> Optional[Tuple[int, int, Direction]]:
        for row, col in grid.coords():
            for direction in (Direction.ACROSS, Direction.DOWN):
                if can_place(grid, text, row, col, direction):
                    LOGGER.debug("Fallback placement for '%s' at (%s,%s)", text, row, col)
                    return row, col, direction
        return None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def _place(
        self,
        layout: CrosswordLayout,
        definition: WordDefinition,
        text: str,
        row: int,
        col: int,
        direction: Direction,
    ) -> PlacedWord:
        placed = PlacedWord(
            id=definition.id,
            number=len(layout.words) + 1,
            word=text,
            clue=definition.clue,
            direction=direction,
            anchor_row=row,
            anchor_col=col,
        )
        layout.grid.write(placed.cells, text, word_id=definition.id, direction=direction)
        anchor = layout.grid.cell(row, col)
        # first number written to a cell wins
        if anchor.number is None:
            anchor.number = placed.number
        layout.words.append(placed)
        LOGGER.debug(
            "Placed #%s '%s' %s at (%s,%s)", placed.number, text, direction.value, row, col
        )
        return placed


def path_for(row: int, col: int, direction: Direction, length: int) -> List[Coord]:
    dr, dc = direction.step
    return [(row + dr * i, col + dc * i) for i in range(length)]


def can_place(grid: LetterGrid, text: str, row: int, col: int, direction: Direction) -> bool:
    """Check whether ``text`` fits at ``(row, col)`` without fusing into neighbours."""

    dr, dc = direction.step
    end_row = row + dr * (len(text) - 1)
    end_col = col + dc * (len(text) - 1)
    if not grid.contains(row, col) or not grid.contains(end_row, end_col):
        return False

    if grid.is_open(row - dr, col - dc) or grid.is_open(end_row + dr, end_col + dc):
        return False

    # perpendicular offsets
    pr, pc = dc, dr
    for index, (r, c) in enumerate(path_for(row, col, direction, len(text))):
        cell = grid.cell(r, c)
        if cell.filled:
            if cell.letter != text[index] or cell.word_id(direction) is not None:
                return False
            continue
        if grid.is_open(r - pr, c - pc) or grid.is_open(r + pr, c + pc):
            return False
    return True
