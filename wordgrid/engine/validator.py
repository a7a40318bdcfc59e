"""Deterministic rule validation for built grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Set, Tuple

from ..core.constants import ALPHABET, Direction
from ..core.exceptions import ValidationError
from ..utils.logger import get_logger
from .crossword_builder import CrosswordLayout
from .grid import LetterGrid
from .wordsearch_builder import WordSearchLayout


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Runs integrity checks over crossword and word-search layouts."""

    def validate_crossword(self, layout: CrosswordLayout) -> ValidationResult:
        try:
            self._check_letters_valid(layout.grid)
            self._check_placed_words(layout)
            self._check_no_orphan_cells(layout)
            self._check_runs_are_words(layout)
        except ValidationError as exc:
            LOGGER.error("Crossword validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def validate_wordsearch(self, layout: WordSearchLayout) -> ValidationResult:
        try:
            self._check_fully_filled(layout.grid)
            self._check_letters_valid(layout.grid)
            self._check_placements(layout)
        except ValidationError as exc:
            LOGGER.error("Word search validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_letters_valid(self, grid: LetterGrid) -> None:
        for r, c in grid.coords():
            cell = grid.cell(r, c)
            if cell.filled and (len(cell.letter) != 1 or cell.letter not in ALPHABET):
                raise ValidationError(f"Invalid letter '{cell.letter}' at ({r},{c})")
            if not cell.filled and cell.letter:
                raise ValidationError(f"Black cell at ({r},{c}) carries a letter")

    def _check_placed_words(self, layout: CrosswordLayout) -> None:
        for placed in layout.words:
            for index, (r, c) in enumerate(placed.cells):
                if not layout.grid.contains(r, c):
                    raise ValidationError(f"Word '{placed.word}' leaves the grid")
                cell = layout.grid.cell(r, c)
                if cell.letter != placed.word[index]:
                    raise ValidationError(
                        f"Word '{placed.word}' disagrees with grid at ({r},{c})"
                    )
                if cell.word_id(placed.direction) != placed.id:
                    raise ValidationError(
                        f"Cell ({r},{c}) is not linked to word '{placed.word}'"
                    )

    def _check_no_orphan_cells(self, layout: CrosswordLayout) -> None:
        covered: Set[Tuple[int, int]] = set()
        for placed in layout.words:
            covered.update(placed.cells)
        for r, c in layout.grid.coords():
            if layout.grid.cell(r, c).filled and (r, c) not in covered:
                raise ValidationError(f"Orphan letter at ({r},{c})")

    def _check_runs_are_words(self, layout: CrosswordLayout) -> None:
        grid = layout.grid
        starts = {(p.anchor_row, p.anchor_col, p.direction): p for p in layout.words}
        for direction in (Direction.ACROSS, Direction.DOWN):
            dr, dc = direction.step
            for r, c in grid.coords():
                if not grid.is_open(r, c) or grid.is_open(r - dr, c - dc):
                    continue
                length = 0
                while grid.is_open(r + dr * length, c + dc * length):
                    length += 1
                if length < 2:
                    continue
                placed = starts.get((r, c, direction))
                if placed is None or placed.length != length:
                    raise ValidationError(
                        f"Run of {length} letters at ({r},{c}) {direction.value} is not a placed word"
                    )

    def _check_fully_filled(self, grid: LetterGrid) -> None:
        for r, c in grid.coords():
            if not grid.cell(r, c).filled:
                raise ValidationError(f"Word search cell ({r},{c}) left empty")

    def _check_placements(self, layout: WordSearchLayout) -> None:
        for placement in layout.placements:
            cells = placement.cells
            if any(not layout.grid.contains(r, c) for r, c in cells):
                raise ValidationError(f"Word '{placement.word}' leaves the grid")
            if layout.grid.read(cells) != placement.word:
                raise ValidationError(
                    f"Word '{placement.word}' not readable at ({placement.row},{placement.col})"
                )
