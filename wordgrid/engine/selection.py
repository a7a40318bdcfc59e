"""Interpretation of player input into word attempts.

``WordSearchSelection`` turns a drag gesture into a straight run of cells and
checks it against the target words. ``CrosswordCursor`` tracks the typing
cursor, the letters typed so far and which clues they complete. Neither
tracker scores anything: they report matches and the session credits them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.constants import ALPHABET, ARROW_STEPS, ERASE_KEYS, TOGGLE_KEY, Bounds, Direction
from ..core.models import Coord, PlacedWord, WordId
from ..utils.logger import get_logger
from .crossword_builder import CrosswordLayout
from .grid import LetterGrid


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class WordMatch:
    word_id: WordId
    word: str
    cells: Tuple[Coord, ...]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def cells_between(anchor: Coord, current: Coord, bounds: Bounds) -> List[Coord]:
    """Cells from ``anchor`` toward ``current`` along the dominant direction.

    Vertical when the row delta dominates, horizontal when the column delta
    dominates, diagonal when they are equal. The run is clipped at the first
    step that would leave the grid; it never bends.
    """

    row, col = anchor
    d_row, d_col = current[0] - row, current[1] - col
    if abs(d_row) > abs(d_col):
        step = (_sign(d_row), 0)
    elif abs(d_col) > abs(d_row):
        step = (0, _sign(d_col))
    elif d_row != 0:
        step = (_sign(d_row), _sign(d_col))
    else:
        return [anchor]

    cells: List[Coord] = []
    for i in range(max(abs(d_row), abs(d_col)) + 1):
        r, c = row + step[0] * i, col + step[1] * i
        if not bounds.contains(r, c):
            break
        cells.append((r, c))
    return cells


class WordSearchSelection:
    """Drag-to-select tracking for a word-search grid."""

    def __init__(self, grid: LetterGrid, targets: Sequence[Tuple[WordId, str]]) -> None:
        self.grid = grid
        self.targets = [(word_id, word.upper()) for word_id, word in targets]
        self.anchor: Optional[Coord] = None
        self.selected: List[Coord] = []
        self.found: Dict[WordId, Tuple[Coord, ...]] = {}

    @property
    def active(self) -> bool:
        return self.anchor is not None

    def begin(self, row: int, col: int) -> bool:
        if not self.grid.contains(row, col):
            return False
        self.anchor = (row, col)
        self.selected = [(row, col)]
        return True

    def extend(self, row: int, col: int) -> List[Coord]:
        """Update the drag end; a target outside the grid just clips the run."""

        if self.anchor is None:
            return []
        self.selected = cells_between(self.anchor, (row, col), self.grid.bounds)
        return list(self.selected)

    def cancel(self) -> None:
        self.anchor = None
        self.selected = []

    def release(self) -> Optional[WordMatch]:
        cells = self.selected
        self.cancel()
        return self._evaluate(cells)

    def submit(self, cells: Sequence[Coord]) -> Optional[WordMatch]:
        """Check an explicit cell path, as if it had just been dragged out."""

        cells = [tuple(cell) for cell in cells]
        if any(not self.grid.contains(r, c) for r, c in cells):
            return None
        if not cells or cells != cells_between(cells[0], cells[-1], self.grid.bounds):
            LOGGER.debug("Rejected path %s: not a straight run", cells)
            return None
        self.cancel()
        return self._evaluate(cells)

    def is_found_cell(self, row: int, col: int) -> bool:
        return any((row, col) in path for path in self.found.values())

    def _evaluate(self, cells: Sequence[Coord]) -> Optional[WordMatch]:
        if len(cells) < 2:
            return None
        forward = self.grid.read(cells)
        backward = forward[::-1]
        for text, path in ((forward, tuple(cells)), (backward, tuple(reversed(cells)))):
            for word_id, word in self.targets:
                if word == text and word_id not in self.found:
                    # stored in reading order so highlights match the word
                    self.found[word_id] = path
                    LOGGER.debug("Found '%s' along %s", word, path)
                    return WordMatch(word_id=word_id, word=word, cells=path)
        LOGGER.debug("Selection '%s' matches no open word", forward)
        return None


class CrosswordCursor:
    """Cursor, typing direction and typed letters for a crossword grid."""

    def __init__(self, layout: CrosswordLayout) -> None:
        self.layout = layout
        self.grid = layout.grid
        size = self.grid.size
        self.entries: List[List[str]] = [["" for _ in range(size)] for _ in range(size)]
        self.cursor: Optional[Coord] = self.grid.first_open()
        self.direction = Direction.ACROSS

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def press(self, key: str) -> List[WordId]:
        """Handle one key; returns ids of words completed by it."""

        if self.cursor is None:
            return []
        if len(key) == 1 and key.upper() in ALPHABET:
            return self.type_letter(key)
        if key in ERASE_KEYS:
            return self.erase()
        if key == TOGGLE_KEY:
            self.toggle_direction()
        elif key in ARROW_STEPS:
            self.move(*ARROW_STEPS[key])
        else:
            LOGGER.debug("Ignoring key %r", key)
        return []

    def select(self, row: int, col: int) -> bool:
        if not self.grid.is_open(row, col):
            return False
        self.cursor = (row, col)
        return True

    def focus_word(self, word_id: WordId) -> bool:
        """Jump to the first cell of a clue and type along it."""

        placed = self.layout.word(word_id)
        if placed is None:
            return False
        self.cursor = (placed.anchor_row, placed.anchor_col)
        self.direction = placed.direction
        return True

    def type_letter(self, letter: str) -> List[WordId]:
        if self.cursor is None:
            return []
        row, col = self.cursor
        self.entries[row][col] = letter.upper()
        dr, dc = self.direction.step
        target = self._next_open(row, col, dr, dc)
        if target is not None:
            self.cursor = target
        return self.check_words()

    def erase(self) -> List[WordId]:
        if self.cursor is None:
            return []
        row, col = self.cursor
        if self.entries[row][col]:
            self.entries[row][col] = ""
            return self.check_words()
        dr, dc = self.direction.step
        target = self._next_open(row, col, -dr, -dc)
        if target is None:
            return []
        self.cursor = target
        self.entries[target[0]][target[1]] = ""
        return self.check_words()

    def toggle_direction(self) -> None:
        self.direction = self.direction.toggled()

    def move(self, dr: int, dc: int) -> None:
        if self.cursor is None:
            return
        row, col = self.cursor
        size = self.grid.size
        # clamp the first step, then skip black cells beyond it
        r = min(max(row + dr, 0), size - 1)
        c = min(max(col + dc, 0), size - 1)
        while self.grid.contains(r, c) and not self.grid.cell(r, c).filled:
            r += dr
            c += dc
        if self.grid.is_open(r, c):
            self.cursor = (r, c)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def entry(self, row: int, col: int) -> str:
        return self.entries[row][col]

    def current_word(self) -> Optional[PlacedWord]:
        if self.cursor is None:
            return None
        word_id = self.grid.cell(*self.cursor).word_id(self.direction)
        if word_id is None:
            return None
        return self.layout.word(word_id)

    def is_word_complete(self, placed: PlacedWord) -> bool:
        return all(
            self.entries[r][c] == self.grid.letter_at(r, c) for r, c in placed.cells
        )

    def check_words(self) -> List[WordId]:
        newly_solved: List[WordId] = []
        for placed in self.layout.words:
            if placed.solved or not self.is_word_complete(placed):
                continue
            placed.mark_solved()
            newly_solved.append(placed.id)
            LOGGER.debug("Crossword entry #%s '%s' completed", placed.number, placed.word)
        return newly_solved

    def _next_open(self, row: int, col: int, dr: int, dc: int) -> Optional[Coord]:
        r, c = row + dr, col + dc
        while self.grid.contains(r, c) and not self.grid.cell(r, c).filled:
            r += dr
            c += dc
        if self.grid.is_open(r, c):
            return r, c
        return None
