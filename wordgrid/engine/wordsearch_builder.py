"""Word-search grid construction."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..core.constants import ALPHABET, DEFAULT_SEARCH_TRIALS, MIN_WORD_LENGTH, SEARCH_STEPS
from ..core.models import Coord, SearchPlacement, WordDefinition
from ..data.normalization import clean_word
from ..utils.logger import get_logger
from .grid import LetterGrid


LOGGER = get_logger(__name__)


@dataclass
class WordSearchConfig:
    """Configuration values driving the word-search layout."""

    size: int
    max_trials: int = DEFAULT_SEARCH_TRIALS
    steps: Tuple[Coord, ...] = SEARCH_STEPS
    alphabet: str = ALPHABET
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.size < 2:
            raise ValueError(f"Word search size must be at least 2, got {self.size}")
        if self.max_trials < 1:
            raise ValueError("max_trials must be positive")
        if not self.alphabet:
            raise ValueError("alphabet must not be empty")


@dataclass
class WordSearchLayout:
    grid: LetterGrid
    placements: List[SearchPlacement]
    dropped: List[WordDefinition] = field(default_factory=list)


class WordSearchBuilder:
    """Hides words along straight lines, then pads the grid with random letters.

    Filler letters are not screened, so they can occasionally spell a target
    word (or its reversal) somewhere else in the grid.
    """

    def __init__(self, config: WordSearchConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng or random.Random(config.seed)

    def build(self, definitions: Sequence[WordDefinition]) -> WordSearchLayout:
        grid = LetterGrid(self.config.size)
        layout = WordSearchLayout(grid=grid, placements=[])

        for definition in definitions:
            text = clean_word(definition.word)
            placement = None
            if len(text) >= MIN_WORD_LENGTH:
                placement = self._try_place(grid, definition, text)
            if placement is None:
                LOGGER.warning(
                    "Could not hide '%s' after %s trials; dropping it from the puzzle",
                    definition.word,
                    self.config.max_trials,
                )
                layout.dropped.append(definition)
                continue
            layout.placements.append(placement)

        self._fill_blanks(grid)
        LOGGER.info(
            "Word search built: %s placed, %s dropped on %sx%s",
            len(layout.placements),
            len(layout.dropped),
            grid.size,
            grid.size,
        )
        return layout

    def _try_place(
        self, grid: LetterGrid, definition: WordDefinition, text: str
    ) -> Optional[SearchPlacement]:
        for trial in range(1, self.config.max_trials + 1):
            step = self.rng.choice(self.config.steps)
            row = self.rng.randrange(grid.size)
            col = self.rng.randrange(grid.size)
            candidate = SearchPlacement(id=definition.id, word=text, row=row, col=col, step=step)
            if fits(grid, candidate):
                grid.write(candidate.cells, text)
                LOGGER.debug(
                    "Hid '%s' at (%s,%s) step %s on trial %s", text, row, col, step, trial
                )
                return candidate
        return None

    def _fill_blanks(self, grid: LetterGrid) -> None:
        for row, col in grid.coords():
            if not grid.cell(row, col).filled:
                grid.fill(row, col, self.rng.choice(self.config.alphabet))


def fits(grid: LetterGrid, placement: SearchPlacement) -> bool:
    """Path in bounds and every cell empty or already holding the same letter."""

    for index, (row, col) in enumerate(placement.cells):
        if not grid.contains(row, col):
            return False
        existing = grid.letter_at(row, col)
        if existing and existing != placement.word[index]:
            return False
    return True
