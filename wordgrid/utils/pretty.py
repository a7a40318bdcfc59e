"""Pretty-print helpers for puzzle grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Sequence

from ..core.constants import Direction

if TYPE_CHECKING:
    from ..engine.crossword_builder import CrosswordLayout
    from ..engine.grid import LetterGrid
    from ..engine.wordsearch_builder import WordSearchLayout


BLACK = "#"


def format_grid(grid: LetterGrid) -> str:
    header_cells = [f"{c:>2}" for c in range(grid.size)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * grid.size - 1))
    for r, row_text in enumerate(grid.rows_as_text(blank=BLACK)):
        row_render = " ".join(f"{symbol:>2}" for symbol in row_text)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_clues(layout: CrosswordLayout) -> str:
    lines = []
    for placed in layout.words:
        arrow = "->" if placed.direction == Direction.ACROSS else "v"
        lines.append(
            f"{placed.number:>2}. {arrow:<2} ({placed.length}) {placed.clue or placed.word}"
        )
    return "\n".join(lines)


def _dropped_line(dropped: Sequence) -> str:
    return "Dropped: " + ", ".join(str(d.word) for d in dropped)


def print_crossword(layout: CrosswordLayout, *, stream=None) -> None:
    """Print the crossword grid followed by its clue list."""

    stream = stream or sys.stdout
    print(format_grid(layout.grid), file=stream)
    print("", file=stream)
    print(format_clues(layout), file=stream)
    if layout.dropped:
        print(_dropped_line(layout.dropped), file=stream)


def print_wordsearch(layout: WordSearchLayout, *, stream=None) -> None:
    stream = stream or sys.stdout
    print(format_grid(layout.grid), file=stream)
    print("", file=stream)
    for placement in layout.placements:
        print(
            f"{placement.word:<12} at ({placement.row},{placement.col}) step {placement.step}",
            file=stream,
        )
    if layout.dropped:
        print(_dropped_line(layout.dropped), file=stream)
