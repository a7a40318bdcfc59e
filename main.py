"""CLI preview of crossword and word-search layouts built from a word list."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from wordgrid.core.constants import GameType
from wordgrid.core.models import WordDefinition
from wordgrid.engine.crossword_builder import CrosswordBuilder, CrosswordConfig
from wordgrid.engine.validator import GridValidator
from wordgrid.engine.wordsearch_builder import WordSearchBuilder, WordSearchConfig
from wordgrid.utils.logger import configure_logging
from wordgrid.utils.pretty import print_crossword, print_wordsearch


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def to_definitions(entries: List[str]) -> List[WordDefinition]:
    """Turn ``WORD`` or ``WORD:Clue`` entries into definitions numbered from 1."""
    definitions: List[WordDefinition] = []
    for index, entry in enumerate(entries, start=1):
        word, _, clue = entry.partition(":")
        definitions.append(WordDefinition(id=index, word=word.strip(), clue=clue.strip()))
    return definitions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Preview Taekwondo puzzle grids")
    parser.add_argument(
        "--game",
        type=str,
        choices=[g.value for g in GameType],
        default=GameType.CROSSWORD.value,
        help="Puzzle kind to build",
    )
    parser.add_argument("--size", type=int, default=12, help="Grid size in cells")
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Words to place (format: WORD or WORD:Clue)",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one WORD or WORD:Clue entry per line (# comments and blank lines ignored)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for word search layouts")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    entries: List[str] = []
    if args.words:
        entries.extend(args.words)
    if args.words_file:
        entries.extend(parse_words_file(args.words_file))
    if not entries:
        parser.error("provide --words or --words-file")

    definitions = to_definitions(entries)
    validator = GridValidator()
    payload: Dict[str, Any]

    if args.game == GameType.CROSSWORD.value:
        layout = CrosswordBuilder(CrosswordConfig(size=args.size)).build(definitions)
        validation = validator.validate_crossword(layout)
        print_crossword(layout)
        payload = {
            "grid": layout.grid.to_jsonable(),
            "words": [
                {
                    "id": placed.id,
                    "number": placed.number,
                    "word": placed.word,
                    "clue": placed.clue,
                    "direction": placed.direction.value,
                    "anchor": [placed.anchor_row, placed.anchor_col],
                }
                for placed in layout.words
            ],
        }
    else:
        config = WordSearchConfig(size=args.size, seed=args.seed)
        layout = WordSearchBuilder(config).build(definitions)
        validation = validator.validate_wordsearch(layout)
        print_wordsearch(layout)
        payload = {
            "grid": layout.grid.rows_as_text(),
            "words": [
                {
                    "id": placement.id,
                    "word": placement.word,
                    "start": [placement.row, placement.col],
                    "step": list(placement.step),
                }
                for placement in layout.placements
            ],
        }

    payload["dropped"] = [definition.word for definition in layout.dropped]
    payload["validation"] = validation.messages

    if args.output:
        args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


if __name__ == "__main__":  # pragma: no cover
    main()
