"""Puzzle generation and validation engine for the Taekwondo word games.

This package exposes the public API surface via:

- ``wordgrid.engine.crossword_builder.CrosswordBuilder``: intersecting crossword layouts.
- ``wordgrid.engine.wordsearch_builder.WordSearchBuilder``: filled word-search grids.
- ``wordgrid.engine.session``: timer, scoring and completion for one puzzle attempt.

The engine renders nothing and stores nothing itself; hosts read immutable
snapshots and receive the final result through an injected sink.
"""

from .core.models import WordDefinition
from .engine.crossword_builder import CrosswordBuilder, CrosswordConfig
from .engine.session import (
    CrosswordSession,
    PuzzleResult,
    SessionConfig,
    WordSearchSession,
    create_session,
)
from .engine.wordsearch_builder import WordSearchBuilder, WordSearchConfig

__all__ = [
    "CrosswordBuilder",
    "CrosswordConfig",
    "CrosswordSession",
    "PuzzleResult",
    "SessionConfig",
    "WordDefinition",
    "WordSearchBuilder",
    "WordSearchConfig",
    "WordSearchSession",
    "create_session",
]

__version__ = "0.1.0"
