"""Puzzle session orchestration.

A session walks ``SETUP -> PLAYING -> FINISHED``:
  1. Setup builds the grid with the matching builder and resets score/timer.
  2. Playing forwards player input to the selection tracker, credits solved
     words and counts the clock down once per tick.
  3. Finished is terminal; the result payload is produced exactly once.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Set

from ..core.constants import TICK_SECONDS, FinishReason, GameType, SessionState
from ..core.exceptions import EmptyPuzzleError, ResultSinkError, SessionStateError
from ..core.models import Cell, Coord, WordDefinition, WordId
from ..data.normalization import clean_word
from ..utils.logger import get_logger
from .crossword_builder import CrosswordBuilder, CrosswordConfig, CrosswordLayout
from .grid import LetterGrid
from .selection import CrosswordCursor, WordMatch, WordSearchSelection
from .snapshot import BoardSnapshot, CellView, WordView
from .timer import TickHandle, Ticker
from .wordsearch_builder import WordSearchBuilder, WordSearchConfig, WordSearchLayout


LOGGER = get_logger(__name__)


@dataclass
class SessionConfig:
    game_type: GameType
    grid_size: int
    total_points: int
    time_limit: int
    category: str = ""
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self.game_type = GameType(self.game_type)
        if self.total_points < 0:
            raise ValueError("total_points must not be negative")
        if self.time_limit <= 0:
            raise ValueError("time_limit must be positive")


@dataclass
class PuzzleResult:
    """Payload consumed by the progress-tracking collaborator."""

    game_type: GameType
    category: str
    score: int
    time_used: int
    perfect_score: bool
    total_words: int
    solved_words: int
    completion_rate: float
    time_per_word: float
    total_possible_points: int
    finish_reason: FinishReason
    solved_word_ids: List[WordId] = field(default_factory=list)

    def to_jsonable(self) -> dict:
        return {
            "gameType": self.game_type.value,
            "category": self.category,
            "score": self.score,
            "timeUsed": self.time_used,
            "perfectScore": self.perfect_score,
            "totalWords": self.total_words,
            "solvedWords": self.solved_words,
            "completionRate": self.completion_rate,
            "timePerWord": self.time_per_word,
            "averageTimePerWord": self.time_per_word,
            "totalPossiblePoints": self.total_possible_points,
            "finishReason": self.finish_reason.value,
            "solvedWordsList": list(self.solved_word_ids),
        }


class ResultSink(Protocol):
    def save(self, result: PuzzleResult) -> str:
        """Persist a finished session's result and return a reference."""


class PuzzleSession:
    """Timer, scoring and completion state machine shared by both games."""

    game_type: GameType

    def __init__(
        self,
        config: SessionConfig,
        words: Sequence[WordDefinition],
        *,
        rng: Optional[random.Random] = None,
        ticker: Optional[Ticker] = None,
        clock: Callable[[], float] = time.monotonic,
        sink: Optional[ResultSink] = None,
        on_complete: Optional[Callable[[PuzzleResult], None]] = None,
    ) -> None:
        self.config = config
        self.definitions = list(words)
        self.rng = rng or random.Random(config.seed)
        self.ticker = ticker
        self.clock = clock
        self.sink = sink
        self.on_complete = on_complete
        self.state = SessionState.SETUP
        self.started_at: Optional[float] = None
        self.seconds_left = config.time_limit
        self.score = 0
        self.solved_word_ids: Set[WordId] = set()
        self.solved_order: List[WordId] = []
        self.total_words = len(self.definitions)
        self.word_ids: Set[WordId] = {definition.id for definition in self.definitions}
        self.total_points = config.total_points
        self.result: Optional[PuzzleResult] = None
        self.result_ref: Optional[str] = None
        self._tick_handle: Optional[TickHandle] = None
        self._setup()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _setup(self) -> None:
        if self.total_words == 0:
            raise EmptyPuzzleError("Cannot set up a puzzle without words")
        self._build()
        LOGGER.info(
            "%s session ready: %s words, %s points, %ss",
            self.game_type.value,
            self.total_words,
            self.total_points,
            self.config.time_limit,
        )

    def _build(self) -> None:
        raise NotImplementedError

    @property
    def grid(self) -> LetterGrid:
        raise NotImplementedError

    @property
    def points_per_word(self) -> int:
        return self.total_points // self.total_words

    @property
    def is_playing(self) -> bool:
        return self.state == SessionState.PLAYING

    @property
    def all_solved(self) -> bool:
        return len(self.solved_word_ids) >= self.total_words

    def start(self) -> None:
        if self.state != SessionState.SETUP:
            raise SessionStateError(f"Cannot start a session in state {self.state.value}")
        self.state = SessionState.PLAYING
        self.started_at = self.clock()
        if self.ticker is not None:
            self._tick_handle = self.ticker.every(TICK_SECONDS, self.tick)
        LOGGER.info("%s session started", self.game_type.value)

    def tick(self) -> None:
        """Advance the countdown by one second."""

        if not self.is_playing:
            LOGGER.debug("Ignoring tick in state %s", self.state.value)
            return
        # solving wins over a timeout evaluated in the same tick
        if self.all_solved:
            self.finish(FinishReason.SOLVED)
            return
        self.seconds_left = max(self.seconds_left - 1, 0)
        if self.seconds_left == 0:
            self.finish(FinishReason.TIMEOUT)

    def credit(self, word_ids: Sequence[WordId]) -> int:
        """Record solved words; returns the points added."""

        if not self.is_playing:
            return 0
        added = 0
        for word_id in word_ids:
            if word_id not in self.word_ids:
                LOGGER.warning("Ignoring credit for unknown word id %r", word_id)
                continue
            if word_id in self.solved_word_ids:
                continue
            self.solved_word_ids.add(word_id)
            self.solved_order.append(word_id)
            added += self.points_per_word
        self.score += added
        if added:
            LOGGER.info(
                "Solved %s/%s words, score %s", len(self.solved_word_ids), self.total_words, self.score
            )
        if self.all_solved:
            self.finish(FinishReason.SOLVED)
        return added

    def finish(self, reason: FinishReason = FinishReason.TIMEOUT) -> PuzzleResult:
        if self.result is not None:
            return self.result
        self._cancel_tick()
        self.state = SessionState.FINISHED

        time_used = self.config.time_limit - self.seconds_left
        solved = len(self.solved_word_ids)
        perfect = solved == self.total_words
        # integer credits can fall short of the total; a full solve earns it all
        score = self.total_points if perfect else self.score
        self.result = PuzzleResult(
            game_type=self.game_type,
            category=self.config.category,
            score=score,
            time_used=time_used,
            perfect_score=perfect,
            total_words=self.total_words,
            solved_words=solved,
            completion_rate=solved / self.total_words * 100,
            time_per_word=time_used / max(self.total_words, 1),
            total_possible_points=self.total_points,
            finish_reason=reason,
            solved_word_ids=list(self.solved_order),
        )
        LOGGER.info(
            "%s session finished (%s): score %s, %s/%s words in %ss",
            self.game_type.value,
            reason.value,
            score,
            solved,
            self.total_words,
            time_used,
        )
        self._deliver(self.result)
        return self.result

    def close(self) -> None:
        """Release the tick when the host discards the session."""

        self._cancel_tick()

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _deliver(self, result: PuzzleResult) -> None:
        if self.sink is not None:
            try:
                self.result_ref = self.sink.save(result)
            except ResultSinkError as exc:
                LOGGER.warning("Result could not be stored: %s", exc)
        if self.on_complete is not None:
            self.on_complete(result)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def snapshot(self) -> BoardSnapshot:
        raise NotImplementedError


class CrosswordSession(PuzzleSession):
    game_type = GameType.CROSSWORD

    layout: CrosswordLayout
    cursor: CrosswordCursor

    def _build(self) -> None:
        builder = CrosswordBuilder(CrosswordConfig(size=self.config.grid_size))
        self.layout = builder.build(self.definitions)
        self.cursor = CrosswordCursor(self.layout)

    @property
    def grid(self) -> LetterGrid:
        return self.layout.grid

    def press_key(self, key: str) -> List[WordId]:
        if not self.is_playing:
            return []
        solved = self.cursor.press(key)
        if solved:
            self.credit(solved)
        return solved

    def select_cell(self, row: int, col: int) -> bool:
        if not self.is_playing:
            return False
        return self.cursor.select(row, col)

    def focus_word(self, word_id: WordId) -> bool:
        if not self.is_playing:
            return False
        return self.cursor.focus_word(word_id)

    def snapshot(self) -> BoardSnapshot:
        grid = self.layout.grid
        current = self.cursor.current_word()
        current_cells = set(current.cells) if current is not None else set()
        rows = []
        for r in range(grid.size):
            row = []
            for c in range(grid.size):
                cell = grid.cell(r, c)
                entry = self.cursor.entry(r, c)
                row.append(
                    CellView(
                        letter=cell.letter,
                        filled=cell.filled,
                        number=cell.number,
                        selected=self.cursor.cursor == (r, c),
                        found=_cell_solved(self.layout, cell),
                        entry=entry,
                        correct=bool(entry) and entry == cell.letter,
                        in_current_word=(r, c) in current_cells,
                    )
                )
            rows.append(tuple(row))
        words = tuple(
            WordView(
                id=placed.id,
                word=placed.word,
                clue=placed.clue,
                solved=placed.solved,
                number=placed.number,
                direction=placed.direction.value,
                anchor=(placed.anchor_row, placed.anchor_col),
            )
            for placed in self.layout.words
        )
        return BoardSnapshot(
            game_type=self.game_type,
            state=self.state,
            cells=tuple(rows),
            words=words,
            score=self.score,
            seconds_left=self.seconds_left,
            solved_count=len(self.solved_word_ids),
            total_words=self.total_words,
            cursor=self.cursor.cursor,
            direction=self.cursor.direction.value,
        )


def _cell_solved(layout: CrosswordLayout, cell: Cell) -> bool:
    for word_id in (cell.across_word_id, cell.down_word_id):
        if word_id is None:
            continue
        placed = layout.word(word_id)
        if placed is not None and placed.solved:
            return True
    return False


class WordSearchSession(PuzzleSession):
    game_type = GameType.WORDSEARCH

    layout: WordSearchLayout
    selection: WordSearchSelection

    def _build(self) -> None:
        builder = WordSearchBuilder(WordSearchConfig(size=self.config.grid_size), rng=self.rng)
        self.layout = builder.build(self.definitions)
        targets = [(definition.id, clean_word(definition.word)) for definition in self.definitions]
        self.selection = WordSearchSelection(self.layout.grid, targets)

    @property
    def grid(self) -> LetterGrid:
        return self.layout.grid

    def begin_selection(self, row: int, col: int) -> bool:
        if not self.is_playing:
            return False
        return self.selection.begin(row, col)

    def extend_selection(self, row: int, col: int) -> List[Coord]:
        if not self.is_playing:
            return []
        return self.selection.extend(row, col)

    def release_selection(self) -> Optional[WordMatch]:
        if not self.is_playing:
            return None
        return self._apply(self.selection.release())

    def submit_path(self, cells: Sequence[Coord]) -> Optional[WordMatch]:
        if not self.is_playing:
            return None
        return self._apply(self.selection.submit(cells))

    def _apply(self, match: Optional[WordMatch]) -> Optional[WordMatch]:
        if match is not None:
            self.credit([match.word_id])
        return match

    def snapshot(self) -> BoardSnapshot:
        grid = self.layout.grid
        selected = set(self.selection.selected)
        found: Set[Coord] = set()
        for path in self.selection.found.values():
            found.update(path)
        cells = tuple(
            tuple(
                CellView(
                    letter=grid.cell(r, c).letter,
                    filled=True,
                    selected=(r, c) in selected,
                    found=(r, c) in found,
                )
                for c in range(grid.size)
            )
            for r in range(grid.size)
        )
        words = tuple(
            WordView(
                id=definition.id,
                word=clean_word(definition.word),
                clue=definition.clue,
                solved=definition.id in self.solved_word_ids,
            )
            for definition in self.definitions
        )
        return BoardSnapshot(
            game_type=self.game_type,
            state=self.state,
            cells=cells,
            words=words,
            score=self.score,
            seconds_left=self.seconds_left,
            solved_count=len(self.solved_word_ids),
            total_words=self.total_words,
        )


SESSION_TYPES: Dict[GameType, type] = {
    GameType.CROSSWORD: CrosswordSession,
    GameType.WORDSEARCH: WordSearchSession,
}


def create_session(
    config: SessionConfig, words: Sequence[WordDefinition], **kwargs
) -> PuzzleSession:
    """Instantiate the session class matching ``config.game_type``."""

    return SESSION_TYPES[config.game_type](config, words, **kwargs)
