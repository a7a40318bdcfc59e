"""Custom exception hierarchy for the puzzle engine."""


class PuzzleError(Exception):
    """Base exception for engine failures."""


class PlacementError(PuzzleError):
    """Raised when a word cannot be written to the grid without breaking rules."""


class EmptyPuzzleError(PuzzleError):
    """Raised when a session is set up without any words to solve."""


class SessionStateError(PuzzleError):
    """Raised when a session transition is requested from the wrong state."""


class ValidationError(PuzzleError):
    """Raised when the grid integrity checks fail."""


class ResultSinkError(PuzzleError):
    """Raised when a finished session's result cannot be delivered."""
