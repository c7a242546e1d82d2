# sudoku_app/errors.py

class SudokuError(Exception):
    """Base exception for all Sudoku engine operations."""


class InvalidDifficulty(SudokuError, ValueError):
    """Raised when a difficulty label is not in the difficulty table."""

    def __init__(self, difficulty, accepted=()):
        self.difficulty = difficulty
        self.accepted = tuple(accepted)
        message = f"Unknown difficulty '{difficulty}'."
        if self.accepted:
            message += f" Expected one of: {', '.join(self.accepted)}."
        super().__init__(message)


class GenerationExhausted(SudokuError):
    """Raised when carving could not clear the requested number of cells.

    A different random shuffle may succeed, so callers are free to retry
    the whole generation.
    """

    def __init__(self, difficulty, removals, attempts=1):
        self.difficulty = difficulty
        self.removals = removals
        self.attempts = attempts
        super().__init__(
            f"Could not remove {removals} cells with a unique solution "
            f"for '{difficulty}' after {attempts} attempt(s)."
        )


class GenerationCancelled(SudokuError):
    """Raised from inside the search when the caller cancelled generation."""
