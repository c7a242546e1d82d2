from .constraints import ConstraintTracker, box_index
from .difficulty import DIFFICULTIES, removal_count
from .errors import GenerationCancelled, GenerationExhausted, InvalidDifficulty, SudokuError
from .sudoku_generator import SudokuGenerator, count_solutions, generate, solve
from .sudoku_puzzle import SudokuPuzzle
from .tasks import GenerationTask
from .validity import is_complete, is_solved, is_valid_sudoku

__all__ = [
    "ConstraintTracker",
    "DIFFICULTIES",
    "GenerationCancelled",
    "GenerationExhausted",
    "GenerationTask",
    "InvalidDifficulty",
    "SudokuError",
    "SudokuGenerator",
    "SudokuPuzzle",
    "box_index",
    "count_solutions",
    "generate",
    "is_complete",
    "is_solved",
    "is_valid_sudoku",
    "removal_count",
    "solve",
]
