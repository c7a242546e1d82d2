import logging
import random
from typing import List, Optional, Tuple

from .constraints import (
    DIGITS,
    ConstraintTracker,
    Grid,
    Position,
    all_positions,
    box_index,
    box_positions,
)
from .difficulty import removal_count
from .errors import GenerationCancelled, GenerationExhausted
from .validity import is_valid_sudoku

log = logging.getLogger(__name__)

# Boxes on the main diagonal share no row or column with each other.
DIAGONAL_BOXES = (0, 4, 8)


class _RestartFill(Exception):
    pass


# Class to generate a complete Sudoku board and create puzzles with a unique solution.
class SudokuGenerator:
    def __init__(self, rng: Optional[random.Random] = None, cancel_event=None):
        self.rng = rng if rng is not None else random.Random()
        self.cancel_event = cancel_event
        self._fill_budget = self.fill_backtrack_limit

    def generate_puzzle(self, difficulty: str = "easy") -> Tuple[Grid, Grid]:
        """
        Generates a (puzzle, solution) pair. The puzzle has the number of cells
        given by the difficulty cleared and exactly one completion.
        """
        removals = removal_count(difficulty)
        tracker = self.generate_full_solution()
        solution = tracker.snapshot()
        assert is_valid_sudoku(solution), "filled board breaks the Sudoku rules"

        if not self.remove_cells_with_unique_check(tracker, removals):
            raise GenerationExhausted(difficulty, removals)
        log.debug("Generated '%s' puzzle with %d cells removed", difficulty, removals)
        return tracker.snapshot(), solution

    # ----- Solution filling -----

    # Dead ends allowed in one fill before reseeding the board
    fill_backtrack_limit = 200

    def generate_full_solution(self) -> ConstraintTracker:
        """
        Fills a board by seeding the diagonal boxes with random permutations and
        completing the other 54 cells by backtracking. A fill that hits too many
        dead ends starts over from freshly seeded boxes.
        """
        restarts = 0
        while True:
            tracker = ConstraintTracker()
            self.seed_diagonal_boxes(tracker)

            positions = self.remaining_positions()
            self.rng.shuffle(positions)
            self._fill_budget = self.fill_backtrack_limit
            try:
                if not self.fill_cells(tracker, positions):
                    raise AssertionError("backtracking could not complete a seeded board")
            except _RestartFill:
                restarts += 1
                log.debug("Fill restart %d after %d dead ends", restarts, self.fill_backtrack_limit)
                continue
            return tracker

    def seed_diagonal_boxes(self, tracker: ConstraintTracker) -> None:
        for box in DIAGONAL_BOXES:
            digits = list(DIGITS)
            self.rng.shuffle(digits)
            for pos, digit in zip(box_positions(box), digits):
                tracker.place(pos, digit)

    @staticmethod
    def remaining_positions() -> List[Position]:
        return [
            (r, c) for (r, c) in all_positions()
            if box_index(r, c) not in DIAGONAL_BOXES
        ]

    def fill_cells(self, tracker: ConstraintTracker, positions: List[Position]) -> bool:
        if not positions:
            return True  # Board is complete

        # Most constrained cell first; the shuffled order breaks ties
        index = min(range(len(positions)), key=lambda i: len(tracker.candidates(positions[i])))
        pos = positions.pop(index)
        digits = tracker.candidates(pos)
        self.rng.shuffle(digits)
        try:
            for digit in digits:
                self._check_cancelled()
                with tracker.trial_place(pos, digit) as trial:
                    if self.fill_cells(tracker, positions):
                        trial.keep()
                        return True
                self._fill_budget -= 1
                if self._fill_budget < 0:
                    raise _RestartFill()
        finally:
            positions.insert(index, pos)
        return False

    # ----- Cell removal -----

    def remove_cells_with_unique_check(self, tracker: ConstraintTracker, removals: int) -> bool:
        """
        Clears 'removals' cells from a solved board, in random order, keeping
        only removals after which the board still has a single completion.
        Returns False if no ordering of the 81 cells gets there.
        """
        positions = all_positions()
        self.rng.shuffle(positions)
        return self._remove_cells(tracker, removals, positions, [])

    def _remove_cells(self, tracker, removals, positions, removed) -> bool:
        if removals == 0:
            return True
        positions = list(positions)
        while positions:
            self._check_cancelled()
            pos = positions.pop()
            with tracker.trial_clear(pos) as trial:
                removed.append(pos)
                if (
                    self.count_solutions(tracker, removed) == 1
                    and self._remove_cells(tracker, removals - 1, positions, removed)
                ):
                    trial.keep()
                    return True
                removed.pop()
        log.debug("No removal left with %d cells to go", removals)
        return False

    # ----- Solution counting -----

    def count_solutions(self, tracker: ConstraintTracker, positions=None, limit: int = 2,
                        found: Optional[List[Grid]] = None) -> int:
        """
        Uses backtracking to count completions of the board, stopping as soon
        as 'limit' have been found. Returns:
          0 = no solution,
          1 = unique solution,
          limit = at least that many solutions.
        Completed boards are appended to 'found' when it is given.
        """
        if positions is None:
            positions = tracker.empty_positions()
        return self._count(tracker, list(positions), limit, found)

    def _count(self, tracker, positions, limit, found) -> int:
        if not positions:
            if found is not None:
                found.append(tracker.snapshot())
            return 1

        # Branch on the empty cell with the fewest legal digits
        index = min(range(len(positions)), key=lambda i: len(tracker.candidates(positions[i])))
        pos = positions.pop(index)
        count = 0
        try:
            for digit in tracker.candidates(pos):
                self._check_cancelled()
                with tracker.trial_place(pos, digit):
                    count += self._count(tracker, positions, limit - count, found)
                if count >= limit:
                    break
        finally:
            positions.insert(index, pos)
        return count

    def has_unique_solution(self, tracker: ConstraintTracker, positions=None) -> bool:
        return self.count_solutions(tracker, positions) == 1

    def _check_cancelled(self):
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise GenerationCancelled("Sudoku generation was cancelled.")


def generate(difficulty: str, rng: Optional[random.Random] = None, cancel_event=None,
             max_attempts: int = 1) -> Tuple[Grid, Grid]:
    """
    Returns a (puzzle, solution) pair for 'difficulty'.
    InvalidDifficulty is raised before any work is done. GenerationExhausted is
    retried with fresh randomness up to 'max_attempts' times.
    """
    removals = removal_count(difficulty)
    generator = SudokuGenerator(rng=rng, cancel_event=cancel_event)
    last_error = None
    for attempt in range(1, max(1, max_attempts) + 1):
        try:
            return generator.generate_puzzle(difficulty)
        except GenerationExhausted as exc:
            log.warning("Attempt %d/%d for '%s' exhausted: %s", attempt, max_attempts, difficulty, exc)
            last_error = exc
    raise GenerationExhausted(difficulty, removals, attempts=max(1, max_attempts)) from last_error


def count_solutions(grid: Grid, limit: int = 2) -> int:
    """Counts completions of 'grid' up to 'limit'. A grid breaking the rules has none."""
    if not is_valid_sudoku(grid):
        return 0
    return SudokuGenerator().count_solutions(ConstraintTracker(grid), limit=limit)


def solve(grid: Grid) -> Optional[Grid]:
    """Returns the completion of 'grid' if it has exactly one, otherwise None."""
    if not is_valid_sudoku(grid):
        return None
    found: List[Grid] = []
    if SudokuGenerator().count_solutions(ConstraintTracker(grid), found=found) != 1:
        return None
    return found[0]
