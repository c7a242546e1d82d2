from .constraints import SIZE, box_index, copy_grid
from .validity import is_solved


# Game state for one puzzle: the clues, the solution and the player's entries.
class SudokuPuzzle:
    def __init__(self, puzzle, solution):
        self.puzzle = copy_grid(puzzle)
        self.solution = copy_grid(solution)
        self.board = copy_grid(puzzle)
        self.givens = {
            (r, c) for r in range(SIZE) for c in range(SIZE) if puzzle[r][c] != 0
        }

    def is_given(self, row, col):
        return (row, col) in self.givens

    def set_value(self, row, col, value):
        """
        Writes a player value into an empty (non-clue) cell. 0 clears it.
        """
        if self.is_given(row, col):
            raise ValueError(f"Cell ({row}, {col}) is a clue and cannot be changed.")
        if not 0 <= value <= SIZE:
            raise ValueError(f"Value must be between 0 and {SIZE}, got {value}.")
        self.board[row][col] = value

    def clear_value(self, row, col):
        self.set_value(row, col, 0)

    def is_correct(self, row, col):
        return self.board[row][col] == self.solution[row][col]

    def wrong_cells(self):
        """Player entries that do not match the solution."""
        return [
            (r, c)
            for r in range(SIZE)
            for c in range(SIZE)
            if self.board[r][c] != 0 and not self.is_given(r, c) and not self.is_correct(r, c)
        ]

    def remaining(self):
        return sum(1 for row in self.board for value in row if value == 0)

    def is_solved(self):
        return is_solved(self.board, self.solution)

    @staticmethod
    def related_cells(row, col):
        """Cells sharing a row, column or box with (row, col), excluding itself."""
        box = box_index(row, col)
        return {
            (r, c)
            for r in range(SIZE)
            for c in range(SIZE)
            if (r, c) != (row, col) and (r == row or c == col or box_index(r, c) == box)
        }
