from typing import Iterator, List, Tuple

SIZE = 9
BOX = 3
DIGITS = tuple(range(1, SIZE + 1))

Grid = List[List[int]]
Position = Tuple[int, int]


def empty_grid() -> Grid:
    return [[0] * SIZE for _ in range(SIZE)]


def copy_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def box_index(row: int, col: int) -> int:
    """Box id of a cell, numbered left to right then top to bottom."""
    return (row // BOX) * BOX + (col // BOX)


def all_positions() -> List[Position]:
    return [(r, c) for r in range(SIZE) for c in range(SIZE)]


def box_positions(box: int) -> Iterator[Position]:
    start_row = (box // BOX) * BOX
    start_col = (box % BOX) * BOX
    for i in range(BOX):
        for j in range(BOX):
            yield (start_row + i, start_col + j)


# Keeps a grid and the digits used by each row, column and box in step.
class ConstraintTracker:
    def __init__(self, grid: Grid = None):
        self.grid = empty_grid()
        self.rows = [set() for _ in range(SIZE)]
        self.cols = [set() for _ in range(SIZE)]
        self.boxes = [set() for _ in range(SIZE)]
        if grid is not None:
            for (r, c) in all_positions():
                if grid[r][c] != 0:
                    self.place((r, c), grid[r][c])

    def place(self, pos: Position, digit: int) -> None:
        """
        Writes 'digit' at 'pos' and records it in the row, column and box sets.
        The caller is responsible for checking is_legal first.
        """
        row, col = pos
        self.grid[row][col] = digit
        self.rows[row].add(digit)
        self.cols[col].add(digit)
        self.boxes[box_index(row, col)].add(digit)

    def clear(self, pos: Position) -> int:
        """
        Empties the cell at 'pos' and returns the digit that was there.
        """
        row, col = pos
        digit = self.grid[row][col]
        if digit == 0:
            raise RuntimeError(f"Cannot clear empty cell {pos}.")
        self.grid[row][col] = 0
        self.rows[row].discard(digit)
        self.cols[col].discard(digit)
        self.boxes[box_index(row, col)].discard(digit)
        return digit

    def is_legal(self, pos: Position, digit: int) -> bool:
        row, col = pos
        return (
            digit not in self.rows[row]
            and digit not in self.cols[col]
            and digit not in self.boxes[box_index(row, col)]
        )

    def candidates(self, pos: Position) -> List[int]:
        return [d for d in DIGITS if self.is_legal(pos, d)]

    def empty_positions(self) -> List[Position]:
        return [(r, c) for (r, c) in all_positions() if self.grid[r][c] == 0]

    def snapshot(self) -> Grid:
        return copy_grid(self.grid)

    def trial_place(self, pos: Position, digit: int) -> "_Trial":
        """
        Places 'digit' for the duration of a with-block. The cell is cleared
        again on exit unless keep() was called on the returned trial.
        """
        self.place(pos, digit)
        return _Trial(lambda: self.clear(pos))

    def trial_clear(self, pos: Position) -> "_Trial":
        """
        Clears 'pos' for the duration of a with-block, putting the digit back
        on exit unless keep() was called.
        """
        digit = self.clear(pos)
        return _Trial(lambda: self.place(pos, digit))


class _Trial:
    def __init__(self, undo):
        self._undo = undo
        self.kept = False

    def keep(self):
        self.kept = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self.kept:
            self._undo()
        return False
