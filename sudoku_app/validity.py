from .constraints import SIZE, box_index


def is_valid_sudoku(grid) -> bool:
    """
    Checks that no nonzero digit repeats in any row, column or 3x3 box.
    Empty cells (0) are ignored, so an all-zero grid is valid.
    Grids that are not 9x9 or hold values outside 0-9 are invalid.
    """
    if len(grid) != SIZE or any(len(row) != SIZE for row in grid):
        return False

    row_sets = [set() for _ in range(SIZE)]
    col_sets = [set() for _ in range(SIZE)]
    box_sets = [set() for _ in range(SIZE)]
    for row in range(SIZE):
        for col in range(SIZE):
            value = grid[row][col]
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= SIZE:
                return False
            # Ignore empty cells
            if value == 0:
                continue
            box = box_index(row, col)
            if value in row_sets[row] or value in col_sets[col] or value in box_sets[box]:
                return False
            row_sets[row].add(value)
            col_sets[col].add(value)
            box_sets[box].add(value)
    return True


def is_complete(grid) -> bool:
    return all(value != 0 for row in grid for value in row)


def is_solved(board, solution) -> bool:
    return is_complete(board) and is_valid_sudoku(board) and board == solution
