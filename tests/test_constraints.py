import pytest

from sudoku_app.constraints import (
    ConstraintTracker,
    all_positions,
    box_index,
    box_positions,
    empty_grid,
)


def test_box_index_is_row_major():
    assert box_index(0, 0) == 0
    assert box_index(0, 8) == 2
    assert box_index(4, 4) == 4
    assert box_index(8, 0) == 6
    assert box_index(8, 8) == 8


def test_box_positions_cover_grid_once():
    seen = [pos for box in range(9) for pos in box_positions(box)]
    assert sorted(seen) == all_positions()
    assert all(box_index(r, c) == box for box in range(9) for (r, c) in box_positions(box))


def test_place_updates_grid_and_sets():
    tracker = ConstraintTracker()
    tracker.place((4, 5), 7)
    assert tracker.grid[4][5] == 7
    assert 7 in tracker.rows[4]
    assert 7 in tracker.cols[5]
    assert 7 in tracker.boxes[4]


def test_is_legal_checks_row_col_and_box():
    tracker = ConstraintTracker()
    tracker.place((0, 0), 5)
    assert not tracker.is_legal((0, 8), 5)
    assert not tracker.is_legal((8, 0), 5)
    assert not tracker.is_legal((2, 2), 5)
    assert tracker.is_legal((3, 3), 5)
    assert tracker.is_legal((0, 1), 6)


def test_clear_returns_digit_and_restores_sets():
    tracker = ConstraintTracker()
    tracker.place((1, 1), 3)
    assert tracker.clear((1, 1)) == 3
    assert tracker.grid == empty_grid()
    assert tracker.rows[1] == set()
    assert tracker.cols[1] == set()
    assert tracker.boxes[0] == set()
    assert tracker.is_legal((1, 1), 3)


def test_clear_empty_cell_is_an_error():
    with pytest.raises(RuntimeError):
        ConstraintTracker().clear((0, 0))


def test_tracker_from_grid_matches_grid(solved_grid):
    tracker = ConstraintTracker(solved_grid)
    assert tracker.grid == solved_grid
    assert tracker.grid is not solved_grid
    assert all(tracker.rows[r] == set(range(1, 10)) for r in range(9))
    assert tracker.empty_positions() == []


def test_trial_place_undone_unless_kept():
    tracker = ConstraintTracker()
    with tracker.trial_place((0, 0), 1):
        assert tracker.grid[0][0] == 1
    assert tracker.grid[0][0] == 0
    assert 1 not in tracker.rows[0]

    with tracker.trial_place((0, 0), 1) as trial:
        trial.keep()
    assert tracker.grid[0][0] == 1


def test_trial_clear_restores_on_exception():
    tracker = ConstraintTracker()
    tracker.place((2, 3), 9)
    with pytest.raises(KeyError):
        with tracker.trial_clear((2, 3)):
            assert tracker.grid[2][3] == 0
            raise KeyError("boom")
    assert tracker.grid[2][3] == 9
    assert 9 in tracker.boxes[1]


def test_candidates():
    tracker = ConstraintTracker()
    for col, digit in enumerate(range(1, 9)):
        tracker.place((0, col), digit)
    assert tracker.candidates((0, 8)) == [9]
