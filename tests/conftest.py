import random

import pytest

from sudoku_app.difficulty import DIFFICULTIES
from sudoku_app.sudoku_generator import generate


@pytest.fixture(scope="session")
def generated():
    """One seeded (puzzle, solution) pair per difficulty label."""
    return {
        label: generate(label, rng=random.Random(1000 + i))
        for i, label in enumerate(DIFFICULTIES)
    }


@pytest.fixture
def solved_grid(generated):
    return [row[:] for row in generated["easy"][1]]
