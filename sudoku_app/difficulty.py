from typing import Dict, Tuple

from .errors import InvalidDifficulty

# Cells cleared from the 81 of a solved board for each difficulty.
DIFFICULTIES: Dict[str, int] = {
    "easy": 25,
    "medium": 35,
    "hard": 45,
    "difficult": 55,
}


def labels() -> Tuple[str, ...]:
    return tuple(DIFFICULTIES)


def removal_count(difficulty: str) -> int:
    """
    Returns how many cells to clear for 'difficulty' (case-insensitive).
    Unknown labels raise InvalidDifficulty instead of falling back to a default.
    """
    key = str(difficulty).strip().lower()
    if key not in DIFFICULTIES:
        raise InvalidDifficulty(difficulty, labels())
    return DIFFICULTIES[key]
