# sudoku_app/api.py
import logging
import os
import random
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, field_validator

from .difficulty import DIFFICULTIES
from .errors import GenerationCancelled, GenerationExhausted, InvalidDifficulty
from .sudoku_puzzle import SudokuPuzzle
from .tasks import GenerationTask
from .validity import is_complete, is_valid_sudoku

log = logging.getLogger(__name__)

Grid = List[List[int]]


def _check_grid(grid: Grid) -> Grid:
    if len(grid) != 9 or any(len(row) != 9 for row in grid):
        raise ValueError("grid must be 9 rows of 9 cells")
    if any(not 0 <= v <= 9 for row in grid for v in row):
        raise ValueError("cells must hold digits 0-9 (0 = empty)")
    return grid


# --------- Request/response models ---------

class GenerateReq(BaseModel):
    difficulty: str = Field(default="easy", description="One of the labels from /difficulties")
    seed: Optional[int] = Field(default=None, description="Seed for a reproducible puzzle")


class GenerateResp(BaseModel):
    difficulty: str
    removals: int
    puzzle: Grid
    solution: Grid


class ValidateReq(BaseModel):
    grid: Grid

    @field_validator("grid")
    @classmethod
    def check_grid_shape(cls, value):
        return _check_grid(value)


class ValidateResp(BaseModel):
    valid: bool
    complete: bool


class CheckReq(BaseModel):
    puzzle: Grid = Field(description="Grid as generated, clues only")
    board: Grid = Field(description="Grid with the player's entries")
    solution: Grid

    @field_validator("puzzle", "board", "solution")
    @classmethod
    def check_grid_shape(cls, value):
        return _check_grid(value)


class CheckResp(BaseModel):
    solved: bool
    remaining: int
    wrong_cells: List[Tuple[int, int]]


class HealthResp(BaseModel):
    status: str
    difficulties: List[str]


# --------- App ---------
app = FastAPI(title="Sudoku Generator", version="1.0.0", docs_url="/docs", redoc_url="/redoc")


# --------- Helpers ---------
def _max_attempts() -> int:
    """
    Retries after an exhausted carving search; SUDOKU_MAX_ATTEMPTS overrides the default.
    """
    try:
        return max(1, int(os.getenv("SUDOKU_MAX_ATTEMPTS", "3")))
    except ValueError:
        log.warning("Ignoring non-integer SUDOKU_MAX_ATTEMPTS=%r", os.getenv("SUDOKU_MAX_ATTEMPTS"))
        return 3


def _timeout_seconds() -> float:
    """
    Time allowed for one /generate request; SUDOKU_TIMEOUT_SECONDS overrides the default.
    """
    try:
        value = float(os.getenv("SUDOKU_TIMEOUT_SECONDS", "30"))
    except ValueError:
        log.warning("Ignoring non-numeric SUDOKU_TIMEOUT_SECONDS=%r", os.getenv("SUDOKU_TIMEOUT_SECONDS"))
        return 30.0
    return value if value > 0 else 30.0


# --------- Endpoints ---------

@app.get("/", response_model=HealthResp, tags=["system"])
def root():
    """Service health."""
    return HealthResp(status="ok", difficulties=list(DIFFICULTIES))


@app.get("/difficulties", tags=["system"])
def difficulties() -> Dict[str, int]:
    """Cells removed per difficulty label."""
    return dict(DIFFICULTIES)


@app.post("/generate", response_model=GenerateResp, tags=["generate"])
def generate_puzzle(req: GenerateReq):
    """
    Returns a puzzle with a unique solution, and that solution.
    Generation is cancelled once SUDOKU_TIMEOUT_SECONDS have passed.
    """
    rng = random.Random(req.seed) if req.seed is not None else None
    timeout = _timeout_seconds()
    try:
        task = GenerationTask(req.difficulty, rng=rng, max_attempts=_max_attempts()).start()
        puzzle, solution = task.result(timeout=timeout)
    except InvalidDifficulty as e:
        raise HTTPException(status_code=400, detail=str(e))
    except GenerationExhausted as e:
        raise HTTPException(status_code=503, detail=str(e))
    except (FutureTimeout, GenerationCancelled):
        task.cancel()
        raise HTTPException(status_code=504, detail=f"Generation took longer than {timeout:g}s.")
    label = req.difficulty.strip().lower()
    return GenerateResp(difficulty=label, removals=DIFFICULTIES[label], puzzle=puzzle, solution=solution)


@app.post("/validate", response_model=ValidateResp, tags=["check"])
def validate(req: ValidateReq):
    """No repeated digit in any row, column or box; empty cells allowed."""
    return ValidateResp(valid=is_valid_sudoku(req.grid), complete=is_complete(req.grid))


@app.post("/check", response_model=CheckResp, tags=["check"])
def check(req: CheckReq):
    """
    Compares the player's board with the solution.
    """
    game = SudokuPuzzle(req.puzzle, req.solution)
    for (r, c) in sorted(game.givens):
        if req.board[r][c] != req.puzzle[r][c]:
            raise HTTPException(status_code=400, detail=f"Clue at ({r}, {c}) was changed.")
    game.board = [row[:] for row in req.board]
    return CheckResp(solved=game.is_solved(), remaining=game.remaining(), wrong_cells=game.wrong_cells())
