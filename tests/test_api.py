import pytest
from fastapi.testclient import TestClient

from sudoku_app import api, tasks
from sudoku_app.difficulty import DIFFICULTIES
from sudoku_app.errors import GenerationCancelled, GenerationExhausted


@pytest.fixture
def client():
    return TestClient(api.app)


def test_health(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "difficulties": list(DIFFICULTIES)}


def test_difficulties(client):
    assert client.get("/difficulties").json() == DIFFICULTIES


def test_generate_with_seed_is_reproducible(client):
    first = client.post("/generate", json={"difficulty": "Easy", "seed": 7})
    second = client.post("/generate", json={"difficulty": "easy", "seed": 7})
    assert first.status_code == 200
    body = first.json()
    assert body == second.json()
    assert body["difficulty"] == "easy"
    assert body["removals"] == 25
    assert sum(v == 0 for row in body["puzzle"] for v in row) == 25


def test_generate_unknown_difficulty(client):
    resp = client.post("/generate", json={"difficulty": "nightmare"})
    assert resp.status_code == 400
    assert "nightmare" in resp.json()["detail"]


def test_generate_exhausted_maps_to_503(client, monkeypatch):
    def exhausted(difficulty, rng=None, cancel_event=None, max_attempts=1):
        raise GenerationExhausted(difficulty, 55, attempts=max_attempts)

    monkeypatch.setattr(tasks, "generate", exhausted)
    monkeypatch.setenv("SUDOKU_MAX_ATTEMPTS", "2")
    resp = client.post("/generate", json={"difficulty": "difficult"})
    assert resp.status_code == 503
    assert "2 attempt" in resp.json()["detail"]


def test_generate_timeout_cancels_search(client, monkeypatch):
    seen = []

    def slow(difficulty, rng=None, cancel_event=None, max_attempts=1):
        seen.append(cancel_event)
        if cancel_event.wait(timeout=10):
            raise GenerationCancelled("cancelled")
        raise AssertionError("search was never cancelled")

    monkeypatch.setattr(tasks, "generate", slow)
    monkeypatch.setenv("SUDOKU_TIMEOUT_SECONDS", "0.2")
    resp = client.post("/generate", json={"difficulty": "easy"})
    assert resp.status_code == 504
    assert "0.2s" in resp.json()["detail"]
    assert seen and seen[0].is_set()


def test_timeout_env(monkeypatch):
    monkeypatch.delenv("SUDOKU_TIMEOUT_SECONDS", raising=False)
    assert api._timeout_seconds() == 30.0
    monkeypatch.setenv("SUDOKU_TIMEOUT_SECONDS", "2.5")
    assert api._timeout_seconds() == 2.5
    monkeypatch.setenv("SUDOKU_TIMEOUT_SECONDS", "-1")
    assert api._timeout_seconds() == 30.0
    monkeypatch.setenv("SUDOKU_TIMEOUT_SECONDS", "soon")
    assert api._timeout_seconds() == 30.0


def test_max_attempts_env(monkeypatch):
    monkeypatch.delenv("SUDOKU_MAX_ATTEMPTS", raising=False)
    assert api._max_attempts() == 3
    monkeypatch.setenv("SUDOKU_MAX_ATTEMPTS", "0")
    assert api._max_attempts() == 1
    monkeypatch.setenv("SUDOKU_MAX_ATTEMPTS", "lots")
    assert api._max_attempts() == 3


def test_validate(client):
    grid = [[0] * 9 for _ in range(9)]
    assert client.post("/validate", json={"grid": grid}).json() == {"valid": True, "complete": False}
    grid[0][0] = grid[0][1] = 1
    assert client.post("/validate", json={"grid": grid}).json()["valid"] is False


def test_validate_rejects_malformed_grid(client):
    assert client.post("/validate", json={"grid": [[0] * 9]}).status_code == 422
    bad = [[0] * 9 for _ in range(9)]
    bad[2][2] = 12
    assert client.post("/validate", json={"grid": bad}).status_code == 422


def test_check(client, generated):
    puzzle, solution = generated["easy"]
    board = [row[:] for row in puzzle]
    empty = [(r, c) for r in range(9) for c in range(9) if puzzle[r][c] == 0]
    r, c = empty[0]
    board[r][c] = solution[r][c] % 9 + 1

    body = client.post("/check", json={"puzzle": puzzle, "board": board, "solution": solution}).json()
    assert body == {"solved": False, "remaining": 24, "wrong_cells": [[r, c]]}

    body = client.post("/check", json={"puzzle": puzzle, "board": solution, "solution": solution}).json()
    assert body == {"solved": True, "remaining": 0, "wrong_cells": []}


def test_check_rejects_changed_clue(client, generated):
    puzzle, solution = generated["easy"]
    board = [row[:] for row in puzzle]
    r, c = next((r, c) for r in range(9) for c in range(9) if puzzle[r][c])
    board[r][c] = 0
    resp = client.post("/check", json={"puzzle": puzzle, "board": board, "solution": solution})
    assert resp.status_code == 400
