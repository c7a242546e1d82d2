# sudoku_app/tasks.py
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from .difficulty import removal_count
from .errors import GenerationCancelled
from .sudoku_generator import generate

log = logging.getLogger(__name__)


class GenerationTask:
    """A cancellable unit of work producing one (puzzle, solution) pair.

    ``on_done`` receives ``(puzzle, solution)`` and ``on_error`` the raised
    exception; both run on the worker thread and are skipped once the task
    has been cancelled. An unknown difficulty raises
    InvalidDifficulty from the constructor.
    """

    def __init__(
        self,
        difficulty: str,
        on_done: Optional[Callable] = None,
        on_error: Optional[Callable] = None,
        rng=None,
        max_attempts: int = 3,
    ):
        removal_count(difficulty)
        self.difficulty = difficulty
        self.on_done = on_done
        self.on_error = on_error
        self.rng = rng
        self.max_attempts = max_attempts
        self._cancel_event = threading.Event()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._future: Optional[Future] = None

    def start(self) -> "GenerationTask":
        if self._future is not None:
            raise RuntimeError("GenerationTask can only be started once.")
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sudoku-gen")
        self._future = self._executor.submit(self._run)
        self._executor.shutdown(wait=False)
        return self

    def _run(self):
        try:
            result = generate(
                self.difficulty,
                rng=self.rng,
                cancel_event=self._cancel_event,
                max_attempts=self.max_attempts,
            )
        except GenerationCancelled:
            log.debug("Generation for '%s' cancelled", self.difficulty)
            raise
        except Exception as exc:
            if self.on_error is not None and not self.cancelled:
                self.on_error(exc)
            raise
        if self.on_done is not None and not self.cancelled:
            self.on_done(*result)
        return result

    def cancel(self) -> None:
        """Asks the search to stop at its next branch attempt."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def result(self, timeout: Optional[float] = None):
        """Blocks until the pair is ready and returns it, or re-raises the failure."""
        if self._future is None:
            raise RuntimeError("GenerationTask has not been started.")
        return self._future.result(timeout=timeout)
