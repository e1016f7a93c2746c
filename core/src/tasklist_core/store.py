from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace

from tasklist_core.errors import StoreBusy, TaskOutOfRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Task:
    description: str
    done: bool = False


class TaskStore:
    """In-memory, lock-guarded sequence of tasks.

    Every public method takes the single store lock for its whole duration,
    so operations never interleave. The lock is not reentrant; methods must
    not call each other while holding it.

    Mutating methods return a snapshot taken under the same lock acquisition,
    so a caller always sees exactly the state its own mutation produced.
    """

    def __init__(self, *, lock_timeout_s: float | None = None) -> None:
        self._tasks: list[Task] = []
        self._lock = threading.Lock()
        self._lock_timeout_s = lock_timeout_s

    @contextmanager
    def _locked(self) -> Iterator[list[Task]]:
        timeout = -1 if self._lock_timeout_s is None else self._lock_timeout_s
        if not self._lock.acquire(timeout=timeout):
            logger.warning("Task list lock not acquired within %ss", self._lock_timeout_s)
            raise StoreBusy(self._lock_timeout_s or 0.0)
        try:
            yield self._tasks
        finally:
            self._lock.release()

    def __len__(self) -> int:
        with self._locked() as tasks:
            return len(tasks)

    def list(self) -> list[Task]:
        with self._locked() as tasks:
            return list(tasks)

    def append(self, description: str) -> list[Task]:
        text = (description or "").strip()
        with self._locked() as tasks:
            if text:
                tasks.append(Task(description=text))
                logger.debug("Appended task at position %d", len(tasks) - 1)
            else:
                logger.debug("Skipped empty task description")
            return list(tasks)

    def remove_at(self, position: int) -> list[Task]:
        with self._locked() as tasks:
            if not 0 <= position < len(tasks):
                logger.warning("Delete of task %d rejected; %d tasks", position, len(tasks))
                raise TaskOutOfRange(position, len(tasks))
            del tasks[position]
            logger.debug("Removed task at position %d", position)
            return list(tasks)

    def mark_done_at(self, position: int) -> list[Task]:
        with self._locked() as tasks:
            if 0 <= position < len(tasks):
                tasks[position] = replace(tasks[position], done=True)
                logger.debug("Marked task %d done", position)
            else:
                logger.debug("Ignored check of task %d; %d tasks", position, len(tasks))
            return list(tasks)
