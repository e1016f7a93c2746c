from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from tasklist_core.store import Task


@dataclass(frozen=True)
class TaskView:
    """A task as handed to templates.

    `id` is the task's position at projection time. It is not durable: any
    removal before the client sends it back shifts later positions down.
    """

    id: int
    description: str
    done: bool


def project(tasks: Sequence[Task]) -> list[TaskView]:
    return [
        TaskView(id=index, description=task.description, done=task.done)
        for index, task in enumerate(tasks)
    ]
