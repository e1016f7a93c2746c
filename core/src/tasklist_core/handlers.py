from __future__ import annotations

from collections.abc import Sequence

from tasklist_core.render import LIST_VIEW, PAGE_VIEW, Renderer
from tasklist_core.store import Task, TaskStore
from tasklist_core.views import project


def _render(renderer: Renderer, view_name: str, tasks: Sequence[Task]) -> str:
    return renderer.render(view_name, {"tasks": project(tasks)})


def show_all(store: TaskStore, renderer: Renderer) -> str:
    return _render(renderer, PAGE_VIEW, store.list())


def add_task(store: TaskStore, renderer: Renderer, description: str) -> str:
    # Empty input is skipped silently; the fragment still reflects current state.
    return _render(renderer, LIST_VIEW, store.append(description))


def delete_task(store: TaskStore, renderer: Renderer, task_id: int) -> str:
    """Remove the task at `task_id`.

    Raises TaskOutOfRange when the position is invalid, unlike check_task.
    """

    return _render(renderer, LIST_VIEW, store.remove_at(task_id))


def check_task(store: TaskStore, renderer: Renderer, task_id: int) -> str:
    return _render(renderer, LIST_VIEW, store.mark_done_at(task_id))
