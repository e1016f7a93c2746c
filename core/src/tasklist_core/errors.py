from __future__ import annotations


class TasklistError(Exception):
    """Base class for request-scoped task list failures."""


class TaskOutOfRange(TasklistError):
    def __init__(self, position: int, length: int) -> None:
        super().__init__(f"Task index {position} out of range (have {length} tasks)")
        self.position = position
        self.length = length


class StoreBusy(TasklistError):
    def __init__(self, timeout_s: float) -> None:
        super().__init__(f"Task list is busy; lock not acquired within {timeout_s:g}s")
        self.timeout_s = timeout_s


class RenderError(TasklistError):
    """The template renderer could not produce output."""

    def __init__(self, view_name: str, message: str) -> None:
        super().__init__(message)
        self.view_name = view_name
        self.message = message
