# src/tasklist_bot/core/errors.py

"""
Error taxonomy of the task-list core.

Every error here is recoverable: the state machine catches it and turns
`user_message` into a reply. None of them should escape a connector.
"""

from __future__ import annotations


class TaskListError(Exception):
    """Base class for user-recoverable task-list errors."""

    default_message = "Something went wrong. Try again."

    def __init__(self, user_message: str | None = None) -> None:
        self.user_message = user_message or self.default_message
        super().__init__(self.user_message)


class EmptyInputError(TaskListError):
    """No usable text was supplied to add/edit."""

    default_message = "The message is empty. Try again."


class EmptyTextError(EmptyInputError):
    """Edit text strips to nothing."""

    default_message = "Task text cannot be empty. Try again."


class IndexParseError(TaskListError, ValueError):
    """Input is not a positive integer where a task number was expected."""

    default_message = "Invalid task number. Try again."


class IndexOutOfBoundsError(TaskListError, IndexError):
    """Well-formed task number outside [1, len(list)]."""

    default_message = "There is no task with that number."

    def __init__(self, index: int, size: int, user_message: str | None = None) -> None:
        self.index = index
        self.size = size
        super().__init__(user_message)


class EmptyListError(TaskListError):
    """Delete/edit requested while the user has no tasks."""

    default_message = "The task list is empty. Add some tasks first."
