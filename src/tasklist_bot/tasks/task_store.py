# src/tasklist_bot/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Hashable

from ..core.errors import EmptyInputError, EmptyTextError, IndexOutOfBoundsError
from ..core.locks import KeyedLocks
from .task_models import Task

logger = logging.getLogger(__name__)


def split_task_lines(raw_text: str) -> list[str]:
    """Split input on "\\n" only, strip each line, drop the empty ones."""
    if not raw_text:
        return []
    return [line.strip() for line in raw_text.split("\n") if line.strip()]


class TaskStore:
    """
    In-memory per-user task lists.

    Lists are created lazily on the first add and removed entirely on clear,
    so "no list" and "empty list" read the same to callers.

    Thread-safety:
    - every public method runs under the user's lock from `locks`
    - pass the same KeyedLocks as the SessionRegistry to share one domain
    """

    def __init__(self, locks: KeyedLocks | None = None) -> None:
        self._locks = locks or KeyedLocks()
        self._lists: dict[Hashable, list[Task]] = {}
        logger.info("TaskStore ready (in-memory)")

    # ---- low-level helpers ----

    def _checked_index(self, user_id: Hashable, index: int) -> list[Task]:
        tasks = self._lists.get(user_id) or []
        if index < 1 or index > len(tasks):
            raise IndexOutOfBoundsError(index, len(tasks))
        return tasks

    # ---- public API ----

    def add_tasks(self, user_id: Hashable, raw_text: str) -> int:
        """
        Append the non-empty lines of `raw_text` in order.

        Returns the number of lines attempted, blank ones included
        ("a\\n\\nb" appends two tasks and reports 3).
        """
        lines = split_task_lines(raw_text)
        if not lines:
            raise EmptyInputError("Nothing to add: send at least one non-empty line.")
        attempted = len(raw_text.split("\n"))

        with self._locks.hold(user_id):
            tasks = self._lists.setdefault(user_id, [])
            tasks.extend(Task(text=line) for line in lines)
            logger.debug(
                "Tasks added user=%s attempted=%d appended=%d total=%d",
                user_id, attempted, len(lines), len(tasks),
            )
        return attempted

    def list_tasks(self, user_id: Hashable) -> list[tuple[int, str]]:
        with self._locks.hold(user_id):
            tasks = self._lists.get(user_id) or []
            return [(i, t.text) for i, t in enumerate(tasks, start=1)]

    def clear_tasks(self, user_id: Hashable) -> None:
        with self._locks.hold(user_id):
            removed = self._lists.pop(user_id, None)
        logger.debug("Tasks cleared user=%s removed=%d", user_id, len(removed or []))

    def delete_task(self, user_id: Hashable, index: int) -> Task:
        with self._locks.hold(user_id):
            tasks = self._checked_index(user_id, index)
            task = tasks.pop(index - 1)
            logger.debug("Task deleted user=%s index=%d left=%d", user_id, index, len(tasks))
            return task

    def edit_task(self, user_id: Hashable, index: int, new_text: str) -> Task:
        with self._locks.hold(user_id):
            tasks = self._checked_index(user_id, index)
            text = (new_text or "").strip()
            if not text:
                raise EmptyTextError()
            task = tasks[index - 1]
            task.text = text
            logger.debug("Task edited user=%s index=%d", user_id, index)
            return task

    def count_tasks(self, user_id: Hashable) -> int:
        with self._locks.hold(user_id):
            return len(self._lists.get(user_id) or [])

    def has_tasks(self, user_id: Hashable) -> bool:
        return self.count_tasks(user_id) > 0

    def users(self) -> list[Hashable]:
        """User ids that currently own a list (snapshot)."""
        return list(self._lists.copy())
