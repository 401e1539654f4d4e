# src/tasklist_bot/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Action(StrEnum):
    """
    What a user's next free-text message means.

    IDLE is never stored: a missing registry entry is IDLE.
    """

    IDLE = "idle"
    AWAITING_NEW_TASKS = "awaiting_new_tasks"
    AWAITING_DELETE_INDEX = "awaiting_delete_index"
    AWAITING_EDIT_INDEX = "awaiting_edit_index"
    AWAITING_EDIT_TEXT = "awaiting_edit_text"


@dataclass(slots=True)
class Task:
    text: str


@dataclass(slots=True, frozen=True)
class SessionState:
    action: Action = Action.IDLE
    # 1-based index captured during the edit flow.
    pending_index: int | None = None

    @property
    def is_idle(self) -> bool:
        return self.action is Action.IDLE


IDLE_STATE = SessionState()
