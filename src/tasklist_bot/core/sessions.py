# src/tasklist_bot/core/sessions.py

"""Per-user conversation state (what the next free-text message means)."""

from __future__ import annotations

import logging
from collections.abc import Hashable

from ..tasks.task_models import IDLE_STATE, Action, SessionState
from .locks import KeyedLocks

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    Maps user ids to their SessionState.

    Only non-idle states are stored; a lookup for an unknown user returns IDLE.
    """

    def __init__(self, locks: KeyedLocks | None = None) -> None:
        self._locks = locks or KeyedLocks()
        self._states: dict[Hashable, SessionState] = {}

    def get_state(self, user_id: Hashable) -> SessionState:
        with self._locks.hold(user_id):
            return self._states.get(user_id, IDLE_STATE)

    def set_state(self, user_id: Hashable, action: Action, pending_index: int | None = None) -> None:
        if action is Action.IDLE:
            self.reset_state(user_id)
            return
        with self._locks.hold(user_id):
            self._states[user_id] = SessionState(action=action, pending_index=pending_index)
        logger.debug("Session user=%s -> %s (pending_index=%s)", user_id, action.value, pending_index)

    def reset_state(self, user_id: Hashable) -> None:
        with self._locks.hold(user_id):
            prev = self._states.pop(user_id, None)
        if prev is not None:
            logger.debug("Session user=%s reset from %s", user_id, prev.action.value)

    def active_count(self) -> int:
        return len(self._states)
