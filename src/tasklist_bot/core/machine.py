# src/tasklist_bot/core/machine.py

"""
Per-user session state machine.

Each flow is a short prompt/response chain:

    add    -> AWAITING_NEW_TASKS                        -> IDLE
    delete -> AWAITING_DELETE_INDEX                     -> IDLE
    edit   -> AWAITING_EDIT_INDEX -> AWAITING_EDIT_TEXT -> IDLE

Key invariants:
- a terminal outcome (success, or an error that ends the flow) resets the session to IDLE,
- parse errors and out-of-range numbers keep the state, so the user can simply retry,
- the edit index captured in AWAITING_EDIT_INDEX is re-validated when the new text arrives,
  because the list may have changed between the two messages.

Every public method runs under the user's lock, so validate-then-mutate is atomic
with respect to other messages of the same user.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Hashable

from ..tasks.task_models import Action, SessionState
from ..tasks.task_store import TaskStore
from . import texts
from .errors import (
    EmptyInputError,
    EmptyListError,
    EmptyTextError,
    IndexOutOfBoundsError,
    IndexParseError,
)
from .locks import KeyedLocks
from .ports import Reply
from .sessions import SessionRegistry

logger = logging.getLogger(__name__)

_INDEX_RE = re.compile(r"[+-]?\d+", re.ASCII)

InputHandler = Callable[[Hashable, str, SessionState], list[Reply]]


def parse_index(text: str) -> int:
    """Parse a 1-based task number; raises IndexParseError for anything else."""
    raw = (text or "").strip()
    if not _INDEX_RE.fullmatch(raw):
        raise IndexParseError()
    value = int(raw)
    if value < 1:
        raise IndexParseError()
    return value


class SessionStateMachine:
    def __init__(
        self,
        task_store: TaskStore,
        sessions: SessionRegistry,
        locks: KeyedLocks,
        *,
        menu_options: tuple[str, ...] = texts.MENU_OPTIONS,
    ) -> None:
        self._store = task_store
        self._sessions = sessions
        self._locks = locks
        self._menu_options = menu_options
        self._input_handlers: dict[Action, InputHandler] = {
            Action.AWAITING_NEW_TASKS: self._on_new_tasks,
            Action.AWAITING_DELETE_INDEX: self._on_delete_index,
            Action.AWAITING_EDIT_INDEX: self._on_edit_index,
            Action.AWAITING_EDIT_TEXT: self._on_edit_text,
        }

    # ---- reply helpers ----

    @staticmethod
    def _reply(user_id: Hashable, text: str) -> Reply:
        return Reply(user_id=user_id, text=text)

    def menu(self, user_id: Hashable, text: str = texts.MENU_PROMPT) -> Reply:
        return Reply(user_id=user_id, text=text, options=self._menu_options)

    def _finish(self, user_id: Hashable, *replies: Reply) -> list[Reply]:
        self._sessions.reset_state(user_id)
        return list(replies)

    def _require_tasks(self, user_id: Hashable) -> None:
        if not self._store.has_tasks(user_id):
            raise EmptyListError()

    # ---- entry operations (top-level commands) ----

    def reset(self, user_id: Hashable) -> None:
        with self._locks.hold(user_id):
            self._sessions.reset_state(user_id)

    def show_menu(self, user_id: Hashable) -> list[Reply]:
        with self._locks.hold(user_id):
            return self._finish(user_id, self.menu(user_id))

    def begin_add(self, user_id: Hashable) -> list[Reply]:
        with self._locks.hold(user_id):
            self._sessions.set_state(user_id, Action.AWAITING_NEW_TASKS)
            return [self._reply(user_id, texts.ADD_PROMPT)]

    def show_list(self, user_id: Hashable) -> list[Reply]:
        with self._locks.hold(user_id):
            items = self._store.list_tasks(user_id)
        return [self._reply(user_id, texts.format_task_list(items))]

    def clear(self, user_id: Hashable) -> list[Reply]:
        with self._locks.hold(user_id):
            self._store.clear_tasks(user_id)
            logger.info("Task list cleared user=%s", user_id)
            return self._finish(user_id, self._reply(user_id, texts.CLEARED), self.menu(user_id))

    def begin_delete(self, user_id: Hashable) -> list[Reply]:
        return self._begin_index_flow(user_id, Action.AWAITING_DELETE_INDEX, texts.DELETE_PROMPT)

    def begin_edit(self, user_id: Hashable) -> list[Reply]:
        return self._begin_index_flow(user_id, Action.AWAITING_EDIT_INDEX, texts.EDIT_PROMPT)

    def _begin_index_flow(self, user_id: Hashable, action: Action, prompt: str) -> list[Reply]:
        with self._locks.hold(user_id):
            try:
                self._require_tasks(user_id)
            except EmptyListError as e:
                return self._finish(user_id, self._reply(user_id, e.user_message))
            self._sessions.set_state(user_id, action)
            return [self._reply(user_id, prompt)]

    # ---- free-text input for a pending state ----

    def handle_input(self, user_id: Hashable, text: str) -> list[Reply]:
        """
        Interpret `text` according to the user's current state.

        Returns an empty list when the user is IDLE (nothing is pending).
        """
        with self._locks.hold(user_id):
            state = self._sessions.get_state(user_id)
            handler = self._input_handlers.get(state.action)
            if handler is None:
                return []
            return handler(user_id, text, state)

    def _on_new_tasks(self, user_id: Hashable, text: str, state: SessionState) -> list[Reply]:
        try:
            count = self._store.add_tasks(user_id, text)
        except EmptyInputError as e:
            return self._finish(user_id, self._reply(user_id, e.user_message), self.menu(user_id))

        logger.info("Tasks added user=%s count=%d", user_id, count)
        return self._finish(
            user_id,
            self._reply(user_id, texts.ADDED.format(count=count)),
            self.menu(user_id),
        )

    def _on_delete_index(self, user_id: Hashable, text: str, state: SessionState) -> list[Reply]:
        try:
            self._require_tasks(user_id)
        except EmptyListError as e:
            return self._finish(user_id, self._reply(user_id, e.user_message))

        try:
            index = parse_index(text)
            self._store.delete_task(user_id, index)
        except (IndexParseError, IndexOutOfBoundsError) as e:
            # Recoverable: stay in AWAITING_DELETE_INDEX.
            return [self._reply(user_id, e.user_message)]

        logger.info("Task deleted user=%s index=%d", user_id, index)
        return self._finish(
            user_id,
            self._reply(user_id, texts.DELETED.format(index=index)),
            self.menu(user_id),
        )

    def _on_edit_index(self, user_id: Hashable, text: str, state: SessionState) -> list[Reply]:
        try:
            self._require_tasks(user_id)
        except EmptyListError as e:
            return self._finish(user_id, self._reply(user_id, e.user_message))

        try:
            index = parse_index(text)
            size = self._store.count_tasks(user_id)
            if index > size:
                raise IndexOutOfBoundsError(index, size)
        except (IndexParseError, IndexOutOfBoundsError) as e:
            return [self._reply(user_id, e.user_message)]

        self._sessions.set_state(user_id, Action.AWAITING_EDIT_TEXT, pending_index=index)
        return [self._reply(user_id, texts.EDIT_TEXT_PROMPT.format(index=index))]

    def _on_edit_text(self, user_id: Hashable, text: str, state: SessionState) -> list[Reply]:
        index = state.pending_index
        try:
            self._require_tasks(user_id)
        except EmptyListError as e:
            return self._finish(user_id, self._reply(user_id, e.user_message))

        if index is None:
            self._sessions.set_state(user_id, Action.AWAITING_EDIT_INDEX)
            return [self._reply(user_id, texts.EDIT_PROMPT)]

        try:
            task = self._store.edit_task(user_id, index, text)
        except IndexOutOfBoundsError:
            # The list shrank after the index was captured: ask for a new number.
            logger.info("Stale edit index user=%s index=%s", user_id, index)
            self._sessions.set_state(user_id, Action.AWAITING_EDIT_INDEX)
            return [self._reply(user_id, texts.EDIT_TARGET_GONE.format(index=index))]
        except EmptyTextError as e:
            return [self._reply(user_id, e.user_message)]

        logger.info("Task edited user=%s index=%d", user_id, index)
        items = self._store.list_tasks(user_id)
        return self._finish(
            user_id,
            self._reply(user_id, texts.EDITED.format(text=task.text)),
            self._reply(user_id, texts.format_task_list(items)),
        )
