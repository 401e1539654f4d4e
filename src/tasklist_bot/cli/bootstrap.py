# src/tasklist_bot/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires store, session registry, state machine and dispatcher into AppState
  around one shared KeyedLocks instance.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.dispatcher import build_dispatcher
from ..core.locks import KeyedLocks
from ..core.machine import SessionStateMachine
from ..core.sessions import SessionRegistry
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if getattr(settings, "matrix_enabled", False):
        settings.matrix_store_path.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    # One lock table for both maps: a user's list and session share a serialization domain.
    locks = KeyedLocks()
    task_store = TaskStore(locks)
    sessions = SessionRegistry(locks)
    machine = SessionStateMachine(task_store, sessions, locks)
    dispatcher = build_dispatcher(
        machine,
        locks,
        reply_unknown=bool(getattr(settings, "reply_unknown", False)),
        aliases=getattr(settings, "command_aliases", None),
    )
    logger.debug("Commands: %s", ", ".join(dispatcher.commands()))

    return AppState(
        settings=settings,
        locks=locks,
        task_store=task_store,
        sessions=sessions,
        machine=machine,
        dispatcher=dispatcher,
    )


def log_state_summary(state: AppState, *, when: str) -> None:
    """One INFO line with how many users hold a list or a pending prompt."""
    logger.info(
        "State summary (%s): users_with_tasks=%d pending_sessions=%d",
        when,
        len(state.task_store.users()),
        state.sessions.active_count(),
    )
