# src/tasklist_bot/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_store import TaskStore
from .dispatcher import CommandDispatcher
from .locks import KeyedLocks
from .machine import SessionStateMachine
from .sessions import SessionRegistry


@dataclass
class AppState:
    # Settings live on the state so connectors don't read global config.
    settings: Any

    locks: KeyedLocks
    task_store: TaskStore
    sessions: SessionRegistry
    machine: SessionStateMachine
    dispatcher: CommandDispatcher
