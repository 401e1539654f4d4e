# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist_bot.cli.bootstrap import create_initial_state
from tasklist_bot.core.state import AppState
from tasklist_bot.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and connectors.

    A SimpleNamespace rather than the real config keeps tests independent of
    the environment and any local .env file.
    """
    return SimpleNamespace(
        app_name="tasklist-bot",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        reply_unknown=False,
        command_aliases={"menu": ["/start"]},
        console_enabled=True,
        console_user_id="console",
        matrix_enabled=False,
        matrix_homeserver="",
        matrix_user_id="",
        matrix_password="",
        matrix_rooms=[],
        matrix_store_path=tmp_path / "matrix_store",
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """Fully wired AppState (shared locks, store, registry, machine, dispatcher)."""
    return create_initial_state(settings=settings)


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore()
