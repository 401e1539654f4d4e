# tests/test_bootstrap.py

from __future__ import annotations

import logging

import pytest

from tasklist_bot.cli.bootstrap import log_state_summary
from tasklist_bot.core.state import AppState

from .fakes import send


def test_state_summary_counts_lists_and_pending_sessions(
    state: AppState, caplog: pytest.LogCaptureFixture
) -> None:
    send(state, "add", user_id="alice")
    send(state, "milk", user_id="alice")
    send(state, "add", user_id="bob")
    send(state, "delete", user_id="carol")  # empty list: flow ends at once

    with caplog.at_level(logging.INFO, logger="tasklist_bot"):
        log_state_summary(state, when="shutdown")

    messages = [r.message for r in caplog.records if r.name == "tasklist_bot.cli.bootstrap"]
    assert messages == ["State summary (shutdown): users_with_tasks=1 pending_sessions=1"]
