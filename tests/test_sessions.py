# tests/test_sessions.py

from __future__ import annotations

from tasklist_bot.core.sessions import SessionRegistry
from tasklist_bot.tasks.task_models import Action, SessionState


def test_unknown_user_is_idle() -> None:
    reg = SessionRegistry()
    st = reg.get_state("u1")
    assert st == SessionState()
    assert st.is_idle
    assert st.pending_index is None


def test_set_replaces_state_wholesale() -> None:
    reg = SessionRegistry()
    reg.set_state("u1", Action.AWAITING_EDIT_TEXT, pending_index=3)
    assert reg.get_state("u1") == SessionState(Action.AWAITING_EDIT_TEXT, 3)

    reg.set_state("u1", Action.AWAITING_DELETE_INDEX)
    assert reg.get_state("u1") == SessionState(Action.AWAITING_DELETE_INDEX, None)


def test_reset_and_idle_remove_the_entry() -> None:
    reg = SessionRegistry()
    reg.set_state("u1", Action.AWAITING_NEW_TASKS)
    reg.set_state("u2", Action.AWAITING_EDIT_INDEX)
    assert reg.active_count() == 2

    reg.reset_state("u1")
    reg.set_state("u2", Action.IDLE)
    assert reg.active_count() == 0
    assert reg.get_state("u1").is_idle
    assert reg.get_state("u2").is_idle

    # Resetting an unknown user is a no-op.
    reg.reset_state("ghost")
    assert reg.active_count() == 0
