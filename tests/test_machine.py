# tests/test_machine.py

from __future__ import annotations

import pytest

from tasklist_bot.core import texts
from tasklist_bot.core.errors import (
    EmptyListError,
    EmptyTextError,
    IndexOutOfBoundsError,
    IndexParseError,
)
from tasklist_bot.core.machine import parse_index
from tasklist_bot.core.state import AppState
from tasklist_bot.tasks.task_models import Action

from .fakes import reply_texts, send


def _action(state: AppState, user_id: str = "u1") -> Action:
    return state.sessions.get_state(user_id).action


@pytest.mark.parametrize(("raw", "expected"), [("1", 1), (" 7 ", 7), ("+3", 3), ("12\n", 12)])
def test_parse_index_valid(raw: str, expected: int) -> None:
    assert parse_index(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "0", "-1", "1.5", "1 2", "٣"])
def test_parse_index_invalid(raw: str) -> None:
    with pytest.raises(IndexParseError):
        parse_index(raw)


def test_add_then_delete_scenario(state: AppState) -> None:
    assert reply_texts(send(state, "add")) == [texts.ADD_PROMPT]
    assert _action(state) is Action.AWAITING_NEW_TASKS

    replies = send(state, "buy milk\nwalk dog")
    assert replies[0].text == "Tasks added: 2"
    assert replies[-1].text == texts.MENU_PROMPT
    assert replies[-1].options == texts.MENU_OPTIONS
    assert _action(state) is Action.IDLE
    assert state.task_store.list_tasks("u1") == [(1, "buy milk"), (2, "walk dog")]

    assert reply_texts(send(state, "delete")) == [texts.DELETE_PROMPT]
    assert _action(state) is Action.AWAITING_DELETE_INDEX

    replies = send(state, "1")
    assert replies[0].text == "Task #1 deleted."
    assert _action(state) is Action.IDLE
    assert state.task_store.list_tasks("u1") == [(1, "walk dog")]


def test_list_command(state: AppState) -> None:
    assert reply_texts(send(state, "list")) == [texts.LIST_EMPTY]

    state.task_store.add_tasks("u1", "a\nb")
    assert reply_texts(send(state, "list")) == ["Task list:\n1. a\n2. b"]
    assert _action(state) is Action.IDLE


def test_clear_command(state: AppState) -> None:
    state.task_store.add_tasks("u1", "a\nb")
    replies = send(state, "clear")
    assert replies[0].text == texts.CLEARED
    assert replies[1].options == texts.MENU_OPTIONS
    assert state.task_store.list_tasks("u1") == []
    assert _action(state) is Action.IDLE


@pytest.mark.parametrize("command", ["edit", "delete"])
def test_index_commands_on_empty_list(state: AppState, command: str) -> None:
    assert reply_texts(send(state, command)) == [EmptyListError.default_message]
    assert _action(state) is Action.IDLE


def test_add_reports_attempted_line_count(state: AppState) -> None:
    send(state, "add")
    replies = send(state, "a\n\nb")
    assert replies[0].text == "Tasks added: 3"
    assert state.task_store.list_tasks("u1") == [(1, "a"), (2, "b")]


def test_add_with_no_usable_lines_ends_flow(state: AppState) -> None:
    send(state, "add")
    replies = send(state, "  \n\n ")
    assert replies[0].text.startswith("Nothing to add")
    assert _action(state) is Action.IDLE
    assert state.task_store.list_tasks("u1") == []


def test_delete_bad_input_keeps_state(state: AppState) -> None:
    state.task_store.add_tasks("u1", "a\nb")
    send(state, "delete")

    assert reply_texts(send(state, "abc")) == [IndexParseError.default_message]
    assert _action(state) is Action.AWAITING_DELETE_INDEX

    assert reply_texts(send(state, "0")) == [IndexParseError.default_message]
    assert _action(state) is Action.AWAITING_DELETE_INDEX

    assert reply_texts(send(state, "3")) == [IndexOutOfBoundsError.default_message]
    assert _action(state) is Action.AWAITING_DELETE_INDEX

    assert send(state, " 2 ")[0].text == "Task #2 deleted."
    assert _action(state) is Action.IDLE
    assert state.task_store.list_tasks("u1") == [(1, "a")]


def test_edit_flow(state: AppState) -> None:
    state.task_store.add_tasks("u1", "a\nb\nc")

    assert reply_texts(send(state, "edit")) == [texts.EDIT_PROMPT]
    assert _action(state) is Action.AWAITING_EDIT_INDEX

    assert reply_texts(send(state, "x")) == [IndexParseError.default_message]
    assert reply_texts(send(state, "4")) == [IndexOutOfBoundsError.default_message]
    assert _action(state) is Action.AWAITING_EDIT_INDEX

    assert reply_texts(send(state, "2")) == ["Enter the new text for task #2:"]
    st = state.sessions.get_state("u1")
    assert st.action is Action.AWAITING_EDIT_TEXT
    assert st.pending_index == 2

    assert reply_texts(send(state, "   ")) == [EmptyTextError.default_message]
    assert _action(state) is Action.AWAITING_EDIT_TEXT

    replies = send(state, "B2")
    assert reply_texts(replies) == ["Task edited: B2", "Task list:\n1. a\n2. B2\n3. c"]
    assert _action(state) is Action.IDLE


def test_edit_index_revalidated_when_text_arrives(state: AppState) -> None:
    state.task_store.add_tasks("u1", "a\nb\nc")
    send(state, "edit")
    send(state, "3")

    # Concurrent change between the two messages of the flow.
    state.task_store.delete_task("u1", 1)

    replies = send(state, "new text")
    assert reply_texts(replies) == [texts.EDIT_TARGET_GONE.format(index=3)]
    assert _action(state) is Action.AWAITING_EDIT_INDEX
    assert state.task_store.list_tasks("u1") == [(1, "b"), (2, "c")]

    send(state, "2")
    send(state, "C")
    assert state.task_store.list_tasks("u1") == [(1, "b"), (2, "C")]
    assert _action(state) is Action.IDLE


def test_list_emptied_during_pending_prompt_ends_flow(state: AppState) -> None:
    state.task_store.add_tasks("u1", "a")
    send(state, "delete")
    state.task_store.clear_tasks("u1")

    assert reply_texts(send(state, "1")) == [EmptyListError.default_message]
    assert _action(state) is Action.IDLE


def test_edit_text_after_list_cleared(state: AppState) -> None:
    state.task_store.add_tasks("u1", "a")
    send(state, "edit")
    send(state, "1")
    state.task_store.clear_tasks("u1")

    assert reply_texts(send(state, "x")) == [EmptyListError.default_message]
    assert _action(state) is Action.IDLE


def test_command_resets_pending_flow(state: AppState) -> None:
    state.task_store.add_tasks("u1", "a")
    send(state, "delete")

    assert reply_texts(send(state, "list")) == ["Task list:\n1. a"]
    assert _action(state) is Action.IDLE

    # "1" is now free text at IDLE: ignored, nothing deleted.
    assert send(state, "1") == []
    assert state.task_store.count_tasks("u1") == 1


def test_command_words_are_commands_even_when_adding(state: AppState) -> None:
    send(state, "add")
    replies = send(state, "list")
    assert reply_texts(replies) == [texts.LIST_EMPTY]
    assert _action(state) is Action.IDLE


def test_handle_input_at_idle_returns_nothing(state: AppState) -> None:
    assert state.machine.handle_input("u1", "hello") == []


def test_menu_resets_state(state: AppState) -> None:
    send(state, "add")
    replies = send(state, "menu")
    assert len(replies) == 1
    assert replies[0].text == texts.MENU_PROMPT
    assert replies[0].options == texts.MENU_OPTIONS
    assert _action(state) is Action.IDLE
