# src/tasklist_bot/core/texts.py

"""User-visible reply texts and the main-menu labels."""

from __future__ import annotations

CMD_ADD = "add"
CMD_LIST = "list"
CMD_CLEAR = "clear"
CMD_DELETE = "delete"
CMD_EDIT = "edit"
CMD_MENU = "menu"

MENU_OPTIONS: tuple[str, ...] = (CMD_ADD, CMD_LIST, CMD_CLEAR, CMD_DELETE, CMD_EDIT)

MENU_PROMPT = "Choose an action:"
UNKNOWN_COMMAND = "Command not understood."

ADD_PROMPT = "Enter your tasks, one per line:"
ADDED = "Tasks added: {count}"

LIST_EMPTY = "The task list is empty."
LIST_HEADER = "Task list:"

CLEARED = "All tasks have been removed."

DELETE_PROMPT = "Enter the number of the task to delete:"
DELETED = "Task #{index} deleted."

EDIT_PROMPT = "Enter the number of the task to edit:"
EDIT_TEXT_PROMPT = "Enter the new text for task #{index}:"
EDITED = "Task edited: {text}"
EDIT_TARGET_GONE = "Task #{index} no longer exists. Enter the number of the task to edit:"


def format_task_list(items: list[tuple[int, str]]) -> str:
    if not items:
        return LIST_EMPTY
    lines = [LIST_HEADER]
    for index, text in items:
        lines.append(f"{index}. {text}")
    return "\n".join(lines)
