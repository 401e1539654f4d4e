# src/tasklist_bot/core/dispatcher.py

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Mapping

from . import texts
from .locks import KeyedLocks
from .machine import SessionStateMachine
from .ports import Reply

CommandHandler = Callable[[Hashable], list[Reply]]

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """
    Routes inbound messages: top-level commands vs. input for a pending state.

    Matching is exact and case-sensitive on the raw text. A command always
    resets the user's session first (explicit re-entry), then runs.
    """

    def __init__(
        self,
        machine: SessionStateMachine,
        locks: KeyedLocks,
        *,
        reply_unknown: bool = False,
    ) -> None:
        self._machine = machine
        self._locks = locks
        self._reply_unknown = reply_unknown
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        self._handlers[name] = handler
        self._help[name] = help_text
        for alias in aliases:
            self.add_alias(name, alias)

    def add_alias(self, name: str, alias: str) -> None:
        handler = self._handlers.get(name)
        if handler is None:
            raise KeyError(f"Cannot alias unknown command {name!r}")
        if not alias:
            return
        self._handlers[alias] = handler

    def is_command(self, text: str) -> bool:
        return text in self._handlers

    def commands(self) -> list[str]:
        return list(self._help)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        return "\n".join(lines)

    def on_message(self, user_id: Hashable, text: str) -> list[Reply]:
        """
        Handle one inbound message and return the replies for it.

        The user's lock is held for the whole message.
        """
        text = text or ""
        with self._locks.hold(user_id):
            if self.is_command(text):
                logger.debug("Command %r user=%s", text, user_id)
                self._machine.reset(user_id)
                return self._handlers[text](user_id)

            replies = self._machine.handle_input(user_id, text)
            if replies:
                return replies

        # IDLE and not a command.
        if self._reply_unknown:
            return [self._machine.menu(user_id, f"{texts.UNKNOWN_COMMAND} {texts.MENU_PROMPT}")]
        logger.debug("Ignoring free text at idle user=%s", user_id)
        return []


def build_dispatcher(
    machine: SessionStateMachine,
    locks: KeyedLocks,
    *,
    reply_unknown: bool = False,
    aliases: Mapping[str, list[str]] | None = None,
) -> CommandDispatcher:
    """Dispatcher with the standard vocabulary plus any configured aliases."""
    d = CommandDispatcher(machine, locks, reply_unknown=reply_unknown)
    d.register(texts.CMD_ADD, machine.begin_add, help_text="Add tasks, one per line.")
    d.register(texts.CMD_LIST, machine.show_list, help_text="Show your task list.")
    d.register(texts.CMD_CLEAR, machine.clear, help_text="Remove all tasks.")
    d.register(texts.CMD_DELETE, machine.begin_delete, help_text="Delete a task by number.")
    d.register(texts.CMD_EDIT, machine.begin_edit, help_text="Edit a task by number.")
    d.register(texts.CMD_MENU, machine.show_menu, help_text="Back to the main menu.")

    for name, extra in (aliases or {}).items():
        if name not in d.commands():
            logger.warning("Alias for unknown command %r ignored", name)
            continue
        for alias in extra:
            d.add_alias(name, alias)
    return d
