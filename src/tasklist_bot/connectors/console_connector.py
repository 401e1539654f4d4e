# src/tasklist_bot/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core.ports import Reply
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def render_reply(reply: Reply) -> str:
    """Console rendering: reply text, then menu options as [label] on one line."""
    if not reply.options:
        return reply.text
    buttons = "  ".join(f"[{o}]" for o in reply.options)
    return f"{reply.text}\n{buttons}"


def run_console_loop(
    state: AppState,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    Interactive REPL acting as a single user (settings.console_user_id).

    One input line is one message. A literal "\\n" inside the line becomes a line
    break, so several tasks can be added at once ("milk\\nbread").
    """
    user_id = str(getattr(state.settings, "console_user_id", "console"))
    app_name = str(getattr(state.settings, "app_name", "tasklist-bot"))

    logger.info("Console connector started (user_id=%s).", user_id)
    write(f"[{_ts_local()}] [CONSOLE] {state.dispatcher.build_help()}\n"
          "Use /exit to quit.\n")

    for reply in state.machine.show_menu(user_id):
        write(f"[{_ts_local()}] <<< {app_name}: {render_reply(reply)}")

    while True:
        try:
            line = read_line(">>> You: ")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if line.strip().lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        try:
            replies = state.dispatcher.on_message(user_id, line.replace("\\n", "\n"))
        except Exception:
            logger.exception("Console message handler crashed.")
            write(f"[{_ts_local()}] Internal error while handling the message.")
            continue

        for reply in replies:
            write(f"[{_ts_local()}] <<< {app_name}: {render_reply(reply)}")

    logger.info("Console connector finished.")
