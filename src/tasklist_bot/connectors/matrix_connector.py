# src/tasklist_bot/connectors/matrix_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from nio import MatrixRoom, RoomMessageText

from ..core.ports import OutboundMessenger, Reply
from ..core.state import AppState
from .matrix_client import create_matrix_client

logger = logging.getLogger(__name__)

MessageCallback = Callable[[MatrixRoom, RoomMessageText], Awaitable[None]]


def _ms_now() -> int:
    return int(time.time() * 1000)


def _room_allowlist(settings_rooms: list[str]) -> set[str] | None:
    rooms = [r.strip() for r in (settings_rooms or []) if str(r).strip()]
    return set(rooms) if rooms else None


def render_reply(reply: Reply) -> str:
    """Matrix has no reply keyboard: options go on a trailing text line."""
    if not reply.options:
        return reply.text
    return f"{reply.text}\n{' | '.join(reply.options)}"


class MatrixMessenger:
    """OutboundMessenger over a nio client: plain m.text messages into a room."""

    def __init__(self, client: Any) -> None:
        self._client = client

    async def send_text(
        self,
        *,
        text: str,
        room_id: str | None = None,
        to_user_id: str | None = None,
    ) -> None:
        if not room_id:
            # Replies always answer in the room the message came from.
            raise ValueError(f"No room to send to (to_user_id={to_user_id!r})")
        await self._client.room_send(
            room_id=room_id,
            message_type="m.room.message",
            content={"msgtype": "m.text", "body": text},
            ignore_unverified_devices=True,
        )


def build_message_callback(
    state: AppState,
    client: Any,
    *,
    startup_ts: int,
    allowed_rooms: set[str] | None,
) -> MessageCallback:
    """
    Room message callback: sender MXID is the user identity, replies go to the same room.

    Filters, in order: events from before start-up, own messages, rooms outside the
    allowlist, empty bodies.
    """
    messenger: OutboundMessenger = MatrixMessenger(client)

    async def message_callback(room: MatrixRoom, event: RoomMessageText) -> None:
        ts = getattr(event, "server_timestamp", None)
        if ts is not None and ts <= startup_ts:
            return

        if event.sender == client.user_id:
            return

        if allowed_rooms is not None and room.room_id not in allowed_rooms:
            return

        body = event.body or ""
        if not body.strip():
            return

        logger.info("Matrix <%s> %s: %r", room.display_name, event.sender, body)

        try:
            replies = state.dispatcher.on_message(event.sender, body)
        except Exception:
            logger.exception("Message handler crashed.")
            replies = [Reply(user_id=event.sender, text="Internal error while handling the message.")]

        for reply in replies:
            try:
                await messenger.send_text(
                    text=render_reply(reply),
                    room_id=room.room_id,
                    to_user_id=str(reply.user_id),
                )
            except Exception:
                logger.exception("Failed to send reply to %s in %s.", reply.user_id, room.room_id)
                return

    return message_callback


async def _run_matrix_bot(state: AppState, stop_event: asyncio.Event) -> None:
    """
    Matrix connector (async): init -> callbacks -> sync loop.

    Shutdown model:
    - main thread sets stop_event via loop.call_soon_threadsafe(stop_event.set)
    - a manual sync loop checks it between syncs.
    """
    settings = state.settings

    startup_ts = _ms_now()
    allowed_rooms = _room_allowlist(getattr(settings, "matrix_rooms", []) or [])
    logger.info("Matrix allowed_rooms=%s", allowed_rooms if allowed_rooms is not None else "ALL")

    client = await create_matrix_client(settings)
    if client is None:
        logger.error("Matrix client creation failed; connector will stop.")
        return

    client.add_event_callback(
        build_message_callback(state, client, startup_ts=startup_ts, allowed_rooms=allowed_rooms),
        RoomMessageText,
    )

    try:
        logger.info("Matrix initial sync...")
        await client.sync(timeout=30000, full_state=True)
        logger.info("Matrix initial sync done. Joined rooms: %d", len(client.rooms))

        while not stop_event.is_set():
            await client.sync(timeout=30000, full_state=False)

    except asyncio.CancelledError:
        logger.info("Matrix connector cancelled.")
    except Exception:
        logger.exception("Matrix connector crashed.")
    finally:
        with contextlib.suppress(Exception):
            await client.close()
        logger.info("Matrix connector stopped.")


@dataclass
class MatrixBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Failed to signal Matrix stop (loop closed).", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_matrix_in_background(state: AppState) -> MatrixBackgroundRunner | None:
    """
    Start the Matrix connector in a background thread with its own event loop,
    so the blocking console REPL can run in the main thread.
    """
    if not getattr(state.settings, "matrix_enabled", False):
        logger.info("Matrix connector disabled, not starting.")
        return None

    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(_run_matrix_bot(state, stop_event))
        finally:
            loop.close()

    t = threading.Thread(target=runner, name="matrix-connector", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Matrix thread did not initialize properly.")
        return None

    logger.info("Matrix background thread started.")
    return MatrixBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
