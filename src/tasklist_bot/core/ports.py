# src/tasklist_bot/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) between the core and its connectors.

The core never sends anything itself: it returns Reply values and the
connector decides how to deliver them (console print, Matrix room message).
"""

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Awaitable, Protocol


@dataclass(slots=True, frozen=True)
class Reply:
    """
    One outbound message for a user.

    `options` are selectable labels (the main menu). Rendering them as
    buttons, a text line or nothing at all is up to the connector.
    """

    user_id: Hashable
    text: str
    options: tuple[str, ...] = ()


class OutboundMessenger(Protocol):
    """
    Connector-side port: how replies are sent outward.

    The connector decides how to interpret:
    - room_id (can be None)
    - to_user_id (can be None)
    """

    def send_text(
            self,
            *,
            text: str,
            room_id: str | None = None,
            to_user_id: str | None = None,
    ) -> Awaitable[None]: ...
