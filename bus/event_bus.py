"""
Event bus between the terminal input reader and the tick loop.

Uses asyncio.Queue; the reader runs on the same event loop (add_reader), so
publishing never blocks and never crosses threads.

Queue sizing:
  ui_events: 64 (a held-down key bursts; anything past that is dropped)
"""

from __future__ import annotations
import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.events import UIEvent

log = logging.getLogger(__name__)


class EventBus:
    __slots__ = ("ui_events",)

    def __init__(self) -> None:
        self.ui_events: asyncio.Queue[UIEvent] = asyncio.Queue(maxsize=64)

    def publish_ui_event(self, event: "UIEvent") -> None:
        """Non-blocking publish. Drops and logs if the tick loop has fallen behind."""
        try:
            self.ui_events.put_nowait(event)
        except asyncio.QueueFull:
            log.warning("ui_events queue full — dropping %s event %r", event.kind, event.key)
