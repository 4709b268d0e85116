"""
Keyboard input.

KeyboardReader puts the terminal in cbreak mode and registers stdin with the
event loop, so keystrokes arrive as UIEvents on the bus without a thread and
without ever blocking a tick. handle_key() applies one event to the dashboard.

Keys:
  q          quit
  l          toggle the log panel
  PgUp/PgDn  scroll the log panel (freezes it)
  Up/Down    scroll one line
  Esc        unfreeze and jump back to the newest lines
"""

from __future__ import annotations
import asyncio
import logging
import os
import signal
import sys
from typing import TYPE_CHECKING

from bus.event_bus import EventBus
from models.events import (
    KEY_DOWN,
    KEY_ESC,
    KEY_PAGE_DOWN,
    KEY_PAGE_UP,
    KEY_UP,
    KeyAction,
    UIEvent,
)

if TYPE_CHECKING:
    from agents.dashboard import Dashboard

log = logging.getLogger(__name__)

LOG_PAGE_LINES = 10

_ESCAPE_SEQUENCES: dict[str, str] = {
    "\x1b[5~": KEY_PAGE_UP,
    "\x1b[6~": KEY_PAGE_DOWN,
    "\x1b[A": KEY_UP,
    "\x1b[B": KEY_DOWN,
}


def decode_keys(chunk: str) -> list[str]:
    """Split raw terminal input into key names."""
    keys: list[str] = []
    i = 0
    while i < len(chunk):
        if chunk[i] == "\x1b":
            for seq, name in _ESCAPE_SEQUENCES.items():
                if chunk.startswith(seq, i):
                    keys.append(name)
                    i += len(seq)
                    break
            else:
                keys.append(KEY_ESC)
                i += 1
            continue
        keys.append(chunk[i])
        i += 1
    return keys


def handle_key(event: UIEvent, dashboard: "Dashboard") -> KeyAction:
    if event.kind == "resize":
        return KeyAction.NONE

    key = event.key
    if key == "q":
        return KeyAction.QUIT
    if key == "l":
        log.info("Toggling logger on/off")
        dashboard.draw_logger = not dashboard.draw_logger
    elif key == KEY_PAGE_UP:
        dashboard.logger_offset += LOG_PAGE_LINES
        dashboard.logger_scroll_freeze = True
    elif key == KEY_PAGE_DOWN:
        dashboard.logger_offset = max(dashboard.logger_offset - LOG_PAGE_LINES, 0)
        dashboard.logger_scroll_freeze = True
    elif key == KEY_UP:
        dashboard.logger_offset += 1
    elif key == KEY_DOWN:
        dashboard.logger_offset = max(dashboard.logger_offset - 1, 0)
    elif key == KEY_ESC:
        dashboard.logger_offset = 0
        dashboard.logger_scroll_freeze = False
    log.debug("key %r", key)
    return KeyAction.NONE


class KeyboardReader:
    """Feeds stdin keystrokes and terminal resizes into the EventBus."""

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus
        self._fd: int | None = None
        self._saved_attrs: list | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    def start(self) -> None:
        if not sys.stdin.isatty():
            log.warning("stdin is not a terminal; keyboard input disabled (use Ctrl-C to quit)")
            return
        import termios
        import tty

        self._fd = sys.stdin.fileno()
        self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)
        self._loop = asyncio.get_running_loop()
        self._loop.add_reader(self._fd, self._on_readable)
        if hasattr(signal, "SIGWINCH"):
            self._loop.add_signal_handler(signal.SIGWINCH, self._bus.publish_ui_event, UIEvent.resize())
        log.info("Keyboard reader started")

    def stop(self) -> None:
        if self._fd is None or self._loop is None:
            return
        import termios

        self._loop.remove_reader(self._fd)
        if hasattr(signal, "SIGWINCH"):
            self._loop.remove_signal_handler(signal.SIGWINCH)
        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
        self._fd = None

    def _on_readable(self) -> None:
        assert self._fd is not None
        chunk = os.read(self._fd, 64).decode(errors="ignore")
        for key in decode_keys(chunk):
            self._bus.publish_ui_event(UIEvent.for_key(key))
