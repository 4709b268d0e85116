"""
Terminal input events delivered from the stdin reader to the tick loop.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Literal

EventKind = Literal["key", "resize"]

# Key names produced by the reader for non-printable input
KEY_PAGE_UP = "page_up"
KEY_PAGE_DOWN = "page_down"
KEY_UP = "up"
KEY_DOWN = "down"
KEY_ESC = "esc"


@dataclass(frozen=True, slots=True)
class UIEvent:
    kind: EventKind
    key: str = ""          # Printable character or one of the KEY_* names

    @staticmethod
    def for_key(key: str) -> "UIEvent":
        return UIEvent(kind="key", key=key)

    @staticmethod
    def resize() -> "UIEvent":
        return UIEvent(kind="resize")


class KeyAction(Enum):
    NONE = auto()
    QUIT = auto()
