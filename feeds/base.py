"""
Abstract interface for live game data sources.

The tick loop depends only on this class, so replaying recorded fixtures
instead of polling the game client is a one-flag config change.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any


class LiveDataError(Exception):
    """A poll produced no usable snapshot. Always transient: retry later."""


class GameNotReadyError(LiveDataError):
    """The client answered, but no game is loaded yet."""


class SnapshotDecodeError(LiveDataError):
    """The payload is not the all-game-data document we expect."""


class LiveDataSource(ABC):
    """
    Base class for all providers of the all-game-data document.

    Concrete implementations:
        - LiveClientFeed   (HTTPS polling of the local game client)
        - FixtureFeed      (recorded JSON files, selected by cycle number)
    """

    @abstractmethod
    async def startup(self) -> None:
        """Open sessions. Called once before the first fetch()."""
        ...

    @abstractmethod
    async def shutdown(self) -> None:
        """Clean up connections."""
        ...

    @abstractmethod
    async def fetch(self, cycle: int) -> dict[str, Any]:
        """
        Return one decoded JSON document.
        cycle is the tick counter; live sources ignore it.
        Raises LiveDataError (or a subclass) on any failure.
        """
        ...

    def next_cycle(self, cycle: int) -> int:
        """Cycle number for the tick after `cycle`. Fixture feeds wrap to 0."""
        return cycle + 1

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name for logging."""
        ...
