"""
Recorded all-game-data documents, replayed one file per tick.

Files are named all_data_<cycle>.json. When the next file does not exist the
cycle wraps to 0, which the dashboard treats as the start of a new game.
"""

from __future__ import annotations
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from feeds.base import LiveDataError, LiveDataSource, SnapshotDecodeError

log = logging.getLogger(__name__)

FIXTURE_PREFIX = "all_data_"


class FixtureFeed(LiveDataSource):

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)

    @property
    def name(self) -> str:
        return f"fixtures:{self._dir}"

    def path_for(self, cycle: int) -> Path:
        return self._dir / f"{FIXTURE_PREFIX}{cycle}.json"

    async def startup(self) -> None:
        if not self.path_for(0).exists():
            log.warning("%s has no %s0.json; every fetch will fail", self._dir, FIXTURE_PREFIX)
        log.warning("use_sample_data is true, replaying JSON files in %s", self._dir)

    async def shutdown(self) -> None:
        return None

    async def fetch(self, cycle: int) -> dict[str, Any]:
        path = self.path_for(cycle)
        try:
            body = await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise LiveDataError(f"cannot read fixture {path}: {exc}") from exc
        try:
            return json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise SnapshotDecodeError(f"fixture {path} is not JSON: {exc}") from exc

    def next_cycle(self, cycle: int) -> int:
        nxt = cycle + 1
        if not self.path_for(nxt).exists():
            log.info("Fixture %s missing, wrapping to cycle 0", self.path_for(nxt).name)
            return 0
        return nxt
