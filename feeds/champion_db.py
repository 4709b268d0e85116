"""
Static champion database (Data Dragon champion.json).

Only the resistance stat lines are read:
    data.<Key>.stats.armor / armorperlevel / spellblock / spellblockperlevel
Keys are Data Dragon ids ("Kaisa", "DrMundo", "Chogath"), not display names.
"""

from __future__ import annotations
import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import aiohttp

log = logging.getLogger(__name__)


class ChampionDataError(Exception):
    """The champion database could not be loaded."""


@dataclass(frozen=True, slots=True)
class ResistanceStats:
    armor: float
    armor_per_level: float
    magic_resist: float
    magic_resist_per_level: float


class ChampionDatabase:

    def __init__(self, raw: dict[str, Any]) -> None:
        data = raw.get("data") if isinstance(raw, dict) else None
        if not isinstance(data, dict) or not data:
            raise ChampionDataError("champion database has no 'data' section")
        self._data = data
        self.version: str = str(raw.get("version", "?"))

    def __len__(self) -> int:
        return len(self._data)

    def resistances(self, key: str) -> ResistanceStats | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        stats = entry.get("stats") or {}
        try:
            return ResistanceStats(
                armor=float(stats["armor"]),
                armor_per_level=float(stats["armorperlevel"]),
                magic_resist=float(stats["spellblock"]),
                magic_resist_per_level=float(stats["spellblockperlevel"]),
            )
        except (KeyError, TypeError, ValueError):
            log.warning("Champion %s has incomplete resistance stats", key)
            return None


async def load_champion_database(
    url: str,
    local_path: str = "",
    timeout_s: float = 10.0,
) -> ChampionDatabase:
    """Read local_path when set, otherwise GET url. Raises ChampionDataError."""
    if local_path:
        try:
            body = await asyncio.to_thread(Path(local_path).read_bytes)
            raw = json.loads(body)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ChampionDataError(f"cannot load champion data from {local_path}: {exc}") from exc
        source = local_path
    else:
        log.info("Sending GET request to %s", url)
        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout_s)) as session:
                async with session.get(url) as resp:
                    resp.raise_for_status()
                    raw = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ChampionDataError(f"cannot fetch champion data from {url}: {exc!r}") from exc
        source = url

    db = ChampionDatabase(raw)
    log.info("Loaded %d champions (version %s) from %s", len(db), db.version, source)
    return db
