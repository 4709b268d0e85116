"""
Live Client Data API adapter — the game's own local HTTPS endpoint.

Endpoint:
  https://127.0.0.1:2999/liveclientdata/allgamedata

Only reachable while a game is loaded. The certificate is self-signed by the
game client, so verification is disabled for this one host.
"""

from __future__ import annotations
import asyncio
import json
import logging
from typing import Any

import aiohttp

from feeds.base import LiveDataError, LiveDataSource, SnapshotDecodeError

log = logging.getLogger(__name__)


class LiveClientFeed(LiveDataSource):
    """Fetches the all-game-data document once per call to fetch()."""

    def __init__(self, url: str, timeout_s: float = 4.0) -> None:
        self._url = url
        self._timeout_s = timeout_s
        self._session: aiohttp.ClientSession | None = None

    @property
    def name(self) -> str:
        return "live-client"

    async def startup(self) -> None:
        self._session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self._timeout_s, connect=2),
            connector=aiohttp.TCPConnector(limit=2, ssl=False),
        )
        log.info("%s feed client initialized (%s)", self.name, self._url)

    async def shutdown(self) -> None:
        if self._session:
            await self._session.close()

    async def fetch(self, cycle: int) -> dict[str, Any]:
        assert self._session, "Call startup() first"
        log.debug("Sending GET request to %s", self._url)
        try:
            async with self._session.get(self._url) as resp:
                # The client answers 404 with a JSON error body while loading;
                # the normalizer reports that as "not ready".
                if resp.status >= 500:
                    resp.raise_for_status()
                body = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise LiveDataError(f"GET {self._url} failed: {exc!r}") from exc

        try:
            return json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise SnapshotDecodeError(f"response from {self._url} is not JSON: {exc}") from exc
