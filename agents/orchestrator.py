"""
Tick Orchestrator — drives fetch → decode → update → render.

Startup:
  1. load the champion database (retried on a fixed delay)
  2. poll until a game is loaded (retried on a fixed delay, no retry cap:
     the player may simply not have started a game yet)
  3. seed the dashboard from the first good snapshot

Loop, every sample_rate_s:
  draw, then wait for input or the next tick, whichever comes first.
  A tick that overruns the interval makes the next one start immediately.

Quit (keyboard "q" or SIGINT/SIGTERM) sets shutdown_event. Every wait
races against it, including an in-flight fetch, so the loop exits without
waiting for the network. A fetch still running at that point is cancelled
and its result never reaches the dashboard.
"""

from __future__ import annotations
import asyncio
import logging
import time
from typing import Awaitable, Callable, Protocol

from agents.dashboard import Dashboard
from agents.keyboard import handle_key
from bus.event_bus import EventBus
from config.settings import Settings
from feeds.base import GameNotReadyError, LiveDataError, LiveDataSource
from feeds.champion_db import ChampionDatabase, ChampionDataError, load_champion_database
from feeds.normalizer import to_game_snapshot
from models.events import KeyAction, UIEvent
from models.snapshot import GameSnapshot
from strategy.opponents import find_tracked

log = logging.getLogger(__name__)

ChampionLoader = Callable[[], Awaitable[ChampionDatabase]]


class Renderer(Protocol):
    def draw(self, dashboard: Dashboard) -> None: ...


class TickOrchestrator:

    def __init__(
        self,
        settings: Settings,
        feed: LiveDataSource,
        bus: EventBus,
        renderer: Renderer,
        shutdown_event: asyncio.Event,
        champion_loader: ChampionLoader | None = None,
    ) -> None:
        self._settings = settings
        self._feed = feed
        self._bus = bus
        self._renderer = renderer
        self._shutdown = shutdown_event
        self._champion_loader = champion_loader or self._default_champion_loader
        self._redraw = asyncio.Event()
        self._consecutive_errors = 0
        self.dashboard: Dashboard | None = None
        self.ticks = 0

    async def _default_champion_loader(self) -> ChampionDatabase:
        return await load_champion_database(
            self._settings.data_dragon_url,
            self._settings.champion_data_path,
        )

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def run(self) -> None:
        input_task = asyncio.create_task(self._consume_input(), name="ui-input")
        await self._feed.startup()
        try:
            champions = await self._load_champions()
            if champions is None:
                return
            self.dashboard = Dashboard(self._settings, champions)
            self._draw()

            ready = await self._wait_for_game(0)
            if ready is None:
                return
            snapshot, cycle = ready
            self.dashboard.apply(snapshot, cycle)
            await self._tick_loop(self._feed.next_cycle(cycle))
        finally:
            input_task.cancel()
            await asyncio.gather(input_task, return_exceptions=True)
            await self._feed.shutdown()
            log.info("Tick loop stopped after %d ticks", self.ticks)

    # ------------------------------------------------------------------
    # Startup phases
    # ------------------------------------------------------------------

    async def _load_champions(self) -> ChampionDatabase | None:
        while not self._shutdown.is_set():
            try:
                return await self._champion_loader()
            except ChampionDataError as exc:
                log.error("Champion database unavailable: %s", exc)
            log.info("Retrying in %.0f seconds...", self._settings.retry_delay_s)
            if await self._sleep_or_quit(self._settings.retry_delay_s):
                break
        return None

    async def _wait_for_game(self, cycle: int) -> tuple[GameSnapshot, int] | None:
        while not self._shutdown.is_set():
            try:
                snapshot = await self._fetch_snapshot(cycle)
                if snapshot is None:
                    return None
                if find_tracked(snapshot.tracked_player, snapshot.roster) is not None:
                    log.info("Game ready (clock=%.1f, %d players)",
                             snapshot.game_clock_seconds, len(snapshot.roster))
                    return snapshot, cycle
                log.warning("Active player not in roster yet")
            except GameNotReadyError as exc:
                log.warning("Warning, game not ready: %s", exc)
            except LiveDataError as exc:
                log.error("Error: %s", exc)
            log.info("Retrying in %.0f seconds...", self._settings.retry_delay_s)
            cycle = self._feed.next_cycle(cycle)
            self._draw()
            if await self._sleep_or_quit(self._settings.retry_delay_s):
                break
        return None

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    async def _tick_loop(self, cycle: int) -> None:
        loop = asyncio.get_running_loop()
        last_tick = loop.time()
        while not self._shutdown.is_set():
            self._draw()
            timeout = max(0.0, self._settings.sample_rate_s - (loop.time() - last_tick))
            woke_for_input = await self._wait_for_input(timeout)
            if self._shutdown.is_set():
                break
            if woke_for_input:
                continue

            last_tick = loop.time()
            started = time.perf_counter()
            await self.tick(cycle)
            cycle = self._feed.next_cycle(cycle)
            log.debug("cycle took %.3fs", time.perf_counter() - started)

    async def tick(self, cycle: int) -> bool:
        """One poll. False when nothing was applied (failure, skip or quit)."""
        assert self.dashboard is not None
        try:
            snapshot = await self._fetch_snapshot(cycle)
        except GameNotReadyError as exc:
            self._record_failure("game not ready", exc)
            return False
        except LiveDataError as exc:
            self._record_failure("fetch failed", exc)
            return False
        if snapshot is None:
            return False

        self._consecutive_errors = 0
        applied = self.dashboard.apply(snapshot, cycle)
        if applied:
            self.ticks += 1
        return applied

    def _record_failure(self, what: str, exc: Exception) -> None:
        self._consecutive_errors += 1
        if self._consecutive_errors == 1 or self._consecutive_errors % 100 == 0:
            log.warning("%s: %s (×%d), keeping last data", what, exc, self._consecutive_errors)

    # ------------------------------------------------------------------
    # Waiting
    # ------------------------------------------------------------------

    async def _fetch_snapshot(self, cycle: int) -> GameSnapshot | None:
        """None if a quit arrived before the fetch finished."""
        fetch = asyncio.ensure_future(self._feed.fetch(cycle))
        stop = asyncio.ensure_future(self._shutdown.wait())
        try:
            await asyncio.wait({fetch, stop}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            stop.cancel()
        if self._shutdown.is_set():
            fetch.cancel()
            await asyncio.gather(fetch, return_exceptions=True)
            log.info("Quit requested during fetch; discarding result")
            return None
        return to_game_snapshot(fetch.result())

    async def _sleep_or_quit(self, delay_s: float) -> bool:
        """True if quit was requested during the delay."""
        try:
            await asyncio.wait_for(self._shutdown.wait(), timeout=delay_s)
        except asyncio.TimeoutError:
            return False
        return True

    async def _wait_for_input(self, timeout_s: float) -> bool:
        """True if input (or a quit) arrived before timeout_s elapsed."""
        if self._redraw.is_set():
            self._redraw.clear()
            return True
        if timeout_s <= 0:
            return False
        redraw = asyncio.ensure_future(self._redraw.wait())
        stop = asyncio.ensure_future(self._shutdown.wait())
        done, pending = await asyncio.wait({redraw, stop}, timeout=timeout_s,
                                           return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        self._redraw.clear()
        return bool(done)

    async def _consume_input(self) -> None:
        while True:
            event = await self._bus.ui_events.get()
            try:
                action = self.on_ui_event(event)
            except Exception as exc:
                log.exception("Error handling %s event %r: %s", event.kind, event.key, exc)
                continue
            if action is KeyAction.QUIT:
                log.info("Quit requested from keyboard")
                self._shutdown.set()
                return

    def on_ui_event(self, event: UIEvent) -> KeyAction:
        if self.dashboard is None:
            action = KeyAction.QUIT if event.key == "q" else KeyAction.NONE
        else:
            action = handle_key(event, self.dashboard)
        self._redraw.set()
        return action

    def _draw(self) -> None:
        if self.dashboard is not None:
            self._renderer.draw(self.dashboard)
