"""
lolburst — Main Entrypoint

Boots the asyncio event loop, wires the feed, dashboard and terminal UI
together, and runs until "q", SIGINT or SIGTERM.

Startup sequence:
  1. Load settings from config file + environment (fatal on misconfiguration)
  2. Set up logging (per-run log file + in-memory buffer for the log panel)
  3. Pick the data source (live client or recorded fixtures)
  4. Start the terminal UI and keyboard reader
  5. Run the tick orchestrator until shutdown

Shutdown sequence:
  1. shutdown_event is set
  2. Orchestrator leaves its loop, closes the feed
  3. Keyboard reader and terminal UI restore the terminal
"""

from __future__ import annotations
import argparse
import asyncio
import logging
import signal
import sys

from dotenv import load_dotenv

from agents.keyboard import KeyboardReader
from agents.orchestrator import TickOrchestrator
from bus.event_bus import EventBus
from config.settings import ConfigError, Settings, load_settings
from feeds.base import LiveDataSource
from feeds.fixtures import FixtureFeed
from feeds.live_client import LiveClientFeed
from ui.render import TerminalRenderer
from utils.logger import LogBuffer, setup_logging

log = logging.getLogger(__name__)


class _HeadlessRenderer:
    """Stands in for the terminal UI with --no-ui: logs the table instead."""

    def draw(self, dashboard) -> None:
        if dashboard.burst_rows:
            log.info(
                "gold/min=%s cs/min=%s vs/min=%s burst=%s",
                dashboard.gold.rate_string(), dashboard.cs.rate_string(), dashboard.vs.rate_string(),
                ", ".join(f"{r.name}:{r.burst}" for r in dashboard.burst_rows),
            )


def build_feed(settings: Settings) -> LiveDataSource:
    if settings.use_sample_data:
        return FixtureFeed(settings.fixtures_dir)
    return LiveClientFeed(settings.live_client_url, timeout_s=settings.request_timeout_s)


async def run(settings: Settings, buffer: LogBuffer, headless: bool = False) -> None:
    log.info("lolburst starting (sample_data=%s window=%d×%.0fs rotation=%s)",
             settings.use_sample_data, settings.window_capacity, settings.sample_rate_s, settings.rotation)

    bus = EventBus()
    shutdown_event = asyncio.Event()

    def _handle_signal(sig: signal.Signals) -> None:
        log.info("Received %s — initiating graceful shutdown", sig.name)
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _handle_signal, sig)

    renderer = _HeadlessRenderer() if headless else TerminalRenderer(buffer)
    keyboard = KeyboardReader(bus)
    orchestrator = TickOrchestrator(
        settings=settings,
        feed=build_feed(settings),
        bus=bus,
        renderer=renderer,
        shutdown_event=shutdown_event,
    )

    if not headless:
        renderer.start()
        keyboard.start()
    try:
        await orchestrator.run()
    except Exception as exc:
        log.exception("Tick loop died: %s", exc)
        raise
    finally:
        if not headless:
            keyboard.stop()
            renderer.stop()
        log.info("Cleaning up terminal")
    log.info("Exiting")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="lolburst", description="Live burst damage and per-minute stats")
    parser.add_argument("--config", help="path to a YAML config file (default: config/lolburst.yaml)")
    parser.add_argument("--no-ui", action="store_true", help="log to the console instead of drawing the UI")
    args = parser.parse_args(argv)

    load_dotenv()
    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"lolburst: configuration error: {exc}", file=sys.stderr)
        return 1

    buffer = setup_logging(settings.log_level, settings.log_dir, console=args.no_ui)
    asyncio.run(run(settings, buffer, headless=args.no_ui))
    return 0


if __name__ == "__main__":
    sys.exit(main())
