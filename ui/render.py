"""
Terminal renderer built on rich.

Layout:
    ┌ lolburst ───────────────────────────────────────────┐
    │ burst table │ gold/min │ cs/min │ vision/min        │
    │             │ chart    │ chart  │ chart             │
    │ log panel (toggled with "l")                         │
    └──────────────────────────────────────────────────────┘

The renderer only reads the Dashboard; it never mutates it.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Sequence

from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from models.state import RollingMetricSeries
from ui.tiers import tier_style
from utils.logger import LogBuffer

if TYPE_CHECKING:
    from agents.dashboard import Dashboard

_BARS = " ▁▂▃▄▅▆▇█"
_TITLES = {"gold": "Gold Per Minute", "cs": "CS Per Minute", "vs": "Vision Per Minute"}
_LOG_PANEL_LINES = 14
_LEVEL_STYLES = {
    logging.DEBUG: "dim",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "bold red",
}


def sparkline(samples: Sequence[tuple[float, float]], y_bounds: tuple[float, float], width: int) -> str:
    """
    One character per column; when there are more samples than columns the
    newest `width` samples are shown.
    """
    if width <= 0 or not samples:
        return ""
    lo, hi = y_bounds
    span = (hi - lo) or 1.0
    chars = []
    for _, y in list(samples)[-width:]:
        frac = min(max((y - lo) / span, 0.0), 1.0)
        chars.append(_BARS[round(frac * (len(_BARS) - 1))])
    return "".join(chars)


def build_burst_table(dashboard: "Dashboard") -> Table:
    table = Table(expand=True, header_style="bright_blue", box=None)
    table.add_column("Champion", no_wrap=True)
    table.add_column("Level", justify="right")
    table.add_column("Burst", justify="right")
    for row in dashboard.burst_rows:
        table.add_row(*row.cells())
    return table


def build_rate_panel(series: RollingMetricSeries) -> Panel:
    style = tier_style(series.name, series.rate)
    return Panel(
        Text(series.rate_string(), style=style, justify="center"),
        title=Text(_TITLES.get(series.name, series.name), style="bold"),
        border_style=style or "none",
    )


def build_chart_panel(series: RollingMetricSeries, width: int) -> Panel:
    style = tier_style(series.name, series.rate)
    lo, hi = series.y_axis_bounds
    left, mid, right = series.x_axis_labels()
    axis = f"{left}{mid:^{max(width - len(left) - len(right), 0)}}{right}"
    body = Group(
        Text(f"{hi:g}", style="dim"),
        Text(sparkline(series.samples, series.y_axis_bounds, width), style=style or "white"),
        Text(f"{lo:g}", style="dim"),
        Text(axis, style="dim"),
    )
    return Panel(body, border_style="none")


def build_log_panel(buffer: LogBuffer, dashboard: "Dashboard") -> Panel:
    offset = dashboard.logger_offset if dashboard.logger_scroll_freeze else 0
    text = Text()
    for level, line in buffer.tail(_LOG_PANEL_LINES, offset):
        text.append(line + "\n", style=_LEVEL_STYLES.get(level, ""))
    border = "red" if dashboard.logger_scroll_freeze else "none"
    return Panel(text, title="log", border_style=border)


def build_layout(dashboard: "Dashboard", buffer: LogBuffer, width: int) -> Panel:
    chart_width = max((width - 45) // 3 - 4, 8)

    root = Layout()
    root.split_column(
        Layout(name="main", ratio=1),
        Layout(name="log", size=_LOG_PANEL_LINES + 2, visible=dashboard.draw_logger),
    )
    root["main"].split_row(Layout(name="burst", size=35), Layout(name="stats"))
    root["stats"].split_column(Layout(name="rates", size=3), Layout(name="charts"))
    root["rates"].split_row(*(Layout(build_rate_panel(s)) for s in dashboard.series))
    root["charts"].split_row(*(Layout(build_chart_panel(s, chart_width)) for s in dashboard.series))
    root["burst"].update(Panel(build_burst_table(dashboard), title="burst"))
    if dashboard.draw_logger:
        root["log"].update(build_log_panel(buffer, dashboard))
    return Panel(root, title="lolburst")


class TerminalRenderer:
    """Full-screen rich.Live display, redrawn on demand by the tick loop."""

    def __init__(self, buffer: LogBuffer, console: Console | None = None) -> None:
        self._buffer = buffer
        self._console = console or Console()
        self._live: Live | None = None

    def start(self) -> None:
        self._live = Live(
            console=self._console,
            screen=True,
            auto_refresh=False,
            redirect_stdout=False,
            redirect_stderr=False,
        )
        self._live.start()

    def draw(self, dashboard: "Dashboard") -> None:
        if self._live is None:
            return
        layout = build_layout(dashboard, self._buffer, self._console.size.width)
        self._live.update(layout, refresh=True)

    def stop(self) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None
