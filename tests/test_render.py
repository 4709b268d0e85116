from __future__ import annotations

import io
import logging

import pytest
from rich.console import Console

from agents.dashboard import Dashboard
from conftest import make_snapshot
from ui.render import TerminalRenderer, build_layout, sparkline
from ui.tiers import TIER_COLORS, tier_for, tier_style
from utils.logger import LogBuffer


@pytest.mark.parametrize(
    ("metric", "rate", "tier"),
    [
        ("gold", 0.0, "iron"),
        ("gold", 199.9, "iron"),
        ("gold", 200.0, "bronze"),
        ("gold", 650.9, "challenger"),
        ("gold", 651.0, None),
        ("cs", 7.99, "platinum"),
        ("cs", 9.5, "diamond"),
        ("vs", 0.19, "iron"),
        ("vs", 0.2, "bronze"),
        ("vs", 1.5, "grandmaster"),
        ("unknown", 1.0, None),
    ],
)
def test_tier_for(metric: str, rate: float, tier: str | None) -> None:
    assert tier_for(metric, rate) == tier


def test_tier_style() -> None:
    assert tier_style("cs", 4.5) == TIER_COLORS["bronze"]
    assert tier_style("cs", 12.0).endswith(" blink")
    assert tier_style("gold", 9999.0) == ""


def test_sparkline_scales_into_bounds() -> None:
    samples = [(0.0, 0.0), (1.0, 6.0), (2.0, 12.0), (3.0, 99.0), (4.0, -3.0)]

    assert sparkline(samples, (0.0, 12.0), 10) == " ▄██ "


def test_sparkline_shows_newest_samples_when_narrow() -> None:
    samples = [(float(t), float(t)) for t in range(9)]

    assert sparkline(samples, (0.0, 8.0), 3) == "▆▇█"
    assert sparkline(samples, (0.0, 8.0), 0) == ""


def _render(panel, width: int = 140) -> str:
    console = Console(file=io.StringIO(), width=width, height=40, color_system=None)
    console.print(panel)
    return console.file.getvalue()


def test_layout_shows_rates_and_burst_table(settings, champions) -> None:
    dashboard = Dashboard(settings, champions)
    dashboard.apply(make_snapshot(120.0, gold=900.0, cs=16, ability_power=50.0), cycle=0)

    out = _render(build_layout(dashboard, LogBuffer(), 140))

    assert "Gold Per Minute" in out
    assert "200.0" in out
    assert "8.0" in out
    for name in ("Ahri", "Kaisa", "DrMundo"):
        assert name in out


def test_log_panel_follows_toggle_and_scroll(settings, champions) -> None:
    dashboard = Dashboard(settings, champions)
    buffer = LogBuffer()
    logger = logging.getLogger("test.render")
    logger.addHandler(buffer)
    try:
        for i in range(40):
            logger.warning("line %02d", i)
    finally:
        logger.removeHandler(buffer)

    dashboard.draw_logger = True
    out = _render(build_layout(dashboard, buffer, 140), width=140)
    assert "line 39" in out

    dashboard.logger_scroll_freeze = True
    dashboard.logger_offset = 20
    out = _render(build_layout(dashboard, buffer, 140), width=140)
    assert "line 19" in out
    assert "line 39" not in out


def test_renderer_draws_nothing_before_start(settings, champions) -> None:
    console = Console(file=io.StringIO(), width=100)
    renderer = TerminalRenderer(LogBuffer(), console)

    renderer.draw(Dashboard(settings, champions))
    renderer.stop()

    assert console.file.getvalue() == ""
