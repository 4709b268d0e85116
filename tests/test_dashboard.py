from __future__ import annotations

import logging

import pytest

from agents.dashboard import STARTING_GOLD, Dashboard
from conftest import make_player, make_snapshot
from models.snapshot import GameSnapshot
from strategy.profiles import Ahri, Orianna, UnsupportedProfile


@pytest.fixture
def dashboard(settings, champions) -> Dashboard:
    return Dashboard(settings, champions)


def test_first_snapshot_starts_a_game(dashboard: Dashboard) -> None:
    assert dashboard.apply(make_snapshot(120.0, gold=STARTING_GOLD + 100), cycle=0)

    assert dashboard.games_seen == 1
    assert isinstance(dashboard.profile, Orianna)
    assert dashboard.last_clock == 120.0
    # 100 earned over 2 minutes
    assert dashboard.gold.rate == pytest.approx(50.0)
    assert all(s.capacity == 5 for s in dashboard.series)
    assert [r.name for r in dashboard.burst_rows] == ["Ahri", "Kaisa", "DrMundo"]


def test_starting_gold_is_not_counted(dashboard: Dashboard) -> None:
    dashboard.apply(make_snapshot(60.0, gold=STARTING_GOLD), cycle=0)

    assert dashboard.gold.running_total == 0.0
    assert dashboard.gold.rate == 0.0


def test_cs_and_vision_use_reported_totals(dashboard: Dashboard) -> None:
    dashboard.apply(make_snapshot(60.0), cycle=0)
    dashboard.apply(make_snapshot(120.0, cs=14, vision=1.5), cycle=1)

    assert dashboard.cs.rate == pytest.approx(7.0)
    assert dashboard.vs.rate == pytest.approx(0.5)   # floor(1.5) / 2


def test_all_windows_advance_together(dashboard: Dashboard) -> None:
    for cycle, clock in enumerate((60.0, 120.0, 180.0)):
        dashboard.apply(make_snapshot(clock, gold=500 + clock), cycle=cycle)

    bounds = {s.x_axis_bounds() for s in dashboard.series}
    assert bounds == {(0.0, 180.0)}


def test_clock_going_backwards_restarts(dashboard: Dashboard) -> None:
    dashboard.apply(make_snapshot(600.0, gold=2000.0), cycle=0)
    dashboard.apply(make_snapshot(660.0, gold=2300.0), cycle=1)

    dashboard.apply(make_snapshot(30.0, gold=STARTING_GOLD), cycle=2)

    assert dashboard.games_seen == 2
    assert dashboard.gold.running_total == 0.0
    assert dashboard.gold.x_axis_bounds() == (-150.0, 30.0)


def test_cycle_zero_restarts(dashboard: Dashboard) -> None:
    dashboard.apply(make_snapshot(60.0, gold=700.0), cycle=0)
    dashboard.apply(make_snapshot(120.0, gold=900.0), cycle=1)

    dashboard.apply(make_snapshot(180.0, gold=650.0), cycle=0)

    assert dashboard.games_seen == 2
    assert dashboard.gold.running_total == 150.0


def test_champion_change_reselects_profile(dashboard: Dashboard) -> None:
    dashboard.apply(make_snapshot(60.0), cycle=0)
    assert isinstance(dashboard.profile, Orianna)

    dashboard.apply(make_snapshot(70.0, champion="Ahri"), cycle=1)
    assert isinstance(dashboard.profile, Ahri)

    dashboard.apply(make_snapshot(80.0, champion="Teemo"), cycle=2)
    assert isinstance(dashboard.profile, UnsupportedProfile)
    assert {r.burst for r in dashboard.burst_rows} == {0}


def test_missing_tracked_player_skips_tick(dashboard: Dashboard, caplog) -> None:
    dashboard.apply(make_snapshot(60.0, gold=600.0), cycle=0)
    rows_before = list(dashboard.burst_rows)
    samples_before = dashboard.gold.samples

    good = make_snapshot(120.0, gold=900.0)
    stranger = make_player("Spectator", "", "", cumulative_gold=900.0)
    skipped = GameSnapshot(game_clock_seconds=120.0, tracked_player=stranger, roster=good.roster)
    with caplog.at_level(logging.WARNING):
        assert not dashboard.apply(skipped, cycle=1)

    assert dashboard.burst_rows == rows_before
    assert dashboard.gold.samples == samples_before
    assert dashboard.last_clock == 60.0
    assert "not found in roster" in caplog.text
