"""Shared builders for snapshots, rosters and a small champion database."""

from __future__ import annotations

from typing import Any

import pytest

from config.settings import Settings
from feeds.champion_db import ChampionDatabase
from models.snapshot import AbilityRanks, GameSnapshot, PlayerState


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "use_sample_data": True,
        "live_client_url": "https://127.0.0.1:2999/liveclientdata/allgamedata",
        "fixtures_dir": "resources/all_data",
        "request_timeout_s": 1.0,
        "data_dragon_url": "http://example.invalid/champion.json",
        "champion_data_path": "",
        "sample_rate_s": 60.0,
        "dataset_lifetime_s": 300.0,
        "rotation": "QWE",
        "retry_delay_s": 0.01,
        "log_level": "DEBUG",
        "log_dir": "",
    }
    values.update(overrides)
    return Settings(**values).validate()


def make_player(
    identity: str,
    champion: str,
    team: str,
    level: int = 1,
    **fields: Any,
) -> PlayerState:
    return PlayerState(identity=identity, team=team, champion_id=champion, level=level, **fields)


def make_roster(tracked_champion: str = "Orianna", level: int = 1, cs: int = 0, vision: float = 0.0) -> tuple[PlayerState, ...]:
    return (
        make_player("Pulsar", tracked_champion, "ORDER", level, creep_score=cs, vision_score=vision),
        make_player("Ironside", "Garen", "ORDER", level),
        make_player("FoxFire", "Ahri", "CHAOS", level),
        make_player("Voidborn", "Kai'Sa", "CHAOS", level),
        make_player("Zaunite", "Dr. Mundo", "CHAOS", level),
    )


def make_snapshot(
    clock: float,
    gold: float = 500.0,
    cs: int = 0,
    vision: float = 0.0,
    champion: str = "Orianna",
    ranks: AbilityRanks = AbilityRanks(1, 1, 1, 0),
    ability_power: float = 0.0,
    level: int = 1,
) -> GameSnapshot:
    roster = make_roster(champion, level, cs, vision)
    tracked = make_player(
        "Pulsar", champion, "ORDER", level,
        cumulative_gold=gold, creep_score=cs, vision_score=vision,
        ability_ranks=ranks, ability_power=ability_power,
    )
    return GameSnapshot(game_clock_seconds=clock, tracked_player=tracked, roster=roster)


def _stats(armor: float, armor_pl: float, mr: float, mr_pl: float) -> dict[str, float]:
    return {"armor": armor, "armorperlevel": armor_pl, "spellblock": mr, "spellblockperlevel": mr_pl}


CHAMPION_DATA: dict[str, Any] = {
    "version": "12.13.1",
    "data": {
        "Ahri": {"stats": _stats(21, 4.7, 30, 1.3)},
        "Kaisa": {"stats": _stats(28, 4.2, 30, 1.3)},
        "DrMundo": {"stats": _stats(32, 3.7, 29, 2.05)},
        "Garen": {"stats": _stats(36, 4.2, 32, 2.05)},
        "Orianna": {"stats": _stats(20, 4.2, 26, 0.5)},
    },
}


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def champions() -> ChampionDatabase:
    return ChampionDatabase(CHAMPION_DATA)
