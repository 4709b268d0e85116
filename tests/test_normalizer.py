"""all-game-data JSON → GameSnapshot."""

from __future__ import annotations

from typing import Any

import pytest

from feeds.base import GameNotReadyError, SnapshotDecodeError
from feeds.normalizer import to_game_snapshot
from strategy.opponents import find_tracked


def _roster_entry(name: str, champion: str, team: str, level: int = 3, cs: int = 0, ward: float = 0.0) -> dict[str, Any]:
    return {
        "championName": champion,
        "level": level,
        "scores": {"creepScore": cs, "wardScore": ward, "kills": 0, "deaths": 0, "assists": 0},
        "summonerName": name,
        "team": team,
    }


def _payload(**overrides: Any) -> dict[str, Any]:
    raw: dict[str, Any] = {
        "activePlayer": {
            "abilities": {
                "Q": {"abilityLevel": 2}, "W": {"abilityLevel": 1},
                "E": {"abilityLevel": 0}, "R": {"abilityLevel": 1},
                "Passive": {"displayName": "Clockwork Windup"},
            },
            "championStats": {"abilityPower": 88.5, "attackDamage": 51.0},
            "currentGold": 1234.5,
            "level": 6,
            "summonerName": "Pulsar",
        },
        "allPlayers": [
            _roster_entry("Pulsar", "Orianna", "ORDER", 6, cs=42, ward=3.5),
            _roster_entry("Voidborn", "Kai'Sa", "CHAOS", 5),
        ],
        "gameData": {"gameTime": 421.7, "gameMode": "CLASSIC"},
    }
    raw.update(overrides)
    return raw


def test_decodes_tracked_player_and_roster() -> None:
    snap = to_game_snapshot(_payload())

    assert snap.game_clock_seconds == pytest.approx(421.7)
    me = snap.tracked_player
    assert me.identity == "Pulsar"
    assert me.team == "ORDER"
    assert me.champion_id == "Orianna"
    assert me.cumulative_gold == pytest.approx(1234.5)
    assert (me.creep_score, me.vision_score) == (42, 3.5)
    assert (me.ability_ranks.q, me.ability_ranks.w, me.ability_ranks.e, me.ability_ranks.r) == (2, 1, 0, 1)
    assert (me.ability_power, me.attack_damage) == (88.5, 51.0)
    assert [p.champion_id for p in snap.roster] == ["Orianna", "Kai'Sa"]
    assert find_tracked(snap.roster[1], snap.roster) == snap.roster[1]


def test_riot_id_is_used_when_summoner_name_is_missing() -> None:
    payload = _payload()
    payload["activePlayer"]["summonerName"] = ""
    payload["activePlayer"]["riotId"] = "Pulsar#EUW"
    payload["allPlayers"][0]["summonerName"] = ""
    payload["allPlayers"][0]["riotId"] = "Pulsar#EUW"

    snap = to_game_snapshot(payload)

    assert snap.tracked_player.identity == "Pulsar#EUW"
    assert snap.tracked_player.team == "ORDER"


def test_tracked_player_missing_from_roster_has_no_team() -> None:
    payload = _payload()
    payload["activePlayer"]["summonerName"] = "Spectator"

    snap = to_game_snapshot(payload)

    assert snap.tracked_player.team == ""
    assert find_tracked(snap.tracked_player, snap.roster) is None


@pytest.mark.parametrize(
    "payload",
    [
        {"errorCode": "RESOURCE_NOT_FOUND", "httpStatus": 404, "message": "No active game"},
        {"activePlayer": {}, "allPlayers": [], "gameData": {}},
        {"gameData": {"gameTime": 1.0}},
    ],
)
def test_not_ready_payloads(payload: dict[str, Any]) -> None:
    with pytest.raises(GameNotReadyError):
        to_game_snapshot(payload)


@pytest.mark.parametrize(
    "payload",
    [
        ["not", "an", "object"],
        _payload(gameData={"gameMode": "CLASSIC"}),
        _payload(allPlayers=[{"summonerName": "x"}]),
        _payload(allPlayers=[1]),
        _payload(allPlayers="Pulsar"),
        _payload(activePlayer=["x"]),
        _payload(gameData=["gameTime"]),
        _payload(activePlayer={"summonerName": "Pulsar", "currentGold": 1.0, "abilities": {"Q": 3}}),
        _payload(activePlayer={"summonerName": "Pulsar", "currentGold": 1.0, "championStats": [40.0]}),
    ],
)
def test_malformed_payloads(payload: Any) -> None:
    with pytest.raises(SnapshotDecodeError):
        to_game_snapshot(payload)
