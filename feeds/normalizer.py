"""
Normalizes the live client's all-game-data JSON into a GameSnapshot.

The dashboard never sees provider field names. Only the fields the dashboard
uses are read; everything else in the (large) payload is ignored.
"""

from __future__ import annotations
from typing import Any

from feeds.base import GameNotReadyError, SnapshotDecodeError
from models.snapshot import AbilityRanks, GameSnapshot, PlayerState


def _player_identity(raw: dict[str, Any]) -> str:
    # Newer clients drop summonerName in favour of riotId
    return str(raw.get("summonerName") or raw.get("riotId") or raw.get("riotIdGameName") or "")


def _ability_rank(abilities: dict[str, Any], key: str) -> int:
    return int((abilities.get(key) or {}).get("abilityLevel") or 0)


def roster_entry_to_player(raw: dict[str, Any]) -> PlayerState:
    scores = raw.get("scores") or {}
    return PlayerState(
        identity=_player_identity(raw),
        team=str(raw["team"]),
        champion_id=str(raw["championName"]),
        level=max(1, int(raw.get("level") or 1)),
        creep_score=int(scores.get("creepScore") or 0),
        vision_score=float(scores.get("wardScore") or 0.0),
    )


def _active_player(raw: dict[str, Any], roster: tuple[PlayerState, ...]) -> PlayerState:
    identity = _player_identity(raw)
    stats = raw.get("championStats") or {}
    abilities = raw.get("abilities") or {}
    match = next((p for p in roster if p.identity == identity), None)
    return PlayerState(
        identity=identity,
        team=match.team if match else "",
        champion_id=match.champion_id if match else "",
        level=max(1, int(raw.get("level") or 1)),
        cumulative_gold=float(raw["currentGold"]),
        creep_score=match.creep_score if match else 0,
        vision_score=match.vision_score if match else 0.0,
        ability_ranks=AbilityRanks(
            q=_ability_rank(abilities, "Q"),
            w=_ability_rank(abilities, "W"),
            e=_ability_rank(abilities, "E"),
            r=_ability_rank(abilities, "R"),
        ),
        ability_power=float(stats.get("abilityPower") or 0.0),
        attack_damage=float(stats.get("attackDamage") or 0.0),
    )


def to_game_snapshot(raw: Any) -> GameSnapshot:
    """
    Raises GameNotReadyError when the client is up but a game is not loaded
    (it then answers with an httpStatus/errorCode body, or omits sections),
    and SnapshotDecodeError for anything else that does not fit.
    """
    if not isinstance(raw, dict):
        raise SnapshotDecodeError(f"expected a JSON object, got {type(raw).__name__}")
    if "httpStatus" in raw or "errorCode" in raw:
        raise GameNotReadyError(f"game not ready (httpStatus={raw.get('httpStatus')})")
    for section in ("activePlayer", "allPlayers", "gameData"):
        if not raw.get(section):
            raise GameNotReadyError(f"game not ready ({section} missing)")

    try:
        roster = tuple(roster_entry_to_player(p) for p in raw["allPlayers"])
        tracked = _active_player(raw["activePlayer"], roster)
        clock = float(raw["gameData"]["gameTime"])
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise SnapshotDecodeError(f"malformed all-game-data payload: {exc!r}") from exc

    return GameSnapshot(game_clock_seconds=clock, tracked_player=tracked, roster=roster)
