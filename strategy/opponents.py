"""
Opponent resolution.

Splits the roster by team relative to the tracked player and turns each
opponent's client display name into a champion-database key:

    "Kai'Sa"    -> "KaiSa"   -> "Kaisa"     (exception table)
    "Dr. Mundo" -> "DrMundo"
    "Cho'Gath"  -> "ChoGath" -> "Chogath"   (exception table)

Each opponent's armor and magic resist are then scaled to their level.
"""

from __future__ import annotations
import logging
from typing import Sequence

from feeds.champion_db import ChampionDatabase
from models.snapshot import OpponentRecord, PlayerState
from strategy.mitigation import scale_resistance

log = logging.getLogger(__name__)

# Display-name spellings that differ from the champion database ids after stripping
_NAME_EXCEPTIONS: dict[str, str] = {
    "ChoGath": "Chogath",
    "KhaZix": "Khazix",
    "KaiSa": "Kaisa",
    "VelKoz": "Velkoz",
    "LeBlanc": "Leblanc",
    "BelVeth": "Belveth",
    "Wukong": "MonkeyKing",
    "RenataGlasc": "Renata",
    "Nunu&Willump": "Nunu",
}

_STRIPPED_CHARS = str.maketrans("", "", "' .")


def normalize_champion_name(display_name: str) -> str:
    key = display_name.translate(_STRIPPED_CHARS)
    return _NAME_EXCEPTIONS.get(key, key)


def find_tracked(tracked: PlayerState, roster: Sequence[PlayerState]) -> PlayerState | None:
    return next((p for p in roster if p.identity == tracked.identity), None)


def resolve(tracked: PlayerState, roster: Sequence[PlayerState]) -> list[tuple[str, int]]:
    """
    (champion key, level) for every player not on the tracked player's team,
    in roster order. Empty when the tracked player is not in the roster.
    """
    me = find_tracked(tracked, roster)
    if me is None:
        return []
    return [
        (normalize_champion_name(p.champion_id), p.level)
        for p in roster
        if p.team != me.team
    ]


def resolve_opponents(
    tracked: PlayerState,
    roster: Sequence[PlayerState],
    champions: ChampionDatabase,
) -> list[OpponentRecord]:
    records: list[OpponentRecord] = []
    for key, level in resolve(tracked, roster):
        stats = champions.resistances(key)
        if stats is None:
            log.warning("Champion %s not found in champion database; assuming 0 resistances", key)
            records.append(OpponentRecord(key, level, 0.0, 0.0))
            continue
        records.append(OpponentRecord(
            champion_id=key,
            level=level,
            scaled_armor=scale_resistance(stats.armor, stats.armor_per_level, level),
            scaled_magic_resist=scale_resistance(stats.magic_resist, stats.magic_resist_per_level, level),
        ))
    return records
