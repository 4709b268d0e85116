"""
Core data models for one poll of the live game client.
Snapshots are frozen since they cross from the feed into the dashboard and
are discarded after the tick that consumes them.
"""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class AbilityRanks:
    q: int = 0
    w: int = 0
    e: int = 0
    r: int = 0

    def rank_of(self, tag: str) -> int:
        return {"Q": self.q, "W": self.w, "E": self.e, "R": self.r}.get(tag, 0)


@dataclass(frozen=True, slots=True)
class PlayerState:
    """
    One player as seen by the live client.
    Roster entries leave the active-player-only fields (gold, ranks, AP, AD) at zero.
    """
    identity: str          # Summoner name; only used to match the active player in the roster
    team: str              # "ORDER" / "CHAOS"; compared for equality only
    champion_id: str       # Display name from the client, e.g. "Kai'Sa"
    level: int
    cumulative_gold: float = 0.0
    creep_score: int = 0
    vision_score: float = 0.0
    ability_ranks: AbilityRanks = field(default_factory=AbilityRanks)
    ability_power: float = 0.0
    attack_damage: float = 0.0


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    game_clock_seconds: float
    tracked_player: PlayerState
    roster: tuple[PlayerState, ...]


@dataclass(frozen=True, slots=True)
class OpponentRecord:
    champion_id: str       # Champion-database key, e.g. "Kaisa"
    level: int
    scaled_armor: float
    scaled_magic_resist: float


@dataclass(frozen=True, slots=True)
class BurstRow:
    """One row of the burst table: opponent, level, floored burst damage."""
    name: str
    level: int
    burst: int

    def cells(self) -> tuple[str, str, str]:
        return self.name, str(self.level), str(self.burst)
