"""
Per-champion burst damage.

A DamageProfile knows one champion's ability damage tables. It is selected
once per game from the tracked player's champion and then asked, for every
opponent, how much a rotation would deal:

    profile = profile_for("Orianna")
    profile.calculate_burst(player, opponent, "QWER")

Rotation tags:
    Q W E R   abilities, damage from the table at the current rank
    P         passive
    A         basic attack, physical damage = attack damage
Each tag is mitigated once (magic resist for abilities, armor for A) and
the results are summed. Tag order does not matter.

Champions without a profile deal 0.0 for every rotation.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from models.snapshot import OpponentRecord, PlayerState
from strategy.mitigation import mitigate_by_armor, mitigate_by_magic_resist

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AbilityScaling:
    """Base damage per rank (index 0 = unlearned) plus an ability-power ratio."""
    base_by_rank: tuple[float, ...]
    ap_ratio: float = 0.0

    def raw(self, rank: int, ability_power: float) -> float:
        if rank < 0 or rank >= len(self.base_by_rank):
            clamped = min(max(rank, 0), len(self.base_by_rank) - 1)
            log.warning("Ability rank %d outside table (0..%d), using %d",
                        rank, len(self.base_by_rank) - 1, clamped)
            rank = clamped
        if rank == 0:
            return 0.0
        return self.base_by_rank[rank] + self.ap_ratio * ability_power


class DamageProfile(ABC):

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def hit(self, tag: str, player: PlayerState, opponent: OpponentRecord) -> float | None:
        """Mitigated damage of one rotation tag, or None if the tag means nothing here."""
        ...

    def basic_attack(self, player: PlayerState, opponent: OpponentRecord) -> float:
        return mitigate_by_armor(player.attack_damage, opponent.scaled_armor)

    def calculate_burst(self, player: PlayerState, opponent: OpponentRecord, rotation: str) -> float:
        total = 0.0
        for tag in rotation:
            dmg = self.hit(tag, player, opponent)
            if dmg is None:
                log.warning("Unknown rotation tag %r for %s, counting 0", tag, self.name)
                continue
            total += dmg
        return total


class _AbilityTableProfile(DamageProfile):
    """Profiles whose Q/W/E/R are plain magic damage from a table."""

    abilities: dict[str, AbilityScaling] = {}

    def ability_raw(self, tag: str, player: PlayerState) -> float:
        return self.abilities[tag].raw(player.ability_ranks.rank_of(tag), player.ability_power)

    def hit(self, tag: str, player: PlayerState, opponent: OpponentRecord) -> float | None:
        if tag == "A":
            return self.basic_attack(player, opponent)
        if tag in self.abilities:
            return mitigate_by_magic_resist(self.ability_raw(tag, player), opponent.scaled_magic_resist)
        return None


class Ahri(_AbilityTableProfile):
    abilities = {
        "Q": AbilityScaling((0.0, 40.0, 65.0, 90.0, 115.0, 140.0), 0.40),
        "W": AbilityScaling((0.0, 80.0, 120.0, 160.0, 200.0, 240.0), 0.48),
        "E": AbilityScaling((0.0, 80.0, 110.0, 140.0, 170.0, 200.0), 0.60),
        "R": AbilityScaling((0.0, 60.0, 90.0, 120.0), 0.35),
    }

    @property
    def name(self) -> str:
        return "Ahri"

    def hit(self, tag: str, player: PlayerState, opponent: OpponentRecord) -> float | None:
        if tag == "Q":
            # Orb goes out as magic damage and returns as true damage
            raw = self.ability_raw("Q", player)
            return mitigate_by_magic_resist(raw, opponent.scaled_magic_resist) + raw
        return super().hit(tag, player, opponent)


class Orianna(_AbilityTableProfile):
    abilities = {
        "Q": AbilityScaling((0.0, 60.0, 90.0, 120.0, 150.0, 180.0), 0.50),
        "W": AbilityScaling((0.0, 60.0, 105.0, 150.0, 195.0, 240.0), 0.70),
        "E": AbilityScaling((0.0, 60.0, 90.0, 120.0, 150.0, 180.0), 0.30),
        "R": AbilityScaling((0.0, 200.0, 275.0, 350.0), 0.80),
    }
    # Clockwork Windup, steps up every three levels
    passive_by_level_step: tuple[float, ...] = (10.0, 18.0, 26.0, 34.0, 42.0, 50.0)

    @property
    def name(self) -> str:
        return "Orianna"

    def passive_raw(self, level: int) -> float:
        step = min(max((level - 1) // 3, 0), len(self.passive_by_level_step) - 1)
        return self.passive_by_level_step[step]

    def hit(self, tag: str, player: PlayerState, opponent: OpponentRecord) -> float | None:
        if tag == "P":
            return mitigate_by_magic_resist(self.passive_raw(player.level), opponent.scaled_magic_resist)
        return super().hit(tag, player, opponent)


class UnsupportedProfile(DamageProfile):

    def __init__(self, champion: str) -> None:
        self._champion = champion

    @property
    def name(self) -> str:
        return self._champion

    def hit(self, tag: str, player: PlayerState, opponent: OpponentRecord) -> float | None:
        return 0.0


_PROFILES: dict[str, type[DamageProfile]] = {
    "Ahri": Ahri,
    "Orianna": Orianna,
}


def profile_for(champion: str) -> DamageProfile:
    cls = _PROFILES.get(champion)
    if cls is None:
        log.warning("No damage profile for %s; burst damage will read 0", champion or "<unknown>")
        return UnsupportedProfile(champion)
    log.info("Using %s damage profile", champion)
    return cls()
