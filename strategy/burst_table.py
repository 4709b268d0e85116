"""
Burst table: one row per opponent, in roster order.
"""

from __future__ import annotations
import math
from typing import Sequence

from models.snapshot import BurstRow, OpponentRecord, PlayerState
from strategy.profiles import DamageProfile


def build_burst_rows(
    profile: DamageProfile,
    player: PlayerState,
    opponents: Sequence[OpponentRecord],
    rotation: str,
) -> list[BurstRow]:
    return [
        BurstRow(
            name=opp.champion_id,
            level=opp.level,
            burst=math.floor(profile.calculate_burst(player, opp, rotation)),
        )
        for opp in opponents
    ]
