"""
Resistance-based damage mitigation.

Post-mitigation damage for a positive resistance R:

    damage = raw / (1 + R / 100)

so 100 armor halves physical damage and 0 leaves it untouched. The same
curve applies to armor (physical) and magic resist (magic). It is applied
once per ability hit and never compounded across a rotation.

Resistances grow linearly with champion level:

    resistance(level) = base + per_level * (level - 1)
"""

from __future__ import annotations


def mitigate(raw_damage: float, resistance: float) -> float:
    return raw_damage / (1.0 + resistance / 100.0)


def mitigate_by_armor(raw_damage: float, armor: float) -> float:
    return mitigate(raw_damage, armor)


def mitigate_by_magic_resist(raw_damage: float, magic_resist: float) -> float:
    return mitigate(raw_damage, magic_resist)


def scale_resistance(base: float, per_level: float, level: int) -> float:
    """Resistance at `level`; level 1 is the base value."""
    return base + per_level * (level - 1)
