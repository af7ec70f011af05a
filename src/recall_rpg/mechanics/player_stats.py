"""Effective combat stats from class, level and equipment — pure math, no I/O."""
from __future__ import annotations

from typing import Iterable

from recall_rpg.models.ability import PlayerClass
from recall_rpg.models.item import Equipment
from recall_rpg.models.player import EffectiveStats

CLASS_BASE_STATS: dict[PlayerClass, EffectiveStats] = {
    PlayerClass.SCHOLAR: EffectiveStats(
        max_hp=80, attack=8, defense=4, xp_bonus_pct=20, gold_bonus_pct=0, crit_chance_pct=5,
    ),
    PlayerClass.WARRIOR: EffectiveStats(
        max_hp=120, attack=14, defense=7, xp_bonus_pct=0, gold_bonus_pct=0, crit_chance_pct=8,
    ),
    PlayerClass.ROGUE: EffectiveStats(
        max_hp=100, attack=11, defense=5, xp_bonus_pct=0, gold_bonus_pct=25, crit_chance_pct=12,
    ),
}

# Per level beyond 1.
HP_PER_LEVEL = 5
ATTACK_PER_LEVEL = 2
DEFENSE_PER_LEVEL = 1


def effective_stats(player_class: PlayerClass, level: int = 1, equipped: Iterable[Equipment] = ()) -> EffectiveStats:
    """Class base + level bonuses + flat equipment bonuses."""
    base = CLASS_BASE_STATS[player_class]
    levels_gained = max(level, 1) - 1

    stats = base.model_copy(update={
        "max_hp": base.max_hp + levels_gained * HP_PER_LEVEL,
        "attack": base.attack + levels_gained * ATTACK_PER_LEVEL,
        "defense": base.defense + levels_gained * DEFENSE_PER_LEVEL,
    })
    for item in equipped:
        stats.max_hp += item.hp_bonus
        stats.attack += item.attack_bonus
        stats.defense += item.defense_bonus
        stats.xp_bonus_pct += item.xp_bonus_pct
        stats.gold_bonus_pct += item.gold_bonus_pct
        stats.crit_chance_pct += item.crit_bonus_pct
    return stats
