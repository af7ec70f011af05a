"""Combat rewards — XP and gold from an encounter's answer record, no I/O."""
from __future__ import annotations

import math
from typing import Iterable

from recall_rpg.mechanics.special_effects import equipment_gold_bonus_pct
from recall_rpg.models.card import AnswerQuality
from recall_rpg.models.combat import AnswerStats, CombatRewards, CombatState, Enemy
from recall_rpg.models.item import ParsedSpecialEffect

QUALITY_WEIGHTS: dict[AnswerQuality, float] = {
    AnswerQuality.PERFECT: 1.5,
    AnswerQuality.CORRECT: 1.0,
    AnswerQuality.PARTIAL: 0.5,
    AnswerQuality.WRONG: 0.25,
}


def quality_multiplier(stats: AnswerStats) -> float:
    """Weighted average answer quality. Zero answers gives 0.0."""
    total = stats.total
    if total == 0:
        return 0.0
    weighted = (
        stats.perfect_count * QUALITY_WEIGHTS[AnswerQuality.PERFECT]
        + stats.correct_count * QUALITY_WEIGHTS[AnswerQuality.CORRECT]
        + stats.partial_count * QUALITY_WEIGHTS[AnswerQuality.PARTIAL]
        + stats.wrong_count * QUALITY_WEIGHTS[AnswerQuality.WRONG]
    )
    return weighted / total


def calculate_combat_xp(base_xp: int, stats: AnswerStats, streak_bonus_pct: float = 0, xp_bonus_pct: float = 0) -> int:
    """XP = base * quality multiplier * (1 + bonuses%)."""
    total_bonus_pct = streak_bonus_pct + xp_bonus_pct
    return math.floor(base_xp * quality_multiplier(stats) * (1 + total_bonus_pct / 100))


def calculate_gold_reward(base_gold: int, gold_bonus_pct: float = 0) -> int:
    """Gold is flat, scaled only by percentage bonuses."""
    return math.floor(base_gold * (1 + gold_bonus_pct / 100))


def get_combat_rewards(
    state: CombatState,
    enemy: Enemy,
    streak_bonus_pct: float,
    xp_bonus_pct: float,
    gold_bonus_pct: float,
    equipment_effects: Iterable[ParsedSpecialEffect] | None = None,
) -> CombatRewards:
    xp = calculate_combat_xp(enemy.xp_reward, state.stats, streak_bonus_pct, xp_bonus_pct)
    equip_gold_pct = equipment_gold_bonus_pct(equipment_effects)
    gold = calculate_gold_reward(enemy.gold_reward, gold_bonus_pct + equip_gold_pct)
    return CombatRewards(xp=xp, gold=gold)
