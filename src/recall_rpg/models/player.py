from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class EffectiveStats(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    max_hp: int = 100
    attack: int = 10
    defense: int = 5
    xp_bonus_pct: int = 0
    gold_bonus_pct: int = 0
    crit_chance_pct: int = 0


class CombatSettings(BaseModel):
    """Per-encounter difficulty knobs. Defaults are the un-ascended baseline."""

    timer_seconds: int = 30
    hints_enabled: bool = True
    partial_credit_enabled: bool = True
    starting_hp_percent: int = 100
    enemy_poison_damage: int = 0
