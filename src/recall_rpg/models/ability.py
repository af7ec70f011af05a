from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class PlayerClass(str, Enum):
    SCHOLAR = "scholar"
    WARRIOR = "warrior"
    ROGUE = "rogue"


class AbilityEffectType(str, Enum):
    DAMAGE_BOOST = "damage_boost"
    CRITICAL_BOOST = "critical_boost"
    ABSORB_DAMAGE = "absorb_damage"
    HEAL = "heal"


class ActiveAbilityEffect(BaseModel):
    """A temporary buff. ``duration`` counts remaining turns."""

    type: AbilityEffectType
    value: float = 1
    duration: int = 1


class ClassAbility(BaseModel):
    key: str
    name: str
    description: str = ""
    sp_cost: int = 1
    cooldown_turns: int = 1
    unlock_level: int = 1
    player_class: PlayerClass
    effect: ActiveAbilityEffect


class ActiveAbility(BaseModel):
    ability: ClassAbility
    remaining_cooldown: int = 0
