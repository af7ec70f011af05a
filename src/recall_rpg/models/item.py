from __future__ import annotations

import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EquipmentSlot(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"


class Equipment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    slot: EquipmentSlot = EquipmentSlot.WEAPON
    rarity: Rarity = Rarity.COMMON
    attack_bonus: int = 0
    defense_bonus: int = 0
    hp_bonus: int = 0
    xp_bonus_pct: int = 0
    gold_bonus_pct: int = 0
    crit_bonus_pct: int = 0
    special_effect: Optional[str] = None


class SpecialEffectType(str, Enum):
    BONUS_DAMAGE_ON_PERFECT = "bonus_damage_on_perfect"
    HEAL_ON_CORRECT = "heal_on_correct"
    DOUBLE_CRIT_DAMAGE = "double_crit_damage"
    GOLD_BONUS_PCT = "gold_bonus_pct"
    UNKNOWN = "unknown"


class ParsedSpecialEffect(BaseModel):
    type: SpecialEffectType
    value: int = 0
    item_name: str = ""
    raw: str = ""


class SpecialEffectResult(BaseModel):
    bonus_damage: int = 0
    heal_amount: int = 0
    double_crit: bool = False
    gold_bonus_pct: int = 0
    activations: list[str] = Field(default_factory=list)
