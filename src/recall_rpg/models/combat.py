from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from recall_rpg.models.item import Equipment


class EnemyTier(str, Enum):
    MINION = "minion"
    COMMON = "common"
    ELITE = "elite"
    BOSS = "boss"


class CombatAction(str, Enum):
    PLAYER_ATTACK = "player_attack"
    PLAYER_CRITICAL = "player_critical"
    PLAYER_GLANCING = "player_glancing"
    ENEMY_ATTACK = "enemy_attack"
    ENEMY_POISON = "enemy_poison"


class Enemy(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    tier: EnemyTier = EnemyTier.COMMON
    hp: int
    max_hp: int
    attack: int
    xp_reward: int = 0
    gold_reward: int = 0


class CombatEvent(BaseModel):
    action: CombatAction
    damage: int = 0
    description: str = ""


class AnswerStats(BaseModel):
    perfect_count: int = 0
    correct_count: int = 0
    partial_count: int = 0
    wrong_count: int = 0

    @property
    def total(self) -> int:
        return self.perfect_count + self.correct_count + self.partial_count + self.wrong_count


class CombatState(BaseModel):
    """Live numbers for one encounter. Replaced, never edited, on every turn."""

    model_config = ConfigDict(from_attributes=True)

    enemy: Enemy
    player_hp: int
    player_max_hp: int
    events: list[CombatEvent] = Field(default_factory=list)
    current_card_index: int = 0
    total_cards: int = 0
    poison_damage: int = 0
    stats: AnswerStats = Field(default_factory=AnswerStats)


class CombatOutcome(BaseModel):
    over: bool = False
    victory: bool = False


class CombatRewards(BaseModel):
    xp: int = 0
    gold: int = 0


class CombatCardResult(BaseModel):
    card_id: str
    quality: str


class CombatResult(BaseModel):
    victory: bool
    xp_earned: int = 0
    gold_earned: int = 0
    loot: Optional[Equipment] = None
    events: list[CombatEvent] = Field(default_factory=list)
    cards_reviewed: int = 0
    perfect_count: int = 0
    correct_count: int = 0
    player_hp_remaining: int = 0
    card_results: list[CombatCardResult] = Field(default_factory=list)
    wager_net: int = 0
