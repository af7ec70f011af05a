"""Class abilities — catalog, cooldowns and temporary combat buffs, no I/O."""
from __future__ import annotations

import math
from typing import Iterable

from recall_rpg.models.ability import (
    AbilityEffectType,
    ActiveAbility,
    ActiveAbilityEffect,
    ClassAbility,
    PlayerClass,
)
from recall_rpg.models.card import AnswerQuality


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

_WARRIOR_ABILITIES: list[ClassAbility] = [
    ClassAbility(
        key="endure",
        name="Endure",
        description="Absorb one wrong answer without taking damage",
        sp_cost=1,
        cooldown_turns=3,
        unlock_level=3,
        player_class=PlayerClass.WARRIOR,
        effect=ActiveAbilityEffect(type=AbilityEffectType.ABSORB_DAMAGE, value=1, duration=1),
    ),
    ClassAbility(
        key="battle_cry",
        name="Battle Cry",
        description="Next correct answer deals 3x damage",
        sp_cost=2,
        cooldown_turns=4,
        unlock_level=7,
        player_class=PlayerClass.WARRIOR,
        effect=ActiveAbilityEffect(type=AbilityEffectType.DAMAGE_BOOST, value=3, duration=1),
    ),
    ClassAbility(
        key="fortify",
        name="Fortify",
        description="Heal 20% of max HP",
        sp_cost=2,
        cooldown_turns=5,
        unlock_level=12,
        player_class=PlayerClass.WARRIOR,
        effect=ActiveAbilityEffect(type=AbilityEffectType.HEAL, value=20, duration=1),
    ),
]

_ROGUE_ABILITIES: list[ClassAbility] = [
    ClassAbility(
        key="shadow_strike",
        name="Shadow Strike",
        description="Next perfect answer deals 4x damage",
        sp_cost=2,
        cooldown_turns=4,
        unlock_level=7,
        player_class=PlayerClass.ROGUE,
        effect=ActiveAbilityEffect(type=AbilityEffectType.CRITICAL_BOOST, value=4, duration=1),
    ),
]

_ABILITIES: dict[PlayerClass, list[ClassAbility]] = {
    PlayerClass.SCHOLAR: [],
    PlayerClass.WARRIOR: _WARRIOR_ABILITIES,
    PlayerClass.ROGUE: _ROGUE_ABILITIES,
}


def get_class_abilities(player_class: PlayerClass) -> list[ClassAbility]:
    return list(_ABILITIES.get(player_class, []))


def get_unlocked_abilities(player_class: PlayerClass, level: int) -> list[ClassAbility]:
    """Abilities available at the player's current level."""
    return [a for a in get_class_abilities(player_class) if a.unlock_level <= level]


def find_ability(player_class: PlayerClass, key: str) -> ClassAbility | None:
    for ability in get_class_abilities(player_class):
        if ability.key == key:
            return ability
    return None


# ---------------------------------------------------------------------------
# Cooldowns
# ---------------------------------------------------------------------------

def can_use_ability(
    ability: ClassAbility,
    player_level: int,
    current_sp: int,
    active_abilities: Iterable[ActiveAbility],
) -> tuple[bool, str]:
    """Check level, skill points and cooldown. Returns (ok, reason)."""
    if player_level < ability.unlock_level:
        return False, f"{ability.name} unlocks at level {ability.unlock_level}."
    if current_sp < ability.sp_cost:
        return False, f"Not enough SP for {ability.name} (need {ability.sp_cost})."
    for active in active_abilities:
        if active.ability.key == ability.key and active.remaining_cooldown > 0:
            return False, f"{ability.name} is on cooldown ({active.remaining_cooldown} turns)."
    return True, ""


def tick_cooldowns(active_abilities: Iterable[ActiveAbility]) -> list[ActiveAbility]:
    """Advance every cooldown by one turn, dropping the finished ones."""
    ticked = [
        a.model_copy(update={"remaining_cooldown": max(0, a.remaining_cooldown - 1)})
        for a in active_abilities
    ]
    return [a for a in ticked if a.remaining_cooldown > 0]


# ---------------------------------------------------------------------------
# Active effects
# ---------------------------------------------------------------------------

def tick_effects(effects: Iterable[ActiveAbilityEffect]) -> list[ActiveAbilityEffect]:
    """Decrement durations by one turn; effects reaching zero are removed."""
    return [
        e.model_copy(update={"duration": e.duration - 1})
        for e in effects
        if e.duration > 1
    ]


def apply_ability_modifiers(
    effects: Iterable[ActiveAbilityEffect],
    quality: AnswerQuality,
    attack_power: int,
    crit_chance_pct: float,
) -> tuple[int, float]:
    """Adjust the attack and crit values handed to the resolver for this turn.

    Damage boosts apply to Perfect and Correct answers; critical boosts only
    to Perfect answers. Both scale attack and round up.
    """
    attack = attack_power
    for effect in effects:
        if effect.type == AbilityEffectType.DAMAGE_BOOST and quality in (AnswerQuality.PERFECT, AnswerQuality.CORRECT):
            attack = math.ceil(attack * effect.value)
        elif effect.type == AbilityEffectType.CRITICAL_BOOST and quality == AnswerQuality.PERFECT:
            attack = math.ceil(attack * effect.value)
    return attack, crit_chance_pct


def absorbs_damage(effects: Iterable[ActiveAbilityEffect], quality: AnswerQuality) -> bool:
    """True when an absorb buff cancels the HP loss from a failed answer."""
    if quality not in (AnswerQuality.WRONG, AnswerQuality.TIMEOUT):
        return False
    return any(e.type == AbilityEffectType.ABSORB_DAMAGE for e in effects)


def heal_amount(effect: ActiveAbilityEffect, max_hp: int) -> int:
    """Immediate heal: ``value`` percent of max HP, rounded up."""
    return math.ceil(max_hp * (effect.value / 100))
