"""Turn resolution — one answered card becomes one combat turn. Pure, no I/O.

The resolver never edits the state it is given: every call deep-copies the
input and returns the copy alongside the turn's primary event. Step order:

1. Apply poison carried over from the previous turn, then clear it.
2. Branch on answer quality. Wrong and Timeout hurt the player (Timeout also
   queues poison for the next turn); Perfect, Correct and Partial hurt the enemy.
3. Offensive damage is ``floor(attack * base * tier * mode)``, plus any flat
   perfect-answer bonus, doubled on a crit when a double-crit item is worn.
4. Heal-on-correct items restore HP up to the player's maximum.
5. Log equipment activations, then the primary event.
6. Advance the card index and count the answer.
"""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, Iterable

from recall_rpg.mechanics.combat_math import (
    CRIT_MULTIPLIER_BONUS,
    TIMEOUT_POISON_DAMAGE,
    base_damage_multiplier,
    enemy_damage,
    is_failed,
    mode_damage_multiplier,
    tier_crit_bonus,
    tier_damage_multiplier,
)
from recall_rpg.mechanics.special_effects import apply_special_effects
from recall_rpg.models.card import AnswerQuality, ConfidenceLevel, EvolutionTier, RetrievalMode
from recall_rpg.models.combat import (
    AnswerStats,
    CombatAction,
    CombatEvent,
    CombatOutcome,
    CombatState,
    Enemy,
)
from recall_rpg.models.item import ParsedSpecialEffect

logger = logging.getLogger(__name__)

Rng = Callable[[], float]


@dataclass
class TurnResult:
    new_state: CombatState
    event: CombatEvent


def create_combat_state(enemy: Enemy, player_max_hp: int, player_hp: int, card_count: int) -> CombatState:
    """Fresh state for the start of an encounter. The enemy is copied."""
    return CombatState(
        enemy=enemy.model_copy(),
        player_hp=player_hp,
        player_max_hp=player_max_hp,
        events=[],
        current_card_index=0,
        total_cards=card_count,
        poison_damage=0,
        stats=AnswerStats(),
    )


def is_combat_over(state: CombatState) -> CombatOutcome:
    """Victory if the enemy is down, defeat if the player is, otherwise still going."""
    if state.enemy.hp <= 0:
        return CombatOutcome(over=True, victory=True)
    if state.player_hp <= 0:
        return CombatOutcome(over=True, victory=False)
    return CombatOutcome(over=False, victory=False)


def roll_crit(crit_chance_pct: float, rng: Rng) -> bool:
    """A crit lands when ``rng()`` falls below the crit chance as a fraction."""
    return rng() < crit_chance_pct / 100


def resolve_turn(
    state: CombatState,
    quality: AnswerQuality,
    attack_power: int,
    defense: int,
    crit_chance_pct: float,
    rng: Rng = random.random,
    confidence: ConfidenceLevel | None = None,
    evolution_tier: int | EvolutionTier | None = None,
    retrieval_mode: RetrievalMode | None = None,
    equipment_effects: Iterable[ParsedSpecialEffect] | None = None,
) -> TurnResult:
    """Resolve one answered card against the current combat state."""
    new_state = state.model_copy(deep=True)
    effects = list(equipment_effects or [])

    if new_state.poison_damage > 0:
        poison = new_state.poison_damage
        new_state.player_hp = max(0, new_state.player_hp - poison)
        new_state.events.append(CombatEvent(
            action=CombatAction.ENEMY_POISON,
            damage=poison,
            description=f"Poison deals {poison} damage!",
        ))
        new_state.poison_damage = 0

    if is_failed(quality):
        damage = enemy_damage(new_state.enemy.attack, defense)
        new_state.player_hp = max(0, new_state.player_hp - damage)
        new_state.stats.wrong_count += 1
        if quality == AnswerQuality.TIMEOUT:
            action = CombatAction.ENEMY_POISON
            new_state.poison_damage = TIMEOUT_POISON_DAMAGE
        else:
            action = CombatAction.ENEMY_ATTACK
    else:
        damage, action = _offensive_damage(
            quality, attack_power, crit_chance_pct, rng, confidence, evolution_tier, retrieval_mode,
        )
        if quality == AnswerQuality.PERFECT:
            new_state.stats.perfect_count += 1
        elif quality == AnswerQuality.CORRECT:
            new_state.stats.correct_count += 1
        else:
            new_state.stats.partial_count += 1

    if effects:
        fired = apply_special_effects(quality, action, effects)
        damage += fired.bonus_damage
        if fired.double_crit:
            damage *= 2
        if fired.heal_amount > 0:
            new_state.player_hp = min(new_state.player_max_hp, new_state.player_hp + fired.heal_amount)
        for activation in fired.activations:
            new_state.events.append(CombatEvent(action=action, damage=0, description=activation))

    if not is_failed(quality):
        new_state.enemy.hp -= damage

    new_state.current_card_index += 1

    event = CombatEvent(
        action=action,
        damage=damage,
        description=_describe(action, damage, new_state.enemy.name),
    )
    new_state.events.append(event)
    logger.debug(f"Turn {new_state.current_card_index}: {quality.value} -> {action.value} for {damage}")
    return TurnResult(new_state=new_state, event=event)


def _offensive_damage(
    quality: AnswerQuality,
    attack_power: int,
    crit_chance_pct: float,
    rng: Rng,
    confidence: ConfidenceLevel | None,
    evolution_tier: int | EvolutionTier | None,
    retrieval_mode: RetrievalMode | None,
) -> tuple[int, CombatAction]:
    multiplier = base_damage_multiplier(quality, confidence)
    tier_mult = tier_damage_multiplier(evolution_tier)
    mode_mult = mode_damage_multiplier(retrieval_mode)

    glancing = quality == AnswerQuality.PARTIAL or confidence == ConfidenceLevel.GUESS
    action = CombatAction.PLAYER_GLANCING if glancing else CombatAction.PLAYER_ATTACK

    # Only full-credit answers roll for a crit.
    if quality in (AnswerQuality.PERFECT, AnswerQuality.CORRECT):
        effective_crit = crit_chance_pct + tier_crit_bonus(evolution_tier)
        if roll_crit(effective_crit, rng):
            multiplier += CRIT_MULTIPLIER_BONUS
            action = CombatAction.PLAYER_CRITICAL

    damage = math.floor(attack_power * multiplier * tier_mult * mode_mult)
    return damage, action


def _describe(action: CombatAction, damage: int, enemy_name: str) -> str:
    if action == CombatAction.PLAYER_CRITICAL:
        return f"Critical hit! You deal {damage} damage to {enemy_name}!"
    if action == CombatAction.PLAYER_ATTACK:
        return f"You deal {damage} damage to {enemy_name}."
    if action == CombatAction.PLAYER_GLANCING:
        return f"Glancing blow! You deal {damage} damage to {enemy_name}."
    if action == CombatAction.ENEMY_ATTACK:
        return f"{enemy_name} attacks you for {damage} damage!"
    return f"{enemy_name} poisons you for {damage} damage!"
