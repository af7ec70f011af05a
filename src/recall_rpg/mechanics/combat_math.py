"""Combat math — multiplier tables and damage helpers, no I/O."""
from __future__ import annotations

import logging

from recall_rpg.models.card import AnswerQuality, ConfidenceLevel, EvolutionTier, RetrievalMode

logger = logging.getLogger(__name__)

CRIT_MULTIPLIER_BONUS = 0.5
TIMEOUT_POISON_DAMAGE = 5

# (quality, confidence) -> base damage multiplier; None confidence behaves like KNEW.
_PERFECT_MULTIPLIERS: dict[ConfidenceLevel, float] = {
    ConfidenceLevel.INSTANT: 2.5,
    ConfidenceLevel.KNEW: 2.0,
    ConfidenceLevel.GUESS: 1.0,
}

_CORRECT_MULTIPLIERS: dict[ConfidenceLevel, float] = {
    ConfidenceLevel.INSTANT: 1.5,
    ConfidenceLevel.KNEW: 1.0,
    ConfidenceLevel.GUESS: 0.5,
}

PARTIAL_MULTIPLIER = 0.5

_TIER_DAMAGE: dict[EvolutionTier, float] = {
    EvolutionTier.BASE: 1.0,
    EvolutionTier.GROWING: 1.25,
    EvolutionTier.EVOLVED: 1.5,
    EvolutionTier.ASCENDED: 2.0,
}

# Tier 1 grants no crit bonus.
_TIER_CRIT_BONUS: dict[EvolutionTier, int] = {
    EvolutionTier.BASE: 0,
    EvolutionTier.GROWING: 0,
    EvolutionTier.EVOLVED: 10,
    EvolutionTier.ASCENDED: 25,
}

_MODE_DAMAGE: dict[RetrievalMode, float] = {
    RetrievalMode.STANDARD: 1.0,
    RetrievalMode.REVERSED: 1.1,
    RetrievalMode.TEACH: 1.5,
    RetrievalMode.CONNECT: 1.2,
}


def coerce_tier(tier: int | EvolutionTier | None) -> EvolutionTier:
    """Map any tier-like value onto an EvolutionTier, falling back to tier 0."""
    if tier is None:
        return EvolutionTier.BASE
    try:
        return EvolutionTier(int(tier))
    except (TypeError, ValueError):
        logger.debug(f"Unknown evolution tier {tier!r}, using tier 0")
        return EvolutionTier.BASE


def tier_damage_multiplier(tier: int | EvolutionTier | None) -> float:
    """Damage multiplier granted by a card's evolution tier."""
    return _TIER_DAMAGE[coerce_tier(tier)]


def tier_crit_bonus(tier: int | EvolutionTier | None) -> int:
    """Crit-chance bonus (percentage points) granted by a card's evolution tier."""
    return _TIER_CRIT_BONUS[coerce_tier(tier)]


def mode_damage_multiplier(mode: RetrievalMode | None) -> float:
    """Damage multiplier for the retrieval mode a card was asked in."""
    return _MODE_DAMAGE[mode or RetrievalMode.STANDARD]


def base_damage_multiplier(quality: AnswerQuality, confidence: ConfidenceLevel | None = None) -> float:
    """Base multiplier for an offensive answer. Partial ignores confidence.

    Returns 0.0 for wrong and timeout, which never deal damage to the enemy.
    """
    level = confidence or ConfidenceLevel.KNEW
    if quality == AnswerQuality.PERFECT:
        return _PERFECT_MULTIPLIERS[level]
    if quality == AnswerQuality.CORRECT:
        return _CORRECT_MULTIPLIERS[level]
    if quality == AnswerQuality.PARTIAL:
        return PARTIAL_MULTIPLIER
    return 0.0


def enemy_damage(enemy_attack: int, player_defense: int) -> int:
    """Damage a player takes on a failed answer: attack minus defense, minimum 1."""
    return max(1, enemy_attack - player_defense)


def is_offensive(quality: AnswerQuality) -> bool:
    return quality in (AnswerQuality.PERFECT, AnswerQuality.CORRECT, AnswerQuality.PARTIAL)


def is_correct(quality: AnswerQuality) -> bool:
    """Perfect and Correct count as correct; Partial does not."""
    return quality in (AnswerQuality.PERFECT, AnswerQuality.CORRECT)


def is_failed(quality: AnswerQuality) -> bool:
    return quality in (AnswerQuality.WRONG, AnswerQuality.TIMEOUT)
