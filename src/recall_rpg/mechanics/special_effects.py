"""Equipment special effects — parse authored effect text and apply it per turn."""
from __future__ import annotations

import re
from typing import Callable, Iterable

from recall_rpg.models.card import AnswerQuality
from recall_rpg.models.combat import CombatAction
from recall_rpg.models.item import Equipment, ParsedSpecialEffect, SpecialEffectResult, SpecialEffectType

_Builder = Callable[[re.Match[str]], tuple[SpecialEffectType, int]]

# Ordered (pattern, builder) pairs over the four authored phrasings.
_EFFECT_PATTERNS: list[tuple[re.Pattern[str], _Builder]] = [
    (
        re.compile(r"^Perfect answers deal \+(\d+) bonus damage$", re.IGNORECASE | re.ASCII),
        lambda m: (SpecialEffectType.BONUS_DAMAGE_ON_PERFECT, int(m.group(1))),
    ),
    (
        re.compile(r"^Correct answers heal (\d+) HP$", re.IGNORECASE | re.ASCII),
        lambda m: (SpecialEffectType.HEAL_ON_CORRECT, int(m.group(1))),
    ),
    (
        re.compile(r"^Critical hits deal double damage$", re.IGNORECASE | re.ASCII),
        lambda m: (SpecialEffectType.DOUBLE_CRIT_DAMAGE, 2),
    ),
    (
        re.compile(r"^\+(\d+)% gold from combat$", re.IGNORECASE | re.ASCII),
        lambda m: (SpecialEffectType.GOLD_BONUS_PCT, int(m.group(1))),
    ),
]


def parse_special_effect(text: str | None, item_name: str) -> ParsedSpecialEffect:
    """Decode one effect string. Unrecognized text becomes an inert UNKNOWN effect."""
    raw = text or ""
    for pattern, build in _EFFECT_PATTERNS:
        m = pattern.fullmatch(raw)
        if m:
            effect_type, value = build(m)
            return ParsedSpecialEffect(type=effect_type, value=value, item_name=item_name, raw=raw)
    return ParsedSpecialEffect(type=SpecialEffectType.UNKNOWN, value=0, item_name=item_name, raw=raw)


def parse_equipment_effects(items: Iterable[Equipment]) -> list[ParsedSpecialEffect]:
    """Parse every equipped item's effect text, dropping unknown results."""
    effects: list[ParsedSpecialEffect] = []
    for item in items:
        if not item.special_effect:
            continue
        parsed = parse_special_effect(item.special_effect, item.name)
        if parsed.type != SpecialEffectType.UNKNOWN:
            effects.append(parsed)
    return effects


def apply_special_effects(
    quality: AnswerQuality,
    action: CombatAction,
    effects: Iterable[ParsedSpecialEffect],
) -> SpecialEffectResult:
    """Work out which effects fire this turn. Same-type effects add together."""
    result = SpecialEffectResult()
    for effect in effects:
        if effect.type == SpecialEffectType.BONUS_DAMAGE_ON_PERFECT:
            if quality == AnswerQuality.PERFECT:
                result.bonus_damage += effect.value
                result.activations.append(f"{effect.item_name} activates: +{effect.value} bonus damage!")
        elif effect.type == SpecialEffectType.HEAL_ON_CORRECT:
            if quality in (AnswerQuality.PERFECT, AnswerQuality.CORRECT):
                result.heal_amount += effect.value
                result.activations.append(f"{effect.item_name} activates: heal {effect.value} HP!")
        elif effect.type == SpecialEffectType.DOUBLE_CRIT_DAMAGE:
            if action == CombatAction.PLAYER_CRITICAL:
                result.double_crit = True
                result.activations.append(f"{effect.item_name} activates: critical damage doubled!")
        elif effect.type == SpecialEffectType.GOLD_BONUS_PCT:
            # Passive: no activation message.
            result.gold_bonus_pct += effect.value
    return result


def equipment_gold_bonus_pct(effects: Iterable[ParsedSpecialEffect] | None) -> int:
    """Sum of every gold_bonus_pct effect's value."""
    if not effects:
        return 0
    return sum(e.value for e in effects if e.type == SpecialEffectType.GOLD_BONUS_PCT)
