"""Tests for src/recall_rpg/mechanics/class_abilities.py."""
from __future__ import annotations

import pytest

from recall_rpg.mechanics.class_abilities import (
    absorbs_damage,
    apply_ability_modifiers,
    can_use_ability,
    find_ability,
    get_class_abilities,
    get_unlocked_abilities,
    heal_amount,
    tick_cooldowns,
    tick_effects,
)
from recall_rpg.models.ability import AbilityEffectType, ActiveAbility, ActiveAbilityEffect, PlayerClass
from recall_rpg.models.card import AnswerQuality

Q = AnswerQuality


class TestCatalog:
    def test_warrior(self):
        keys = [a.key for a in get_class_abilities(PlayerClass.WARRIOR)]
        assert keys == ["endure", "battle_cry", "fortify"]

    def test_scholar_has_no_combat_abilities(self):
        assert get_class_abilities(PlayerClass.SCHOLAR) == []

    @pytest.mark.parametrize("level, expected", [
        (1, []),
        (3, ["endure"]),
        (7, ["endure", "battle_cry"]),
        (12, ["endure", "battle_cry", "fortify"]),
    ])
    def test_unlocks(self, level, expected):
        assert [a.key for a in get_unlocked_abilities(PlayerClass.WARRIOR, level)] == expected

    def test_find(self):
        assert find_ability(PlayerClass.ROGUE, "shadow_strike").name == "Shadow Strike"
        assert find_ability(PlayerClass.ROGUE, "endure") is None


class TestCanUseAbility:
    def test_ok(self):
        endure = find_ability(PlayerClass.WARRIOR, "endure")
        assert can_use_ability(endure, 3, 1, []) == (True, "")

    def test_level_locked(self):
        fortify = find_ability(PlayerClass.WARRIOR, "fortify")
        ok, reason = can_use_ability(fortify, 5, 10, [])
        assert ok is False
        assert "level 12" in reason

    def test_not_enough_sp(self):
        cry = find_ability(PlayerClass.WARRIOR, "battle_cry")
        ok, reason = can_use_ability(cry, 10, 1, [])
        assert ok is False
        assert "SP" in reason

    def test_on_cooldown(self):
        endure = find_ability(PlayerClass.WARRIOR, "endure")
        active = [ActiveAbility(ability=endure, remaining_cooldown=2)]
        ok, reason = can_use_ability(endure, 3, 5, active)
        assert ok is False
        assert "cooldown" in reason


class TestTicking:
    def test_cooldowns(self):
        endure = find_ability(PlayerClass.WARRIOR, "endure")
        active = [ActiveAbility(ability=endure, remaining_cooldown=2)]
        once = tick_cooldowns(active)
        assert once[0].remaining_cooldown == 1
        assert tick_cooldowns(once) == []
        assert active[0].remaining_cooldown == 2

    def test_effects(self):
        effects = [
            ActiveAbilityEffect(type=AbilityEffectType.DAMAGE_BOOST, value=2, duration=1),
            ActiveAbilityEffect(type=AbilityEffectType.ABSORB_DAMAGE, duration=3),
        ]
        ticked = tick_effects(effects)
        assert len(ticked) == 1
        assert ticked[0].type == AbilityEffectType.ABSORB_DAMAGE
        assert ticked[0].duration == 2


class TestModifiers:
    @pytest.mark.parametrize("quality, attack", [
        (Q.PERFECT, 30),
        (Q.CORRECT, 30),
        (Q.PARTIAL, 10),
        (Q.WRONG, 10),
    ])
    def test_damage_boost(self, quality, attack):
        effects = [ActiveAbilityEffect(type=AbilityEffectType.DAMAGE_BOOST, value=3)]
        assert apply_ability_modifiers(effects, quality, 10, 5) == (attack, 5)

    @pytest.mark.parametrize("quality, attack", [(Q.PERFECT, 44), (Q.CORRECT, 11)])
    def test_critical_boost_perfect_only(self, quality, attack):
        effects = [ActiveAbilityEffect(type=AbilityEffectType.CRITICAL_BOOST, value=4)]
        assert apply_ability_modifiers(effects, quality, 11, 5)[0] == attack

    def test_rounds_up(self):
        effects = [ActiveAbilityEffect(type=AbilityEffectType.DAMAGE_BOOST, value=1.5)]
        assert apply_ability_modifiers(effects, Q.CORRECT, 11, 0)[0] == 17

    def test_absorb(self):
        effects = [ActiveAbilityEffect(type=AbilityEffectType.ABSORB_DAMAGE)]
        assert absorbs_damage(effects, Q.WRONG) is True
        assert absorbs_damage(effects, Q.TIMEOUT) is True
        assert absorbs_damage(effects, Q.CORRECT) is False
        assert absorbs_damage([], Q.WRONG) is False

    def test_heal_amount(self):
        fortify = find_ability(PlayerClass.WARRIOR, "fortify")
        assert heal_amount(fortify.effect, 125) == 25
        assert heal_amount(fortify.effect, 121) == 25
