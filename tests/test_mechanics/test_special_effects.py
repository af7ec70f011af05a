"""Tests for src/recall_rpg/mechanics/special_effects.py."""
from __future__ import annotations

import pytest

from recall_rpg.mechanics.special_effects import (
    apply_special_effects,
    equipment_gold_bonus_pct,
    parse_equipment_effects,
    parse_special_effect,
)
from recall_rpg.models.card import AnswerQuality
from recall_rpg.models.combat import CombatAction
from recall_rpg.models.item import Equipment, SpecialEffectType

T = SpecialEffectType


class TestParseSpecialEffect:
    @pytest.mark.parametrize("text, effect_type, value", [
        ("Perfect answers deal +5 bonus damage", T.BONUS_DAMAGE_ON_PERFECT, 5),
        ("perfect answers deal +12 BONUS damage", T.BONUS_DAMAGE_ON_PERFECT, 12),
        ("Correct answers heal 3 HP", T.HEAL_ON_CORRECT, 3),
        ("Critical hits deal double damage", T.DOUBLE_CRIT_DAMAGE, 2),
        ("+20% gold from combat", T.GOLD_BONUS_PCT, 20),
        ("+15% Gold From Combat", T.GOLD_BONUS_PCT, 15),
    ])
    def test_known_phrasings(self, text, effect_type, value):
        parsed = parse_special_effect(text, "Relic")
        assert parsed.type == effect_type
        assert parsed.value == value
        assert parsed.item_name == "Relic"
        assert parsed.raw == text

    @pytest.mark.parametrize("text", [
        None,
        "",
        "Makes you feel brave",
        "Perfect answers deal +five bonus damage",
        "Perfect answers deal +5 bonus damage to undead",
        "Critical hits deal triple damage",
        "  +15% gold from combat  ",
        "Correct answers heal 3 HP\n",
        "Correct answers heal \u0663 HP",
        "Perfect answers deal +\uff15 bonus damage",
    ])
    def test_unknown(self, text):
        parsed = parse_special_effect(text, "Trinket")
        assert parsed.type == T.UNKNOWN
        assert parsed.value == 0


class TestParseEquipmentEffects:
    def test_drops_unknown_and_missing(self, flaming_sword, healing_ring):
        items = [
            flaming_sword,
            Equipment(name="Plain Shield"),
            Equipment(name="Odd Charm", special_effect="Glows faintly"),
            healing_ring,
        ]
        effects = parse_equipment_effects(items)
        assert [e.item_name for e in effects] == ["Flaming Sword", "Healing Ring"]

    def test_empty(self):
        assert parse_equipment_effects([]) == []


class TestApplySpecialEffects:
    def test_aggregates_same_type(self):
        effects = [
            parse_special_effect("Correct answers heal 3 HP", "Ring"),
            parse_special_effect("Correct answers heal 4 HP", "Amulet"),
        ]
        result = apply_special_effects(AnswerQuality.CORRECT, CombatAction.PLAYER_ATTACK, effects)
        assert result.heal_amount == 7
        assert result.activations == [
            "Ring activates: heal 3 HP!",
            "Amulet activates: heal 4 HP!",
        ]

    @pytest.mark.parametrize("quality", [AnswerQuality.PARTIAL, AnswerQuality.WRONG, AnswerQuality.TIMEOUT])
    def test_nothing_fires_on_weak_answers(self, quality, flaming_sword, healing_ring):
        effects = parse_equipment_effects([flaming_sword, healing_ring])
        result = apply_special_effects(quality, CombatAction.PLAYER_GLANCING, effects)
        assert result.bonus_damage == 0
        assert result.heal_amount == 0
        assert result.activations == []

    def test_double_crit_only_on_crit(self):
        effects = [parse_special_effect("Critical hits deal double damage", "Gloves")]
        hit = apply_special_effects(AnswerQuality.PERFECT, CombatAction.PLAYER_ATTACK, effects)
        crit = apply_special_effects(AnswerQuality.PERFECT, CombatAction.PLAYER_CRITICAL, effects)
        assert hit.double_crit is False
        assert crit.double_crit is True
        assert crit.activations == ["Gloves activates: critical damage doubled!"]

    def test_gold_is_passive(self):
        effects = [parse_special_effect("+10% gold from combat", "Pouch")]
        result = apply_special_effects(AnswerQuality.PERFECT, CombatAction.PLAYER_ATTACK, effects)
        assert result.gold_bonus_pct == 10
        assert result.activations == []


class TestEquipmentGoldBonus:
    def test_sums_gold_effects(self, flaming_sword):
        effects = [
            parse_special_effect("+10% gold from combat", "Pouch"),
            parse_special_effect("+5% gold from combat", "Coin"),
            parse_special_effect(flaming_sword.special_effect, flaming_sword.name),
        ]
        assert equipment_gold_bonus_pct(effects) == 15

    @pytest.mark.parametrize("effects", [None, []])
    def test_none(self, effects):
        assert equipment_gold_bonus_pct(effects) == 0
