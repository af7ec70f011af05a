"""Tests for src/recall_rpg/mechanics/ascension.py."""
from __future__ import annotations

import pytest

from recall_rpg.mechanics.ascension import (
    ASCENSION_MODIFIERS,
    MAX_ASCENSION,
    settings_for_ascension,
    starting_hp,
)
from recall_rpg.models.player import CombatSettings


class TestSettingsForAscension:
    def test_baseline(self):
        assert settings_for_ascension(0) == CombatSettings()

    def test_level_two_timer(self):
        assert settings_for_ascension(2).timer_seconds == 25

    def test_level_three_no_partial(self):
        settings = settings_for_ascension(3)
        assert settings.partial_credit_enabled is False
        assert settings.timer_seconds == 25

    def test_cumulative_max(self):
        settings = settings_for_ascension(MAX_ASCENSION)
        assert settings.timer_seconds == 25
        assert settings.partial_credit_enabled is False
        assert settings.starting_hp_percent == 80
        assert settings.hints_enabled is False
        assert settings.enemy_poison_damage == 2

    def test_clamped(self):
        assert settings_for_ascension(99) == settings_for_ascension(MAX_ASCENSION)
        assert settings_for_ascension(-4) == CombatSettings()

    def test_timer_floor(self):
        base = CombatSettings(timer_seconds=12)
        assert settings_for_ascension(2, base).timer_seconds == 10

    def test_base_untouched(self):
        base = CombatSettings()
        settings_for_ascension(10, base)
        assert base == CombatSettings()

    def test_every_level_described(self):
        assert sorted(ASCENSION_MODIFIERS) == list(range(1, MAX_ASCENSION + 1))


class TestStartingHp:
    @pytest.mark.parametrize("base, percent, expected", [
        (100, 100, 100),
        (100, 80, 80),
        (125, 80, 100),
        (1, 80, 1),
    ])
    def test_starting_hp(self, base, percent, expected):
        assert starting_hp(base, CombatSettings(starting_hp_percent=percent)) == expected
