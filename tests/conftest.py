"""Shared fixtures for the recall-rpg test suite."""
from __future__ import annotations

import pytest

from recall_rpg.mechanics.turn_resolver import create_combat_state
from recall_rpg.models.card import Card
from recall_rpg.models.combat import CombatState, Enemy, EnemyTier
from recall_rpg.models.item import Equipment
from recall_rpg.models.player import EffectiveStats


def make_enemy(hp: int = 100, attack: int = 10, tier: EnemyTier = EnemyTier.COMMON, **kwargs) -> Enemy:
    return Enemy(
        name=kwargs.pop("name", "Goblin"),
        tier=tier,
        hp=hp,
        max_hp=kwargs.pop("max_hp", hp),
        attack=attack,
        xp_reward=kwargs.pop("xp_reward", 50),
        gold_reward=kwargs.pop("gold_reward", 50),
    )


def make_cards(count: int) -> list[Card]:
    return [Card(id=f"c{i}", front=f"Q{i}", back=f"A{i}") for i in range(1, count + 1)]


def no_crit() -> float:
    return 1.0


def always_crit() -> float:
    return 0.0


@pytest.fixture
def goblin() -> Enemy:
    return make_enemy()


@pytest.fixture
def combat_state(goblin) -> CombatState:
    return create_combat_state(goblin, player_max_hp=100, player_hp=100, card_count=10)


@pytest.fixture
def cards() -> list[Card]:
    return make_cards(5)


@pytest.fixture
def stats() -> EffectiveStats:
    return EffectiveStats(max_hp=100, attack=10, defense=3, crit_chance_pct=0)


@pytest.fixture
def flaming_sword() -> Equipment:
    return Equipment(name="Flaming Sword", attack_bonus=2, special_effect="Perfect answers deal +5 bonus damage")


@pytest.fixture
def healing_ring() -> Equipment:
    return Equipment(name="Healing Ring", special_effect="Correct answers heal 3 HP")


@pytest.fixture
def enemy_factory():
    return make_enemy


@pytest.fixture
def card_factory():
    return make_cards


@pytest.fixture
def no_crit_rng():
    return no_crit


@pytest.fixture
def crit_rng():
    return always_crit
