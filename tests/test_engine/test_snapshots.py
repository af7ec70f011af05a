"""Tests for src/recall_rpg/engine/snapshots.py."""
from __future__ import annotations

import pytest

from recall_rpg.engine import snapshots
from recall_rpg.engine.combat_session import CombatSession
from recall_rpg.models.ability import AbilityEffectType, ActiveAbilityEffect
from recall_rpg.models.card import AnswerQuality


@pytest.fixture
def session(goblin, cards, stats, no_crit_rng):
    return CombatSession(goblin, cards, stats, rng=no_crit_rng, player_gold=50)


class TestCapture:
    def test_copies_are_independent(self, session):
        session.add_effect(ActiveAbilityEffect(type=AbilityEffectType.DAMAGE_BOOST, value=2))
        snap = snapshots.capture(session)

        session.state.enemy.hp = 1
        session.queue.append(session.queue[0])
        session.requeue_counts["c1"] = 1
        session.active_effects[0].value = 9

        assert snap.state.enemy.hp == 100
        assert len(snap.queue) == 5
        assert snap.requeue_counts == {}
        assert snap.active_effects[0].value == 2

    def test_fields(self, session):
        session.submit_answer(AnswerQuality.CORRECT)
        snap = snapshots.capture(session)
        assert snap.state == session.state
        assert snap.skill_points == session.skill_points
        assert snap.current_phase is None
        assert [r.card_id for r in snap.card_results] == ["c1"]


class TestRestore:
    def test_round_trip(self, session):
        snap = snapshots.capture(session)
        session.submit_answer(AnswerQuality.WRONG)
        session.skill_points = 7
        snapshots.restore(session, snap)
        assert session.state.player_hp == 100
        assert session.state.current_card_index == 0
        assert len(session.queue) == 5
        assert session.skill_points == 0
        assert session.card_results == []
