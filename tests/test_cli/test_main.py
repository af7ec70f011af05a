"""Tests for src/recall_rpg/cli/main.py."""
from __future__ import annotations

import pytest
import typer
from typer.testing import CliRunner

from recall_rpg.cli.main import _parse_abilities, _parse_answers, _parse_wagers, app
from recall_rpg.models.card import AnswerQuality, ConfidenceLevel
from recall_rpg.models.wager import WagerLevel

runner = CliRunner()


class TestParseAnswers:
    def test_qualities_and_confidence(self):
        assert _parse_answers("perfect, correct:guess ,TIMEOUT") == [
            (AnswerQuality.PERFECT, None),
            (AnswerQuality.CORRECT, ConfidenceLevel.GUESS),
            (AnswerQuality.TIMEOUT, None),
        ]

    @pytest.mark.parametrize("raw", ["banana", "perfect:sure", "", " , "])
    def test_rejects(self, raw):
        with pytest.raises(typer.BadParameter):
            _parse_answers(raw)


class TestParseAbilities:
    def test_one_based_turns(self):
        assert _parse_abilities(["1:endure", "3:battle_cry"]) == {0: "endure", 2: "battle_cry"}

    @pytest.mark.parametrize("entry", ["endure", "0:endure", "x:endure", "2:"])
    def test_rejects(self, entry):
        with pytest.raises(typer.BadParameter):
            _parse_abilities([entry])


class TestParseWagers:
    def test_levels(self):
        assert _parse_wagers(["1:low", "2:ALL_IN"]) == {0: WagerLevel.LOW, 1: WagerLevel.ALL_IN}

    @pytest.mark.parametrize("entry", ["1:huge", "low", "0:high"])
    def test_rejects(self, entry):
        with pytest.raises(typer.BadParameter):
            _parse_wagers([entry])


class TestSimulate:
    def test_victory(self):
        result = runner.invoke(app, ["simulate", "--answers", "perfect,perfect,perfect", "--hp", "30", "--seed", "1"])
        assert result.exit_code == 0
        assert "Victory!" in result.output

    def test_defeat(self):
        result = runner.invoke(app, ["simulate", "--answers", "wrong", "--hp", "500"])
        assert result.exit_code == 1
        assert "Defeat" in result.output

    def test_boss_fight(self):
        result = runner.invoke(app, [
            "simulate", "--answers", "perfect,perfect", "--tier", "boss", "--hp", "40", "--enemy", "Lich",
        ])
        assert "BOSS FIGHT" in result.output
        assert "Fury" in result.output or "Enrage" in result.output

    def test_ability(self):
        result = runner.invoke(app, [
            "simulate", "--answers", "wrong,perfect", "--class", "warrior", "--level", "3",
            "--ability", "1:endure", "--hp", "500",
        ])
        assert "Endure activated!" in result.output

    def test_wager_label(self):
        result = runner.invoke(app, [
            "simulate", "--answers", "perfect", "--hp", "10", "--wager", "1:high", "--seed", "3",
        ])
        assert result.exit_code == 0
        assert "Wager High (25g): +25 gold" in result.output

    def test_bad_wager(self):
        result = runner.invoke(app, ["simulate", "--answers", "perfect", "--wager", "1:huge"])
        assert result.exit_code == 2

    def test_bad_answers(self):
        result = runner.invoke(app, ["simulate", "--answers", "banana"])
        assert result.exit_code == 2

    def test_bad_tier(self):
        result = runner.invoke(app, ["simulate", "--answers", "perfect", "--tier", "dragon"])
        assert result.exit_code == 2


class TestParseEffect:
    def test_known(self):
        result = runner.invoke(app, ["parse-effect", "Correct answers heal 3 HP", "--item", "Ring"])
        assert result.exit_code == 0
        assert "heal_on_correct value=3 item=Ring" in result.output

    def test_unknown(self):
        result = runner.invoke(app, ["parse-effect", "Smells of cheese"])
        assert "unknown value=0" in result.output


class TestPhases:
    def test_lists_phases(self):
        result = runner.invoke(app, ["phases", "Lich"])
        assert result.exit_code == 0
        for name in ("Awakening", "Fury", "Enrage"):
            assert name in result.output


class TestAscension:
    def test_lists_modifiers(self):
        result = runner.invoke(app, ["ascension", "--level", "3"])
        assert result.exit_code == 0
        assert "Ascension Modifiers" in result.output
        for word in ("Hardened", "Venomous", "Nightmare"):
            assert word in result.output
