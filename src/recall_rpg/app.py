"""Application bootstrap — wires config, player stats and the combat session together."""
from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Any, Iterable

from rich.logging import RichHandler

from recall_rpg.engine.combat_session import CombatSession
from recall_rpg.mechanics.ascension import settings_for_ascension
from recall_rpg.mechanics.combat_math import coerce_tier
from recall_rpg.mechanics.player_stats import effective_stats
from recall_rpg.models.ability import PlayerClass
from recall_rpg.models.card import AnswerQuality, Card, ConfidenceLevel, RetrievalMode
from recall_rpg.models.combat import CombatResult, Enemy
from recall_rpg.models.item import Equipment
from recall_rpg.models.wager import WagerLevel

logger = logging.getLogger(__name__)


def _load_config() -> dict[str, Any]:
    """Load config.toml from project root."""
    import tomllib

    config_path = Path(__file__).parent.parent.parent / "config.toml"
    if config_path.exists():
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    return {}


def configure_logging(level: str | int = "WARNING") -> None:
    """Route std-lib logging through rich. Safe to call more than once."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


class CombatApp:
    """Builds encounters from config.toml defaults and plays scripted answers."""

    def __init__(self, config: dict[str, Any] | None = None):
        self.config = config if config is not None else _load_config()
        self._display = None

    @property
    def display(self):
        if self._display is None:
            from recall_rpg.cli.combat_display import CombatDisplay

            self._display = CombatDisplay()
        return self._display

    @property
    def player_cfg(self) -> dict[str, Any]:
        return self.config.get("player", {})

    @property
    def combat_cfg(self) -> dict[str, Any]:
        return self.config.get("combat", {})

    @property
    def log_level(self) -> str:
        return self.config.get("logging", {}).get("level", "WARNING")

    def build_session(
        self,
        enemy: Enemy,
        cards: Iterable[Card],
        *,
        player_class: PlayerClass | None = None,
        level: int | None = None,
        ascension: int | None = None,
        equipment: Iterable[Equipment] = (),
        seed: int | None = None,
    ) -> CombatSession:
        """Create a session, filling anything not given from config."""
        player_class = player_class or PlayerClass(self.player_cfg.get("class", "warrior"))
        level = level if level is not None else self.player_cfg.get("level", 1)
        ascension = ascension if ascension is not None else self.combat_cfg.get("ascension_level", 0)
        equipment = list(equipment)

        tier = coerce_tier(self.combat_cfg.get("evolution_tier", 0))
        mode = RetrievalMode(self.combat_cfg.get("retrieval_mode", "standard"))
        rng = random.Random(seed).random if seed is not None else random.random

        logger.debug(f"Building session: {player_class.value} L{level}, ascension {ascension}, tier {tier}")
        return CombatSession(
            enemy,
            cards,
            effective_stats(player_class, level, equipment),
            equipment=equipment,
            settings=settings_for_ascension(ascension),
            player_class=player_class,
            player_level=level,
            skill_points=self.player_cfg.get("skill_points", 0),
            player_gold=self.player_cfg.get("gold", 0),
            streak_bonus_pct=self.player_cfg.get("streak_bonus_pct", 0),
            retrieval_mode=mode,
            tier_lookup=lambda _card_id: tier,
            rng=rng,
        )

    def run_scripted(
        self,
        session: CombatSession,
        answers: Iterable[tuple[AnswerQuality, ConfidenceLevel | None]],
        abilities: dict[int, str] | None = None,
        wagers: dict[int, WagerLevel] | None = None,
    ) -> CombatResult:
        """Feed a fixed answer sequence into the session, rendering each turn.

        ``abilities`` maps a zero-based turn number to an ability key used
        just before that answer; ``wagers`` maps turns to a stake placed the
        same way.
        """
        abilities = abilities or {}
        wagers = wagers or {}
        self.display.show_combat_start(session)
        for turn, (quality, confidence) in enumerate(answers):
            if session.is_over:
                break
            if turn in abilities:
                ok, message = session.use_ability(abilities[turn])
                self.display.show_message(message, ok)
            if turn in wagers:
                ok, reason = session.place_wager(wagers[turn])
                if not ok:
                    self.display.show_message(reason, ok)
            before = len(session.state.events)
            outcome = session.submit_answer(quality, confidence)
            self.display.show_turn(session, outcome, session.state.events[before:])

        result = session.finish()
        self.display.show_combat_end(result)
        return result
