"""Undo snapshots — capture and restore a combat session's mutable bookkeeping."""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from recall_rpg.models.ability import ActiveAbility, ActiveAbilityEffect
from recall_rpg.models.boss import BossPhase
from recall_rpg.models.card import Card
from recall_rpg.models.combat import CombatCardResult, CombatState
from recall_rpg.models.wager import WagerLevel, WagerResult

if TYPE_CHECKING:
    from recall_rpg.engine.combat_session import CombatSession

logger = logging.getLogger(__name__)


@dataclass
class SessionSnapshot:
    """Everything an answer can change, as it was just before the answer."""
    state: CombatState
    queue: list[Card] = field(default_factory=list)
    requeue_counts: dict[str, int] = field(default_factory=dict)
    active_effects: list[ActiveAbilityEffect] = field(default_factory=list)
    active_abilities: list[ActiveAbility] = field(default_factory=list)
    skill_points: int = 0
    current_wager: WagerLevel = WagerLevel.NONE
    wager_results: list[WagerResult] = field(default_factory=list)
    card_results: list[CombatCardResult] = field(default_factory=list)
    current_phase: Optional[BossPhase] = None


def capture(session: CombatSession) -> SessionSnapshot:
    """Deep-copy the session's per-answer state."""
    return SessionSnapshot(
        state=session.state.model_copy(deep=True),
        queue=list(session.queue),
        requeue_counts=dict(session.requeue_counts),
        active_effects=copy.deepcopy(session.active_effects),
        active_abilities=copy.deepcopy(session.active_abilities),
        skill_points=session.skill_points,
        current_wager=session.current_wager,
        wager_results=copy.deepcopy(session.wager_results),
        card_results=copy.deepcopy(session.card_results),
        current_phase=session.current_phase,
    )


def restore(session: CombatSession, snapshot: SessionSnapshot) -> None:
    """Put the session back exactly as captured."""
    session.state = snapshot.state
    session.queue = list(snapshot.queue)
    session.requeue_counts = dict(snapshot.requeue_counts)
    session.active_effects = list(snapshot.active_effects)
    session.active_abilities = list(snapshot.active_abilities)
    session.skill_points = snapshot.skill_points
    session.current_wager = snapshot.current_wager
    session.wager_results = list(snapshot.wager_results)
    session.card_results = list(snapshot.card_results)
    session.current_phase = snapshot.current_phase
    logger.debug(f"Restored snapshot at card {snapshot.state.current_card_index}")
