"""Validates player requests against the current combat session."""
from __future__ import annotations

from typing import TYPE_CHECKING

from recall_rpg.models.wager import WagerLevel

if TYPE_CHECKING:
    from recall_rpg.engine.combat_session import CombatSession


def validate_answer(session: CombatSession) -> tuple[bool, str]:
    """Check that an answer can be resolved right now."""
    if session.finished:
        return False, "The encounter has already ended."
    if session.is_over:
        return False, "The encounter is over."
    if session.current_card is None:
        return False, "There are no cards left to answer."
    return True, ""


def validate_wager(session: CombatSession, level: WagerLevel) -> tuple[bool, str]:
    """Check that a wager can be placed before the next answer."""
    ok, reason = validate_answer(session)
    if not ok:
        return False, reason
    if level != WagerLevel.NONE and session.available_gold <= 0:
        return False, "You have no gold to wager."
    return True, ""


def validate_ability(session: CombatSession) -> tuple[bool, str]:
    """Check that the session is in a state where abilities may be used."""
    if session.finished or session.is_over:
        return False, "Abilities can only be used during combat."
    return True, ""
