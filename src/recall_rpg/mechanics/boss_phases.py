"""Multi-phase boss encounters — health-indexed phases, pure data, no I/O."""
from __future__ import annotations

from recall_rpg.models.boss import BossPhase, PhaseTransition
from recall_rpg.models.combat import EnemyTier

PHASE_1_THRESHOLD = 1.0
PHASE_2_THRESHOLD = 0.6
PHASE_3_THRESHOLD = 0.3


def get_boss_phases(enemy_name: str) -> list[BossPhase]:
    """The three phases of a boss, ordered from full health to near-death."""
    return [
        BossPhase(
            name="Awakening",
            hp_threshold=PHASE_1_THRESHOLD,
            description=f"{enemy_name} enters the battlefield.",
            damage_multiplier=1.0,
            xp_multiplier=1.0,
            hints_disabled=False,
            timer_reduction=0,
        ),
        BossPhase(
            name="Fury",
            hp_threshold=PHASE_2_THRESHOLD,
            description=f"{enemy_name} flies into a fury! Hints are no longer available.",
            damage_multiplier=1.5,
            xp_multiplier=1.25,
            hints_disabled=True,
            timer_reduction=0,
        ),
        BossPhase(
            name="Enrage",
            hp_threshold=PHASE_3_THRESHOLD,
            description=f"{enemy_name} is enraged! Damage doubled, timer shortened.",
            damage_multiplier=2.0,
            xp_multiplier=2.0,
            hints_disabled=True,
            timer_reduction=5,
        ),
    ]


def get_current_phase(phases: list[BossPhase], hp_fraction: float) -> BossPhase | None:
    """Return the phase whose health range contains ``hp_fraction``.

    A phase starts strictly below its threshold, so exactly 0.6 is still
    Awakening. At or above every threshold the first phase applies.
    """
    if not phases:
        return None
    for phase in reversed(phases):
        if hp_fraction < phase.hp_threshold:
            return phase
    return phases[0]


def has_phase_changed(phases: list[BossPhase], previous_fraction: float, current_fraction: float) -> PhaseTransition:
    """Detect whether a turn moved the boss into a different phase."""
    previous = get_current_phase(phases, previous_fraction)
    current = get_current_phase(phases, current_fraction)
    if previous is None or current is None or previous.name == current.name:
        return PhaseTransition(changed=False, new_phase=None)
    return PhaseTransition(changed=True, new_phase=current)


def is_boss_enemy(tier: EnemyTier | str) -> bool:
    """Boss and elite enemies fight in phases."""
    return tier in (EnemyTier.BOSS, EnemyTier.ELITE)
