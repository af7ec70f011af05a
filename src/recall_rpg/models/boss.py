from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class BossPhase(BaseModel):
    name: str
    description: str = ""
    hp_threshold: float = 1.0
    damage_multiplier: float = 1.0
    xp_multiplier: float = 1.0
    hints_disabled: bool = False
    timer_reduction: int = 0


class PhaseTransition(BaseModel):
    changed: bool = False
    new_phase: Optional[BossPhase] = None
