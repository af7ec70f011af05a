from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class WagerLevel(str, Enum):
    NONE = "none"
    LOW = "low"
    HIGH = "high"
    ALL_IN = "all_in"


class WagerResult(BaseModel):
    wager: WagerLevel = WagerLevel.NONE
    amount: int = 0
    is_correct: bool = False
    gold_delta: int = 0


class WagerSummary(BaseModel):
    total_wagered: int = 0
    total_won: int = 0
    total_lost: int = 0
    net_gold: int = 0
    wager_count: int = 0
