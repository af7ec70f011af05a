from __future__ import annotations

import uuid
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field


class AnswerQuality(str, Enum):
    PERFECT = "perfect"
    CORRECT = "correct"
    PARTIAL = "partial"
    WRONG = "wrong"
    TIMEOUT = "timeout"


class ConfidenceLevel(str, Enum):
    INSTANT = "instant"
    KNEW = "knew"
    GUESS = "guess"


class RetrievalMode(str, Enum):
    STANDARD = "standard"
    REVERSED = "reversed"
    TEACH = "teach"
    CONNECT = "connect"


class EvolutionTier(IntEnum):
    BASE = 0
    GROWING = 1
    EVOLVED = 2
    ASCENDED = 3


class Card(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    front: str
    back: str = ""
    acceptable_answers: list[str] = Field(default_factory=list)
    deck_id: str = ""
