"""Data models for word effects."""

from enum import Enum
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from ..board.models import Position


class EffectKind(str, Enum):
    REVEAL = "reveal"
    UNLOCK = "unlock"
    WEAKEN = "weaken"
    CLAIM = "claim"
    SHIFT = "shift"
    ROTATE = "rotate"
    REVERSE = "reverse"
    NOOP = "noop"


class Severity(str, Enum):
    """How much board state one effect may change."""
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"


class Trigger(str, Enum):
    """The word property that produced an effect."""
    LENGTH = "length"
    RARE_LETTER = "rare_letter"
    PALINDROME = "palindrome"
    REPEATED_LETTER = "repeated_letter"
    ALL_VOWELS = "all_vowels"
    ACTION_VERB = "action_verb"
    EMOTION_WORD = "emotion_word"
    DIRECTION_WORD = "direction_word"


class Effect(BaseModel):
    """
    A discrete board transformation.

    `region` lists target positions in priority order. Count-limited kinds
    (reveal, unlock, weaken, claim) affect at most `limit` eligible tiles
    from the region, in that order; `limit=None` means every eligible tile.
    Shifts use `axis`, `line` and `steps` instead of a region.
    """
    kind: EffectKind
    severity: Severity = Severity.MINOR
    trigger: Trigger
    region: List[Position] = Field(default_factory=list)
    limit: Optional[int] = Field(None, ge=0)
    axis: Optional[Literal["row", "column"]] = None
    line: Optional[int] = Field(None, ge=0)
    steps: int = 0
    turns: int = Field(0, ge=0)
    amplified: bool = False
    duplicate: bool = False
    description: str = ""

    @property
    def is_major(self) -> bool:
        return self.severity == Severity.MAJOR
