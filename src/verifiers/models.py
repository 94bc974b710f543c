"""Data models for move verification."""

from typing import Literal, Optional
from pydantic import BaseModel

from ..board.models import Position


ErrorKind = Literal["input", "validation", "state"]


class ValidationError(BaseModel):
    """A single reason a move was rejected."""
    code: str
    message: str
    kind: ErrorKind = "input"
    position: Optional[Position] = None
    word: Optional[str] = None
