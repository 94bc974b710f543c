"""Move orchestration, scoring, progress and the session driver for VERBLOC."""

from .models import (
    GameMode,
    Outcome,
    Progress,
    GameContext,
    MoveResult,
    MoveConfig,
    SessionConfig,
    TurnRecord,
    SessionResult,
    default_win_condition,
)
from .scoring import score_word
from .progress import evaluate_progress
from .moves import submit_move, clamp_board_progress
from .session import PuzzleSession

__all__ = [
    # Models
    "GameMode",
    "Outcome",
    "Progress",
    "GameContext",
    "MoveResult",
    "MoveConfig",
    "SessionConfig",
    "TurnRecord",
    "SessionResult",
    "default_win_condition",
    # Engine
    "score_word",
    "evaluate_progress",
    "submit_move",
    "clamp_board_progress",
    "PuzzleSession",
]
