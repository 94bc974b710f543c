"""
Pydantic models for the engine layer.

Move results, puzzle progress, the per-move game context and the
session configuration/result types used by the session driver and CLI.
"""

from enum import Enum
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from ..board.models import Board, BoardSource, Position, ProceduralSource, PuzzleMode, WinCondition
from ..effects.models import Effect
from ..verifiers.models import ValidationError


GameMode = Literal["solo", "multiplayer"]

# Targets used when a caller gives no win condition
DEFAULT_TARGETS: Dict[PuzzleMode, int] = {
    PuzzleMode.SCORE_TARGET: 450,
    PuzzleMode.VAULT_BREAK: 0,
    PuzzleMode.HIDDEN_PHRASE: 0,
    PuzzleMode.TERRITORY_CONTROL: 60,
}


def default_win_condition(puzzle_mode: PuzzleMode) -> WinCondition:
    target = DEFAULT_TARGETS[puzzle_mode]
    descriptions = {
        PuzzleMode.SCORE_TARGET: f"Reach {target} points",
        PuzzleMode.VAULT_BREAK: "Unlock every vault",
        PuzzleMode.HIDDEN_PHRASE: "Reveal the hidden phrase",
        PuzzleMode.TERRITORY_CONTROL: f"Control {target}% of the territory",
    }
    return WinCondition(type=puzzle_mode, target=target, description=descriptions[puzzle_mode])


class Outcome(str, Enum):
    ONGOING = "ongoing"
    WIN = "win"
    LOSS = "loss"

    @property
    def is_terminal(self) -> bool:
        return self != Outcome.ONGOING


class Progress(BaseModel):
    """How far the board is from satisfying the win condition."""
    current: int = 0
    target: int = 0
    percentage: int = Field(0, ge=0, le=100)
    outcome: Outcome = Outcome.ONGOING


class GameContext(BaseModel):
    """State a caller threads between moves."""
    win_condition: WinCondition
    score: int = Field(0, ge=0)  # acting player's score before the move
    moves_made: int = Field(0, ge=0)
    game_mode: GameMode = "solo"
    turns_left: Optional[int] = None
    outcome: Outcome = Outcome.ONGOING


class MoveResult(BaseModel):
    """Everything a caller needs after submitting one move."""
    accepted: bool
    word: str = ""
    score: int = 0
    effects: List[Effect] = Field(default_factory=list)
    new_board: Board
    outcome: Outcome = Outcome.ONGOING
    progress: Progress = Field(default_factory=Progress)
    errors: List[ValidationError] = Field(default_factory=list)
    balance_clamped: bool = False
    consumes_turn: bool = False
    primary_effect: Optional[Effect] = None


# Session configuration

class MoveConfig(BaseModel):
    """One scripted move: who plays it and which tiles it selects."""
    player: Optional[str] = None
    positions: List[Position]


class SessionConfig(BaseModel):
    """Configuration for a scripted puzzle session."""
    board: BoardSource = Field(default_factory=ProceduralSource)
    puzzle_mode: Optional[PuzzleMode] = None
    win_condition: Optional[WinCondition] = None
    game_mode: GameMode = "solo"
    turn_limit: Optional[int] = Field(None, ge=1)
    players: List[str] = Field(default_factory=lambda: ["p1"])
    moves: List[MoveConfig] = Field(default_factory=list)
    replenish: bool = False
    seed: Optional[int] = None

    @model_validator(mode="after")
    def _check_players(self) -> "SessionConfig":
        if not self.players:
            raise ValueError("A session needs at least one player")
        if len(set(self.players)) != len(self.players):
            raise ValueError(f"Player ids must be unique: {self.players}")
        if self.game_mode == "solo" and len(self.players) != 1:
            raise ValueError("Solo sessions take exactly one player")
        for move in self.moves:
            if move.player is not None and move.player not in self.players:
                raise ValueError(f"Move names unknown player '{move.player}'")
        return self

    @property
    def num_players(self) -> int:
        return len(self.players)


class TurnRecord(BaseModel):
    """Result of one played move, as kept in the session history."""
    player_id: str
    turn_number: int
    positions: List[Position]
    word: str = ""
    accepted: bool
    score: int = 0
    total_score: int = 0
    effects: List[Effect] = Field(default_factory=list)
    errors: List[ValidationError] = Field(default_factory=list)
    outcome: Outcome = Outcome.ONGOING
    percentage: int = 0
    balance_clamped: bool = False
    turns_left: Optional[int] = None


class SessionResult(BaseModel):
    """Result of a complete session."""
    config: SessionConfig
    puzzle_mode: PuzzleMode
    win_condition: WinCondition
    winner: Optional[str] = None
    outcome: Outcome = Outcome.ONGOING
    end_reason: str = ""
    total_turns: int = 0
    moves_accepted: int = 0
    scores: Dict[str, int] = Field(default_factory=dict)
    progress: Progress = Field(default_factory=Progress)
    turn_history: List[TurnRecord] = Field(default_factory=list)
    final_board: Optional[Board] = None
    started_at: str = ""
    ended_at: str = ""
    duration_seconds: float = 0.0
