import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..board.generator import build_board, needs_catch_up
from ..board.grid import render_board
from ..board.layouts import LayoutLibrary, default_library
from ..board.models import Board, FixedSource, Position, PuzzleMode, WinCondition
from ..effects.models import Effect
from ..verifiers.dictionary import WordIndex
from ..verifiers.verify import is_position
from .models import (
    GameContext,
    MoveResult,
    Outcome,
    Progress,
    SessionConfig,
    SessionResult,
    TurnRecord,
    default_win_condition,
)
from .moves import submit_move
from .progress import evaluate_progress

log = logging.getLogger("verbloc")


class PuzzleSession:
    """
    In-memory driver for one puzzle game.

    Threads the board, per-player scores, moves made, turns left, the
    previous move's primary effect and the outcome between `submit_move`
    calls. Rejected moves are recorded but do not consume a turn.

    Attributes:
        config: Session configuration
        board: Current board
        puzzle_mode: Active puzzle mode
        win_condition: Goal of the puzzle
        scores: Total score per player
        turn_history: Every move played, accepted or not
        outcome: Current outcome
    """

    def __init__(
        self,
        config: SessionConfig,
        board: Board,
        puzzle_mode: PuzzleMode,
        win_condition: WinCondition,
        index: Optional[WordIndex] = None,
    ):
        self.config = config
        self.board = board
        self.puzzle_mode = puzzle_mode
        self.win_condition = win_condition
        self.index = index
        self.scores: Dict[str, int] = {pid: 0 for pid in config.players}
        self.turn_history: List[TurnRecord] = []
        self.moves_made = 0
        self.outcome = Outcome.ONGOING
        self.winner: Optional[str] = None
        self.end_reason = ""
        self.previous_effect: Optional[Effect] = None
        self.progress = Progress()
        self.started_at = datetime.now()

        turn_limit = config.turn_limit or win_condition.turn_limit
        self.turn_limit = turn_limit
        self.turns_left: Optional[int] = turn_limit

    @classmethod
    def create(
        cls,
        config: Optional[SessionConfig] = None,
        library: Optional[LayoutLibrary] = None,
        index: Optional[WordIndex] = None,
        **config_kwargs,
    ) -> "PuzzleSession":
        """
        Factory method to build a session from its configuration.

        A fixed layout supplies the puzzle mode and win condition unless the
        config overrides them. A procedural board needs the puzzle mode from
        the config and falls back to a default win condition.
        """
        if config is None:
            config = SessionConfig(**config_kwargs)

        board = build_board(config.board, library)

        puzzle_mode = config.puzzle_mode
        win_condition = config.win_condition
        if isinstance(config.board, FixedSource):
            layout = (library or default_library()).get(config.board.layout_id)
            puzzle_mode = puzzle_mode or layout.puzzle_mode
            if win_condition is None and puzzle_mode == layout.puzzle_mode:
                win_condition = layout.win_condition

        puzzle_mode = puzzle_mode or PuzzleMode.SCORE_TARGET
        win_condition = win_condition or default_win_condition(puzzle_mode)
        if win_condition.type != puzzle_mode:
            raise ValueError(
                f"Win condition is for {win_condition.type.value}, session plays {puzzle_mode.value}"
            )

        session = cls(config, board, puzzle_mode, win_condition, index=index)
        session.progress = evaluate_progress(
            board, puzzle_mode, win_condition, score=0, moves_made=0,
            game_mode=config.game_mode, turns_left=session.turns_left,
            player_id=config.players[0],
        )
        log.info(
            "Created %s session on a %sx%s board: %s",
            puzzle_mode.value, board.size, board.size, win_condition.description,
        )
        return session

    @property
    def is_complete(self) -> bool:
        return self.outcome.is_terminal or self.end_reason != ""

    def get_current_player(self) -> str:
        """Player whose turn it is (rotates on accepted moves)."""
        return self.config.players[self.moves_made % len(self.config.players)]

    def _context(self, player_id: str) -> GameContext:
        return GameContext(
            win_condition=self.win_condition,
            score=self.scores[player_id],
            moves_made=self.moves_made,
            game_mode=self.config.game_mode,
            turns_left=self.turns_left,
            outcome=self.outcome,
        )

    def play(self, player_id: Optional[str], positions: List[Position]) -> MoveResult:
        """
        Submit one move for a player.

        Args:
            player_id: Acting player (defaults to the current player)
            positions: Selected positions, in selection order

        Returns:
            The MoveResult from submit_move
        """
        player_id = player_id or self.get_current_player()
        if player_id not in self.scores:
            raise KeyError(f"Unknown player: {player_id}")

        replenish_seed = None
        catch_up = False
        if self.config.replenish:
            replenish_seed = (self.config.seed or 0) * 1_000_003 + self.moves_made
            catch_up = needs_catch_up(player_id, self.scores)

        result = submit_move(
            self.board,
            positions,
            self.puzzle_mode,
            player_id,
            previous_effect=self.previous_effect,
            context=self._context(player_id),
            index=self.index,
            replenish_seed=replenish_seed,
            catch_up=catch_up,
        )

        if result.accepted:
            self.board = result.new_board
            self.scores[player_id] += result.score
            self.moves_made += 1
            self.previous_effect = result.primary_effect
            if self.turns_left is not None and self.config.game_mode == "solo":
                self.turns_left -= 1
            self.progress = result.progress
            self._update_outcome(player_id, result.outcome)

        self.record_turn(TurnRecord(
            player_id=player_id,
            turn_number=len(self.turn_history) + 1,
            positions=[Position(*p) for p in positions if is_position(p)],
            word=result.word,
            accepted=result.accepted,
            score=result.score,
            total_score=self.scores[player_id],
            effects=result.effects,
            errors=result.errors,
            outcome=self.outcome,
            percentage=result.progress.percentage,
            balance_clamped=result.balance_clamped,
            turns_left=self.turns_left,
        ))
        return result

    def _update_outcome(self, player_id: str, outcome: Outcome) -> None:
        if outcome == Outcome.WIN:
            self.outcome = outcome
            self.winner = player_id
            self.end_reason = f"{player_id} completed the puzzle: {self.win_condition.description}"
        elif outcome == Outcome.LOSS:
            self.outcome = outcome
            self.end_reason = f"Out of turns ({self.turn_limit})"
        elif (
            self.config.game_mode == "multiplayer"
            and self.turn_limit is not None
            and self.moves_made >= self.turn_limit
        ):
            self.end_reason = f"Turn limit ({self.turn_limit}) reached"
            self.winner = self._leader()

    def _leader(self) -> Optional[str]:
        best = max(self.scores.values())
        leaders = [pid for pid, score in self.scores.items() if score == best]
        return leaders[0] if len(leaders) == 1 else None

    def record_turn(self, record: TurnRecord) -> None:
        """Record a played move in history."""
        self.turn_history.append(record)

    def run(
        self,
        on_turn: Optional[Callable[[TurnRecord], None]] = None,
        verbose: bool = False,
        show_board: bool = False,
    ) -> SessionResult:
        """
        Play every scripted move from the config until the session ends.

        Args:
            on_turn: Optional callback called after each move
            verbose: If True, print progress to stdout
            show_board: If True, print the board after each accepted move

        Returns:
            SessionResult for the session
        """
        if verbose:
            print(f"Puzzle: {self.puzzle_mode.value} - {self.win_condition.description}")
            print(f"Players: {', '.join(self.config.players)}")
            if self.turn_limit:
                print(f"Turn limit: {self.turn_limit}")
            print(render_board(self.board))
            print("-" * 40)

        for move in self.config.moves:
            if self.is_complete:
                break

            result = self.play(move.player, move.positions)
            record = self.turn_history[-1]

            if verbose:
                print(f"\nTurn {record.turn_number}: {record.player_id}")
                if result.accepted:
                    print(f"Word: {result.word} (+{result.score}, total {record.total_score})")
                    for effect in result.effects:
                        print(f"  * {effect.description or effect.kind.value}")
                    if result.balance_clamped:
                        print("  (balance clamp applied)")
                    print(f"Progress: {result.progress.current}/{result.progress.target} "
                          f"({result.progress.percentage}%)")
                else:
                    print("Rejected:")
                    for err in result.errors:
                        print(f"  - {err.message}")
                if show_board and result.accepted:
                    print(render_board(self.board, selected=move.positions))

            if on_turn:
                on_turn(record)

        if not self.is_complete:
            self.end_reason = "Scripted moves exhausted"

        if verbose:
            print("-" * 40)
            print(f"Session complete: {self.end_reason}")
            if self.winner:
                print(f"Winner: {self.winner}")

        return self.get_result()

    def get_state(self) -> Dict:
        """
        Get the current session state.

        Returns:
            Dictionary containing session state
        """
        return {
            "puzzle_mode": self.puzzle_mode.value,
            "moves_made": self.moves_made,
            "turns_left": self.turns_left,
            "scores": dict(self.scores),
            "outcome": self.outcome.value,
            "winner": self.winner,
            "end_reason": self.end_reason,
            "is_complete": self.is_complete,
            "progress": self.progress.model_dump(),
            "num_turns_recorded": len(self.turn_history),
        }

    def get_result(self) -> SessionResult:
        """
        Get the session result.

        Returns:
            SessionResult containing full run data
        """
        ended_at = datetime.now()
        return SessionResult(
            config=self.config,
            puzzle_mode=self.puzzle_mode,
            win_condition=self.win_condition,
            winner=self.winner,
            outcome=self.outcome,
            end_reason=self.end_reason,
            total_turns=len(self.turn_history),
            moves_accepted=self.moves_made,
            scores=dict(self.scores),
            progress=self.progress,
            turn_history=self.turn_history,
            final_board=self.board,
            started_at=self.started_at.isoformat(),
            ended_at=ended_at.isoformat(),
            duration_seconds=(ended_at - self.started_at).total_seconds(),
        )

    def save_result(self, path: str | Path) -> None:
        """
        Save the session result to a JSON file.

        Args:
            path: Path to save the result file
        """
        result = self.get_result()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(result.model_dump(mode="json"), f, indent=2, default=str)
