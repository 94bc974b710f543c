"""
Move submission.

`submit_move` composes the whole engine for one turn:

    selection checks -> word checks -> score -> analyze -> mutate
    -> optional replenish -> balance clamp -> evaluate

A rejected move returns the input board object itself, a zero score and
no effects. An accepted move returns a new board; the input board is
never modified.
"""

import logging
from typing import Callable, List, Optional

from ..board.generator import replenish_tiles
from ..board.models import Board, Position, PuzzleMode, Tile
from ..effects.analyzer import analyze_word
from ..effects.models import Effect
from ..effects.mutator import apply_effects
from ..verifiers.dictionary import WordIndex
from ..verifiers.models import ValidationError
from ..verifiers.verify import verify_move
from .models import GameContext, MoveResult, Outcome, Progress, default_win_condition
from .progress import evaluate_progress, phrase_counts, territory_counts, vault_counts
from .scoring import score_word

log = logging.getLogger("verbloc")


def _evaluate(board: Board, puzzle_mode: PuzzleMode, context: GameContext, score: int,
              moves_made: int, turns_left: Optional[int], player_id: str) -> Progress:
    return evaluate_progress(
        board,
        puzzle_mode,
        context.win_condition,
        score=score,
        moves_made=moves_made,
        game_mode=context.game_mode,
        turns_left=turns_left,
        player_id=player_id,
        previous_outcome=context.outcome,
    )


def _reject(board: Board, puzzle_mode: PuzzleMode, context: GameContext, player_id: str,
            errors: List[ValidationError], word: str = "") -> MoveResult:
    progress = _evaluate(board, puzzle_mode, context, context.score, context.moves_made,
                         context.turns_left, player_id)
    log.info("Rejected move by %s: %s", player_id, ", ".join(e.code for e in errors))
    return MoveResult(
        accepted=False,
        word=word,
        new_board=board,
        outcome=progress.outcome,
        progress=progress,
        errors=errors,
    )


# Balance clamp

def _objective_progressed(before: Tile, after: Tile, puzzle_mode: PuzzleMode, player_id: str) -> bool:
    if puzzle_mode == PuzzleMode.VAULT_BREAK:
        return before.vault and before.locked and not after.locked
    if puzzle_mode == PuzzleMode.HIDDEN_PHRASE:
        return before.phrase_letter and not before.revealed and after.revealed
    if puzzle_mode == PuzzleMode.TERRITORY_CONTROL:
        return before.claimable and before.owner_id != player_id and after.owner_id == player_id
    return False


def _restore_objective(before: Tile, after: Tile, puzzle_mode: PuzzleMode) -> None:
    if puzzle_mode == PuzzleMode.VAULT_BREAK:
        after.locked = before.locked
        after.weakened = before.weakened
    elif puzzle_mode == PuzzleMode.HIDDEN_PHRASE:
        after.revealed = before.revealed
    elif puzzle_mode == PuzzleMode.TERRITORY_CONTROL:
        after.owner_id = before.owner_id
        after.owner_color = before.owner_color


def objective_tiles(board: Board, puzzle_mode: PuzzleMode) -> int:
    """Number of objective tiles a board carries for a puzzle mode."""
    if puzzle_mode == PuzzleMode.VAULT_BREAK:
        return sum(1 for t in board.all_tiles() if t.vault)
    if puzzle_mode == PuzzleMode.HIDDEN_PHRASE:
        return sum(1 for t in board.all_tiles() if t.phrase_letter)
    if puzzle_mode == PuzzleMode.TERRITORY_CONTROL:
        return sum(1 for t in board.all_tiles() if t.claimable)
    return 0


def objectives_reached(board: Board, puzzle_mode: PuzzleMode, player_id: str) -> int:
    """Raw count of objective tiles already achieved (0 for score_target)."""
    if puzzle_mode == PuzzleMode.VAULT_BREAK:
        return vault_counts(board)[0]
    if puzzle_mode == PuzzleMode.HIDDEN_PHRASE:
        return phrase_counts(board)[0]
    if puzzle_mode == PuzzleMode.TERRITORY_CONTROL:
        return territory_counts(board, player_id)[0]
    return 0


def clamp_applies(board: Board, puzzle_mode: PuzzleMode, target: int) -> bool:
    """
    Whether a puzzle can be held short of a win at all.

    A score target of 1 or a board with a single objective tile has no
    partial state, so its only winning move is never clamped.
    """
    if puzzle_mode == PuzzleMode.SCORE_TARGET:
        return target > 1
    return objective_tiles(board, puzzle_mode) > 1


def starts_from_zero(board: Board, puzzle_mode: PuzzleMode, score: int, player_id: str) -> bool:
    """True when no progress at all has been made before the move."""
    if puzzle_mode == PuzzleMode.SCORE_TARGET:
        return score == 0
    return objectives_reached(board, puzzle_mode, player_id) == 0


def clamp_board_progress(
    before: Board,
    after: Board,
    puzzle_mode: PuzzleMode,
    player_id: str,
    still_winning: Callable[[Board], bool],
) -> Board:
    """
    Undo objective progress until the board no longer wins.

    Tiles that progressed during the move are restored to their pre-move
    objective state one at a time, in reverse row-major order.

    Returns:
        A new board; `after` is left untouched
    """
    clamped = after.copy()
    progressed = [
        pos for pos in clamped.positions()
        if _objective_progressed(before.tile(pos), clamped.tile(pos), puzzle_mode, player_id)
    ]
    for pos in reversed(progressed):
        if not still_winning(clamped):
            break
        _restore_objective(before.tile(pos), clamped.tile(pos), puzzle_mode)
    return clamped


def submit_move(
    board: Board,
    positions: List[Position],
    puzzle_mode: PuzzleMode,
    player_id: str,
    previous_effect: Optional[Effect] = None,
    context: Optional[GameContext] = None,
    index: Optional[WordIndex] = None,
    replenish_seed: Optional[int] = None,
    catch_up: bool = False,
) -> MoveResult:
    """
    Validate, score and apply one move.

    Args:
        board: Current board snapshot
        positions: Selected positions, in selection order
        puzzle_mode: Active puzzle mode
        player_id: Acting player
        previous_effect: Primary effect of the previous accepted move
        context: Win condition, score, moves, turns and outcome so far
            (defaults to a fresh solo game)
        index: Word index (defaults to the packaged word list)
        replenish_seed: When given, refill the used plain tiles from a
            draw seeded with this value
        catch_up: Use the trailing-player pool for the refill

    Returns:
        MoveResult describing the accepted or rejected move
    """
    puzzle_mode = PuzzleMode(puzzle_mode)
    if context is None:
        context = GameContext(win_condition=default_win_condition(puzzle_mode))

    if context.outcome.is_terminal:
        return _reject(board, puzzle_mode, context, player_id, [ValidationError(
            code="GAME_OVER",
            message=f"The game has already ended ({context.outcome.value})",
            kind="state",
        )])

    errors = verify_move(board, positions, index)
    if errors:
        word = ""
        if not any(e.kind == "input" for e in errors):
            word = board.word_at([Position(*p) for p in positions])
        return _reject(board, puzzle_mode, context, player_id, errors, word)

    positions = [Position(*p) for p in positions]
    word = board.word_at(positions)
    score = score_word(word, positions, board)
    effects = analyze_word(word, positions, board, puzzle_mode, previous_effect)
    new_board = apply_effects(board, word, positions, effects, puzzle_mode, player_id)

    if replenish_seed is not None:
        new_board = replenish_tiles(new_board, positions, replenish_seed, catch_up=catch_up)

    moves_made = context.moves_made + 1
    turns_left = context.turns_left
    if turns_left is not None and context.game_mode == "solo":
        turns_left -= 1

    def evaluate(candidate: Board, awarded: int) -> Progress:
        return _evaluate(candidate, puzzle_mode, context, context.score + awarded,
                         moves_made, turns_left, player_id)

    # Balance clamp: no instant win from a standing start
    balance_clamped = False
    progress = evaluate(new_board, score)
    if (
        progress.outcome == Outcome.WIN
        and starts_from_zero(board, puzzle_mode, context.score, player_id)
        and clamp_applies(board, puzzle_mode, context.win_condition.target)
    ):
        balance_clamped = True
        if puzzle_mode == PuzzleMode.SCORE_TARGET:
            score = max(0, context.win_condition.target - 1 - context.score)
        else:
            new_board = clamp_board_progress(
                board, new_board, puzzle_mode, player_id,
                lambda candidate: evaluate(candidate, score).outcome == Outcome.WIN,
            )
        progress = evaluate(new_board, score)
        log.info("Balance clamp fired for %s on '%s'", player_id, word)

    log.info(
        "Accepted '%s' by %s: +%s, %s effect(s), %s%% (%s)",
        word, player_id, score, len(effects), progress.percentage, progress.outcome.value,
    )
    return MoveResult(
        accepted=True,
        word=word,
        score=score,
        effects=effects,
        new_board=new_board,
        outcome=progress.outcome,
        progress=progress,
        balance_clamped=balance_clamped,
        consumes_turn=True,
        primary_effect=effects[0],
    )
