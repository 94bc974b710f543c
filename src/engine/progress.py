"""
Win-condition evaluation.

Each puzzle mode measures progress differently:

| mode              | current                           | target                 |
|-------------------|-----------------------------------|------------------------|
| score_target      | score                             | win_condition.target   |
| vault_break       | unlocked vault tiles              | total vault tiles      |
| hidden_phrase     | revealed phrase tiles             | total phrase tiles     |
| territory_control | % of claimable tiles player owns  | win_condition.target % |
"""

import logging
from typing import Optional, Tuple

from ..board.models import Board, PuzzleMode, WinCondition
from .models import GameMode, Outcome, Progress

log = logging.getLogger("verbloc")


def _clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def _percentage(current: int, target: int) -> int:
    if target <= 0:
        return 100 if current >= target else 0
    return _clamp(round(100 * current / target))


def vault_counts(board: Board) -> Tuple[int, int]:
    """(unlocked vaults, total vaults)."""
    vaults = [t for t in board.all_tiles() if t.vault]
    return sum(1 for t in vaults if not t.locked), len(vaults)


def phrase_counts(board: Board) -> Tuple[int, int]:
    """(revealed phrase tiles, total phrase tiles)."""
    phrase = [t for t in board.all_tiles() if t.phrase_letter]
    return sum(1 for t in phrase if t.revealed), len(phrase)


def territory_counts(board: Board, player_id: Optional[str]) -> Tuple[int, int]:
    """
    (claimable tiles owned, number of claimable tiles).

    With no player id, tiles owned by anyone count.
    """
    claimable = [t for t in board.all_tiles() if t.claimable]
    if player_id is None:
        owned = sum(1 for t in claimable if t.owner_id is not None)
    else:
        owned = sum(1 for t in claimable if t.owner_id == player_id)
    return owned, len(claimable)


def territory_share(board: Board, player_id: Optional[str]) -> Tuple[int, int]:
    """(rounded percentage of claimable tiles owned, number of claimable tiles)."""
    owned, claimable = territory_counts(board, player_id)
    if not claimable:
        return 0, 0
    return round(100 * owned / claimable), claimable


def evaluate_progress(
    board: Board,
    puzzle_mode: PuzzleMode,
    win_condition: WinCondition,
    score: int,
    moves_made: int,
    game_mode: GameMode = "solo",
    turns_left: Optional[int] = None,
    player_id: Optional[str] = None,
    previous_outcome: Outcome = Outcome.ONGOING,
) -> Progress:
    """
    Measure progress toward the win condition and decide the outcome.

    Args:
        board: Board after the move
        puzzle_mode: Active puzzle mode
        win_condition: Goal of the puzzle
        score: Acting player's total score
        moves_made: Accepted moves so far
        game_mode: "solo" or "multiplayer"; only solo games can be lost
        turns_left: Remaining turns, or None without a turn limit
        player_id: Player whose territory counts
        previous_outcome: A terminal outcome here is kept as is

    Returns:
        Progress with current, target, percentage and outcome
    """
    objectives = None
    if puzzle_mode == PuzzleMode.SCORE_TARGET:
        current, target = score, win_condition.target
        percentage = _percentage(current, target)
        won = current >= target
    elif puzzle_mode == PuzzleMode.VAULT_BREAK:
        current, target = vault_counts(board)
        objectives = target
        percentage = _percentage(current, target) if target else 0
        won = target > 0 and current == target
    elif puzzle_mode == PuzzleMode.HIDDEN_PHRASE:
        current, target = phrase_counts(board)
        objectives = target
        percentage = _percentage(current, target) if target else 0
        won = target > 0 and current == target
    elif puzzle_mode == PuzzleMode.TERRITORY_CONTROL:
        owned, objectives = territory_counts(board, player_id)
        current, _ = territory_share(board, player_id)
        target = win_condition.target
        percentage = _clamp(current)
        # Win on the exact ratio, not the rounded share.
        won = objectives > 0 and owned * 100 >= target * objectives
    else:
        raise ValueError(f"Unknown puzzle mode: {puzzle_mode!r}")

    if objectives == 0:
        log.warning("Board has no objective tiles for %s", puzzle_mode.value)

    if previous_outcome.is_terminal:
        outcome = previous_outcome
    elif won:
        outcome = Outcome.WIN
    elif game_mode == "solo" and turns_left is not None and turns_left <= 0:
        outcome = Outcome.LOSS
    else:
        outcome = Outcome.ONGOING

    log.debug(
        "Progress after %s move(s): %s/%s (%s%%) -> %s",
        moves_made, current, target, percentage, outcome.value,
    )
    return Progress(current=current, target=target, percentage=percentage, outcome=outcome)
