"""
Move verification for VERBLOC.

Validates, in order:
1. Selection rules (non-empty, well-formed (row, col) pairs, on the
   board, no repeats, each step to an 8-adjacent tile, no locked tiles)
2. Word rules (at least three letters, recognized by the word index)

Selection problems are input errors; word problems are validation
failures. Either one rejects the move before any scoring happens.
"""

from typing import List, Optional, Set

from ..board.models import Board, Position
from .models import ValidationError
from .dictionary import WordIndex, MIN_WORD_LENGTH, default_index


def are_adjacent(a: Position, b: Position) -> bool:
    """True if two distinct positions touch, diagonals included."""
    row_diff = abs(a[0] - b[0])
    col_diff = abs(a[1] - b[1])
    return max(row_diff, col_diff) == 1


def is_position(raw) -> bool:
    """True for a (row, col) pair of integers."""
    return (
        isinstance(raw, (tuple, list))
        and len(raw) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in raw)
    )


def validate_selection(board: Board, positions: List[Position]) -> List[ValidationError]:
    """Validate the selected positions against the board."""
    errors: List[ValidationError] = []

    if not positions:
        errors.append(ValidationError(
            code="EMPTY_SELECTION",
            message="No tiles were selected",
        ))
        return errors

    for raw in positions:
        if not is_position(raw):
            errors.append(ValidationError(
                code="MALFORMED_POSITION",
                message=f"Selection entry {raw!r} is not a (row, col) pair of integers",
            ))
    if errors:
        return errors

    seen: Set[Position] = set()
    for i, raw in enumerate(positions):
        pos = Position(*raw)

        if not board.in_bounds(pos):
            errors.append(ValidationError(
                code="OUT_OF_BOUNDS",
                message=f"Position {tuple(pos)} is outside the {board.size}x{board.size} board",
                position=pos,
            ))
            continue

        if pos in seen:
            errors.append(ValidationError(
                code="REPEATED_POSITION",
                message=f"Position {tuple(pos)} is selected more than once",
                position=pos,
            ))
        seen.add(pos)

        if i > 0 and not are_adjacent(Position(*positions[i - 1]), pos):
            errors.append(ValidationError(
                code="NOT_ADJACENT",
                message=f"Position {tuple(pos)} is not adjacent to {tuple(positions[i - 1])}",
                position=pos,
            ))

        if board.tile(pos).locked:
            errors.append(ValidationError(
                code="LOCKED_TILE",
                message=f"Tile at {tuple(pos)} is locked",
                position=pos,
            ))

    return errors


def validate_word(word: str, index: Optional[WordIndex] = None) -> List[ValidationError]:
    """Validate the formed word: minimum length, then dictionary membership."""
    errors: List[ValidationError] = []

    if len(word) < MIN_WORD_LENGTH:
        errors.append(ValidationError(
            code="WORD_TOO_SHORT",
            message=f"'{word}' is shorter than {MIN_WORD_LENGTH} letters",
            kind="validation",
            word=word,
        ))
        return errors

    index = index or default_index()
    if not index.is_valid_word(word):
        errors.append(ValidationError(
            code="UNKNOWN_WORD",
            message=f"'{word}' is not a recognized word",
            kind="validation",
            word=word,
        ))

    return errors


def verify_move(
    board: Board,
    positions: List[Position],
    index: Optional[WordIndex] = None,
) -> List[ValidationError]:
    """
    Run every check for a proposed move.

    Word checks only run when the selection itself is sound, since the
    word cannot be formed from an invalid selection.

    Returns:
        All errors found (empty when the move is legal)
    """
    errors = validate_selection(board, positions)
    if errors:
        return errors

    word = board.word_at([Position(*p) for p in positions])
    return validate_word(word, index)
