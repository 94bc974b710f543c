"""Word scoring."""

from typing import List

from ..board.models import Board, Position, SpecialType

LONG_WORD_LENGTH = 6
LONG_WORD_BONUS = 10
VERY_LONG_WORD_LENGTH = 8
VERY_LONG_WORD_BONUS = 20

LETTER_MULTIPLIERS = {
    SpecialType.DOUBLE: 2,
    SpecialType.TRIPLE: 3,
}


def score_word(word: str, positions: List[Position], board: Board) -> int:
    """
    Score a word played from the given tiles.

    Double and triple tiles multiply their own letter value. Every wildcard
    tile doubles the whole letter sum. Length bonuses are added after the
    multipliers: +10 from six letters, +20 more from eight.

    Args:
        word: The formed word
        positions: Positions the word was read from
        board: Board the move was played on

    Returns:
        Non-negative score
    """
    total = 0
    multiplier = 1
    for pos in positions:
        tile = board.tile(Position(*pos))
        if tile.special == SpecialType.WILDCARD:
            multiplier *= 2
        total += tile.value * LETTER_MULTIPLIERS.get(tile.special, 1)

    total *= multiplier

    if len(word) >= LONG_WORD_LENGTH:
        total += LONG_WORD_BONUS
    if len(word) >= VERY_LONG_WORD_LENGTH:
        total += VERY_LONG_WORD_BONUS

    return total
