"""Tests for word scoring."""

from src.board import Board, Position, SpecialType
from src.engine import score_word


def row(board: Board, r: int, length: int):
    return [Position(r, c) for c in range(length)]


class TestScoreWord:
    """Test cases for score_word."""

    def test_plain_word(self):
        """CAT on value-1 tiles scores 3."""
        board = Board.from_letters(["CAT", "DOG", "BOX"], value=1)
        assert score_word("CAT", row(board, 0, 3), board) == 3

    def test_letter_values(self):
        """Tile values come from the board."""
        board = Board.from_letters(["CAT", "DOG", "BOX"])
        # C=3, A=1, T=1
        assert score_word("CAT", row(board, 0, 3), board) == 5

    def test_double_tile(self):
        """A double tile worth 3 contributes 6."""
        board = Board.from_letters(["CAT", "DOG", "BOX"], value=1)
        tile = board.tile(Position(0, 0))
        tile.value = 3
        tile.special = SpecialType.DOUBLE
        assert score_word("CAT", row(board, 0, 3), board) == 6 + 1 + 1

    def test_triple_tile(self):
        """A triple tile triples its own value."""
        board = Board.from_letters(["CAT", "DOG", "BOX"], value=2)
        board.tile(Position(0, 1)).special = SpecialType.TRIPLE
        assert score_word("CAT", row(board, 0, 3), board) == 2 + 6 + 2

    def test_wildcard_doubles_total(self):
        """Each wildcard doubles the whole letter sum."""
        board = Board.from_letters(["CAT", "DOG", "BOX"], value=1)
        board.tile(Position(0, 0)).special = SpecialType.WILDCARD
        assert score_word("CAT", row(board, 0, 3), board) == 6
        board.tile(Position(0, 2)).special = SpecialType.WILDCARD
        assert score_word("CAT", row(board, 0, 3), board) == 12

    def test_mixed_specials(self):
        """Letter multipliers apply before the wildcard doubling."""
        board = Board.from_letters(["CAT", "DOG", "BOX"], value=1)
        board.tile(Position(0, 0)).special = SpecialType.DOUBLE
        board.tile(Position(0, 1)).special = SpecialType.WILDCARD
        assert score_word("CAT", row(board, 0, 3), board) == (2 + 1 + 1) * 2

    def test_six_letter_bonus(self):
        """Six-letter words earn +10."""
        board = Board.from_letters(["GARDENS"] * 7, value=1)
        assert score_word("GARDEN", row(board, 0, 6), board) == 6 + 10

    def test_eight_letter_bonus(self):
        """Eight-letter words earn +30 in total."""
        board = Board.from_letters(["ABCDEFGHI"] * 9, value=1)
        assert score_word("ABCDEFGH", row(board, 0, 8), board) == 8 + 30

    def test_bonus_not_multiplied(self):
        """Length bonuses are added after wildcard doubling."""
        board = Board.from_letters(["GARDENS"] * 7, value=1)
        board.tile(Position(0, 0)).special = SpecialType.WILDCARD
        assert score_word("GARDEN", row(board, 0, 6), board) == 12 + 10

    def test_non_negative(self):
        """Zero-value tiles score zero."""
        board = Board.from_letters(["CAT", "DOG", "BOX"], value=0)
        assert score_word("CAT", row(board, 0, 3), board) == 0
