"""
Comprehensive test suite for move verification.

Tests all validation cases:
- Selection errors (EMPTY_SELECTION, MALFORMED_POSITION, OUT_OF_BOUNDS, REPEATED_POSITION, NOT_ADJACENT, LOCKED_TILE)
- Word errors (WORD_TOO_SHORT, UNKNOWN_WORD)
- Adjacency rules
"""

import pytest
from src.board import Board, Position
from src.verifiers import (
    verify_move,
    validate_selection,
    validate_word,
    are_adjacent,
    WordIndex,
)


INDEX = WordIndex.from_words(["CAT", "COD", "DOG", "BOX", "TAB", "COT"])


def make_board() -> Board:
    return Board.from_letters([
        "CAT",
        "DOG",
        "BOX",
    ])


def codes(errors):
    return [e.code for e in errors]


class TestAdjacency:
    """Test cases for 8-way adjacency."""

    @pytest.mark.parametrize("a,b", [
        ((0, 0), (0, 1)),
        ((0, 0), (1, 0)),
        ((1, 1), (0, 0)),
        ((1, 1), (2, 2)),
        ((2, 0), (1, 1)),
    ])
    def test_adjacent(self, a, b):
        """Orthogonal and diagonal neighbours are adjacent."""
        assert are_adjacent(Position(*a), Position(*b))

    @pytest.mark.parametrize("a,b", [
        ((0, 0), (0, 0)),
        ((0, 0), (0, 2)),
        ((0, 0), (2, 2)),
        ((0, 0), (5, 5)),
    ])
    def test_not_adjacent(self, a, b):
        """The same tile and distant tiles are not adjacent."""
        assert not are_adjacent(Position(*a), Position(*b))


class TestValidMoves:
    """Test cases for legal moves."""

    def test_horizontal_word(self):
        """A word read along a row is legal."""
        assert verify_move(make_board(), [(0, 0), (0, 1), (0, 2)], INDEX) == []

    def test_diagonal_path(self):
        """Words may bend and run diagonally."""
        # C(0,0) O(1,1) D(1,0)
        assert verify_move(make_board(), [(0, 0), (1, 1), (1, 0)], INDEX) == []

    def test_reversed_path(self):
        """Selection order decides the word."""
        errors = verify_move(make_board(), [(0, 2), (0, 1), (0, 0)], INDEX)
        assert codes(errors) == ["UNKNOWN_WORD"]


class TestSelectionErrors:
    """Test cases for selection errors."""

    def test_empty_selection(self):
        """No tiles selected."""
        errors = validate_selection(make_board(), [])
        assert codes(errors) == ["EMPTY_SELECTION"]
        assert errors[0].kind == "input"

    def test_out_of_bounds(self):
        """Positions off the board are reported with their position."""
        errors = validate_selection(make_board(), [(0, 0), (0, 3)])
        assert "OUT_OF_BOUNDS" in codes(errors)
        oob = [e for e in errors if e.code == "OUT_OF_BOUNDS"][0]
        assert oob.position == Position(0, 3)

    def test_negative_position(self):
        """Negative coordinates are off the board."""
        errors = validate_selection(make_board(), [(-1, 0)])
        assert codes(errors) == ["OUT_OF_BOUNDS"]

    def test_repeated_position(self):
        """A tile cannot be used twice."""
        errors = validate_selection(make_board(), [(0, 0), (0, 1), (0, 0)])
        assert "REPEATED_POSITION" in codes(errors)

    def test_not_adjacent(self):
        """Consecutive tiles must touch."""
        errors = validate_selection(make_board(), [(0, 0), (0, 2), (1, 2)])
        assert codes(errors) == ["NOT_ADJACENT"]
        assert errors[0].position == Position(0, 2)

    def test_locked_tile(self):
        """Locked tiles cannot be selected."""
        board = make_board()
        board.tile(Position(0, 1)).locked = True
        errors = validate_selection(board, [(0, 0), (0, 1), (0, 2)])
        assert codes(errors) == ["LOCKED_TILE"]

    def test_all_errors_collected(self):
        """Every selection problem is reported."""
        board = make_board()
        board.tile(Position(2, 2)).locked = True
        errors = validate_selection(board, [(0, 0), (2, 2)])
        assert set(codes(errors)) == {"NOT_ADJACENT", "LOCKED_TILE"}

    @pytest.mark.parametrize("entry", [(0, 0, 0), (0,), "ab", (0.5, 1), (True, 0), None])
    def test_malformed_entry(self, entry):
        """Entries that are not (row, col) integer pairs are input errors."""
        errors = validate_selection(make_board(), [entry, (0, 1), (0, 2)])
        assert codes(errors) == ["MALFORMED_POSITION"]
        assert errors[0].kind == "input"

    def test_malformed_skips_other_checks(self):
        """A malformed selection is not checked any further."""
        errors = verify_move(make_board(), [(0, 0), (9, 9, 9)], INDEX)
        assert codes(errors) == ["MALFORMED_POSITION"]


class TestWordErrors:
    """Test cases for word errors."""

    def test_too_short(self):
        """Two-letter words are rejected."""
        errors = validate_word("AT", INDEX)
        assert codes(errors) == ["WORD_TOO_SHORT"]
        assert errors[0].kind == "validation"

    def test_unknown_word(self):
        """Words outside the index are rejected."""
        errors = validate_word("XYZ", INDEX)
        assert codes(errors) == ["UNKNOWN_WORD"]
        assert errors[0].word == "XYZ"

    def test_two_tile_move_too_short(self):
        """A legal two-tile selection still fails on length."""
        errors = verify_move(make_board(), [(0, 0), (0, 1)], INDEX)
        assert codes(errors) == ["WORD_TOO_SHORT"]

    def test_default_index(self):
        """Without an index the packaged word list is used."""
        assert validate_word("CAT") == []
        assert codes(validate_word("QQQ")) == ["UNKNOWN_WORD"]

    def test_word_checks_skipped_for_bad_selection(self):
        """Selection errors stop verification before word checks."""
        errors = verify_move(make_board(), [(0, 0), (2, 2)], INDEX)
        assert codes(errors) == ["NOT_ADJACENT"]
