"""Tests for the prefix trie and the word index."""

import pytest
from src.verifiers import Trie, WordIndex, default_index, is_valid_word


class TestTrie:
    """Test cases for the prefix trie."""

    def test_insert_and_lookup(self):
        """Inserted words are found; prefixes alone are not words."""
        trie = Trie()
        trie.insert("cart")
        assert trie.is_word("CART")
        assert trie.is_word("cart")
        assert not trie.is_word("CAR")
        assert trie.is_prefix("CA")

    def test_size_counts_distinct_words(self):
        """Inserting the same word twice counts once."""
        trie = Trie()
        trie.insert("CAT")
        trie.insert("cat")
        trie.insert("CAR")
        assert trie.size == 2

    def test_missing_prefix(self):
        """Prefixes with no stored word are rejected."""
        trie = Trie()
        trie.insert("DOG")
        assert not trie.is_prefix("DA")

    def test_words_with_prefix_order(self):
        """Words come back shortest first, then alphabetically."""
        trie = Trie()
        for word in ["CARTON", "CAT", "CART", "CAR", "CAB"]:
            trie.insert(word)
        assert list(trie.words_with_prefix("CA")) == ["CAB", "CAR", "CAT", "CART", "CARTON"]

    def test_words_with_unknown_prefix(self):
        """An unknown prefix yields nothing."""
        trie = Trie()
        trie.insert("CAT")
        assert list(trie.words_with_prefix("DO")) == []


class TestWordIndex:
    """Test cases for the word index."""

    def test_case_insensitive(self):
        """Membership ignores case."""
        index = WordIndex.from_words(["cat"])
        assert index.is_valid_word("CAT")
        assert index.is_valid_word("cat")
        assert index.is_valid_word("Cat")

    def test_short_words_never_valid(self):
        """Words under three letters are never valid."""
        index = WordIndex.from_words(["IT", "AT", "CAT"])
        assert not index.is_valid_word("it")
        assert not index.is_valid_word("")
        assert len(index) == 1

    def test_non_alpha_skipped(self):
        """Entries with non-letters are ignored."""
        index = WordIndex.from_words(["CAN'T", "DOG"])
        assert len(index) == 1

    def test_has_prefix(self):
        """Prefix queries follow the trie."""
        index = WordIndex.from_words(["DOG"])
        assert index.has_prefix("do")
        assert index.has_prefix("")
        assert not index.has_prefix("DX")

    def test_suggestions(self):
        """Suggestions are limited and shortest first."""
        index = WordIndex.from_words(["STAR", "STARS", "STAT", "STATE", "STATUE"])
        assert index.suggestions("sta", limit=3) == ["STAR", "STAT", "STARS"]
        assert index.suggestions("sta", limit=0) == []

    def test_contains(self):
        """`in` checks membership."""
        index = WordIndex.from_words(["DOG"])
        assert "dog" in index
        assert "cat" not in index

    def test_from_file(self, tmp_path):
        """Indexes load from one-word-per-line files."""
        path = tmp_path / "words.txt"
        path.write_text("cat\ndog\n\nox\n")
        index = WordIndex.from_file(path)
        assert len(index) == 2
        assert index.is_valid_word("DOG")

    def test_from_missing_file(self, tmp_path):
        """A missing word list raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            WordIndex.from_file(tmp_path / "missing.txt")


class TestDefaultIndex:
    """Test cases for the packaged word index."""

    def test_built_once(self):
        """The packaged index is shared by reference."""
        assert default_index() is default_index()

    def test_examples(self):
        """Short words fail; case does not matter."""
        assert is_valid_word("it") is False
        assert is_valid_word("CAT") is True
        assert is_valid_word("cat") is True

    @pytest.mark.parametrize("word", ["LEVEL", "RADAR", "NORTH", "ROTATE", "HAPPY", "QUIZ", "EAU"])
    def test_mechanic_words_present(self, word):
        """Words that trigger mechanics are recognized."""
        assert is_valid_word(word)
