"""
Recognized-word index.

The index is built once from a word source and is read-only afterwards,
so a single instance can be shared by every game in the process.
"""

import functools
import logging
from pathlib import Path
from typing import Iterable, List

from .trie import Trie

log = logging.getLogger("verbloc")

MIN_WORD_LENGTH = 3

# Packaged word list: one uppercase word per line
_DATA_FILE = Path(__file__).parent / "data" / "words.txt"


class WordIndex:
    """Trie-backed, case-insensitive word index."""

    def __init__(self, words: Iterable[str]):
        self._trie = Trie()
        for word in words:
            word = word.strip().upper()
            if len(word) >= MIN_WORD_LENGTH and word.isalpha():
                self._trie.insert(word)

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "WordIndex":
        return cls(words)

    @classmethod
    def from_file(cls, path: str | Path) -> "WordIndex":
        """Build an index from a text file with one word per line."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Word list not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            index = cls(f)
        log.info("Loaded %s words from %s", f"{len(index):,}", path)
        return index

    def is_valid_word(self, word: str) -> bool:
        """
        Returns True if `word` is a recognized word.

        Always False for words shorter than three letters.
        """
        if not word or len(word) < MIN_WORD_LENGTH:
            return False
        return self._trie.is_word(word)

    def has_prefix(self, prefix: str) -> bool:
        """True if some recognized word starts with prefix."""
        if not prefix:
            return True
        return self._trie.is_prefix(prefix)

    def suggestions(self, prefix: str, limit: int = 5) -> List[str]:
        """Up to `limit` recognized words extending prefix, shortest first."""
        result: List[str] = []
        if limit <= 0:
            return result
        for word in self._trie.words_with_prefix(prefix):
            result.append(word)
            if len(result) >= limit:
                break
        return result

    def __contains__(self, word: str) -> bool:
        return self.is_valid_word(word)

    def __len__(self) -> int:
        return self._trie.size


@functools.lru_cache(maxsize=None)
def default_index() -> WordIndex:
    """The packaged word index, built on first use and shared afterwards."""
    return WordIndex.from_file(_DATA_FILE)


def is_valid_word(word: str) -> bool:
    """Check a word against the packaged index."""
    return default_index().is_valid_word(word)
