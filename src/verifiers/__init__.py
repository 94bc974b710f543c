"""Word and move verification for VERBLOC."""

from .verify import verify_move, validate_selection, validate_word, are_adjacent, is_position
from .models import ValidationError
from .dictionary import WordIndex, default_index, is_valid_word, MIN_WORD_LENGTH
from .trie import Trie, TrieNode

__all__ = [
    # Main verification
    "verify_move",
    "validate_selection",
    "validate_word",
    "are_adjacent",
    "is_position",
    # Models
    "ValidationError",
    # Dictionary
    "WordIndex",
    "default_index",
    "is_valid_word",
    "MIN_WORD_LENGTH",
    "Trie",
    "TrieNode",
]
