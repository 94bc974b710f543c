"""Lexical properties of words that trigger effects."""

from collections import Counter
from typing import Dict, List, Optional, Tuple

RARE_LETTERS = frozenset("QZXJ")
VOWELS = frozenset("AEIOU")

ACTION_VERBS = frozenset({
    "MOVE", "ROTATE", "SHIFT", "BREAK", "UNLOCK", "REVEAL", "PUSH", "PULL",
    "SLIDE", "TWIST", "FLIP", "SPIN", "SWAP", "CHANGE", "TRANSFORM",
    "TURN", "OPEN", "CLOSE", "LIFT", "DROP", "THROW", "CATCH",
})

EMOTION_WORDS = frozenset({
    "HAPPY", "SAD", "JOY", "FEAR", "LOVE", "ANGER", "HOPE", "PRIDE",
    "SHAME", "GUILT", "TRUST", "CALM", "RAGE", "PEACE", "WORRY",
    "HAPPINESS", "SADNESS", "EMOTIONAL",
})

# Direction word -> (axis, step). Column steps move content down when
# positive; row steps move content right when positive.
DIRECTION_WORDS: Dict[str, Tuple[str, int]] = {
    "NORTH": ("column", -1), "UP": ("column", -1), "UPWARD": ("column", -1), "ABOVE": ("column", -1),
    "SOUTH": ("column", 1), "DOWN": ("column", 1), "DOWNWARD": ("column", 1), "BELOW": ("column", 1),
    "WEST": ("row", -1), "LEFT": ("row", -1), "BACKWARD": ("row", -1),
    "EAST": ("row", 1), "RIGHT": ("row", 1), "FORWARD": ("row", 1),
}


def is_palindrome(word: str) -> bool:
    cleaned = "".join(ch for ch in word.upper() if ch.isalpha())
    return bool(cleaned) and cleaned == cleaned[::-1]


def has_repeated_letter(word: str) -> bool:
    """True if any letter appears at least twice, anywhere in the word."""
    counts = Counter(word.upper())
    return any(n >= 2 for n in counts.values())


def is_all_vowels(word: str) -> bool:
    upper = word.upper()
    return bool(upper) and all(ch in VOWELS for ch in upper)


def rare_letters(word: str) -> List[str]:
    """Distinct rare letters in order of first appearance."""
    found: List[str] = []
    for ch in word.upper():
        if ch in RARE_LETTERS and ch not in found:
            found.append(ch)
    return found


def is_action_verb(word: str) -> bool:
    return word.upper() in ACTION_VERBS


def is_emotion_word(word: str) -> bool:
    return word.upper() in EMOTION_WORDS


def direction_of(word: str) -> Optional[Tuple[str, int]]:
    """(axis, step) for a direction word, or None."""
    return DIRECTION_WORDS.get(word.upper())


def length_tier(word: str) -> str:
    """'minor' for 3-4 letters, 'moderate' for 5-6, 'major' for 7+."""
    if len(word) >= 7:
        return "major"
    if len(word) >= 5:
        return "moderate"
    return "minor"
