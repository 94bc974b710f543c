"""
Effect analysis.

Derives the ordered list of effects a word triggers. Every effect is
resolved to an explicit target region here, so applying it later is a
pure, deterministic interpretation of the list.

Output order:
1. Length tier (always present)
2. Rare-letter lock break
3. Palindrome region reversal
4. Duplicate of the previous move's effect (repeated letters)
5. All-vowel reveal
6. Category effects (action verb, emotion word, direction word)

At most one major effect survives; later majors become no-ops.
"""

import logging
from typing import List, Optional

from ..board.models import Board, Position, PuzzleMode
from .models import Effect, EffectKind, Severity, Trigger
from . import lexicon

log = logging.getLogger("verbloc")

MAJOR_SECTION_SIZE = 5
ACTION_SECTION_SIZE = 3
MAJOR_VAULT_UNLOCKS = 3
PHRASE_REVEALS = {"minor": 1, "moderate": 2, "major": 5}

_SEVERITY = {
    "minor": Severity.MINOR,
    "moderate": Severity.MODERATE,
    "major": Severity.MAJOR,
}


# Region helpers

def centre_of(positions: List[Position]) -> Position:
    """The middle tile of the selection."""
    return Position(*positions[len(positions) // 2])


def distance_to(pos: Position, positions: List[Position]) -> int:
    """Chebyshev distance from pos to the nearest selected position."""
    return min(max(abs(pos[0] - p[0]), abs(pos[1] - p[1])) for p in positions)


def nearest_first(board: Board, positions: List[Position]) -> List[Position]:
    """Every board position, nearest to the selection first, ties row-major."""
    return sorted(board.positions(), key=lambda p: (distance_to(p, positions), p.row, p.col))


def within(board: Board, positions: List[Position], radius: int) -> List[Position]:
    """Positions within `radius` of the selection, nearest first."""
    return [p for p in nearest_first(board, positions) if distance_to(p, positions) <= radius]


def square_around(board: Board, centre: Position, size: int) -> List[Position]:
    """
    Row-major positions of a size x size square around centre.

    The square is shifted to stay on the board and shrinks to the board
    size on very small boards.
    """
    size = min(size, board.size)
    top = min(max(centre.row - size // 2, 0), board.size - size)
    left = min(max(centre.col - size // 2, 0), board.size - size)
    return [Position(r, c) for r in range(top, top + size) for c in range(left, left + size)]


def bounding_box(positions: List[Position]) -> List[Position]:
    """Row-major positions of the selection's bounding box."""
    rows = [p[0] for p in positions]
    cols = [p[1] for p in positions]
    return [
        Position(r, c)
        for r in range(min(rows), max(rows) + 1)
        for c in range(min(cols), max(cols) + 1)
    ]


# Effect builders

def length_effect(
    word: str,
    positions: List[Position],
    board: Board,
    mode: PuzzleMode,
    boost: int = 0,
) -> Effect:
    """The length-tier effect for a word, specialised per puzzle mode."""
    tier = lexicon.length_tier(word)
    severity = _SEVERITY[tier]
    common = {"severity": severity, "trigger": Trigger.LENGTH, "amplified": boost > 0}

    if mode == PuzzleMode.HIDDEN_PHRASE:
        count = PHRASE_REVEALS[tier] + boost
        return Effect(
            kind=EffectKind.REVEAL,
            region=nearest_first(board, positions),
            limit=count,
            description=f"Reveal {count} hidden phrase tile{'s' if count != 1 else ''}",
            **common,
        )

    if mode == PuzzleMode.TERRITORY_CONTROL:
        if tier == "major":
            size = MAJOR_SECTION_SIZE + 2 * boost
            return Effect(
                kind=EffectKind.CLAIM,
                region=square_around(board, centre_of(positions), size),
                description=f"Claim the {size}x{size} area around the word",
                **common,
            )
        radius = (0 if tier == "minor" else 1) + boost
        return Effect(
            kind=EffectKind.CLAIM,
            region=within(board, positions, radius),
            description="Claim territory under the word" if radius == 0 else "Claim territory around the word",
            **common,
        )

    # score_target and vault_break share the lock-pressure tiers
    if tier == "minor":
        return Effect(
            kind=EffectKind.WEAKEN,
            region=nearest_first(board, positions),
            limit=1 + boost,
            description="Weaken the nearest lock",
            **common,
        )
    if tier == "moderate":
        return Effect(
            kind=EffectKind.WEAKEN,
            region=within(board, positions, 1 + boost),
            description="Weaken locks around the word",
            **common,
        )
    if mode == PuzzleMode.VAULT_BREAK:
        vaults = [p for p in nearest_first(board, positions) if board.tile(p).vault]
        count = MAJOR_VAULT_UNLOCKS + boost
        return Effect(
            kind=EffectKind.UNLOCK,
            region=vaults,
            limit=count,
            description=f"Unlock up to {count} vaults",
            **common,
        )
    size = MAJOR_SECTION_SIZE
    return Effect(
        kind=EffectKind.ROTATE,
        region=square_around(board, centre_of(positions), size),
        turns=1 + boost,
        description=f"Rotate the {size}x{size} section around the word",
        **common,
    )


def rare_letter_effect(word: str, positions: List[Position], board: Board) -> Effect:
    letters = lexicon.rare_letters(word)
    return Effect(
        kind=EffectKind.UNLOCK,
        severity=Severity.MODERATE,
        trigger=Trigger.RARE_LETTER,
        region=nearest_first(board, positions),
        limit=1,
        description=f"Rare letter ({', '.join(letters)}) breaks the nearest locked tile",
    )


def palindrome_effect(positions: List[Position], boost: int = 0) -> Effect:
    return Effect(
        kind=EffectKind.REVERSE,
        trigger=Trigger.PALINDROME,
        region=bounding_box(positions),
        amplified=boost > 0,
        description="Palindrome reverses the tiles around the word",
    )


def duplicate_effect(previous: Effect) -> Effect:
    """A verbatim replay of the previous move's effect."""
    return previous.model_copy(update={
        "duplicate": True,
        "description": f"Repeat: {previous.description}".strip(),
    }, deep=True)


def all_vowels_effect(board: Board, boost: int = 0) -> Effect:
    return Effect(
        kind=EffectKind.REVEAL,
        trigger=Trigger.ALL_VOWELS,
        region=list(board.positions()),
        limit=None,
        amplified=boost > 0,
        description="All-vowel word reveals every fogged tile",
    )


def action_effect(positions: List[Position], board: Board, boost: int = 0) -> Effect:
    return Effect(
        kind=EffectKind.ROTATE,
        trigger=Trigger.ACTION_VERB,
        region=square_around(board, centre_of(positions), ACTION_SECTION_SIZE),
        turns=1 + boost,
        amplified=boost > 0,
        description="Action verb rotates the tiles around the word",
    )


def emotion_effect(positions: List[Position], board: Board, boost: int = 0) -> Effect:
    return Effect(
        kind=EffectKind.CLAIM,
        trigger=Trigger.EMOTION_WORD,
        region=within(board, positions, 1 + boost),
        amplified=boost > 0,
        description="Emotion word sways the tiles around the word",
    )


def direction_effect(word: str, positions: List[Position], boost: int = 0) -> Optional[Effect]:
    direction = lexicon.direction_of(word)
    if direction is None:
        return None

    axis, step = direction
    centre = centre_of(positions)
    line = centre.col if axis == "column" else centre.row
    return Effect(
        kind=EffectKind.SHIFT,
        trigger=Trigger.DIRECTION_WORD,
        axis=axis,
        line=line,
        steps=step * (1 + boost),
        amplified=boost > 0,
        description=f"{word.upper().title()} shifts {axis} {line}",
    )


def cap_major_effects(effects: List[Effect]) -> List[Effect]:
    """Keep the first major effect; downgrade any later one to a no-op."""
    result: List[Effect] = []
    seen_major = False
    for effect in effects:
        if effect.is_major:
            if seen_major:
                log.debug("Downgrading extra major effect: %s", effect.description)
                effect = Effect(
                    kind=EffectKind.NOOP,
                    severity=Severity.MINOR,
                    trigger=effect.trigger,
                    duplicate=effect.duplicate,
                    description=f"Downgraded (one major effect per move): {effect.description}",
                )
            seen_major = True
        result.append(effect)
    return result


def analyze_word(
    word: str,
    positions: List[Position],
    board: Board,
    puzzle_mode: PuzzleMode,
    previous_effect: Optional[Effect] = None,
) -> List[Effect]:
    """
    Determine every effect a word triggers.

    Args:
        word: The formed word
        positions: Selected positions, in selection order
        board: Board the move is played on
        puzzle_mode: Active puzzle mode
        previous_effect: The previous move's primary effect, replayed when
            the word repeats a letter

    Returns:
        Ordered list of effects with at most one major effect
    """
    if not positions:
        raise ValueError("Cannot analyze a word without positions")

    word = word.upper()
    positions = [Position(*p) for p in positions]
    boost = 1 if lexicon.rare_letters(word) else 0

    effects: List[Effect] = [length_effect(word, positions, board, puzzle_mode, boost)]

    if boost:
        effects.append(rare_letter_effect(word, positions, board))

    if lexicon.is_palindrome(word):
        effects.append(palindrome_effect(positions, boost))

    if lexicon.has_repeated_letter(word) and previous_effect is not None:
        effects.append(duplicate_effect(previous_effect))

    if lexicon.is_all_vowels(word):
        effects.append(all_vowels_effect(board, boost))

    if lexicon.is_action_verb(word):
        effects.append(action_effect(positions, board, boost))

    if lexicon.is_emotion_word(word):
        effects.append(emotion_effect(positions, board, boost))

    shift = direction_effect(word, positions, boost)
    if shift is not None:
        effects.append(shift)

    effects = cap_major_effects(effects)
    log.debug("'%s' triggers %s effect(s): %s", word, len(effects), [e.kind.value for e in effects])
    return effects
