"""
Board generation.

Procedural boards draw letters from a frequency-weighted pool and mark
roughly 15% of tiles special. Fixed boards come from the curated layout
library. Both paths end in the same ``Board`` model.
"""

import logging
import random
import zlib
from typing import Dict, List, Optional

from .models import Board, Tile, Position, SpecialType, ProceduralSource, FixedSource

log = logging.getLogger("verbloc")


LETTER_VALUES: Dict[str, int] = {
    "A": 1, "B": 3, "C": 3, "D": 2, "E": 1, "F": 4, "G": 2, "H": 4, "I": 1,
    "J": 8, "K": 5, "L": 1, "M": 3, "N": 1, "O": 1, "P": 3, "Q": 10, "R": 1,
    "S": 1, "T": 1, "U": 1, "V": 4, "W": 4, "X": 8, "Y": 4, "Z": 10,
}

# Vowel-heavy pool, rare consonants weighted 1 (98 tiles total)
LETTER_DISTRIBUTION: Dict[str, int] = {
    "E": 12, "A": 9, "I": 9, "O": 8, "N": 6, "R": 6, "T": 6, "L": 4,
    "S": 4, "U": 4, "D": 4, "G": 3, "B": 2, "C": 2, "M": 2, "P": 2,
    "F": 2, "H": 2, "V": 2, "W": 2, "Y": 2, "K": 1, "J": 1, "X": 1,
    "Q": 1, "Z": 1,
}

# Slightly friendlier pool for a trailing player's replenishment draws
CATCH_UP_DISTRIBUTION: Dict[str, int] = {
    **LETTER_DISTRIBUTION,
    "E": 14, "A": 11, "I": 10, "O": 9, "S": 6, "T": 7, "R": 7, "N": 7,
}

SPECIAL_TILE_RATE = 0.15
# Cumulative thresholds: 50% double, 35% triple, 15% wildcard
SPECIAL_TYPE_THRESHOLDS = (
    (0.50, SpecialType.DOUBLE),
    (0.85, SpecialType.TRIPLE),
    (1.00, SpecialType.WILDCARD),
)

PLAYABLE_SIZES = (7, 9)


def letter_value(letter: str) -> int:
    """Point value for a letter (1 for anything off the table)."""
    return LETTER_VALUES.get(letter.upper(), 1)


def build_pool(distribution: Dict[str, int]) -> List[str]:
    """Expand a letter distribution into a flat draw pool."""
    pool: List[str] = []
    for letter, count in distribution.items():
        pool.extend([letter] * count)
    return pool


_POOL = build_pool(LETTER_DISTRIBUTION)
_CATCH_UP_POOL = build_pool(CATCH_UP_DISTRIBUTION)


def draw_letter(rng: random.Random, catch_up: bool = False) -> str:
    """Draw one letter from the weighted pool."""
    pool = _CATCH_UP_POOL if catch_up else _POOL
    return pool[rng.randrange(len(pool))]


def draw_special(rng: random.Random) -> Optional[SpecialType]:
    """Independently decide whether a tile is special, and which kind."""
    if rng.random() >= SPECIAL_TILE_RATE:
        return None
    roll = rng.random()
    for threshold, special in SPECIAL_TYPE_THRESHOLDS:
        if roll < threshold:
            return special
    return SpecialType.WILDCARD


def seed_for_layout(layout_id: str) -> int:
    """Stable seed derived from a layout id."""
    return zlib.crc32(layout_id.encode("utf-8"))


def generate_board(size: int = 7, seed: Optional[int] = None) -> Board:
    """
    Generate a random board.

    Args:
        size: Grid size (7 or 9 for play; other odd sizes for diagnostics)
        seed: Optional random seed for reproducibility

    Returns:
        A new Board with size x size tiles
    """
    if size % 2 == 0 or size < 3:
        raise ValueError(f"Board size must be an odd number >= 3, got {size}")
    if size not in PLAYABLE_SIZES:
        log.debug("Generating non-standard %sx%s board", size, size)

    rng = random.Random(seed)
    tiles: List[List[Tile]] = []
    for row in range(size):
        tiles.append([])
        for col in range(size):
            letter = draw_letter(rng)
            tiles[row].append(Tile(
                letter=letter,
                value=letter_value(letter),
                row=row,
                col=col,
                special=draw_special(rng),
            ))

    log.debug("Generated %sx%s board (seed=%s)", size, size, seed)
    return Board(size=size, tiles=tiles)


def build_board(source, library=None) -> Board:
    """
    Build a board from either source variant.

    Args:
        source: ProceduralSource or FixedSource
        library: LayoutLibrary for fixed sources (defaults to the packaged one)

    Returns:
        The initial Board
    """
    if isinstance(source, ProceduralSource):
        return generate_board(source.size, source.seed)
    if isinstance(source, FixedSource):
        from .layouts import default_library

        library = library or default_library()
        layout = library.get(source.layout_id)
        return layout.to_board(seed=source.seed)
    raise TypeError(f"Unknown board source: {source!r}")


def replenish_tiles(
    board: Board,
    positions: List[Position],
    seed: int,
    catch_up: bool = False,
) -> Board:
    """
    Refill the plain tiles a word used with fresh letters.

    Locked, vault and phrase tiles keep their letters. The draw is seeded,
    so the same inputs always give the same board.

    Args:
        board: Board after the move's effects
        positions: Positions the word used
        seed: Seed for the replacement draws
        catch_up: Use the trailing-player pool

    Returns:
        A new Board
    """
    rng = random.Random(seed)
    new_board = board.copy()
    for pos in positions:
        tile = new_board.tile(pos)
        if tile.locked or tile.vault or tile.phrase_letter:
            continue
        letter = draw_letter(rng, catch_up=catch_up)
        tile.letter = letter
        tile.value = letter_value(letter)
    return new_board


def needs_catch_up(player_id: str, scores: Dict[str, int]) -> bool:
    """True when the player is strictly behind every other player."""
    if player_id not in scores or len(scores) < 2:
        return False
    mine = scores[player_id]
    return all(mine < score for pid, score in scores.items() if pid != player_id)
