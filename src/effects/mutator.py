"""
Board mutation.

Interprets an ordered effect list against a board. The input board is
never modified; every call works on a deep copy and returns it.

Tile content (letter, value, special) moves with shift, rotate and
reverse effects. Structural flags (locks, vaults, fog, territory) stay
where they are. Phrase tiles are pinned: their letters belong to the
hidden phrase, so content moves around them along the remaining tiles.
"""

import logging
import math
import zlib
from typing import Callable, Dict, List, Optional, Tuple

from ..board.models import Board, InvariantViolation, Position, PuzzleMode, SpecialType, Tile
from .models import Effect, EffectKind

log = logging.getLogger("verbloc")

PLAYER_COLORS = [
    "#3B82F6",  # blue
    "#EF4444",  # red
    "#10B981",  # green
    "#F59E0B",  # amber
    "#8B5CF6",  # violet
    "#EC4899",  # pink
]

Content = Tuple[str, int, Optional[SpecialType]]


def player_color(player_id: str) -> str:
    """Deterministic palette colour for a player id."""
    return PLAYER_COLORS[zlib.crc32(player_id.encode("utf-8")) % len(PLAYER_COLORS)]


def _content(tile: Tile) -> Content:
    return tile.letter, tile.value, tile.special


def _set_content(tile: Tile, content: Content) -> None:
    tile.letter, tile.value, tile.special = content


def _check_region(board: Board, effect: Effect) -> List[Position]:
    region = [Position(*p) for p in effect.region]
    for pos in region:
        if not board.in_bounds(pos):
            raise InvariantViolation(
                f"{effect.kind.value} effect targets {tuple(pos)} outside a {board.size}x{board.size} board"
            )
    return region


def _check_coordinates(board: Board) -> None:
    for r, row in enumerate(board.tiles):
        if len(row) != board.size:
            raise InvariantViolation(f"Row {r} has {len(row)} tiles on a size {board.size} board")
        for c, tile in enumerate(row):
            if (tile.row, tile.col) != (r, c):
                raise InvariantViolation(
                    f"Tile at slot ({r}, {c}) claims position ({tile.row}, {tile.col})"
                )
    if len(board.tiles) != board.size:
        raise InvariantViolation(f"Board has {len(board.tiles)} rows, expected {board.size}")


# Flag effects

def _limited(board: Board, region: List[Position], eligible: Callable[[Tile], bool], limit: Optional[int]) -> List[Tile]:
    """Eligible tiles from the region in priority order, at most `limit`."""
    picked: List[Tile] = []
    for pos in region:
        if limit is not None and len(picked) >= limit:
            break
        tile = board.tile(pos)
        if eligible(tile):
            picked.append(tile)
    return picked


def _reveal(board: Board, effect: Effect, region: List[Position], player_id: str) -> None:
    for tile in _limited(board, region, lambda t: t.fogged, effect.limit):
        tile.revealed = True


def _unlock(board: Board, effect: Effect, region: List[Position], player_id: str) -> None:
    for tile in _limited(board, region, lambda t: t.locked, effect.limit):
        tile.locked = False
        tile.weakened = False


def _weaken(board: Board, effect: Effect, region: List[Position], player_id: str) -> None:
    for tile in _limited(board, region, lambda t: t.locked, effect.limit):
        if tile.weakened:
            tile.locked = False
            tile.weakened = False
        else:
            tile.weakened = True


def _claim(board: Board, effect: Effect, region: List[Position], player_id: str) -> None:
    color = player_color(player_id)
    for tile in _limited(board, region, lambda t: t.claimable and t.owner_id != player_id, effect.limit):
        tile.owner_id = player_id
        tile.owner_color = color


# Content effects

def _pinned(tile: Tile) -> bool:
    return tile.phrase_letter


def _cycle(board: Board, positions: List[Position], steps: int) -> None:
    """Move content `steps` places along `positions`, skipping pinned tiles."""
    free = [p for p in positions if not _pinned(board.tile(p))]
    if len(free) < 2:
        return
    contents = [_content(board.tile(p)) for p in free]
    n = len(free)
    for i, content in enumerate(contents):
        _set_content(board.tile(free[(i + steps) % n]), content)


def _shift(board: Board, effect: Effect, region: List[Position], player_id: str) -> None:
    if effect.axis is None or effect.line is None:
        raise InvariantViolation("shift effect needs an axis and a line")
    if not 0 <= effect.line < board.size:
        raise InvariantViolation(f"shift line {effect.line} is outside a {board.size}x{board.size} board")

    if effect.axis == "column":
        line = [Position(r, effect.line) for r in range(board.size)]
    else:
        line = [Position(effect.line, c) for c in range(board.size)]
    _cycle(board, line, effect.steps)


def _rotate(board: Board, effect: Effect, region: List[Position], player_id: str) -> None:
    n = math.isqrt(len(region))
    if n * n != len(region) or n == 0:
        raise InvariantViolation(f"rotate region of {len(region)} tiles is not a square")

    top = min(p.row for p in region)
    left = min(p.col for p in region)
    expected = [Position(top + r, left + c) for r in range(n) for c in range(n)]
    if sorted(region) != expected:
        raise InvariantViolation("rotate region is not a contiguous square")

    # A clockwise quarter turn moves (r, c) to (c, n-1-r); walk its cycles.
    visited = set()
    for r in range(n):
        for c in range(n):
            if (r, c) in visited:
                continue
            cycle = []
            cell = (r, c)
            while cell not in visited:
                visited.add(cell)
                cycle.append(Position(top + cell[0], left + cell[1]))
                cell = (cell[1], n - 1 - cell[0])
            _cycle(board, cycle, effect.turns % 4)


def _reverse(board: Board, effect: Effect, region: List[Position], player_id: str) -> None:
    ordered = [p for p in sorted(region) if not _pinned(board.tile(p))]
    contents = [_content(board.tile(p)) for p in ordered]
    for pos, content in zip(ordered, reversed(contents)):
        _set_content(board.tile(pos), content)


def _noop(board: Board, effect: Effect, region: List[Position], player_id: str) -> None:
    pass


HANDLERS: Dict[EffectKind, Callable[[Board, Effect, List[Position], str], None]] = {
    EffectKind.REVEAL: _reveal,
    EffectKind.UNLOCK: _unlock,
    EffectKind.WEAKEN: _weaken,
    EffectKind.CLAIM: _claim,
    EffectKind.SHIFT: _shift,
    EffectKind.ROTATE: _rotate,
    EffectKind.REVERSE: _reverse,
    EffectKind.NOOP: _noop,
}


def apply_effect(board: Board, effect: Effect, player_id: str) -> None:
    """Apply one effect to a board in place."""
    region = _check_region(board, effect)
    HANDLERS[effect.kind](board, effect, region, player_id)


def apply_effects(
    board: Board,
    word: str,
    positions: List[Position],
    effects: List[Effect],
    puzzle_mode: PuzzleMode,
    player_id: str,
) -> Board:
    """
    Apply effects in order and return the resulting board.

    Args:
        board: Board before the move (left untouched)
        word: The formed word
        positions: Selected positions
        effects: Ordered effects from analyze_word
        puzzle_mode: Active puzzle mode
        player_id: Acting player, owner of any claimed tiles

    Returns:
        A new Board

    Raises:
        InvariantViolation: An effect targets a tile off the board, a rotate
            region is not square, or the board's tiles disagree with their slots
    """
    _check_coordinates(board)
    for pos in positions:
        if not board.in_bounds(Position(*pos)):
            raise InvariantViolation(f"Position {tuple(pos)} is outside a {board.size}x{board.size} board")

    new_board = board.copy()
    for effect in effects:
        apply_effect(new_board, effect, player_id)

    log.debug("Applied %s effect(s) for '%s' (%s, player %s)", len(effects), word, puzzle_mode.value, player_id)
    return new_board
