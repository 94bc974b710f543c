"""Plain-text board rendering."""

from typing import Dict, List, Optional

from .models import Board, Position, Tile, SpecialType


SPECIAL_MARKS: Dict[SpecialType, str] = {
    SpecialType.DOUBLE: "2",
    SpecialType.TRIPLE: "3",
    SpecialType.WILDCARD: "*",
}


def render_tile(tile: Tile) -> str:
    """
    Render one tile as a three-character cell.

    '#' marks a locked tile, 'V' a locked vault, '?' a fogged tile.
    Claimed tiles show the first letter of their owner in lowercase after
    the letter; specials show their multiplier mark.
    """
    if tile.vault and tile.locked:
        return " V "
    if tile.locked:
        return " # "
    if tile.fogged:
        return " ? "

    suffix = " "
    if tile.owner_id:
        suffix = tile.owner_id[0].lower()
    elif tile.special is not None:
        suffix = SPECIAL_MARKS[tile.special]
    elif tile.claimable:
        suffix = "+"
    return f" {tile.letter}{suffix}"


def render_board(board: Board, selected: Optional[List[Position]] = None) -> str:
    """Render the board to a string, with row/column headers."""
    selected_set = set(selected or [])

    header = "    " + "".join(f"{c:^3}" for c in range(board.size))
    sep = "   " + "---" * board.size
    lines = [header, sep]

    for r, row in enumerate(board.tiles):
        parts = [f"{r:>2} |"]
        for tile in row:
            cell = render_tile(tile)
            if tile.position in selected_set:
                cell = f"[{cell[1]}]"
            parts.append(cell)
        lines.append("".join(parts))

    return "\n".join(lines)
