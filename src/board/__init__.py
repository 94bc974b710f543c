"""Board model, generation and curated layouts for VERBLOC."""

from .models import (
    Board,
    Tile,
    Position,
    SpecialType,
    PuzzleMode,
    WinCondition,
    InvariantViolation,
    ProceduralSource,
    FixedSource,
    BoardSource,
)
from .generator import (
    LETTER_VALUES,
    LETTER_DISTRIBUTION,
    CATCH_UP_DISTRIBUTION,
    generate_board,
    build_board,
    replenish_tiles,
    needs_catch_up,
    letter_value,
)
from .layouts import BoardLayout, LayoutLibrary, default_library
from .grid import render_board

__all__ = [
    # Models
    "Board",
    "Tile",
    "Position",
    "SpecialType",
    "PuzzleMode",
    "WinCondition",
    "InvariantViolation",
    "ProceduralSource",
    "FixedSource",
    "BoardSource",
    # Generation
    "LETTER_VALUES",
    "LETTER_DISTRIBUTION",
    "CATCH_UP_DISTRIBUTION",
    "generate_board",
    "build_board",
    "replenish_tiles",
    "needs_catch_up",
    "letter_value",
    # Layouts
    "BoardLayout",
    "LayoutLibrary",
    "default_library",
    # Rendering
    "render_board",
]
