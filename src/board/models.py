"""Data models for tiles, boards and board sources."""

from enum import Enum
from typing import Annotated, Iterator, List, Literal, NamedTuple, Optional, Union
from pydantic import BaseModel, Field, model_validator


class InvariantViolation(ValueError):
    """Raised when a board or effect breaks a structural invariant."""


class Position(NamedTuple):
    """A tile coordinate on the board."""
    row: int
    col: int


class SpecialType(str, Enum):
    DOUBLE = "double"
    TRIPLE = "triple"
    WILDCARD = "wildcard"


class PuzzleMode(str, Enum):
    """Win-condition family governing progress computation."""
    SCORE_TARGET = "score_target"
    VAULT_BREAK = "vault_break"
    HIDDEN_PHRASE = "hidden_phrase"
    TERRITORY_CONTROL = "territory_control"


class WinCondition(BaseModel):
    """Goal of a puzzle: a target value plus a human description."""
    type: PuzzleMode
    target: int = Field(..., ge=0)
    description: str = ""
    turn_limit: Optional[int] = Field(None, ge=1)
    target_phrase: Optional[str] = None


class Tile(BaseModel):
    """One board cell: a letter, its value and its state flags."""
    letter: str = Field(..., min_length=1, max_length=1, pattern=r'^[A-Z]$')
    value: int = Field(..., ge=0)
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    locked: bool = False
    weakened: bool = False
    special: Optional[SpecialType] = None
    vault: bool = False
    phrase_letter: bool = False
    revealed: bool = False
    claimable: bool = False
    owner_id: Optional[str] = None
    owner_color: Optional[str] = None

    @property
    def is_special(self) -> bool:
        return self.special is not None

    @property
    def fogged(self) -> bool:
        """A phrase letter that has not been revealed yet."""
        return self.phrase_letter and not self.revealed

    @property
    def position(self) -> Position:
        return Position(self.row, self.col)


class Board(BaseModel):
    """
    Square grid of tiles.

    Playable boards are 7x7 or 9x9; other odd sizes are accepted so that
    diagnostics can build small boards.
    """
    size: int = Field(..., ge=3)
    tiles: List[List[Tile]]

    @model_validator(mode="after")
    def _check_square(self) -> "Board":
        if self.size % 2 == 0:
            raise ValueError(f"Board size must be odd, got {self.size}")
        if len(self.tiles) != self.size:
            raise ValueError(
                f"Board has {len(self.tiles)} rows, expected {self.size}"
            )
        for r, row in enumerate(self.tiles):
            if len(row) != self.size:
                raise ValueError(
                    f"Row {r} has {len(row)} tiles, expected {self.size}"
                )
            for c, tile in enumerate(row):
                if (tile.row, tile.col) != (r, c):
                    raise ValueError(
                        f"Tile at slot ({r}, {c}) claims position ({tile.row}, {tile.col})"
                    )
        return self

    @classmethod
    def from_letters(cls, rows: List[str], value: Optional[int] = None) -> "Board":
        """
        Build a plain board from rows of letters.

        Args:
            rows: One string per row, all of the same length
            value: Fixed point value for every tile (defaults to the letter table)

        Returns:
            A board with no locks, specials or objectives
        """
        from .generator import letter_value

        tiles = [
            [
                Tile(
                    letter=ch.upper(),
                    value=letter_value(ch) if value is None else value,
                    row=r,
                    col=c,
                )
                for c, ch in enumerate(line)
            ]
            for r, line in enumerate(rows)
        ]
        return cls(size=len(rows), tiles=tiles)

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.size and 0 <= col < self.size

    def tile(self, pos: Position) -> Tile:
        """Tile at a position; raises InvariantViolation when out of range."""
        if not self.in_bounds(pos):
            raise InvariantViolation(f"Position {tuple(pos)} is outside a {self.size}x{self.size} board")
        return self.tiles[pos[0]][pos[1]]

    def positions(self) -> Iterator[Position]:
        """All positions in row-major order."""
        for r in range(self.size):
            for c in range(self.size):
                yield Position(r, c)

    def all_tiles(self) -> Iterator[Tile]:
        for row in self.tiles:
            yield from row

    def word_at(self, positions: List[Position]) -> str:
        """Concatenate the letters at the given positions in order."""
        return "".join(self.tile(p).letter for p in positions)

    def copy(self) -> "Board":
        """Deep copy; the result shares no tile objects with this board."""
        return self.model_copy(deep=True)


# Board sources

class ProceduralSource(BaseModel):
    """Randomly generated board, reproducible for a fixed seed."""
    source: Literal["procedural"] = "procedural"
    size: int = Field(default=7, ge=3)
    seed: Optional[int] = None


class FixedSource(BaseModel):
    """Board loaded from a curated layout."""
    source: Literal["fixed"] = "fixed"
    layout_id: str
    seed: Optional[int] = None


BoardSource = Annotated[Union[ProceduralSource, FixedSource], Field(discriminator="source")]
