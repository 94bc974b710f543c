"""
Curated board layouts.

A layout describes a fixed board: grid size, which cells are locked,
vaults, fog (hidden phrase letters) or claimable territory, plus the
puzzle mode and win condition it is played with. Each cell is one of a
closed set of variants; ``BoardLayout.to_board`` turns the cell grid into
the same ``Board`` model the procedural generator produces.
"""

import functools
import logging
import random
from pathlib import Path
from typing import Annotated, Dict, Iterator, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, model_validator

from .models import Board, Tile, Position, PuzzleMode, WinCondition
from .generator import draw_letter, letter_value, seed_for_layout, PLAYABLE_SIZES

log = logging.getLogger("verbloc")

PlayMode = Literal["Solo", "Multiplayer", "Both"]
Difficulty = Literal["Easy", "Medium", "Hard", "Special"]

_DATA_FILE = Path(__file__).parent / "data" / "layouts.yaml"


# Cell variants

class LetterCell(BaseModel):
    kind: Literal["letter"] = "letter"
    letter: Optional[str] = None


class LockedCell(BaseModel):
    kind: Literal["locked"] = "locked"
    letter: Optional[str] = None


class VaultCell(BaseModel):
    kind: Literal["vault"] = "vault"
    letter: Optional[str] = None


class FogCell(BaseModel):
    kind: Literal["fog"] = "fog"
    letter: Optional[str] = None


class TerritoryCell(BaseModel):
    kind: Literal["territory"] = "territory"
    letter: Optional[str] = None


LayoutCell = Annotated[
    Union[LetterCell, LockedCell, VaultCell, FogCell, TerritoryCell],
    Field(discriminator="kind"),
]


def cell_to_tile(cell: LayoutCell, row: int, col: int, rng: random.Random) -> Tile:
    """Turn one layout cell into a board tile."""
    letter = cell.letter or draw_letter(rng)
    base = {"letter": letter, "value": letter_value(letter), "row": row, "col": col}

    if isinstance(cell, LetterCell):
        return Tile(**base)
    if isinstance(cell, LockedCell):
        return Tile(**base, locked=True)
    if isinstance(cell, VaultCell):
        return Tile(**base, locked=True, vault=True)
    if isinstance(cell, FogCell):
        return Tile(**base, phrase_letter=True)
    if isinstance(cell, TerritoryCell):
        return Tile(**base, claimable=True)
    raise TypeError(f"Unhandled layout cell: {cell!r}")


class BoardLayout(BaseModel):
    """A hand-authored board definition."""
    id: str = Field(..., min_length=1)
    name: str
    supported_modes: List[PlayMode] = Field(default_factory=lambda: ["Both"])
    grid_size: int
    puzzle_mode: PuzzleMode
    win_condition: WinCondition
    difficulty: Difficulty = "Easy"
    tags: List[str] = Field(default_factory=list)
    description: str = ""
    letters: Optional[List[str]] = None
    locked: List[Position] = Field(default_factory=list)
    vaults: List[Position] = Field(default_factory=list)
    fog: List[Position] = Field(default_factory=list)
    territory: List[Position] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_layout(self) -> "BoardLayout":
        if self.grid_size not in PLAYABLE_SIZES:
            raise ValueError(f"Layout '{self.id}': grid size must be 7 or 9, got {self.grid_size}")

        if self.letters is not None:
            if len(self.letters) != self.grid_size or any(
                len(line) != self.grid_size for line in self.letters
            ):
                raise ValueError(f"Layout '{self.id}': letters must be a {self.grid_size}x{self.grid_size} grid")
            for line in self.letters:
                if not all(ch == "." or ch.isalpha() for ch in line):
                    raise ValueError(f"Layout '{self.id}': letters may only hold A-Z or '.'")

        seen: Dict[Position, str] = {}
        for kind, positions in (
            ("locked", self.locked),
            ("vault", self.vaults),
            ("fog", self.fog),
            ("territory", self.territory),
        ):
            for pos in positions:
                if not (0 <= pos.row < self.grid_size and 0 <= pos.col < self.grid_size):
                    raise ValueError(f"Layout '{self.id}': {kind} position {tuple(pos)} is off the board")
                if pos in seen:
                    raise ValueError(
                        f"Layout '{self.id}': position {tuple(pos)} is both {seen[pos]} and {kind}"
                    )
                seen[pos] = kind

        required = {
            PuzzleMode.VAULT_BREAK: ("vaults", self.vaults),
            PuzzleMode.HIDDEN_PHRASE: ("fog", self.fog),
            PuzzleMode.TERRITORY_CONTROL: ("territory", self.territory),
        }
        if self.puzzle_mode in required:
            name, positions = required[self.puzzle_mode]
            if not positions:
                raise ValueError(f"Layout '{self.id}': {self.puzzle_mode.value} needs at least one {name} cell")
        return self

    def cells(self) -> List[List[LayoutCell]]:
        """Expand the layout into a grid of typed cells."""
        phrase = [ch for ch in (self.win_condition.target_phrase or "").upper() if ch.isalpha()]

        grid: List[List[LayoutCell]] = []
        for r in range(self.grid_size):
            row: List[LayoutCell] = []
            for c in range(self.grid_size):
                pinned = None
                if self.letters is not None and self.letters[r][c] != ".":
                    pinned = self.letters[r][c].upper()
                row.append(LetterCell(letter=pinned))
            grid.append(row)

        for pos in self.locked:
            grid[pos.row][pos.col] = LockedCell(letter=grid[pos.row][pos.col].letter)
        for pos in self.vaults:
            grid[pos.row][pos.col] = VaultCell(letter=grid[pos.row][pos.col].letter)
        for pos in self.territory:
            grid[pos.row][pos.col] = TerritoryCell(letter=grid[pos.row][pos.col].letter)

        # Phrase letters fill fog cells in row-major order
        fog_positions = sorted(self.fog)
        for i, pos in enumerate(fog_positions):
            letter = phrase[i] if i < len(phrase) else grid[pos.row][pos.col].letter
            grid[pos.row][pos.col] = FogCell(letter=letter)

        return grid

    def to_board(self, seed: Optional[int] = None) -> Board:
        """
        Build the initial board for this layout.

        Args:
            seed: Seed for unpinned letters (defaults to one derived from the id)

        Returns:
            A new Board
        """
        rng = random.Random(seed_for_layout(self.id) if seed is None else seed)
        tiles = [
            [cell_to_tile(cell, r, c, rng) for c, cell in enumerate(row)]
            for r, row in enumerate(self.cells())
        ]
        log.debug("Built board from layout '%s'", self.id)
        return Board(size=self.grid_size, tiles=tiles)


class LayoutLibrary:
    """Collection of curated layouts, keyed by id."""

    def __init__(self, layouts: List[BoardLayout]):
        self._layouts: Dict[str, BoardLayout] = {}
        for layout in layouts:
            if layout.id in self._layouts:
                raise ValueError(f"Duplicate layout id '{layout.id}'")
            self._layouts[layout.id] = layout

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LayoutLibrary":
        """Load and validate layouts from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Layout file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        layouts = [BoardLayout(**entry) for entry in data.get("layouts", [])]
        log.info("Loaded %s layouts from %s", len(layouts), path)
        return cls(layouts)

    def get(self, layout_id: str) -> BoardLayout:
        if layout_id not in self._layouts:
            raise KeyError(f"Unknown layout '{layout_id}'")
        return self._layouts[layout_id]

    def filter(
        self,
        difficulty: Optional[str] = None,
        mode: Optional[str] = None,
        tag: Optional[str] = None,
        puzzle_mode: Optional[PuzzleMode] = None,
    ) -> List[BoardLayout]:
        """
        Select layouts matching every given criterion.

        A layout that supports "Both" matches either play mode.
        """
        result = []
        for layout in self._layouts.values():
            if difficulty and layout.difficulty != difficulty:
                continue
            if mode and mode not in layout.supported_modes and "Both" not in layout.supported_modes:
                continue
            if tag and tag not in layout.tags:
                continue
            if puzzle_mode and layout.puzzle_mode != puzzle_mode:
                continue
            result.append(layout)
        return result

    def __contains__(self, layout_id: str) -> bool:
        return layout_id in self._layouts

    def __iter__(self) -> Iterator[BoardLayout]:
        return iter(self._layouts.values())

    def __len__(self) -> int:
        return len(self._layouts)


@functools.lru_cache(maxsize=None)
def default_library() -> LayoutLibrary:
    """The packaged layout library, loaded once."""
    return LayoutLibrary.from_yaml(_DATA_FILE)
