"""Loader for puzzle files."""

from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Literal, get_args

import numpy as np

from gridcsp.board import Board
from gridcsp.rules import (
    LatinSquareRuleSet,
    PermissiveRuleSet,
    RowUniqueRuleSet,
    RuleSet,
    SudokuRuleSet,
)
from gridcsp.sudoku import assign_regions
from gridcsp.topology import RectangularTopology

RulesName = Literal["permissive", "row-unique", "latin", "sudoku"]

EMPTY_TOKENS = {".", "0"}
"""Tokens marking an empty cell in a puzzle file."""


@dataclass
class PuzzleConfig:
    """A puzzle configuration."""

    name: str
    """Name of the puzzle (the file stem, plus the board number within the file)."""

    dims: tuple[int, int]
    """The height and width of the puzzle grid."""

    max_value: int
    """Largest value a cell may hold."""

    rules: RulesName
    """Name of the rule set to solve with."""

    grid: np.ndarray
    """Initial cell values as a (height, width) integer array.  Zero marks an empty cell."""

    box: tuple[int, int] | None = field(default=None)
    """Region height and width, for Sudoku rules.  Defaults to the square root of the size."""

    def __post_init__(self) -> None:
        """Validate the grid."""
        if self.rules not in get_args(RulesName):
            raise ValueError(f"Unknown rule set {self.rules!r}.")
        if self.max_value < 1:
            raise ValueError(f"max_value must be positive, got {self.max_value}.")

        # Ensure the grid shape matches the specified dimensions
        if self.grid.shape != self.dims:
            raise ValueError(f"Grid shape {self.grid.shape} does not match dimensions {self.dims}.")

        # Ensure every value is empty (0) or within 1..max_value
        if not np.all((self.grid >= 0) & (self.grid <= self.max_value)):
            raise ValueError(f"Grid contains values outside 0..{self.max_value}.")

        if self.rules == "sudoku":
            height, width = self.dims
            if self.box is None:
                side = int(round(np.sqrt(width)))
                self.box = (side, side)
            box_height, box_width = self.box
            if height != width or box_height * box_width != width:
                raise ValueError(f"{self.box} regions do not fit a {height}x{width} Sudoku.")

    def __str__(self) -> str:
        """Return a string representation of the config."""
        rows = "\n".join(
            " ".join(str(v) if v else "." for v in row) for row in self.grid.tolist()
        )
        return (
            f"{self.name} ({self.dims[0]}x{self.dims[1]}, {self.rules}, 1..{self.max_value})\n"
            f"{rows}"
        )

    @property
    def n_empty(self) -> int:
        """Number of empty cells in the initial grid."""
        return int(np.count_nonzero(self.grid == 0))

    def build_board(self) -> Board:
        """Create a fresh board holding the initial grid."""
        board = Board.from_rows(self.grid.tolist(), RectangularTopology())
        if self.rules == "sudoku" and self.box is not None:
            box_height, box_width = self.box
            assign_regions(board, box_width, box_height)
        return board

    def build_rules(self) -> RuleSet:
        """Create the rule set named by `rules`."""
        match self.rules:
            case "permissive":
                return PermissiveRuleSet()
            case "row-unique":
                return RowUniqueRuleSet()
            case "latin":
                return LatinSquareRuleSet()
            case "sudoku":
                return SudokuRuleSet()
        raise ValueError(f"Unknown rule set {self.rules!r}.")


def parse_header(line: str) -> tuple[tuple[int, int], int, RulesName, tuple[int, int] | None]:
    """Parse `<height> <width> <max_value> <rules> [<box_h>x<box_w>]`."""
    parts = line.split()
    if len(parts) not in (4, 5):
        raise ValueError(f"Invalid header line: '{line}'")
    try:
        height, width, max_value = map(int, parts[:3])
        box = None
        if len(parts) == 5:
            box_height, box_width = map(int, parts[4].lower().split("x"))
            box = (box_height, box_width)
    except ValueError:
        # Covers both incorrect number of values and non-integer values
        raise ValueError(f"Invalid header line: '{line}'") from None
    rules = parts[3]
    if rules not in get_args(RulesName):
        raise ValueError(f"Unknown rule set '{rules}' in header line: '{line}'")
    return (height, width), max_value, rules, box  # type: ignore[return-value]


def parse_row(line: str) -> list[int]:
    """Parse one board row.  Empty cells become 0."""
    try:
        return [0 if token in EMPTY_TOKENS else int(token) for token in line.split()]
    except ValueError:
        raise ValueError(f"Invalid board row: '{line}'") from None


def load_configs(configs_path: PathLike | str) -> list[PuzzleConfig]:
    """Load all puzzles from the given file.

    The first line is a header (see `parse_header`), followed by a blank line and one or more
    boards separated by blank lines.

    Args:
        configs_path: Path to the puzzle file.
    """
    configs: list[PuzzleConfig] = []
    path = Path(configs_path).resolve()

    with open(path, "r", encoding="utf-8") as f:
        dims, max_value, rules, box = parse_header(f.readline().strip())

        # Skip first blank line
        if f.readline().strip() != "":
            raise ValueError("Expected a blank line after the header.")

        # Read the board lines, each board is separated by a blank line
        while True:
            rows: list[list[int]] = []
            while True:
                line = f.readline()
                if not line or line.strip() == "":
                    break
                rows.append(parse_row(line))

            if not rows:
                break  # No more boards to read

            if any(len(row) != dims[1] for row in rows):
                raise ValueError(f"Board {len(configs) + 1} in {path} has rows of wrong width.")
            configs.append(
                PuzzleConfig(
                    name=f"{path.stem}-{len(configs) + 1}",
                    dims=dims,
                    max_value=max_value,
                    rules=rules,
                    grid=np.array(rows, dtype=int),
                    box=box,
                )
            )

    return configs
