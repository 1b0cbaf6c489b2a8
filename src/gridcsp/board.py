"""Classes and functions for representing the game board."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from gridcsp.topology import RectangularTopology, Topology


@dataclass(eq=False)
class Cell:
    """A single addressable cell of the board.

    Cells compare by identity, so two cells holding the same value are still distinct.
    """

    x: int
    """Column of the cell."""

    y: int
    """Row of the cell."""

    value: int | None = None
    """Value in the cell, or None if unassigned."""

    metadata: dict[str, Any] = field(default_factory=dict)
    """Free-form per-cell data (e.g. the Sudoku region id)."""


class Board:
    """Store a 2D grid of cells as a 1D list, in the order produced by the topology.

    Contains support for both 1D and 2D indexing.
    """

    def __init__(
        self,
        topology: Topology,
        width: int,
        height: int,
        *,
        cells: list[Cell] | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}.")
        self.topology = topology
        self.width = width
        self.height = height
        self.cells: list[Cell] = (
            cells if cells is not None else topology.initialize_cells(width, height)
        )
        if len(self.cells) != width * height:
            raise ValueError(
                f"Expected {width * height} cells for a {width}x{height} board, "
                f"got {len(self.cells)}."
            )
        self._index: dict[tuple[int, int], Cell] = {(c.x, c.y): c for c in self.cells}

    @classmethod
    def from_rows(
        cls, rows: Sequence[Sequence[int | None]], topology: Topology | None = None
    ) -> "Board":
        """Create a board from a list of rows.  Zero or None marks an empty cell."""
        if not rows or not rows[0]:
            raise ValueError("Cannot create a board from an empty grid.")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("All rows must have the same length.")
        board = cls(topology or RectangularTopology(), width, len(rows))
        for y, row in enumerate(rows):
            for x, value in enumerate(row):
                board[x, y].value = value or None
        return board

    def copy(self) -> "Board":
        """Generate an independent copy of the board (cells included)."""
        cells = [Cell(c.x, c.y, c.value, dict(c.metadata)) for c in self.cells]
        return Board(self.topology, self.width, self.height, cells=cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)

    def __getitem__(self, idx: int | tuple[int, int]) -> Cell:
        """Get a cell by 1D (board order) or 2D `(x, y)` index."""
        if isinstance(idx, int):
            return self.cells[idx]
        if isinstance(idx, tuple) and len(idx) == 2:
            cell = self._index.get(idx)
            if cell is None:
                raise IndexError(f"No cell at {idx}.")
            return cell
        raise IndexError("Invalid index type for Board.")

    def get_cell(self, x: int, y: int) -> Cell | None:
        """Get the cell at column `x`, row `y`, or None if it is off the board."""
        return self._index.get((x, y))

    def find_empty(self) -> Cell | None:
        """Return the first unassigned cell in board order, or None if the board is full."""
        for cell in self.cells:
            if cell.value is None:
                return cell
        return None

    def is_complete(self) -> bool:
        """Check if every cell holds a value."""
        return all(cell.value is not None for cell in self.cells)

    def values(self) -> list[int | None]:
        """Snapshot of all cell values, in board order."""
        return [cell.value for cell in self.cells]

    def load(self, values: Iterable[int | None]) -> None:
        """Overwrite cell values from a snapshot taken with `values()`."""
        values = list(values)
        if len(values) != len(self.cells):
            raise ValueError(f"Expected {len(self.cells)} values, got {len(values)}.")
        for cell, value in zip(self.cells, values):
            cell.value = value or None

    def rows(self) -> list[list[int | None]]:
        """Cell values as a list of rows."""
        return [[self[x, y].value for x in range(self.width)] for y in range(self.height)]

    def is_connected(self) -> bool:
        """Check that every cell is reachable from the first one through the topology."""
        if not self.cells:
            return True

        # Depth-First Search (DFS) to mark all reachable cells
        visited: set[int] = set()
        stack = [self.cells[0]]
        while stack:
            cell = stack.pop()
            if id(cell) in visited:
                continue
            visited.add(id(cell))
            for neighbor in self.topology.get_neighbors(cell, self):
                if id(neighbor) not in visited:
                    stack.append(neighbor)

        return len(visited) == len(self.cells)

    def __str__(self) -> str:
        """Returns a string representation of the board, one line per row."""
        return "\n".join(
            " ".join("." if value is None else str(value) for value in row) for row in self.rows()
        )

    def print(self) -> None:
        """Print the board to the console."""
        print(self)
