"""Board connectivity rules."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gridcsp.board import Board, Cell


class Topology(Protocol):
    """Decides which cells a board has and which of them are adjacent."""

    def initialize_cells(self, width: int, height: int) -> list["Cell"]:
        """Create the cells for a `width` x `height` board, in board order."""
        ...

    def get_neighbors(self, cell: "Cell", board: "Board") -> list["Cell"]:
        """Get the cells adjacent to `cell` on `board`."""
        ...


class RectangularTopology:
    """Row-major rectangular grid with 4-neighbourhood adjacency."""

    # up, right, down, left
    DIRECTIONS: tuple[tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))

    def initialize_cells(self, width: int, height: int) -> list["Cell"]:
        from gridcsp.board import Cell

        return [Cell(x, y) for y in range(height) for x in range(width)]

    def get_neighbors(self, cell: "Cell", board: "Board") -> list["Cell"]:
        neighbors = []
        for delta_x, delta_y in self.DIRECTIONS:
            neighbor = board.get_cell(cell.x + delta_x, cell.y + delta_y)
            if neighbor is not None:
                neighbors.append(neighbor)
        return neighbors
