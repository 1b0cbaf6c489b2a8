"""Placement rules queried by the solver.

A rule set is any object with `validate_move` and `check_win`.  Neither method may mutate
the board: the solver calls `validate_move` on partially filled boards many times per second
and relies on the board being exactly as it left it.

Rule-set authors must make incremental validation strong enough to imply the win
condition.  The solver treats "no empty cell left" as success and never calls `check_win`
itself.
"""

from collections.abc import Iterable
from typing import Protocol

from bitarray.util import zeros

from gridcsp.board import Board, Cell


class RuleSet(Protocol):
    """Capability interface for placement rules."""

    def validate_move(self, board: Board, cell: Cell, value: int) -> bool:
        """Return whether `value` may be placed in `cell` given the rest of `board`."""
        ...

    def check_win(self, board: Board) -> bool:
        """Return whether `board` is a complete, valid solution."""
        ...


def _has_value(cells: Iterable[Cell], cell: Cell, value: int) -> bool:
    """Whether any cell other than `cell` already holds `value`."""
    return any(other.value == value and other is not cell for other in cells)


def _row(board: Board, y: int) -> list[Cell]:
    return [c for x in range(board.width) if (c := board.get_cell(x, y)) is not None]


def _col(board: Board, x: int) -> list[Cell]:
    return [c for y in range(board.height) if (c := board.get_cell(x, y)) is not None]


def _region(board: Board, region: object) -> list[Cell]:
    return [c for c in board.cells if c.metadata.get("region") == region]


def _all_distinct(cells: Iterable[Cell]) -> bool:
    """Check that no value appears twice among filled `cells`."""
    seen = zeros(1)
    for cell in cells:
        if cell.value is None:
            continue
        if cell.value >= len(seen):
            seen.extend(zeros(cell.value + 1 - len(seen)))
        if seen[cell.value]:
            return False
        seen[cell.value] = 1
    return True


def _is_permutation(cells: list[Cell], size: int) -> bool:
    """Check that `cells` hold each of `1..size` exactly once."""
    seen = zeros(size + 1)
    for cell in cells:
        if cell.value is None or not 1 <= cell.value <= size or seen[cell.value]:
            return False
        seen[cell.value] = 1
    return seen.count() == size == len(cells)


class PermissiveRuleSet:
    """Every move is valid; the board is won once every cell holds a value."""

    def validate_move(self, board: Board, cell: Cell, value: int) -> bool:
        return True

    def check_win(self, board: Board) -> bool:
        return board.is_complete()


class RowUniqueRuleSet:
    """A value may appear at most once in each row."""

    def validate_move(self, board: Board, cell: Cell, value: int) -> bool:
        return not _has_value(_row(board, cell.y), cell, value)

    def check_win(self, board: Board) -> bool:
        if not board.is_complete():
            return False
        return all(_all_distinct(_row(board, y)) for y in range(board.height))


class LatinSquareRuleSet:
    """A value may appear at most once in each row and each column."""

    def validate_move(self, board: Board, cell: Cell, value: int) -> bool:
        if _has_value(_row(board, cell.y), cell, value):
            return False
        return not _has_value(_col(board, cell.x), cell, value)

    def check_win(self, board: Board) -> bool:
        if not board.is_complete():
            return False
        return all(_all_distinct(_row(board, y)) for y in range(board.height)) and all(
            _all_distinct(_col(board, x)) for x in range(board.width)
        )


class SudokuRuleSet:
    """Unique numbers in each row, column and region.

    Regions are read from `cell.metadata["region"]`; see `gridcsp.sudoku.assign_regions`.
    """

    def validate_move(self, board: Board, cell: Cell, value: int) -> bool:
        # Row check: same y coordinate.
        if _has_value(_row(board, cell.y), cell, value):
            return False

        # Column check: same x coordinate.
        if _has_value(_col(board, cell.x), cell, value):
            return False

        # Region check: using metadata["region"].
        region = cell.metadata.get("region")
        if region is None:
            return True
        return not _has_value(_region(board, region), cell, value)

    def check_win(self, board: Board) -> bool:
        size = board.width
        if board.height != size or not board.is_complete():
            return False

        for y in range(board.height):
            if not _is_permutation(_row(board, y), size):
                return False

        for x in range(board.width):
            if not _is_permutation(_col(board, x), size):
                return False

        regions = {c.metadata.get("region") for c in board.cells}
        if None in regions or len(regions) != size:
            return False
        return all(_is_permutation(_region(board, region), size) for region in regions)
