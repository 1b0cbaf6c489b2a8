"""Shared fixtures for the gridcsp tests."""

import pytest

from gridcsp.board import Board, Cell
from gridcsp.rules import RuleSet
from gridcsp.topology import RectangularTopology


class RecordingRuleSet:
    """Wraps a rule set and records every `validate_move` query."""

    def __init__(self, inner: RuleSet) -> None:
        self.inner = inner
        self.calls: list[tuple[int, int, int]] = []

    def validate_move(self, board: Board, cell: Cell, value: int) -> bool:
        self.calls.append((cell.x, cell.y, value))
        return self.inner.validate_move(board, cell, value)

    def check_win(self, board: Board) -> bool:
        return self.inner.check_win(board)


@pytest.fixture
def make_board():
    """Factory for rectangular boards, optionally pre-filled row by row."""

    def _make(width: int, height: int, rows: list[list[int | None]] | None = None) -> Board:
        if rows is not None:
            return Board.from_rows(rows)
        return Board(RectangularTopology(), width, height)

    return _make


@pytest.fixture
def solved_4x4() -> list[list[int]]:
    """A complete, valid 4x4 Sudoku grid (2x2 regions)."""
    return [
        [1, 2, 3, 4],
        [3, 4, 1, 2],
        [2, 1, 4, 3],
        [4, 3, 2, 1],
    ]


@pytest.fixture
def recording():
    """Factory wrapping a rule set so its `validate_move` queries are recorded."""
    return RecordingRuleSet
