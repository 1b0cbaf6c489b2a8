"""Sudoku on top of the generic engine: board creation, generation and carving."""

import random
from collections.abc import Sequence
from typing import NamedTuple

from sortedcontainers import SortedList

from gridcsp.board import Board
from gridcsp.rules import RuleSet, SudokuRuleSet
from gridcsp.solver.backtracking import count_solutions, random_solve, solve
from gridcsp.solver.utils import make_rng
from gridcsp.topology import RectangularTopology

SAMPLE_PUZZLE: list[list[int | None]] = [
    [5, 3, None, None, 7, None, None, None, None],
    [6, None, None, 1, 9, 5, None, None, None],
    [None, 9, 8, None, None, None, None, 6, None],
    [8, None, None, None, 6, None, None, None, 3],
    [4, None, None, 8, None, 3, None, None, 1],
    [7, None, None, None, 2, None, None, None, 6],
    [None, 6, None, None, None, None, 2, 8, None],
    [None, None, None, 4, 1, 9, None, None, 5],
    [None, None, None, None, 8, None, None, 7, 9],
]
"""A classic 9x9 puzzle with a unique solution.  None marks an empty cell."""


class CarveResult(NamedTuple):
    """Result of carving holes into a solved board."""

    board: Board
    """The carved board (the same object that was passed in)."""

    voids: list[int]
    """Row-major indices of the cells that were emptied, in ascending order."""


def assign_regions(board: Board, box_width: int = 3, box_height: int = 3) -> None:
    """Store a region id in `cell.metadata["region"]` for each cell.

    Regions are `box_width` x `box_height` blocks, numbered row-major.
    """
    if board.width % box_width or board.height % box_height:
        raise ValueError(
            f"A {board.width}x{board.height} board cannot be split into "
            f"{box_width}x{box_height} regions."
        )
    boxes_per_row = board.width // box_width
    for cell in board.cells:
        cell.metadata["region"] = cell.x // box_width + (cell.y // box_height) * boxes_per_row


def create_sudoku_board(
    initial: Sequence[Sequence[int | None]] | None = None,
    *,
    size: int = 9,
    box_width: int = 3,
    box_height: int = 3,
) -> Board:
    """Create a Sudoku board, optionally loaded with an initial puzzle.

    Args:
        initial: Rows of the puzzle; None or 0 marks an empty cell.
        size: Width and height of the grid.
        box_width: Width of a region.
        box_height: Height of a region.
    """
    if box_width * box_height != size:
        raise ValueError(f"{box_width}x{box_height} regions do not hold {size} values.")
    board = Board(RectangularTopology(), size, size)
    assign_regions(board, box_width, box_height)

    if initial is not None:
        if len(initial) != size or any(len(row) != size for row in initial):
            raise ValueError(f"Initial puzzle must be {size}x{size}.")
        for y, row in enumerate(initial):
            for x, value in enumerate(row):
                if value and not 1 <= value <= size:
                    raise ValueError(f"Value {value} at ({x}, {y}) is out of range 1..{size}.")
                board[x, y].value = value or None
    return board


def full_sudoku_board(
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
    size: int = 9,
    box_width: int = 3,
    box_height: int = 3,
) -> Board:
    """Generate a random, completely filled Sudoku board."""
    board = create_sudoku_board(size=size, box_width=box_width, box_height=box_height)
    if not random_solve(board, SudokuRuleSet(), size, rng=make_rng(rng, seed)):
        raise RuntimeError("Failed to fill an empty Sudoku board.")
    return board


def carve_board(
    board: Board,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
    rules: RuleSet | None = None,
    max_holes: int | None = None,
) -> CarveResult:
    """Empty as many cells as possible while keeping the solution unique.

    Filled cells are visited in random order.  Each one is cleared, and stays cleared only if
    the board still has exactly one solution.  Modifies `board` in-place.

    Args:
        board: A solved board.
        rng: Random source for the visiting order.  Takes precedence over `seed`.
        seed: Seed for a new random source, if `rng` is not given.
        rules: Rules to check uniqueness against.  Defaults to SudokuRuleSet.
        max_holes: Stop once this many cells have been emptied.  If None, no limit.
    """
    rules = rules if rules is not None else SudokuRuleSet()
    rng = make_rng(rng, seed)
    max_value = board.width

    order = [i for i, cell in enumerate(board.cells) if cell.value is not None]
    rng.shuffle(order)

    voids: SortedList[int] = SortedList()
    for idx in order:
        if max_holes is not None and len(voids) >= max_holes:
            break
        cell = board[idx]
        saved = cell.value
        cell.value = None
        check = count_solutions(board, rules, max_value)
        if check.multiple or not check.found:
            cell.value = saved  # Removal breaks uniqueness, put it back
            continue
        voids.add(idx)

    return CarveResult(board, list(voids))


def generate_random_puzzle(
    *,
    seed: int | None = None,
    size: int = 9,
    box_width: int = 3,
    box_height: int = 3,
    max_holes: int | None = None,
) -> CarveResult:
    """Generate a Sudoku puzzle with a unique solution."""
    rng = make_rng(seed=seed)
    board = full_sudoku_board(rng=rng, size=size, box_width=box_width, box_height=box_height)
    return carve_board(board, rng=rng, max_holes=max_holes)


def format_board(board: Board, box_width: int = 3, box_height: int = 3) -> str:
    """Render the board with separators between regions."""
    lines = []
    for y in range(board.height):
        row = ""
        for x in range(board.width):
            value = board[x, y].value
            row += ("." if value is None else str(value)) + " "
            if (x + 1) % box_width == 0 and x < board.width - 1:
                row += "| "
        lines.append(row.rstrip())
        if (y + 1) % box_height == 0 and y < board.height - 1:
            lines.append("-" * len(lines[0]))
    return "\n".join(lines)


def print_board(board: Board, box_width: int = 3, box_height: int = 3) -> None:
    """Pretty-print the board."""
    print(format_board(board, box_width, box_height))


def solve_sample() -> Board:
    """Solve SAMPLE_PUZZLE and check the result against the Sudoku rules.

    Raises:
        ValueError: If the sample cannot be solved or the solution breaks the rules.
    """
    board = create_sudoku_board(SAMPLE_PUZZLE)
    rules = SudokuRuleSet()
    if not solve(board, rules, 9):
        raise ValueError("No solution found for the sample puzzle.")
    if not rules.check_win(board):
        raise ValueError("Solution does not satisfy Sudoku constraints.")
    return board
