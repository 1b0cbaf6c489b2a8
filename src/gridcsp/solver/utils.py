"""Utility functions and shared state for the backtracking solvers."""

import operator
import random
from dataclasses import dataclass, field
from enum import IntEnum
from time import time
from typing import TextIO

from gridcsp.board import Board
from gridcsp.solver.config import config as solver_config
from gridcsp.util import int_comma, time_str


class SearchDepthExceededError(RuntimeError):
    """Raised when a search runs out of call stack (board too large for recursive search)."""

    pass


class SearchSignal(IntEnum):
    """Return channel of the solution counter, kept apart from the "solved" boolean."""

    CONTINUE = 0
    """Keep exploring sibling candidates."""

    STOP = 1
    """Enough solutions were seen; unwind without trying further candidates."""


@dataclass
class SearchStats:
    """Statistics collected during a single search call."""

    nodes: int = 0
    """Number of search frames entered."""

    validations: int = 0
    """Number of `validate_move` queries made."""

    solutions: int = 0
    """Number of complete assignments reached (only counted by the solution counter)."""

    max_depth: int = 0
    """Maximum recursion depth reached."""

    start_time: float = field(default_factory=time)
    """Timestamp when the search started."""


def resolve_max_value(board: Board, max_value: int | None) -> int:
    """Return the candidate upper bound for a search on `board`.

    Args:
        board (Board): The board to be searched.
        max_value (int | None): Largest candidate value.  If None, the number of cells.

    Raises:
        ValueError: If `max_value` is given but is not a positive integer.
    """
    if max_value is None:
        return len(board.cells)
    error = ValueError(f"max_value must be a positive integer, got {max_value!r}.")
    if isinstance(max_value, bool):
        raise error
    try:
        # Accepts numpy integers as well as int
        value = operator.index(max_value)
    except TypeError:
        raise error from None
    if value < 1:
        raise error
    return value


def ascending_candidates(max_value: int) -> range:
    """Candidate values `1..max_value` in ascending order."""
    return range(1, max_value + 1)


def shuffled_candidates(max_value: int, rng: random.Random) -> list[int]:
    """A fresh, uniformly shuffled permutation of `1..max_value`."""
    values = list(range(1, max_value + 1))
    rng.shuffle(values)
    return values


def make_rng(rng: random.Random | None = None, seed: int | None = None) -> random.Random:
    """Get the random source for one call: `rng` if given, else a new one seeded by `seed`.

    Falls back to the configured seed, so no search ever touches the global `random` state.
    """
    if rng is not None:
        return rng
    return random.Random(seed if seed is not None else solver_config.seed)


def enter_frame(stats: SearchStats, board: Board, depth: int, out: TextIO | None) -> None:
    """Book-keeping at the start of every search frame."""
    stats.nodes += 1
    if depth > stats.max_depth:
        stats.max_depth = depth
    if out is not None and stats.nodes % solver_config.report_interval == 0:
        report_progress(stats, board, out)


def report_progress(stats: SearchStats, board: Board, out: TextIO) -> None:
    """Print a one-line progress report for a running search.

    Args:
        stats (SearchStats): Statistics of the running search.
        board (Board): The board being searched.
        out (TextIO): Stream to write the report to.
    """
    n_filled = sum(1 for cell in board.cells if cell.value is not None)
    print(
        f"*{n_filled}/{len(board.cells)}* "
        f"N:{int_comma(stats.nodes)} "
        f"V:{int_comma(stats.validations)} "
        f"S:{stats.solutions} "
        f"D:{stats.max_depth} "
        f"T:{time_str(time() - stats.start_time)}",
        file=out,
        flush=True,
    )
