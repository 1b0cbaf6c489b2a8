"""Backtracking search over a board.

All three searches mutate the board in place and never copy it.  Every frame picks the first
empty cell in board order, assigns candidate values accepted by the rule set, and resets the
cell to None before trying the next candidate or returning failure.  The call stack is the
only search state, so recursion depth equals the number of cells filled by the search.
"""

import random
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import NamedTuple, TextIO

from gridcsp.board import Board
from gridcsp.rules import RuleSet
from gridcsp.solver.utils import (
    SearchDepthExceededError,
    SearchSignal,
    SearchStats,
    ascending_candidates,
    enter_frame,
    make_rng,
    resolve_max_value,
    shuffled_candidates,
)

MULTIPLE_SOLUTIONS_THRESHOLD = 2
"""Number of complete assignments after which the solution counter stops searching."""

CandidateOrder = Callable[[], Iterable[int]]
"""Produces the candidate values for one frame.  Called once per frame."""


class SolutionCheck(NamedTuple):
    """Result of `count_solutions`."""

    found: bool
    """Whether at least one complete assignment exists."""

    multiple: bool
    """Whether at least two distinct complete assignments were reached."""


@contextmanager
def _stack_guard(board: Board) -> Iterator[None]:
    """Report call-stack exhaustion as a fatal error instead of "no solution"."""
    try:
        yield
    except RecursionError as e:
        raise SearchDepthExceededError(
            f"Search on a board of {len(board.cells)} cells exhausted the call stack."
        ) from e


def solve(
    board: Board,
    rules: RuleSet,
    max_value: int | None = None,
    *,
    stats: SearchStats | None = None,
    out: TextIO | None = None,
) -> bool:
    """Fill the board by depth-first search, trying values in ascending order.

    Args:
        board (Board): The board to fill.  Modified in-place.
        rules (RuleSet): Rules deciding which values may be placed where.
        max_value (int | None): Largest candidate value.  Defaults to the number of cells.
        stats (SearchStats | None): Optional statistics object, updated during the search.
        out (TextIO | None): Optional stream for periodic progress reports.

    Returns:
        True if no empty cell remains (the board is left filled), else False (every cell the
        search assigned is reset to None).

    Raises:
        ValueError: If `max_value` is not a positive integer.
        SearchDepthExceededError: If the board is too large for the call stack.
    """
    max_value = resolve_max_value(board, max_value)
    stats = stats if stats is not None else SearchStats()
    with _stack_guard(board):
        return _backtrack(
            board, rules, lambda: ascending_candidates(max_value), stats=stats, out=out
        )


def random_solve(
    board: Board,
    rules: RuleSet,
    max_value: int | None = None,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
    stats: SearchStats | None = None,
    out: TextIO | None = None,
) -> bool:
    """Fill the board like `solve`, but try values in a freshly shuffled order at every cell.

    Used to produce varied complete boards (e.g. for puzzle generation).

    Args:
        board (Board): The board to fill.  Modified in-place.
        rules (RuleSet): Rules deciding which values may be placed where.
        max_value (int | None): Largest candidate value.  Defaults to the number of cells.
        rng (random.Random | None): Random source to shuffle with.  Takes precedence over `seed`.
        seed (int | None): Seed for a new random source, if `rng` is not given.  Falls back to
            the configured seed.
        stats (SearchStats | None): Optional statistics object, updated during the search.
        out (TextIO | None): Optional stream for periodic progress reports.

    Returns:
        True if the board was filled, else False (board restored).
    """
    max_value = resolve_max_value(board, max_value)
    stats = stats if stats is not None else SearchStats()
    rng = make_rng(rng, seed)
    with _stack_guard(board):
        return _backtrack(
            board, rules, lambda: shuffled_candidates(max_value, rng), stats=stats, out=out
        )


def count_solutions(
    board: Board,
    rules: RuleSet,
    max_value: int | None = None,
    *,
    stats: SearchStats | None = None,
    out: TextIO | None = None,
) -> SolutionCheck:
    """Check whether the board has no, exactly one, or several completions.

    Searches in ascending order like `solve` but keeps going past the first complete
    assignment, and stops as soon as a second one is reached.  Every cell that starts empty
    is empty again when this returns, whatever the outcome.

    Args:
        board (Board): The board to check.  Restored before returning.
        rules (RuleSet): Rules deciding which values may be placed where.
        max_value (int | None): Largest candidate value.  Defaults to the number of cells.
        stats (SearchStats | None): Optional statistics object, updated during the search.
        out (TextIO | None): Optional stream for periodic progress reports.

    Returns:
        A SolutionCheck; `multiple` being False with `found` True means the solution is unique.
    """
    max_value = resolve_max_value(board, max_value)
    stats = stats if stats is not None else SearchStats()
    first = stats.solutions
    with _stack_guard(board):
        _count(
            board,
            rules,
            max_value,
            stop_at=first + MULTIPLE_SOLUTIONS_THRESHOLD,
            stats=stats,
            out=out,
        )
    n_solutions = stats.solutions - first
    return SolutionCheck(found=n_solutions > 0, multiple=n_solutions > 1)


def _backtrack(
    board: Board,
    rules: RuleSet,
    candidates: CandidateOrder,
    *,
    stats: SearchStats,
    out: TextIO | None,
    depth: int = 0,
) -> bool:
    """Recursive core shared by `solve` and `random_solve`."""
    enter_frame(stats, board, depth, out)

    cell = board.find_empty()
    if cell is None:
        return True  # Board is complete

    for value in candidates():
        stats.validations += 1
        if not rules.validate_move(board, cell, value):
            continue

        cell.value = value
        try:
            solved = _backtrack(board, rules, candidates, stats=stats, out=out, depth=depth + 1)
        except BaseException:
            # Ensure callers never observe partial assignments.
            cell.value = None
            raise
        if solved:
            return True
        cell.value = None

    return False


def _count(
    board: Board,
    rules: RuleSet,
    max_value: int,
    *,
    stop_at: int,
    stats: SearchStats,
    out: TextIO | None,
    depth: int = 0,
) -> SearchSignal:
    """Recursive core of `count_solutions`.  The solution count lives in `stats.solutions`."""
    enter_frame(stats, board, depth, out)

    cell = board.find_empty()
    if cell is None:
        stats.solutions += 1
        return SearchSignal.STOP if stats.solutions >= stop_at else SearchSignal.CONTINUE

    for value in ascending_candidates(max_value):
        stats.validations += 1
        if not rules.validate_move(board, cell, value):
            continue

        cell.value = value
        try:
            signal = _count(
                board, rules, max_value, stop_at=stop_at, stats=stats, out=out, depth=depth + 1
            )
        finally:
            # The search continues past complete assignments, so always undo.
            cell.value = None
        if signal is SearchSignal.STOP:
            return signal

    return SearchSignal.CONTINUE
