"""Command-line level solver: runs one puzzle configuration and logs the outcome."""

import sys
from datetime import datetime
from pathlib import Path
from time import time
from typing import TextIO

from gridcsp.puzzle_config import PuzzleConfig
from gridcsp.solver.backtracking import count_solutions, solve
from gridcsp.solver.config import config as solver_config
from gridcsp.solver.utils import SearchStats
from gridcsp.util import int_comma, time_str

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f %Z%z"


def run(config: PuzzleConfig) -> bool:
    """Run the solver on the given configuration, logging to a per-puzzle log file.

    Args:
        config (PuzzleConfig): The configuration for the puzzle to solve.

    Returns:
        Whether a solution was found.
    """
    print(f"config: {config}")

    logfile = Path(solver_config.log_dir) / f"{config.name}.log"
    print(f"Log file: {logfile}")
    logfile.parent.mkdir(parents=True, exist_ok=True)

    with open(logfile, "w", encoding="utf-8") as logf:
        try:
            solved = solve_one(config, logf=logf)
        except KeyboardInterrupt:
            print("Solver interrupted by user.", file=logf, flush=True)
            print("Solver interrupted by user.")
            sys.exit(1)

    print("Solution found!" if solved else "No solution found.")
    print()
    return solved


def solve_one(puzzle_config: PuzzleConfig, *, logf: TextIO) -> bool:
    """Solve a puzzle and write the search details to `logf`.

    After a successful solve the win condition is checked and a separate solution count on
    the initial grid reports whether the solution is unique.

    Args:
        puzzle_config (PuzzleConfig): The configuration for the puzzle to solve.
        logf: File object to log the solving process.

    Returns:
        Whether a solution was found.
    """
    print(f"Selected puzzle: {puzzle_config.name}", file=logf, flush=True)
    print(f"Dimensions: {puzzle_config.dims}", file=logf, flush=True)
    print(f"Rules: {puzzle_config.rules}, values 1..{puzzle_config.max_value}", file=logf)
    print(f"Empty cells: {puzzle_config.n_empty}", file=logf)
    print(f"Solver config: {solver_config.model_dump()}", file=logf, flush=True)

    board = puzzle_config.build_board()
    rules = puzzle_config.build_rules()
    print("Initial grid:", file=logf)
    print(board, file=logf)
    print("", file=logf, flush=True)

    stats = SearchStats()
    start_time_str = datetime.fromtimestamp(stats.start_time).astimezone().strftime(TIMESTAMP_FMT)
    print(f"Start time: {start_time_str}", file=logf, flush=True)

    solved = solve(board, rules, puzzle_config.max_value, stats=stats, out=logf)
    print(
        f"Nodes: {int_comma(stats.nodes)}, validations: {int_comma(stats.validations)}, "
        f"time: {time_str(time() - stats.start_time)}",
        file=logf,
        flush=True,
    )

    if not solved:
        print("No solution found.", file=logf, flush=True)
        return False

    print("Solution found!", file=logf)
    print(board, file=logf)
    print(board)
    if not rules.check_win(board):
        # Incremental validation was weaker than the win condition.
        print("WARNING: solution does not satisfy the win condition.", file=logf, flush=True)
        print("WARNING: solution does not satisfy the win condition.")

    check = count_solutions(puzzle_config.build_board(), rules, puzzle_config.max_value, out=logf)
    print(f"Unique solution: {not check.multiple}", file=logf, flush=True)
    print(f"Unique solution: {not check.multiple}")
    return True
