"""Grid constraint-satisfaction engine.

Fills a board of cells with integer values subject to a pluggable rule set, using
backtracking search.  Also provides a randomized variant for generating boards and a
solution counter for verifying that a puzzle has a unique solution.
"""

from sys import argv, exit

from .puzzle_config import load_configs
from .solver import solver
from .sudoku import format_board, generate_random_puzzle

USAGE = "Usage: gridcsp <path_to_puzzle_file> | gridcsp generate [seed]"


def main() -> None:
    """Main entry point for the gridcsp command line."""
    if len(argv) < 2 or len(argv) > 3:
        print(USAGE)
        exit(1)

    if argv[1] == "generate":
        try:
            seed = int(argv[2]) if len(argv) == 3 else None
        except ValueError:
            print(USAGE)
            exit(1)
        result = generate_random_puzzle(seed=seed)
        print(format_board(result.board))
        print(f"Holes: {len(result.voids)}")
        return

    if len(argv) != 2:
        print(USAGE)
        exit(1)
    configs = load_configs(argv[1])

    for config in configs:
        solver.run(config)
