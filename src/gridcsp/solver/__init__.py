"""Backtracking search engine."""

from gridcsp.solver.backtracking import SolutionCheck, count_solutions, random_solve, solve
from gridcsp.solver.utils import SearchDepthExceededError, SearchStats

__all__ = [
    "SearchDepthExceededError",
    "SearchStats",
    "SolutionCheck",
    "count_solutions",
    "random_solve",
    "solve",
]
