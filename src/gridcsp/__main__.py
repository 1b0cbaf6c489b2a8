"""Allow running the solver with `python -m gridcsp`."""

from gridcsp import main

main()
