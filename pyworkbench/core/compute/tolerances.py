"""
Iteration tolerances for the iterative special functions.

The continued fractions and series behind the incomplete beta and gamma
functions stop after a fixed number of iterations or once the relative
change drops below epsilon. A non-converged estimate is returned as-is.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class IterationTolerance:
    """Stopping rule for an iterative numerical routine."""
    epsilon: float
    max_iterations: int
    fpmin: float
    name: str
    description: str


# Reference settings of the segment tests
DEFAULT_ITERATION = IterationTolerance(
    epsilon=1e-12,
    max_iterations=200,
    fpmin=1e-30,
    name='default',
    description='200 iterations, relative change below 1e-12',
)
