"""
Compute infrastructure: timing and iteration tolerances.
"""

from pyworkbench.core.compute.timing import Timer, timed
from pyworkbench.core.compute.tolerances import (
    IterationTolerance,
    DEFAULT_ITERATION,
)

__all__ = [
    "Timer",
    "timed",
    "IterationTolerance",
    "DEFAULT_ITERATION",
]
