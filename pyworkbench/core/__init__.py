"""
Core infrastructure for pyworkbench.

Shared abstractions used by the component sub-packages (profiling,
formulas, hypothesis, search).

Key components:
    protocols: GridContext, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and iteration tolerances
"""

from pyworkbench.core.protocols import GridContext, Backend
from pyworkbench.core.result import Result
from pyworkbench.core.exceptions import (
    WorkbenchError,
    ValidationError,
    ReferenceParseError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "GridContext",
    "Backend",
    # Result
    "Result",
    # Exceptions
    "WorkbenchError",
    "ValidationError",
    "ReferenceParseError",
    "ConvergenceError",
]
