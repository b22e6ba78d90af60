"""
Exception hierarchy for pyworkbench.

All exceptions inherit from WorkbenchError to allow catching any
library-specific error.

Domain failures that a user can fix by changing their input are NOT
exceptions: formula problems come back as FormulaResult errors, failed
segment tests as ok=False solutions and broken search patterns as an
inactive SearchConfig. Exceptions are reserved for programming errors
at the API boundary.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class WorkbenchError(Exception):
    """Base exception for all pyworkbench errors."""
    pass


class ValidationError(WorkbenchError):
    """
    Input validation failed.
    
    Raised when caller-provided inputs fail validation checks.
    """
    pass


class ReferenceParseError(ValidationError):
    """
    A cell or range reference could not be parsed.

    Raised by the strict A1 parsing helpers only; formula evaluation
    reports the same condition as an InvalidCellReference result.

    Attributes:
        reference: The offending reference text
    """

    def __init__(self, message: str, reference: str | None = None):
        super().__init__(message)
        self.reference = reference


class ConvergenceError(WorkbenchError):
    """
    Iterative algorithm failed to converge.
    
    The special functions return their best estimate by default; they
    raise this only when called with strict=True.
    
    Attributes:
        iterations: Number of iterations completed
        final_change: Final relative change of the estimate
        threshold: The convergence threshold that was not met
    """
    
    def __init__(
        self, 
        message: str, 
        iterations: int, 
        final_change: float | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.threshold = threshold
