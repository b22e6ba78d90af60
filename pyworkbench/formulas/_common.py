"""
Shared types for the formula evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pyworkbench.core.exceptions import WorkbenchError


class ErrorKind(str, Enum):
    """Formula error taxonomy."""
    UNKNOWN_FUNCTION = "UnknownFunction"
    INVALID_ARGUMENT_LIST = "InvalidArgumentList"
    INVALID_CELL_REFERENCE = "InvalidCellReference"
    CELL_OUT_OF_RANGE = "CellOutOfRange"
    RANGE_WHERE_SCALAR_EXPECTED = "RangeWhereScalarExpected"
    CIRCULAR_REFERENCE = "CircularReference"
    UNPARSEABLE_EXPRESSION = "UnparseableExpression"


class FormulaError(WorkbenchError):
    """
    Raised inside an evaluation to abort it with a tagged error.

    evaluate_formula() catches it and returns it as a FormulaResult, so
    callers of the public API never see it. Custom functions raise it to
    report their own failures.
    """

    def __init__(self, kind: ErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(f"{kind.value}: {message}")


@dataclass(frozen=True)
class RangeValue:
    """Values of a resolved range, row-major."""
    values: tuple[Any, ...]


@dataclass(frozen=True)
class FormulaResult:
    """
    Outcome of evaluating one formula.

    Exactly one of `value` / `error` is meaningful: `ok` is True when the
    evaluation produced a value (which may itself be None, e.g. AVERAGE
    of nothing).
    """
    value: Any = None
    error: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> FormulaResult:
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> FormulaResult:
        return cls(error=kind, message=message)

    def __repr__(self) -> str:
        if self.ok:
            return f"FormulaResult(value={self.value!r})"
        return f"FormulaResult(error={self.error.value}, message={self.message!r})"
