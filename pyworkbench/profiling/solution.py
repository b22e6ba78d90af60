"""
Column profiling solution types.

Contains the per-column payload and the user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyworkbench.core.result import Result
from pyworkbench.profiling._common import NUMERIC


@dataclass(frozen=True)
class NumericStatistics:
    """Statistics over the numeric cells of a column (variance is n-1)."""
    count: int
    sum: float
    min: float
    max: float
    mean: float
    variance: float
    std_dev: float


@dataclass(frozen=True)
class TopValue:
    """A frequent text value and its share of the column's text cells."""
    value: str
    count: int
    ratio: float


@dataclass(frozen=True)
class ColumnProfile:
    """
    Typed description of one column.

    Recomputed from scratch whenever the row set changes; never updated
    incrementally.

    Attributes
    ----------
    key : str
        Unique column name.
    type : str
        "numeric" or "text".
    filled_count, empty_count : int
        Non-empty and empty cells.
    numeric_count, text_count : int
        Split of the filled cells into parseable numbers and the rest.
    samples : tuple
        First raw values of the column, unmodified.
    numeric : NumericStatistics or None
        None when the column holds no numeric cell.
    top_values : tuple of TopValue
        Most frequent text values (empty for purely numeric columns).
    warnings : tuple of str
        Advisory findings (outliers, constant values, dominant text).
    """
    key: str
    type: str
    filled_count: int
    empty_count: int
    numeric_count: int = 0
    text_count: int = 0
    samples: tuple[Any, ...] = field(default_factory=tuple)
    numeric: NumericStatistics | None = None
    top_values: tuple[TopValue, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_numeric(self) -> bool:
        return self.type == NUMERIC


@dataclass(frozen=True)
class CorrelationMatrix:
    """
    Pearson correlations between numeric columns.

    Undefined correlations (fewer than two shared values, zero variance)
    are NaN in `matrix`.
    """
    columns: tuple[str, ...]
    matrix: NDArray[np.floating[Any]]
    pair_counts: NDArray[np.integer[Any]]
    sample_size: int
    row_count: int
    sampled: bool
    truncated_columns: tuple[str, ...]
    total_numeric_columns: int
    max_samples: int

    def get(self, first: str, second: str) -> float | None:
        """Correlation of two columns, None if undefined or not present."""
        if first not in self.columns or second not in self.columns:
            return None
        value = self.matrix[self.columns.index(first), self.columns.index(second)]
        return None if np.isnan(value) else float(value)


@dataclass(frozen=True)
class ProfileParams:
    """Parameter payload of analyze_columns()."""
    columns: tuple[ColumnProfile, ...]
    correlation: CorrelationMatrix | None


@dataclass
class ProfileSolution:
    """
    User-facing profiling results.

    Wraps Result[ProfileParams] and provides convenient accessors.
    """
    _result: Result[ProfileParams]

    @property
    def columns(self) -> tuple[ColumnProfile, ...]:
        return self._result.params.columns

    @property
    def correlation(self) -> CorrelationMatrix | None:
        return self._result.params.correlation

    @property
    def warnings(self) -> tuple[str, ...]:
        """Caller-facing warnings (see summarize_column_warnings)."""
        return self._result.warnings

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    def column(self, key: str) -> ColumnProfile:
        """Profile of the named column."""
        for profile in self._result.params.columns:
            if profile.key == key:
                return profile
        raise KeyError(
            f"Unknown column {key!r}. "
            f"Available: {[c.key for c in self._result.params.columns]}"
        )

    def summary(self) -> str:
        """Plain-text table: one line per column."""
        lines = [f"{'column':<20s} {'type':<8s} {'filled':>7s} {'empty':>7s} {'mean':>12s}"]
        for profile in self._result.params.columns:
            mean = (
                f"{profile.numeric.mean:12.5g}" if profile.numeric is not None
                else f"{'':>12s}"
            )
            lines.append(
                f"{profile.key:<20.20s} {profile.type:<8s} "
                f"{profile.filled_count:7d} {profile.empty_count:7d} {mean}"
            )
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ProfileSolution(columns={len(self.columns)}, "
            f"rows={self.info.get('row_count')})"
        )
