"""
Pearson correlation matrix over the numeric columns of a row set.

Large row sets are sampled down to evenly spaced rows; the last row is
always included.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
import numpy as np

from pyworkbench.profiling._common import (
    MAX_CORRELATION_COLUMNS,
    MAX_CORRELATION_SAMPLES,
)
from pyworkbench.profiling.solution import ColumnProfile, CorrelationMatrix
from pyworkbench.profiling.values import parse_numeric


def select_sample_indices(total_rows: int, max_samples: int) -> list[int]:
    """Evenly spaced row indices, at most max_samples of them (plus the last row)."""
    if total_rows <= 0 or max_samples <= 0:
        return []
    if total_rows <= max_samples:
        return list(range(total_rows))
    if max_samples == 1:
        return [total_rows - 1]

    step = (total_rows - 1) / (max_samples - 1)
    indices = {int(i * step) for i in range(max_samples)}
    indices.add(total_rows - 1)
    return sorted(i for i in indices if 0 <= i < total_rows)


def _pearson(x: np.ndarray, y: np.ndarray) -> tuple[float, int]:
    """Correlation over the rows where both values are present."""
    mask = ~(np.isnan(x) | np.isnan(y))
    count = int(mask.sum())
    if count < 2:
        return np.nan, count

    xs, ys = x[mask], y[mask]
    numerator = count * np.dot(xs, ys) - xs.sum() * ys.sum()
    denominator = np.sqrt(
        (count * np.dot(xs, xs) - xs.sum() ** 2)
        * (count * np.dot(ys, ys) - ys.sum() ** 2)
    )
    if not np.isfinite(denominator) or denominator == 0:
        return np.nan, count

    value = numerator / denominator
    if not np.isfinite(value):
        return np.nan, count
    return float(np.clip(value, -1.0, 1.0)), count


def correlation_matrix(
    rows: Sequence[Mapping[str, Any]],
    columns: Sequence[ColumnProfile],
    *,
    max_samples: int = MAX_CORRELATION_SAMPLES,
    max_columns: int = MAX_CORRELATION_COLUMNS,
) -> CorrelationMatrix | None:
    """
    Pearson correlations between numeric columns.

    Only columns typed numeric with at least two numeric values take
    part; at most max_columns of them, the remainder is reported in
    truncated_columns.

    Returns:
        CorrelationMatrix, or None when fewer than two columns qualify or
        there are no rows.
    """
    if not rows:
        return None

    numeric_columns = [
        c for c in columns if c.is_numeric and c.numeric_count >= 2
    ]
    if len(numeric_columns) < 2:
        return None

    active = numeric_columns[:max_columns]
    keys = tuple(c.key for c in active)
    sample_indices = select_sample_indices(len(rows), max_samples)

    data = np.full((len(sample_indices), len(active)), np.nan)
    for i, row_index in enumerate(sample_indices):
        row = rows[row_index] or {}
        for j, key in enumerate(keys):
            value = parse_numeric(row.get(key))
            if value is not None:
                data[i, j] = value

    p = len(active)
    matrix = np.full((p, p), np.nan)
    pair_counts = np.zeros((p, p), dtype=np.int64)
    for j in range(p):
        valid = int(np.sum(~np.isnan(data[:, j])))
        matrix[j, j] = 1.0 if valid >= 2 else np.nan
        pair_counts[j, j] = valid
        for k in range(j + 1, p):
            value, count = _pearson(data[:, j], data[:, k])
            matrix[j, k] = matrix[k, j] = value
            pair_counts[j, k] = pair_counts[k, j] = count

    return CorrelationMatrix(
        columns=keys,
        matrix=matrix,
        pair_counts=pair_counts,
        sample_size=len(sample_indices),
        row_count=len(rows),
        sampled=len(rows) > len(sample_indices),
        truncated_columns=tuple(c.key for c in numeric_columns[max_columns:]),
        total_numeric_columns=len(numeric_columns),
        max_samples=max_samples,
    )
