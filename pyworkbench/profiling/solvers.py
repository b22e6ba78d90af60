"""
Column profiling entry points.

profile_columns() turns raw row mappings into typed column profiles;
analyze_columns() adds caller-facing warnings and the correlation matrix.
Both are pure: the rows are only read, and the same rows always give the
same profiles.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any
import numpy as np

from pyworkbench.core.compute.timing import timed
from pyworkbench.core.result import Result
from pyworkbench.profiling._common import (
    NUMERIC,
    TEXT,
    MAX_COLUMN_SAMPLES,
    TEXT_FREQUENCY_TRACK_LIMIT,
    TOP_TEXT_VALUES,
    NUMERIC_OUTLIER_SIGMA,
    DOMINANT_TEXT_RATIO,
    DOMINANT_TEXT_MIN_COUNT,
)
from pyworkbench.profiling._correlation import correlation_matrix
from pyworkbench.profiling.solution import (
    ColumnProfile,
    NumericStatistics,
    ProfileParams,
    ProfileSolution,
    TopValue,
)
from pyworkbench.profiling.values import (
    is_empty_value,
    normalize_key,
    parse_numeric,
)

logger = logging.getLogger(__name__)


class _ColumnAccumulator:
    """Single-pass counters for one column."""

    def __init__(self, key: str):
        self.key = key
        self.empty_count = 0
        self.filled_count = 0
        self.text_count = 0
        self.samples: list[Any] = []
        self.numbers: list[float] = []
        self.text_frequencies: dict[str, int] = {}

    def add(self, value: Any) -> None:
        if len(self.samples) < MAX_COLUMN_SAMPLES:
            self.samples.append(value)

        if is_empty_value(value):
            self.empty_count += 1
            return
        self.filled_count += 1

        number = parse_numeric(value)
        if number is not None:
            self.numbers.append(number)
            return

        self.text_count += 1
        text = str(value).strip()
        frequencies = self.text_frequencies
        frequencies[text] = frequencies.get(text, 0) + 1
        if len(frequencies) > TEXT_FREQUENCY_TRACK_LIMIT:
            # evict the least frequent value, earliest seen on ties
            del frequencies[min(frequencies, key=frequencies.get)]

    @property
    def numeric_count(self) -> int:
        return len(self.numbers)

    def column_type(self) -> str:
        numeric_count = self.numeric_count
        if numeric_count > 0 and self.text_count == 0:
            return NUMERIC
        if numeric_count == 0:
            return TEXT
        return NUMERIC if numeric_count >= self.text_count else TEXT

    def numeric_statistics(self) -> NumericStatistics | None:
        if not self.numbers:
            return None
        values = np.asarray(self.numbers, dtype=np.float64)
        n = len(values)
        variance = float(np.var(values, ddof=1)) if n > 1 else 0.0
        return NumericStatistics(
            count=n,
            sum=float(values.sum()),
            min=float(values.min()),
            max=float(values.max()),
            mean=float(values.mean()),
            variance=variance,
            std_dev=float(np.sqrt(variance)) if variance > 0 else 0.0,
        )

    def top_values(self) -> tuple[TopValue, ...]:
        if self.text_count == 0:
            return ()
        ranked = sorted(
            self.text_frequencies.items(), key=lambda item: item[1], reverse=True
        )
        return tuple(
            TopValue(value=value, count=count, ratio=count / self.text_count)
            for value, count in ranked[:TOP_TEXT_VALUES]
        )

    def warnings(
        self,
        numeric: NumericStatistics | None,
        top_values: tuple[TopValue, ...],
    ) -> tuple[str, ...]:
        found: list[str] = []
        key = self.key
        if numeric is not None:
            if numeric.std_dev > 0:
                high = numeric.mean + NUMERIC_OUTLIER_SIGMA * numeric.std_dev
                low = numeric.mean - NUMERIC_OUTLIER_SIGMA * numeric.std_dev
                if numeric.max > high:
                    found.append(
                        f'Column "{key}" contains potential outliers with very '
                        f"high values (max: {numeric.max:g})."
                    )
                if numeric.min < low:
                    found.append(
                        f'Column "{key}" contains potential outliers with very '
                        f"low values (min: {numeric.min:g})."
                    )
            if numeric.max == numeric.min and self.filled_count > 1:
                found.append(
                    f'Column "{key}" contains a single numeric value and has no variance.'
                )

        if top_values:
            dominant = top_values[0]
            if dominant.ratio >= DOMINANT_TEXT_RATIO and self.text_count >= DOMINANT_TEXT_MIN_COUNT:
                found.append(
                    f'Column "{key}" is {round(dominant.ratio * 100)}% '
                    f'the text "{dominant.value}".'
                )
        return tuple(found)

    def build(self) -> ColumnProfile:
        numeric = self.numeric_statistics()
        top_values = self.top_values()
        return ColumnProfile(
            key=self.key,
            type=self.column_type(),
            filled_count=self.filled_count,
            empty_count=self.empty_count,
            numeric_count=self.numeric_count,
            text_count=self.text_count,
            samples=tuple(self.samples),
            numeric=numeric,
            top_values=top_values,
            warnings=self.warnings(numeric, top_values),
        )


def _column_order(rows: Sequence[Mapping[str, Any]]) -> list[tuple[str, list[Any]]]:
    """(normalized key, raw keys) pairs in first-seen order."""
    order: dict[str, list[Any]] = {}
    for row in rows:
        for raw_key in row or {}:
            key = normalize_key(raw_key)
            if not key:
                continue
            raw_keys = order.setdefault(key, [])
            if raw_key not in raw_keys:
                raw_keys.append(raw_key)
    return list(order.items())


def _cell(row: Mapping[str, Any] | None, raw_keys: list[Any]) -> Any:
    if not row:
        return None
    for raw_key in raw_keys:
        if raw_key in row:
            return row[raw_key]
    return None


def profile_columns(rows: Iterable[Mapping[str, Any]]) -> list[ColumnProfile]:
    """
    Infer typed columns from raw row mappings.

    Column order is the first-seen key order across all rows. A row that
    lacks a key counts as an empty cell for that column. Never raises for
    any cell value.

    Parameters
    ----------
    rows : iterable of mappings
        Column name -> raw value (text, number or None).

    Returns
    -------
    list of ColumnProfile

    Examples
    --------
    >>> [c.type for c in profile_columns([{"x": "1"}, {"x": "2"}, {"x": "n/a"}])]
    ['numeric']
    """
    rows = list(rows)
    ordered = _column_order(rows)
    accumulators = [(_ColumnAccumulator(key), raw_keys) for key, raw_keys in ordered]

    for row in rows:
        for accumulator, raw_keys in accumulators:
            accumulator.add(_cell(row, raw_keys))

    return [accumulator.build() for accumulator, _ in accumulators]


def summarize_column_warnings(columns: Iterable[ColumnProfile]) -> list[str]:
    """
    Caller-facing warnings for a set of column profiles.

    Reports empty columns, the unparsed minority of mixed columns and the
    advisory warnings of each profile.
    """
    found: list[str] = []
    for column in columns:
        if column.filled_count == 0:
            found.append(f'Column "{column.key}" contains no values and will be ignored.')
            continue
        if column.numeric_count > 0 and column.text_count > 0:
            found.append(
                f'Column "{column.key}" contains {column.text_count} entries that '
                f"are not valid numbers. They are skipped as numbers."
            )
        found.extend(column.warnings)
    return found


def analyze_columns(rows: Iterable[Mapping[str, Any]]) -> ProfileSolution:
    """
    Profile columns and compute warnings and the correlation matrix.

    Parameters
    ----------
    rows : iterable of mappings
        Column name -> raw value.

    Returns
    -------
    ProfileSolution
    """
    rows = list(rows)
    with timed() as timer:
        with timer.section('profile'):
            columns = profile_columns(rows)
        with timer.section('correlation'):
            correlation = correlation_matrix(rows, columns)

    logger.debug("profiled %d columns over %d rows", len(columns), len(rows))

    result = Result(
        params=ProfileParams(columns=tuple(columns), correlation=correlation),
        info={'row_count': len(rows), 'column_count': len(columns)},
        timing=timer.result(),
        backend_name='cpu_profile',
        warnings=tuple(summarize_column_warnings(columns)),
    )
    return ProfileSolution(_result=result)
