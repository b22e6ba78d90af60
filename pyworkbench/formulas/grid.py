"""
In-memory GridContext.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pyworkbench.core.exceptions import ValidationError
from pyworkbench.core.validation import check_non_negative_int
from pyworkbench.formulas.references import CellAddress


class Grid:
    """
    Fixed-size grid of raw values plus per-cell formulas.

    Row and column counts are set at construction; short rows are padded
    with None. A cell with a formula reports None as its value.

    Parameters
    ----------
    rows : sequence of sequences
        Raw values, row-major.
    formulas : mapping, optional
        {(row, column): formula text}, zero-based.
    row_count, column_count : int, optional
        Override the size inferred from `rows` and `formulas`.
    """

    def __init__(
        self,
        rows: Sequence[Sequence[Any]] = (),
        formulas: Mapping[tuple[int, int], str] | None = None,
        row_count: int | None = None,
        column_count: int | None = None,
    ):
        formulas = dict(formulas or {})
        for address in formulas:
            row, column = address
            if row < 0 or column < 0:
                raise ValidationError(f"formula address {address} must be non-negative")

        inferred_rows = max([len(rows), *(r + 1 for r, _ in formulas)])
        inferred_columns = max(
            [0, *(len(r) for r in rows), *(c + 1 for _, c in formulas)]
        )
        self._row_count = (
            inferred_rows if row_count is None
            else check_non_negative_int(row_count, "row_count")
        )
        self._column_count = (
            inferred_columns if column_count is None
            else check_non_negative_int(column_count, "column_count")
        )

        for row, column in formulas:
            if row >= self._row_count or column >= self._column_count:
                raise ValidationError(
                    f"formula at {CellAddress(row, column).to_a1()} lies outside "
                    f"a {self._row_count}x{self._column_count} grid"
                )

        self._values = [
            [
                row[column] if column < len(row) else None
                for column in range(self._column_count)
            ]
            for row in list(rows)[: self._row_count]
        ]
        while len(self._values) < self._row_count:
            self._values.append([None] * self._column_count)
        self._formulas = formulas

    @classmethod
    def from_cells(
        cls,
        cells: Mapping[str, Any],
        row_count: int | None = None,
        column_count: int | None = None,
    ) -> Grid:
        """
        Build a grid from A1-keyed cells.

        Text starting with '=' becomes the cell's formula, anything else
        its value.

        >>> Grid.from_cells({"A1": 1, "B1": "=A1"}).get_cell_formula(0, 1)
        '=A1'
        """
        values: dict[tuple[int, int], Any] = {}
        formulas: dict[tuple[int, int], str] = {}
        for reference, content in cells.items():
            address = CellAddress.from_a1(reference)
            if isinstance(content, str) and content.strip().startswith("="):
                formulas[(address.row, address.column)] = content.strip()
            else:
                values[(address.row, address.column)] = content

        n_rows = max([0, *(r + 1 for r, _ in values)])
        n_columns = max([0, *(c + 1 for _, c in values)])
        rows = [[None] * n_columns for _ in range(n_rows)]
        for (row, column), content in values.items():
            rows[row][column] = content
        return cls(rows, formulas, row_count=row_count, column_count=column_count)

    @property
    def row_count(self) -> int:
        return self._row_count

    @property
    def column_count(self) -> int:
        return self._column_count

    def get_cell_value(self, row: int, column: int) -> Any:
        if (row, column) in self._formulas:
            return None
        return self._values[row][column]

    def get_cell_formula(self, row: int, column: int) -> str | None:
        return self._formulas.get((row, column))

    def __repr__(self) -> str:
        return (
            f"Grid(rows={self._row_count}, columns={self._column_count}, "
            f"formulas={len(self._formulas)})"
        )
