"""
A1-style cell addressing.

Columns are written with base-26 letters (A..Z, AA..AZ, BA, ...), rows
1-based. Internally every address is a zero-based (row, column) pair;
letters exist only for parsing formula text and for showing addresses
back to the user.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from pyworkbench.core.exceptions import ReferenceParseError

CELL_REFERENCE = re.compile(r"([A-Za-z]+)(\d+)")
RANGE_REFERENCE = re.compile(r"([A-Za-z]+\d+)\s*:\s*([A-Za-z]+\d+)")


def column_index_to_name(index: int) -> str:
    """
    Letter name of a zero-based column index.

    >>> column_index_to_name(0), column_index_to_name(25), column_index_to_name(26)
    ('A', 'Z', 'AA')
    """
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        return ""
    label = ""
    current = index
    while current >= 0:
        current, remainder = divmod(current, 26)
        label = chr(65 + remainder) + label
        current -= 1
    return label


def column_name_to_index(name: str) -> int:
    """
    Zero-based index of a column letter name, -1 if not a letter name.

    >>> column_name_to_index("A"), column_name_to_index("aa")
    (0, 26)
    """
    if not isinstance(name, str):
        return -1
    letters = name.strip().upper()
    if not letters or not letters.isascii() or not letters.isalpha():
        return -1
    index = 0
    for letter in letters:
        index = index * 26 + (ord(letter) - 64)
    return index - 1


@dataclass(frozen=True, order=True)
class CellAddress:
    """Zero-based (row, column) address of one grid cell."""
    row: int
    column: int

    @classmethod
    def from_a1(cls, reference: str) -> CellAddress:
        """Strict parse of an A1 reference; raises ReferenceParseError."""
        address = parse_cell_reference(reference)
        if address is None:
            raise ReferenceParseError(
                f"invalid cell reference {reference!r}, expected e.g. 'B12'",
                reference=reference,
            )
        return address

    def to_a1(self) -> str:
        return format_cell_reference(self.column, self.row)

    def key(self) -> str:
        """Identity used for cycle detection: 'column:row'."""
        return f"{self.column}:{self.row}"

    def in_bounds(self, row_count: int, column_count: int) -> bool:
        return 0 <= self.row < row_count and 0 <= self.column < column_count


@dataclass(frozen=True)
class CellRange:
    """
    Inclusive rectangle between two addresses.

    Iteration is row-major (columns vary fastest) over the normalized
    rectangle, whatever order the endpoints were given in.
    """
    start: CellAddress
    end: CellAddress

    @classmethod
    def from_a1(cls, reference: str) -> CellRange:
        """Strict parse of 'A1:B2'; raises ReferenceParseError."""
        parsed = parse_range_reference(reference)
        if parsed is None:
            raise ReferenceParseError(
                f"invalid range reference {reference!r}, expected e.g. 'A1:B10'",
                reference=reference,
            )
        return parsed

    def normalized(self) -> CellRange:
        return CellRange(
            CellAddress(min(self.start.row, self.end.row),
                        min(self.start.column, self.end.column)),
            CellAddress(max(self.start.row, self.end.row),
                        max(self.start.column, self.end.column)),
        )

    @property
    def shape(self) -> tuple[int, int]:
        n = self.normalized()
        return n.end.row - n.start.row + 1, n.end.column - n.start.column + 1

    def in_bounds(self, row_count: int, column_count: int) -> bool:
        n = self.normalized()
        return n.start.in_bounds(row_count, column_count) and n.end.in_bounds(
            row_count, column_count
        )

    def __iter__(self) -> Iterator[CellAddress]:
        n = self.normalized()
        for row in range(n.start.row, n.end.row + 1):
            for column in range(n.start.column, n.end.column + 1):
                yield CellAddress(row, column)

    def __len__(self) -> int:
        rows, columns = self.shape
        return rows * columns

    def to_a1(self) -> str:
        n = self.normalized()
        return format_range_reference(
            n.start.column, n.start.row, n.end.column, n.end.row
        )


def parse_cell_reference(
    reference: str,
    row_count: int | None = None,
    column_count: int | None = None,
) -> CellAddress | None:
    """
    Parse 'B12' into CellAddress(row=11, column=1).

    Returns None for malformed text, row 0, or (when limits are given) an
    address outside the limits.
    """
    if not isinstance(reference, str):
        return None
    match = CELL_REFERENCE.fullmatch(reference.strip())
    if not match:
        return None
    column = column_name_to_index(match.group(1))
    row = int(match.group(2)) - 1
    if column < 0 or row < 0:
        return None
    if column_count is not None and column >= column_count:
        return None
    if row_count is not None and row >= row_count:
        return None
    return CellAddress(row, column)


def parse_range_reference(reference: str) -> CellRange | None:
    """Parse 'A1:B10' into a CellRange, None when malformed."""
    if not isinstance(reference, str):
        return None
    match = RANGE_REFERENCE.fullmatch(reference.strip())
    if not match:
        return None
    start = parse_cell_reference(match.group(1))
    end = parse_cell_reference(match.group(2))
    if start is None or end is None:
        return None
    return CellRange(start, end)


def format_cell_reference(column_index: int, row_index: int) -> str:
    """A1 text of a zero-based (column, row) pair, '' when invalid."""
    column = column_index_to_name(column_index)
    if not column or isinstance(row_index, bool) or not isinstance(row_index, int) or row_index < 0:
        return ""
    return f"{column}{row_index + 1}"


def format_range_reference(
    start_column: int,
    start_row: int,
    end_column: int,
    end_row: int,
) -> str:
    """'A1:B2' text; a one-cell range collapses to 'A1'."""
    start = format_cell_reference(start_column, start_row)
    end = format_cell_reference(end_column, end_row)
    if not start or not end:
        return ""
    return start if start == end else f"{start}:{end}"
