"""
Tests for A1 addressing.
"""

import pytest

from pyworkbench.core.exceptions import ReferenceParseError
from pyworkbench.formulas import (
    CellAddress,
    CellRange,
    column_index_to_name,
    column_name_to_index,
    format_cell_reference,
    format_range_reference,
    parse_cell_reference,
    parse_range_reference,
)


class TestColumnNames:

    @pytest.mark.parametrize("index, name", [
        (0, "A"), (1, "B"), (25, "Z"), (26, "AA"), (27, "AB"), (51, "AZ"),
        (52, "BA"), (701, "ZZ"), (702, "AAA"),
    ])
    def test_round_trip(self, index, name):
        assert column_index_to_name(index) == name
        assert column_name_to_index(name) == index

    def test_lower_case_name(self):
        assert column_name_to_index("ab") == 27

    @pytest.mark.parametrize("name", ["", "1", "A1", "Ä", None])
    def test_invalid_names(self, name):
        assert column_name_to_index(name) == -1

    def test_invalid_index(self):
        assert column_index_to_name(-1) == ""


class TestParseCellReference:

    def test_basic(self):
        assert parse_cell_reference("B12") == CellAddress(row=11, column=1)

    def test_case_and_whitespace(self):
        assert parse_cell_reference("  aa3 ") == CellAddress(row=2, column=26)

    @pytest.mark.parametrize("text", ["A0", "12", "B", "1A", "A-1", "A1:B2", ""])
    def test_malformed(self, text):
        assert parse_cell_reference(text) is None

    def test_bounds(self):
        assert parse_cell_reference("C3", row_count=3, column_count=3) is not None
        assert parse_cell_reference("D1", row_count=3, column_count=3) is None
        assert parse_cell_reference("A4", row_count=3, column_count=3) is None

    def test_strict(self):
        assert CellAddress.from_a1("C7") == CellAddress(6, 2)
        with pytest.raises(ReferenceParseError) as exc_info:
            CellAddress.from_a1("7C")
        assert exc_info.value.reference == "7C"


class TestRanges:

    def test_parse(self):
        cell_range = parse_range_reference("A1:B3")
        assert cell_range.start == CellAddress(0, 0)
        assert cell_range.end == CellAddress(2, 1)
        assert cell_range.shape == (3, 2)
        assert len(cell_range) == 6

    def test_reversed_endpoints_are_normalized(self):
        cell_range = parse_range_reference("B3:A1")
        assert list(cell_range) == list(parse_range_reference("A1:B3"))

    def test_row_major_iteration(self):
        addresses = [a.to_a1() for a in CellRange.from_a1("A1:B2")]
        assert addresses == ["A1", "B1", "A2", "B2"]

    def test_malformed(self):
        assert parse_range_reference("A1:") is None
        assert parse_range_reference("A0:B2") is None
        with pytest.raises(ReferenceParseError):
            CellRange.from_a1("A1-B2")

    def test_in_bounds(self):
        cell_range = CellRange.from_a1("A1:C3")
        assert cell_range.in_bounds(3, 3)
        assert not cell_range.in_bounds(2, 3)


class TestFormatting:

    def test_cell(self):
        assert format_cell_reference(27, 9) == "AB10"
        assert format_cell_reference(-1, 0) == ""

    def test_range(self):
        assert format_range_reference(0, 0, 1, 4) == "A1:B5"

    def test_single_cell_range_collapses(self):
        assert format_range_reference(2, 3, 2, 3) == "C4"

    def test_address_to_a1(self):
        assert CellAddress(0, 0).to_a1() == "A1"
        assert CellRange(CellAddress(4, 1), CellAddress(0, 0)).to_a1() == "A1:B5"
