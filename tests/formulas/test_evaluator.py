"""
Tests for evaluate_formula() and evaluate_grid().
"""

import pytest

from pyworkbench.formulas import (
    ErrorKind,
    FormulaResult,
    Grid,
    evaluate_formula,
    evaluate_grid,
    split_arguments,
)


@pytest.fixture
def column_grid():
    """A1="x", A2=5, A3=7."""
    return Grid([["x"], [5], [7]])


class TestPlainValues:

    def test_none_is_empty(self, column_grid):
        assert evaluate_formula(None, column_grid) == FormulaResult(value="")

    def test_text_is_stripped(self, column_grid):
        assert evaluate_formula("  hello ", column_grid).value == "hello"

    def test_non_text_passes_through(self, column_grid):
        assert evaluate_formula(42, column_grid).value == 42

    def test_empty_formula(self, column_grid):
        result = evaluate_formula("=", column_grid)
        assert result.ok
        assert result.value == ""


class TestLiterals:

    def test_number(self, column_grid):
        assert evaluate_formula("=12,5", column_grid).value == pytest.approx(12.5)

    def test_quoted_text(self, column_grid):
        assert evaluate_formula('= "a, b" ', column_grid).value == "a, b"

    def test_unparseable(self, column_grid):
        result = evaluate_formula("=hello world", column_grid)
        assert not result.ok
        assert result.error is ErrorKind.UNPARSEABLE_EXPRESSION

    def test_infix_arithmetic_is_not_supported(self, column_grid):
        result = evaluate_formula("=A2+A3", column_grid)
        assert result.error is ErrorKind.UNPARSEABLE_EXPRESSION


class TestReferences:

    def test_cell(self, column_grid):
        assert evaluate_formula("=A2", column_grid).value == 5

    def test_lower_case_cell(self, column_grid):
        assert evaluate_formula("=a3", column_grid).value == 7

    def test_chained_formulas(self):
        grid = Grid.from_cells({"A1": 2, "B1": "=A1", "C1": "=SUM(B1, 3)"})
        assert evaluate_formula("=C1", grid).value == pytest.approx(5.0)

    def test_invalid_reference(self, column_grid):
        result = evaluate_formula("=A0", column_grid)
        assert result.error is ErrorKind.INVALID_CELL_REFERENCE

    def test_out_of_range_cell(self, column_grid):
        result = evaluate_formula("=B1", column_grid)
        assert result.error is ErrorKind.CELL_OUT_OF_RANGE

    def test_out_of_range_range_is_not_clamped(self, column_grid):
        result = evaluate_formula("=SUM(A1:A10)", column_grid)
        assert result.error is ErrorKind.CELL_OUT_OF_RANGE

    def test_top_level_range(self, column_grid):
        result = evaluate_formula("=A1:A3", column_grid)
        assert result.error is ErrorKind.RANGE_WHERE_SCALAR_EXPECTED

    def test_cell_holding_range_formula(self):
        grid = Grid.from_cells({"A1": 1, "A2": 2, "B1": "=A1:A2"})
        result = evaluate_formula("=SUM(B1)", grid)
        assert result.error is ErrorKind.RANGE_WHERE_SCALAR_EXPECTED


class TestFunctions:

    def test_sum_and_count_ignore_text(self, column_grid):
        assert evaluate_formula("=SUM(A1:A3)", column_grid).value == pytest.approx(12.0)
        assert evaluate_formula("=COUNT(A1:A3)", column_grid).value == 2

    def test_average_of_nothing_is_none(self, column_grid):
        result = evaluate_formula("=AVERAGE(A1:A1)", column_grid)
        assert result.ok
        assert result.value is None

    def test_average_min_max(self, column_grid):
        assert evaluate_formula("=AVERAGE(A1:A3)", column_grid).value == pytest.approx(6.0)
        assert evaluate_formula("=MIN(A1:A3)", column_grid).value == 5
        assert evaluate_formula("=MAX(A1:A3, 9)", column_grid).value == 9

    def test_empty_sum_is_zero(self, column_grid):
        assert evaluate_formula("=SUM()", column_grid).value == 0
        assert evaluate_formula("=COUNT(A1)", column_grid).value == 0

    def test_case_insensitive_names(self, column_grid):
        assert evaluate_formula("=sum(A2, A3)", column_grid).value == pytest.approx(12.0)

    def test_nested_calls(self, column_grid):
        value = evaluate_formula("=SUM(MAX(A2:A3), MIN(A2:A3), 1)", column_grid).value
        assert value == pytest.approx(13.0)

    def test_numeric_text_and_booleans_coerce(self):
        grid = Grid([["1,5"], [True], ["n/a"]])
        assert evaluate_formula("=SUM(A1:A3)", grid).value == pytest.approx(2.5)

    def test_unknown_function(self, column_grid):
        result = evaluate_formula("=MEDIAN(A1:A3)", column_grid)
        assert result.error is ErrorKind.UNKNOWN_FUNCTION
        assert "MEDIAN" in result.message

    @pytest.mark.parametrize("formula", ["=SUM(A1", "=SUM(A1))(", "=SUM((A1)"])
    def test_unbalanced_parentheses(self, column_grid, formula):
        result = evaluate_formula(formula, column_grid)
        assert result.error is ErrorKind.INVALID_ARGUMENT_LIST

    def test_two_calls_side_by_side(self, column_grid):
        result = evaluate_formula("=SUM(A2) SUM(A3)", column_grid)
        assert result.error is ErrorKind.INVALID_ARGUMENT_LIST

    @pytest.mark.parametrize("formula", ["=SUM(A2)x", "=MAX(A2)2", "=COUNT() 1"])
    def test_trailing_text_after_call(self, column_grid, formula):
        result = evaluate_formula(formula, column_grid)
        assert result.error is ErrorKind.UNPARSEABLE_EXPRESSION

    def test_error_propagates_from_argument(self, column_grid):
        result = evaluate_formula("=SUM(A2, FOO(1))", column_grid)
        assert result.error is ErrorKind.UNKNOWN_FUNCTION


class TestCircularReferences:

    def test_self_reference(self):
        grid = Grid.from_cells({"A1": "=A1"})
        assert evaluate_formula("=A1", grid).error is ErrorKind.CIRCULAR_REFERENCE

    def test_mutual_reference(self):
        grid = Grid.from_cells({"A1": "=B1", "B1": "=A1"})
        assert evaluate_formula("=A1", grid).error is ErrorKind.CIRCULAR_REFERENCE
        assert evaluate_formula("=B1", grid).error is ErrorKind.CIRCULAR_REFERENCE

    def test_cycle_through_range(self):
        grid = Grid.from_cells({"A1": 1, "A2": "=SUM(A1:A3)", "A3": 2})
        assert evaluate_formula("=A2", grid).error is ErrorKind.CIRCULAR_REFERENCE

    def test_diamond_is_not_a_cycle(self):
        # B1 and C1 both read A1: visiting A1 twice on separate paths is fine
        grid = Grid.from_cells({"A1": 2, "B1": "=A1", "C1": "=A1", "D1": "=SUM(B1, C1, A1)"})
        assert evaluate_formula("=D1", grid).value == pytest.approx(6.0)

    @pytest.mark.parametrize("length", [100, 500, 3000])
    def test_long_acyclic_chain(self, length):
        cells = {"A1": 1}
        for row in range(2, length + 1):
            cells[f"A{row}"] = f"=A{row - 1}"
        grid = Grid.from_cells(cells)
        result = evaluate_formula(f"=A{length}", grid)
        assert result == FormulaResult(value=1)

    def test_long_chain_through_functions(self):
        cells = {"A1": 1}
        for row in range(2, 2001):
            cells[f"A{row}"] = f"=SUM(A{row - 1}, 1)"
        grid = Grid.from_cells(cells)
        assert evaluate_formula("=A2000", grid).value == pytest.approx(2000.0)

    def test_long_chain_ending_in_error(self):
        cells = {"A1": "=NOPE(1)"}
        for row in range(2, 1001):
            cells[f"A{row}"] = f"=A{row - 1}"
        grid = Grid.from_cells(cells)
        assert evaluate_formula("=A1000", grid).error is ErrorKind.UNKNOWN_FUNCTION

    def test_long_cycle(self):
        cells = {f"A{row}": f"=A{row + 1}" for row in range(1, 1000)}
        cells["A1000"] = "=A1"
        grid = Grid.from_cells(cells)
        result = evaluate_formula("=A1", grid)
        assert result.error is ErrorKind.CIRCULAR_REFERENCE
        assert result.message == "Circular reference at A1."

    def test_quoted_reference_is_text(self):
        # "B1" is a string argument, not a dependency of A1
        grid = Grid.from_cells({"A1": '=COUNT("B1")', "B1": "=A1", "C1": "=SUM(A1, B1)"})
        assert evaluate_formula("=C1", grid).value == pytest.approx(0.0)

    def test_deep_function_nesting_is_not_a_cycle(self):
        expression = "SUM(" * 2000 + "1" + ")" * 2000
        result = evaluate_formula("=" + expression, Grid([[None]]))
        assert result.error is ErrorKind.UNPARSEABLE_EXPRESSION
        assert result.message == "Expression is nested too deeply to evaluate."

    def test_grid_is_not_mutated(self):
        grid = Grid.from_cells({"A1": "=B1", "B1": "=A1"})
        evaluate_formula("=A1", grid)
        assert grid.get_cell_formula(0, 0) == "=B1"
        assert grid.get_cell_value(0, 0) is None


class TestEvaluateGrid:

    def test_every_formula_cell(self):
        grid = Grid(
            [[1, None, None], [2, None, None]],
            formulas={(0, 1): "=SUM(A1:A2)", (1, 1): "=B2", (0, 2): "COUNT(A1:A2)"},
        )
        results = evaluate_grid(grid)
        assert set(results) == {(0, 1), (1, 1), (0, 2)}
        assert results[(0, 1)].value == pytest.approx(3.0)
        assert results[(1, 1)].error is ErrorKind.CIRCULAR_REFERENCE
        assert results[(0, 2)].value == 2

    def test_same_as_single_evaluation(self):
        grid = Grid.from_cells({"A1": 4, "B1": "=MAX(A1, 10)"})
        assert evaluate_grid(grid)[(0, 1)] == evaluate_formula("=MAX(A1, 10)", grid)


class TestSplitArguments:

    def test_top_level_commas(self):
        assert split_arguments("A1:A3, SUM(B1, B2), 4") == ["A1:A3", "SUM(B1, B2)", "4"]

    def test_blank_arguments_dropped(self):
        assert split_arguments(" , A1,, ") == ["A1"]

    def test_unbalanced(self):
        assert split_arguments("SUM(A1") is None
        assert split_arguments("A1)") is None
