"""
Formula evaluator.

Evaluates spreadsheet-style formulas ("=SUM(A1:B3)") against a read-only
grid, with A1 addressing, ranges and a registry of functions.
"""

from pyworkbench.core.parsing import coerce_number
from pyworkbench.formulas._common import (
    ErrorKind,
    FormulaError,
    FormulaResult,
    RangeValue,
)
from pyworkbench.formulas.evaluator import (
    Evaluation,
    evaluate_formula,
    evaluate_grid,
    split_arguments,
)
from pyworkbench.formulas.grid import Grid
from pyworkbench.formulas.references import (
    CellAddress,
    CellRange,
    column_index_to_name,
    column_name_to_index,
    format_cell_reference,
    format_range_reference,
    parse_cell_reference,
    parse_range_reference,
)
from pyworkbench.formulas.registry import (
    AVAILABLE_FORMULAS,
    BUILTIN_FUNCTIONS,
    DEFAULT_REGISTRY,
    FunctionDefinition,
    FunctionRegistry,
    suggest_formulas,
)

__all__ = [
    'evaluate_formula',
    'evaluate_grid',
    'split_arguments',
    'Evaluation',
    'Grid',
    'ErrorKind',
    'FormulaError',
    'FormulaResult',
    'RangeValue',
    'CellAddress',
    'CellRange',
    'column_index_to_name',
    'column_name_to_index',
    'format_cell_reference',
    'format_range_reference',
    'parse_cell_reference',
    'parse_range_reference',
    'AVAILABLE_FORMULAS',
    'BUILTIN_FUNCTIONS',
    'DEFAULT_REGISTRY',
    'FunctionDefinition',
    'FunctionRegistry',
    'suggest_formulas',
    'coerce_number',
]
