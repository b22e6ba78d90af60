"""
Formula evaluation against a read-only grid.

Grammar (after the leading '='), tried in this order:

    A1:B10          range        -> row-major list of cell values
    B12             cell         -> the cell's value, or its formula's value
    NAME(arg, ...)  function     -> registry lookup, case-insensitive
    "text"          quoted text
    12,5            number       -> coerce_number()

There are no infix operators. Each evaluation owns its own visited set;
nothing is cached between calls, so a result always reflects the grid as
it is when evaluate_formula() is called.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence
from typing import Any

from pyworkbench.core.parsing import coerce_number
from pyworkbench.core.protocols import GridContext
from pyworkbench.formulas._common import (
    ErrorKind,
    FormulaError,
    FormulaResult,
    RangeValue,
)
from pyworkbench.formulas.references import (
    CELL_REFERENCE,
    RANGE_REFERENCE,
    CellAddress,
    CellRange,
    parse_cell_reference,
    parse_range_reference,
)
from pyworkbench.formulas.registry import DEFAULT_REGISTRY, FunctionRegistry

logger = logging.getLogger(__name__)

_FUNCTION_CALL = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\s*\((.*)\)", re.DOTALL)
_FUNCTION_HEAD = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\s*\(", re.DOTALL)
_QUOTED_TEXT = re.compile(r'"(.*)"', re.DOTALL)
_QUOTED_SPAN = re.compile(r'"[^"]*"')
_REFERENCE_TOKEN = re.compile(
    r"(?<![A-Za-z0-9_])([A-Za-z]+\d+)(?:\s*:\s*([A-Za-z]+\d+))?(?![A-Za-z0-9_(])"
)


def split_arguments(text: str) -> list[str] | None:
    """
    Split a function's argument text on top-level commas.

    Blank arguments are dropped. Returns None when the parentheses do not
    balance.

    >>> split_arguments("A1:A3, SUM(B1, B2), ")
    ['A1:A3', 'SUM(B1, B2)']
    """
    arguments: list[str] = []
    current: list[str] = []
    depth = 0
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return None
        if char == "," and depth == 0:
            arguments.append("".join(current))
            current = []
            continue
        current.append(char)
    if depth != 0:
        return None
    arguments.append("".join(current))
    return [argument.strip() for argument in arguments if argument.strip()]


def _balanced(text: str) -> bool:
    depth = 0
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


class Evaluation:
    """
    One evaluation run over a grid.

    Holds the stack of cells currently being resolved; a cell met again
    while it is still on the stack is a circular reference. Each formula
    cell is settled at most once per run and its outcome reused, so a
    reference chain is walked with an explicit stack rather than nested
    calls. Functions in the registry receive this object to evaluate
    their arguments.
    """

    def __init__(
        self,
        context: GridContext,
        registry: FunctionRegistry = DEFAULT_REGISTRY,
    ):
        self.context = context
        self.registry = registry
        self._visiting: set[str] = set()
        self._settled: dict[str, FormulaResult] = {}

    def evaluate(self, expression: str) -> Any:
        """
        Value of an expression; a RangeValue for range expressions.

        Raises:
            FormulaError: On any evaluation failure.
        """
        text = expression.strip()
        if not text:
            return ""

        if RANGE_REFERENCE.fullmatch(text):
            cell_range = parse_range_reference(text)
            if cell_range is None:
                raise FormulaError(
                    ErrorKind.INVALID_CELL_REFERENCE,
                    f'Invalid range reference "{text}".',
                )
            return self.resolve_range(cell_range)

        if CELL_REFERENCE.fullmatch(text):
            address = parse_cell_reference(text)
            if address is None:
                raise FormulaError(
                    ErrorKind.INVALID_CELL_REFERENCE,
                    f'Invalid cell reference "{text}".',
                )
            return self.resolve_cell(address)

        call = _FUNCTION_CALL.fullmatch(text)
        if call:
            return self._call(call.group(1), call.group(2))
        if _FUNCTION_HEAD.match(text) and not _balanced(text):
            raise FormulaError(
                ErrorKind.INVALID_ARGUMENT_LIST,
                f'Unbalanced parentheses in "{text}".',
            )

        quoted = _QUOTED_TEXT.fullmatch(text)
        if quoted:
            return quoted.group(1)

        number = coerce_number(text)
        if number is not None:
            return number

        raise FormulaError(
            ErrorKind.UNPARSEABLE_EXPRESSION,
            f'Expression "{text}" could not be evaluated.',
        )

    def numeric_values(self, arguments: Sequence[str]) -> list[float]:
        """
        Numbers from a list of argument expressions.

        Ranges are expanded; every value is passed through coerce_number()
        and values that do not coerce are left out.
        """
        numbers: list[float] = []
        for argument in arguments:
            if not argument.strip():
                continue
            value = self.evaluate(argument)
            items = value.values if isinstance(value, RangeValue) else (value,)
            for item in items:
                number = coerce_number(item)
                if number is not None:
                    numbers.append(number)
        return numbers

    def resolve_cell(self, address: CellAddress) -> Any:
        context = self.context
        if not address.in_bounds(context.row_count, context.column_count):
            raise FormulaError(
                ErrorKind.CELL_OUT_OF_RANGE,
                f"Cell {address.to_a1()} is outside the grid "
                f"({context.row_count} rows, {context.column_count} columns).",
            )

        key = address.key()
        if key in self._visiting:
            logger.debug("circular reference at %s", address.to_a1())
            raise FormulaError(
                ErrorKind.CIRCULAR_REFERENCE,
                f"Circular reference at {address.to_a1()}.",
            )

        if key not in self._settled:
            if self._expression(address) is None:
                return context.get_cell_value(address.row, address.column)
            self._visiting.add(key)
            try:
                self._settle_references(address)
                self._settle(address)
            finally:
                self._visiting.discard(key)

        outcome = self._settled[key]
        if not outcome.ok:
            raise FormulaError(outcome.error, outcome.message)
        return outcome.value

    def _expression(self, address: CellAddress) -> str | None:
        """Formula of a cell without its leading '=', None for a plain value."""
        formula = self.context.get_cell_formula(address.row, address.column)
        if not formula:
            return None
        expression = formula.strip()
        if expression.startswith("="):
            expression = expression[1:]
        return expression

    def _references(self, address: CellAddress) -> Iterator[CellAddress]:
        """In-grid cells named in a cell's formula, in reading order."""
        context = self.context
        expression = _QUOTED_SPAN.sub("", self._expression(address) or "")
        for token in _REFERENCE_TOKEN.finditer(expression):
            if token.group(2):
                cell_range = parse_range_reference(token.group(0))
                if cell_range is None or not cell_range.in_bounds(
                    context.row_count, context.column_count
                ):
                    continue
                yield from cell_range
                continue
            reference = parse_cell_reference(token.group(1))
            if reference is not None and reference.in_bounds(
                context.row_count, context.column_count
            ):
                yield reference

    def _settle_references(self, root: CellAddress) -> None:
        """
        Settle the formula cells below root, deepest first.

        Depth-first walk on an explicit stack. A cell is settled once all
        of its own references are, so evaluating it never descends more
        than one cell; cells already on the stack are left for the
        evaluation to report as circular.
        """
        trail = [(root, self._references(root))]
        while trail:
            address, pending = trail[-1]
            child = next(pending, None)
            if child is None:
                trail.pop()
                if trail:
                    self._settle(address)
                    self._visiting.discard(address.key())
                continue
            key = child.key()
            if key in self._visiting or key in self._settled:
                continue
            if self._expression(child) is None:
                continue
            self._visiting.add(key)
            trail.append((child, self._references(child)))

    def _settle(self, address: CellAddress) -> FormulaResult:
        """Evaluate a formula cell once and keep the outcome for this run."""
        try:
            value = self.evaluate(self._expression(address) or "")
            if isinstance(value, RangeValue):
                raise FormulaError(
                    ErrorKind.RANGE_WHERE_SCALAR_EXPECTED,
                    f"Cell {address.to_a1()} evaluates to a range.",
                )
            outcome = FormulaResult.success(value)
        except FormulaError as e:
            outcome = FormulaResult.failure(e.kind, e.message)
        self._settled[address.key()] = outcome
        return outcome

    def resolve_range(self, cell_range: CellRange) -> RangeValue:
        context = self.context
        if not cell_range.in_bounds(context.row_count, context.column_count):
            raise FormulaError(
                ErrorKind.CELL_OUT_OF_RANGE,
                f"Range {cell_range.to_a1()} extends outside the grid "
                f"({context.row_count} rows, {context.column_count} columns).",
            )
        return RangeValue(tuple(self.resolve_cell(address) for address in cell_range))

    def _call(self, name: str, argument_text: str) -> Any:
        arguments = split_arguments(argument_text)
        if arguments is None:
            raise FormulaError(
                ErrorKind.INVALID_ARGUMENT_LIST,
                f'Invalid argument list for "{name}".',
            )
        definition = self.registry.get(name)
        if definition is None:
            raise FormulaError(
                ErrorKind.UNKNOWN_FUNCTION,
                f'Unknown function "{name}".',
            )
        return definition.evaluate(arguments, self)


def evaluate_formula(
    formula_text: Any,
    context: GridContext,
    registry: FunctionRegistry = DEFAULT_REGISTRY,
) -> FormulaResult:
    """
    Evaluate one cell's formula text.

    Text that does not start with '=' is a plain value and comes back
    stripped; None gives ''. Errors are returned, never raised.

    Parameters
    ----------
    formula_text : str or None
        Raw cell text, e.g. "=SUM(A1:A3)".
    context : GridContext
        Read-only grid the references resolve against.
    registry : FunctionRegistry
        Functions available to the formula.

    Returns
    -------
    FormulaResult

    Examples
    --------
    >>> from pyworkbench.formulas import Grid
    >>> grid = Grid([[1], [2], ["x"]])
    >>> evaluate_formula("=SUM(A1:A3)", grid).value
    3.0
    """
    if formula_text is None:
        return FormulaResult.success("")
    if not isinstance(formula_text, str):
        return FormulaResult.success(formula_text)

    text = formula_text.strip()
    if not text.startswith("="):
        return FormulaResult.success(text)

    evaluation = Evaluation(context, registry)
    try:
        value = evaluation.evaluate(text[1:])
    except FormulaError as e:
        return FormulaResult.failure(e.kind, e.message)
    except RecursionError:
        logger.debug("expression nested too deeply: %.60r", text)
        return FormulaResult.failure(
            ErrorKind.UNPARSEABLE_EXPRESSION,
            "Expression is nested too deeply to evaluate.",
        )

    if isinstance(value, RangeValue):
        return FormulaResult.failure(
            ErrorKind.RANGE_WHERE_SCALAR_EXPECTED,
            "A range cannot be shown as a single cell value.",
        )
    return FormulaResult.success(value)


def evaluate_grid(
    context: GridContext,
    registry: FunctionRegistry = DEFAULT_REGISTRY,
) -> dict[tuple[int, int], FormulaResult]:
    """
    Evaluate every formula cell of a grid.

    Each cell is evaluated independently, exactly as evaluate_formula()
    would; nothing is shared between cells.

    Returns:
        {(row, column): FormulaResult} for each cell holding a formula.
    """
    results: dict[tuple[int, int], FormulaResult] = {}
    for row in range(context.row_count):
        for column in range(context.column_count):
            formula = context.get_cell_formula(row, column)
            if not formula:
                continue
            text = formula.strip()
            if not text.startswith("="):
                text = f"={text}"
            results[(row, column)] = evaluate_formula(text, context, registry)
    return results
