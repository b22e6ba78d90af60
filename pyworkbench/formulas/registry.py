"""
Formula function registry.

A registry is a plain, case-insensitive name -> FunctionDefinition mapping
assembled once. Functions receive their argument expressions unevaluated,
together with the running Evaluation, and decide themselves what to
evaluate (SUM expands ranges, a text function might not).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from pyworkbench.formulas.evaluator import Evaluation


FunctionImpl = Callable[[Sequence[str], "Evaluation"], Any]


@dataclass(frozen=True)
class FunctionDefinition:
    """A named formula function and its formula-bar metadata."""
    name: str
    description: str
    syntax: str
    evaluate: FunctionImpl

    def metadata(self) -> dict[str, str]:
        return {
            'name': self.name,
            'description': self.description,
            'syntax': self.syntax,
        }


class FunctionRegistry:
    """
    Immutable case-insensitive collection of function definitions.

    register() returns a new registry; the receiver is left unchanged,
    so a registry shared between evaluations never changes under them.
    """

    def __init__(self, definitions: Iterable[FunctionDefinition] = ()):
        self._definitions: dict[str, FunctionDefinition] = {}
        for definition in definitions:
            self._definitions[definition.name.upper()] = definition

    def register(self, definition: FunctionDefinition) -> FunctionRegistry:
        """New registry with `definition` added (or replacing the same name)."""
        return FunctionRegistry([*self._definitions.values(), definition])

    def get(self, name: str) -> FunctionDefinition | None:
        return self._definitions.get(name.upper())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._definitions

    def __iter__(self) -> Iterator[FunctionDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(d.name for d in self._definitions.values())

    def metadata(self) -> list[dict[str, str]]:
        return [definition.metadata() for definition in self._definitions.values()]

    def suggest(self, prefix: str) -> list[dict[str, str]]:
        """Metadata of the functions whose name starts with `prefix` (any case)."""
        needle = (prefix or "").strip().lower()
        return [
            definition.metadata()
            for definition in self._definitions.values()
            if definition.name.lower().startswith(needle)
        ]

    def __repr__(self) -> str:
        return f"FunctionRegistry({', '.join(self.names)})"


# ---------------------------------------------------------------------------
# Built-in functions
# ---------------------------------------------------------------------------

def _sum(args: Sequence[str], evaluation: Evaluation) -> float:
    return float(sum(evaluation.numeric_values(args)))


def _average(args: Sequence[str], evaluation: Evaluation) -> float | None:
    values = evaluation.numeric_values(args)
    if not values:
        return None
    return sum(values) / len(values)


def _min(args: Sequence[str], evaluation: Evaluation) -> float | None:
    values = evaluation.numeric_values(args)
    return min(values) if values else None


def _max(args: Sequence[str], evaluation: Evaluation) -> float | None:
    values = evaluation.numeric_values(args)
    return max(values) if values else None


def _count(args: Sequence[str], evaluation: Evaluation) -> int:
    return len(evaluation.numeric_values(args))


BUILTIN_FUNCTIONS: tuple[FunctionDefinition, ...] = (
    FunctionDefinition(
        name='SUM',
        description='Adds all numeric values in the given arguments.',
        syntax='SUM(A1:A10, B2)',
        evaluate=_sum,
    ),
    FunctionDefinition(
        name='AVERAGE',
        description='Mean of the numeric values in the arguments.',
        syntax='AVERAGE(A1:A10)',
        evaluate=_average,
    ),
    FunctionDefinition(
        name='MIN',
        description='Smallest numeric value in the arguments.',
        syntax='MIN(A1, B1:B5)',
        evaluate=_min,
    ),
    FunctionDefinition(
        name='MAX',
        description='Largest numeric value in the arguments.',
        syntax='MAX(A1:A10)',
        evaluate=_max,
    ),
    FunctionDefinition(
        name='COUNT',
        description='Counts the numeric values in the given arguments.',
        syntax='COUNT(A1:A10)',
        evaluate=_count,
    ),
)

DEFAULT_REGISTRY = FunctionRegistry(BUILTIN_FUNCTIONS)

AVAILABLE_FORMULAS: tuple[dict[str, str], ...] = tuple(DEFAULT_REGISTRY.metadata())


def suggest_formulas(
    prefix: str,
    registry: FunctionRegistry = DEFAULT_REGISTRY,
) -> list[dict[str, str]]:
    """
    Formula-bar suggestions for a typed prefix.

    >>> [f['name'] for f in suggest_formulas('a')]
    ['AVERAGE']
    """
    return registry.suggest(prefix)
