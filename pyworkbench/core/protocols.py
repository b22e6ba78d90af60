"""
Core protocols for pyworkbench.

These define structural interfaces that hosts and backends must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so a
host can hand over any object with the right methods.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Read-only: nothing in the core mutates a grid it is given
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

# Type variables for generic payloads
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class GridContext(Protocol):
    """
    Read-only accessor to a rectangular grid of cells.
    
    The formula evaluator only ever reads through this protocol. A host
    must not mutate the grid while an evaluation call is running, and
    row_count / column_count must stay fixed for the duration of the call.
    
    Addresses are zero-based integer pairs; A1 notation is a display
    concern handled by pyworkbench.formulas.references.
    """
    
    @property
    def row_count(self) -> int:
        """Number of rows in the grid."""
        ...
    
    @property
    def column_count(self) -> int:
        """Number of columns in the grid."""
        ...
    
    def get_cell_value(self, row: int, column: int) -> Any:
        """Raw value of a cell (text, number or None)."""
        ...
    
    def get_cell_formula(self, row: int, column: int) -> str | None:
        """
        Formula text of a cell, or None for a plain value.
        
        A returned formula normally starts with '='; the evaluator strips
        it when present.
        """
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.
    
    Each backend takes a component-specific design and produces a
    component-specific parameter payload wrapped in a Result.
    
    Backends are stateless; all configuration is passed via the design
    or at construction time. This makes them easy to test and swap.
    
    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """
    
    @property
    def name(self) -> str:
        """
        Backend identifier.
        
        Convention: '{device}_{algorithm}'
        Examples: 'cpu_segment_test', 'cpu_profile'
        """
        ...
    
    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.
        
        Args:
            design: Component-specific input container
            
        Returns:
            Result envelope containing parameter payload and metadata
        """
        ...
