"""
Generic result container for pyworkbench computations.

The Result class provides a standardized envelope for the statistical and
profiling payloads. This enables shared tooling for timing, warnings and
serialization while allowing components to define their own payloads.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (test type, row counts)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True), produced once per invocation
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for computations.
    
    Type Parameters:
        P: The component-specific parameter payload type
        
    Attributes:
        params: Component-specific payload (test statistics, column profiles)
        info: Structured metadata (test type, row counts)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        
    Examples:
        >>> Result(
        ...     params=SegmentTestParams(...),
        ...     info={'test_type': 'welch-t'},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_segment_test'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
