"""
Input validation utilities for pyworkbench.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about caller intent.

Design principles:
    - No silent type coercion
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Collection
from typing import Any

import numpy as np

from pyworkbench.core.exceptions import ValidationError


def check_choice(value: Any, choices: Collection[str], name: str) -> str:
    """
    Verify value is one of the allowed choices.
    
    Args:
        value: Input to validate
        choices: Allowed values
        name: Parameter name for error messages
        
    Raises:
        ValidationError: If value is not among choices
    """
    if value not in choices:
        raise ValidationError(
            f"{name} must be one of {tuple(choices)}, got {value!r}"
        )
    return value


def check_open_unit_interval(value: Any, name: str) -> float:
    """
    Verify value is a finite number strictly between 0 and 1.
    
    Used for significance levels.
    
    Args:
        value: Input to validate
        name: Parameter name for error messages
        
    Raises:
        ValidationError: If value is not a number in (0, 1)
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, np.floating)):
        raise ValidationError(
            f"{name}: expected a number, got {type(value).__name__}"
        )
    if not np.isfinite(value) or not (0.0 < value < 1.0):
        raise ValidationError(f"{name} must be in (0, 1), got {value}")
    return float(value)


def check_non_negative_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 0.
    
    Args:
        value: Input to validate
        name: Parameter name for error messages
        
    Raises:
        ValidationError: If value is not a non-negative integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(
            f"{name}: expected an integer, got {type(value).__name__}"
        )
    if value < 0:
        raise ValidationError(f"{name} must be >= 0, got {value}")
    return int(value)
