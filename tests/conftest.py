"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def mixed_rows():
    """Small table with a numeric, a text and a mixed column."""
    return [
        {"id": "1", "city": "Berlin", "price": "12,5", "note": "ok"},
        {"id": "2", "city": "Hamburg", "price": "7", "note": "n/a"},
        {"id": "3", "city": "Berlin", "price": "x", "note": ""},
        {"id": "4", "city": "Munich", "price": 10, "note": None},
    ]


@pytest.fixture
def segment_rows(rng):
    """Numeric target by region: North ~ N(10, 2), South ~ N(12, 3)."""
    north = rng.normal(10.0, 2.0, 30)
    south = rng.normal(12.0, 3.0, 25)
    rows = [{"region": "North", "price": float(v)} for v in north]
    rows += [{"region": "South", "price": float(v)} for v in south]
    return rows, north, south
