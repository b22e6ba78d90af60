"""
Tests for input validators.
"""

import math

import numpy as np
import pytest

from pyworkbench.core.exceptions import ValidationError
from pyworkbench.core.validation import (
    check_choice,
    check_non_negative_int,
    check_open_unit_interval,
)


class TestCheckChoice:

    def test_valid(self):
        assert check_choice("text", ("numeric", "text"), "target_type") == "text"

    def test_invalid(self):
        with pytest.raises(ValidationError, match="target_type must be one of"):
            check_choice("date", ("numeric", "text"), "target_type")


class TestCheckOpenUnitInterval:

    @pytest.mark.parametrize("value", [0.05, 0.5, np.float64(0.01)])
    def test_valid(self, value):
        assert check_open_unit_interval(value, "alpha") == pytest.approx(float(value))

    @pytest.mark.parametrize("value", [0, 1, -0.1, 1.5, math.nan, math.inf])
    def test_out_of_range(self, value):
        with pytest.raises(ValidationError, match="alpha"):
            check_open_unit_interval(value, "alpha")

    @pytest.mark.parametrize("value", ["0.05", None, True])
    def test_not_a_number(self, value):
        with pytest.raises(ValidationError, match="expected a number"):
            check_open_unit_interval(value, "alpha")


class TestCheckNonNegativeInt:

    def test_valid(self):
        assert check_non_negative_int(0, "row") == 0
        assert check_non_negative_int(np.int64(7), "row") == 7

    def test_negative(self):
        with pytest.raises(ValidationError, match="row must be >= 0"):
            check_non_negative_int(-1, "row")

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="expected an integer"):
            check_non_negative_int(True, "row")
