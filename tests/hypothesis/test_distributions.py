"""
Tests for the special functions, cross-checked against scipy.
"""

import logging
import math

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy import special, stats

from pyworkbench.core.compute.tolerances import IterationTolerance
from pyworkbench.core.exceptions import ConvergenceError
from pyworkbench.hypothesis.distributions import (
    chi_square_cdf,
    clamp_probability,
    erf,
    log_gamma,
    normal_cdf,
    regularized_gamma_p,
    regularized_incomplete_beta,
    student_t_cdf,
)

ONE_STEP = IterationTolerance(
    epsilon=1e-12, max_iterations=1, fpmin=1e-30, name='one-step', description='test'
)


class TestErf:

    @pytest.mark.parametrize("x", [-3.0, -1.2, -0.3, 0.0, 0.1, 0.5, 1.0, 2.5, 4.0])
    def test_against_scipy(self, x):
        # Abramowitz & Stegun 7.1.26: |error| < 1.5e-7
        assert erf(x) == pytest.approx(special.erf(x), abs=1.5e-7)

    def test_odd(self):
        assert erf(-0.7) == pytest.approx(-erf(0.7), abs=1e-15)

    def test_normal_cdf(self):
        z = np.linspace(-5, 5, 41)
        assert_allclose([normal_cdf(v) for v in z], stats.norm.cdf(z), atol=1e-7)


class TestLogGamma:

    @pytest.mark.parametrize("z", [0.5, 1.0, 1.5, 2.0, 3.7, 10.0, 50.5, 171.2])
    def test_against_scipy(self, z):
        assert log_gamma(z) == pytest.approx(special.gammaln(z), rel=1e-12, abs=1e-12)

    @pytest.mark.parametrize("z", [0.25, 0.01, -0.5, -2.5])
    def test_reflection(self, z):
        assert log_gamma(z) == pytest.approx(special.gammaln(z), rel=1e-10, abs=1e-12)

    def test_pole(self):
        assert log_gamma(0.0) == math.inf
        assert log_gamma(-3.0) == math.inf


class TestIncompleteBeta:

    @pytest.mark.parametrize("x, a, b", [
        (0.1, 0.5, 0.5),
        (0.5, 2.0, 3.0),
        (0.9, 2.0, 3.0),
        (0.3, 10.0, 0.5),
        (0.999, 40.0, 0.5),
        (0.2, 1.5, 25.0),
    ])
    def test_against_scipy(self, x, a, b):
        assert regularized_incomplete_beta(x, a, b) == pytest.approx(
            special.betainc(a, b, x), rel=1e-9, abs=1e-12
        )

    def test_bounds(self):
        assert regularized_incomplete_beta(0.0, 2.0, 3.0) == 0.0
        assert regularized_incomplete_beta(1.0, 2.0, 3.0) == 1.0
        assert regularized_incomplete_beta(-1.0, 2.0, 3.0) == 0.0

    def test_invalid_shape(self):
        assert math.isnan(regularized_incomplete_beta(0.5, 0.0, 1.0))
        assert math.isnan(regularized_incomplete_beta(math.nan, 1.0, 1.0))


class TestStudentT:

    @pytest.mark.parametrize("t", [-4.0, -1.5, 0.0, 0.7, 2.1, 6.0])
    @pytest.mark.parametrize("df", [1.0, 2.5, 9.0, 17.43, 120.0])
    def test_against_scipy(self, t, df):
        assert student_t_cdf(t, df) == pytest.approx(stats.t.cdf(t, df), abs=1e-10)

    def test_zero_is_half(self):
        assert student_t_cdf(0.0, 5.0) == pytest.approx(0.5)

    @pytest.mark.parametrize("t, df", [(math.nan, 3.0), (1.0, 0.0), (1.0, math.inf), (math.inf, 3.0)])
    def test_invalid(self, t, df):
        assert math.isnan(student_t_cdf(t, df))


class TestIncompleteGamma:

    @pytest.mark.parametrize("s, x", [
        (0.5, 0.1), (0.5, 3.0), (1.0, 1.0), (2.5, 1.0), (2.5, 8.0), (10.0, 5.0), (10.0, 25.0),
    ])
    def test_against_scipy(self, s, x):
        assert regularized_gamma_p(s, x) == pytest.approx(special.gammainc(s, x), abs=1e-10)

    def test_zero(self):
        assert regularized_gamma_p(2.0, 0.0) == 0.0

    @pytest.mark.parametrize("s, x", [(0.0, 1.0), (1.0, -1.0), (math.nan, 1.0)])
    def test_invalid(self, s, x):
        assert math.isnan(regularized_gamma_p(s, x))

    @pytest.mark.parametrize("df", [1, 2, 3, 6, 12])
    def test_chi_square_cdf(self, df):
        for x in (0.5, 2.0, 7.5, 20.0):
            assert chi_square_cdf(x, df) == pytest.approx(stats.chi2.cdf(x, df), abs=1e-10)


class TestConvergence:

    def test_estimate_returned_and_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="pyworkbench.hypothesis.distributions"):
            value = regularized_incomplete_beta(0.5, 20.0, 20.0, tolerance=ONE_STEP)
        assert math.isfinite(value)
        assert "no convergence" in caplog.text

    def test_strict_beta_raises(self):
        with pytest.raises(ConvergenceError) as exc_info:
            regularized_incomplete_beta(0.5, 20.0, 20.0, tolerance=ONE_STEP, strict=True)
        assert exc_info.value.iterations == 1
        assert exc_info.value.threshold == 1e-12

    def test_strict_gamma_raises(self):
        with pytest.raises(ConvergenceError):
            regularized_gamma_p(10.0, 5.0, tolerance=ONE_STEP, strict=True)
        with pytest.raises(ConvergenceError):
            regularized_gamma_p(5.0, 10.0, tolerance=ONE_STEP, strict=True)

    def test_strict_student_t_raises(self):
        with pytest.raises(ConvergenceError):
            student_t_cdf(1.7, 40.0, tolerance=ONE_STEP, strict=True)
        assert math.isfinite(student_t_cdf(1.7, 40.0, tolerance=ONE_STEP))

    def test_strict_chi_square_raises(self):
        with pytest.raises(ConvergenceError):
            chi_square_cdf(20.0, 20.0, tolerance=ONE_STEP, strict=True)
        assert math.isfinite(chi_square_cdf(20.0, 20.0, tolerance=ONE_STEP))


def test_clamp_probability():
    assert clamp_probability(-1e-17) == 0.0
    assert clamp_probability(1.0000001) == 1.0
    assert clamp_probability(0.3) == 0.3
    assert math.isnan(clamp_probability(math.nan))
