"""
Special functions behind the segment-test p-values.

Scalar, dependency-free implementations:

    erf                          Abramowitz & Stegun 7.1.26 (|error| < 1.5e-7)
    log_gamma                    Lanczos, g=7, 9 coefficients
    regularized_incomplete_beta  Lentz continued fraction
    regularized_gamma_p          series below s+1, continued fraction above

The iterative routines stop after tolerance.max_iterations steps. When
that budget runs out the current estimate is returned (logged at DEBUG);
pass strict=True to get a ConvergenceError instead.
"""

from __future__ import annotations

import logging
import math

from pyworkbench.core.compute.tolerances import DEFAULT_ITERATION, IterationTolerance
from pyworkbench.core.exceptions import ConvergenceError

logger = logging.getLogger(__name__)

LANCZOS_G = 7
LANCZOS_COEFFICIENTS = (
    0.99999999999980993,
    676.5203681218851,
    -1259.1392167224028,
    771.3234287776531,
    -176.6150291621406,
    12.507343278686905,
    -0.13857109526572012,
    9.9843695780195716e-6,
    1.5056327351493116e-7,
)

# A&S 7.1.26
_ERF_P = 0.3275911
_ERF_A = (0.254829592, -0.284496736, 1.421413741, -1.453152027, 1.061405429)

_LOG_SQRT_TWO_PI = 0.5 * math.log(2.0 * math.pi)


def erf(x: float) -> float:
    """Error function, rational approximation (no iteration)."""
    sign = -1.0 if x < 0 else 1.0
    ax = abs(x)
    t = 1.0 / (1.0 + _ERF_P * ax)
    a1, a2, a3, a4, a5 = _ERF_A
    polynomial = ((((a5 * t + a4) * t + a3) * t + a2) * t + a1) * t
    return sign * (1.0 - polynomial * math.exp(-ax * ax))


def normal_cdf(z: float) -> float:
    """Standard normal CDF."""
    return 0.5 * (1.0 + erf(z / math.sqrt(2.0)))


def log_gamma(z: float) -> float:
    """
    log|Gamma(z)| via the Lanczos approximation.

    Uses the reflection formula below 0.5; returns inf at the poles
    (z = 0, -1, -2, ...).
    """
    if z <= 0 and z == math.floor(z):
        return math.inf
    if z < 0.5:
        s = math.sin(math.pi * z)
        return math.log(math.pi) - math.log(abs(s)) - log_gamma(1.0 - z)

    z -= 1.0
    x = LANCZOS_COEFFICIENTS[0]
    for i in range(1, len(LANCZOS_COEFFICIENTS)):
        x += LANCZOS_COEFFICIENTS[i] / (z + i)
    t = z + LANCZOS_G + 0.5
    return _LOG_SQRT_TWO_PI + (z + 0.5) * math.log(t) - t + math.log(x)


def _not_converged(
    routine: str,
    tolerance: IterationTolerance,
    final_change: float,
    strict: bool,
) -> None:
    if strict:
        raise ConvergenceError(
            f"{routine} did not converge in {tolerance.max_iterations} iterations",
            iterations=tolerance.max_iterations,
            final_change=final_change,
            threshold=tolerance.epsilon,
        )
    logger.debug(
        "%s: no convergence after %d iterations (last change %.3e > %.1e)",
        routine, tolerance.max_iterations, final_change, tolerance.epsilon,
    )


def _beta_continued_fraction(
    x: float,
    a: float,
    b: float,
    tolerance: IterationTolerance,
    strict: bool,
) -> float:
    """Continued fraction for I_x(a, b), modified Lentz."""
    fpmin = tolerance.fpmin
    qab = a + b
    qap = a + 1.0
    qam = a - 1.0
    c = 1.0
    d = 1.0 - qab * x / qap
    if abs(d) < fpmin:
        d = fpmin
    d = 1.0 / d
    h = d
    change = math.inf

    for m in range(1, tolerance.max_iterations + 1):
        m2 = 2 * m

        # even step
        aa = m * (b - m) * x / ((qam + m2) * (a + m2))
        d = 1.0 + aa * d
        if abs(d) < fpmin:
            d = fpmin
        c = 1.0 + aa / c
        if abs(c) < fpmin:
            c = fpmin
        d = 1.0 / d
        h *= d * c

        # odd step
        aa = -(a + m) * (qab + m) * x / ((a + m2) * (qap + m2))
        d = 1.0 + aa * d
        if abs(d) < fpmin:
            d = fpmin
        c = 1.0 + aa / c
        if abs(c) < fpmin:
            c = fpmin
        d = 1.0 / d
        delta = d * c
        h *= delta

        change = abs(delta - 1.0)
        if change < tolerance.epsilon:
            return h

    _not_converged("incomplete beta", tolerance, change, strict)
    return h


def regularized_incomplete_beta(
    x: float,
    a: float,
    b: float,
    tolerance: IterationTolerance = DEFAULT_ITERATION,
    strict: bool = False,
) -> float:
    """
    Regularized incomplete beta function I_x(a, b).

    Evaluates the continued fraction directly for x < (a+1)/(a+b+2) and
    through the symmetry I_x(a, b) = 1 - I_{1-x}(b, a) otherwise.

    Args:
        x: Point in [0, 1] (clamped outside)
        a, b: Shape parameters, > 0
        tolerance: Iteration budget
        strict: Raise ConvergenceError instead of returning an estimate

    Returns:
        I_x(a, b), NaN for invalid shape parameters.
    """
    if math.isnan(x) or not (a > 0 and b > 0):
        return math.nan
    if x <= 0.0:
        return 0.0
    if x >= 1.0:
        return 1.0

    ln_beta = log_gamma(a + b) - log_gamma(a) - log_gamma(b)
    front = math.exp(a * math.log(x) + b * math.log1p(-x) + ln_beta)
    if x < (a + 1.0) / (a + b + 2.0):
        return front * _beta_continued_fraction(x, a, b, tolerance, strict) / a
    return 1.0 - front * _beta_continued_fraction(1.0 - x, b, a, tolerance, strict) / b


def student_t_cdf(
    t: float,
    df: float,
    tolerance: IterationTolerance = DEFAULT_ITERATION,
    strict: bool = False,
) -> float:
    """
    Student-t CDF with (possibly fractional) degrees of freedom.

    Returns NaN for non-finite t, non-finite df or df <= 0. With strict,
    a continued fraction that does not converge raises ConvergenceError.
    """
    if not (math.isfinite(t) and math.isfinite(df)) or df <= 0:
        return math.nan
    x = df / (df + t * t)
    ib = regularized_incomplete_beta(x, df / 2.0, 0.5, tolerance, strict)
    if not math.isfinite(ib):
        return math.nan
    if t >= 0:
        return 1.0 - 0.5 * ib
    return 0.5 * ib


def regularized_gamma_p(
    s: float,
    x: float,
    tolerance: IterationTolerance = DEFAULT_ITERATION,
    strict: bool = False,
) -> float:
    """
    Regularized lower incomplete gamma function P(s, x).

    Returns NaN for non-finite arguments, s <= 0 or x < 0, and 0 at x = 0.
    """
    if not (math.isfinite(s) and math.isfinite(x)) or s <= 0 or x < 0:
        return math.nan
    if x == 0:
        return 0.0

    log_front = -x + s * math.log(x) - log_gamma(s)

    if x < s + 1.0:
        total = 1.0 / s
        term = total
        for n in range(1, tolerance.max_iterations + 1):
            term *= x / (s + n)
            total += term
            if abs(term) < tolerance.epsilon * abs(total):
                return total * math.exp(log_front)
        _not_converged("incomplete gamma series", tolerance, abs(term / total), strict)
        return total * math.exp(log_front)

    fpmin = tolerance.fpmin
    b = x + 1.0 - s
    c = 1.0 / fpmin
    d = 1.0 / b
    h = d
    change = math.inf
    for n in range(1, tolerance.max_iterations + 1):
        an = -n * (n - s)
        b += 2.0
        d = an * d + b
        if abs(d) < fpmin:
            d = fpmin
        c = b + an / c
        if abs(c) < fpmin:
            c = fpmin
        d = 1.0 / d
        delta = d * c
        h *= delta
        change = abs(delta - 1.0)
        if change < tolerance.epsilon:
            return 1.0 - math.exp(log_front) * h
    _not_converged("incomplete gamma continued fraction", tolerance, change, strict)
    return 1.0 - math.exp(log_front) * h


def chi_square_cdf(
    x: float,
    df: float,
    tolerance: IterationTolerance = DEFAULT_ITERATION,
    strict: bool = False,
) -> float:
    """Chi-square CDF: P(df/2, x/2). strict is passed to regularized_gamma_p()."""
    return regularized_gamma_p(df / 2.0, x / 2.0, tolerance, strict)


def clamp_probability(value: float) -> float:
    """Clamp to [0, 1]; NaN stays NaN."""
    if not math.isfinite(value):
        return math.nan
    return min(1.0, max(0.0, value))
