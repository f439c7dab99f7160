"""Standard normal distribution helpers built on a fast erf approximation."""

import math

SQRT_2 = 1.4142135623730951
INV_SQRT_2_PI = 0.3989422804014327

_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911


def erf_approx(x: float) -> float:
    """Approximate the error function (absolute error below about 1.5e-7)."""
    sign = 1.0 if x >= 0 else -1.0
    x = abs(x)
    t = 1.0 / (1.0 + _P * x)
    poly = ((((_A5 * t + _A4) * t) + _A3) * t + _A2) * t + _A1
    y = 1.0 - poly * t * math.exp(-x * x)
    return sign * y


def cdf(x: float) -> float:
    """Cumulative distribution function of the standard normal."""
    if x >= 0.0:
        return 0.5 + 0.5 * erf_approx(x / SQRT_2)
    return 0.5 - 0.5 * erf_approx(-x / SQRT_2)


def pdf(x: float) -> float:
    """Probability density function of the standard normal."""
    return INV_SQRT_2_PI * math.exp(-0.5 * x * x)