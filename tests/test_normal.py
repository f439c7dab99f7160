import math

import pytest

from quickprice.normal import INV_SQRT_2_PI, cdf, erf_approx, pdf


def test_cdf_at_zero_is_half():
    assert cdf(0.0) == pytest.approx(0.5, abs=1e-8)


@pytest.mark.parametrize(
    "x, expected",
    [(1.96, 0.975), (-1.96, 0.025), (3.0, 0.9987)],
)
def test_cdf_known_values(x, expected):
    assert cdf(x) == pytest.approx(expected, abs=1e-3)


def test_cdf_symmetry():
    for x in (0.1, 0.5, 1.3, 2.7, 4.0):
        assert cdf(x) + cdf(-x) == pytest.approx(1.0, abs=1e-14)


def test_cdf_is_monotonic():
    points = [-4.0, -2.0, -0.5, 0.0, 0.5, 2.0, 4.0]
    values = [cdf(x) for x in points]
    assert values == sorted(values)
    assert all(0.0 <= v <= 1.0 for v in values)


def test_pdf_at_zero():
    assert pdf(0.0) == pytest.approx(INV_SQRT_2_PI, abs=1e-10)


def test_pdf_peaks_at_zero():
    assert pdf(0.0) > pdf(1.0)
    assert pdf(0.0) > pdf(-1.0)
    assert pdf(1.0) == pytest.approx(pdf(-1.0))


def test_erf_approx_is_close_to_exact():
    for x in (-2.5, -1.0, -0.2, 0.3, 1.1, 2.0):
        assert erf_approx(x) == pytest.approx(math.erf(x), abs=2e-7)


def test_erf_approx_is_odd():
    assert erf_approx(-0.7) == pytest.approx(-erf_approx(0.7))