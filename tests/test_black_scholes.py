import math

import pytest

from quickprice.black_scholes import (
    Greeks,
    OptionType,
    PricingResult,
    implied_volatility,
    price_european_option,
)

BASE = dict(spot=100.0, strike=100.0, expiry=0.25, rate=0.05, vol=0.20, dividend=0.02)
GREEKS_BASE = dict(spot=105.0, strike=100.0, expiry=0.25, rate=0.05, vol=0.20, dividend=0.02)


def _price(option_type, **params):
    return price_european_option(option_type, **params)


def _call_price(**overrides):
    params = {**GREEKS_BASE, **overrides}
    return _price(OptionType.CALL, **params).option_price


def test_call_put_parity():
    call = _price(OptionType.CALL, **BASE)
    put = _price(OptionType.PUT, **BASE)
    s, k, t, r, q = BASE["spot"], BASE["strike"], BASE["expiry"], BASE["rate"], BASE["dividend"]
    forward = s * math.exp(-q * t)
    pv_strike = k * math.exp(-r * t)
    assert call.option_price - put.option_price - (forward - pv_strike) == pytest.approx(0.0, abs=1e-6)


def test_delta_range():
    call = _price(OptionType.CALL, **BASE)
    put = _price(OptionType.PUT, **BASE)
    assert 0.0 <= call.greeks.delta <= 1.0
    assert -1.0 <= put.greeks.delta <= 0.0


def test_gamma_positive_and_equal():
    call = _price(OptionType.CALL, **BASE)
    put = _price(OptionType.PUT, **BASE)
    assert call.greeks.gamma > 0.0
    assert put.greeks.gamma > 0.0
    assert call.greeks.gamma == pytest.approx(put.greeks.gamma, abs=1e-6)


def test_vega_positive_and_equal():
    call = _price(OptionType.CALL, **BASE)
    put = _price(OptionType.PUT, **BASE)
    assert call.greeks.vega > 0.0
    assert put.greeks.vega > 0.0
    assert call.greeks.vega == pytest.approx(put.greeks.vega, abs=1e-6)


def test_call_theta_negative():
    assert _price(OptionType.CALL, **BASE).greeks.theta < 0.0


def test_result_converged_with_timing():
    result = _price(OptionType.CALL, **GREEKS_BASE)
    assert result.converged is True
    assert result.option_price > 0.0
    assert result.computation_time_ns >= 0


def test_delta_matches_finite_difference():
    h = 0.01
    numerical = (_call_price(spot=105.0 + h) - _call_price(spot=105.0 - h)) / (2 * h)
    analytical = _price(OptionType.CALL, **GREEKS_BASE).greeks.delta
    assert analytical == pytest.approx(numerical, abs=1e-3)


def test_vega_matches_finite_difference():
    h = 0.001
    numerical = (_call_price(vol=0.20 + h) - _call_price(vol=0.20 - h)) / (2 * h) / 100.0
    analytical = _price(OptionType.CALL, **GREEKS_BASE).greeks.vega
    assert analytical == pytest.approx(numerical, abs=1e-3)


def test_rho_matches_finite_difference():
    h = 1e-4
    numerical = (_call_price(rate=0.05 + h) - _call_price(rate=0.05 - h)) / (2 * h) / 100.0
    analytical = _price(OptionType.CALL, **GREEKS_BASE).greeks.rho
    assert analytical == pytest.approx(numerical, abs=1e-3)


def test_theta_matches_finite_difference():
    h = 1e-3
    numerical = -(_call_price(expiry=0.25 + h) - _call_price(expiry=0.25 - h)) / (2 * h) / 365.0
    analytical = _price(OptionType.CALL, **GREEKS_BASE).greeks.theta
    assert analytical == pytest.approx(numerical, abs=1e-4)


def test_delta_gamma_relationship():
    bump = 1.0
    up = _price(OptionType.CALL, **{**GREEKS_BASE, "spot": 105.0 + bump}).greeks.delta
    down = _price(OptionType.CALL, **{**GREEKS_BASE, "spot": 105.0 - bump}).greeks.delta
    base = _price(OptionType.CALL, **GREEKS_BASE).greeks.gamma
    assert base == pytest.approx((up - down) / (2 * bump), abs=1e-3)


@pytest.mark.parametrize("field_name", ["expiry", "vol", "spot"])
def test_degenerate_inputs_give_empty_result(field_name):
    params = {**BASE, field_name: 0.0}
    result = _price(OptionType.CALL, **params)
    assert result == PricingResult()
    assert result.greeks == Greeks()
    assert result.converged is False


def test_implied_volatility_recovers_known_vol():
    known_vol = 0.25
    market_price = price_european_option(
        OptionType.CALL, 105.0, 100.0, 0.25, 0.05, known_vol, 0.02
    ).option_price
    iv = implied_volatility(OptionType.CALL, 105.0, 100.0, 0.25, 0.05, market_price, 0.02)
    assert iv == pytest.approx(known_vol, abs=1e-6)


def test_implied_volatility_for_put():
    market_price = price_european_option(
        OptionType.PUT, 100.0, 105.0, 0.5, 0.03, 0.35, 0.0
    ).option_price
    iv = implied_volatility(OptionType.PUT, 100.0, 105.0, 0.5, 0.03, market_price)
    assert iv == pytest.approx(0.35, abs=1e-5)


def test_implied_volatility_invalid_inputs():
    assert implied_volatility(OptionType.CALL, 100.0, 100.0, 0.25, 0.05, 0.0) == 0.0
    assert implied_volatility(OptionType.CALL, 100.0, 100.0, 0.0, 0.05, 5.0) == 0.0


def test_implied_volatility_stays_in_bounds():
    iv = implied_volatility(OptionType.CALL, 100.0, 100.0, 0.25, 0.05, 99.0)
    assert 0.001 <= iv <= 5.0