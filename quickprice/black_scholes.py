"""Black-Scholes pricing of European options and implied volatility."""

from __future__ import annotations

import enum
import math
import time
from dataclasses import dataclass, field

from quickprice.normal import cdf, pdf


class OptionType(enum.Enum):
    """Whether the option is a call or a put."""

    CALL = "call"
    PUT = "put"


@dataclass
class MarketData:
    """Market inputs for pricing a single underlying."""

    spot_price: float
    volatility: float
    risk_free_rate: float
    dividend_yield: float = 0.0


@dataclass
class Greeks:
    """Option sensitivities: theta per day, vega and rho per 1%."""

    delta: float = 0.0
    gamma: float = 0.0
    theta: float = 0.0
    vega: float = 0.0
    rho: float = 0.0


@dataclass
class PricingResult:
    """Price, Greeks and timing of one pricing run."""

    option_price: float = 0.0
    greeks: Greeks = field(default_factory=Greeks)
    computation_time_ns: int = 0
    converged: bool = False


def price_european_option(
    option_type: OptionType,
    spot: float,
    strike: float,
    expiry: float,
    rate: float,
    vol: float,
    dividend: float = 0.0,
) -> PricingResult:
    """Price a European option with Black-Scholes.

    Degenerate inputs (non-positive expiry, volatility or spot) give an empty,
    non-converged result.
    """
    start = time.perf_counter_ns()

    if expiry <= 0.0 or vol <= 0.0 or spot <= 0.0:
        return PricingResult()

    sqrt_t = math.sqrt(expiry)
    vol_sqrt_t = vol * sqrt_t
    d1 = (math.log(spot / strike) + (rate - dividend + 0.5 * vol * vol) * expiry) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t

    nd1 = cdf(d1)
    nd2 = cdf(d2)
    n_minus_d1 = cdf(-d1)
    n_minus_d2 = cdf(-d2)

    discount = math.exp(-rate * expiry)
    dividend_discount = math.exp(-dividend * expiry)

    greeks = Greeks()
    if option_type is OptionType.CALL:
        price = spot * dividend_discount * nd1 - strike * discount * nd2
        greeks.delta = dividend_discount * nd1
        greeks.rho = strike * expiry * discount * nd2 / 100.0
    else:
        price = strike * discount * n_minus_d2 - spot * dividend_discount * n_minus_d1
        greeks.delta = -dividend_discount * n_minus_d1
        greeks.rho = -strike * expiry * discount * n_minus_d2 / 100.0

    pdf_d1 = pdf(d1)
    greeks.gamma = dividend_discount * pdf_d1 / (spot * vol_sqrt_t)
    greeks.vega = spot * dividend_discount * pdf_d1 * sqrt_t / 100.0
    greeks.theta = (
        -spot * dividend_discount * pdf_d1 * vol / (2.0 * sqrt_t)
        - rate * strike * discount * nd2
        + dividend * spot * dividend_discount * nd1
    ) / 365.0

    return PricingResult(
        option_price=price,
        greeks=greeks,
        computation_time_ns=time.perf_counter_ns() - start,
        converged=True,
    )


def implied_volatility(
    option_type: OptionType,
    spot: float,
    strike: float,
    expiry: float,
    rate: float,
    market_price: float,
    dividend: float = 0.0,
) -> float:
    """Solve for the volatility matching ``market_price`` by Newton-Raphson.

    Returns 0.0 for a non-positive price or expiry. The estimate is kept
    within [0.001, 5.0].
    """
    if market_price <= 0.0 or expiry <= 0.0:
        return 0.0

    vol_guess = 0.2
    tolerance = 1e-6
    for _ in range(100):
        result = price_european_option(option_type, spot, strike, expiry, rate, vol_guess, dividend)
        price_diff = result.option_price - market_price
        if abs(price_diff) < tolerance:
            return vol_guess
        vega = result.greeks.vega * 100.0
        if abs(vega) < 1e-10:
            break
        vol_guess -= price_diff / vega
        vol_guess = max(0.001, min(5.0, vol_guess))
    return vol_guess