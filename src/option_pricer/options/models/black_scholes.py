"""Black-Scholes closed-form price and delta for European options."""

from __future__ import annotations

import numpy as np
from scipy.special import erf

from option_pricer.options.errors import PricingDomainError
from option_pricer.options.types import (
    OptionType,
    OptionTypeInput,
    normalize_option_type,
    require_finite,
)


def norm_cdf(x: float) -> float:
    """Standard normal CDF evaluated through the error function."""
    return float(0.5 * (1.0 + erf(x / np.sqrt(2.0))))


def bs_d1_d2(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
) -> tuple[float, float]:
    """Compute d1 and d2 for Black-Scholes without dividends.

    Raises:
        PricingDomainError: If any input is NaN or infinite, or if `S`, `K`,
            `T` or `sigma` is not positive.
    """
    require_finite(S=S, K=K, T=T, sigma=sigma, r=r)
    if T <= 0 or sigma <= 0:
        raise PricingDomainError("T and sigma must be positive")
    if S <= 0 or K <= 0:
        raise PricingDomainError("S and K must be positive")
    vol_sqrt_t = sigma * np.sqrt(T)
    d1 = (np.log(S / K) + (r + 0.5 * sigma**2) * T) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    return float(d1), float(d2)


def bs_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> float:
    """Black-Scholes price of a European call or put."""
    opt_type = normalize_option_type(option_type)
    d1, d2 = bs_d1_d2(S, K, T, sigma, r)
    discounted_strike = K * np.exp(-r * T)

    if opt_type == OptionType.CALL:
        return float(S * norm_cdf(d1) - discounted_strike * norm_cdf(d2))
    return float(discounted_strike * norm_cdf(-d2) - S * norm_cdf(-d1))


def bs_delta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> float:
    """Black-Scholes spot delta: `N(d1)` for calls, `N(d1) - 1` for puts."""
    opt_type = normalize_option_type(option_type)
    d1, _ = bs_d1_d2(S, K, T, sigma, r)
    delta_call = norm_cdf(d1)
    if opt_type == OptionType.CALL:
        return delta_call
    return delta_call - 1.0
