"""CRR binomial-tree pricing for European options."""

from __future__ import annotations

import logging

import numpy as np

from option_pricer.options.errors import ArbitrageError, PricingDomainError
from option_pricer.options.types import (
    OptionType,
    OptionTypeInput,
    normalize_option_type,
    require_finite,
)

logger = logging.getLogger(__name__)


def _intrinsic_value(
    spot: np.ndarray | float, strike: float, option_type: OptionType
) -> np.ndarray:
    if option_type == OptionType.CALL:
        return np.maximum(np.asarray(spot, dtype=float) - strike, 0.0)
    return np.maximum(strike - np.asarray(spot, dtype=float), 0.0)


def crr_parameters(
    T: float, sigma: float, r: float, steps: int
) -> tuple[float, float, float, float]:
    """Return `(u, d, p, disc)` for a Cox-Ross-Rubinstein lattice.

    Raises:
        PricingDomainError: If `steps < 1`, an input is not finite,
            `T <= 0` or `sigma <= 0`.
        ArbitrageError: If the risk-neutral up probability leaves [0, 1].
    """
    if steps < 1:
        raise PricingDomainError("steps must be >= 1")
    require_finite(T=T, sigma=sigma, r=r)
    if T <= 0:
        raise PricingDomainError("T must be positive")
    # u == d collapses the lattice and leaves p undefined.
    if sigma <= 0:
        raise PricingDomainError("sigma must be positive for a CRR lattice")

    dt = T / steps
    u = np.exp(sigma * np.sqrt(dt))
    if not np.isfinite(u):
        raise PricingDomainError("sigma * sqrt(T / steps) too large for a CRR lattice")
    d = 1.0 / u
    disc = np.exp(-r * dt)
    p = (np.exp(r * dt) - d) / (u - d)

    if not 0.0 <= p <= 1.0:
        raise ArbitrageError(
            f"Invalid CRR risk-neutral probability p={p:.6f}; "
            "increase steps or check rate/volatility inputs."
        )
    return float(u), float(d), float(p), float(disc)


def _collapse(values: np.ndarray, p: float, disc: float, steps: int) -> float:
    # Single node array, overwritten layer by layer.
    for step in range(steps - 1, -1, -1):
        values[: step + 1] = disc * (
            p * values[1 : step + 2] + (1.0 - p) * values[: step + 1]
        )
    return float(values[0])


def binomial_tree_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
    steps: int = 200,
) -> float:
    """Price a European option with a Cox-Ross-Rubinstein tree.

    Exercise is only allowed at expiry: the lattice is collapsed by pure
    discounted expectation, without comparing against immediate exercise.

    Terminal node prices are built in log space. When the top of the lattice
    overflows (very large `sigma * sqrt(T * steps)`), a call is priced from
    the lattice put through put-call parity, which holds exactly on a CRR
    tree because the discounted node price is a martingale under `p`.

    Args:
        S: Spot price.
        K: Strike price.
        T: Time to expiry in years.
        sigma: Annualized volatility in decimals.
        r: Continuously-compounded risk-free rate.
        option_type: One of `{'call', 'put', 'C', 'P'}`.
        steps: Number of binomial time steps.

    Returns:
        Present value for one option.

    Raises:
        PricingDomainError: If `steps < 1`, if any input is NaN or infinite,
            or if `S`, `K`, `T` or `sigma` is not positive.
        ArbitrageError: If CRR probabilities become invalid for the selected
            parameters.
    """
    require_finite(S=S, K=K, T=T, sigma=sigma, r=r)
    if S <= 0 or K <= 0:
        raise PricingDomainError("S and K must be positive")
    opt_type = normalize_option_type(option_type)
    u, _, p, disc = crr_parameters(T, sigma, r, steps)

    j = np.arange(steps + 1)
    with np.errstate(over="ignore"):
        spots_T = S * np.exp(np.log(u) * (2 * j - steps))

    with np.errstate(over="ignore", invalid="ignore"):
        price = _collapse(_intrinsic_value(spots_T, K, opt_type), p, disc, steps)

    if opt_type == OptionType.CALL and not np.isfinite(price):
        put = _collapse(_intrinsic_value(spots_T, K, OptionType.PUT), p, disc, steps)
        price = put + S - K * disc**steps
        logger.debug("CRR call via parity: lattice overflowed (steps=%d)", steps)

    if not np.isfinite(price):
        raise PricingDomainError(
            f"CRR lattice produced a non-finite price for steps={steps}"
        )
    logger.debug("CRR %s price=%.6f steps=%d p=%.6f", opt_type, price, steps, p)
    return price
