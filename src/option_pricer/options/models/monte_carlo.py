"""Monte Carlo pricing of European options under risk-neutral GBM.

Terminal prices are sampled directly from the lognormal law

    S_T = S * exp((r - sigma^2 / 2) * T + sigma * sqrt(T) * Z),  Z ~ N(0, 1)

and the discounted sample mean of the payoff is returned. No variance
reduction is applied. Draws are consumed in fixed-size batches so memory
stays bounded for large sample counts, and every call advances the caller's
random source by exactly `n_samples` draws.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np

from option_pricer.options.errors import PricingDomainError
from option_pricer.options.random_source import NormalRandomSource
from option_pricer.options.types import OptionSpec, OptionTypeInput, require_finite

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100_000
# Two-sided 95% normal quantile.
_Z_95 = 1.959963984540054


@dataclass(frozen=True)
class MonteCarloResult:
    """Discounted Monte Carlo estimate and its sampling error."""

    price: float
    std_error: float
    ci_low: float
    ci_high: float
    n_samples: int


@dataclass(frozen=True)
class _PayoffTotals:
    n: int
    total: float
    total_sq: float

    def __add__(self, other: _PayoffTotals) -> _PayoffTotals:
        return _PayoffTotals(
            n=self.n + other.n,
            total=self.total + other.total,
            total_sq=self.total_sq + other.total_sq,
        )


def _validate_inputs(
    S: float, T: float, sigma: float, r: float, n_samples: int, batch_size: int
) -> None:
    if n_samples < 1:
        raise PricingDomainError("n_samples must be >= 1")
    if batch_size < 1:
        raise PricingDomainError("batch_size must be >= 1")
    require_finite(S=S, T=T, sigma=sigma, r=r)
    if S <= 0:
        raise PricingDomainError("S must be positive")
    if T <= 0:
        raise PricingDomainError("T must be positive")
    if sigma < 0:
        raise PricingDomainError("sigma must be non-negative")


def _simulate_payoff_totals(
    spec: OptionSpec,
    S: float,
    T: float,
    sigma: float,
    r: float,
    random_source: NormalRandomSource,
    n_samples: int,
    batch_size: int,
) -> _PayoffTotals:
    """Accumulate undiscounted payoff sum and sum of squares over `n_samples`."""
    drift = (r - 0.5 * sigma**2) * T
    vol_sqrt_t = sigma * math.sqrt(T)

    totals = _PayoffTotals(n=0, total=0.0, total_sq=0.0)
    remaining = n_samples
    while remaining > 0:
        n_batch = min(batch_size, remaining)
        z = random_source.samples(n_batch)
        spots_T = S * np.exp(drift + vol_sqrt_t * z)
        payoffs = spec.payoff(spots_T)
        totals = totals + _PayoffTotals(
            n=n_batch,
            total=float(np.sum(payoffs)),
            total_sq=float(np.dot(payoffs, payoffs)),
        )
        remaining -= n_batch
    return totals


def _finalize(totals: _PayoffTotals, discount: float) -> MonteCarloResult:
    n = totals.n
    mean = totals.total / n
    if n > 1:
        variance = max(totals.total_sq - n * mean**2, 0.0) / (n - 1)
        std_error = discount * math.sqrt(variance / n)
    else:
        std_error = float("nan")

    price = discount * mean
    return MonteCarloResult(
        price=price,
        std_error=std_error,
        ci_low=price - _Z_95 * std_error,
        ci_high=price + _Z_95 * std_error,
        n_samples=n,
    )


def monte_carlo_estimate(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float,
    option_type: OptionTypeInput,
    random_source: NormalRandomSource,
    n_samples: int,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> MonteCarloResult:
    """Estimate a European option value by plain Monte Carlo.

    Args:
        S: Spot price.
        K: Strike price.
        T: Time to expiry in years.
        sigma: Annualized volatility in decimals.
        r: Continuously-compounded risk-free rate.
        option_type: One of `{'call', 'put', 'C', 'P'}`.
        random_source: Stream providing the standard-normal draws.
        n_samples: Number of simulated terminal prices.
        batch_size: Maximum number of draws held in memory at once.

    Returns:
        Discounted sample mean with standard error and 95% interval.

    Raises:
        PricingDomainError: If `n_samples < 1`, `batch_size < 1` or the
            market inputs are outside the model domain.
    """
    _validate_inputs(S, T, sigma, r, n_samples, batch_size)
    spec = OptionSpec(strike=K, option_type=option_type)

    totals = _simulate_payoff_totals(
        spec, S, T, sigma, r, random_source, n_samples, batch_size
    )
    result = _finalize(totals, math.exp(-r * T))
    logger.debug(
        "MC %s price=%.6f se=%.6f n=%d",
        spec.option_type,
        result.price,
        result.std_error,
        n_samples,
    )
    return result


def monte_carlo_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float,
    option_type: OptionTypeInput,
    random_source: NormalRandomSource,
    n_samples: int,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> float:
    """Monte Carlo price only; see `monte_carlo_estimate`."""
    return monte_carlo_estimate(
        S, K, T, sigma, r, option_type, random_source, n_samples, batch_size
    ).price


def _split_samples(n_samples: int, n_workers: int) -> list[int]:
    base, extra = divmod(n_samples, n_workers)
    return [base + (1 if i < extra else 0) for i in range(n_workers)]


def parallel_monte_carlo_estimate(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float,
    option_type: OptionTypeInput,
    random_source: NormalRandomSource,
    n_samples: int,
    n_workers: int,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> MonteCarloResult:
    """Monte Carlo estimate with trials split across a thread pool.

    Each worker draws from its own stream spawned from `random_source`, so
    no generator state is shared between threads. The result is reproducible
    for a freshly constructed, seeded source and a fixed `n_workers`.

    Raises:
        PricingDomainError: As `monte_carlo_estimate`, or if `n_workers < 1`.
    """
    _validate_inputs(S, T, sigma, r, n_samples, batch_size)
    if n_workers < 1:
        raise PricingDomainError("n_workers must be >= 1")
    spec = OptionSpec(strike=K, option_type=option_type)

    n_workers = min(n_workers, n_samples)
    counts = _split_samples(n_samples, n_workers)
    streams = random_source.spawn(n_workers)

    with ThreadPoolExecutor(max_workers=n_workers) as pool:
        futures = [
            pool.submit(
                _simulate_payoff_totals,
                spec, S, T, sigma, r, stream, count, batch_size,
            )
            for stream, count in zip(streams, counts)
        ]
        parts = [future.result() for future in futures]

    totals = _PayoffTotals(n=0, total=0.0, total_sq=0.0)
    for part in parts:
        totals = totals + part

    result = _finalize(totals, math.exp(-r * T))
    logger.debug(
        "MC %s price=%.6f se=%.6f n=%d workers=%d",
        spec.option_type,
        result.price,
        result.std_error,
        n_samples,
        n_workers,
    )
    return result
