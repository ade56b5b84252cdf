"""Monte Carlo pricing engine for European options."""

from __future__ import annotations

from dataclasses import dataclass

from option_pricer.options.errors import PricingDomainError
from option_pricer.options.models.monte_carlo import (
    DEFAULT_BATCH_SIZE,
    MonteCarloResult,
    monte_carlo_estimate,
    parallel_monte_carlo_estimate,
)
from option_pricer.options.random_source import NormalRandomSource
from option_pricer.options.types import MarketState, OptionSpec


@dataclass(frozen=True)
class MonteCarloPricer:
    """Plain Monte Carlo pricer bound to one random source.

    The source is advanced on every call, so two consecutive calls give
    different estimates unless the source is reset in between. With
    `n_workers > 1` trials run on independent streams spawned from the source.
    """

    random_source: NormalRandomSource
    n_samples: int = 1_000_000
    batch_size: int = DEFAULT_BATCH_SIZE
    n_workers: int = 1

    def __post_init__(self) -> None:
        if self.n_samples < 1:
            raise PricingDomainError("n_samples must be >= 1")
        if self.batch_size < 1:
            raise PricingDomainError("batch_size must be >= 1")
        if self.n_workers < 1:
            raise PricingDomainError("n_workers must be >= 1")

    def estimate(self, spec: OptionSpec, state: MarketState) -> MonteCarloResult:
        """Return the price together with its standard error."""
        kwargs = dict(
            S=state.spot,
            K=spec.strike,
            T=state.maturity,
            sigma=state.volatility,
            r=state.rate,
            option_type=spec.option_type,
            random_source=self.random_source,
            n_samples=self.n_samples,
            batch_size=self.batch_size,
        )
        if self.n_workers == 1:
            return monte_carlo_estimate(**kwargs)
        return parallel_monte_carlo_estimate(n_workers=self.n_workers, **kwargs)

    def price(self, spec: OptionSpec, state: MarketState) -> float:
        return self.estimate(spec, state).price
