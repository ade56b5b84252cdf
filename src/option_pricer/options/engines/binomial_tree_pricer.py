"""Binomial-tree pricing engine for European options."""

from __future__ import annotations

from dataclasses import dataclass

from option_pricer.options.errors import PricingDomainError
from option_pricer.options.models.binomial_tree import binomial_tree_price
from option_pricer.options.types import MarketState, OptionSpec


@dataclass(frozen=True)
class BinomialTreePricer:
    """CRR tree pricer, European exercise only.

    This engine intentionally implements only `price(...)`; use
    `BlackScholesPricer` when a delta is needed.
    """

    steps: int = 200

    def __post_init__(self) -> None:
        if self.steps < 1:
            raise PricingDomainError("steps must be >= 1")

    def price(self, spec: OptionSpec, state: MarketState) -> float:
        return binomial_tree_price(
            S=state.spot,
            K=spec.strike,
            T=state.maturity,
            sigma=state.volatility,
            r=state.rate,
            option_type=spec.option_type,
            steps=self.steps,
        )
