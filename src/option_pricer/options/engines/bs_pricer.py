"""Black-Scholes pricing engine."""

from __future__ import annotations

from option_pricer.options.models.black_scholes import bs_delta, bs_price
from option_pricer.options.types import MarketState, OptionSpec


class BlackScholesPricer:
    """Exact Black-Scholes pricer backed by analytical formulas."""

    def price(self, spec: OptionSpec, state: MarketState) -> float:
        return bs_price(
            S=state.spot,
            K=spec.strike,
            T=state.maturity,
            sigma=state.volatility,
            r=state.rate,
            option_type=spec.option_type,
        )

    def delta(self, spec: OptionSpec, state: MarketState) -> float:
        return bs_delta(
            S=state.spot,
            K=spec.strike,
            T=state.maturity,
            sigma=state.volatility,
            r=state.rate,
            option_type=spec.option_type,
        )
