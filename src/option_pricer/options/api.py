"""Functional pricing API over `OptionSpec` and `MarketState`.

Thin wrappers around the engines for callers that prefer plain functions.
"""

from __future__ import annotations

from option_pricer.options.engines import (
    BinomialTreePricer,
    BlackScholesPricer,
    MonteCarloPricer,
)
from option_pricer.options.random_source import NormalRandomSource
from option_pricer.options.types import MarketState, OptionSpec

_ANALYTICAL = BlackScholesPricer()


def analytical_price(instrument: OptionSpec, parameters: MarketState) -> float:
    return _ANALYTICAL.price(instrument, parameters)


def analytical_delta(instrument: OptionSpec, parameters: MarketState) -> float:
    return _ANALYTICAL.delta(instrument, parameters)


def monte_carlo_price(
    instrument: OptionSpec,
    parameters: MarketState,
    random_source: NormalRandomSource,
    sample_count: int,
) -> float:
    """Discounted Monte Carlo mean; advances `random_source` by `sample_count`."""
    pricer = MonteCarloPricer(random_source=random_source, n_samples=sample_count)
    return pricer.price(instrument, parameters)


def binomial_price(
    instrument: OptionSpec, parameters: MarketState, step_count: int
) -> float:
    return BinomialTreePricer(steps=step_count).price(instrument, parameters)
