"""Pricing engines bound to `OptionSpec` / `MarketState` inputs."""

from .base import DeltaModel, PriceModel
from .binomial_tree_pricer import BinomialTreePricer
from .bs_pricer import BlackScholesPricer
from .monte_carlo_pricer import MonteCarloPricer

__all__ = [
    "PriceModel",
    "DeltaModel",
    "BinomialTreePricer",
    "BlackScholesPricer",
    "MonteCarloPricer",
]
