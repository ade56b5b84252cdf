"""Functional option-pricing models."""

from .binomial_tree import binomial_tree_price, crr_parameters
from .black_scholes import bs_d1_d2, bs_delta, bs_price, norm_cdf
from .monte_carlo import (
    MonteCarloResult,
    monte_carlo_estimate,
    monte_carlo_price,
    parallel_monte_carlo_estimate,
)

__all__ = [
    "norm_cdf",
    "bs_d1_d2",
    "bs_price",
    "bs_delta",
    "crr_parameters",
    "binomial_tree_price",
    "MonteCarloResult",
    "monte_carlo_estimate",
    "monte_carlo_price",
    "parallel_monte_carlo_estimate",
]
