"""Option pricing models, engines, and shared types."""

from .api import analytical_delta, analytical_price, binomial_price, monte_carlo_price
from .engines import (
    BinomialTreePricer,
    BlackScholesPricer,
    DeltaModel,
    MonteCarloPricer,
    PriceModel,
)
from .errors import ArbitrageError, PricingDomainError
from .models import (
    MonteCarloResult,
    binomial_tree_price,
    bs_d1_d2,
    bs_delta,
    bs_price,
    crr_parameters,
    monte_carlo_estimate,
    norm_cdf,
    parallel_monte_carlo_estimate,
)
from .random_source import NormalRandomSource
from .types import (
    MarketState,
    OptionSpec,
    OptionType,
    OptionTypeInput,
    make_call,
    make_put,
    normalize_option_type,
)
from .validation import (
    binomial_convergence,
    cross_validate,
    monte_carlo_convergence,
    put_call_parity_gap,
)

__all__ = [
    "OptionType",
    "OptionTypeInput",
    "OptionSpec",
    "MarketState",
    "make_call",
    "make_put",
    "normalize_option_type",
    "PricingDomainError",
    "ArbitrageError",
    "NormalRandomSource",
    "PriceModel",
    "DeltaModel",
    "BinomialTreePricer",
    "BlackScholesPricer",
    "MonteCarloPricer",
    "MonteCarloResult",
    "norm_cdf",
    "bs_d1_d2",
    "bs_price",
    "bs_delta",
    "crr_parameters",
    "binomial_tree_price",
    "monte_carlo_estimate",
    "parallel_monte_carlo_estimate",
    "analytical_price",
    "analytical_delta",
    "monte_carlo_price",
    "binomial_price",
    "cross_validate",
    "binomial_convergence",
    "monte_carlo_convergence",
    "put_call_parity_gap",
]
