"""Cross-validation of the analytical, Monte Carlo and binomial engines.

Every table uses the closed-form Black-Scholes value as the reference and
reports absolute errors of the numerical methods against it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np
import pandas as pd

from option_pricer.options.engines import (
    BinomialTreePricer,
    BlackScholesPricer,
    MonteCarloPricer,
)
from option_pricer.options.models.monte_carlo import DEFAULT_BATCH_SIZE
from option_pricer.options.random_source import NormalRandomSource
from option_pricer.options.types import MarketState, OptionSpec

logger = logging.getLogger(__name__)

CROSS_VALIDATION_COLUMNS = (
    "option_type",
    "strike",
    "method",
    "price",
    "std_error",
    "abs_error",
    "delta",
)


def put_call_parity_gap(
    call_price: float, put_price: float, state: MarketState, strike: float
) -> float:
    """Return `(C - P) - (S - K * exp(-r * T))`; zero under exact parity."""
    forward_value = state.spot - strike * state.discount_factor
    return (call_price - put_price) - forward_value


def cross_validate(
    specs: Sequence[OptionSpec],
    state: MarketState,
    random_source: NormalRandomSource,
    *,
    n_samples: int,
    steps: int,
    batch_size: int = DEFAULT_BATCH_SIZE,
    n_workers: int = 1,
) -> pd.DataFrame:
    """Price each contract with all three methods.

    Returns:
        One row per (contract, method) with columns
        `CROSS_VALIDATION_COLUMNS`. `std_error` is only set for Monte Carlo,
        `delta` only for the analytical row.
    """
    analytical = BlackScholesPricer()
    tree = BinomialTreePricer(steps=steps)
    mc = MonteCarloPricer(
        random_source=random_source,
        n_samples=n_samples,
        batch_size=batch_size,
        n_workers=n_workers,
    )

    rows: list[dict[str, object]] = []
    for spec in specs:
        reference = analytical.price(spec, state)
        common = {"option_type": str(spec.option_type), "strike": spec.strike}

        rows.append(
            {
                **common,
                "method": "black_scholes",
                "price": reference,
                "std_error": np.nan,
                "abs_error": 0.0,
                "delta": analytical.delta(spec, state),
            }
        )

        estimate = mc.estimate(spec, state)
        rows.append(
            {
                **common,
                "method": "monte_carlo",
                "price": estimate.price,
                "std_error": estimate.std_error,
                "abs_error": abs(estimate.price - reference),
                "delta": np.nan,
            }
        )

        tree_price = tree.price(spec, state)
        rows.append(
            {
                **common,
                "method": "binomial",
                "price": tree_price,
                "std_error": np.nan,
                "abs_error": abs(tree_price - reference),
                "delta": np.nan,
            }
        )
        logger.debug(
            "Cross-validated %s K=%s: bs=%.6f mc=%.6f tree=%.6f",
            spec.option_type,
            spec.strike,
            reference,
            estimate.price,
            tree_price,
        )

    return pd.DataFrame(rows, columns=list(CROSS_VALIDATION_COLUMNS))


def binomial_convergence(
    spec: OptionSpec,
    state: MarketState,
    steps_grid: Iterable[int],
) -> pd.DataFrame:
    """Tree price and absolute error versus Black-Scholes per step count."""
    reference = BlackScholesPricer().price(spec, state)
    rows = []
    for steps in steps_grid:
        price = BinomialTreePricer(steps=int(steps)).price(spec, state)
        rows.append(
            {
                "steps": int(steps),
                "price": price,
                "abs_error": abs(price - reference),
            }
        )
    return pd.DataFrame(rows, columns=["steps", "price", "abs_error"])


def monte_carlo_convergence(
    spec: OptionSpec,
    state: MarketState,
    sample_grid: Iterable[int],
    seeds: Sequence[int],
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> pd.DataFrame:
    """Average Monte Carlo error over seeded repeats per sample count.

    A fresh `NormalRandomSource(seed)` is built for every (n_samples, seed)
    pair, so the table is reproducible.

    Returns:
        Columns `n_samples`, `mean_price`, `mean_abs_error`,
        `mean_std_error`, `n_seeds`.
    """
    if not seeds:
        raise ValueError("seeds must be non-empty")

    reference = BlackScholesPricer().price(spec, state)
    rows = []
    for n_samples in sample_grid:
        prices = []
        std_errors = []
        for seed in seeds:
            pricer = MonteCarloPricer(
                random_source=NormalRandomSource(seed),
                n_samples=int(n_samples),
                batch_size=batch_size,
            )
            estimate = pricer.estimate(spec, state)
            prices.append(estimate.price)
            std_errors.append(estimate.std_error)

        prices_arr = np.asarray(prices)
        rows.append(
            {
                "n_samples": int(n_samples),
                "mean_price": float(prices_arr.mean()),
                "mean_abs_error": float(np.abs(prices_arr - reference).mean()),
                "mean_std_error": float(np.mean(std_errors)),
                "n_seeds": len(seeds),
            }
        )
    return pd.DataFrame(
        rows,
        columns=["n_samples", "mean_price", "mean_abs_error", "mean_std_error", "n_seeds"],
    )
