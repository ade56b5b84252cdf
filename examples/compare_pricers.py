"""Compare the three European pricing methods on the reference scenario.

Run from the repository root after `pip install -e .`:
    python examples/compare_pricers.py
"""

from __future__ import annotations

import logging

from option_pricer.options import (
    MarketState,
    NormalRandomSource,
    binomial_convergence,
    cross_validate,
    make_call,
    make_put,
)
from option_pricer.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging("INFO", fmt_console="%(message)s")

    state = MarketState(spot=100.0, volatility=0.20, rate=0.05, maturity=1.0)
    specs = [make_call(100.0), make_put(100.0)]

    table = cross_validate(
        specs, state, NormalRandomSource(42), n_samples=1_000_000, steps=200
    )
    logger.info("%s", table.to_string(index=False))

    steps_table = binomial_convergence(specs[0], state, [10, 50, 200, 1000])
    logger.info("\nCRR convergence (call):\n%s", steps_table.to_string(index=False))


if __name__ == "__main__":
    main()
