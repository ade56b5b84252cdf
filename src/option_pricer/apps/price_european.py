"""Price European options three ways and cross-check the results.

Typical usage:
    python -m option_pricer.apps.price_european
    python -m option_pricer.apps.price_european --config config/pricing.yml
    python -m option_pricer.apps.price_european --strike 110 --n-samples 200000 --seed 7

Config precedence: CLI > YAML > defaults.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

import pandas as pd

from option_pricer.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    logging_overrides_from_args,
    pricing_inputs_from_config,
    setup_logging_from_config,
)
from option_pricer.config.constants import (
    DEFAULT_MATURITY,
    DEFAULT_MC_SAMPLES,
    DEFAULT_MC_WORKERS,
    DEFAULT_OPTION_TYPES,
    DEFAULT_RATE,
    DEFAULT_SAMPLE_GRID,
    DEFAULT_SPOT,
    DEFAULT_STEPS_GRID,
    DEFAULT_STRIKE,
    DEFAULT_TREE_STEPS,
    DEFAULT_VOLATILITY,
)
from option_pricer.options import (
    NormalRandomSource,
    OptionType,
    PricingDomainError,
    binomial_convergence,
    cross_validate,
    monte_carlo_convergence,
    put_call_parity_gap,
)


DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "market": {
        "spot": DEFAULT_SPOT,
        "volatility": DEFAULT_VOLATILITY,
        "rate": DEFAULT_RATE,
        "maturity": DEFAULT_MATURITY,
    },
    "options": {
        "strike": DEFAULT_STRIKE,
        "types": DEFAULT_OPTION_TYPES,
    },
    "monte_carlo": {
        "n_samples": DEFAULT_MC_SAMPLES,
        "seed": None,
        "n_workers": DEFAULT_MC_WORKERS,
    },
    "binomial": {
        "steps": DEFAULT_TREE_STEPS,
    },
    "convergence": {
        "enabled": False,
        "steps_grid": DEFAULT_STEPS_GRID,
        "sample_grid": DEFAULT_SAMPLE_GRID,
        "seeds": [1, 2, 3, 4, 5],
    },
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Cross-validate Black-Scholes, Monte Carlo and binomial prices."
    )
    add_config_arg(parser)
    add_logging_args(parser)

    for flag, help_text in (
        ("--spot", "Spot price of the underlying."),
        ("--volatility", "Annualized volatility in decimals."),
        ("--rate", "Continuously-compounded risk-free rate."),
        ("--maturity", "Time to maturity in years."),
        ("--strike", "Option strike."),
    ):
        parser.add_argument(flag, type=float, default=None, help=help_text)

    parser.add_argument(
        "--types",
        nargs="+",
        choices=["call", "put"],
        default=None,
        help="Option types to price (space-separated).",
    )
    parser.add_argument(
        "--n-samples",
        type=int,
        default=None,
        help="Monte Carlo sample count.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the Monte Carlo random source.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Monte Carlo worker threads (independent streams).",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Binomial tree step count.",
    )
    parser.add_argument(
        "--convergence",
        dest="convergence",
        action="store_true",
        help="Also run the binomial / Monte Carlo convergence studies.",
    )
    parser.set_defaults(convergence=None)

    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    market = {
        key: getattr(args, key)
        for key in ("spot", "volatility", "rate", "maturity")
        if getattr(args, key) is not None
    }
    if market:
        overrides["market"] = market

    options: dict[str, Any] = {}
    if args.strike is not None:
        options["strike"] = args.strike
    if args.types is not None:
        options["types"] = args.types
    if options:
        overrides["options"] = options

    mc: dict[str, Any] = {}
    if args.n_samples is not None:
        mc["n_samples"] = args.n_samples
    if args.seed is not None:
        mc["seed"] = args.seed
    if args.workers is not None:
        mc["n_workers"] = args.workers
    if mc:
        overrides["monte_carlo"] = mc

    if args.steps is not None:
        overrides["binomial"] = {"steps": args.steps}
    if args.convergence is not None:
        overrides["convergence"] = {"enabled": args.convergence}

    logging_overrides = logging_overrides_from_args(args)
    if logging_overrides:
        overrides["logging"] = logging_overrides

    return overrides


def _run(config: dict[str, Any], logger: logging.Logger) -> None:
    state, specs = pricing_inputs_from_config(config)
    mc_cfg = config["monte_carlo"]
    steps = int(config["binomial"]["steps"])

    random_source = NormalRandomSource(mc_cfg.get("seed"))
    logger.info("Market:     %s", state)
    logger.info("Contracts:  %s", [f"{s.option_type} K={s.strike}" for s in specs])
    logger.info(
        "MC samples: %s (workers=%s, entropy=%s)",
        mc_cfg["n_samples"],
        mc_cfg["n_workers"],
        random_source.entropy,
    )
    logger.info("Tree steps: %s", steps)

    table = cross_validate(
        specs,
        state,
        random_source,
        n_samples=int(mc_cfg["n_samples"]),
        steps=steps,
        n_workers=int(mc_cfg["n_workers"]),
    )
    with pd.option_context("display.float_format", "{:.6f}".format):
        logger.info("Cross-validation:\n%s", table.to_string(index=False))

    analytical = table[table["method"] == "black_scholes"].set_index("option_type")
    if {OptionType.CALL, OptionType.PUT} <= set(analytical.index):
        strike = float(analytical.loc[OptionType.CALL, "strike"])
        gap = put_call_parity_gap(
            float(analytical.loc[OptionType.CALL, "price"]),
            float(analytical.loc[OptionType.PUT, "price"]),
            state,
            strike,
        )
        logger.info("Put-call parity gap: %.3e", gap)

    conv_cfg = config["convergence"]
    if not conv_cfg.get("enabled"):
        return

    for spec in specs:
        tree_table = binomial_convergence(spec, state, conv_cfg["steps_grid"])
        mc_table = monte_carlo_convergence(
            spec, state, conv_cfg["sample_grid"], conv_cfg["seeds"]
        )
        logger.info(
            "Binomial convergence (%s):\n%s",
            spec.option_type,
            tree_table.to_string(index=False),
        )
        logger.info(
            "Monte Carlo convergence (%s):\n%s",
            spec.option_type,
            mc_table.to_string(index=False),
        )


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    overrides = _build_overrides(args)
    config = build_config(DEFAULT_CONFIG, args.config, overrides)

    setup_logging_from_config(config.get("logging"))
    logger = logging.getLogger(__name__)

    try:
        _run(config, logger)
    except PricingDomainError as e:
        logger.error("Invalid pricing inputs: %s", e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
