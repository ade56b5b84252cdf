"""YAML-backed configuration for pricing entry points.

Config precedence is CLI > YAML > defaults: `build_config` deep-merges the
three layers and `pricing_inputs_from_config` turns the merged mapping into
pricing objects.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from option_pricer.options.types import MarketState, OptionSpec, normalize_option_type


def add_config_arg(parser, *, default: str | None = None) -> None:
    parser.add_argument(
        "--config",
        type=str,
        default=default,
        help="Path to a YAML config file.",
    )


def load_yaml_config(path: str | Path | None) -> dict[str, Any]:
    if path is None:
        return {}

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(
            "Config file must contain a YAML mapping at the top level."
        )

    return data


def deep_merge(
    base: Mapping[str, Any],
    updates: Mapping[str, Any],
) -> dict[str, Any]:
    merged: dict[str, Any] = {}

    for key, value in base.items():
        if isinstance(value, Mapping):
            merged[key] = deep_merge(value, {})
        else:
            merged[key] = value

    for key, value in updates.items():
        if (
            isinstance(value, Mapping)
            and isinstance(merged.get(key), Mapping)
        ):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value

    return merged


def build_config(
    defaults: Mapping[str, Any],
    yaml_path: str | Path | None,
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    config = deep_merge(defaults, load_yaml_config(yaml_path))
    if overrides:
        config = deep_merge(config, overrides)
    return config


def resolve_path(value: str | Path | None) -> Path | None:
    if value is None:
        return None
    if isinstance(value, Path):
        return value
    expanded = os.path.expandvars(os.path.expanduser(str(value)))
    return Path(expanded)


def _require_section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = config.get(name)
    if not isinstance(section, Mapping):
        raise ValueError(f"Config section `{name}` must be a mapping.")
    return section


def pricing_inputs_from_config(
    config: Mapping[str, Any],
) -> tuple[MarketState, list[OptionSpec]]:
    """Build the market snapshot and the contracts to price.

    Expects a `market` mapping (spot/volatility/rate/maturity) and an
    `options` mapping with `strike` and `types` (e.g. `["call", "put"]`).
    Repeated types collapse to one contract each, in first-seen order.
    Domain violations surface as `PricingDomainError` from the constructors.
    """
    market = _require_section(config, "market")
    options = _require_section(config, "options")

    state = MarketState(
        spot=float(market["spot"]),
        volatility=float(market["volatility"]),
        rate=float(market["rate"]),
        maturity=float(market["maturity"]),
    )

    types = options.get("types") or []
    if isinstance(types, str):
        types = [types]
    if not types:
        raise ValueError("options.types must list at least one option type.")

    strike = float(options["strike"])
    unique_types = dict.fromkeys(normalize_option_type(t) for t in types)
    specs = [OptionSpec(strike=strike, option_type=t) for t in unique_types]
    return state, specs
