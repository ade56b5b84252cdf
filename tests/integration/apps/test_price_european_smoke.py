from __future__ import annotations

import importlib

import pytest

pytestmark = pytest.mark.integration

SMALL_RUN = ["--n-samples", "2000", "--steps", "25", "--seed", "11", "--no-color"]


def test_price_european_help_exits_cleanly(run_help) -> None:
    mod = importlib.import_module("option_pricer.apps.price_european")
    run_help(mod, "Cross-validate Black-Scholes, Monte Carlo and binomial prices.")


def test_price_european_zero_volatility_exits_with_domain_error() -> None:
    mod = importlib.import_module("option_pricer.apps.price_european")

    assert mod.main(["--volatility", "0", *SMALL_RUN]) == 2


def test_price_european_non_positive_spot_exits_with_domain_error() -> None:
    mod = importlib.import_module("option_pricer.apps.price_european")

    assert mod.main(["--spot", "-5", *SMALL_RUN]) == 2


def test_price_european_merges_yaml_under_cli(monkeypatch, write_yaml) -> None:
    mod = importlib.import_module("option_pricer.apps.price_european")
    path = write_yaml(
        "pricing.yml",
        {
            "market": {"spot": 120.0, "volatility": 0.3},
            "options": {"strike": 110.0, "types": ["put", "put"]},
            "monte_carlo": {"n_samples": 500_000, "n_workers": 2},
            "binomial": {"steps": 400},
        },
    )

    captured: dict[str, object] = {}
    real_cross_validate = mod.cross_validate

    def _cross_validate(specs, state, random_source, **kwargs):
        captured["specs"] = specs
        captured["state"] = state
        captured["kwargs"] = kwargs
        return real_cross_validate(specs, state, random_source, **kwargs)

    monkeypatch.setattr(mod, "cross_validate", _cross_validate)

    code = mod.main(["--config", str(path), "--strike", "105", *SMALL_RUN])

    assert code == 0
    state = captured["state"]
    assert state.spot == 120.0
    assert state.volatility == 0.3
    assert state.rate == mod.DEFAULT_CONFIG["market"]["rate"]
    assert [(s.strike, s.option_type) for s in captured["specs"]] == [
        (105.0, "put")
    ]
    assert captured["kwargs"] == {"n_samples": 2000, "steps": 25, "n_workers": 2}


def test_price_european_runs_call_and_put_with_convergence(monkeypatch) -> None:
    mod = importlib.import_module("option_pricer.apps.price_european")
    seen: list[object] = []
    real_gap = mod.put_call_parity_gap

    def _gap(call_price, put_price, state, strike):
        gap = real_gap(call_price, put_price, state, strike)
        seen.append(gap)
        return gap

    monkeypatch.setattr(mod, "put_call_parity_gap", _gap)
    monkeypatch.setitem(
        mod.DEFAULT_CONFIG,
        "convergence",
        {
            "enabled": False,
            "steps_grid": [10, 20],
            "sample_grid": [500, 1000],
            "seeds": [1, 2],
        },
    )

    code = mod.main(["--types", "call", "put", "call", "--convergence", *SMALL_RUN])

    assert code == 0
    assert len(seen) == 1
    assert abs(seen[0]) < 1e-10
