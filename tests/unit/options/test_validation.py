import numpy as np
import pandas as pd
import pytest

from option_pricer.options import (
    MarketState,
    NormalRandomSource,
    analytical_delta,
    analytical_price,
    binomial_convergence,
    binomial_price,
    cross_validate,
    make_call,
    make_put,
    monte_carlo_convergence,
    monte_carlo_price,
    put_call_parity_gap,
)
from option_pricer.options.validation import CROSS_VALIDATION_COLUMNS

REFERENCE_STATE = MarketState(spot=100.0, volatility=0.20, rate=0.05, maturity=1.0)


def test_functional_api_reference_scenario():
    call, put = make_call(100.0), make_put(100.0)
    source = NormalRandomSource(42)

    assert analytical_price(call, REFERENCE_STATE) == pytest.approx(10.45, abs=1e-2)
    assert analytical_price(put, REFERENCE_STATE) == pytest.approx(5.57, abs=1e-2)
    assert analytical_delta(call, REFERENCE_STATE) == pytest.approx(0.637, abs=1e-2)
    assert analytical_delta(put, REFERENCE_STATE) == pytest.approx(-0.363, abs=1e-2)
    assert binomial_price(call, REFERENCE_STATE, 200) == pytest.approx(10.45, abs=0.1)
    assert monte_carlo_price(put, REFERENCE_STATE, source, 10**6) == pytest.approx(
        5.57, abs=0.1
    )


def test_cross_validate_table_layout_and_accuracy():
    table = cross_validate(
        [make_call(100.0), make_put(100.0)],
        REFERENCE_STATE,
        NormalRandomSource(2024),
        n_samples=500_000,
        steps=200,
    )

    assert isinstance(table, pd.DataFrame)
    assert tuple(table.columns) == CROSS_VALIDATION_COLUMNS
    assert len(table) == 6
    assert set(table["method"]) == {"black_scholes", "monte_carlo", "binomial"}
    assert (table["abs_error"] < 0.1).all()

    bs_rows = table[table["method"] == "black_scholes"].set_index("option_type")
    assert bs_rows.loc["call", "delta"] == pytest.approx(0.637, abs=1e-2)
    assert bs_rows.loc["put", "delta"] == pytest.approx(-0.363, abs=1e-2)

    mc_rows = table[table["method"] == "monte_carlo"]
    assert mc_rows["std_error"].notna().all()
    assert table.loc[table["method"] != "monte_carlo", "std_error"].isna().all()


def test_put_call_parity_gap_vanishes_for_analytical_prices():
    call = analytical_price(make_call(110.0), REFERENCE_STATE)
    put = analytical_price(make_put(110.0), REFERENCE_STATE)

    assert put_call_parity_gap(call, put, REFERENCE_STATE, 110.0) == pytest.approx(
        0.0, abs=1e-10
    )


def test_binomial_convergence_table():
    table = binomial_convergence(make_put(100.0), REFERENCE_STATE, [10, 100, 1000])

    assert list(table.columns) == ["steps", "price", "abs_error"]
    assert list(table["steps"]) == [10, 100, 1000]
    assert table["abs_error"].iloc[-1] < table["abs_error"].iloc[0]


def test_monte_carlo_convergence_is_reproducible_and_shrinks():
    kwargs = dict(sample_grid=[1_000, 100_000], seeds=list(range(10)))
    table = monte_carlo_convergence(make_call(100.0), REFERENCE_STATE, **kwargs)
    again = monte_carlo_convergence(make_call(100.0), REFERENCE_STATE, **kwargs)

    pd.testing.assert_frame_equal(table, again)
    assert table["mean_abs_error"].iloc[1] < table["mean_abs_error"].iloc[0]
    assert np.all(np.diff(table["mean_std_error"]) < 0)
    assert (table["n_seeds"] == 10).all()


def test_monte_carlo_convergence_requires_seeds():
    with pytest.raises(ValueError, match="seeds must be non-empty"):
        monte_carlo_convergence(make_call(100.0), REFERENCE_STATE, [1_000], [])
