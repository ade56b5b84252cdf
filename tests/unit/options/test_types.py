import dataclasses
import math

import numpy as np
import pytest

from option_pricer.options import (
    MarketState,
    OptionSpec,
    OptionType,
    PricingDomainError,
    make_call,
    make_put,
    normalize_option_type,
)


def test_factories_build_tagged_instruments():
    call = make_call(100.0)
    put = make_put(90.0)

    assert call.option_type == OptionType.CALL and call.is_call
    assert put.option_type == OptionType.PUT and not put.is_call
    assert put.strike == 90.0


@pytest.mark.parametrize(
    ("terminal_price", "call_value", "put_value"),
    [(0.0, 0.0, 100.0), (80.0, 0.0, 20.0), (100.0, 0.0, 0.0), (125.0, 25.0, 0.0)],
)
def test_scalar_payoffs(terminal_price, call_value, put_value):
    assert make_call(100.0).payoff(terminal_price) == call_value
    assert make_put(100.0).payoff(terminal_price) == put_value


def test_payoff_is_vectorized():
    spots = np.array([50.0, 100.0, 150.0])

    np.testing.assert_allclose(make_call(100.0).payoff(spots), [0.0, 0.0, 50.0])
    np.testing.assert_allclose(make_put(100.0).payoff(spots), [50.0, 0.0, 0.0])


def test_payoff_rejects_negative_terminal_price():
    with pytest.raises(PricingDomainError, match="terminal price"):
        make_call(100.0).payoff(-1.0)
    with pytest.raises(PricingDomainError, match="terminal price"):
        make_put(100.0).payoff(np.array([1.0, -0.5]))


@pytest.mark.parametrize("strike", [0.0, -5.0, math.inf, math.nan])
def test_invalid_strike_raises(strike: float):
    with pytest.raises(PricingDomainError):
        make_call(strike)


def test_option_spec_is_immutable_and_normalizes_labels():
    spec = OptionSpec(strike=100.0, option_type="P")

    assert spec.option_type is OptionType.PUT
    with pytest.raises(dataclasses.FrozenInstanceError):
        spec.strike = 120.0  # type: ignore[misc]


@pytest.mark.parametrize(
    ("label", "expected"),
    [("C", OptionType.CALL), ("call", OptionType.CALL), ("P", OptionType.PUT), (OptionType.PUT, OptionType.PUT)],
)
def test_normalize_option_type(label, expected):
    assert normalize_option_type(label) is expected


def test_normalize_option_type_rejects_unknown_label():
    with pytest.raises(ValueError, match="option_type must be one of"):
        normalize_option_type("straddle")  # type: ignore[arg-type]


def test_market_state_discount_factor():
    state = MarketState(spot=100.0, volatility=0.2, rate=0.05, maturity=2.0)
    assert state.discount_factor == pytest.approx(math.exp(-0.1))


def test_market_state_allows_negative_rate_and_zero_volatility():
    state = MarketState(spot=100.0, volatility=0.0, rate=-0.01, maturity=0.5)
    assert state.rate == -0.01


@pytest.mark.parametrize(
    ("kwargs", "match"),
    [
        ({"spot": 0.0}, "spot must be > 0"),
        ({"volatility": -0.1}, "volatility must be >= 0"),
        ({"maturity": 0.0}, "maturity must be > 0"),
        ({"rate": math.nan}, "rate must be finite"),
    ],
)
def test_market_state_validation(kwargs, match):
    base = {"spot": 100.0, "volatility": 0.2, "rate": 0.05, "maturity": 1.0}
    with pytest.raises(PricingDomainError, match=match):
        MarketState(**{**base, **kwargs})
