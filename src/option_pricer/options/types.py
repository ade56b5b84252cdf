"""Shared option-pricing dataclasses and aliases."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, TypeAlias

import numpy as np

from option_pricer.options.errors import PricingDomainError


class OptionType(StrEnum):
    """Canonical option side labels used across pricing code."""

    CALL = "call"
    PUT = "put"


# Tolerant input type accepted at system boundaries (config files/tests).
OptionTypeInput: TypeAlias = OptionType | Literal["call", "put", "C", "P"]


def normalize_option_type(option_type: OptionTypeInput) -> OptionType:
    """Normalize option type labels to `OptionType`."""
    if option_type in ("call", "C"):
        return OptionType.CALL
    if option_type in ("put", "P"):
        return OptionType.PUT
    raise ValueError("option_type must be one of {'call', 'put', 'C', 'P'}")


def require_finite(**values: float) -> None:
    """Raise `PricingDomainError` for the first NaN or infinite keyword value."""
    for name, value in values.items():
        if not math.isfinite(value):
            raise PricingDomainError(f"{name} must be finite, got {value!r}")


@dataclass(frozen=True)
class OptionSpec:
    """Contract terms of one European option.

    The instrument is a closed two-variant type: `option_type` selects the
    call or put payoff, `strike` is fixed for the lifetime of the object.
    """

    strike: float
    option_type: OptionTypeInput = OptionType.CALL

    def __post_init__(self) -> None:
        require_finite(strike=self.strike)
        if self.strike <= 0:
            raise PricingDomainError("strike must be > 0")
        # Frozen dataclass: canonicalize the label in place once.
        object.__setattr__(self, "option_type", normalize_option_type(self.option_type))

    @property
    def is_call(self) -> bool:
        return self.option_type == OptionType.CALL

    def payoff(self, terminal_price: float | np.ndarray) -> float | np.ndarray:
        """Settlement amount for a terminal underlying price (scalar or array).

        Raises:
            PricingDomainError: If any terminal price is negative.
        """
        spot = np.asarray(terminal_price, dtype=float)
        if np.any(spot < 0):
            raise PricingDomainError("terminal price must be >= 0")

        if self.is_call:
            value = np.maximum(spot - self.strike, 0.0)
        else:
            value = np.maximum(self.strike - spot, 0.0)

        if value.ndim == 0:
            return float(value)
        return value


def make_call(strike: float) -> OptionSpec:
    """Build a European call with the given strike."""
    return OptionSpec(strike=strike, option_type=OptionType.CALL)


def make_put(strike: float) -> OptionSpec:
    """Build a European put with the given strike."""
    return OptionSpec(strike=strike, option_type=OptionType.PUT)


@dataclass(frozen=True)
class MarketState:
    """Market inputs shared by every pricing engine.

    Units:
    - `spot`: currency units
    - `volatility`: annualized, in decimals (0.20 = 20%)
    - `rate`: continuously-compounded risk-free rate, may be negative
    - `maturity`: time to expiry in years
    """

    spot: float
    volatility: float
    rate: float = 0.0
    maturity: float = 1.0

    def __post_init__(self) -> None:
        require_finite(
            spot=self.spot,
            volatility=self.volatility,
            rate=self.rate,
            maturity=self.maturity,
        )
        if self.spot <= 0:
            raise PricingDomainError("spot must be > 0")
        if self.volatility < 0:
            raise PricingDomainError("volatility must be >= 0")
        if self.maturity <= 0:
            raise PricingDomainError("maturity must be > 0")

    @property
    def discount_factor(self) -> float:
        """Risk-free discount factor `exp(-r * T)` over the full horizon."""
        return math.exp(-self.rate * self.maturity)
