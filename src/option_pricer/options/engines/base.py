"""Interface for option-pricing engines."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from option_pricer.options.types import MarketState, OptionSpec


@runtime_checkable
class PriceModel(Protocol):
    """Minimum pricing capability shared by every engine."""

    def price(self, spec: OptionSpec, state: MarketState) -> float:
        """Return option value for one contract."""


@runtime_checkable
class DeltaModel(Protocol):
    """Optional extension for engines that provide an exact spot delta."""

    def delta(self, spec: OptionSpec, state: MarketState) -> float:
        """Return the spot delta for one contract."""
