"""Exceptions raised by pricing models and engines."""

from __future__ import annotations


class PricingDomainError(ValueError):
    """Raised when pricing inputs violate a model precondition."""


class ArbitrageError(PricingDomainError):
    """Raised when lattice inputs imply a risk-neutral probability outside [0, 1]."""
