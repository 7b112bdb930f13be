"""Ports for margin lookups consumed by the roll-up engine."""

from decimal import Decimal
from typing import Protocol


class CategoryMarginLookupPort(Protocol):
    """Margin rate of a group for an amount."""

    def __call__(self, category_id: int, amount: Decimal) -> Decimal:
        """Return the margin rate, ``0`` when no tier matches."""


class GlobalMarginLookupPort(Protocol):
    """Business-wide margin multiplier for a net amount."""

    def __call__(self, amount: Decimal) -> Decimal:
        """Return the multiplier (>= 1), ``1`` when no tier matches."""


__all__ = ["CategoryMarginLookupPort", "GlobalMarginLookupPort"]
