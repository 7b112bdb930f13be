"""Margin policies: tier matching and the minimum overall margin rule."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from quote_rollup.domain.policies.rounding import floor2, is_zero, safe_divide


@dataclass(frozen=True)
class MarginTier:
    """Margin applying to amounts in ``[minimum, maximum)``."""

    minimum: Decimal
    maximum: Decimal
    margin: Decimal

    def contains(self, amount: Decimal) -> bool:
        return self.minimum <= amount < self.maximum


def find_tier_margin(
    tiers: Iterable[MarginTier],
    amount: Decimal,
) -> Decimal | None:
    """Return the margin of the first tier containing the amount.

    Args:
        tiers: Tiers in lookup order.
        amount: Amount to classify.

    Returns:
        Decimal | None: Matching margin, or None when no tier matches.
    """
    for tier in tiers:
        if tier.contains(amount):
            return tier.margin
    return None


def overall_margin_rate(overall_amount, group_amount) -> Decimal:
    """Return the overall multiplier ``floor2(1 + overall / group)``.

    A zero group amount reports ``0`` instead of a neutral multiplier.
    """
    if is_zero(group_amount):
        return Decimal("0")
    return floor2(Decimal("1") + safe_divide(overall_amount, group_amount))


def is_margin_below(
    overall_total: Decimal,
    overall_rate: Decimal,
    min_margin_rate: Decimal,
) -> bool:
    """Return True when a non-zero total misses the minimum margin."""
    if is_zero(overall_total):
        return False
    return overall_rate < Decimal("1") + min_margin_rate


__all__ = [
    "MarginTier",
    "find_tier_margin",
    "overall_margin_rate",
    "is_margin_below",
]
