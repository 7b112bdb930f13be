"""Directional rounding and safe arithmetic for roll-up amounts.

``round2`` is used for every displayed amount. ``ceil2`` is used when solving
for a minimum user margin so the solved rate never falls short after
rounding. ``floor2`` is used when reporting the overall margin so the
reported figure never exceeds what was achieved.
"""

from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Decimal

from quote_rollup.domain.constants import EPSILON, PRECISION
from quote_rollup.utils.decimal_utils import coerce_decimal


def round2(value) -> Decimal:
    """Round half away from zero to two decimals."""
    return coerce_decimal(value).quantize(PRECISION, rounding=ROUND_HALF_UP)


def floor2(value) -> Decimal:
    """Round toward negative infinity to two decimals."""
    return coerce_decimal(value).quantize(PRECISION, rounding=ROUND_FLOOR)


def ceil2(value) -> Decimal:
    """Round toward positive infinity to two decimals."""
    return coerce_decimal(value).quantize(PRECISION, rounding=ROUND_CEILING)


def is_zero(value) -> bool:
    """Return True when the value is within EPSILON of zero."""
    return abs(coerce_decimal(value)) < EPSILON


def safe_divide(numerator, denominator) -> Decimal:
    """Divide, returning zero when the denominator is (nearly) zero.

    Args:
        numerator: Dividend.
        denominator: Divisor.

    Returns:
        Decimal: The quotient, or ``Decimal("0")`` for a zero divisor.
    """
    divisor = coerce_decimal(denominator)
    if is_zero(divisor):
        return Decimal("0")
    return coerce_decimal(numerator) / divisor


__all__ = ["round2", "floor2", "ceil2", "is_zero", "safe_divide"]
