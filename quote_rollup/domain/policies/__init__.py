"""Domain policies package."""

from .margin_policy import (
    MarginTier,
    find_tier_margin,
    is_margin_below,
    overall_margin_rate,
)
from .rounding import ceil2, floor2, is_zero, round2, safe_divide

__all__ = [
    "MarginTier",
    "find_tier_margin",
    "is_margin_below",
    "overall_margin_rate",
    "ceil2",
    "floor2",
    "is_zero",
    "round2",
    "safe_divide",
]
