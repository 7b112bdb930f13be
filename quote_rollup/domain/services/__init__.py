"""Domain services package."""

from .adjustment import adjust_user_margin
from .aggregation import CategoryMarginLookup, aggregate_groups
from .rollup import compute_rollup, refresh_totals
from .totals import GlobalMarginLookup, compute_totals

__all__ = [
    "CategoryMarginLookup",
    "GlobalMarginLookup",
    "adjust_user_margin",
    "aggregate_groups",
    "compute_rollup",
    "compute_totals",
    "refresh_totals",
]
