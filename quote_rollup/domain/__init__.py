"""Domain package for quotation roll-up rules and models."""

from .constants import DEFAULT_MIN_MARGIN_RATE
from .models import (
    CalculationSnapshot,
    CalculationTotals,
    EntityLabel,
    GroupRow,
    KeyLabel,
    RollupResult,
    RowKind,
    SourceGroup,
    TotalsRefresh,
)
from .policies import MarginTier, find_tier_margin, is_margin_below
from .services import (
    adjust_user_margin,
    aggregate_groups,
    compute_rollup,
    compute_totals,
    refresh_totals,
)

__all__ = [
    "DEFAULT_MIN_MARGIN_RATE",
    "CalculationSnapshot",
    "CalculationTotals",
    "EntityLabel",
    "GroupRow",
    "KeyLabel",
    "RollupResult",
    "RowKind",
    "SourceGroup",
    "TotalsRefresh",
    "MarginTier",
    "find_tier_margin",
    "is_margin_below",
    "adjust_user_margin",
    "aggregate_groups",
    "compute_rollup",
    "compute_totals",
    "refresh_totals",
]
