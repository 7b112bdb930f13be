"""Domain models package."""

from .calculation import (
    CalculationSnapshot,
    CalculationTotals,
    RollupResult,
    SourceGroup,
    TotalsRefresh,
)
from .rows import (
    EntityLabel,
    GroupRow,
    KeyLabel,
    Label,
    LabelResolver,
    RowKind,
    default_label_resolver,
)

__all__ = [
    "CalculationSnapshot",
    "CalculationTotals",
    "RollupResult",
    "SourceGroup",
    "TotalsRefresh",
    "EntityLabel",
    "GroupRow",
    "KeyLabel",
    "Label",
    "LabelResolver",
    "RowKind",
    "default_label_resolver",
]
