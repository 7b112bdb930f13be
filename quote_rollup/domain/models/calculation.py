"""Domain models for calculation snapshots and roll-up results."""

from dataclasses import dataclass, field
from decimal import Decimal

from quote_rollup.domain.models.rows import GroupRow, Label, RowKind
from quote_rollup.domain.policies.rounding import round2
from quote_rollup.utils.decimal_utils import coerce_decimal


@dataclass(frozen=True)
class SourceGroup:
    """Priced group of line items entering a roll-up.

    Attributes:
        label: Group label.
        line_totals: Totals of the group's line items.
        group_id: Identifier used to look up the group margin.
        margin_percent: Already known margin rate, skips the lookup.
        margin_amount: Already known margin amount.
    """

    label: Label
    line_totals: tuple[Decimal, ...] = ()
    group_id: int | None = None
    margin_percent: Decimal | None = None
    margin_amount: Decimal | None = None

    @property
    def line_sum(self) -> Decimal:
        """Unrounded sum of the line totals."""
        return sum(
            (coerce_decimal(value) for value in self.line_totals),
            Decimal("0"),
        )

    @property
    def amount(self) -> Decimal:
        return round2(self.line_sum)

    @property
    def has_known_margin(self) -> bool:
        return self.margin_percent is not None


@dataclass(frozen=True)
class CalculationSnapshot:
    """Immutable input of a roll-up request.

    Attributes:
        sources: Ordered source groups.
        user_margin: User margin rate (``0.10`` for 10%).
        global_margin: Known global multiplier, or None to look it up.
    """

    sources: tuple[SourceGroup, ...] = ()
    user_margin: Decimal = Decimal("0")
    global_margin: Decimal | None = None


@dataclass(frozen=True)
class RollupResult:
    """Sealed roll-up consumed by presentation layers.

    Attributes:
        rows: Group rows followed by the derived rows.
        overall_margin_rate: Overall multiplier reported on the overall row.
        overall_total: Final quoted total.
        overall_below_minimum: Whether the overall margin misses the policy.
        user_margin: Effective user margin rate, adjusted when requested.
        min_margin_rate: Minimum margin rate the result was checked against.
    """

    rows: tuple[GroupRow, ...]
    overall_margin_rate: Decimal = Decimal("0")
    overall_total: Decimal = Decimal("0")
    overall_below_minimum: bool = False
    user_margin: Decimal = Decimal("0")
    min_margin_rate: Decimal = Decimal("0")

    @property
    def is_empty(self) -> bool:
        return len(self.rows) == 1 and self.rows[0].kind is RowKind.EMPTY

    @property
    def group_rows(self) -> tuple[GroupRow, ...]:
        return tuple(row for row in self.rows if row.kind is RowKind.GROUP)

    def row(self, kind: RowKind) -> GroupRow | None:
        """Return the first row of the given kind, if any."""
        return next((row for row in self.rows if row.kind is kind), None)

    def to_dict(self) -> dict[str, object]:
        """Return the legacy parameters payload."""
        return {
            "result": True,
            "overall_margin": self.overall_margin_rate,
            "overall_total": self.overall_total,
            "overall_below": self.overall_below_minimum,
            "user_margin": self.user_margin,
            "min_margin": self.min_margin_rate,
            "groups": [row.to_dict() for row in self.rows],
        }


@dataclass(frozen=True)
class CalculationTotals:
    """Summary totals persisted with a calculation."""

    items_total: Decimal = Decimal("0")
    global_margin: Decimal = Decimal("0")
    overall_total: Decimal = Decimal("0")


@dataclass(frozen=True)
class TotalsRefresh:
    """Recomputed calculation totals and whether they moved."""

    totals: CalculationTotals
    changed: bool
    previous: CalculationTotals = field(default_factory=CalculationTotals)


__all__ = [
    "SourceGroup",
    "CalculationSnapshot",
    "RollupResult",
    "CalculationTotals",
    "TotalsRefresh",
]
