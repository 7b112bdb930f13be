"""Domain service assembling roll-up results and calculation totals."""

from collections.abc import Sequence
from decimal import Decimal
from logging import Logger

from quote_rollup.domain.constants import DEFAULT_MIN_MARGIN_RATE
from quote_rollup.domain.models import (
    CalculationTotals,
    LabelResolver,
    RollupResult,
    RowKind,
    SourceGroup,
    TotalsRefresh,
)
from quote_rollup.domain.policies.margin_policy import is_margin_below
from quote_rollup.domain.policies.rounding import is_zero, round2
from quote_rollup.domain.services.adjustment import adjust_user_margin
from quote_rollup.domain.services.aggregation import (
    CategoryMarginLookup,
    aggregate_groups,
    build_empty_row,
)
from quote_rollup.domain.services.totals import (
    GlobalMarginLookup,
    compute_totals,
)
from quote_rollup.utils.decimal_utils import coerce_decimal


def compute_rollup(
    sources: Sequence[SourceGroup],
    user_margin,
    global_margin=None,
    adjust: bool = False,
    min_margin_rate=DEFAULT_MIN_MARGIN_RATE,
    *,
    category_margin_lookup: CategoryMarginLookup | None = None,
    global_margin_lookup: GlobalMarginLookup | None = None,
    resolve_label: LabelResolver | None = None,
    logger: Logger | None = None,
) -> RollupResult:
    """Compute the full roll-up of a calculation.

    Args:
        sources: Source groups in display order.
        user_margin: User margin rate.
        global_margin: Known global multiplier, or None to look it up.
        adjust: Raise the user margin when the minimum margin is missed.
        min_margin_rate: Minimum overall margin rate.
        category_margin_lookup: Group margin rate lookup.
        global_margin_lookup: Global multiplier lookup.
        resolve_label: Resolver for row descriptions.
        logger: Optional logger for diagnostics.

    Returns:
        RollupResult: Sealed rows and summary figures.
    """
    min_rate = coerce_decimal(min_margin_rate)
    if not sources:
        return RollupResult(
            rows=(build_empty_row(resolve_label),),
            min_margin_rate=min_rate,
        )

    groups = aggregate_groups(
        sources,
        category_margin_lookup,
        resolve_label=resolve_label,
        logger=logger,
    )
    rows = compute_totals(
        groups,
        user_margin,
        global_margin,
        global_margin_lookup,
        resolve_label=resolve_label,
    )
    overall = rows[-1]
    below = is_margin_below(overall.total, overall.margin_percent, min_rate)

    if adjust and below:
        total_net = next(
            row.total for row in rows if row.kind is RowKind.TOTAL_NET
        )
        rows = adjust_user_margin(rows, min_rate, logger=logger)
        overall = rows[-1]
        # A skipped adjustment leaves the flag as computed.
        below = total_net <= 0

    user_row = next(row for row in rows if row.kind is RowKind.USER_MARGIN)
    return RollupResult(
        rows=tuple(rows),
        overall_margin_rate=overall.margin_percent,
        overall_total=overall.total,
        overall_below_minimum=below,
        user_margin=user_row.margin_percent,
        min_margin_rate=min_rate,
    )


def refresh_totals(
    sources: Sequence[SourceGroup],
    user_margin,
    previous: CalculationTotals | None = None,
    *,
    category_margin_lookup: CategoryMarginLookup | None = None,
    global_margin_lookup: GlobalMarginLookup | None = None,
) -> TotalsRefresh:
    """Recompute the totals stored with a calculation.

    Args:
        sources: Source groups of the calculation.
        user_margin: User margin rate.
        previous: Totals currently stored, compared after rounding.
        category_margin_lookup: Group margin rate lookup.
        global_margin_lookup: Global multiplier lookup.

    Returns:
        TotalsRefresh: New totals and whether any of them changed.
    """
    stored = previous or CalculationTotals()
    groups = (
        aggregate_groups(sources, category_margin_lookup) if sources else []
    )
    items_total = round2(sum((row.amount for row in groups), Decimal("0")))
    groups_total = round2(sum((row.total for row in groups), Decimal("0")))

    if is_zero(groups_total):
        global_margin = Decimal("0")
    elif global_margin_lookup is None:
        global_margin = Decimal("1")
    else:
        margin = global_margin_lookup(groups_total)
        global_margin = Decimal("1") if margin is None else round2(margin)
    overall_total = round2(groups_total * global_margin)
    overall_total = round2(
        overall_total * (Decimal("1") + coerce_decimal(user_margin))
    )

    totals = CalculationTotals(
        items_total=items_total,
        global_margin=global_margin,
        overall_total=overall_total,
    )
    changed = (
        round2(stored.items_total) != items_total
        or round2(stored.global_margin) != global_margin
        or round2(stored.overall_total) != overall_total
    )
    return TotalsRefresh(totals=totals, changed=changed, previous=stored)


__all__ = ["compute_rollup", "refresh_totals"]
