"""Domain service turning source groups into group rows."""

from collections.abc import Sequence
from decimal import Decimal
from logging import Logger
from typing import Callable

from quote_rollup.domain.constants import EMPTY_LABEL_KEY
from quote_rollup.domain.models import (
    GroupRow,
    KeyLabel,
    LabelResolver,
    RowKind,
    SourceGroup,
    default_label_resolver,
)
from quote_rollup.domain.policies.rounding import is_zero, round2
from quote_rollup.utils.decimal_utils import coerce_decimal


CategoryMarginLookup = Callable[[int, Decimal], Decimal | None]


def build_empty_row(resolve_label: LabelResolver | None = None) -> GroupRow:
    """Return the sentinel row of a calculation without groups."""
    resolver = resolve_label or default_label_resolver
    return GroupRow(
        kind=RowKind.EMPTY,
        description=resolver(KeyLabel(EMPTY_LABEL_KEY)),
    )


def aggregate_groups(
    sources: Sequence[SourceGroup],
    category_margin_lookup: CategoryMarginLookup | None = None,
    resolve_label: LabelResolver | None = None,
    logger: Logger | None = None,
) -> list[GroupRow]:
    """Aggregate source groups into ``GROUP`` rows.

    Sources sharing a ``group_id`` without a known margin are merged into
    the position of the first one; their margin is looked up on the merged
    amount.

    Args:
        sources: Source groups in display order.
        category_margin_lookup: Returns the margin rate of a group for an
            amount. Missing lookups and None answers mean no margin.
        resolve_label: Resolver for row descriptions.
        logger: Optional logger for merge diagnostics.

    Returns:
        list[GroupRow]: One row per (merged) group, or the single empty row.
    """
    resolver = resolve_label or default_label_resolver
    if not sources:
        return [build_empty_row(resolver)]

    merged: list[list[SourceGroup]] = []
    positions: dict[int, int] = {}
    for source in sources:
        mergeable = source.group_id is not None and not source.has_known_margin
        if mergeable and source.group_id in positions:
            merged[positions[source.group_id]].append(source)
            if logger is not None:
                logger.debug(f"Merged lines into group_id={source.group_id}")
            continue
        if mergeable:
            positions[source.group_id] = len(merged)
        merged.append([source])

    return [
        _build_group_row(members, category_margin_lookup, resolver)
        for members in merged
    ]


def _build_group_row(
    members: list[SourceGroup],
    category_margin_lookup: CategoryMarginLookup | None,
    resolver: LabelResolver,
) -> GroupRow:
    source = members[0]
    if len(members) == 1:
        amount = source.amount
    else:
        amount = round2(
            sum((member.line_sum for member in members), Decimal("0"))
        )
    if is_zero(amount):
        margin_percent = Decimal("0")
        margin_amount = Decimal("0")
    elif source.has_known_margin:
        margin_percent = coerce_decimal(source.margin_percent)
        if source.margin_amount is None:
            margin_amount = round2(margin_percent * amount)
        else:
            margin_amount = coerce_decimal(source.margin_amount)
    else:
        margin_percent = _lookup_margin(
            category_margin_lookup,
            source.group_id,
            amount,
        )
        margin_amount = round2(margin_percent * amount)
    return GroupRow(
        kind=RowKind.GROUP,
        description=resolver(source.label),
        amount=amount,
        margin_percent=margin_percent,
        margin_amount=margin_amount,
        total=amount + margin_amount,
    )


def _lookup_margin(
    category_margin_lookup: CategoryMarginLookup | None,
    group_id: int | None,
    amount: Decimal,
) -> Decimal:
    if category_margin_lookup is None or group_id is None:
        return Decimal("0")
    margin = category_margin_lookup(group_id, amount)
    if margin is None:
        return Decimal("0")
    return coerce_decimal(margin)


__all__ = ["CategoryMarginLookup", "aggregate_groups", "build_empty_row"]
