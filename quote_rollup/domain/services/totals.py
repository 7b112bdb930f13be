"""Domain service computing the derived rows of a roll-up."""

from collections.abc import Sequence
from decimal import Decimal
from typing import Callable

from quote_rollup.domain.constants import (
    GLOBAL_MARGIN_LABEL_KEY,
    OVERALL_TOTAL_LABEL_KEY,
    TOTAL_GROUP_LABEL_KEY,
    TOTAL_NET_LABEL_KEY,
    USER_MARGIN_LABEL_KEY,
)
from quote_rollup.domain.models import (
    GroupRow,
    KeyLabel,
    LabelResolver,
    RowKind,
    default_label_resolver,
)
from quote_rollup.domain.policies.margin_policy import overall_margin_rate
from quote_rollup.domain.policies.rounding import is_zero, round2, safe_divide
from quote_rollup.utils.decimal_utils import coerce_decimal


GlobalMarginLookup = Callable[[Decimal], Decimal]

ONE = Decimal("1")
ZERO = Decimal("0")


def compute_totals(
    groups: Sequence[GroupRow],
    user_margin,
    global_margin=None,
    global_margin_lookup: GlobalMarginLookup | None = None,
    resolve_label: LabelResolver | None = None,
) -> list[GroupRow]:
    """Append the total group, global margin, total net, user margin and
    overall total rows to the group rows.

    Args:
        groups: Aggregated ``GROUP`` rows.
        user_margin: User margin rate.
        global_margin: Known global multiplier; None to look it up from the
            net total.
        global_margin_lookup: Returns the global multiplier for a net total.
        resolve_label: Resolver for row descriptions.

    Returns:
        list[GroupRow]: The group rows followed by the five derived rows.
    """
    resolver = resolve_label or default_label_resolver
    user_rate = coerce_decimal(user_margin)
    rows = list(groups)

    group_amount = round2(sum((row.amount for row in groups), ZERO))
    group_margin = round2(sum((row.margin_amount for row in groups), ZERO))
    total_net = group_amount + group_margin
    rows.append(
        GroupRow(
            kind=RowKind.TOTAL_GROUP,
            description=resolver(KeyLabel(TOTAL_GROUP_LABEL_KEY)),
            amount=group_amount,
            margin_percent=_average_multiplier(group_margin, group_amount),
            margin_amount=group_margin,
            total=total_net,
        )
    )

    global_rate = _resolve_global_margin(
        total_net,
        global_margin,
        global_margin_lookup,
    )
    global_amount = round2(total_net * (global_rate - ONE))
    total_net += global_amount
    rows.append(
        GroupRow(
            kind=RowKind.GLOBAL_MARGIN,
            description=resolver(KeyLabel(GLOBAL_MARGIN_LABEL_KEY)),
            amount=global_rate,
            margin_percent=global_rate,
            total=global_amount,
        )
    )
    rows.append(
        GroupRow(
            kind=RowKind.TOTAL_NET,
            description=resolver(KeyLabel(TOTAL_NET_LABEL_KEY)),
            amount=total_net,
            total=total_net,
        )
    )

    user_amount = round2(total_net * user_rate)
    rows.append(
        GroupRow(
            kind=RowKind.USER_MARGIN,
            description=resolver(KeyLabel(USER_MARGIN_LABEL_KEY)),
            amount=user_rate,
            margin_percent=user_rate,
            total=user_amount,
        )
    )

    overall_total = total_net + user_amount
    overall_amount = overall_total - group_amount
    rows.append(
        GroupRow(
            kind=RowKind.OVERALL_TOTAL,
            description=resolver(KeyLabel(OVERALL_TOTAL_LABEL_KEY)),
            amount=group_amount,
            margin_percent=overall_margin_rate(overall_amount, group_amount),
            margin_amount=overall_amount,
            total=overall_total,
        )
    )
    return rows


def _average_multiplier(group_margin: Decimal, group_amount: Decimal) -> Decimal:
    if is_zero(group_amount):
        return ZERO
    return ONE + round2(safe_divide(group_margin, group_amount))


def _resolve_global_margin(
    total_net: Decimal,
    global_margin,
    global_margin_lookup: GlobalMarginLookup | None,
) -> Decimal:
    if global_margin is not None:
        return coerce_decimal(global_margin)
    if is_zero(total_net):
        return ZERO
    if global_margin_lookup is None:
        return ONE
    margin = global_margin_lookup(total_net)
    return ONE if margin is None else coerce_decimal(margin)


__all__ = ["GlobalMarginLookup", "compute_totals"]
