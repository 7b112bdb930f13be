"""Domain service raising the user margin to meet the minimum margin."""

from collections.abc import Sequence
from dataclasses import replace
from decimal import Decimal
from logging import Logger

from quote_rollup.domain.models import GroupRow, RowKind
from quote_rollup.domain.policies.margin_policy import overall_margin_rate
from quote_rollup.domain.policies.rounding import ceil2, round2
from quote_rollup.utils.decimal_utils import coerce_decimal


MARGIN_STEP = Decimal("0.01")


def adjust_user_margin(
    rows: Sequence[GroupRow],
    min_margin_rate,
    logger: Logger | None = None,
) -> list[GroupRow]:
    """Return rows whose user margin is the smallest meeting the minimum.

    The solved rate is rounded up to the hundredth, then raised one
    hundredth at a time while the rounded user amount still leaves the
    overall total under ``group_amount * (1 + min_margin_rate)``. Only the
    user margin and overall total rows are replaced.

    Args:
        rows: Rows produced by ``compute_totals``.
        min_margin_rate: Minimum overall margin rate.
        logger: Optional logger for skipped adjustments.

    Returns:
        list[GroupRow]: Adjusted rows, or a copy of the input when the net
        total is not positive.
    """
    adjusted = list(rows)
    indexes = {row.kind: index for index, row in enumerate(adjusted)}
    total_net = adjusted[indexes[RowKind.TOTAL_NET]].total
    group_amount = adjusted[indexes[RowKind.TOTAL_GROUP]].amount

    if total_net <= 0:
        if logger is not None:
            logger.warning(
                f"User margin not adjusted: net total is {total_net}"
            )
        return adjusted

    target = group_amount * (Decimal("1") + coerce_decimal(min_margin_rate))
    user_margin = ceil2((target - total_net) / total_net)
    user_amount = round2(total_net * user_margin)
    while total_net + user_amount < target:
        user_margin += MARGIN_STEP
        user_amount = round2(total_net * user_margin)

    user_index = indexes[RowKind.USER_MARGIN]
    adjusted[user_index] = replace(
        adjusted[user_index],
        amount=user_margin,
        margin_percent=user_margin,
        total=user_amount,
    )

    overall_total = total_net + user_amount
    overall_amount = overall_total - group_amount
    overall_index = indexes[RowKind.OVERALL_TOTAL]
    adjusted[overall_index] = replace(
        adjusted[overall_index],
        margin_percent=overall_margin_rate(overall_amount, group_amount),
        margin_amount=overall_amount,
        total=overall_total,
    )
    return adjusted


__all__ = ["adjust_user_margin"]
