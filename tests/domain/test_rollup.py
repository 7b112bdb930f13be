"""Tests for the roll-up and totals refresh services."""

from decimal import Decimal
from unittest.mock import MagicMock

from quote_rollup.domain.models import (
    CalculationTotals,
    EntityLabel,
    RowKind,
    SourceGroup,
)
from quote_rollup.domain.services.rollup import compute_rollup, refresh_totals


def _source(amount: str, **kwargs) -> SourceGroup:
    return SourceGroup(
        label=EntityLabel("Group"),
        line_totals=(Decimal(amount),),
        **kwargs,
    )


def test_empty_calculation_returns_empty_row_only() -> None:
    """No groups produce a single empty row and zero figures."""
    result = compute_rollup(
        [],
        Decimal("0.30"),
        min_margin_rate=Decimal("0.12"),
    )

    assert result.is_empty
    assert len(result.rows) == 1
    assert result.rows[0].kind is RowKind.EMPTY
    assert result.overall_total == Decimal("0")
    assert result.overall_margin_rate == Decimal("0")
    assert result.overall_below_minimum is False
    assert result.user_margin == Decimal("0")
    assert result.min_margin_rate == Decimal("0.12")


def test_known_cascade_summary() -> None:
    """Summary scalars come from the overall total row."""
    result = compute_rollup(
        [_source("1000", margin_percent=Decimal("0.10"))],
        Decimal("0.20"),
        Decimal("1.05"),
        min_margin_rate=Decimal("0.10"),
    )

    assert len(result.rows) == 6
    assert result.overall_total == Decimal("1386.00")
    assert result.overall_margin_rate == Decimal("1.38")
    assert result.overall_below_minimum is False
    assert result.user_margin == Decimal("0.20")


def test_below_minimum_is_flagged_without_adjustment() -> None:
    """A low margin is reported, not corrected, unless requested."""
    result = compute_rollup(
        [_source("100", margin_percent=Decimal("0"))],
        Decimal("0"),
        Decimal("1.0"),
        min_margin_rate=Decimal("0.10"),
    )

    assert result.overall_total == Decimal("100.00")
    assert result.overall_margin_rate == Decimal("1.00")
    assert result.overall_below_minimum is True
    assert result.user_margin == Decimal("0")


def test_adjustment_raises_user_margin_and_clears_flag() -> None:
    """Adjusting reports the adjusted user margin and overall figures."""
    result = compute_rollup(
        [_source("1000", margin_percent=Decimal("0"))],
        Decimal("0"),
        Decimal("1"),
        adjust=True,
        min_margin_rate=Decimal("0.10"),
    )

    assert result.overall_below_minimum is False
    assert result.user_margin == Decimal("0.10")
    assert result.overall_total == Decimal("1100.00")
    assert result.overall_margin_rate == Decimal("1.10")
    assert result.row(RowKind.USER_MARGIN).total == Decimal("100.00")


def test_adjustment_is_not_applied_when_margin_is_met() -> None:
    """Meeting the minimum keeps the requested user margin."""
    result = compute_rollup(
        [_source("1000", margin_percent=Decimal("0.10"))],
        Decimal("0.20"),
        Decimal("1.05"),
        adjust=True,
        min_margin_rate=Decimal("0.10"),
    )

    assert result.user_margin == Decimal("0.20")
    assert result.overall_total == Decimal("1386.00")


def test_zero_amount_calculation_is_safe() -> None:
    """Zero amounts give a zero overall rate and no flag."""
    result = compute_rollup(
        [_source("0", group_id=1)],
        Decimal("0.25"),
        adjust=True,
        category_margin_lookup=MagicMock(return_value=Decimal("0.5")),
        global_margin_lookup=MagicMock(return_value=Decimal("1.2")),
    )

    assert result.overall_margin_rate == Decimal("0")
    assert result.overall_total == Decimal("0")
    assert result.overall_below_minimum is False


def test_lookups_drive_ad_hoc_rollup() -> None:
    """Group and global margins come from the lookups when unknown."""
    category_lookup = MagicMock(return_value=Decimal("0.10"))
    global_lookup = MagicMock(return_value=Decimal("1.05"))

    result = compute_rollup(
        [_source("600", group_id=1), _source("400", group_id=1)],
        Decimal("0.20"),
        category_margin_lookup=category_lookup,
        global_margin_lookup=global_lookup,
    )

    category_lookup.assert_called_once_with(1, Decimal("1000.00"))
    global_lookup.assert_called_once_with(Decimal("1100.00"))
    assert len(result.group_rows) == 1
    assert result.overall_total == Decimal("1386.00")


def test_compute_rollup_is_idempotent() -> None:
    """Identical inputs give identical results."""
    sources = [
        _source("123.45", group_id=1),
        _source("67.89", margin_percent=Decimal("0.07")),
    ]

    def run():
        return compute_rollup(
            sources,
            Decimal("0.05"),
            adjust=True,
            min_margin_rate=Decimal("0.30"),
            category_margin_lookup=lambda group_id, amount: Decimal("0.12"),
            global_margin_lookup=lambda amount: Decimal("1.03"),
        )

    first = run()
    second = run()

    assert first == second
    assert repr(first.to_dict()) == repr(second.to_dict())


def test_refresh_totals_detects_changes() -> None:
    """Refreshed totals are compared with the stored ones."""
    sources = [_source("1000", group_id=1)]
    kwargs = {
        "category_margin_lookup": lambda group_id, amount: Decimal("0.10"),
        "global_margin_lookup": lambda amount: Decimal("1.05"),
    }

    refresh = refresh_totals(sources, Decimal("0.20"), **kwargs)

    assert refresh.changed is True
    assert refresh.totals == CalculationTotals(
        items_total=Decimal("1000.00"),
        global_margin=Decimal("1.05"),
        overall_total=Decimal("1386.00"),
    )

    unchanged = refresh_totals(
        sources,
        Decimal("0.20"),
        CalculationTotals(
            items_total=Decimal("1000"),
            global_margin=Decimal("1.049"),
            overall_total=Decimal("1386.001"),
        ),
        **kwargs,
    )
    assert unchanged.changed is False


def test_refresh_totals_of_empty_calculation() -> None:
    """An empty calculation refreshes to zeros."""
    refresh = refresh_totals([], Decimal("0.20"))

    assert refresh.totals == CalculationTotals()
    assert refresh.changed is False


def test_adjustment_clears_flag_for_fine_grained_minimum() -> None:
    """A minimum with three decimals is met even if the floored rate lags."""
    result = compute_rollup(
        [
            _source(
                "1000",
                margin_percent=Decimal("0.095"),
                margin_amount=Decimal("95"),
            )
        ],
        Decimal("0"),
        Decimal("1"),
        adjust=True,
        min_margin_rate=Decimal("0.105"),
    )

    assert result.user_margin == Decimal("0.01")
    assert result.overall_total == Decimal("1105.95")
    assert result.overall_margin_rate == Decimal("1.10")
    assert result.overall_below_minimum is False


def test_skipped_adjustment_keeps_flag() -> None:
    """A non-positive net total cannot be adjusted and stays flagged."""
    logger = MagicMock()

    result = compute_rollup(
        [_source("-100")],
        Decimal("0"),
        Decimal("1"),
        adjust=True,
        min_margin_rate=Decimal("0.10"),
        logger=logger,
    )

    assert result.overall_below_minimum is True
    assert result.user_margin == Decimal("0")
    logger.warning.assert_called_once()


def test_refresh_totals_treats_missing_global_margin_as_neutral() -> None:
    """A lookup without an answer keeps the groups total unchanged."""
    refresh = refresh_totals(
        [_source("1000")],
        Decimal("0.20"),
        global_margin_lookup=lambda amount: None,
    )

    assert refresh.totals.global_margin == Decimal("1")
    assert refresh.totals.overall_total == Decimal("1200.00")
    rollup = compute_rollup(
        [_source("1000")],
        Decimal("0.20"),
        global_margin_lookup=lambda amount: None,
    )
    assert rollup.overall_total == refresh.totals.overall_total
