"""Use case to refresh the totals stored with a calculation."""

from quote_rollup.application.ports.margin_lookup import (
    CategoryMarginLookupPort,
    GlobalMarginLookupPort,
)
from quote_rollup.domain.models import (
    CalculationSnapshot,
    CalculationTotals,
    TotalsRefresh,
)
from quote_rollup.domain.services import refresh_totals
from quote_rollup.infrastructure.logging.logger import get_app_logger


class RefreshCalculationTotalsUseCase:
    """Recompute items total, global margin and overall total."""

    def __init__(
        self,
        category_margin_lookup: CategoryMarginLookupPort,
        global_margin_lookup: GlobalMarginLookupPort,
        logger=None,
    ) -> None:
        self._category_margin_lookup = category_margin_lookup
        self._global_margin_lookup = global_margin_lookup
        self._logger = logger or get_app_logger()

    def execute(
        self,
        snapshot: CalculationSnapshot,
        previous: CalculationTotals | None = None,
    ) -> TotalsRefresh:
        """Return the refreshed totals of the snapshot.

        Args:
            snapshot: Calculation groups and user margin.
            previous: Totals currently stored with the calculation.

        Returns:
            TotalsRefresh: New totals and whether they differ from previous.
        """
        refresh = refresh_totals(
            snapshot.sources,
            snapshot.user_margin,
            previous,
            category_margin_lookup=self._category_margin_lookup,
            global_margin_lookup=self._global_margin_lookup,
        )
        if refresh.changed:
            self._logger.info(
                f"Calculation totals changed: items={refresh.totals.items_total}, "
                f"global_margin={refresh.totals.global_margin}, "
                f"overall={refresh.totals.overall_total}"
            )
        return refresh


__all__ = ["RefreshCalculationTotalsUseCase"]
