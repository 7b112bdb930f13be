"""Use case to compute the roll-up of a calculation snapshot."""

from decimal import Decimal

from quote_rollup.application.ports.margin_lookup import (
    CategoryMarginLookupPort,
    GlobalMarginLookupPort,
)
from quote_rollup.domain.constants import DEFAULT_MIN_MARGIN_RATE
from quote_rollup.domain.models import (
    CalculationSnapshot,
    LabelResolver,
    RollupResult,
)
from quote_rollup.domain.services import compute_rollup
from quote_rollup.infrastructure.logging.logger import get_app_logger


class ComputeRollupUseCase:
    """Compute roll-up rows for calculation snapshots."""

    def __init__(
        self,
        category_margin_lookup: CategoryMarginLookupPort,
        global_margin_lookup: GlobalMarginLookupPort,
        logger=None,
        min_margin_rate: Decimal = DEFAULT_MIN_MARGIN_RATE,
        adjust: bool = False,
        resolve_label: LabelResolver | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            category_margin_lookup: Port returning group margin rates.
            global_margin_lookup: Port returning global multipliers.
            logger: Optional logger compatible with logging.Logger-like API.
            min_margin_rate: Minimum overall margin rate.
            adjust: Default for raising the user margin when below minimum.
            resolve_label: Optional resolver for row descriptions.
        """
        self._category_margin_lookup = category_margin_lookup
        self._global_margin_lookup = global_margin_lookup
        self._logger = logger or get_app_logger()
        self._min_margin_rate = min_margin_rate
        self._adjust = adjust
        self._resolve_label = resolve_label

    def execute(
        self,
        snapshot: CalculationSnapshot,
        adjust: bool | None = None,
    ) -> RollupResult:
        """Return the roll-up of the snapshot.

        Args:
            snapshot: Calculation groups and margins.
            adjust: Overrides the configured adjustment default.

        Returns:
            RollupResult: Sealed rows and summary figures.
        """
        should_adjust = self._adjust if adjust is None else adjust
        result = compute_rollup(
            snapshot.sources,
            snapshot.user_margin,
            snapshot.global_margin,
            adjust=should_adjust,
            min_margin_rate=self._min_margin_rate,
            category_margin_lookup=self._category_margin_lookup,
            global_margin_lookup=self._global_margin_lookup,
            resolve_label=self._resolve_label,
            logger=self._logger,
        )

        if result.is_empty:
            self._logger.info("Roll-up computed for an empty calculation")
            return result
        self._logger.info(
            f"Roll-up computed: groups={len(result.group_rows)}, "
            f"overall_total={result.overall_total}, "
            f"overall_margin={result.overall_margin_rate}"
        )
        if result.overall_below_minimum:
            self._logger.warning(
                f"Overall margin {result.overall_margin_rate} is below "
                f"the minimum rate {result.min_margin_rate}"
            )
        return result


__all__ = ["ComputeRollupUseCase"]
