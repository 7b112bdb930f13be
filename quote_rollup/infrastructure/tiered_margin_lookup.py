"""Margin lookups backed by a margin tiers repository.

Tiers are read once per lookup instance. A failing repository never breaks
a roll-up: the failure is logged and the neutral margin is returned (no
markup for groups, a multiplier of one for the global margin).
"""

from decimal import Decimal, InvalidOperation

from sqlalchemy.exc import SQLAlchemyError

from quote_rollup.application.ports.margin_lookup import (
    CategoryMarginLookupPort,
    GlobalMarginLookupPort,
)
from quote_rollup.application.ports.margin_tiers_repository import (
    MarginTiersRepositoryPort,
)
from quote_rollup.domain.policies import MarginTier, find_tier_margin
from quote_rollup.infrastructure.logging.logger import get_app_logger

_READ_ERRORS = (
    SQLAlchemyError,
    RuntimeError,
    OSError,
    ValueError,
    KeyError,
    InvalidOperation,
)


class TieredCategoryMarginLookup(CategoryMarginLookupPort):
    """Group margin rate lookup over per-group tiers."""

    def __init__(self, repository: MarginTiersRepositoryPort, logger=None):
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._tiers: dict[int, list[MarginTier]] = {}

    def __call__(self, category_id: int, amount: Decimal) -> Decimal:
        tiers = self._tiers.get(category_id)
        if tiers is None:
            try:
                tiers = self._repository.fetch_group_tiers(category_id)
            except _READ_ERRORS as exc:
                self._logger.warning(
                    f"Group margins unavailable for group_id={category_id}: {exc}"
                )
                return Decimal("0")
            self._tiers[category_id] = tiers
        margin = find_tier_margin(tiers, amount)
        return Decimal("0") if margin is None else margin


class TieredGlobalMarginLookup(GlobalMarginLookupPort):
    """Global margin multiplier lookup over global tiers."""

    def __init__(self, repository: MarginTiersRepositoryPort, logger=None):
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._tiers: list[MarginTier] | None = None

    def __call__(self, amount: Decimal) -> Decimal:
        if self._tiers is None:
            try:
                self._tiers = self._repository.fetch_global_tiers()
            except _READ_ERRORS as exc:
                self._logger.warning(f"Global margins unavailable: {exc}")
                return Decimal("1")
        margin = find_tier_margin(self._tiers, amount)
        if margin is None:
            self._logger.debug(f"No global margin tier for amount={amount}")
            return Decimal("1")
        return margin


__all__ = ["TieredCategoryMarginLookup", "TieredGlobalMarginLookup"]
