"""Composition root for wiring infrastructure adapters."""

from quote_rollup.application.ports.database import DatabaseEnginePort
from quote_rollup.application.ports.margin_lookup import (
    CategoryMarginLookupPort,
    GlobalMarginLookupPort,
)
from quote_rollup.application.ports.margin_tiers_repository import (
    MarginTiersRepositoryPort,
)
from quote_rollup.application.use_cases.compute_rollup import (
    ComputeRollupUseCase,
)
from quote_rollup.application.use_cases.refresh_calculation_totals import (
    RefreshCalculationTotalsUseCase,
)
from quote_rollup.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from quote_rollup.infrastructure.logging.logger import get_app_logger
from quote_rollup.infrastructure.margin_tiers_repository_factory import (
    create_margin_tiers_repository,
)
from quote_rollup.infrastructure.settings import RollupSettings
from quote_rollup.infrastructure.tiered_margin_lookup import (
    TieredCategoryMarginLookup,
    TieredGlobalMarginLookup,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_margin_tiers_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: RollupSettings | None = None,
) -> MarginTiersRepositoryPort:
    """Return the configured margin tiers repository."""
    resolved_db = db_port or build_database_adapter()
    return create_margin_tiers_repository(
        resolved_db,
        logger=get_app_logger(),
        settings=settings or RollupSettings.from_env(),
    )


def build_margin_lookups(
    repository: MarginTiersRepositoryPort | None = None,
) -> tuple[CategoryMarginLookupPort, GlobalMarginLookupPort]:
    """Return the group and global margin lookups."""
    resolved_repository = repository or build_margin_tiers_repository()
    logger = get_app_logger()
    return (
        TieredCategoryMarginLookup(resolved_repository, logger=logger),
        TieredGlobalMarginLookup(resolved_repository, logger=logger),
    )


def build_compute_rollup_use_case(
    settings: RollupSettings | None = None,
    repository: MarginTiersRepositoryPort | None = None,
) -> ComputeRollupUseCase:
    """Return the roll-up use case wired with configured lookups."""
    resolved_settings = settings or RollupSettings.from_env()
    category_lookup, global_lookup = build_margin_lookups(
        repository
        or build_margin_tiers_repository(settings=resolved_settings)
    )
    return ComputeRollupUseCase(
        category_margin_lookup=category_lookup,
        global_margin_lookup=global_lookup,
        logger=get_app_logger(),
        min_margin_rate=resolved_settings.min_margin_rate,
        adjust=resolved_settings.adjust,
    )


def build_refresh_totals_use_case(
    repository: MarginTiersRepositoryPort | None = None,
) -> RefreshCalculationTotalsUseCase:
    """Return the totals refresh use case wired with configured lookups."""
    category_lookup, global_lookup = build_margin_lookups(repository)
    return RefreshCalculationTotalsUseCase(
        category_margin_lookup=category_lookup,
        global_margin_lookup=global_lookup,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_margin_tiers_repository",
    "build_margin_lookups",
    "build_compute_rollup_use_case",
    "build_refresh_totals_use_case",
]
