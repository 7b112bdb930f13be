"""Factory helpers to select the margin tiers repository backend."""

from quote_rollup.application.ports.database import DatabaseEnginePort
from quote_rollup.application.ports.margin_tiers_repository import (
    MarginTiersRepositoryPort,
)
from quote_rollup.infrastructure.file_margin_tiers_repository import (
    FileMarginTiersRepository,
)
from quote_rollup.infrastructure.logging.logger import get_app_logger
from quote_rollup.infrastructure.margin_tiers_repository import (
    SqlAlchemyMarginTiersRepository,
)
from quote_rollup.infrastructure.settings import RollupSettings


def create_margin_tiers_repository(
    db_port: DatabaseEnginePort,
    logger=None,
    settings: RollupSettings | None = None,
) -> MarginTiersRepositoryPort:
    """Return a margin tiers repository based on configuration.

    Args:
        db_port: Port providing access to the margins engine (SQL backend).
        logger: Optional logger compatible with logging.Logger-like API.
        settings: Optional settings; read from the environment when omitted.

    Returns:
        MarginTiersRepositoryPort: Concrete repository implementation.

    Raises:
        RuntimeError: If the file backend has no tier file.
        ValueError: If the backend is unknown.
    """
    resolved_logger = logger or get_app_logger()
    resolved_settings = settings or RollupSettings.from_env()
    backend = resolved_settings.margins_backend

    if backend == "sqlalchemy":
        return SqlAlchemyMarginTiersRepository(db_port)

    if backend == "file":
        if resolved_settings.margins_file is None:
            raise RuntimeError("File backend requires a MARGINS_FILE path.")
        resolved_logger.info(
            f"Reading margin tiers from {resolved_settings.margins_file}"
        )
        return FileMarginTiersRepository(resolved_settings.margins_file)

    raise ValueError(
        "Unsupported margins backend: "
        f"{backend}. Expected sqlalchemy or file."
    )


__all__ = ["create_margin_tiers_repository"]
