"""SQLAlchemy engine for the margins database.

``MARGINS_DB_URL`` (environment or ``.env``) points at the database holding
the ``global_margins`` and ``group_margins`` tier tables.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from quote_rollup.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Return a required setting, loading ``.env`` first.

    Raises:
        RuntimeError: If the variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_margins_engine: Optional[Engine] = None


def get_margins_engine() -> Engine:
    """Return the process-wide margins engine, created on first use."""
    global _margins_engine
    if _margins_engine is None:
        _margins_engine = _create_engine(_get_env_var("MARGINS_DB_URL"))
    return _margins_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort serving the shared margins engine."""

    def get_margins_engine(self) -> Engine:
        return get_margins_engine()


__all__ = [
    "get_margins_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
