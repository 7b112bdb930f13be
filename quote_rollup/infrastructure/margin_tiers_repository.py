"""SQLAlchemy-backed repository for margin tiers."""

from sqlalchemy import text

from quote_rollup.application.ports.database import DatabaseEnginePort
from quote_rollup.application.ports.margin_tiers_repository import (
    MarginTiersRepositoryPort,
)
from quote_rollup.domain.policies import MarginTier
from quote_rollup.utils.decimal_utils import coerce_decimal


class SqlAlchemyMarginTiersRepository(MarginTiersRepositoryPort):
    """Repository reading margin tiers with SQLAlchemy."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the margins engine.
        """
        self._db_port = db_port

    def fetch_global_tiers(self) -> list[MarginTier]:
        """Return global margin tiers from the database."""
        query = text(
            """
            SELECT minimum, maximum, margin
            FROM global_margins
            ORDER BY minimum
            """
        )
        engine = self._db_port.get_margins_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [self._to_tier(row) for row in rows]

    def fetch_group_tiers(self, group_id: int) -> list[MarginTier]:
        """Return the margin tiers of a group from the database."""
        query = text(
            """
            SELECT minimum, maximum, margin
            FROM group_margins
            WHERE group_id = :group_id
            ORDER BY minimum
            """
        )
        engine = self._db_port.get_margins_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, {"group_id": group_id}).all()
        return [self._to_tier(row) for row in rows]

    @staticmethod
    def _to_tier(row) -> MarginTier:
        return MarginTier(
            minimum=coerce_decimal(row.minimum),
            maximum=coerce_decimal(row.maximum),
            margin=coerce_decimal(row.margin),
        )


__all__ = ["SqlAlchemyMarginTiersRepository"]
