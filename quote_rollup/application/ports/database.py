"""Database ports for the roll-up engine.

This module defines the application-layer protocol for accessing the
database holding margin tiers. Infrastructure implementations are expected
to provide concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the margins database.

    Application code can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_margins_engine(self) -> Engine:
        """Get the engine for the margins database.

        Returns:
            Engine: SQLAlchemy engine connected to the margins database.
        """


__all__ = ["DatabaseEnginePort"]
