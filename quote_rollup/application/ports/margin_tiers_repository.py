"""Port for reading configured margin tiers."""

from typing import Protocol

from quote_rollup.domain.policies import MarginTier


class MarginTiersRepositoryPort(Protocol):
    """Port exposing read access to global and group margin tiers."""

    def fetch_global_tiers(self) -> list[MarginTier]:
        """Return the global margin tiers ordered by minimum."""

    def fetch_group_tiers(self, group_id: int) -> list[MarginTier]:
        """Return the margin tiers of a group ordered by minimum."""


__all__ = ["MarginTiersRepositoryPort"]
