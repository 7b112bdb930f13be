"""JSON file repository for margin tiers.

Expected layout::

    {
        "global_margins": [{"minimum": 0, "maximum": 10000, "margin": 1.1}],
        "group_margins": {"1": [{"minimum": 0, "maximum": 500, "margin": 0.2}]}
    }
"""

import json
from pathlib import Path

from quote_rollup.application.ports.margin_tiers_repository import (
    MarginTiersRepositoryPort,
)
from quote_rollup.domain.policies import MarginTier
from quote_rollup.utils.decimal_utils import coerce_decimal


class FileMarginTiersRepository(MarginTiersRepositoryPort):
    """Repository reading margin tiers from a JSON document."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._document: dict | None = None

    def fetch_global_tiers(self) -> list[MarginTier]:
        """Return global margin tiers from the file."""
        return self._to_tiers(self._load().get("global_margins", []))

    def fetch_group_tiers(self, group_id: int) -> list[MarginTier]:
        """Return the margin tiers of a group from the file."""
        groups = self._load().get("group_margins", {})
        return self._to_tiers(groups.get(str(group_id), []))

    def _load(self) -> dict:
        if self._document is None:
            with self._path.open(encoding="utf-8") as handle:
                document = json.load(handle, parse_float=coerce_decimal)
            if not isinstance(document, dict):
                raise ValueError(
                    f"Margins file {self._path} must hold a JSON object"
                )
            self._document = document
        return self._document

    @staticmethod
    def _to_tiers(entries: list[dict]) -> list[MarginTier]:
        tiers = [
            MarginTier(
                minimum=coerce_decimal(entry["minimum"]),
                maximum=coerce_decimal(entry["maximum"]),
                margin=coerce_decimal(entry["margin"]),
            )
            for entry in entries
        ]
        return sorted(tiers, key=lambda tier: tier.minimum)


__all__ = ["FileMarginTiersRepository"]
