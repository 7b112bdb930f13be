"""Load calculation snapshots from JSON documents.

Expected layout::

    {
        "user_margin": 0.1,
        "global_margin": null,
        "groups": [
            {"description": "Printing", "group_id": 1, "lines": [120.5, 80]},
            {"description": "Binding", "lines": [40], "margin_percent": 0.2}
        ]
    }
"""

import json
from pathlib import Path

from quote_rollup.domain.models import (
    CalculationSnapshot,
    EntityLabel,
    SourceGroup,
)
from quote_rollup.utils.decimal_utils import coerce_decimal


def load_snapshot(path: Path | str) -> CalculationSnapshot:
    """Read a calculation snapshot from a JSON file.

    Args:
        path: Path to the JSON document.

    Returns:
        CalculationSnapshot: Parsed snapshot.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the document is not valid JSON or misses fields.
    """
    with Path(path).open(encoding="utf-8") as handle:
        document = json.load(handle, parse_float=coerce_decimal)
    return parse_snapshot(document)


def parse_snapshot(document: dict) -> CalculationSnapshot:
    """Build a snapshot from an already decoded JSON document.

    Raises:
        ValueError: If the document shape or one of its numbers is invalid.
    """
    if not isinstance(document, dict):
        raise ValueError("Snapshot document must be a JSON object")
    try:
        raw_global = document.get("global_margin")
        return CalculationSnapshot(
            sources=tuple(
                _parse_group(entry, index)
                for index, entry in enumerate(document.get("groups", []))
            ),
            user_margin=coerce_decimal(document.get("user_margin")),
            global_margin=(
                None if raw_global is None else coerce_decimal(raw_global)
            ),
        )
    except (ArithmeticError, TypeError) as exc:
        raise ValueError(f"Invalid snapshot value: {exc!r}") from exc


def _parse_group(entry: dict, index: int) -> SourceGroup:
    if not isinstance(entry, dict):
        raise ValueError(f"Snapshot group #{index} must be a JSON object")
    if "description" not in entry:
        raise ValueError(f"Snapshot group #{index} has no description")
    raw_margin = entry.get("margin_percent")
    raw_amount = entry.get("margin_amount")
    return SourceGroup(
        label=EntityLabel(str(entry["description"])),
        line_totals=tuple(
            coerce_decimal(value) for value in entry.get("lines", [])
        ),
        group_id=entry.get("group_id"),
        margin_percent=None if raw_margin is None else coerce_decimal(raw_margin),
        margin_amount=None if raw_amount is None else coerce_decimal(raw_amount),
    )


__all__ = ["load_snapshot", "parse_snapshot"]
