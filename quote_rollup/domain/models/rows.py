"""Domain models for roll-up rows and their labels."""

from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum
from typing import Callable


class RowKind(IntEnum):
    """Kind of a roll-up row.

    Values are the integer codes understood by existing consumers; member
    order is the display order of the derived rows.
    """

    EMPTY = -1
    GROUP = -2
    TOTAL_GROUP = -3
    GLOBAL_MARGIN = -4
    TOTAL_NET = -5
    USER_MARGIN = -6
    OVERALL_TOTAL = -7

    @classmethod
    def codes(cls) -> dict[str, int]:
        """Return the ``ROW_<KIND>`` to code mapping used by templates."""
        return {f"ROW_{kind.name}": int(kind) for kind in cls}


@dataclass(frozen=True)
class EntityLabel:
    """Label taken from an entity's display text."""

    text: str


@dataclass(frozen=True)
class KeyLabel:
    """Label given as a translation key, resolved by the caller."""

    key: str


Label = EntityLabel | KeyLabel
LabelResolver = Callable[[Label], str]


def default_label_resolver(label: Label) -> str:
    """Return the entity text or the untranslated key."""
    if isinstance(label, EntityLabel):
        return label.text
    return label.key


@dataclass(frozen=True)
class GroupRow:
    """One computed row of a roll-up.

    Attributes:
        kind: Row kind.
        description: Resolved label.
        amount: Base amount. Holds the rate for global and user margin rows.
        margin_percent: Rate for group and user margin rows, multiplier for
            the total group, global margin and overall total rows.
        margin_amount: Margin expressed as an amount.
        total: Amount plus margin amount, or the carried total.
    """

    kind: RowKind
    description: str
    amount: Decimal = Decimal("0")
    margin_percent: Decimal = Decimal("0")
    margin_amount: Decimal = Decimal("0")
    total: Decimal = Decimal("0")

    @property
    def code(self) -> int:
        """Return the integer code of the row kind."""
        return int(self.kind)

    def to_dict(self) -> dict[str, object]:
        """Flatten the row to the legacy wire shape."""
        return {
            "id": self.code,
            "description": self.description,
            "amount": self.amount,
            "margin_percent": self.margin_percent,
            "margin_amount": self.margin_amount,
            "total": self.total,
        }


__all__ = [
    "RowKind",
    "EntityLabel",
    "KeyLabel",
    "Label",
    "LabelResolver",
    "default_label_resolver",
    "GroupRow",
]
