"""Domain constants for quotation roll-ups."""

from decimal import Decimal

# Currency precision shared by every rounding mode.
PRECISION = Decimal("0.01")

# Magnitude under which an amount or divisor is treated as zero.
EPSILON = Decimal("1e-10")

# Minimum overall margin (rate) applied when the caller gives none.
DEFAULT_MIN_MARGIN_RATE = Decimal("0.10")

EMPTY_LABEL_KEY = "calculation.edit.empty"
TOTAL_GROUP_LABEL_KEY = "calculation.fields.marginTotal"
GLOBAL_MARGIN_LABEL_KEY = "calculation.fields.globalMargin"
TOTAL_NET_LABEL_KEY = "calculation.fields.totalNet"
USER_MARGIN_LABEL_KEY = "calculation.fields.userMargin"
OVERALL_TOTAL_LABEL_KEY = "calculation.fields.overallTotal"


__all__ = [
    "PRECISION",
    "EPSILON",
    "DEFAULT_MIN_MARGIN_RATE",
    "EMPTY_LABEL_KEY",
    "TOTAL_GROUP_LABEL_KEY",
    "GLOBAL_MARGIN_LABEL_KEY",
    "TOTAL_NET_LABEL_KEY",
    "USER_MARGIN_LABEL_KEY",
    "OVERALL_TOTAL_LABEL_KEY",
]
