"""Settings helpers for the roll-up engine adapters."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import os
from pathlib import Path
from typing import Optional

from quote_rollup.domain.constants import DEFAULT_MIN_MARGIN_RATE
from quote_rollup.infrastructure.logging.logger import get_app_logger
from quote_rollup.utils.utils import get_project_root


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class RollupSettings:
    """Settings for computing roll-ups.

    Attributes:
        min_margin_rate: Minimum overall margin rate (``0.10`` for 10%).
        adjust: Whether user margins are raised to meet the minimum.
        margins_backend: Tier source identifier (sqlalchemy or file).
        margins_file: Optional path to a JSON tier file.
    """

    min_margin_rate: Decimal = DEFAULT_MIN_MARGIN_RATE
    adjust: bool = False
    margins_backend: str = "sqlalchemy"
    margins_file: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "RollupSettings":
        """Build settings from environment variables.

        Returns:
            RollupSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        min_margin_rate = cls._parse_rate(
            os.getenv("ROLLUP_MIN_MARGIN"),
            logger=logger,
        )
        adjust = cls._parse_bool(os.getenv("ROLLUP_ADJUST"), logger=logger)
        backend = os.getenv("MARGINS_BACKEND", "sqlalchemy").strip().lower()
        raw_file = os.getenv("MARGINS_FILE")
        if raw_file:
            margins_file = cls._normalize_path(raw_file, logger=logger)
        else:
            margins_file = cls._default_margins_file(logger=logger)
        return cls(
            min_margin_rate=min_margin_rate,
            adjust=adjust,
            margins_backend=backend,
            margins_file=margins_file,
        )

    @staticmethod
    def _parse_rate(raw_value: str | None, logger) -> Decimal:
        """Parse the minimum margin rate.

        Args:
            raw_value: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            Decimal: Parsed rate, or the default when missing or invalid.
        """
        if raw_value is None or not raw_value.strip():
            return DEFAULT_MIN_MARGIN_RATE
        try:
            rate = Decimal(raw_value.strip())
        except InvalidOperation:
            logger.warning(
                f"Invalid ROLLUP_MIN_MARGIN '{raw_value}'; "
                f"using {DEFAULT_MIN_MARGIN_RATE}"
            )
            return DEFAULT_MIN_MARGIN_RATE
        if not rate.is_finite() or rate < 0:
            logger.warning(
                f"ROLLUP_MIN_MARGIN must be a non-negative rate, got {raw_value}"
            )
            return DEFAULT_MIN_MARGIN_RATE
        return rate

    @staticmethod
    def _parse_bool(raw_value: str | None, logger) -> bool:
        if raw_value is None:
            return False
        value = raw_value.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value not in _FALSE_VALUES:
            logger.warning(f"Invalid ROLLUP_ADJUST '{raw_value}'; using false")
        return False

    @staticmethod
    def _normalize_path(raw_path: str, logger) -> Path:
        """Normalize the tier file path.

        Args:
            raw_path: Raw file path string.
            logger: Logger used for warnings.

        Returns:
            Path: Resolved filesystem path.
        """
        path = Path(raw_path).expanduser().resolve()
        if not path.exists():
            logger.warning(f"Margins file does not exist at {path}")
        return path

    @staticmethod
    def _default_margins_file(logger) -> Path | None:
        """Return a default tier file when available.

        Args:
            logger: Logger used for warnings.

        Returns:
            Path | None: Default path if a single JSON file is found in data/.
        """
        data_dir = get_project_root() / "data"
        if not data_dir.exists():
            return None
        matches = sorted(data_dir.glob("*.json"))
        if len(matches) == 1:
            return matches[0].resolve()
        if len(matches) > 1:
            logger.warning(
                "Multiple .json files found in data/. "
                "Set MARGINS_FILE to choose one."
            )
        return None


__all__ = ["RollupSettings"]
