"""CLI adapter printing the roll-up of a calculation snapshot.

The snapshot is read from ``ROLLUP_SNAPSHOT_FILE`` (or the first argument);
margin tiers come from the configured backend. Set ``ROLLUP_ADJUST=true`` to
raise the user margin when the minimum margin is missed.
"""

import os
import sys

from quote_rollup.domain.models import RollupResult
from quote_rollup.infrastructure.container import build_compute_rollup_use_case
from quote_rollup.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from quote_rollup.infrastructure.settings import RollupSettings
from quote_rollup.infrastructure.snapshot_loader import load_snapshot


def _format_result(result: RollupResult) -> list[str]:
    if result.is_empty:
        return [result.rows[0].description]
    lines = [
        f"{row.kind.name:<14} {row.description:<32} "
        f"amount={row.amount} margin={row.margin_percent} "
        f"margin_amount={row.margin_amount} total={row.total}"
        for row in result.rows
    ]
    lines.append(
        f"overall_total={result.overall_total}, "
        f"overall_margin={result.overall_margin_rate}, "
        f"user_margin={result.user_margin}, "
        f"below_minimum={result.overall_below_minimum}"
    )
    return lines


def main(argv: list[str] | None = None) -> None:
    """Compute and print the roll-up of a snapshot file."""
    logger = get_app_logger()
    args = sys.argv[1:] if argv is None else argv
    snapshot_file = args[0] if args else os.getenv("ROLLUP_SNAPSHOT_FILE")
    if not snapshot_file:
        logger.warning(
            "ROLLUP_SNAPSHOT_FILE is required to compute a roll-up."
        )
        return

    try:
        snapshot = load_snapshot(snapshot_file)
    except (OSError, ValueError) as exc:
        logger.error(f"Cannot read snapshot {snapshot_file}: {exc}")
        return

    settings = RollupSettings.from_env()
    try:
        use_case = build_compute_rollup_use_case(settings=settings)
    except (RuntimeError, ValueError) as exc:
        logger.error(str(exc))
        return

    result = use_case.execute(snapshot)
    get_usage_logger().info(
        f"Roll-up requested for {snapshot_file}: "
        f"groups={len(snapshot.sources)}, adjust={settings.adjust}"
    )

    print(
        "Calculation roll-up "
        f"(min_margin={settings.min_margin_rate}, adjust={settings.adjust})"
    )
    for line in _format_result(result):
        print(line)


if __name__ == "__main__":  # pragma: no cover
    main()
