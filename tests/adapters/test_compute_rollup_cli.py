"""Tests for the compute_rollup_cli adapter."""

import json
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from quote_rollup.adapters import compute_rollup_cli
from quote_rollup.application.use_cases import ComputeRollupUseCase
from quote_rollup.infrastructure.settings import RollupSettings


@pytest.fixture
def loggers(monkeypatch) -> tuple[MagicMock, MagicMock]:
    app_logger = MagicMock()
    usage_logger = MagicMock()
    monkeypatch.setattr(compute_rollup_cli, "get_app_logger", lambda: app_logger)
    monkeypatch.setattr(
        compute_rollup_cli,
        "get_usage_logger",
        lambda: usage_logger,
    )
    monkeypatch.setattr(
        compute_rollup_cli.RollupSettings,
        "from_env",
        classmethod(lambda cls: RollupSettings(adjust=False)),
    )
    monkeypatch.delenv("ROLLUP_SNAPSHOT_FILE", raising=False)
    return app_logger, usage_logger


def _snapshot_file(tmp_path: Path) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(
        json.dumps(
            {
                "user_margin": "0.20",
                "global_margin": "1.05",
                "groups": [
                    {
                        "description": "Printing",
                        "lines": [1000],
                        "margin_percent": "0.10",
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_main_prints_rollup(loggers, monkeypatch, tmp_path, capsys):
    """The CLI should compute the roll-up and print every row."""
    app_logger, usage_logger = loggers
    monkeypatch.setenv("ROLLUP_SNAPSHOT_FILE", str(_snapshot_file(tmp_path)))

    def _fake_build(settings):
        assert settings.adjust is False
        return ComputeRollupUseCase(
            category_margin_lookup=lambda category_id, amount: None,
            global_margin_lookup=lambda amount: Decimal("1"),
            logger=app_logger,
            min_margin_rate=settings.min_margin_rate,
        )

    monkeypatch.setattr(
        compute_rollup_cli,
        "build_compute_rollup_use_case",
        _fake_build,
    )

    compute_rollup_cli.main([])

    captured = capsys.readouterr()
    assert "Calculation roll-up" in captured.out
    assert "Printing" in captured.out
    assert "OVERALL_TOTAL" in captured.out
    assert "overall_total=1386.00" in captured.out
    usage_logger.info.assert_called_once()


def test_main_accepts_path_argument(loggers, monkeypatch, tmp_path, capsys):
    """A path argument takes precedence over the environment."""
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = compute_rollup_cli.RollupResult(
        rows=(),
    )
    monkeypatch.setattr(
        compute_rollup_cli,
        "build_compute_rollup_use_case",
        lambda settings: fake_use_case,
    )
    monkeypatch.setenv("ROLLUP_SNAPSHOT_FILE", str(tmp_path / "ignored.json"))

    compute_rollup_cli.main([str(_snapshot_file(tmp_path))])

    snapshot = fake_use_case.execute.call_args.args[0]
    assert snapshot.global_margin == Decimal("1.05")
    assert "overall_total=0" in capsys.readouterr().out


def test_main_without_snapshot_warns(loggers, capsys):
    """Missing snapshot paths are reported without output."""
    app_logger, _ = loggers

    compute_rollup_cli.main([])

    app_logger.warning.assert_called_once()
    assert capsys.readouterr().out == ""


def test_main_reports_unreadable_snapshot(loggers, tmp_path, capsys):
    """Unreadable snapshots are logged as errors."""
    app_logger, _ = loggers

    compute_rollup_cli.main([str(tmp_path / "missing.json")])

    app_logger.error.assert_called_once()
    assert capsys.readouterr().out == ""


def test_main_reports_configuration_errors(loggers, monkeypatch, tmp_path):
    """Backend configuration errors stop the CLI with an error log."""
    app_logger, _ = loggers

    def _failing_build(settings):
        raise RuntimeError("File backend requires a MARGINS_FILE path.")

    monkeypatch.setattr(
        compute_rollup_cli,
        "build_compute_rollup_use_case",
        _failing_build,
    )

    compute_rollup_cli.main([str(_snapshot_file(tmp_path))])

    app_logger.error.assert_called_once_with(
        "File backend requires a MARGINS_FILE path."
    )


def test_main_reports_malformed_snapshot(
    loggers, monkeypatch, tmp_path, capsys
):
    """Non-numeric snapshot values are logged instead of crashing."""
    app_logger, _ = loggers
    build = MagicMock()
    monkeypatch.setattr(
        compute_rollup_cli,
        "build_compute_rollup_use_case",
        build,
    )
    path = tmp_path / "snapshot.json"
    path.write_text(
        json.dumps({"user_margin": "abc", "groups": []}),
        encoding="utf-8",
    )

    compute_rollup_cli.main([str(path)])

    app_logger.error.assert_called_once()
    build.assert_not_called()
    assert capsys.readouterr().out == ""
