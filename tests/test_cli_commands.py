from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from typer.testing import CliRunner

import nps_dashboard.cli as cli
import nps_dashboard.cli.runtime as runtime
from nps_dashboard.core import logging_setup
from nps_dashboard.core.filters import FilterSemantics
from tests.helpers.cli import RecordingOrchestrator, make_cli_runtime, patch_runtime, write_settings
from tests.helpers.feedback import iso, write_export


def _ago(days: float) -> str:
    return iso(datetime.now(timezone.utc) - timedelta(days=days))


@pytest.fixture()
def export_path(tmp_path: Path) -> Path:
    rows = [
        {"user_id": "u-1", "score": 10, "reason": "Great", "created_at": _ago(1), "company_id": "c-1", "role": "Manager"},
        {"user_id": "u-2", "score": 9, "reason": "Good", "created_at": _ago(10), "company_id": "c-1", "role": "Analyst"},
        {"user_id": "u-3", "score": 3, "reason": "Slow", "created_at": _ago(40), "company_id": "c-2", "role": "Analyst"},
        {"user_id": "u-4", "score": 7, "reason": "Fine", "created_at": "31/12/2025", "company_id": "c-2", "role": "Developer"},
    ]
    return write_export(tmp_path / "feedback.json", rows)


@pytest.fixture()
def cli_session(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> tuple[CliRunner, RecordingOrchestrator]:
    orchestrator = make_cli_runtime(tmp_path / "config")
    patch_runtime(monkeypatch, orchestrator)
    return CliRunner(), orchestrator


def test_summary_command_renders_totals(cli_session, export_path: Path) -> None:
    runner, orchestrator = cli_session

    result = runner.invoke(cli.app, ["summary", str(export_path)])

    assert result.exit_code == 0, result.output
    assert "Total responses: 4" in result.output
    assert "NPS: 25" in result.output
    assert [name for name, _ in orchestrator.calls] == ["load_feedback", "summarize_feedback"]


def test_summary_raw_outputs_json(cli_session, export_path: Path) -> None:
    runner, _ = cli_session

    result = runner.invoke(cli.app, ["summary", str(export_path), "--raw"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["total_responses"] == 4
    assert payload["nps_score"] == 25


def test_filter_command_applies_options(cli_session, export_path: Path) -> None:
    runner, orchestrator = cli_session

    result = runner.invoke(
        cli.app,
        ["filter", str(export_path), "--period", "month", "--role", "Analyst", "--raw"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [row["user_id"] for row in payload["records"]] == ["u-2"]
    # u-4 fails the role check before its timestamp is read.
    assert payload["skipped_records"] == 0
    assert payload["nps_score"] == 25
    context = orchestrator.calls[-1][1]
    assert context["period"] == "month"
    assert context["roles"] == ["Analyst"]


def test_filter_command_custom_range(cli_session, export_path: Path) -> None:
    runner, _ = cli_session

    result = runner.invoke(
        cli.app,
        [
            "filter",
            str(export_path),
            "--period",
            "custom",
            "--start",
            _ago(15),
            "--end",
            _ago(5),
            "--score",
            "9",
            "--score",
            "10",
            "--raw",
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [row["user_id"] for row in payload["records"]] == ["u-2"]


def test_filter_command_renders_table(cli_session, export_path: Path) -> None:
    runner, _ = cli_session

    result = runner.invoke(cli.app, ["filter", str(export_path), "--period", "week"])

    assert result.exit_code == 0, result.output
    assert "u-1" in result.output
    assert "u-3" not in result.output
    assert "skipped" in result.output


def test_filter_command_rejects_bad_bound(cli_session, export_path: Path) -> None:
    runner, _ = cli_session

    result = runner.invoke(
        cli.app, ["filter", str(export_path), "--period", "custom", "--start", "someday"]
    )

    assert result.exit_code == 2


def test_filter_command_rejects_unknown_period(cli_session, export_path: Path) -> None:
    runner, _ = cli_session

    result = runner.invoke(cli.app, ["filter", str(export_path), "--period", "decade"])

    assert result.exit_code == 2


def test_breakdown_command(cli_session, export_path: Path) -> None:
    runner, _ = cli_session

    result = runner.invoke(cli.app, ["breakdown", str(export_path), "--raw"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert list(payload["roles"]) == ["Manager", "Analyst", "Developer"]
    assert payload["roles"]["Analyst"]["nps_score"] == 0

    result = runner.invoke(
        cli.app, ["breakdown", str(export_path), "--filtered", "--period", "week", "--raw"]
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["scope"] == "filtered"
    assert list(payload["roles"]) == ["Manager"]


def test_report_command_writes_markdown(cli_session, export_path: Path, tmp_path: Path) -> None:
    runner, _ = cli_session
    output = tmp_path / "reports" / "nps.md"

    result = runner.invoke(
        cli.app, ["report", str(export_path), "--output", str(output), "--period", "quarter"]
    )

    assert result.exit_code == 0, result.output
    markdown = output.read_text(encoding="utf-8")
    assert "# NPS Feedback Report" in markdown
    assert "**Matched:** 3 of 4" in markdown
    assert "## Engagement by Role" in markdown


def test_missing_export_exits_with_error(cli_session, tmp_path: Path) -> None:
    runner, _ = cli_session

    result = runner.invoke(cli.app, ["summary", str(tmp_path / "absent.json")])

    assert result.exit_code == 1
    assert "Could not load feedback" in result.output


def test_invalid_export_exits_with_error(cli_session, tmp_path: Path) -> None:
    runner, _ = cli_session
    path = tmp_path / "broken.json"
    path.write_text("{oops", encoding="utf-8")

    result = runner.invoke(cli.app, ["summary", str(path)])

    assert result.exit_code == 1


def test_invalid_log_level_is_bad_parameter(cli_session, export_path: Path) -> None:
    runner, _ = cli_session

    result = runner.invoke(cli.app, ["summary", str(export_path), "--log-level", "chatty"])

    assert result.exit_code == 2


def test_settings_show(cli_session) -> None:
    runner, _ = cli_session

    result = runner.invoke(cli.app, ["settings", "show"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["feedback"]["filter_semantics"] == "current"


def test_legacy_semantics_from_config(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, export_path: Path
) -> None:
    orchestrator = make_cli_runtime(tmp_path / "legacy", semantics=FilterSemantics.LEGACY)
    patch_runtime(monkeypatch, orchestrator)

    result = CliRunner().invoke(cli.app, ["filter", str(export_path), "--period", "today", "--raw"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["semantics"] == "legacy"
    assert payload["records"] == []


def test_log_level_option_survives_runtime_setup(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, export_path: Path
) -> None:
    root_logger = logging.RootLogger(logging.WARNING)
    monkeypatch.setattr(logging, "root", root_logger)
    monkeypatch.setattr(logging, "StreamHandler", lambda: logging.NullHandler())
    monkeypatch.setattr(logging_setup, "_configured", False)
    monkeypatch.setattr(runtime, "_RUNTIME_CACHE", None)
    monkeypatch.setattr(runtime, "_FEEDBACK_SETTINGS", None)
    monkeypatch.setenv("NPS_CONFIG_PATH", str(write_settings(tmp_path / "config")))

    result = CliRunner().invoke(cli.app, ["summary", str(export_path), "--raw", "-l", "DEBUG"])

    assert result.exit_code == 0, result.output
    assert logging_setup._configured is True
    assert root_logger.level == logging.DEBUG
    assert logging_setup._handler is not None
    assert logging_setup._handler.level == logging.DEBUG
