"""Feedback view commands for the NPS dashboard CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import typer

from nps_dashboard.cli.io import console
from nps_dashboard.cli.renderers import render_breakdown, render_filtered, render_summary
from nps_dashboard.cli.reporting import build_report_payload, render_report_markdown
from nps_dashboard.cli.utils import apply_log_override, build_filter_context
from nps_dashboard.core.filters import Period
from nps_dashboard.services.feedback_loader import FeedbackLoadError

logger = logging.getLogger(__name__)

FILE_ARGUMENT_HELP = "JSON export of feedback rows (defaults to feedback.data_path)."
LOG_LEVEL_HELP = "Override logging level for this invocation (e.g., DEBUG, INFO)."


def _cli() -> Any:
    return sys.modules["nps_dashboard.cli"]


def _load(orchestrator: Any, export: Path | None) -> dict[str, Any]:
    path = export or _cli().default_data_path()
    try:
        loaded = orchestrator.execute("load_feedback", {"path": path})
    except (FileNotFoundError, FeedbackLoadError) as exc:
        console.print(f"[red]Could not load feedback: {exc}[/]")
        raise typer.Exit(code=1) from exc
    if loaded.get("rejected"):
        console.print(
            f"[yellow]{len(loaded['rejected'])} row(s) in {path} were rejected.[/]"
        )
    return loaded


def _filter(orchestrator: Any, context: dict[str, Any]) -> dict[str, Any]:
    try:
        return orchestrator.execute("filter_feedback", context)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def summary(
    export: Path | None = typer.Argument(None, help=FILE_ARGUMENT_HELP),
    raw: bool = typer.Option(False, "--raw", help="Emit raw JSON instead of rendered panels."),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
) -> None:
    """Show total responses and NPS for the whole export."""

    orchestrator = _cli().get_orchestrator()
    apply_log_override(log_level)
    _load(orchestrator, export)
    result = orchestrator.execute("summarize_feedback", {})
    logger.info("Summary computed (responses=%s).", result.get("total_responses"))
    if raw:
        console.print_json(data=result)
        return
    render_summary(result)


def filter_feedback(
    export: Path | None = typer.Argument(None, help=FILE_ARGUMENT_HELP),
    period: Period = typer.Option(
        Period.ALL, "--period", "-p", case_sensitive=False, help="Time window to keep."
    ),
    roles: list[str] | None = typer.Option(
        None, "--role", "-r", help="Keep only this role (repeatable)."
    ),
    scores: list[int] | None = typer.Option(
        None, "--score", "-s", help="Keep only this score (repeatable)."
    ),
    start: str | None = typer.Option(
        None, "--start", help="Custom period start, ISO-8601 (inclusive)."
    ),
    end: str | None = typer.Option(
        None, "--end", help="Custom period end, ISO-8601 (inclusive)."
    ),
    limit: int = typer.Option(
        0, "--limit", "-n", min=0, help="Maximum rows to display (0 = all)."
    ),
    raw: bool = typer.Option(False, "--raw", help="Emit raw JSON instead of a table."),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
) -> None:
    """List feedback matching the selected period, roles and scores."""

    orchestrator = _cli().get_orchestrator()
    apply_log_override(log_level)
    _load(orchestrator, export)
    result = _filter(orchestrator, build_filter_context(period, roles, scores, start, end))
    if raw:
        console.print_json(data=result)
        return
    render_filtered(result, limit=limit)


def breakdown(
    export: Path | None = typer.Argument(None, help=FILE_ARGUMENT_HELP),
    filtered: bool = typer.Option(
        False,
        "--filtered/--all",
        help="Break down the filtered view instead of the whole export.",
    ),
    period: Period = typer.Option(
        Period.ALL, "--period", "-p", case_sensitive=False, help="Time window to keep."
    ),
    roles: list[str] | None = typer.Option(None, "--role", "-r", help="Role to keep."),
    scores: list[int] | None = typer.Option(None, "--score", "-s", help="Score to keep."),
    start: str | None = typer.Option(None, "--start", help="Custom period start."),
    end: str | None = typer.Option(None, "--end", help="Custom period end."),
    raw: bool = typer.Option(False, "--raw", help="Emit raw JSON instead of a table."),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
) -> None:
    """Show promoters, passives, detractors and NPS per respondent role."""

    orchestrator = _cli().get_orchestrator()
    apply_log_override(log_level)
    _load(orchestrator, export)
    context: dict[str, Any] = {}
    if filtered:
        context["filter"] = build_filter_context(period, roles, scores, start, end)
    try:
        result = orchestrator.execute("breakdown_feedback", context)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if raw:
        console.print_json(data=result)
        return
    render_breakdown(result)


def report(
    export: Path | None = typer.Argument(None, help=FILE_ARGUMENT_HELP),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the markdown report to this file."
    ),
    period: Period = typer.Option(
        Period.ALL, "--period", "-p", case_sensitive=False, help="Time window to keep."
    ),
    roles: list[str] | None = typer.Option(None, "--role", "-r", help="Role to keep."),
    scores: list[int] | None = typer.Option(None, "--score", "-s", help="Score to keep."),
    start: str | None = typer.Option(None, "--start", help="Custom period start."),
    end: str | None = typer.Option(None, "--end", help="Custom period end."),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
) -> None:
    """Render summary, filtered list and role breakdown as markdown."""

    orchestrator = _cli().get_orchestrator()
    apply_log_override(log_level)
    _load(orchestrator, export)
    summary_payload = orchestrator.execute("summarize_feedback", {})
    filtered_payload = _filter(
        orchestrator, build_filter_context(period, roles, scores, start, end)
    )
    breakdown_payload = orchestrator.execute("breakdown_feedback", {})
    markdown = render_report_markdown(
        build_report_payload(summary_payload, filtered_payload, breakdown_payload)
    )
    if output is None:
        console.print(markdown, markup=False, highlight=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(markdown, encoding="utf-8")
    logger.info("Report written to %s", output)
    console.print(f"[green]Report written to {output}[/]")


__all__ = ["breakdown", "filter_feedback", "report", "summary"]
