"""NPS dashboard CLI package."""

from __future__ import annotations

import logging

import typer

from nps_dashboard.cli.commands.feedback import breakdown, filter_feedback, report, summary
from nps_dashboard.cli.commands.settings import settings_show
from nps_dashboard.cli.io import console
from nps_dashboard.cli.renderers import render_breakdown, render_filtered, render_summary
from nps_dashboard.cli.runtime import (
    default_data_path,
    get_orchestrator,
    get_runtime,
    initialize_runtime,
    set_runtime,
    set_runtime_level,
)
from nps_dashboard.cli.utils import apply_log_override, build_filter_context
from nps_dashboard.core.feedback_aggregator import FeedbackAggregator, FeedbackRecord
from nps_dashboard.core.filters import FilterCriteria, FilterSemantics, Period
from nps_dashboard.core.logging_setup import configure_logging
from nps_dashboard.core.orchestrator import Orchestrator
from nps_dashboard.services.config_service import ConfigService
from nps_dashboard.services.feedback_loader import FeedbackLoadError, FeedbackLoader
from nps_dashboard.services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)

# Typer applications ---------------------------------------------------------

app = typer.Typer(add_completion=False, help="Net Promoter Score dashboard CLI")
settings_app = typer.Typer(
    add_completion=False, help="Inspect application configuration."
)


@settings_app.callback(invoke_without_command=True)
def _settings_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        settings_show()


# Command registration -------------------------------------------------------

app.command()(summary)
app.command("filter")(filter_feedback)
app.command()(breakdown)
app.command()(report)

settings_app.command("show")(settings_show)

app.add_typer(settings_app, name="settings")


def main() -> None:
    """CLI entry point."""

    app()


__all__: list[str] = [
    # Typer apps / entrypoints
    "app",
    "settings_app",
    "main",
    # Console & logging
    "console",
    "logger",
    "configure_logging",
    # Runtime
    "default_data_path",
    "get_orchestrator",
    "get_runtime",
    "initialize_runtime",
    "set_runtime",
    "set_runtime_level",
    # Commands
    "summary",
    "filter_feedback",
    "breakdown",
    "report",
    "settings_show",
    # Renderers & utilities
    "render_summary",
    "render_filtered",
    "render_breakdown",
    "apply_log_override",
    "build_filter_context",
    # Domain classes re-exported for tests
    "ConfigService",
    "FeedbackAggregator",
    "FeedbackLoadError",
    "FeedbackLoader",
    "FeedbackRecord",
    "FeedbackService",
    "FilterCriteria",
    "FilterSemantics",
    "Orchestrator",
    "Period",
]
