"""Utility helpers shared across CLI command modules."""

from __future__ import annotations

import logging
import sys
from typing import Any, Iterable, Optional

import typer

logger = logging.getLogger(__name__)


def _cli():
    return sys.modules["nps_dashboard.cli"]


def apply_log_override(log_level: Optional[str]) -> None:
    """Override logging level for the current invocation."""

    if not log_level or not isinstance(log_level, str):
        return
    try:
        _cli().set_runtime_level(log_level)
        logger.info("Log level overridden to %s", log_level.upper())
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def build_filter_context(
    period: Any,
    roles: Optional[Iterable[str]],
    scores: Optional[Iterable[int]],
    start: Optional[str],
    end: Optional[str],
) -> dict[str, Any]:
    """Collect filter options into a workflow context."""

    return {
        "period": getattr(period, "value", period) or "all",
        "roles": list(roles or []),
        "scores": list(scores or []),
        "start_date": start or None,
        "end_date": end or None,
    }


def format_percentage(value: float) -> str:
    return f"{value:.1f}%"


__all__ = [
    "apply_log_override",
    "build_filter_context",
    "format_percentage",
]
