"""Runtime wiring for the NPS dashboard CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from nps_dashboard.core.feedback_aggregator import FeedbackAggregator
from nps_dashboard.core.logging_setup import configure_logging, set_runtime_level
from nps_dashboard.core.orchestrator import Orchestrator
from nps_dashboard.services.config_service import ConfigService, FeedbackSettings
from nps_dashboard.services.feedback_loader import FeedbackLoader
from nps_dashboard.services.feedback_service import FeedbackService
from nps_dashboard.workflows.breakdown_feedback import BreakdownFeedbackWorkflow
from nps_dashboard.workflows.config_show import ConfigShowWorkflow
from nps_dashboard.workflows.filter_feedback import FilterFeedbackWorkflow
from nps_dashboard.workflows.load_feedback import LoadFeedbackWorkflow
from nps_dashboard.workflows.summarize_feedback import SummarizeFeedbackWorkflow

logger = logging.getLogger(__name__)

_RUNTIME_CACHE: Orchestrator | None = None
_FEEDBACK_SETTINGS: FeedbackSettings | None = None


def _load_config() -> Optional[ConfigService]:
    try:
        return ConfigService()
    except FileNotFoundError as exc:
        logger.warning("config_unavailable", extra={"error": str(exc)})
        return None


def initialize_runtime(config_service: ConfigService | None = None) -> Orchestrator:
    """Build the aggregator, services and workflows for one CLI process."""

    global _FEEDBACK_SETTINGS

    config_service = config_service or _load_config()
    if config_service is not None:
        configure_logging(config_service.logging_config)
        settings = config_service.get_feedback_settings()
        config_path: Path | None = config_service.config_dir
    else:
        configure_logging()
        settings = FeedbackSettings()
        config_path = None
    _FEEDBACK_SETTINGS = settings
    logger.debug(
        "Runtime initialization starting (semantics=%s).", settings.filter_semantics.value
    )

    aggregator = FeedbackAggregator(semantics=settings.filter_semantics)
    feedback_service = FeedbackService(aggregator=aggregator, loader=FeedbackLoader())

    orchestrator = Orchestrator()
    orchestrator.register(LoadFeedbackWorkflow(feedback_service=feedback_service))
    orchestrator.register(SummarizeFeedbackWorkflow(feedback_service=feedback_service))
    orchestrator.register(FilterFeedbackWorkflow(feedback_service=feedback_service))
    orchestrator.register(BreakdownFeedbackWorkflow(feedback_service=feedback_service))
    if config_path is not None:
        orchestrator.register(ConfigShowWorkflow(config_path=config_path))
    return orchestrator


def get_runtime() -> Orchestrator:
    """Return the lazily-initialized orchestrator."""

    global _RUNTIME_CACHE
    if _RUNTIME_CACHE is None:
        _RUNTIME_CACHE = initialize_runtime()
    return _RUNTIME_CACHE


def set_runtime(runtime: Orchestrator | None) -> None:
    """Replace the cached orchestrator (``None`` forces re-initialization)."""

    global _RUNTIME_CACHE
    _RUNTIME_CACHE = runtime


def get_orchestrator() -> Orchestrator:
    return get_runtime()


def default_data_path() -> Path:
    """Export path used when a command is given no FILE argument."""

    if _FEEDBACK_SETTINGS is None:
        get_runtime()
    return (_FEEDBACK_SETTINGS or FeedbackSettings()).data_path


__all__ = [
    "default_data_path",
    "get_orchestrator",
    "get_runtime",
    "initialize_runtime",
    "set_runtime",
    "set_runtime_level",
]
