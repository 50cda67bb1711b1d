"""Configuration service for the NPS dashboard.

Updates:
    v0.1.0 - 2026-10-05 - Added typed accessors over settings.yaml.
    v0.2.0 - 2026-10-12 - Added filter semantics selection.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.config_loader import ConfigLoader
from ..core.filters import FilterSemantics

DEFAULT_DATA_PATH = "./data/feedback.json"


@dataclass(slots=True, frozen=True)
class FeedbackSettings:
    """Feedback section of the settings file."""

    filter_semantics: FilterSemantics = FilterSemantics.CURRENT
    data_path: Path = Path(DEFAULT_DATA_PATH)


class ConfigService:
    """Loads and exposes configuration for dashboard components."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Load ``settings.yaml`` from the config directory.

        Args:
            config_path (Path | None): Optional override for the configuration directory.
        """

        self._loader = ConfigLoader(base_path=config_path)
        self._settings = self._loader.load("settings")

    @property
    def config_dir(self) -> Path:
        return self._loader.base_path

    @property
    def app_metadata(self) -> dict[str, Any]:
        """Return general application metadata."""
        return self._section("app")

    @property
    def logging_config(self) -> dict[str, Any]:
        """Return logging configuration settings."""
        return self._section("logging")

    @property
    def feedback_config(self) -> dict[str, Any]:
        """Return the raw feedback section with environment variables expanded."""
        return {
            key: os.path.expandvars(value) if isinstance(value, str) else value
            for key, value in self._section("feedback").items()
        }

    def get_feedback_settings(self) -> FeedbackSettings:
        """Return validated feedback settings.

        Returns:
            FeedbackSettings: Filter semantics and default export location.

        Raises:
            ValueError: If ``filter_semantics`` names an unknown variant.
        """

        section = self.feedback_config
        raw_semantics = str(section.get("filter_semantics", FilterSemantics.CURRENT.value))
        try:
            semantics = FilterSemantics(raw_semantics.strip().lower())
        except ValueError as exc:
            allowed = ", ".join(item.value for item in FilterSemantics)
            raise ValueError(
                f"feedback.filter_semantics must be one of: {allowed} (got '{raw_semantics}')."
            ) from exc

        data_path = section.get("data_path") or DEFAULT_DATA_PATH
        return FeedbackSettings(filter_semantics=semantics, data_path=Path(data_path))

    @property
    def filter_semantics(self) -> FilterSemantics:
        """Return the configured filter semantics."""
        return self.get_feedback_settings().filter_semantics

    @property
    def default_data_path(self) -> Path:
        """Return the export used when a command is given no file."""
        return self.get_feedback_settings().data_path

    def as_dict(self) -> dict[str, Any]:
        feedback = self.get_feedback_settings()
        return {
            "config_dir": str(self.config_dir),
            "app": self.app_metadata,
            "logging": self.logging_config,
            "feedback": {
                "filter_semantics": feedback.filter_semantics.value,
                "data_path": str(feedback.data_path),
            },
        }

    def _section(self, name: str) -> dict[str, Any]:
        section = self._settings.get(name, {})
        return dict(section) if isinstance(section, dict) else {}

    @staticmethod
    def clear_cache() -> None:
        """Clear cached configuration to reflect file updates."""

        ConfigLoader.load.cache_clear()
