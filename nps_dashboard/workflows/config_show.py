"""Configuration display workflow.

Updates:
    v0.1.0 - 2026-10-05 - Added workflow returning the effective settings.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..services.config_service import ConfigService


@dataclass
class ConfigShowWorkflow:
    name: str = "config_show"
    config_path: Path | None = None

    def run(self, context: dict) -> dict:
        """Return configuration details suitable for CLI rendering.

        Args:
            context (dict): Unused, maintained for workflow interface compatibility.

        Returns:
            dict: Effective configuration values.
        """

        return ConfigService(config_path=self.config_path).as_dict()
