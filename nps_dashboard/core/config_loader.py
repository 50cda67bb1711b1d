"""YAML configuration loading.

Updates:
    v0.1.0 - 2026-10-05 - Added cached loader for the dashboard config directory.
"""

from __future__ import annotations

import functools
import os
from pathlib import Path
from typing import Any, Dict

import yaml

CONFIG_PATH_ENV = "NPS_CONFIG_PATH"


class ConfigLoader:
    """Reads YAML documents from the dashboard's config directory."""

    def __init__(self, base_path: Path | None = None) -> None:
        """Resolve the config directory.

        Args:
            base_path (Path | None): Explicit directory; falls back to
                ``$NPS_CONFIG_PATH`` and then ``./config``.

        Raises:
            FileNotFoundError: If the resolved directory does not exist.
        """

        self._base_path = Path(
            base_path or os.environ.get(CONFIG_PATH_ENV, "config")
        ).resolve()
        if not self._base_path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {self._base_path}")

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _resolve(self, name: str) -> Path:
        candidate = self._base_path / name
        if candidate.suffix not in {".yaml", ".yml"}:
            candidate = candidate.with_suffix(".yaml")
        if not candidate.exists():
            raise FileNotFoundError(f"Config file not found: {candidate}")
        return candidate

    @functools.lru_cache(maxsize=None)
    def load(self, name: str) -> Dict[str, Any]:
        """Load a YAML document as a dictionary, caching by loader and name.

        Args:
            name (str): Logical document name, with or without ``.yaml``.

        Returns:
            dict[str, Any]: Parsed mapping; an empty file yields ``{}``.

        Raises:
            FileNotFoundError: If the document does not exist.
            ValueError: If the document's top level is not a mapping.
        """

        path = self._resolve(name)
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level.")
        return data


def load_config(name: str, base_path: Path | None = None) -> Dict[str, Any]:
    """Load one configuration document without keeping a loader around."""

    return ConfigLoader(base_path=base_path).load(name)
