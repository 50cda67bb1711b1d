"""Structured logging for the dashboard.

Updates:
    v0.1.0 - 2026-10-05 - Added JSON formatter and one-shot root configuration.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

_configured = False
_handler: logging.Handler | None = None

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if not key.startswith("_") and key not in _STANDARD_ATTRIBUTES
    }


def _resolve_level(level_name: str) -> int:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {level_name}")
    return level


def configure_logging(config: dict[str, Any] | None = None) -> None:
    """Install the JSON handler on the root logger once per process.

    Args:
        config (dict[str, Any] | None): The ``logging`` section of
            ``settings.yaml``. ``level`` sets the minimum level; unknown
            names fall back to ``INFO``.
    """

    global _configured, _handler
    if _configured:
        return

    config = config or {}
    try:
        level = _resolve_level(str(config.get("level", "INFO")))
    except ValueError:
        level = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    _handler = handler
    _configured = True


def set_runtime_level(level_name: str) -> None:
    """Change the root (and handler) level after configuration.

    Raises:
        ValueError: If ``level_name`` is not a logging level.
    """

    if not level_name:
        return
    level = _resolve_level(level_name)
    logging.getLogger().setLevel(level)
    if _handler:
        _handler.setLevel(level)
