"""Decoding of feedback export files.

Updates:
    v0.1.0 - 2026-10-05 - Added JSON export decoding with per-row validation.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from ..core.feedback_aggregator import FeedbackRecord

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("user_id", "score", "created_at")


class FeedbackLoadError(ValueError):
    """Raised when an export file cannot be decoded into feedback rows."""


@dataclass
class LoadResult:
    """Records decoded from an export plus the rows that were rejected."""

    records: list[FeedbackRecord] = field(default_factory=list)
    rejected: list[dict[str, Any]] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.records) + len(self.rejected)


class FeedbackLoader:
    """Turns exported feedback rows into ``FeedbackRecord`` instances.

    Timestamps are not checked here; a bad ``created_at`` survives decoding
    and is only dropped when a time filter parses it.
    """

    def load_file(self, path: Path | str) -> LoadResult:
        """Read a JSON export from disk.

        Args:
            path (Path | str): File containing a list of rows or an object
                with a ``feedback`` list.

        Returns:
            LoadResult: Decoded records and rejected rows.

        Raises:
            FileNotFoundError: If the file does not exist.
            FeedbackLoadError: If the file is not valid JSON or has the wrong shape.
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Feedback export not found: {file_path}")
        try:
            payload = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise FeedbackLoadError(f"Invalid JSON in {file_path}: {exc}") from exc
        result = self.decode(payload)
        logger.info(
            "feedback_export_read",
            extra={
                "path": str(file_path),
                "accepted": len(result.records),
                "rejected": len(result.rejected),
            },
        )
        return result

    def decode(self, payload: Any) -> LoadResult:
        """Decode an already-parsed export payload."""

        rows = _extract_rows(payload)
        result = LoadResult()
        for index, row in enumerate(rows):
            error = _row_error(row)
            if error is None:
                try:
                    result.records.append(FeedbackRecord.from_dict(row))
                    continue
                except (TypeError, ValueError) as exc:
                    error = f"invalid score: {exc}"
            logger.warning("feedback_row_rejected", extra={"row": index, "error": error})
            result.rejected.append({"row": index, "error": error})
        return result


def _extract_rows(payload: Any) -> list[Any]:
    if isinstance(payload, dict):
        payload = payload.get("feedback")
    if not isinstance(payload, list):
        raise FeedbackLoadError(
            "Feedback export must be a JSON list or an object with a 'feedback' list."
        )
    return payload


def _row_error(row: Any) -> str | None:
    if not isinstance(row, dict):
        return "row is not an object"
    missing = _missing_fields(row, REQUIRED_FIELDS)
    if missing:
        return "missing fields: " + ", ".join(missing)
    if isinstance(row["score"], bool):
        return "invalid score: boolean"
    if isinstance(row["score"], float) and not row["score"].is_integer():
        return f"invalid score: {row['score']!r} is not a whole number"
    return None


def _missing_fields(row: dict[str, Any], fields: Iterable[str]) -> list[str]:
    return [name for name in fields if row.get(name) is None]


__all__ = ["FeedbackLoadError", "FeedbackLoader", "LoadResult", "REQUIRED_FIELDS"]
