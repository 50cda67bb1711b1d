"""Feedback service orchestration.

Updates:
    v0.1.0 - 2026-10-05 - Wrapped the aggregator for the CLI views.
    v0.2.0 - 2026-10-14 - Added role breakdown and filtered statistics payloads.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable

from ..core.feedback_aggregator import FeedbackAggregator, FeedbackRecord
from ..core.filters import FilterCriteria, Period
from .feedback_loader import FeedbackLoader, LoadResult

logger = logging.getLogger(__name__)


class FeedbackService:
    """Loads exports into the aggregator and shapes results for display."""

    def __init__(
        self,
        aggregator: FeedbackAggregator,
        loader: FeedbackLoader | None = None,
    ) -> None:
        """Initialize dependencies for feedback processing.

        Args:
            aggregator (FeedbackAggregator): In-memory collection and statistics.
            loader (FeedbackLoader | None): Export decoder; a default one is built if omitted.
        """

        self._aggregator = aggregator
        self._loader = loader or FeedbackLoader()
        self._last_load: LoadResult | None = None

    @property
    def aggregator(self) -> FeedbackAggregator:
        return self._aggregator

    @property
    def last_load(self) -> LoadResult | None:
        return self._last_load

    def load_from_file(self, path: Path | str) -> LoadResult:
        """Read an export and replace the aggregator's collection with it.

        The aggregator's ``is_loading`` flag is raised for the duration of the
        read and cleared even if decoding fails.
        """

        self._aggregator.is_loading = True
        try:
            result = self._loader.load_file(path)
            self._aggregator.load(result.records)
        finally:
            self._aggregator.is_loading = False
        self._last_load = result
        return result

    def load_records(self, records: Iterable[FeedbackRecord]) -> None:
        self._aggregator.load(records)
        self._last_load = None

    def summarize(self) -> dict[str, Any]:
        """Summary card values over the full collection."""

        breakdown = self._aggregator.nps_breakdown()
        return {
            "total_responses": self._aggregator.total_responses(),
            "nps_score": self._aggregator.nps_score(),
            "breakdown": breakdown.as_dict(),
            "score_distribution": self._aggregator.score_distribution(),
            "roles": self._aggregator.available_roles(),
            "rejected_rows": len(self._last_load.rejected) if self._last_load else 0,
        }

    def apply_filter(
        self,
        period: str | Period = Period.ALL,
        roles: Iterable[str] | None = None,
        scores: Iterable[int] | None = None,
        start_date: datetime | date | str | None = None,
        end_date: datetime | date | str | None = None,
    ) -> dict[str, Any]:
        """Filter the collection and return the view with its statistics.

        Raises:
            ValueError: If the period or a custom bound cannot be interpreted.
        """

        criteria = FilterCriteria.from_params(
            period=period,
            roles=roles,
            scores=scores,
            start_date=start_date,
            end_date=end_date,
        )
        self._aggregator.filter(criteria)
        view = self._aggregator.filtered_view
        return {
            "criteria": criteria.as_dict(),
            "semantics": self._aggregator.semantics.value,
            "records": [record.to_dict() for record in view],
            "matched": len(view),
            "total_responses": self._aggregator.total_responses(),
            "nps_score": self._aggregator.nps_score(),
            "filtered": self._aggregator.filtered_breakdown().as_dict(),
            "skipped_records": self._aggregator.skipped_records,
        }

    def breakdown(self, *, use_filtered: bool = False) -> dict[str, Any]:
        """Per-role engagement breakdown."""

        by_role = self._aggregator.breakdown_by_role(use_filtered=use_filtered)
        return {
            "scope": "filtered" if use_filtered else "all",
            "roles": {role: item.as_dict() for role, item in by_role.items()},
        }


__all__ = ["FeedbackService"]
