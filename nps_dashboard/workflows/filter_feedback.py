"""Filtered view workflow.

Updates:
    v0.1.0 - 2026-10-05 - Added workflow applying dashboard filters.
    v0.2.0 - 2026-10-12 - Forward custom range bounds.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..services.feedback_service import FeedbackService


@dataclass
class FilterFeedbackWorkflow:
    feedback_service: FeedbackService
    name: str = "filter_feedback"

    def run(self, context: dict) -> dict:
        """Apply the filter options carried in the context.

        Args:
            context (dict): ``period``, ``roles``, ``scores`` and optional
                ``start_date``/``end_date``.

        Returns:
            dict: Filtered rows, statistics and skipped-record count.
        """

        return self.feedback_service.apply_filter(
            period=context.get("period", "all"),
            roles=context.get("roles"),
            scores=context.get("scores"),
            start_date=context.get("start_date"),
            end_date=context.get("end_date"),
        )
