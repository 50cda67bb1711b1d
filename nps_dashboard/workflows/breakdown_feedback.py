"""Engagement breakdown workflow.

Updates:
    v0.1.0 - 2026-10-14 - Added per-role breakdown workflow.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..services.feedback_service import FeedbackService


@dataclass
class BreakdownFeedbackWorkflow:
    feedback_service: FeedbackService
    name: str = "breakdown_feedback"

    def run(self, context: dict) -> dict:
        """Break responses down by role.

        When ``context["filter"]`` holds filter options they are applied first
        and the breakdown covers the filtered view.
        """

        options = context.get("filter")
        if options is None:
            return self.feedback_service.breakdown()
        self.feedback_service.apply_filter(**options)
        return self.feedback_service.breakdown(use_filtered=True)
