"""Summary workflow.

Updates:
    v0.1.0 - 2026-10-05 - Added summary card workflow.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..services.feedback_service import FeedbackService


@dataclass
class SummarizeFeedbackWorkflow:
    feedback_service: FeedbackService
    name: str = "summarize_feedback"

    def run(self, context: dict) -> dict:
        return self.feedback_service.summarize()
