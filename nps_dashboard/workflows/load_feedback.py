"""Export loading workflow.

Updates:
    v0.1.0 - 2026-10-05 - Added workflow wrapper around FeedbackService.load_from_file.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..services.feedback_service import FeedbackService


@dataclass
class LoadFeedbackWorkflow:
    feedback_service: FeedbackService
    name: str = "load_feedback"

    def run(self, context: dict) -> dict:
        """Load the export named by ``context["path"]`` into the aggregator.

        Args:
            context (dict): Workflow context containing the export ``path``.

        Returns:
            dict: Accepted and rejected row counts.
        """

        result = self.feedback_service.load_from_file(context["path"])
        return {
            "path": str(context["path"]),
            "accepted": len(result.records),
            "rejected": result.rejected,
        }
