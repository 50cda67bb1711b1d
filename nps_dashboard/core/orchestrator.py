"""Workflow dispatch for dashboard commands.

Updates:
    v0.1.0 - 2026-10-05 - Added named workflow registry with duration logging.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Protocol


class Workflow(Protocol):
    """A named unit of work invoked by the CLI."""

    name: str

    def run(self, context: dict[str, Any]) -> dict[str, Any]:
        ...


@dataclass(slots=True)
class Orchestrator:
    workflows: dict[str, Workflow] = field(default_factory=dict)

    _logger = logging.getLogger(__name__)

    def execute(self, workflow_name: str, context: dict[str, Any]) -> dict[str, Any]:
        """Run a registered workflow and log how long it took.

        Args:
            workflow_name (str): Registered workflow name.
            context (dict[str, Any]): Workflow input.

        Returns:
            dict[str, Any]: Workflow output.

        Raises:
            KeyError: If no workflow is registered under ``workflow_name``.
        """

        workflow = self.workflows.get(workflow_name)
        if workflow is None:
            raise KeyError(f"Workflow '{workflow_name}' is not registered.")

        started = perf_counter()
        try:
            result = workflow.run(context)
        except Exception as exc:
            self._logger.error(
                "workflow_failed",
                extra={
                    "workflow": workflow_name,
                    "duration_ms": round((perf_counter() - started) * 1000, 2),
                    "error": str(exc),
                },
                exc_info=True,
            )
            raise

        self._logger.info(
            "workflow_completed",
            extra={
                "workflow": workflow_name,
                "duration_ms": round((perf_counter() - started) * 1000, 2),
                "context_keys": sorted(context),
            },
        )
        return result

    def register(self, workflow: Workflow) -> None:
        self.workflows[workflow.name] = workflow
