"""In-memory feedback aggregation.

Updates:
    v0.1.0 - 2026-10-05 - Added record model, NPS summary and filtered view.
    v0.2.0 - 2026-10-12 - Added named filter semantics and skipped-record tracking.
    v0.3.0 - 2026-10-14 - Added breakdown helpers for summary and engagement views.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping

from .filters import (
    FilterCriteria,
    FilterSemantics,
    TimeWindow,
    matches_role,
    matches_score,
    parse_timestamp,
)
from .nps import NpsBreakdown

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class FeedbackRecord:
    """A single survey response as exported by the feedback collector."""

    user_id: str
    score: int
    reason: str
    created_at: str
    company_id: str
    role: str

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "FeedbackRecord":
        """Build a record from its wire representation.

        Args:
            payload (Mapping[str, Any]): Mapping with the export's snake_case keys.

        Returns:
            FeedbackRecord: Record with ``score`` coerced to ``int``.

        Raises:
            KeyError: If a required key is missing.
            ValueError: If ``score`` is not an integer value.
            TypeError: If ``score`` has an unsupported type.
        """

        return cls(
            user_id=str(payload["user_id"]),
            score=int(payload["score"]),
            reason=str(payload.get("reason") or ""),
            created_at=str(payload["created_at"]),
            company_id=str(payload.get("company_id") or ""),
            role=str(payload.get("role") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class FeedbackAggregator:
    """Holds the feedback collection and derives filtered views and NPS.

    ``total_responses`` and ``nps_score`` always describe the full collection,
    even while a filter is active; the filtered view is exposed separately for
    list display, with ``filtered_breakdown`` available for its statistics.

    All operations are synchronous and run in O(n). Instances are not
    thread-safe: a multi-threaded host must hold one exclusive lock around
    every call, since ``filter`` reads the collection and writes the view.
    """

    def __init__(
        self,
        *,
        semantics: FilterSemantics = FilterSemantics.CURRENT,
        clock: Clock | None = None,
    ) -> None:
        self._semantics = FilterSemantics(semantics)
        self._clock = clock or _utc_now
        self._records: tuple[FeedbackRecord, ...] = ()
        self._filtered: tuple[FeedbackRecord, ...] = ()
        self._skipped = 0
        self.is_loading = False

    @property
    def semantics(self) -> FilterSemantics:
        return self._semantics

    @property
    def records(self) -> tuple[FeedbackRecord, ...]:
        return self._records

    @property
    def filtered_view(self) -> tuple[FeedbackRecord, ...]:
        return self._filtered

    @property
    def skipped_records(self) -> int:
        """Records dropped by the last filter pass for unparseable timestamps."""

        return self._skipped

    def load(self, records: Iterable[FeedbackRecord]) -> None:
        """Replace the collection wholesale and clear the filtered view.

        Args:
            records (Iterable[FeedbackRecord]): Records in display order. The
                sequence is copied; later changes to it are not observed.
        """

        self._records = tuple(records)
        self._filtered = ()
        self._skipped = 0
        logger.info("feedback_loaded", extra={"record_count": len(self._records)})

    def total_responses(self) -> int:
        return len(self._records)

    def nps_score(self) -> int:
        """Return the NPS of the full collection, ``0`` when it is empty."""

        return self.nps_breakdown().score

    def nps_breakdown(self) -> NpsBreakdown:
        return NpsBreakdown.from_scores(record.score for record in self._records)

    def filtered_breakdown(self) -> NpsBreakdown:
        return NpsBreakdown.from_scores(record.score for record in self._filtered)

    def filter(self, criteria: FilterCriteria) -> None:
        """Recompute the filtered view from the full collection.

        Time window, role and score predicates are ANDed and the input order
        is kept. Records whose ``created_at`` cannot be parsed are excluded
        and counted in ``skipped_records`` instead of failing the pass.

        Args:
            criteria (FilterCriteria): Active restrictions.
        """

        window = TimeWindow(criteria, now=self._clock(), semantics=self._semantics)
        selected: list[FeedbackRecord] = []
        skipped = 0

        for record in self._records:
            if not matches_role(record, criteria.roles):
                continue
            if not matches_score(record, criteria.scores):
                continue
            if window.active:
                moment = parse_timestamp(record.created_at)
                if moment is None:
                    skipped += 1
                    logger.debug(
                        "feedback_timestamp_invalid",
                        extra={"user_id": record.user_id, "created_at": record.created_at},
                    )
                    continue
                if not window.contains(moment):
                    continue
            selected.append(record)

        self._filtered = tuple(selected)
        self._skipped = skipped
        if skipped:
            logger.warning(
                "feedback_records_skipped",
                extra={"skipped": skipped, "reason": "malformed_timestamp"},
            )
        logger.info(
            "feedback_filtered",
            extra={
                "criteria": criteria.as_dict(),
                "semantics": self._semantics.value,
                "matched": len(self._filtered),
                "total": len(self._records),
            },
        )

    def available_roles(self) -> list[str]:
        return list(dict.fromkeys(record.role for record in self._records))

    def breakdown_by_role(self, *, use_filtered: bool = False) -> dict[str, NpsBreakdown]:
        """Group responses by role and compute a breakdown per group.

        Args:
            use_filtered (bool): Group the filtered view instead of the full collection.

        Returns:
            dict[str, NpsBreakdown]: Breakdown per role, in first-seen order.
        """

        source = self._filtered if use_filtered else self._records
        grouped: dict[str, list[int]] = {}
        for record in source:
            grouped.setdefault(record.role, []).append(record.score)
        return {role: NpsBreakdown.from_scores(scores) for role, scores in grouped.items()}

    def score_distribution(self, *, use_filtered: bool = False) -> dict[int, int]:
        source = self._filtered if use_filtered else self._records
        counts: dict[int, int] = {}
        for record in source:
            counts[record.score] = counts.get(record.score, 0) + 1
        return dict(sorted(counts.items()))


__all__ = ["Clock", "FeedbackAggregator", "FeedbackRecord"]
