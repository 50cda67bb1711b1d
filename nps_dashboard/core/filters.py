"""Filter criteria and record predicates for feedback views.

Updates:
    v0.1.0 - 2026-10-05 - Added period windows, role and score predicates.
    v0.2.0 - 2026-10-12 - Added inclusive custom ranges and named filter semantics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .feedback_aggregator import FeedbackRecord

logger = logging.getLogger(__name__)


class Period(str, Enum):
    """Named time windows selectable on the dashboard."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    CUSTOM = "custom"


class FilterSemantics(str, Enum):
    """Versioned behaviour of the time-window predicate.

    ``CURRENT`` treats ``today`` as the last 24 hours and honours inclusive
    custom ranges. ``LEGACY`` reproduces the first dashboard release, where
    ``today`` only matched timestamps equal to the current instant and
    ``custom`` was not recognised.
    """

    CURRENT = "current"
    LEGACY = "legacy"


PERIOD_WINDOWS: dict[Period, timedelta] = {
    Period.TODAY: timedelta(days=1),
    Period.WEEK: timedelta(days=7),
    Period.MONTH: timedelta(days=30),
    Period.QUARTER: timedelta(days=90),
    Period.YEAR: timedelta(days=365),
}


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 value into an aware UTC datetime.

    Args:
        value (object): Raw ``created_at`` value, normally a string.

    Returns:
        datetime | None: Parsed timestamp, or ``None`` when the value is not
        a valid ISO-8601 timestamp. Naive values are read as UTC.
    """

    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return _as_utc(parsed)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class FilterCriteria:
    """User-selected restrictions applied to the feedback collection."""

    period: Period = Period.ALL
    roles: frozenset[str] = frozenset()
    scores: frozenset[int] = frozenset()
    start_date: datetime | None = None
    end_date: datetime | None = None

    @classmethod
    def from_params(
        cls,
        period: str | Period = Period.ALL,
        roles: Iterable[str] | None = None,
        scores: Iterable[int] | None = None,
        start_date: datetime | date | str | None = None,
        end_date: datetime | date | str | None = None,
    ) -> "FilterCriteria":
        """Build criteria from loosely typed caller input.

        Args:
            period (str | Period): Period name such as ``"month"``.
            roles (Iterable[str] | None): Roles to keep; empty keeps all.
            scores (Iterable[int] | None): Scores to keep; empty keeps all.
            start_date (datetime | date | str | None): Custom range start.
            end_date (datetime | date | str | None): Custom range end.

        Returns:
            FilterCriteria: Normalized criteria.

        Raises:
            ValueError: If the period name or a range bound is not recognised.
        """

        try:
            resolved_period = Period(period)
        except ValueError as exc:
            allowed = ", ".join(item.value for item in Period)
            raise ValueError(f"Unknown period '{period}'. Expected one of: {allowed}.") from exc

        return cls(
            period=resolved_period,
            roles=frozenset(roles or ()),
            scores=frozenset(int(score) for score in scores or ()),
            start_date=_coerce_bound(start_date, "start_date"),
            end_date=_coerce_bound(end_date, "end_date"),
        )

    @property
    def has_custom_range(self) -> bool:
        return self.start_date is not None and self.end_date is not None

    def as_dict(self) -> dict[str, object]:
        return {
            "period": self.period.value,
            "roles": sorted(self.roles),
            "scores": sorted(self.scores),
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
        }


def _coerce_bound(value: datetime | date | str | None, label: str) -> datetime | None:
    if value is None or value == "":
        return None
    parsed = parse_timestamp(value)
    if parsed is None:
        raise ValueError(f"Invalid {label}: {value!r} is not an ISO-8601 timestamp.")
    return parsed


class TimeWindow:
    """Time-window predicate resolved once per filter pass."""

    def __init__(
        self,
        criteria: FilterCriteria,
        now: datetime,
        semantics: FilterSemantics = FilterSemantics.CURRENT,
    ) -> None:
        self._semantics = semantics
        self._now = _as_utc(now)
        self._exact: datetime | None = None
        self._after: datetime | None = None
        self._start: datetime | None = None
        self._end: datetime | None = None
        self.active = self._resolve(criteria)

    def _resolve(self, criteria: FilterCriteria) -> bool:
        period = criteria.period
        if period is Period.ALL:
            return False

        if period is Period.CUSTOM:
            if self._semantics is FilterSemantics.LEGACY:
                return False
            if not criteria.has_custom_range:
                bounds = criteria.as_dict()
                logger.warning(
                    "custom_range_incomplete",
                    extra={"start_date": bounds["start_date"], "end_date": bounds["end_date"]},
                )
                return False
            self._start = criteria.start_date
            self._end = criteria.end_date
            return True

        if period is Period.TODAY and self._semantics is FilterSemantics.LEGACY:
            self._exact = self._now
            return True

        self._after = self._now - PERIOD_WINDOWS[period]
        return True

    def contains(self, moment: datetime) -> bool:
        """Return whether a parsed timestamp falls inside the window."""

        if self._exact is not None:
            return moment == self._exact
        if self._after is not None:
            return moment > self._after
        if self._start is not None and self._end is not None:
            return self._start <= moment <= self._end
        return True


def matches_role(record: "FeedbackRecord", roles: frozenset[str]) -> bool:
    return not roles or record.role in roles


def matches_score(record: "FeedbackRecord", scores: frozenset[int]) -> bool:
    return not scores or record.score in scores


__all__ = [
    "FilterCriteria",
    "FilterSemantics",
    "PERIOD_WINDOWS",
    "Period",
    "TimeWindow",
    "matches_role",
    "matches_score",
    "parse_timestamp",
]
