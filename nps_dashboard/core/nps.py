"""Net Promoter Score classification and arithmetic.

Updates:
    v0.1.0 - 2026-10-05 - Added score classification and pinned rounding.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable

PROMOTER_MIN_SCORE = 9
DETRACTOR_MAX_SCORE = 6


def classify_score(score: int) -> str:
    """Return ``promoter``, ``passive`` or ``detractor`` for a raw score.

    Scores outside 0-10 are not rejected; they fall on whichever side of the
    thresholds they land.
    """

    if score >= PROMOTER_MIN_SCORE:
        return "promoter"
    if score <= DETRACTOR_MAX_SCORE:
        return "detractor"
    return "passive"


def round_half_away_from_zero(value: Fraction) -> int:
    """Round an exact rational to the nearest integer, ties away from zero."""

    magnitude = math.floor(abs(value) + Fraction(1, 2))
    return magnitude if value >= 0 else -magnitude


def compute_nps(promoters: int, detractors: int, total: int) -> int:
    """Compute the integer NPS for the given counts.

    Args:
        promoters (int): Responses scoring 9 or above.
        detractors (int): Responses scoring 6 or below.
        total (int): All responses, passives included.

    Returns:
        int: ``round((promoters - detractors) / total * 100)`` with ties
        rounded away from zero, or ``0`` when ``total`` is zero.
    """

    if total <= 0:
        return 0
    return round_half_away_from_zero(Fraction((promoters - detractors) * 100, total))


def _percentage(part: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(part / total * 100, 2)


@dataclass(frozen=True, slots=True)
class NpsBreakdown:
    """Promoter, passive and detractor counts with the resulting score."""

    total: int = 0
    promoters: int = 0
    passives: int = 0
    detractors: int = 0

    @classmethod
    def from_scores(cls, scores: Iterable[int]) -> "NpsBreakdown":
        counts = {"promoter": 0, "passive": 0, "detractor": 0}
        total = 0
        for score in scores:
            counts[classify_score(score)] += 1
            total += 1
        return cls(
            total=total,
            promoters=counts["promoter"],
            passives=counts["passive"],
            detractors=counts["detractor"],
        )

    @property
    def score(self) -> int:
        return compute_nps(self.promoters, self.detractors, self.total)

    @property
    def promoter_percentage(self) -> float:
        return _percentage(self.promoters, self.total)

    @property
    def passive_percentage(self) -> float:
        return _percentage(self.passives, self.total)

    @property
    def detractor_percentage(self) -> float:
        return _percentage(self.detractors, self.total)

    def as_dict(self) -> dict[str, int | float]:
        return {
            "total": self.total,
            "promoters": self.promoters,
            "passives": self.passives,
            "detractors": self.detractors,
            "promoter_percentage": self.promoter_percentage,
            "passive_percentage": self.passive_percentage,
            "detractor_percentage": self.detractor_percentage,
            "nps_score": self.score,
        }


__all__ = [
    "DETRACTOR_MAX_SCORE",
    "NpsBreakdown",
    "PROMOTER_MIN_SCORE",
    "classify_score",
    "compute_nps",
    "round_half_away_from_zero",
]
