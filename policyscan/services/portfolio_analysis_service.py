"""
Portfolio analysis service.

Evaluates an ordered rule set over a user's insurance policies and turns
the accumulated contributions into a rated, clamped assessment.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Sequence, Union

from policyscan.core.policy_record import PolicyRecord, validate_policies
from policyscan.core.portfolio_rules import DEFAULT_RULES, PortfolioContext, PortfolioRule


logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100
GOOD_MIN_SCORE = 70
AVERAGE_MIN_SCORE = 40


class PortfolioRating(str, Enum):
    """Overall rating bands of a portfolio."""
    BAD = "Bad"
    AVERAGE = "Average"
    GOOD = "Good"


@dataclass(frozen=True)
class PortfolioAnalysis:
    """Result of one portfolio scan."""

    overall_rating: PortfolioRating
    score: int
    coverage_gaps: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallRating": self.overall_rating.value,
            "score": self.score,
            "coverageGaps": list(self.coverage_gaps),
            "suggestions": list(self.suggestions),
            "strengths": list(self.strengths),
        }


def clamp_score(score: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, score))


def rating_for_score(score: int) -> PortfolioRating:
    """
    Map a clamped score onto its rating band.

    >= 70 is Good, 40..69 is Average, anything lower is Bad.
    """
    if score >= GOOD_MIN_SCORE:
        return PortfolioRating.GOOD
    if score >= AVERAGE_MIN_SCORE:
        return PortfolioRating.AVERAGE
    return PortfolioRating.BAD


def _reference_date(now: Union[date, datetime]) -> date:
    if isinstance(now, datetime):
        return now.date()
    if isinstance(now, date):
        return now
    raise ValueError(f"now must be a date or datetime, got {type(now).__name__}")


def analyze(
    policies: Iterable[PolicyRecord],
    now: Union[date, datetime],
    rules: Sequence[PortfolioRule] = DEFAULT_RULES,
) -> PortfolioAnalysis:
    """
    Analyze a portfolio of insurance policies.

    The rules run in order against a single reference date derived from
    `now`; each contributes independently to the score and to the gap,
    suggestion and strength lists. The score is clamped to [0, 100] once,
    after every rule has run, and the rating is derived from the clamped
    score only.

    Args:
        policies: The user's policies, in the order they were recorded.
        now: Reference timestamp for the expiry checks.
        rules: Rule set to evaluate; defaults to the standard scan rules.

    Returns:
        A new PortfolioAnalysis. Input records are never modified.

    Raises:
        ValueError: If a policy is malformed (negative amounts, blank type,
            bad expiry date, duplicate id) or `now` is not a date.
    """
    try:
        today = _reference_date(now)
        validated = validate_policies(policies)
        context = PortfolioContext.build(validated, today)

        score = 0
        coverage_gaps: List[str] = []
        suggestions: List[str] = []
        strengths: List[str] = []

        for rule in rules:
            outcome = rule.evaluate(context)
            score += outcome.score_delta
            coverage_gaps.extend(outcome.coverage_gaps)
            suggestions.extend(outcome.suggestions)
            strengths.extend(outcome.strengths)

        final_score = clamp_score(score)
        rating = rating_for_score(final_score)

        logger.debug(
            "Portfolio analyzed: %d policies, raw score %d, score %d, rating %s",
            len(validated),
            score,
            final_score,
            rating.value,
        )

        return PortfolioAnalysis(
            overall_rating=rating,
            score=final_score,
            coverage_gaps=coverage_gaps,
            suggestions=suggestions,
            strengths=strengths,
        )

    except ValueError:
        # Bubble up precondition violations for the caller to handle
        raise
    except Exception as exc:
        raise RuntimeError(f"Error analyzing portfolio: {exc}") from exc


__all__ = [
    "PortfolioRating",
    "PortfolioAnalysis",
    "analyze",
    "clamp_score",
    "rating_for_score",
]
