"""
Portfolio scan rule set.

Each rule inspects a prepared :class:`PortfolioContext` and returns a
:class:`RuleOutcome` holding its contribution to the score and to the gap,
suggestion and strength lists. Rules never raise and never mutate the
context, so they can be evaluated and tested one by one.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Final, List, Optional, Sequence, Tuple

from policyscan.core.policy_record import PolicyRecord


HEALTH_COVERAGE_THRESHOLD: Final[float] = 300_000
LIFE_COVERAGE_THRESHOLD: Final[float] = 500_000

HEALTH_POINTS: Final[int] = 25
LIFE_POINTS: Final[int] = 25
AUTO_POINTS: Final[int] = 15
HOME_POINTS: Final[int] = 15
EXPIRED_PENALTY: Final[int] = 10
DIVERSITY_POINTS: Final[int] = 10
PREMIUM_POINTS: Final[int] = 5

UPCOMING_WINDOW_DAYS: Final[int] = 30
DIVERSITY_MIN_CATEGORIES: Final[int] = 3

TRACKED_CATEGORIES: Final[tuple] = ("health", "life", "auto", "home")


@dataclass(frozen=True)
class PortfolioContext:
    """
    Read-only view of a portfolio prepared once per analysis.

    `today` is the single reference date every rule compares against.
    """

    policies: Tuple[PolicyRecord, ...]
    today: date
    categories: frozenset
    distinct_types: frozenset
    first_by_category: Dict[str, PolicyRecord]

    @classmethod
    def build(cls, policies: Sequence[PolicyRecord], today: date) -> "PortfolioContext":
        first_by_category: Dict[str, PolicyRecord] = {}
        for policy in policies:
            first_by_category.setdefault(policy.category, policy)

        return cls(
            policies=tuple(policies),
            today=today,
            categories=frozenset(first_by_category),
            distinct_types=frozenset(p.normalized_type for p in policies),
            first_by_category=first_by_category,
        )

    def has(self, category: str) -> bool:
        return category in self.categories

    def first_of(self, category: str) -> Optional[PolicyRecord]:
        return self.first_by_category.get(category)


@dataclass
class RuleOutcome:
    """Partial contribution of one rule to the analysis."""

    score_delta: int = 0
    coverage_gaps: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)


class PortfolioRule:
    """Base class for portfolio rules."""

    name: str = "rule"

    def evaluate(self, context: PortfolioContext) -> RuleOutcome:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class CoverageRule(PortfolioRule):
    """
    Required category with a minimum sum insured.

    Missing category: gap + suggestion. Present: only the first policy of
    the category is checked; a positive coverage below the threshold yields
    a suggestion, anything else (including unknown coverage) yields the
    strength and the points.
    """

    def __init__(
        self,
        category: str,
        gap_label: str,
        threshold: float,
        points: int,
        missing_message: str,
        low_message: str,
        strength: str,
    ):
        self.name = f"{category}_coverage"
        self.category = category
        self.gap_label = gap_label
        self.threshold = threshold
        self.points = points
        self.missing_message = missing_message
        self.low_message = low_message
        self.strength = strength

    def evaluate(self, context: PortfolioContext) -> RuleOutcome:
        policy = context.first_of(self.category)
        if policy is None:
            return RuleOutcome(
                coverage_gaps=[self.gap_label],
                suggestions=[self.missing_message],
            )

        if policy.coverage and policy.coverage < self.threshold:
            return RuleOutcome(suggestions=[self.low_message])

        return RuleOutcome(score_delta=self.points, strengths=[self.strength])


class PresenceRule(PortfolioRule):
    """Advisory category: suggestion when absent, strength when present."""

    def __init__(self, category: str, points: int, missing_message: str, strength: str):
        self.name = f"{category}_presence"
        self.category = category
        self.points = points
        self.missing_message = missing_message
        self.strength = strength

    def evaluate(self, context: PortfolioContext) -> RuleOutcome:
        if not context.has(self.category):
            return RuleOutcome(suggestions=[self.missing_message])
        return RuleOutcome(score_delta=self.points, strengths=[self.strength])


class ExpiredPolicyRule(PortfolioRule):
    name = "expired_policies"

    def __init__(self, penalty: int = EXPIRED_PENALTY):
        self.penalty = penalty

    def evaluate(self, context: PortfolioContext) -> RuleOutcome:
        expired = sum(
            1
            for p in context.policies
            if p.expiry_date is not None and p.expiry_date < context.today
        )
        if expired == 0:
            return RuleOutcome()

        noun = "policy" if expired == 1 else "policies"
        return RuleOutcome(
            score_delta=-self.penalty,
            suggestions=[f"You have {expired} expired {noun}. Renew them immediately."],
        )


class UpcomingExpirationRule(PortfolioRule):
    name = "upcoming_expirations"

    def __init__(self, window_days: int = UPCOMING_WINDOW_DAYS):
        self.window_days = window_days

    def evaluate(self, context: PortfolioContext) -> RuleOutcome:
        horizon = context.today + timedelta(days=self.window_days)
        upcoming = sum(
            1
            for p in context.policies
            if p.expiry_date is not None and context.today <= p.expiry_date <= horizon
        )
        if upcoming == 0:
            return RuleOutcome()

        phrase = "policy expires" if upcoming == 1 else "policies expire"
        return RuleOutcome(
            suggestions=[
                f"{upcoming} {phrase} within {self.window_days} days. Plan for renewal."
            ]
        )


class DiversityRule(PortfolioRule):
    name = "diversity"

    def __init__(self, min_categories: int = DIVERSITY_MIN_CATEGORIES, points: int = DIVERSITY_POINTS):
        self.min_categories = min_categories
        self.points = points

    def evaluate(self, context: PortfolioContext) -> RuleOutcome:
        if len(context.distinct_types) < self.min_categories:
            return RuleOutcome()
        return RuleOutcome(score_delta=self.points, strengths=["Good portfolio diversity"])


def format_amount(amount: float) -> str:
    """Group thousands with commas; drop the decimals of whole amounts."""
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{float(amount):,.2f}"


class PremiumSummaryRule(PortfolioRule):
    """Informational: reports the total premium and adds a participation bonus."""

    name = "premium_summary"

    def __init__(self, points: int = PREMIUM_POINTS):
        self.points = points

    def evaluate(self, context: PortfolioContext) -> RuleOutcome:
        total = sum(p.premium for p in context.policies)
        if total <= 0:
            return RuleOutcome()
        return RuleOutcome(
            score_delta=self.points,
            strengths=[f"Total annual premium: ${format_amount(total)}"],
        )


DEFAULT_RULES: Final[Tuple[PortfolioRule, ...]] = (
    CoverageRule(
        category="health",
        gap_label="Health Insurance",
        threshold=HEALTH_COVERAGE_THRESHOLD,
        points=HEALTH_POINTS,
        missing_message=(
            "Health Insurance policy is missing from your portfolio. "
            "Consider adding comprehensive health coverage."
        ),
        low_message=(
            "Health insurance coverage is low. "
            "Consider increasing coverage to at least $300,000."
        ),
        strength="Good health insurance coverage",
    ),
    CoverageRule(
        category="life",
        gap_label="Life Insurance",
        threshold=LIFE_COVERAGE_THRESHOLD,
        points=LIFE_POINTS,
        missing_message=(
            "Life Insurance policy is missing from your portfolio. "
            "Life insurance is essential for financial security."
        ),
        low_message=(
            "Life insurance coverage might be insufficient. "
            "Consider coverage of at least $500,000."
        ),
        strength="Adequate life insurance coverage",
    ),
    PresenceRule(
        category="auto",
        points=AUTO_POINTS,
        missing_message="Consider adding Auto Insurance if you own a vehicle.",
        strength="Auto insurance coverage in place",
    ),
    PresenceRule(
        category="home",
        points=HOME_POINTS,
        missing_message="Consider adding Home/Property Insurance if you own property.",
        strength="Property insurance coverage in place",
    ),
    ExpiredPolicyRule(),
    UpcomingExpirationRule(),
    DiversityRule(),
    PremiumSummaryRule(),
)


__all__ = [
    "HEALTH_COVERAGE_THRESHOLD",
    "LIFE_COVERAGE_THRESHOLD",
    "TRACKED_CATEGORIES",
    "UPCOMING_WINDOW_DAYS",
    "PortfolioContext",
    "RuleOutcome",
    "PortfolioRule",
    "CoverageRule",
    "PresenceRule",
    "ExpiredPolicyRule",
    "UpcomingExpirationRule",
    "DiversityRule",
    "PremiumSummaryRule",
    "DEFAULT_RULES",
    "format_amount",
]
