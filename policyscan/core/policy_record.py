"""
Core domain model for a single insurance policy as seen by the portfolio scan.

The record is a plain dataclass, independent of FastAPI/Pydantic, so the
analysis engine can be used from services, scripts and tests alike.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Final, Hashable, Iterable, List, Optional


RECOGNIZED_CATEGORIES: Final[tuple] = ("health", "life", "auto", "home", "travel")
OTHER_CATEGORY: Final[str] = "other"

CATEGORY_LABELS: Final[dict[str, str]] = {
    "health": "Health Insurance",
    "life": "Life Insurance",
    "auto": "Auto Insurance",
    "home": "Home Insurance",
    "travel": "Travel Insurance",
    OTHER_CATEGORY: "Other Insurance",
}


def normalize_type(policy_type: str) -> str:
    """
    Normalize a policy type label for case-insensitive comparisons.

    Raises:
        ValueError: If the label is not a non-empty string.
    """
    if not isinstance(policy_type, str):
        raise ValueError("policy type must be a string")

    normalized = policy_type.strip().lower()
    if not normalized:
        raise ValueError("policy type cannot be empty")

    return normalized


def canonical_category(policy_type: str) -> str:
    """Map a policy type onto one of the recognized categories, or "other"."""
    normalized = normalize_type(policy_type)
    if normalized in RECOGNIZED_CATEGORIES:
        return normalized
    return OTHER_CATEGORY


def category_label(category: str) -> str:
    """Human-readable label for a canonical category."""
    return CATEGORY_LABELS.get(category, CATEGORY_LABELS[OTHER_CATEGORY])


@dataclass(frozen=True)
class PolicyRecord:
    """
    One insurance policy.

    Attributes:
        id: Identifier, unique within a portfolio.
        type: Category label as entered by the user (e.g. "Health").
        premium: Annual premium, non-negative.
        coverage: Sum insured; None when unknown.
        expiry_date: Last day of validity; None excludes the policy from
            expiry-based checks.
        name: Optional display name (company / product).
    """

    id: Hashable
    type: str
    premium: float
    coverage: Optional[float] = None
    expiry_date: Optional[date] = None
    name: Optional[str] = None

    @property
    def normalized_type(self) -> str:
        return normalize_type(self.type)

    @property
    def category(self) -> str:
        return canonical_category(self.type)


def _validate_amount(value, *, field_label: str, policy_id) -> None:
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field_label} of policy {policy_id!r} must be a number")
    if value != value:
        raise ValueError(f"{field_label} of policy {policy_id!r} must not be NaN")
    if value < 0:
        raise ValueError(f"{field_label} of policy {policy_id!r} cannot be negative")


def validate_policy(policy: PolicyRecord) -> PolicyRecord:
    """
    Check that a policy satisfies the preconditions of the analysis.

    Raises:
        ValueError: On a blank type, a negative or non-numeric premium or
            coverage, or an expiry date that is not a calendar date.
    """
    if not isinstance(policy, PolicyRecord):
        raise ValueError(f"expected a PolicyRecord, got {type(policy).__name__}")

    normalize_type(policy.type)
    _validate_amount(policy.premium, field_label="premium", policy_id=policy.id)

    if policy.coverage is not None:
        _validate_amount(policy.coverage, field_label="coverage", policy_id=policy.id)

    if policy.expiry_date is not None:
        # datetime is a date subclass; only whole calendar dates are accepted
        if isinstance(policy.expiry_date, datetime) or not isinstance(policy.expiry_date, date):
            raise ValueError(
                f"expiry_date of policy {policy.id!r} must be a calendar date"
            )

    return policy


def validate_policies(policies: Iterable[PolicyRecord]) -> List[PolicyRecord]:
    """
    Validate every policy of a portfolio and check that ids are unique.

    Returns:
        The policies as a list, in input order.

    Raises:
        ValueError: If any policy is malformed or an id appears twice.
    """
    if policies is None:
        raise ValueError("policies must be a list, got None")

    validated: List[PolicyRecord] = []
    seen_ids = set()
    for policy in policies:
        validate_policy(policy)
        if policy.id in seen_ids:
            raise ValueError(f"duplicate policy id {policy.id!r}")
        seen_ids.add(policy.id)
        validated.append(policy)

    return validated


__all__ = [
    "RECOGNIZED_CATEGORIES",
    "OTHER_CATEGORY",
    "CATEGORY_LABELS",
    "PolicyRecord",
    "normalize_type",
    "canonical_category",
    "category_label",
    "validate_policy",
    "validate_policies",
]
