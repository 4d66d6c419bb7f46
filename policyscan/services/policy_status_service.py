"""
Expiry countdown and portfolio overview helpers.

These back the dashboard figures shown next to the scan: days remaining
per policy and the headline totals of the portfolio.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from policyscan.core.policy_record import PolicyRecord, validate_policies, validate_policy
from policyscan.core.portfolio_rules import UPCOMING_WINDOW_DAYS


STATUS_EXPIRED = "expired"
STATUS_EXPIRING_SOON = "expiring_soon"
STATUS_ACTIVE = "active"
STATUS_UNKNOWN = "unknown"


def _as_date(now: Union[date, datetime]) -> date:
    if isinstance(now, datetime):
        return now.date()
    if isinstance(now, date):
        return now
    raise ValueError(f"now must be a date or datetime, got {type(now).__name__}")


def days_remaining(policy: PolicyRecord, now: Union[date, datetime]) -> Optional[int]:
    """
    Whole days left until the policy's expiry date, never below 0.

    Returns None when the policy has no expiry date.
    """
    if policy.expiry_date is None:
        return None
    remaining = (policy.expiry_date - _as_date(now)).days
    return remaining if remaining > 0 else 0


def is_expiring_soon(policy: PolicyRecord, now: Union[date, datetime]) -> bool:
    remaining = days_remaining(policy, now)
    return remaining is not None and remaining <= UPCOMING_WINDOW_DAYS


def policy_status(policy: PolicyRecord, now: Union[date, datetime]) -> str:
    """
    Classify a policy as expired, expiring_soon, active or unknown.

    A policy is still valid on its expiry date itself.
    """
    validate_policy(policy)
    if policy.expiry_date is None:
        return STATUS_UNKNOWN
    if policy.expiry_date < _as_date(now):
        return STATUS_EXPIRED
    if is_expiring_soon(policy, now):
        return STATUS_EXPIRING_SOON
    return STATUS_ACTIVE


def portfolio_status(policies: Iterable[PolicyRecord], now: Union[date, datetime]) -> List[Dict[str, Any]]:
    """Countdown and status for each policy, in input order."""
    today = _as_date(now)
    return [
        {
            "id": policy.id,
            "name": policy.name,
            "type": policy.type,
            "expiry_date": policy.expiry_date,
            "days_remaining": days_remaining(policy, today),
            "status": policy_status(policy, today),
        }
        for policy in validate_policies(policies)
    ]


@dataclass(frozen=True)
class PortfolioOverview:
    total_policies: int
    total_premium: float
    total_coverage: float
    policies_by_category: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_policies": self.total_policies,
            "total_premium": self.total_premium,
            "total_coverage": self.total_coverage,
            "policies_by_category": dict(self.policies_by_category),
        }


def summarize_portfolio(policies: Iterable[PolicyRecord]) -> PortfolioOverview:
    """
    Headline totals of a portfolio.

    Unknown coverage counts as 0. Categories are listed in order of first
    appearance.

    Raises:
        ValueError: If any policy is malformed.
    """
    validated = validate_policies(policies)

    by_category: Dict[str, int] = {}
    for policy in validated:
        by_category[policy.category] = by_category.get(policy.category, 0) + 1

    return PortfolioOverview(
        total_policies=len(validated),
        total_premium=float(sum(p.premium for p in validated)),
        total_coverage=float(sum(p.coverage or 0 for p in validated)),
        policies_by_category=by_category,
    )


__all__ = [
    "STATUS_EXPIRED",
    "STATUS_EXPIRING_SOON",
    "STATUS_ACTIVE",
    "STATUS_UNKNOWN",
    "days_remaining",
    "is_expiring_soon",
    "policy_status",
    "portfolio_status",
    "PortfolioOverview",
    "summarize_portfolio",
]
