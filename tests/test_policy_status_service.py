from datetime import datetime

import pytest

from policyscan.services.policy_status_service import (
    PortfolioOverview,
    days_remaining,
    is_expiring_soon,
    policy_status,
    portfolio_status,
    summarize_portfolio,
)


@pytest.mark.parametrize("days, remaining", [(10, 10), (0, 0), (-7, 0), (400, 400)])
def test_days_remaining(today, make_policy, days, remaining):
    assert days_remaining(make_policy("auto", expiry_days=days), today) == remaining


def test_days_remaining_without_expiry(today, make_policy):
    assert days_remaining(make_policy("auto", expiry_days=None), today) is None
    assert is_expiring_soon(make_policy("auto", expiry_days=None), today) is False


def test_days_remaining_accepts_datetime(today, make_policy):
    policy = make_policy("auto", expiry_days=3)
    assert days_remaining(policy, datetime(today.year, today.month, today.day, 18, 30)) == 3


@pytest.mark.parametrize(
    "days, expected",
    [
        (-1, "expired"),
        (0, "expiring_soon"),
        (30, "expiring_soon"),
        (31, "active"),
        (None, "unknown"),
    ],
)
def test_policy_status(today, make_policy, days, expected):
    assert policy_status(make_policy("home", expiry_days=days), today) == expected


def test_portfolio_status_lists_policies_in_order(today, make_policy):
    policies = [
        make_policy("home", expiry_days=-2, name="Old Home"),
        make_policy("auto", expiry_days=90, name="Car"),
    ]

    rows = portfolio_status(policies, today)

    assert [row["name"] for row in rows] == ["Old Home", "Car"]
    assert rows[0]["status"] == "expired"
    assert rows[0]["days_remaining"] == 0
    assert rows[1]["status"] == "active"
    assert rows[1]["days_remaining"] == 90


def test_summarize_portfolio(make_policy):
    policies = [
        make_policy("Health", premium=1200, coverage=500_000),
        make_policy("health", premium=800),
        make_policy("Pet", premium=50.5, coverage=2_000),
    ]

    overview = summarize_portfolio(policies)

    assert overview == PortfolioOverview(
        total_policies=3,
        total_premium=2050.5,
        total_coverage=502_000.0,
        policies_by_category={"health": 2, "other": 1},
    )
    assert overview.to_dict()["policies_by_category"] == {"health": 2, "other": 1}


def test_summarize_empty_portfolio():
    overview = summarize_portfolio([])
    assert overview.total_policies == 0
    assert overview.total_premium == 0.0
    assert overview.total_coverage == 0.0
    assert overview.policies_by_category == {}


def test_summarize_portfolio_rejects_negative_premium(make_policy):
    with pytest.raises(ValueError):
        summarize_portfolio([make_policy("auto", premium=-1)])
