import pytest

from policyscan.core.portfolio_rules import (
    DEFAULT_RULES,
    HEALTH_COVERAGE_THRESHOLD,
    CoverageRule,
    DiversityRule,
    ExpiredPolicyRule,
    PortfolioContext,
    PremiumSummaryRule,
    PresenceRule,
    UpcomingExpirationRule,
    format_amount,
)


def test_default_rule_order():
    assert [rule.name for rule in DEFAULT_RULES] == [
        "health_coverage",
        "life_coverage",
        "auto_presence",
        "home_presence",
        "expired_policies",
        "upcoming_expirations",
        "diversity",
        "premium_summary",
    ]


def test_context_keeps_first_policy_per_category(today, make_policy):
    first = make_policy("Health", coverage=10)
    second = make_policy("health", coverage=20)
    travel = make_policy("travel")
    pet = make_policy("Pet")

    context = PortfolioContext.build([first, second, travel, pet], today)

    assert context.first_of("health") is first
    assert context.categories == {"health", "travel", "other"}
    assert context.distinct_types == {"health", "travel", "pet"}
    assert context.first_of("life") is None
    assert context.today == today


def test_coverage_rule_missing_category(today):
    rule = DEFAULT_RULES[0]
    outcome = rule.evaluate(PortfolioContext.build([], today))

    assert outcome.score_delta == 0
    assert outcome.coverage_gaps == ["Health Insurance"]
    assert len(outcome.suggestions) == 1
    assert outcome.strengths == []


def test_coverage_rule_custom_threshold(today, make_policy):
    rule = CoverageRule(
        category="travel",
        gap_label="Travel Insurance",
        threshold=50_000,
        points=7,
        missing_message="add travel",
        low_message="raise travel",
        strength="travel ok",
    )

    low = rule.evaluate(PortfolioContext.build([make_policy("travel", coverage=49_999)], today))
    ok = rule.evaluate(PortfolioContext.build([make_policy("travel", coverage=50_000)], today))

    assert low.suggestions == ["raise travel"] and low.score_delta == 0
    assert ok.strengths == ["travel ok"] and ok.score_delta == 7


def test_coverage_rule_at_threshold_earns_points(today, make_policy):
    context = PortfolioContext.build(
        [make_policy("health", coverage=HEALTH_COVERAGE_THRESHOLD)], today
    )
    outcome = DEFAULT_RULES[0].evaluate(context)

    assert outcome.score_delta == 25
    assert outcome.strengths == ["Good health insurance coverage"]


def test_presence_rule(today, make_policy):
    rule = PresenceRule("auto", 15, "add auto", "auto ok")

    absent = rule.evaluate(PortfolioContext.build([make_policy("home")], today))
    present = rule.evaluate(PortfolioContext.build([make_policy("AUTO")], today))

    assert absent.suggestions == ["add auto"]
    assert absent.coverage_gaps == []
    assert present.score_delta == 15
    assert present.strengths == ["auto ok"]


def test_expired_rule_ignores_missing_dates(today, make_policy):
    policies = [make_policy("auto", expiry_days=None), make_policy("home", expiry_days=-1)]
    outcome = ExpiredPolicyRule().evaluate(PortfolioContext.build(policies, today))

    assert outcome.score_delta == -10
    assert outcome.suggestions == ["You have 1 expired policy. Renew them immediately."]


def test_expired_rule_nothing_expired(today, make_policy):
    outcome = ExpiredPolicyRule().evaluate(PortfolioContext.build([make_policy("auto")], today))
    assert outcome.score_delta == 0
    assert outcome.suggestions == []


@pytest.mark.parametrize("days, counted", [(-1, False), (0, True), (15, True), (30, True), (31, False)])
def test_upcoming_rule_window(today, make_policy, days, counted):
    outcome = UpcomingExpirationRule().evaluate(
        PortfolioContext.build([make_policy("auto", expiry_days=days)], today)
    )
    assert bool(outcome.suggestions) is counted
    assert outcome.score_delta == 0


def test_diversity_rule_threshold(today, make_policy):
    rule = DiversityRule()
    two = PortfolioContext.build([make_policy("auto"), make_policy("home")], today)
    three = PortfolioContext.build(
        [make_policy("auto"), make_policy("home"), make_policy("travel")], today
    )

    assert rule.evaluate(two).strengths == []
    assert rule.evaluate(three).strengths == ["Good portfolio diversity"]
    assert rule.evaluate(three).score_delta == 10


def test_premium_rule(today, make_policy):
    outcome = PremiumSummaryRule().evaluate(
        PortfolioContext.build([make_policy("auto", premium=2500), make_policy("home", premium=0)], today)
    )
    assert outcome.strengths == ["Total annual premium: $2,500"]
    assert outcome.score_delta == 5


@pytest.mark.parametrize(
    "amount, text",
    [(0, "0"), (1000, "1,000"), (1000.0, "1,000"), (12345.678, "12,345.68"), (0.5, "0.50")],
)
def test_format_amount(amount, text):
    assert format_amount(amount) == text
