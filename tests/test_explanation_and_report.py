from policyscan.services.explanation_service import generate_summary
from policyscan.services.policy_status_service import summarize_portfolio
from policyscan.services.portfolio_analysis_service import analyze
from policyscan.services.report_service import build_pdf_report


def test_summary_for_empty_portfolio(today):
    summary = generate_summary(analyze([], today))

    assert summary.startswith("Your insurance portfolio has important gaps")
    assert "- Overall rating: Bad" in summary
    assert "- Portfolio score: 0/100" in summary
    assert "- Health Insurance" in summary
    assert "- Life Insurance" in summary
    assert "What you are doing well:" not in summary


def test_summary_with_overview(today, make_policy):
    policies = [
        make_policy("health", premium=1500, coverage=1_000_000),
        make_policy("life", premium=2500, coverage=1_000_000),
        make_policy("auto", premium=500),
        make_policy("home", premium=500),
    ]

    summary = generate_summary(analyze(policies, today), summarize_portfolio(policies))

    assert summary.startswith("Your insurance portfolio is in good shape.")
    assert "- Policies on record: 4" in summary
    assert "- Annual premium: $5,000.00" in summary
    assert "- Total coverage: $2,000,000.00" in summary
    assert "both health and life insurance" in summary
    assert "- Good portfolio diversity" in summary
    assert "Recommendations:" not in summary


def test_pdf_report_is_a_pdf(today, make_policy):
    policies = [make_policy("health", coverage=100_000), make_policy("travel", expiry_days=-4)]

    pdf = build_pdf_report(analyze(policies, today), summarize_portfolio(policies), today)

    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 500


def test_pdf_report_without_overview(today):
    assert build_pdf_report(analyze([], today)).startswith(b"%PDF")
