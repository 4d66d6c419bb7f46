"""
Explanation service for turning a portfolio analysis into plain,
encouraging language for the policy holder.
"""
from __future__ import annotations

from typing import List, Optional, Union

from policyscan.core.config import get_settings
from policyscan.services.policy_status_service import PortfolioOverview
from policyscan.services.portfolio_analysis_service import PortfolioAnalysis, PortfolioRating


_RATING_OPENERS = {
    PortfolioRating.GOOD: "Your insurance portfolio is in good shape.",
    PortfolioRating.AVERAGE: "Your insurance portfolio covers the basics, with room to improve.",
    PortfolioRating.BAD: "Your insurance portfolio has important gaps that deserve attention.",
}


def _format_money(amount: Optional[Union[float, int]]) -> str:
    """Format numeric values as currency-like strings."""
    if amount is None:
        return "0.00"
    return f"{float(amount):,.2f}"


def generate_summary(
    analysis: PortfolioAnalysis,
    overview: Optional[PortfolioOverview] = None,
) -> str:
    """
    Convert a portfolio analysis into a readable explanation.

    Sections follow the analysis: rating and score, optional headline
    totals, missing coverage, recommendations and strengths.
    """
    currency = get_settings().currency_symbol
    lines: List[str] = []

    lines.append(_RATING_OPENERS[analysis.overall_rating])
    lines.append(f"- Overall rating: {analysis.overall_rating.value}")
    lines.append(f"- Portfolio score: {analysis.score}/100")

    if overview is not None:
        lines.append("")
        lines.append("Portfolio at a glance:")
        lines.append(f"- Policies on record: {overview.total_policies}")
        lines.append(f"- Annual premium: {currency}{_format_money(overview.total_premium)}")
        lines.append(f"- Total coverage: {currency}{_format_money(overview.total_coverage)}")

    lines.append("")
    if analysis.coverage_gaps:
        lines.append("Essential coverage missing from your portfolio:")
        for gap in analysis.coverage_gaps:
            lines.append(f"- {gap}")
    else:
        lines.append("Good news: both health and life insurance are part of your portfolio.")

    if analysis.suggestions:
        lines.append("")
        lines.append("Recommendations:")
        for suggestion in analysis.suggestions:
            lines.append(f"- {suggestion}")

    if analysis.strengths:
        lines.append("")
        lines.append("What you are doing well:")
        for strength in analysis.strengths:
            lines.append(f"- {strength}")

    lines.append("")
    lines.append(
        "This scan applies a fixed set of checks and is not personal financial advice. "
        "Talk to your insurer or an advisor before changing your coverage."
    )

    return "\n".join(lines)


__all__ = ["generate_summary"]
