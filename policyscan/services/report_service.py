"""
PDF report rendering for portfolio scans.
"""
from __future__ import annotations

from datetime import date
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from policyscan.core.config import get_settings
from policyscan.services.policy_status_service import PortfolioOverview
from policyscan.services.portfolio_analysis_service import PortfolioAnalysis


_RATING_COLORS = {
    "Good": "#16a34a",
    "Average": "#ca8a04",
    "Bad": "#dc2626",
}


def _bullets(items: List[str], styles) -> List[Paragraph]:
    return [Paragraph(f"&bull; {escape(item)}", styles["Normal"]) for item in items]


def build_pdf_report(
    analysis: PortfolioAnalysis,
    overview: Optional[PortfolioOverview] = None,
    as_of: Optional[date] = None,
) -> bytes:
    """
    Render a portfolio analysis (and optional overview) as a PDF document.

    Returns:
        The PDF file contents.
    """
    currency = get_settings().currency_symbol

    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=(8.5 * inch, 11 * inch))
    styles = getSampleStyleSheet()
    elements = []

    title_style = ParagraphStyle(
        "ReportTitle",
        parent=styles["Heading1"],
        fontSize=24,
        textColor=colors.HexColor("#2563eb"),
        spaceAfter=30,
        alignment=1,
    )
    elements.append(Paragraph("PolicyScan", title_style))
    elements.append(Paragraph("Insurance Portfolio Scan Report", styles["Heading2"]))
    if as_of is not None:
        elements.append(Paragraph(f"As of {as_of.isoformat()}", styles["Normal"]))
    elements.append(Spacer(1, 0.3 * inch))

    rating = analysis.overall_rating.value
    rating_color = _RATING_COLORS.get(rating, "#4b5563")
    elements.append(Paragraph("Portfolio Rating", styles["Heading3"]))
    elements.append(
        Paragraph(
            f'<b>Rating:</b> <font color="{rating_color}">{rating}</font><br/>'
            f"<b>Score:</b> {analysis.score}/100",
            styles["Normal"],
        )
    )
    elements.append(Spacer(1, 0.2 * inch))

    if overview is not None:
        elements.append(Paragraph("Portfolio Overview", styles["Heading3"]))
        elements.append(Spacer(1, 0.1 * inch))
        table_data = [
            ["Total Policies", "Annual Premium", "Total Coverage"],
            [
                str(overview.total_policies),
                f"{currency}{overview.total_premium:,.0f}",
                f"{currency}{overview.total_coverage:,.0f}",
            ],
        ]
        table = Table(table_data, colWidths=[2 * inch, 2 * inch, 2 * inch])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2563eb")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, 0), 10),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 12),
            ("BACKGROUND", (0, 1), (-1, -1), colors.beige),
            ("GRID", (0, 0), (-1, -1), 1, colors.black),
        ]))
        elements.append(table)
        elements.append(Spacer(1, 0.3 * inch))

    if analysis.coverage_gaps:
        elements.append(Paragraph("Coverage Gaps", styles["Heading3"]))
        elements.extend(_bullets([f"Missing: {gap}" for gap in analysis.coverage_gaps], styles))
        elements.append(Spacer(1, 0.2 * inch))

    elements.append(Paragraph("Recommendations", styles["Heading3"]))
    if analysis.suggestions:
        elements.extend(_bullets(analysis.suggestions, styles))
    else:
        elements.append(Paragraph("No recommendations at this time.", styles["Normal"]))
    elements.append(Spacer(1, 0.2 * inch))

    if analysis.strengths:
        elements.append(Paragraph("Portfolio Strengths", styles["Heading3"]))
        elements.extend(_bullets(analysis.strengths, styles))
        elements.append(Spacer(1, 0.3 * inch))

    elements.append(
        Paragraph("Generated by PolicyScan - Your Insurance Portfolio Assistant", styles["Normal"])
    )

    doc.build(elements)
    return buffer.getvalue()


__all__ = ["build_pdf_report"]
