"""
API routes for scanning an insurance portfolio.
"""
import logging
from datetime import date
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response

from policyscan.schemas.portfolio_schema import (
    PortfolioAnalysisResponse,
    PortfolioOverviewResponse,
    PortfolioRequest,
    PortfolioStatusResponse,
    PortfolioSummaryResponse,
)
from policyscan.services.explanation_service import generate_summary
from policyscan.services.policy_status_service import portfolio_status, summarize_portfolio
from policyscan.services.portfolio_analysis_service import analyze
from policyscan.services.report_service import build_pdf_report


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


def _reference_date(request: PortfolioRequest) -> date:
    """The request's `as_of` date, or today captured once for the whole request."""
    return request.as_of or date.today()


def _bad_request(exc: ValueError, request: PortfolioRequest, action: str) -> HTTPException:
    logger.warning(
        "Validation error while %s: %s", action, exc,
        extra={"policy_count": len(request.policies)},
    )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _server_error(request: PortfolioRequest, action: str, detail: str) -> HTTPException:
    logger.exception(
        "Unexpected error while %s", action,
        extra={"policy_count": len(request.policies)},
    )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.post("/analyze", response_model=PortfolioAnalysisResponse)
def analyze_portfolio_route(request: PortfolioRequest) -> Dict[str, Any]:
    """
    Scan a portfolio and return its rating, score, coverage gaps,
    suggestions and strengths.

    - Invalid policies return HTTP 400
    - Unexpected errors return HTTP 500
    """
    try:
        result = analyze(request.to_records(), _reference_date(request))
        return result.to_dict()
    except ValueError as exc:
        raise _bad_request(exc, request, "analyzing portfolio") from exc
    except Exception as exc:
        raise _server_error(request, "analyzing portfolio", "Failed to analyze portfolio") from exc


@router.post("/overview", response_model=PortfolioOverviewResponse)
def portfolio_overview_route(request: PortfolioRequest) -> Dict[str, Any]:
    """
    Headline totals: number of policies, annual premium, total coverage.
    """
    try:
        return summarize_portfolio(request.to_records()).to_dict()
    except ValueError as exc:
        raise _bad_request(exc, request, "summarizing portfolio") from exc
    except Exception as exc:
        raise _server_error(request, "summarizing portfolio", "Failed to summarize portfolio") from exc


@router.post("/status", response_model=PortfolioStatusResponse)
def portfolio_status_route(request: PortfolioRequest) -> Dict[str, Any]:
    """
    Days remaining and expiry status for every policy.
    """
    as_of = _reference_date(request)
    try:
        return {
            "as_of": as_of,
            "policies": portfolio_status(request.to_records(), as_of),
        }
    except ValueError as exc:
        raise _bad_request(exc, request, "computing policy status") from exc
    except Exception as exc:
        raise _server_error(request, "computing policy status", "Failed to compute policy status") from exc


@router.post("/summary", response_model=PortfolioSummaryResponse)
def portfolio_summary_route(request: PortfolioRequest) -> Dict[str, Any]:
    """
    Scan a portfolio and explain the result in plain language.
    """
    try:
        records = request.to_records()
        result = analyze(records, _reference_date(request))
        overview = summarize_portfolio(records)
        return {
            "analysis": result.to_dict(),
            "summary": generate_summary(result, overview),
        }
    except ValueError as exc:
        raise _bad_request(exc, request, "explaining portfolio") from exc
    except Exception as exc:
        raise _server_error(request, "explaining portfolio", "Failed to explain portfolio") from exc


@router.post("/report")
def download_report(request: PortfolioRequest) -> Response:
    """
    Generate and download a PDF report of the portfolio scan.
    """
    as_of = _reference_date(request)
    try:
        records = request.to_records()
        pdf = build_pdf_report(analyze(records, as_of), summarize_portfolio(records), as_of)
    except ValueError as exc:
        raise _bad_request(exc, request, "building portfolio report") from exc
    except Exception as exc:
        raise _server_error(request, "building portfolio report", "Failed to generate PDF report") from exc

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=PolicyScan_Report.pdf"},
    )


@router.get("/health")
def health_check():
    """
    Health check endpoint for the portfolio scan service.
    """
    return {"status": "healthy", "service": "portfolio_scan"}
