"""
Dashboard and report endpoints.

Both views are recomputed from the full evaluation set on every request.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from assessdesk.db.session import get_db
from assessdesk.schemas.dashboard import DashboardStats, ReportSummary
from assessdesk.services.repository import CandidateRepository, EvaluationRepository
from assessdesk.services.statistics import dashboard_stats, report_summary

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard/stats", status_code=status.HTTP_200_OK, response_model=DashboardStats)
def get_dashboard_stats(db: Session = Depends(get_db)):
    try:
        stats = dashboard_stats(EvaluationRepository(db).list())
        logger.debug(f"Dashboard stats computed: {stats.model_dump()}")
        return stats
    except Exception as e:
        logger.error(f"Failed to fetch dashboard stats: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch dashboard stats"
        )


@router.get("/reports/summary", status_code=status.HTTP_200_OK, response_model=ReportSummary)
def get_report_summary(db: Session = Depends(get_db)):
    """Score distribution, pass rate and candidate rankings."""
    try:
        return report_summary(
            EvaluationRepository(db).list(),
            CandidateRepository(db).list_with_evaluations(),
        )
    except Exception as e:
        logger.error(f"Failed to fetch report summary: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch report summary"
        )
