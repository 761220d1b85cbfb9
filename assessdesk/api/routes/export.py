import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from assessdesk.db.session import get_db
from assessdesk.services.export_service import evaluations_to_csv
from assessdesk.services.repository import EvaluationRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["Export"])


@router.get("/evaluations")
def export_evaluations(db: Session = Depends(get_db)):
    """Download every evaluation with candidate and rubric details as CSV."""
    try:
        csv_content = evaluations_to_csv(EvaluationRepository(db).list_with_details())
    except Exception as e:
        logger.error(f"Failed to export evaluations: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to export evaluations"
        )

    return Response(
        content=csv_content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="evaluations.csv"'},
    )
