"""
Health check endpoint for deployment monitoring.
"""
from fastapi import APIRouter, Depends
from datetime import datetime, timezone
from sqlalchemy import text
from sqlalchemy.orm import Session
from assessdesk.core import config
from assessdesk.db.session import get_db

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for deployment monitoring.

    Returns status "healthy" when the database answers, "degraded" otherwise.
    """
    status = "healthy"

    try:
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {str(e)}"
        status = "degraded"

    return {
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": db_status,
        "version": config.APP_VERSION,
    }
