import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leave_management.core.config import settings
from leave_management.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

@router.get("/")
def root():
    return {
        "message": settings.app_name,
        "version": settings.version,
        "docs": "/docs",
    }

@router.get("/health")
def health_check():
    """Liveness probe; never touches the database."""
    return {
        "status": "up",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.version,
        "environment": settings.environment,
    }

@router.get("/readiness")
def readiness_check(db: Session = Depends(get_db)):
    """Readiness probe: the database answers and the leave categories are seeded."""
    try:
        db.execute(text("SELECT 1"))
        categories = db.execute(text("SELECT COUNT(*) FROM leave_categories")).scalar_one()
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        raise HTTPException(status_code=503, detail="Service not ready")
    return {
        "status": "ready",
        "components": {"database": "connected", "leave_categories": categories},
    }
