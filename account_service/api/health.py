"""
Health check endpoint.

Used by load balancers and monitoring to verify the service is
running and can reach its database.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from account_service.models.base import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["Health"])


@router.get("/health-check")
def health_check(db: Session = Depends(get_db)):
    """
    Return service health including database connectivity.

    A failed ``SELECT 1`` reports the instance as degraded
    instead of raising, so the endpoint itself always answers.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError:
        logger.warning("Database health check failed", exc_info=True)
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "account-service",
        "database": db_status,
    }
