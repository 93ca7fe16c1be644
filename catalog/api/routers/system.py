"""
System API endpoints (health).
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.api.dependencies import get_db
from catalog.database import crud

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check: database reachable and row counts."""
    try:
        user_count = crud.get_user_count(db)
        movie_count = crud.get_movie_count(db)
    except SQLAlchemyError as e:
        logger.error("Health check failed: %s", e)
        return {"status": "unhealthy", "database": str(e)}
    return {
        "status": "healthy",
        "database": "connected",
        "users": user_count,
        "movies": movie_count,
    }
