"""
System API endpoints (health).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from moviereviews.api.dependencies import get_db
from moviereviews.core.errors import StorageFailure
from moviereviews.database import crud

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check: database reachable and row counts."""
    try:
        user_count = crud.get_user_count(db)
        movie_count = crud.get_movie_count(db)
    except StorageFailure as e:
        return {"status": "unhealthy", "database": e.message}
    return {
        "status": "healthy",
        "database": "connected",
        "users": user_count,
        "movies": movie_count,
    }
