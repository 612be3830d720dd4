"""
Monitoring endpoints.

Provides health and readiness checks.
"""
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finstatements import __version__
from finstatements.database import get_db

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
    version: str = __version__


class ReadinessResponse(BaseModel):
    """Readiness check response with ledger store status."""
    status: str
    database: str
    timestamp: str


@router.get("/health", response_model=HealthResponse, tags=["Monitoring"])
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the server is running.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow().isoformat(),
    )


@router.get("/ready", response_model=ReadinessResponse, tags=["Monitoring"])
def readiness_check(db: Session = Depends(get_db)) -> ReadinessResponse:
    """Readiness check: the ledger store answers a trivial query."""
    db_status = "healthy"
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        db_status = "unhealthy"

    return ReadinessResponse(
        status="ready" if db_status == "healthy" else "not_ready",
        database=db_status,
        timestamp=datetime.utcnow().isoformat(),
    )
