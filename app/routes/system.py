import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.database.connection import get_db
from app.schemas.system import DatabaseStatus, HealthCheckResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health", response_model=HealthCheckResponse)
def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Lightweight public health check.
    Reports uptime and whether the catalog database answers SELECT 1.
    """
    now = datetime.utcnow()
    start_time = getattr(request.app.state, "start_time", now)
    uptime_seconds = (now - start_time).total_seconds()

    database = DatabaseStatus(ok=True, dialect=db.get_bind().dialect.name)
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check database probe failed: %s", e)
        database.ok = False
        database.error = e.__class__.__name__

    return HealthCheckResponse(
        status="ok" if database.ok else "degraded",
        timestamp=now,
        version=settings.APP_VERSION,
        uptime_seconds=uptime_seconds,
        database=database,
    )
