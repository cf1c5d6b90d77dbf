from datetime import datetime, timezone
from typing import Any, Dict

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ... import __version__
from ...core.database import get_db

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        return JSONResponse(
            status_code=503,
            content={"success": False, "status": "unhealthy", "database": "unhealthy", "timestamp": timestamp},
        )

    return {
        "success": True,
        "status": "healthy",
        "service": "Purvanchal News API",
        "version": __version__,
        "database": "healthy",
        "timestamp": timestamp,
    }
