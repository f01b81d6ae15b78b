"""Health check endpoint."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import DATABASE_NAME, get_mongodb_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def _check_mongodb() -> dict:
    client = get_mongodb_client()
    if client is None:
        return {"status": "unhealthy", "message": "Connection failed or not configured"}
    try:
        client.admin.command('ping')
    except PyMongoError as e:
        logger.warning("MongoDB health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "message": "Ping failed"}
    return {"status": "healthy", "database": DATABASE_NAME}


@router.get("")
async def health():
    """Report MongoDB reachability. 503 while the database is down."""
    mongodb = _check_mongodb()
    healthy = mongodb["status"] == "healthy"
    body = {
        "status": "healthy" if healthy else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {"mongodb": mongodb},
    }
    return JSONResponse(
        content=body,
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
