"""
CampusShare Server - Status Endpoints

Health check for load balancers and the front-end.
"""

from datetime import datetime, timezone
from fastapi import APIRouter


# Create router instance
router = APIRouter(prefix="/api")


@router.get("/health", tags=["Status"])
async def health_check():
    """
    Health check endpoint to verify server is running

    Returns:
        dict: Server status information
    """
    from database import db_manager

    return {
        "status": "healthy",
        "service": "CampusShare Server",
        "version": "1.0.0",
        "database": "ready" if db_manager is not None else "not initialized",
        "timestamp_utc": datetime.now(timezone.utc).isoformat()
    }
