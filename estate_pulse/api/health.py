"""Health check endpoints"""

from fastapi import APIRouter, Depends, status
from datetime import datetime
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from estate_pulse.database import get_db
from estate_pulse.services.photo_storage_service import PhotoStorageService

router = APIRouter(tags=["Health"])

VERSION = "1.0.0"


@router.get("/health", status_code=status.HTTP_200_OK)
async def basic_health_check():
    """
    Basic health check endpoint

    Returns simple health status and timestamp
    """
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat() + "Z"
    }


@router.get("/api/v1/health", status_code=status.HTTP_200_OK)
async def detailed_health_check(db: AsyncSession = Depends(get_db)):
    """
    Detailed health check with service dependency status

    Checks connectivity to:
    - Database
    - S3 photo bucket

    Returns overall status and individual service statuses
    """
    services = {}
    overall_status = "healthy"

    # Check database connectivity
    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar_one()
        services["database"] = "connected"
    except Exception as e:
        services["database"] = f"disconnected: {str(e)}"
        overall_status = "degraded"

    # Check S3 connectivity
    try:
        PhotoStorageService().check_bucket()
        services["s3"] = "connected"
    except Exception as e:
        services["s3"] = f"disconnected: {str(e)}"
        overall_status = "degraded"

    return {
        "status": overall_status,
        "version": VERSION,
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "services": services
    }
