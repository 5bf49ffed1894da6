"""
Root endpoint with service metadata
"""

from fastapi import APIRouter

from app.core.config import config

router = APIRouter()


@router.get("/")
async def root():
    """
    Root endpoint - Service information.
    """
    return {
        "service": config.service_name,
        "version": config.service_version,
        "environment": config.environment,
        "message": "Document Service is running",
        "status": "operational",
        "docs": "/docs",
    }
