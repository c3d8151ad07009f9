"""
Health check API endpoints
"""

from fastapi import APIRouter
from app.core.monitoring import health_checker, ServiceHealth
from app.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health", response_model=ServiceHealth)
async def health_check():
    """
    Health check endpoint that returns service status and memory usage
    """
    return health_checker.get_service_health()


@router.get("/")
async def root():
    """
    Root endpoint
    """
    return {"message": f"{settings.api_title} is running", "status": "healthy"}
