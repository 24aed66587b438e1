"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the complaint portal
"""
from fastapi import APIRouter

from app.api.v1 import auth, complaints, users
from app.config.logging import get_logger
from app.config.settings import settings

logger = get_logger(__name__)

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        429: {"description": "Weekly Complaint Limit Reached"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(auth.router)
router.include_router(users.router)
router.include_router(complaints.router)


@router.get("/health", tags=["System Health"])
def api_health_check():
    """Liveness probe."""
    return {
        "status": "healthy",
        "version": settings.API_VERSION,
        "api_version": "v1",
        "environment": settings.ENVIRONMENT,
    }


logger.debug(f"API v1 router initialized with {len(router.routes)} routes")
