"""Service banner and health check endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.schemas.common import ApiModel
from core.config import settings
from infrastructure.database.session import get_async_session

router = APIRouter(tags=["health"])


class BannerResponse(ApiModel):
    """Service banner."""

    success: bool = True
    message: str
    version: str
    endpoints: dict[str, str]


class HealthResponse(ApiModel):
    """Health check response."""

    success: bool
    message: str
    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None


@router.get("/", response_model=BannerResponse, summary="Service banner")
async def banner() -> BannerResponse:
    """Describe the service and where its endpoints live."""
    return BannerResponse(
        message=f"{settings.app_name} is running",
        version=settings.app_version,
        endpoints={
            "bookmarks": "/bookmarks",
            "tags": "/tags",
            "health": "/health",
        },
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    summary="Basic health check",
)
async def health_check() -> HealthResponse:
    """
    Basic health check for load balancers.

    Returns service status without checking dependencies. Fast and lightweight.
    """
    return HealthResponse(
        success=True,
        message="API is healthy",
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """
    Detailed health check including database connectivity.

    Use for monitoring dashboards that need to verify all dependencies.
    """
    db_status = "unknown"

    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"

    overall_status = "healthy" if db_status == "healthy" else "degraded"

    return HealthResponse(
        success=overall_status == "healthy",
        message="API is healthy" if overall_status == "healthy" else "Database unavailable",
        status=overall_status,
        version=settings.app_version,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        database=db_status,
    )
