"""HTTP presentation layer - REST API routes."""

from fastapi import APIRouter

from fieldops.presentation.http.admin import router as admin_router
from fieldops.presentation.http.health import router as health_router
from fieldops.presentation.http.metrics import router as metrics_router
from fieldops.presentation.http.stats import router as stats_router
from fieldops.presentation.http.submissions import router as submissions_router
from fieldops.presentation.http.users import router as users_router

# Main API router
api_router = APIRouter(prefix="/api")

# Include sub-routers
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(users_router)
api_router.include_router(submissions_router)
api_router.include_router(stats_router)
api_router.include_router(admin_router)

__all__ = ["api_router", "metrics_router"]
