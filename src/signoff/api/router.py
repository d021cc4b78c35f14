"""Master API router mounted at /api/v1."""

from fastapi import APIRouter

from signoff.api.routes import approvals, health, thresholds

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(thresholds.router)
api_router.include_router(approvals.router)
