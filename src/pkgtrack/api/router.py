"""Master API router mounted at /api/v1."""

from fastapi import APIRouter

from pkgtrack.api.routes import health, marks, overview, packagers, packages

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(packagers.router)
api_router.include_router(packages.router)
api_router.include_router(marks.router)
api_router.include_router(overview.router)
