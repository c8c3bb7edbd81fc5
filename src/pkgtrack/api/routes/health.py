"""Health check endpoints."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from pkgtrack import __version__
from pkgtrack.dependencies import DBSession

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness: always 200 while the process is running."""
    return {"status": "healthy", "service": "pkgtrack", "version": __version__}


@router.get("/health/ready")
async def readiness(db: DBSession):
    """Readiness: checks database connectivity."""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as exc:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": {"database": f"error: {exc}"}},
        )
    return {"status": "ready", "checks": {"database": "ok"}}
