"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pkgtrack import __version__
from pkgtrack.config import settings
from pkgtrack.db.engine import create_db_engine, create_schema, create_session_factory
from pkgtrack.logging_config import configure_logging
from pkgtrack.services.registry import Registry

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=settings.json_logs)

logger = logging.getLogger(__name__)


def build_registry(session_factory) -> Registry:
    """Registry wired with the configured relation status policy."""
    statuses = settings.default_relation_statuses if settings.strict_relation_status else None
    return Registry(session_factory, allowed_relation_statuses=statuses)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    # Tests inject their own engine before startup
    owns_engine = getattr(app.state, "db_engine", None) is None
    if owns_engine:
        engine = create_db_engine(settings.database_url)
        await create_schema(engine)
        app.state.db_engine = engine
        app.state.db_session_factory = create_session_factory(engine)
        app.state.registry = build_registry(app.state.db_session_factory)

    logger.info("pkgtrack API started (db=%s)", "sqlite" if settings.is_sqlite else "server")
    yield

    if owns_engine:
        await app.state.db_engine.dispose()
    logger.info("pkgtrack API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="pkgtrack API",
        version=__version__,
        description="Package review coordination: assignments, marks and dependency blocking.",
        lifespan=lifespan,
    )

    from pkgtrack.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(TraceIdMiddleware)

    from pkgtrack.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    from pkgtrack.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
