"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Path, Query, Request

from pkgtrack.models.registry import INT64_MAX, INT64_MIN
from pkgtrack.services.registry import Registry


async def get_db(request: Request) -> AsyncGenerator:
    """Yield a database session from the app's session factory."""
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


def get_registry(request: Request) -> Registry:
    """Return the process-wide registry built at startup."""
    return request.app.state.registry


# Type aliases for dependency injection
DBSession = Annotated[object, Depends(get_db)]
RegistryDep = Annotated[Registry, Depends(get_registry)]

# Integer path and query parameters bounded to what the id columns can store
IdPath = Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX)]
OptionalIdQuery = Annotated[int | None, Query(ge=INT64_MIN, le=INT64_MAX)]
