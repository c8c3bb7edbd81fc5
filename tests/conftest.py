"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from pkgtrack.db.engine import create_db_engine, create_schema, create_session_factory
from pkgtrack.services.registry import Registry


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_db_engine("sqlite+aiosqlite:///")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
async def db_session(session_factory):
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def registry(session_factory):
    return Registry(session_factory)


@pytest.fixture
def app(db_engine, session_factory, registry):
    """Create a test application instance with in-memory DB."""
    from pkgtrack.main import create_app

    _app = create_app()
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = session_factory
    _app.state.registry = registry
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def seeded(registry):
    """Packagers 42/alice and 43/bob, packages 7/libfoo, 8/libbar, 9/libbaz."""
    await registry.upsert_packager(42, "alice")
    await registry.upsert_packager(43, "bob")
    await registry.upsert_package(7, "libfoo")
    await registry.upsert_package(8, "libbar")
    await registry.upsert_package(9, "libbaz")
    return registry
