"""Settings and application wiring tests."""

from pkgtrack.config import Settings
from pkgtrack.services.registry import Registry


def test_defaults():
    s = Settings(_env_file=None)
    assert s.database_url.startswith("sqlite+aiosqlite")
    assert s.is_sqlite
    assert s.strict_relation_status is False
    assert s.default_relation_statuses == ["outdated_dep", "missing_dep"]


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("PKGTRACK_DATABASE_URL", "postgresql+asyncpg://u:p@db/pkgtrack")
    monkeypatch.setenv("PKGTRACK_STRICT_RELATION_STATUS", "true")
    s = Settings(_env_file=None)
    assert s.database_url == "postgresql+asyncpg://u:p@db/pkgtrack"
    assert not s.is_sqlite
    assert s.strict_relation_status is True


def test_build_registry_honours_strict_flag(monkeypatch, session_factory):
    from pkgtrack import main

    monkeypatch.setattr(main.settings, "strict_relation_status", True)
    registry = main.build_registry(session_factory)
    assert isinstance(registry, Registry)
    assert registry._allowed_statuses == frozenset({"outdated_dep", "missing_dep"})

    monkeypatch.setattr(main.settings, "strict_relation_status", False)
    assert main.build_registry(session_factory)._allowed_statuses is None
