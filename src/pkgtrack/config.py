"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///pkgtrack.db"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    json_logs: bool = False

    # Relation statuses accepted when strict_relation_status is enabled
    default_relation_statuses: list[str] = ["outdated_dep", "missing_dep"]
    strict_relation_status: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "PKGTRACK_",
    }

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
