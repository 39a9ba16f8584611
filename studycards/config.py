"""
Configuration management using pydantic-settings.
Loads environment variables with type validation.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Werkstoffkunde Karteikarten"
    app_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./wk1-karteikarten.db"

    # CORS
    cors_origins: str = "http://localhost:5173,http://localhost:4820"

    # Server
    host: str = "0.0.0.0"
    port: int = 4820

    # Rate limiting
    rate_limit_enabled: bool = True
    import_rate_limit: str = "30/minute"

    # Export
    export_title: str = "Werkstoffkunde 1 – Formelsammlung"
    export_version: str = "1.0"
    export_schema_version: str = "1.0"

    # Review sessions
    review_max_sessions: int = 500

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance.
    Use dependency injection in FastAPI routes.
    """
    return Settings()
