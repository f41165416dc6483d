"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    app_env: str = "development"
    app_debug: bool = False
    app_port: int = 8000

    # Frontend URL for CORS
    frontend_url: str = "http://localhost:3000"

    # Database - individual components
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "club_db"

    # Full URL, wins over the components when set (e.g. sqlite+aiosqlite:// locally)
    database_url_override: str | None = None

    @property
    def database_url(self) -> str:
        """Construct async database URL from components."""
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql+psycopg_async://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # JWT Settings
    jwt_secret_key: str = "your-super-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 30
    jwt_refresh_token_expire_days: int = 7

    # Logging
    log_level: str = "INFO"

    # Ordering
    max_links_per_order: int = 100

    # Dashboard client
    api_base_url: str = "http://localhost:8000/api/v1"
    client_timeout: float = 15.0
    client_max_retries: int = 3
    client_retry_delay: float = 1.0
    client_max_backoff: float = 5.0

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
