from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Project Catalog API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Database
    database_url: str = "sqlite+aiosqlite:///./projects.db"
    database_migrations_url: str | None = None
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False
    # Upper bound for a single service operation (transaction included)
    database_operation_timeout_seconds: float = 10.0
    # Apply Alembic migrations on startup
    database_run_migrations: bool = False
    # Create tables on startup instead of relying on Alembic (dev/test only)
    database_create_tables: bool = False

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Sample data
    seed_sample_data: bool = False

    # Shutdown
    shutdown_grace_period: int = 30

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Rate Limiting
    global_rate_limit_per_second: int = 10  # Max requests/second per IP
    global_rate_limit_burst: int = 20  # Token bucket burst capacity
    write_rate_limit: str = "60/minute"  # slowapi limit for mutating endpoints

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("database_operation_timeout_seconds")
    @classmethod
    def validate_operation_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("DATABASE_OPERATION_TIMEOUT_SECONDS must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
