"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here. No scattered magic strings.
"""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED_API_KEYS = [
    "prod_key_abc123def456",
    "prod_key_ghi789jkl012",
    "dev_key_mno345pqr678",
    "test_key_stu901vwx234",
]


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        environment: Deployment mode. Internal error details are only
            returned to clients outside ``production``.
        debug: Enable interactive docs.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        api_key_header: Header carrying the API key. ``Authorization`` is
            always accepted as a fallback.
        seed_api_keys: Keys registered at startup; tier comes from the prefix.
        cors_origins: Origins allowed by the CORS middleware.
        rate_limit_enabled: Toggle for the per-client rate limiter.
        rate_limit_default: Default rate limit for all endpoints.
        max_request_size_bytes: Maximum accepted request body size.
        database_url: Optional SQLAlchemy URL of the durable product mirror.
        database_required: Refuse to start if the mirror is unreachable.
        host: Bind address for the bundled server command.
        port: Bind port for the bundled server command.
        shutdown_grace_seconds: Time allowed for in-flight requests on shutdown.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Products API"
    version: str = "1.0.0"
    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    api_key_header: str = "x-api-key"
    seed_api_keys: list[str] = list(DEFAULT_SEED_API_KEYS)

    cors_origins: list[str] = ["*"]
    rate_limit_enabled: bool = True
    rate_limit_default: str = "100/minute"
    max_request_size_bytes: int = 10 * 1_048_576  # 10 MB

    database_url: Optional[str] = None
    database_required: bool = False

    host: str = "0.0.0.0"
    port: int = 3000
    shutdown_grace_seconds: int = 5

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


settings = Settings()
