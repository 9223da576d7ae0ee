"""Application configuration using Pydantic Settings.

This module provides centralized configuration management with environment
variable validation, type coercion, and default values.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log format options."""

    JSON = "json"
    CONSOLE = "console"


class CacheBackend(str, Enum):
    """Cache backend options."""

    MEMORY = "memory"
    REDIS = "redis"


class AuthMode(str, Enum):
    """Authentication mode options."""

    JWT = "jwt"
    API_KEY = "api_key"


class Settings(BaseSettings):
    """Application settings with environment variable validation.

    All settings can be overridden via environment variables.
    Sensitive values should be provided via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Application
    # ========================================
    app_env: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    app_name: str = Field(
        default="BookCatalog",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_format: LogFormat = Field(
        default=LogFormat.CONSOLE,
        description="Log output format (json for production, console for dev)",
    )

    # ========================================
    # Server
    # ========================================
    host: str = Field(
        default="0.0.0.0",
        description="Server host",
    )
    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port",
    )

    # ========================================
    # Cache
    # ========================================
    cache_backend: CacheBackend = Field(
        default=CacheBackend.MEMORY,
        description="Cache backend (memory for a single process, redis to share)",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL (used when CACHE_BACKEND=redis)",
    )
    cache_namespace: str = Field(
        default="bookcatalog:",
        description="Prefix applied to every Redis key owned by this service",
    )
    paged_cache_ttl_seconds: float = Field(
        default=30,
        gt=0,
        description="Lifetime of cached paged book queries in seconds",
    )

    # ========================================
    # Catalog
    # ========================================
    seed_books: bool = Field(
        default=True,
        description="Load the demo catalogue into the in-memory store at startup",
    )

    # ========================================
    # Authentication
    # ========================================
    auth_mode: AuthMode = Field(
        default=AuthMode.JWT,
        description="Authentication mode (jwt bearer tokens or a static api key)",
    )
    jwt_secret_key: SecretStr = Field(
        default=SecretStr("dev-secret-key-change-in-production-!!!"),
        description="Secret key for JWT token signing",
    )
    jwt_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm",
    )
    jwt_expire_minutes: int = Field(
        default=60,
        ge=1,
        description="JWT access token expiry in minutes",
    )
    api_key: SecretStr = Field(
        default=SecretStr("dev-api-key-12345"),
        description="API key accepted when AUTH_MODE=api_key",
    )
    demo_username: str = Field(
        default="elif",
        description="Username accepted by the demo login endpoint",
    )
    demo_password: SecretStr = Field(
        default=SecretStr("1234"),
        description="Password accepted by the demo login endpoint",
    )

    # ========================================
    # Background refresh
    # ========================================
    book_refresh_enabled: bool = Field(
        default=True,
        description="Run the periodic catalogue refresh task",
    )
    book_refresh_interval_seconds: float = Field(
        default=30,
        gt=0,
        description="Interval between catalogue refresh ticks in seconds",
    )

    # ========================================
    # Derived Properties
    # ========================================
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == Environment.PRODUCTION

    @property
    def use_json_logs(self) -> bool:
        """Check if JSON logging should be used."""
        return self.log_format == LogFormat.JSON or self.is_production


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    This function is cached to avoid re-reading environment variables
    on every access. Use dependency injection in FastAPI routes.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
