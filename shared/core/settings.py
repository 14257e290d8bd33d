"""Configuration management using Pydantic settings.

Two-layer configuration system:
1. Environment: Loads raw values from environment variables (UPPER_CASE)
2. Settings: Clean service settings with lowercase fields and derived values

Every variable is optional. Integer variables that cannot be parsed fall back
to their documented default instead of failing startup.
"""

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_DEFAULT_JWT_SECRET = "dev-secret"

LOG_FORMATS = ("json", "text")


class Environment(BaseSettings):
    """Raw environment variable loading."""

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Core ───────────────────────────────────────────────────────────

    APP_ENV: str = Field(
        default="development",
        validation_alias=AliasChoices("APP_ENV", "NODE_ENV"),
    )
    HOST: str = Field(default="0.0.0.0")
    PORT: int | None = Field(default=None)
    WAITRESS_THREADS: int = Field(default=4)
    GRACEFUL_SHUTDOWN_TIMEOUT: int = Field(default=30)

    # ── Logging ────────────────────────────────────────────────────────

    LOG_LEVEL: str | None = Field(default=None)
    LOG_FORMAT: str = Field(default="json")

    # ── Database ───────────────────────────────────────────────────────

    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=5432)
    DB_NAME: str = Field(default="devops_demo")
    DB_POOL_MIN: int = Field(default=2)
    DB_POOL_MAX: int = Field(default=10)

    # ── Redis ──────────────────────────────────────────────────────────

    REDIS_HOST: str = Field(default="localhost")
    REDIS_PORT: int = Field(default=6379)
    REDIS_PASSWORD: str | None = Field(default=None)
    REDIS_DB: int = Field(default=0)

    # ── Security ───────────────────────────────────────────────────────

    CORS_ORIGIN: str = Field(default="*")
    RATE_LIMIT_MAX: int = Field(default=100)
    JWT_SECRET: str = Field(default=_DEFAULT_JWT_SECRET)
    JWT_EXPIRES_IN: str = Field(default="24h")

    # ── Health checks ──────────────────────────────────────────────────

    HEALTH_TIMEOUT: int = Field(default=5000)
    HEALTH_INTERVAL: int = Field(default=30000)

    @field_validator(
        "PORT",
        "WAITRESS_THREADS",
        "GRACEFUL_SHUTDOWN_TIMEOUT",
        "DB_PORT",
        "DB_POOL_MIN",
        "DB_POOL_MAX",
        "REDIS_PORT",
        "REDIS_DB",
        "RATE_LIMIT_MAX",
        "HEALTH_TIMEOUT",
        "HEALTH_INTERVAL",
        mode="before",
    )
    @classmethod
    def _fallback_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Replace unparseable integers with the field default."""
        if value is None:
            return cls.model_fields[info.field_name].default
        try:
            return int(str(value).strip())
        except ValueError:
            return cls.model_fields[info.field_name].default


class DatabaseSettings(BaseModel):
    host: str = "localhost"
    port: int = 5432
    name: str = "devops_demo"
    ssl: bool = False
    pool_min: int = 2
    pool_max: int = 10


class RedisSettings(BaseModel):
    host: str = "localhost"
    port: int = 6379
    password: str | None = None
    db: int = 0


class SecuritySettings(BaseModel):
    cors_origin: str = "*"
    cors_credentials: bool = True
    rate_limit_window_ms: int = 15 * 60 * 1000
    rate_limit_max: int = 100
    jwt_secret: str = _DEFAULT_JWT_SECRET
    jwt_expires_in: str = "24h"


class HealthCheckSettings(BaseModel):
    timeout_ms: int = 5000
    interval_ms: int = 30000


class LoggingSettings(BaseModel):
    level: str = "debug"
    format: str = "json"


class Settings(BaseModel):
    """Service settings with lowercase fields and derived values."""

    model_config = ConfigDict(from_attributes=True)

    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 8080
    waitress_threads: int = 4
    graceful_shutdown_timeout: int = 30

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    health_check: HealthCheckSettings = Field(default_factory=HealthCheckSettings)

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    def validate_config(self) -> None:
        from shared.core.exceptions import ConfigurationError

        errors: list[str] = []

        if self.graceful_shutdown_timeout <= 0:
            errors.append("GRACEFUL_SHUTDOWN_TIMEOUT must be a positive number of seconds")

        if self.logging.format not in LOG_FORMATS:
            errors.append(
                f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {self.logging.format!r}"
            )

        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            )

    def config_warnings(self) -> list[str]:
        warnings: list[str] = []

        if self.is_production and self.security.jwt_secret == _DEFAULT_JWT_SECRET:
            warnings.append("JWT_SECRET is using the development default in production")

        return warnings

    @classmethod
    def load(cls, env: "Environment | None" = None, default_port: int = 8080) -> "Settings":
        if env is None:
            env = Environment()

        is_development = env.APP_ENV == "development"
        log_level = env.LOG_LEVEL or ("debug" if is_development else "info")

        return cls(
            app_env=env.APP_ENV,
            host=env.HOST,
            port=env.PORT if env.PORT is not None else default_port,
            waitress_threads=env.WAITRESS_THREADS,
            graceful_shutdown_timeout=env.GRACEFUL_SHUTDOWN_TIMEOUT,
            logging=LoggingSettings(level=log_level.lower(), format=env.LOG_FORMAT.lower()),
            database=DatabaseSettings(
                host=env.DB_HOST,
                port=env.DB_PORT,
                name=env.DB_NAME,
                ssl=env.APP_ENV == "production",
                pool_min=env.DB_POOL_MIN,
                pool_max=env.DB_POOL_MAX,
            ),
            redis=RedisSettings(
                host=env.REDIS_HOST,
                port=env.REDIS_PORT,
                password=env.REDIS_PASSWORD,
                db=env.REDIS_DB,
            ),
            security=SecuritySettings(
                cors_origin=env.CORS_ORIGIN,
                rate_limit_max=env.RATE_LIMIT_MAX,
                jwt_secret=env.JWT_SECRET,
                jwt_expires_in=env.JWT_EXPIRES_IN,
            ),
            health_check=HealthCheckSettings(
                timeout_ms=env.HEALTH_TIMEOUT,
                interval_ms=env.HEALTH_INTERVAL,
            ),
        )
