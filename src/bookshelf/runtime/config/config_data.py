"""Typed shape of the ``config:`` section in config.yaml.

Every field has a default, so an absent file or section still yields a
working configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class CORSConfig(BaseModel):
    """Origins, methods and headers allowed by the CORS middleware."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Loguru sinks: console always, rotating file when ``file`` is set."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class StoreConfig(BaseModel):
    """Book store configuration model."""

    seed: bool = Field(
        default=True, description="Load the three seed books at startup"
    )
    lock_timeout_seconds: float = Field(
        default=5.0,
        description="Seconds to wait for the store lock; -1 waits forever",
    )

    @field_validator("lock_timeout_seconds")
    @classmethod
    def _check_lock_timeout(cls, value: float) -> float:
        if value < 0 and value != -1:
            raise ValueError("must be -1 (wait forever) or a non-negative number")
        return value


class AppConfig(BaseModel):
    """Service identity and bind address."""

    name: str = Field(default="bookshelf", description="Service name")
    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="0.0.0.0", description="Application host")
    port: int = Field(default=3000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """URL clients use to reach the service."""
        scheme = "https" if self.environment == "production" else "http"
        host = "localhost" if self.host == "0.0.0.0" else self.host
        return f"{scheme}://{host}:{self.port}"


class ConfigData(BaseModel):
    """Root of the configuration tree."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    store: StoreConfig = Field(
        default_factory=StoreConfig, description="Book store configuration"
    )
