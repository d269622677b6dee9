"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(default_factory=lambda: ["*"])
    allow_credentials: bool = False
    allow_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE"]
    )
    allow_headers: list[str] = Field(default_factory=lambda: ["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./database.db",
        description="SQLAlchemy database connection URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured URL targets SQLite."""
        return self.url.startswith("sqlite")

    def engine_options(self) -> dict[str, Any]:
        """Keyword arguments for ``create_engine`` matching the backend."""
        if self.is_sqlite:
            # Handlers run in the worker thread pool
            return {"echo": self.echo, "connect_args": {"check_same_thread": False}}

        return {
            "echo": self.echo,
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": True,
        }


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="0.0.0.0", description="Application host")
    port: int = Field(default=3000, description="Application port")
    api_prefix: str = Field(default="/api", description="Path prefix for the API router")
    static_dir: str = Field(
        default="public", description="Directory served as static files at the root path"
    )
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        host = "localhost" if self.host in ("0.0.0.0", "::") else self.host
        return f"http://{host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
