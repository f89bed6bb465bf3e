"""
Shared service settings loaded from environment variables.

Uses Pydantic Settings for type-safe configuration with validation.
Each service subclasses ServiceSettings with its own ports and collaborator
URLs; everything here can be overridden via environment variables or .env file.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """
    Settings common to the gateway and the weather orchestrator.

    All settings are loaded from environment variables or .env file.
    Variable names are case-insensitive (LOG_LEVEL == log_level).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Both services read the same .env
    )

    # Service Configuration
    host: str = Field(
        default="0.0.0.0",
        description="Service bind address",
    )
    service_version: str = Field(
        default="1.0.0",
        description="Version reported in trace resource metadata",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Tracing Configuration
    zipkin_endpoint: str = Field(
        default="http://localhost:9411/api/v2/spans",
        description="Zipkin v2 span collector URL",
    )
    tracing_enabled: bool = Field(
        default=True,
        description="Export spans to Zipkin (spans are still created when disabled)",
    )

    # Outbound HTTP
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout applied to every outbound HTTP call",
    )
