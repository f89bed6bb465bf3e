"""
CEP Gateway configuration.

Settings loaded from environment variables (see config.settings for the
shared logging, tracing and HTTP options).
"""

from config.settings import ServiceSettings


class Settings(ServiceSettings):
    """CEP Gateway settings."""

    # Service Configuration
    service_name: str = "cep-gateway"
    port: int = 8080

    # Downstream Weather Orchestrator
    orchestrator_url: str = "http://localhost:8081/weather"
