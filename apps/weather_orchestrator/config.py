"""
Weather Orchestrator configuration.

Settings loaded from environment variables (see config.settings for the
shared logging, tracing and HTTP options).

Example:
    export WEATHER_API_KEY="..."
    export VIACEP_BASE_URL="https://viacep.com.br"
"""

from pydantic import Field, SecretStr

from config.settings import ServiceSettings


class Settings(ServiceSettings):
    """Weather Orchestrator settings."""

    # Service Configuration
    service_name: str = "weather-orchestrator"
    port: int = 8081

    # Address lookup (ViaCEP)
    viacep_base_url: str = "https://viacep.com.br"

    # Weather provider (WeatherAPI)
    weather_api_base_url: str = "http://api.weatherapi.com"
    weather_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="WeatherAPI key; every weather lookup fails while it is empty",
    )
