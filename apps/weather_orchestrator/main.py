"""
Weather Orchestrator FastAPI Application.

Looks up the city of a CEP and returns its current temperature in Celsius,
Fahrenheit and Kelvin.

Key Features:
- POST /weather - Resolve {"cep": "..."} to {"city", "temp_C", "temp_F", "temp_K"}
- GET /health - Liveness check
- GET /metrics - Prometheus metrics

Environment Variables:
    WEATHER_API_KEY: WeatherAPI key (required for weather lookups)
    VIACEP_BASE_URL: ViaCEP base URL (default: https://viacep.com.br)
    WEATHER_API_BASE_URL: WeatherAPI base URL (default: http://api.weatherapi.com)
    ZIPKIN_ENDPOINT: Zipkin span collector (default: http://localhost:9411/api/v2/spans)
    TRACING_ENABLED: Export spans (default: true)
    LOG_LEVEL: Logging level (default: INFO)
    PORT: Listen port (default: 8081)

Usage:
    $ uvicorn apps.weather_orchestrator.main:app --host 0.0.0.0 --port 8081
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import PlainTextResponse
from prometheus_client import make_asgi_app

from apps.weather_orchestrator import __version__
from apps.weather_orchestrator.clients import ViaCepClient, WeatherApiClient
from apps.weather_orchestrator.config import Settings
from apps.weather_orchestrator.metrics import orchestrator_requests_total
from apps.weather_orchestrator.orchestrator import WeatherOrchestrator
from apps.weather_orchestrator.schemas import WeatherResult
from libs.common.error_handlers import add_error_handlers
from libs.common.exceptions import (
    CepWeatherError,
    MalformedInputError,
    PostalCodeNotFoundError,
    WeatherLookupFailedError,
)
from libs.common.logging import configure_logging
from libs.common.schemas import parse_postal_code_request
from libs.common.tracing import (
    Tracing,
    add_tracing_middleware,
    configure_tracing,
    get_traced_client,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Metric label per failure class
_FAILURE_OUTCOMES: dict[type[CepWeatherError], str] = {
    MalformedInputError: "invalid",
    PostalCodeNotFoundError: "not_found",
    WeatherLookupFailedError: "weather_failed",
}


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/health", response_class=PlainTextResponse, tags=["Health"])
async def health_check() -> str:
    """Liveness check, independent of ViaCEP and WeatherAPI."""
    return "OK"


@router.post("/weather", response_model=WeatherResult, tags=["Weather"])
async def weather(request: Request) -> WeatherResult:
    """
    Resolve a CEP to the current weather of its city.

    Returns:
        WeatherResult serialized as {"city", "temp_C", "temp_F", "temp_K"}

    Raises:
        MalformedInputError: 422, body is not {"cep": "<string>"}
        PostalCodeNotFoundError: 404, CEP could not be resolved
        WeatherLookupFailedError: 500, weather could not be fetched

    Examples:
        >>> import requests
        >>> requests.post("http://localhost:8081/weather", json={"cep": "99999999"}).json()
        {'message': 'can not find zipcode'}
    """
    tracer = request.app.state.tracing.tracer
    orchestrator: WeatherOrchestrator = request.app.state.orchestrator
    body = await request.body()

    with tracer.start_as_current_span("weather-handler") as span:
        try:
            cep_request = parse_postal_code_request(body)
            span.set_attribute("cep", cep_request.cep)
            result = await orchestrator.get_weather(cep_request.cep)
        except CepWeatherError as e:
            orchestrator_requests_total.labels(
                outcome=_FAILURE_OUTCOMES.get(type(e), "error")
            ).inc()
            raise

        span.set_attributes(
            {
                "response.city": result.city,
                "response.temp_c": result.temperature_celsius,
                "response.temp_f": result.temperature_fahrenheit,
                "response.temp_k": result.temperature_kelvin,
            }
        )

    orchestrator_requests_total.labels(outcome="success").inc()
    return result


# ============================================================================
# Application Factory
# ============================================================================


def create_app(
    settings: Settings | None = None,
    tracing: Tracing | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the orchestrator application.

    Args:
        settings: Service settings (loaded from the environment if None)
        tracing: Tracing bundle (built from settings if None)
        transport: httpx transport for outbound calls (tests inject a mock)

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings()
    tracing = tracing or configure_tracing(
        settings.service_name,
        settings.service_version,
        zipkin_endpoint=settings.zipkin_endpoint,
        enabled=settings.tracing_enabled,
    )
    http_client = get_traced_client(
        tracing,
        timeout=settings.http_timeout_seconds,
        transport=transport,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            f"Starting Weather Orchestrator (version={__version__})",
            extra={
                "viacep_base_url": settings.viacep_base_url,
                "weather_api_base_url": settings.weather_api_base_url,
            },
        )
        if not settings.weather_api_key.get_secret_value():
            logger.warning("WEATHER_API_KEY not set - every weather lookup will fail")
        try:
            yield
        finally:
            logger.info("Shutting down Weather Orchestrator...")
            await http_client.aclose()
            tracing.shutdown()

    app = FastAPI(
        title="Weather Orchestrator",
        description="Resolves Brazilian postal codes to current city weather",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.tracing = tracing
    app.state.orchestrator = WeatherOrchestrator(
        cep_client=ViaCepClient(http_client, settings.viacep_base_url, tracing),
        weather_client=WeatherApiClient(
            http_client,
            settings.weather_api_base_url,
            settings.weather_api_key.get_secret_value(),
            tracing,
        ),
    )

    add_error_handlers(app)
    add_tracing_middleware(app, tracing)
    app.include_router(router)
    app.mount("/metrics", make_asgi_app())

    return app


settings = Settings()
configure_logging(service_name=settings.service_name, log_level=settings.log_level)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "apps.weather_orchestrator.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
