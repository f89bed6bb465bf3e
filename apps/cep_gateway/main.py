"""
CEP Gateway FastAPI Application.

Validates the CEP format and relays valid requests to the Weather
Orchestrator.

Key Features:
- POST /weather - Validate {"cep": "..."} and forward it
- GET /health - Liveness check (does not probe the orchestrator)
- GET /metrics - Prometheus metrics

Environment Variables:
    ORCHESTRATOR_URL: Weather Orchestrator endpoint (default: http://localhost:8081/weather)
    ZIPKIN_ENDPOINT: Zipkin span collector (default: http://localhost:9411/api/v2/spans)
    TRACING_ENABLED: Export spans (default: true)
    LOG_LEVEL: Logging level (default: INFO)
    PORT: Listen port (default: 8080)

Usage:
    $ uvicorn apps.cep_gateway.main:app --host 0.0.0.0 --port 8080
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from prometheus_client import make_asgi_app

from apps.cep_gateway import __version__
from apps.cep_gateway.clients import WeatherOrchestratorClient
from apps.cep_gateway.config import Settings
from apps.cep_gateway.metrics import gateway_requests_total
from libs.common.error_handlers import add_error_handlers
from libs.common.exceptions import (
    InvalidFormatError,
    MalformedInputError,
    UpstreamUnreachableError,
)
from libs.common.logging import configure_logging
from libs.common.schemas import parse_postal_code_request
from libs.common.tracing import (
    Tracing,
    add_tracing_middleware,
    configure_tracing,
    get_traced_client,
)
from libs.common.validators import is_valid_cep

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/health", response_class=PlainTextResponse, tags=["Health"])
async def health_check() -> str:
    """Liveness check, independent of downstream health."""
    return "OK"


@router.post("/weather", tags=["Weather"])
async def weather(request: Request) -> Response:
    """
    Validate the CEP and relay the request to the Weather Orchestrator.

    The downstream status code and body are returned as received, so every
    answer the orchestrator can give (200, 404, 422, 500) reaches the client
    unchanged.

    Raises:
        MalformedInputError: 422, body is not {"cep": "<string>"}
        InvalidFormatError: 422, CEP is not exactly 8 digits
        UpstreamUnreachableError: 500, orchestrator gave no response

    Examples:
        >>> import requests
        >>> requests.post("http://localhost:8080/weather", json={"cep": "01001000"}).json()
        {'city': 'São Paulo', 'temp_C': 25.0, 'temp_F': 77.0, 'temp_K': 298.0}
    """
    tracer = request.app.state.tracing.tracer
    orchestrator_client: WeatherOrchestratorClient = request.app.state.orchestrator_client
    body = await request.body()

    with tracer.start_as_current_span("weather-handler") as span:
        try:
            cep_request = parse_postal_code_request(body)
        except MalformedInputError:
            gateway_requests_total.labels(outcome="invalid").inc()
            raise

        if not is_valid_cep(cep_request.cep):
            span.set_attribute("cep.invalid", cep_request.cep)
            gateway_requests_total.labels(outcome="invalid").inc()
            raise InvalidFormatError(f"CEP {cep_request.cep!r} is not 8 digits")

        span.set_attribute("cep.valid", cep_request.cep)

        try:
            upstream = await orchestrator_client.forward(body)
        except UpstreamUnreachableError:
            gateway_requests_total.labels(outcome="upstream_error").inc()
            raise

    gateway_requests_total.labels(outcome="forwarded").inc()
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        media_type=upstream.headers.get("content-type", "application/json"),
    )


# ============================================================================
# Application Factory
# ============================================================================


def create_app(
    settings: Settings | None = None,
    tracing: Tracing | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the gateway application.

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
            f"Starting CEP Gateway (version={__version__})",
            extra={"orchestrator_url": settings.orchestrator_url},
        )
        try:
            yield
        finally:
            logger.info("Shutting down CEP Gateway...")
            await http_client.aclose()
            tracing.shutdown()

    app = FastAPI(
        title="CEP Gateway",
        description="Validates Brazilian postal codes and relays weather lookups",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.tracing = tracing
    app.state.orchestrator_client = WeatherOrchestratorClient(
        http_client, settings.orchestrator_url, tracing
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
        "apps.cep_gateway.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
