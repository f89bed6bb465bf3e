"""
HTTP client for the Weather Orchestrator.

The gateway does not interpret the orchestrator's answer: whatever status and
body come back are handed to the caller untouched. Only a failure to obtain
any response at all is turned into an error.
"""

import logging
import time

import httpx

from apps.cep_gateway.metrics import forward_duration
from libs.common.exceptions import UpstreamUnreachableError
from libs.common.tracing import Tracing

logger = logging.getLogger(__name__)


class WeatherOrchestratorClient:
    """
    Forwards validated requests to the Weather Orchestrator.

    Example:
        >>> client = WeatherOrchestratorClient(http_client, "http://localhost:8081/weather", tracing)
        >>> response = await client.forward(b'{"cep": "01001000"}')
        >>> response.status_code
        200
    """

    def __init__(self, http_client: httpx.AsyncClient, weather_url: str, tracing: Tracing) -> None:
        """
        Initialize Weather Orchestrator client.

        Args:
            http_client: Shared (traced) HTTP client, owned by the application
            weather_url: Full URL of the orchestrator's POST /weather endpoint
            tracing: Tracing bundle used for the forward span
        """
        self.http_client = http_client
        self.weather_url = weather_url
        self.tracer = tracing.tracer

    async def forward(self, body: bytes) -> httpx.Response:
        """
        POST the original request body to the orchestrator.

        Args:
            body: Raw client request body, sent byte-for-byte

        Returns:
            The orchestrator's response, whatever its status

        Raises:
            UpstreamUnreachableError: If no response could be obtained
        """
        with self.tracer.start_as_current_span("forward-to-weather-orchestrator") as span:
            span.set_attribute("upstream.url", self.weather_url)
            started = time.perf_counter()
            try:
                response = await self.http_client.post(
                    self.weather_url,
                    content=body,
                    headers={"Content-Type": "application/json"},
                )
            except httpx.HTTPError as e:
                logger.error(f"Weather Orchestrator unreachable at {self.weather_url}: {e!r}")
                raise UpstreamUnreachableError(f"POST {self.weather_url} failed: {e!r}") from e
            finally:
                forward_duration.observe(time.perf_counter() - started)

            span.set_attribute("upstream.status_code", response.status_code)
            return response
