"""
HTTP clients for ViaCEP and WeatherAPI.

Each client turns every way its collaborator can fail into a single domain
error, so the route only ever sees PostalCodeNotFoundError or
WeatherLookupFailedError. The precise cause is kept in the exception text,
which reaches logs and spans but not the caller.
"""

import logging
import time
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from apps.weather_orchestrator.metrics import lookup_duration
from apps.weather_orchestrator.schemas import AddressRecord, WeatherApiResponse, WeatherReading
from libs.common.exceptions import PostalCodeNotFoundError, WeatherLookupFailedError
from libs.common.tracing import Tracing

logger = logging.getLogger(__name__)


# ==============================================================================
# ViaCEP Client
# ==============================================================================


class ViaCepClient:
    """
    HTTP client for the ViaCEP address lookup.

    Example:
        >>> client = ViaCepClient(http_client, "https://viacep.com.br", tracing)
        >>> record = await client.lookup("01001000")
        >>> record.localidade
        'São Paulo'
    """

    def __init__(self, http_client: httpx.AsyncClient, base_url: str, tracing: Tracing) -> None:
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.tracer = tracing.tracer

    async def lookup(self, cep: str) -> AddressRecord:
        """
        Resolve a CEP to its address record.

        Args:
            cep: Postal code, sent as a single URL path segment

        Returns:
            AddressRecord with the city in ``localidade``

        Raises:
            PostalCodeNotFoundError: On transport error, non-2xx status,
                undecodable body or ``erro`` set by ViaCEP
        """
        with self.tracer.start_as_current_span("get-city-from-cep") as span:
            span.set_attribute("cep", cep)
            url = f"{self.base_url}/ws/{quote(cep, safe='')}/json/"

            started = time.perf_counter()
            try:
                response = await self.http_client.get(url)
            except httpx.HTTPError as e:
                raise PostalCodeNotFoundError(f"ViaCEP request failed: {e!r}") from e
            finally:
                lookup_duration.labels(collaborator="viacep").observe(time.perf_counter() - started)

            if not response.is_success:
                raise PostalCodeNotFoundError(f"ViaCEP returned HTTP {response.status_code}")

            try:
                record = AddressRecord.model_validate_json(response.content)
            except ValidationError as e:
                raise PostalCodeNotFoundError("ViaCEP returned an undecodable body") from e

            if record.erro:
                span.set_attribute("cep.not_found", True)
                raise PostalCodeNotFoundError(f"CEP {cep} not found")

            span.set_attribute("city", record.localidade)
            logger.debug(f"CEP {cep} resolved to {record.localidade}/{record.uf}")
            return record


# ==============================================================================
# WeatherAPI Client
# ==============================================================================


class WeatherApiClient:
    """
    HTTP client for WeatherAPI current conditions.

    Example:
        >>> client = WeatherApiClient(http_client, "http://api.weatherapi.com", "key", tracing)
        >>> reading = await client.current("São Paulo")
        >>> reading.temperature_celsius
        25.0
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        api_key: str,
        tracing: Tracing,
    ) -> None:
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.tracer = tracing.tracer

    async def current(self, city: str) -> WeatherReading:
        """
        Fetch the current temperature for a city.

        Args:
            city: Location name, passed as the ``q`` query parameter

        Returns:
            WeatherReading in Celsius

        Raises:
            WeatherLookupFailedError: If the API key is missing, or on
                transport error, non-2xx status or undecodable body
        """
        with self.tracer.start_as_current_span("get-weather") as span:
            span.set_attribute("city", city)

            if not self.api_key:
                raise WeatherLookupFailedError("WEATHER_API_KEY is not set")

            started = time.perf_counter()
            try:
                response = await self.http_client.get(
                    f"{self.base_url}/v1/current.json",
                    params={"key": self.api_key, "q": city},
                )
            except httpx.HTTPError as e:
                raise WeatherLookupFailedError(f"WeatherAPI request failed: {e!r}") from e
            finally:
                lookup_duration.labels(collaborator="weatherapi").observe(
                    time.perf_counter() - started
                )

            if not response.is_success:
                raise WeatherLookupFailedError(f"WeatherAPI returned HTTP {response.status_code}")

            try:
                reading = WeatherApiResponse.model_validate_json(response.content).to_reading()
            except ValidationError as e:
                raise WeatherLookupFailedError("WeatherAPI returned an undecodable body") from e

            span.set_attribute("temperature.celsius", reading.temperature_celsius)
            return reading
