"""
Weather Orchestrator - core orchestration logic.

Chains the two collaborator calls and shapes the result:
1. CEP → address record (ViaCEP)
2. City → current temperature (WeatherAPI)
3. Celsius → (Celsius, Fahrenheit, Kelvin)

Each step depends on the previous one, so the calls run strictly in
sequence and the first failure ends the request.
"""

import logging

from apps.weather_orchestrator.clients import ViaCepClient, WeatherApiClient
from apps.weather_orchestrator.schemas import WeatherResult
from libs.common.logging import log_with_context

logger = logging.getLogger(__name__)

# Kelvin offset kept at 273 (not 273.15) for compatibility with existing clients
KELVIN_OFFSET = 273


def convert_temperatures(celsius: float) -> tuple[float, float, float]:
    """
    Convert a Celsius temperature to all three scales.

    Args:
        celsius: Temperature in degrees Celsius

    Returns:
        (celsius, fahrenheit, kelvin)

    Example:
        >>> convert_temperatures(25.0)
        (25.0, 77.0, 298.0)
        >>> convert_temperatures(0.0)
        (0.0, 32.0, 273.0)
    """
    fahrenheit = celsius * 1.8 + 32
    kelvin = celsius + KELVIN_OFFSET
    return celsius, fahrenheit, kelvin


class WeatherOrchestrator:
    """
    Resolves a CEP to the current weather of its city.

    Example:
        >>> orchestrator = WeatherOrchestrator(cep_client, weather_client)
        >>> result = await orchestrator.get_weather("01001000")
        >>> result.city
        'São Paulo'
    """

    def __init__(self, cep_client: ViaCepClient, weather_client: WeatherApiClient) -> None:
        self.cep_client = cep_client
        self.weather_client = weather_client

    async def get_weather(self, cep: str) -> WeatherResult:
        """
        Run the lookup chain for one CEP.

        Args:
            cep: Postal code as received from the caller

        Returns:
            WeatherResult for the city the CEP belongs to

        Raises:
            PostalCodeNotFoundError: If the CEP cannot be resolved
            WeatherLookupFailedError: If the weather cannot be fetched
        """
        address = await self.cep_client.lookup(cep)
        reading = await self.weather_client.current(address.localidade)

        temp_c, temp_f, temp_k = convert_temperatures(reading.temperature_celsius)

        log_with_context(
            logger,
            "INFO",
            f"Weather resolved for CEP {cep}",
            cep=cep,
            city=address.localidade,
            temp_c=temp_c,
        )

        return WeatherResult(
            city=address.localidade,
            temperature_celsius=temp_c,
            temperature_fahrenheit=temp_f,
            temperature_kelvin=temp_k,
        )
