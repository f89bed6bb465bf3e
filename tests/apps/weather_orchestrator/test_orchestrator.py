"""Tests for the Weather Orchestrator lookup chain and temperature conversion."""

from unittest.mock import AsyncMock, Mock

import pytest

from apps.weather_orchestrator.orchestrator import (
    KELVIN_OFFSET,
    WeatherOrchestrator,
    convert_temperatures,
)
from apps.weather_orchestrator.schemas import AddressRecord, WeatherReading
from libs.common.exceptions import PostalCodeNotFoundError, WeatherLookupFailedError


class TestConvertTemperatures:
    @pytest.mark.parametrize(
        ("celsius", "fahrenheit", "kelvin"),
        [
            (25.0, 77.0, 298.0),
            (0.0, 32.0, 273.0),
            (-40.0, -40.0, 233.0),
            (100.0, 212.0, 373.0),
            (21.5, 70.7, 294.5),
        ],
    )
    def test_conversion(self, celsius, fahrenheit, kelvin):
        c, f, k = convert_temperatures(celsius)

        assert c == celsius
        assert f == pytest.approx(fahrenheit)
        assert k == pytest.approx(kelvin)

    def test_kelvin_offset_is_whole_degrees(self):
        assert KELVIN_OFFSET == 273


@pytest.fixture()
def cep_client():
    client = Mock()
    client.lookup = AsyncMock(return_value=AddressRecord(localidade="São Paulo", uf="SP"))
    return client


@pytest.fixture()
def weather_client():
    client = Mock()
    client.current = AsyncMock(
        return_value=WeatherReading(location_name="Sao Paulo", temperature_celsius=25.0)
    )
    return client


class TestGetWeather:
    @pytest.mark.asyncio()
    async def test_chains_lookups(self, cep_client, weather_client):
        orchestrator = WeatherOrchestrator(cep_client, weather_client)

        result = await orchestrator.get_weather("01001000")

        cep_client.lookup.assert_awaited_once_with("01001000")
        weather_client.current.assert_awaited_once_with("São Paulo")
        assert result.city == "São Paulo"
        assert result.temperature_celsius == 25.0
        assert result.temperature_fahrenheit == pytest.approx(77.0)
        assert result.temperature_kelvin == pytest.approx(298.0)

    @pytest.mark.asyncio()
    async def test_city_comes_from_address_not_weather_location(self, cep_client, weather_client):
        result = await WeatherOrchestrator(cep_client, weather_client).get_weather("01001000")

        assert result.city == "São Paulo"

    @pytest.mark.asyncio()
    async def test_not_found_stops_before_weather_lookup(self, cep_client, weather_client):
        cep_client.lookup.side_effect = PostalCodeNotFoundError("CEP 99999999 not found")
        orchestrator = WeatherOrchestrator(cep_client, weather_client)

        with pytest.raises(PostalCodeNotFoundError):
            await orchestrator.get_weather("99999999")

        weather_client.current.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_weather_failure_propagates(self, cep_client, weather_client):
        weather_client.current.side_effect = WeatherLookupFailedError("WeatherAPI returned HTTP 401")
        orchestrator = WeatherOrchestrator(cep_client, weather_client)

        with pytest.raises(WeatherLookupFailedError) as exc_info:
            await orchestrator.get_weather("01001000")

        assert exc_info.value.message == "failed to get weather data"
