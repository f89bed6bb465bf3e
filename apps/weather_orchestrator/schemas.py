"""
Pydantic schemas for the Weather Orchestrator.

Defines models for:
- ViaCEP address records
- WeatherAPI current-conditions responses
- The composed weather result returned to callers
"""

from pydantic import BaseModel, ConfigDict, Field

# ==============================================================================
# ViaCEP Models
# ==============================================================================


class AddressRecord(BaseModel):
    """Response from ViaCEP GET /ws/{cep}/json/."""

    cep: str = ""
    logradouro: str = ""  # street
    complemento: str = ""
    bairro: str = ""  # district
    localidade: str = ""  # city
    uf: str = ""  # state
    ibge: str = ""
    gia: str = ""
    ddd: str = ""
    siafi: str = ""

    # ViaCEP answers unknown codes with {"erro": true} (or "true" on newer versions)
    erro: bool = False


# ==============================================================================
# WeatherAPI Models
# ==============================================================================


class WeatherApiLocation(BaseModel):
    name: str = ""


class WeatherApiCurrent(BaseModel):
    # NaN/Infinity would serialize as null temperatures downstream
    temp_c: float = Field(allow_inf_nan=False)


class WeatherApiResponse(BaseModel):
    """Response from WeatherAPI GET /v1/current.json (fields we use)."""

    location: WeatherApiLocation = Field(default_factory=WeatherApiLocation)
    current: WeatherApiCurrent

    def to_reading(self) -> "WeatherReading":
        return WeatherReading(
            location_name=self.location.name,
            temperature_celsius=self.current.temp_c,
        )


class WeatherReading(BaseModel):
    """Current temperature for a location."""

    location_name: str
    temperature_celsius: float


# ==============================================================================
# Orchestration Models
# ==============================================================================


class WeatherResult(BaseModel):
    """Response body of POST /weather."""

    model_config = ConfigDict(populate_by_name=True)

    city: str
    temperature_celsius: float = Field(alias="temp_C")
    temperature_fahrenheit: float = Field(alias="temp_F")
    temperature_kelvin: float = Field(alias="temp_K")
