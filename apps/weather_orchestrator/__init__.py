"""
Weather Orchestrator Service.

Resolves a CEP to current weather:
1. Look up the CEP on ViaCEP to obtain the city name
2. Fetch current weather for that city from WeatherAPI
3. Convert the Celsius reading to Fahrenheit and Kelvin

Architecture:
    CEP Gateway → Weather Orchestrator → ViaCEP (HTTP)
                                       ↓
                                       WeatherAPI (HTTP)
"""

__version__ = "1.0.0"
