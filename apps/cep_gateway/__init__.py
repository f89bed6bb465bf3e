"""
CEP Gateway Service.

Public entry point of the weather lookup:
1. Validate that the request carries an 8-digit CEP
2. Forward valid requests, body unchanged, to the Weather Orchestrator
3. Relay the orchestrator's status and body back to the client verbatim

Architecture:
    Client → CEP Gateway (HTTP) → Weather Orchestrator → ViaCEP, WeatherAPI
"""

__version__ = "1.0.0"
