"""
Apps package - FastAPI microservices for CEP weather lookups.

This package contains both service applications:
- cep_gateway: Validates postal codes and relays requests to the orchestrator
- weather_orchestrator: Resolves a CEP to its city and current temperature
"""
