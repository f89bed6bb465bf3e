"""Prometheus metrics definitions for the Weather Orchestrator.

Usage:
    from apps.weather_orchestrator.metrics import orchestrator_requests_total

    orchestrator_requests_total.labels(outcome="success").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

orchestrator_requests_total = Counter(
    "weather_orchestrator_requests_total",
    "Total number of weather requests handled by the orchestrator",
    ["outcome"],  # success, invalid, not_found, weather_failed
)

lookup_duration = Histogram(
    "weather_orchestrator_lookup_duration_seconds",
    "Time taken by each external collaborator call",
    ["collaborator"],  # viacep, weatherapi
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
