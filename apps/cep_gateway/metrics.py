"""Prometheus metrics definitions for the CEP Gateway.

Usage:
    from apps.cep_gateway.metrics import gateway_requests_total

    gateway_requests_total.labels(outcome="forwarded").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

gateway_requests_total = Counter(
    "cep_gateway_requests_total",
    "Total number of weather requests handled by the gateway",
    ["outcome"],  # forwarded, invalid, upstream_error
)

forward_duration = Histogram(
    "cep_gateway_forward_duration_seconds",
    "Time taken for the Weather Orchestrator to answer a forwarded request",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
