"""Metrics definitions for the Dashboard BFF Service."""

from __future__ import annotations

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram


class DashboardMetrics:
    """A container for all Prometheus metrics for the Dashboard BFF Service."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics with optional registry for test isolation."""
        if registry is None:
            registry = REGISTRY
        self.http_requests_total = Counter(
            "dashboard_bff_http_requests_total",
            "Total number of HTTP requests for Dashboard BFF Service.",
            ["method", "endpoint", "http_status"],
            registry=registry,
        )
        self.http_request_duration_seconds = Histogram(
            "dashboard_bff_http_request_duration_seconds",
            "HTTP request duration in seconds for Dashboard BFF Service.",
            ["method", "endpoint"],
            registry=registry,
        )
        self.upstream_calls_total = Counter(
            "dashboard_bff_upstream_calls_total",
            "Total number of calls to the backend API.",
            ["method", "endpoint", "status_code"],
            registry=registry,
        )
        self.upstream_call_duration_seconds = Histogram(
            "dashboard_bff_upstream_call_duration_seconds",
            "Duration of calls to the backend API in seconds.",
            ["method", "endpoint"],
            registry=registry,
        )
        self.gate_redirects_total = Counter(
            "dashboard_bff_gate_redirects_total",
            "Total number of page requests redirected to a login page.",
            ["area"],
            registry=registry,
        )
