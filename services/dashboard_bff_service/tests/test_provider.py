"""Test providers for Dashboard BFF Service tests.

Provides Dishka DI test providers with test settings, an isolated metrics
registry and a real httpx.AsyncClient that respx intercepts.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from dishka import Provider, Scope, provide
from fastapi import FastAPI
from prometheus_client import CollectorRegistry

from services.dashboard_bff_service.clients.upstream_client import UpstreamClient
from services.dashboard_bff_service.config import Settings
from services.dashboard_bff_service.di import RequestContextProvider
from services.dashboard_bff_service.earnings_service import EarningsService
from services.dashboard_bff_service.metrics import DashboardMetrics
from services.dashboard_bff_service.protocols import (
    EarningsServiceProtocol,
    UpstreamClientProtocol,
)

BACKEND_BASE = "http://backend.test"


def make_test_settings(**overrides: object) -> Settings:
    """Settings pointing at the mocked backend; nothing is read from .env."""
    values: dict[str, object] = {
        "SERVICE_NAME": "dashboard_bff_service_test",
        "API_BASE": BACKEND_BASE,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class InfrastructureTestProvider(Provider):
    """Test provider for Dashboard BFF infrastructure dependencies.

    Provides real httpx.AsyncClient for respx mocking and real client
    implementations that use it.
    """

    scope = Scope.APP

    def __init__(
        self,
        settings: Settings | None = None,
        registry: CollectorRegistry | None = None,
        metrics: DashboardMetrics | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings or make_test_settings()
        self._registry = registry or CollectorRegistry()
        self._metrics = metrics

    @provide
    def get_config(self) -> Settings:
        """Provide test settings."""
        return self._settings

    @provide
    def provide_registry(self) -> CollectorRegistry:
        """Provide an isolated registry per test app."""
        return self._registry

    @provide
    def provide_metrics(self, registry: CollectorRegistry) -> DashboardMetrics:
        return self._metrics or DashboardMetrics(registry)

    @provide(scope=Scope.APP)
    async def get_http_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Provide real HTTP client for respx mocking."""
        async with httpx.AsyncClient() as client:
            yield client

    @provide(scope=Scope.APP)
    def provide_upstream_client(
        self, http_client: httpx.AsyncClient, config: Settings, metrics: DashboardMetrics
    ) -> UpstreamClientProtocol:
        return UpstreamClient(http_client, config, metrics)

    @provide(scope=Scope.APP)
    def provide_earnings_service(self, upstream: UpstreamClientProtocol) -> EarningsServiceProtocol:
        return EarningsService(upstream)


def create_test_app(settings: Settings | None = None) -> FastAPI:
    """Full application wired to the test providers."""
    from services.dashboard_bff_service.app import create_app

    registry = CollectorRegistry()
    metrics = DashboardMetrics(registry)
    return create_app(
        registry=registry,
        providers=(
            InfrastructureTestProvider(settings=settings, registry=registry, metrics=metrics),
            RequestContextProvider(),
        ),
        metrics=metrics,
    )
