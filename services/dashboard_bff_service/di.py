"""Dependency Injection providers for the Dashboard BFF Service.

Provides Dishka DI container setup with APP-scoped infrastructure
and REQUEST-scoped auth and correlation context.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import UUID, uuid4

import httpx
from dishka import Provider, Scope, from_context, provide
from fastapi import Request
from prometheus_client import REGISTRY, CollectorRegistry

from services.dashboard_bff_service.auth_context import AuthContext, extract_auth_context
from services.dashboard_bff_service.clients.upstream_client import UpstreamClient
from services.dashboard_bff_service.config import Settings, settings
from services.dashboard_bff_service.earnings_service import EarningsService
from services.dashboard_bff_service.metrics import DashboardMetrics
from services.dashboard_bff_service.protocols import (
    EarningsServiceProtocol,
    UpstreamClientProtocol,
)


class DashboardBffProvider(Provider):
    """Infrastructure provider for the Dashboard BFF Service.

    Provides APP-scoped dependencies: config, metrics, HTTP client and the
    backend client. ``metrics`` lets the app share the instance its
    middleware records into.
    """

    scope = Scope.APP

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        metrics: DashboardMetrics | None = None,
    ) -> None:
        super().__init__()
        self._registry = registry or REGISTRY
        self._metrics = metrics

    @provide
    def get_config(self) -> Settings:
        """Provide settings singleton."""
        return settings

    @provide
    def provide_registry(self) -> CollectorRegistry:
        return self._registry

    @provide
    def provide_metrics(self, registry: CollectorRegistry) -> DashboardMetrics:
        return self._metrics or DashboardMetrics(registry)

    @provide(scope=Scope.APP)
    async def get_http_client(self, config: Settings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client with connection pooling."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(
                config.HTTP_CLIENT_TIMEOUT_SECONDS,
                connect=config.HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS,
            )
        ) as client:
            yield client

    @provide(scope=Scope.APP)
    def provide_upstream_client(
        self, http_client: httpx.AsyncClient, config: Settings, metrics: DashboardMetrics
    ) -> UpstreamClientProtocol:
        return UpstreamClient(http_client, config, metrics)

    @provide(scope=Scope.APP)
    def provide_earnings_service(self, upstream: UpstreamClientProtocol) -> EarningsServiceProtocol:
        return EarningsService(upstream)


class RequestContextProvider(Provider):
    """Request-scoped provider for correlation and auth context.

    The correlation ID comes from request state (set by CorrelationIDMiddleware);
    the AuthContext is derived from the request's cookies and headers.
    """

    request = from_context(provides=Request, scope=Scope.REQUEST)

    @provide(scope=Scope.REQUEST)
    def provide_correlation_id(self, request: Request) -> UUID:
        """Provide correlation ID from request state."""
        return getattr(request.state, "correlation_id", uuid4())

    @provide(scope=Scope.REQUEST)
    def provide_auth_context(self, request: Request, config: Settings) -> AuthContext:
        return extract_auth_context(request.cookies, request.headers, config)
