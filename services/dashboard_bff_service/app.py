"""Dashboard BFF Service - server-side proxy and normalization layer for the
admin and provider dashboard.

Browsers call the JSON routes under ``/api``; the service attaches the caller's
credentials, forwards to the backend REST API and returns normalized
envelopes. A path-based access gate redirects page requests without a session
cookie to the matching login page.
"""

from __future__ import annotations

from collections.abc import Sequence

from dashboard_service_libs.error_handling.fastapi import (
    register_error_handlers as register_fastapi_error_handlers,
)
from dashboard_service_libs.logging_utils import (
    configure_service_logging,
    create_service_logger,
)
from dishka import Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import REGISTRY, CollectorRegistry

from services.dashboard_bff_service.api import router as api_router
from services.dashboard_bff_service.api.health_routes import router as health_router
from services.dashboard_bff_service.config import SERVICE_ID, settings
from services.dashboard_bff_service.di import DashboardBffProvider, RequestContextProvider
from services.dashboard_bff_service.metrics import DashboardMetrics
from services.dashboard_bff_service.middleware import (
    AccessGateMiddleware,
    CorrelationIDMiddleware,
    RequestMetricsMiddleware,
)

logger = create_service_logger("dashboard_bff_service")


def create_app(
    registry: CollectorRegistry | None = None,
    providers: Sequence[Provider] | None = None,
    metrics: DashboardMetrics | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        registry: Prometheus registry; tests pass an isolated one
        providers: DI providers replacing the default infrastructure and
            request-context providers
        metrics: Metrics shared with custom providers that record into the
            same registry
    """
    configure_service_logging(
        SERVICE_ID,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
    )

    registry = registry or REGISTRY
    metrics = metrics or DashboardMetrics(registry)

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        description="Dashboard BFF Service - backend proxy for the admin and provider dashboard",
        docs_url="/docs" if settings.is_development() else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development() else None,
    )

    # Register error handlers
    register_fastapi_error_handlers(app)

    # Middleware runs in reverse order of registration: CORS, correlation ID,
    # metrics, then the access gate.
    app.add_middleware(AccessGateMiddleware, metrics=metrics)
    app.add_middleware(RequestMetricsMiddleware, metrics=metrics)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    # Include health routes (healthz, metrics)
    app.include_router(health_router)

    # Routes: /api/admin/..., /api/provider/..., /api/auth/...
    app.include_router(api_router, prefix="/api")

    # Setup Dishka DI container
    if providers is None:
        providers = (
            DashboardBffProvider(registry=registry, metrics=metrics),
            RequestContextProvider(),
        )
    container = make_async_container(*providers, FastapiProvider())
    setup_dishka(container, app)
    app.state.di_container = container

    logger.info("Dashboard BFF app created", settings=str(settings))
    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.dashboard_bff_service.app:app",
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
        reload=settings.is_development(),
        log_level=settings.LOG_LEVEL.lower(),
    )
