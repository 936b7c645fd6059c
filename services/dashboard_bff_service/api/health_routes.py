"""Health and metrics routes for the Dashboard BFF Service."""

from __future__ import annotations

from dashboard_service_libs.error_handling import DashboardError
from dashboard_service_libs.logging_utils import create_service_logger
from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from services.dashboard_bff_service.config import SERVICE_ID, Settings

router = APIRouter(tags=["Health"])
logger = create_service_logger("dashboard_bff.health_routes")


@router.get("/healthz")
@inject
async def health_check(config: FromDishka[Settings]) -> dict[str, str | dict]:
    """Health check endpoint.

    The service is degraded when no backend origin is configured; the backend
    itself is not contacted.
    """
    try:
        config.resolve_base()
        backend_configured = True
    except DashboardError:
        backend_configured = False

    checks = {"service_responsive": True, "backend_configured": backend_configured}
    overall_status = "healthy" if all(checks.values()) else "degraded"

    return {
        "service": SERVICE_ID,
        "status": overall_status,
        "message": f"Dashboard BFF Service is {overall_status}",
        "version": config.SERVICE_VERSION,
        "checks": checks,
        "dependencies": {
            "backend_api": {
                "status": "configured" if backend_configured else "missing",
                "note": "Set API_BASE or NEXT_PUBLIC_API_BASE"
                if not backend_configured
                else "Backend availability checked on request",
            }
        },
        "environment": config.ENVIRONMENT.value,
    }


@router.get("/metrics", response_class=PlainTextResponse)
@inject
async def metrics(registry: FromDishka[CollectorRegistry]) -> PlainTextResponse:
    """Prometheus metrics endpoint."""
    try:
        metrics_data = generate_latest(registry)
        return PlainTextResponse(content=metrics_data, media_type=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.error(f"Error generating metrics: {e}", exc_info=True)
        return PlainTextResponse(content="Error generating metrics", status_code=500)
