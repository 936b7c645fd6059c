"""Dashboard BFF middleware components."""

from __future__ import annotations

import time
from enum import Enum
from urllib.parse import urlencode
from uuid import UUID, uuid4

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from services.dashboard_bff_service.metrics import DashboardMetrics

PUBLIC_PREFIXES: tuple[str, ...] = (
    "/login",
    "/signup",
    "/api/auth",
    "/admin/login",
    "/provider/login",
)
PROVIDER_PREFIXES: tuple[str, ...] = (
    "/orders",
    "/providers",
    "/categories",
    "/bookings",
    "/customers",
    "/settings",
)
ADMIN_PREFIX = "/admin"

PROVIDER_SESSION_COOKIE = "token"
ADMIN_SESSION_COOKIE = "cm_admin_token"


class GateArea(str, Enum):
    PUBLIC = "public"
    PROVIDER = "provider"
    ADMIN = "admin"
    OPEN = "open"


def classify_path(path: str) -> GateArea:
    """Classify a request path by plain string prefix.

    Public prefixes win over the protected areas, so ``/admin/login`` stays
    public while ``/admin-settings`` is gated.
    """
    if path.startswith(PUBLIC_PREFIXES):
        return GateArea.PUBLIC
    if path == "/" or path.startswith(PROVIDER_PREFIXES):
        return GateArea.PROVIDER
    if path.startswith(ADMIN_PREFIX):
        return GateArea.ADMIN
    return GateArea.OPEN


_GATE_RULES: dict[GateArea, tuple[str, str]] = {
    GateArea.PROVIDER: (PROVIDER_SESSION_COOKIE, "/login"),
    GateArea.ADMIN: (ADMIN_SESSION_COOKIE, "/admin/login"),
}


def _login_location(login_path: str, request: Request) -> str:
    """Login URL keeping the original query, with ``next`` set to the requested path."""
    params = [(k, v) for k, v in request.query_params.multi_items() if k != "next"]
    params.append(("next", request.url.path))
    return f"{login_path}?{urlencode(params)}"


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Middleware to ensure every request has a correlation ID."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Extract or generate correlation ID, store it and bind it for logging."""
        x_correlation_id = request.headers.get("X-Correlation-ID")
        if x_correlation_id:
            try:
                correlation_id = UUID(x_correlation_id)
            except ValueError:
                correlation_id = uuid4()
        else:
            correlation_id = uuid4()

        request.state.correlation_id = correlation_id
        with structlog.contextvars.bound_contextvars(correlation_id=str(correlation_id)):
            response = await call_next(request)
        response.headers["X-Correlation-ID"] = str(correlation_id)
        return response


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Redirect page requests without a session cookie to the matching login page.

    Only cookie presence is checked; token signatures are the backend's concern.
    """

    def __init__(self, app: ASGIApp, metrics: DashboardMetrics | None = None) -> None:
        super().__init__(app)
        self._metrics = metrics

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        area = classify_path(path)
        rule = _GATE_RULES.get(area)
        if rule is not None:
            cookie_name, login_path = rule
            if not request.cookies.get(cookie_name):
                if self._metrics is not None:
                    self._metrics.gate_redirects_total.labels(area=area.value).inc()
                location = _login_location(login_path, request)
                return RedirectResponse(url=location, status_code=307)
        return await call_next(request)


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    """Record request counts and latency per route template."""

    def __init__(self, app: ASGIApp, metrics: DashboardMetrics) -> None:
        super().__init__(app)
        self._metrics = metrics

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        route = request.scope.get("route")
        endpoint = getattr(route, "path", None) or "unmatched"
        self._metrics.http_requests_total.labels(
            method=request.method, endpoint=endpoint, http_status=str(response.status_code)
        ).inc()
        self._metrics.http_request_duration_seconds.labels(
            method=request.method, endpoint=endpoint
        ).observe(time.perf_counter() - started)
        return response
