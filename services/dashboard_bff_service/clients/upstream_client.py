"""Backend REST API HTTP client.

Every call bypasses caching, carries the composed auth headers and raises a
structured DashboardError on failure. Nothing is retried.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any
from uuid import UUID

import httpx
from dashboard_service_libs.error_handling import (
    raise_connection_error,
    raise_timeout_error,
    raise_upstream_error,
)
from dashboard_service_libs.logging_utils import create_service_logger

from services.dashboard_bff_service.auth_context import AuthContext
from services.dashboard_bff_service.config import SERVICE_ID, Settings
from services.dashboard_bff_service.metrics import DashboardMetrics

logger = create_service_logger("dashboard_bff.upstream_client")

NO_CACHE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-store",
    "Pragma": "no-cache",
}


def _is_absolute(path: str) -> bool:
    return path.startswith("http://") or path.startswith("https://")


def _is_json_response(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    return "application/json" in content_type or "+json" in content_type


def parse_response_body(response: httpx.Response) -> Any:
    """Parse JSON bodies, return text for anything else, None when empty."""
    if not response.content:
        return None
    if _is_json_response(response):
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


def upstream_error_message(payload: Any, status_code: int) -> str:
    """Pick the most useful error message from a failed backend response."""
    if isinstance(payload, dict):
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value
    if isinstance(payload, str) and payload.strip():
        return payload.strip()
    return f"Request failed ({status_code})"


class UpstreamClient:
    """HTTP client for the backend REST API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: Settings,
        metrics: DashboardMetrics | None = None,
    ) -> None:
        """Initialize with shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient instance
            settings: Service settings used to resolve the backend origin
            metrics: Optional metrics container
        """
        self._client = http_client
        self._settings = settings
        self._metrics = metrics

    def _build_url(self, path: str, provider_base: bool, correlation_id: UUID | None) -> str:
        if _is_absolute(path):
            return path
        base = self._settings.resolve_base(provider=provider_base, correlation_id=correlation_id)
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{base}{path}"

    async def call(
        self,
        path: str,
        *,
        method: str = "GET",
        auth: AuthContext | None = None,
        correlation_id: UUID | None = None,
        operation: str | None = None,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        content: bytes | None = None,
        files: Any = None,
        data: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        forward_cookie: bool = False,
        admin_key: bool = False,
        api_key: bool = False,
        provider_base: bool = False,
    ) -> Any:
        operation = operation or path
        # Raises CONFIGURATION_ERROR before any network activity
        url = self._build_url(path, provider_base, correlation_id)

        request_headers: dict[str, str] = {"Accept": "application/json", **NO_CACHE_HEADERS}
        if auth is not None:
            request_headers.update(
                auth.outbound_headers(
                    forward_cookie=forward_cookie, admin_key=admin_key, api_key=api_key
                )
            )
        if correlation_id is not None:
            request_headers["X-Correlation-ID"] = str(correlation_id)
        if headers:
            request_headers.update(headers)

        # httpx sets application/json for json= and a multipart boundary for files=
        request_kwargs: dict[str, Any] = {}
        if json is not None:
            request_kwargs["json"] = json
        elif files is not None or data is not None:
            request_kwargs["files"] = files
            request_kwargs["data"] = data
        elif content is not None:
            request_kwargs["content"] = content

        started = time.perf_counter()
        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                headers=request_headers,
                **request_kwargs,
            )
        except httpx.TimeoutException:
            self._record(method, operation, "error", started)
            logger.error(
                "Backend request timed out",
                method=method,
                operation=operation,
                correlation_id=str(correlation_id) if correlation_id else None,
            )
            raise_timeout_error(
                service=SERVICE_ID,
                operation=operation,
                timeout_seconds=self._settings.HTTP_CLIENT_TIMEOUT_SECONDS,
                message="Backend request timed out",
                correlation_id=correlation_id,
            )
        except httpx.TransportError as e:
            self._record(method, operation, "error", started)
            logger.error(
                "Backend unreachable",
                method=method,
                operation=operation,
                error_type=type(e).__name__,
                correlation_id=str(correlation_id) if correlation_id else None,
            )
            raise_connection_error(
                service=SERVICE_ID,
                operation=operation,
                target="backend",
                message="Backend unreachable",
                correlation_id=correlation_id,
            )

        self._record(method, operation, str(response.status_code), started)
        payload = parse_response_body(response)

        logger.info(
            "Backend call completed",
            method=method,
            path=response.request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
            correlation_id=str(correlation_id) if correlation_id else None,
        )

        if not response.is_success:
            raise_upstream_error(
                service=SERVICE_ID,
                operation=operation,
                status_code=response.status_code,
                message=upstream_error_message(payload, response.status_code),
                correlation_id=correlation_id,
                raw_body=payload,
            )

        return payload

    def _record(self, method: str, operation: str, status: str, started: float) -> None:
        if self._metrics is None:
            return
        self._metrics.upstream_calls_total.labels(
            method=method, endpoint=operation, status_code=status
        ).inc()
        self._metrics.upstream_call_duration_seconds.labels(
            method=method, endpoint=operation
        ).observe(time.perf_counter() - started)
