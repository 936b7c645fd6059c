"""Protocol definitions for the Dashboard BFF Service.

Defines interfaces for the backend client and composite services used in
dependency injection.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from services.dashboard_bff_service.auth_context import AuthContext
    from services.dashboard_bff_service.dto.resources_v1 import EarningsAnalyticsV1


class UpstreamClientProtocol(Protocol):
    """Protocol for the backend REST API client."""

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
        """Issue one uncached request against the backend.

        Args:
            path: Backend path (``/api/...``) or an absolute http(s) URL
            method: HTTP method
            auth: Request AuthContext supplying outbound credentials
            correlation_id: Request correlation ID for tracing
            operation: Logical operation name for logs, metrics and errors
            params: Query parameters
            json: JSON-serialisable body
            content: Raw bytes body (no Content-Type is set)
            files: Multipart files (boundary generated by the transport)
            data: Multipart/form fields
            headers: Extra request headers
            forward_cookie: Forward the incoming Cookie header
            admin_key: Attach x-admin-api-key when configured
            api_key: Attach the configured named API key
            provider_base: Resolve the provider-panel origin first

        Returns:
            Parsed JSON, raw text for non-JSON responses, or None for empty bodies

        Raises:
            DashboardError: EXTERNAL_SERVICE_ERROR on non-2xx, CONNECTION_ERROR or
                TIMEOUT when unreachable, CONFIGURATION_ERROR without a base URL
        """
        ...


class EarningsServiceProtocol(Protocol):
    """Protocol for the provider earnings aggregation."""

    async def fetch_earnings(
        self,
        auth: AuthContext,
        correlation_id: UUID,
        days: int = 30,
    ) -> EarningsAnalyticsV1:
        """Fetch earnings summary and series concurrently and merge them.

        Fails as a whole if either backend call fails.
        """
        ...
