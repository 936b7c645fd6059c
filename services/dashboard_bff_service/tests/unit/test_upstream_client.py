"""Unit tests for the backend REST API client."""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import uuid4

import httpx
import pytest
from dashboard_core.error_enums import ErrorCode
from dashboard_service_libs.error_handling import DashboardError
from prometheus_client import CollectorRegistry
from respx import MockRouter

from services.dashboard_bff_service.auth_context import AuthContext
from services.dashboard_bff_service.clients.upstream_client import (
    UpstreamClient,
    parse_response_body,
    upstream_error_message,
)
from services.dashboard_bff_service.metrics import DashboardMetrics
from services.dashboard_bff_service.tests.test_provider import BACKEND_BASE, make_test_settings

CORRELATION_ID = uuid4()


@pytest.fixture
async def upstream() -> AsyncIterator[UpstreamClient]:
    """Create the client with a real httpx client for respx mocking."""
    async with httpx.AsyncClient() as http_client:
        yield UpstreamClient(
            http_client,
            make_test_settings(PROVIDER_API_BASE="http://provider.test/"),
            DashboardMetrics(CollectorRegistry()),
        )


@pytest.mark.asyncio
async def test_call_sends_no_cache_and_auth_headers(
    upstream: UpstreamClient, respx_mock: MockRouter
) -> None:
    route = respx_mock.get(f"{BACKEND_BASE}/api/bookings").mock(
        return_value=httpx.Response(200, json={"items": []})
    )

    result = await upstream.call(
        "/api/bookings",
        auth=AuthContext(bearer_token="tok", cookie_header="token=tok"),
        correlation_id=CORRELATION_ID,
        params={"page": "2"},
    )

    assert result == {"items": []}
    request = route.calls.last.request
    assert request.headers["Cache-Control"] == "no-store"
    assert request.headers["Pragma"] == "no-cache"
    assert request.headers["Authorization"] == "Bearer tok"
    assert request.headers["X-Correlation-ID"] == str(CORRELATION_ID)
    assert "Cookie" not in request.headers
    assert request.url.params["page"] == "2"


@pytest.mark.asyncio
async def test_provider_base_and_absolute_urls(
    upstream: UpstreamClient, respx_mock: MockRouter
) -> None:
    provider_route = respx_mock.get("http://provider.test/api/category/admin/categories").mock(
        return_value=httpx.Response(200, json=[])
    )
    absolute_route = respx_mock.get("https://elsewhere.test/ping").mock(
        return_value=httpx.Response(200, text="pong")
    )

    await upstream.call("api/category/admin/categories", provider_base=True)
    text = await upstream.call("https://elsewhere.test/ping")

    assert provider_route.called
    assert absolute_route.called
    assert text == "pong"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response, expected_message",
    [
        (httpx.Response(503, json={"message": "db down"}), "db down"),
        (httpx.Response(409, json={"error": "Duplicate code"}), "Duplicate code"),
        (httpx.Response(502, text="Bad gateway"), "Bad gateway"),
        (httpx.Response(500), "Request failed (500)"),
    ],
)
async def test_non_2xx_raises_with_upstream_status(
    upstream: UpstreamClient,
    respx_mock: MockRouter,
    response: httpx.Response,
    expected_message: str,
) -> None:
    respx_mock.get(f"{BACKEND_BASE}/api/provider/me").mock(return_value=response)

    with pytest.raises(DashboardError) as exc_info:
        await upstream.call("/api/provider/me", correlation_id=CORRELATION_ID)

    error = exc_info.value
    assert error.error_detail.error_code == ErrorCode.EXTERNAL_SERVICE_ERROR
    assert error.status_code == response.status_code
    assert error.message == expected_message


@pytest.mark.asyncio
async def test_timeout_maps_to_timeout_error(
    upstream: UpstreamClient, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{BACKEND_BASE}/api/bookings").mock(side_effect=httpx.ReadTimeout)

    with pytest.raises(DashboardError) as exc_info:
        await upstream.call("/api/bookings", correlation_id=CORRELATION_ID)

    assert exc_info.value.error_detail.error_code == ErrorCode.TIMEOUT
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_connection_failure_maps_to_connection_error(
    upstream: UpstreamClient, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{BACKEND_BASE}/api/bookings").mock(side_effect=httpx.ConnectError)

    with pytest.raises(DashboardError) as exc_info:
        await upstream.call("/api/bookings", correlation_id=CORRELATION_ID)

    assert exc_info.value.error_detail.error_code == ErrorCode.CONNECTION_ERROR


@pytest.mark.asyncio
async def test_missing_base_fails_before_any_request(respx_mock: MockRouter) -> None:
    async with httpx.AsyncClient() as http_client:
        upstream = UpstreamClient(
            http_client, make_test_settings(API_BASE=None, PUBLIC_API_BASE=None)
        )

        with pytest.raises(DashboardError) as exc_info:
            await upstream.call("/api/bookings", correlation_id=CORRELATION_ID)

    assert exc_info.value.error_detail.error_code == ErrorCode.CONFIGURATION_ERROR
    assert len(respx_mock.calls) == 0


def test_parse_response_body_variants() -> None:
    assert parse_response_body(httpx.Response(204)) is None
    assert parse_response_body(httpx.Response(200, json={"a": 1})) == {"a": 1}
    assert parse_response_body(httpx.Response(200, text="plain")) == "plain"
    broken = httpx.Response(
        200, content=b"{not json", headers={"content-type": "application/json"}
    )
    assert parse_response_body(broken) == "{not json"


def test_upstream_error_message_skips_blank_fields() -> None:
    assert upstream_error_message({"message": " ", "error": "nope"}, 400) == "nope"
    assert upstream_error_message(["x"], 418) == "Request failed (418)"


def test_only_backend_origins_are_configurable() -> None:
    settings = make_test_settings(APP_URL="http://app.test")

    assert not hasattr(settings, "APP_URL")
    assert settings.resolve_base(provider=False, correlation_id=CORRELATION_ID) == BACKEND_BASE
