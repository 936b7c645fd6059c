"""Tests for the FastAPI error handlers and the JSON error envelope."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from dashboard_service_libs.error_handling import (
    raise_configuration_error,
    raise_connection_error,
    raise_timeout_error,
    raise_upstream_error,
    raise_validation_error,
)
from dashboard_service_libs.error_handling.fastapi import register_error_handlers
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel


class _Body(BaseModel):
    name: str


def _build_app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/validation")
    async def validation() -> None:
        raise_validation_error(service="svc", operation="op", field="id", message="id is required")

    @app.get("/upstream/{status}")
    async def upstream(status: int) -> None:
        raise_upstream_error(
            service="svc",
            operation="op",
            status_code=status,
            message="db down",
            raw_body={"message": "db down"},
        )

    @app.get("/config")
    async def config() -> None:
        raise_configuration_error(
            service="svc", operation="op", config_key="API_BASE", message="API_BASE is not set"
        )

    @app.get("/unreachable")
    async def unreachable() -> None:
        raise_connection_error(
            service="svc", operation="op", target="backend", message="connect failed: 10.0.0.5"
        )

    @app.get("/timeout")
    async def timeout() -> None:
        raise_timeout_error(service="svc", operation="op", timeout_seconds=1.0, message="slow")

    @app.post("/body")
    async def body(payload: _Body) -> dict[str, str]:
        return {"name": payload.name}

    return app


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=_build_app()), base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_validation_error_is_400_envelope(client: AsyncClient) -> None:
    response = await client.get("/validation")

    assert response.status_code == 400
    data = response.json()
    assert data["ok"] is False
    assert data["message"] == "id is required"
    assert data["error"]["code"] == "VALIDATION_ERROR"
    assert data["error"]["service"] == "svc"
    assert data["error"]["operation"] == "op"


@pytest.mark.asyncio
async def test_upstream_status_is_mirrored(client: AsyncClient) -> None:
    response = await client.get("/upstream/503")

    assert response.status_code == 503
    data = response.json()
    assert data["ok"] is False
    assert data["message"] == "db down"
    assert data["error"]["details"]["status_code"] == 503


@pytest.mark.asyncio
async def test_upstream_status_outside_error_range_becomes_500(client: AsyncClient) -> None:
    response = await client.get("/upstream/302")

    assert response.status_code == 500


@pytest.mark.asyncio
async def test_configuration_error_is_500(client: AsyncClient) -> None:
    response = await client.get("/config")

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "CONFIGURATION_ERROR"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/unreachable", "/timeout"])
async def test_unreachable_errors_use_generic_message(client: AsyncClient, path: str) -> None:
    response = await client.get(path)

    assert response.status_code == 500
    data = response.json()
    assert data["message"] == "Upstream service unreachable"
    assert "10.0.0.5" not in response.text


@pytest.mark.asyncio
async def test_malformed_json_is_400_invalid_json(client: AsyncClient) -> None:
    response = await client.post(
        "/body", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    data = response.json()
    assert data["ok"] is False
    assert data["message"] == "Invalid JSON"
    assert data["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_missing_field_is_400(client: AsyncClient) -> None:
    response = await client.post("/body", json={})

    assert response.status_code == 400
    assert response.json()["error"]["details"]["field"] == "name"
