"""Admin provider review routes. These forward the session cookie and the
server-side admin key and pass the backend body through."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Request

from services.dashboard_bff_service.api._helpers import (
    passthrough_envelope,
    path_segment,
    read_json_body,
    require_identifier,
)
from services.dashboard_bff_service.auth_context import AuthContext
from services.dashboard_bff_service.protocols import UpstreamClientProtocol

router = APIRouter(prefix="/admin/providers", tags=["Admin Providers"])


@router.get("/pending")
@inject
async def list_pending_providers(
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    raw = await upstream.call(
        "/api/admin/providers/pending",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_pending_providers",
        forward_cookie=True,
        admin_key=True,
    )
    return passthrough_envelope(raw)


@router.get("/{provider_id}")
@inject
async def get_admin_provider(
    provider_id: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    provider_id = require_identifier(provider_id, "id", "get_admin_provider", correlation_id)
    raw = await upstream.call(
        f"/api/admin/providers/{path_segment(provider_id)}",
        auth=auth,
        correlation_id=correlation_id,
        operation="get_admin_provider",
        forward_cookie=True,
        admin_key=True,
    )
    return passthrough_envelope(raw)


@router.patch("/{provider_id}/approve")
@inject
async def approve_provider(
    provider_id: str,
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    provider_id = require_identifier(provider_id, "id", "approve_provider", correlation_id)
    body = await read_json_body(request)
    raw = await upstream.call(
        f"/api/admin/providers/{path_segment(provider_id)}/approve",
        method="PATCH",
        auth=auth,
        correlation_id=correlation_id,
        operation="approve_provider",
        json=body,
        forward_cookie=True,
        admin_key=True,
    )
    return passthrough_envelope(raw)
