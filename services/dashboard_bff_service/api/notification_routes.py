"""Provider notification routes."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Query

from services.dashboard_bff_service.api._helpers import (
    envelope,
    passthrough_envelope,
    path_segment,
    require_identifier,
)
from services.dashboard_bff_service.auth_context import AuthContext
from services.dashboard_bff_service.normalizers.notifications import normalize_notification_list
from services.dashboard_bff_service.protocols import UpstreamClientProtocol

router = APIRouter(prefix="/provider/notifications", tags=["Notifications"])

NOTIFICATION_AUDIENCE = "PROVIDER"
MAX_NOTIFICATION_PAGE = 50


@router.get("")
@inject
async def list_notifications(
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
    limit: int = Query(20, ge=1, description="Page size, capped at 50"),
    cursor: str | None = Query(None, description="Opaque cursor from the previous page"),
) -> dict[str, Any]:
    params: dict[str, Any] = {
        "audience": NOTIFICATION_AUDIENCE,
        "limit": min(limit, MAX_NOTIFICATION_PAGE),
    }
    if cursor:
        params["cursor"] = cursor
    raw = await upstream.call(
        "/api/notifications",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_notifications",
        params=params,
    )
    return envelope(normalize_notification_list(raw))


@router.patch("/{notification_id}/read")
@inject
async def mark_notification_read(
    notification_id: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    notification_id = require_identifier(
        notification_id, "id", "mark_notification_read", correlation_id
    )
    raw = await upstream.call(
        f"/api/notifications/{path_segment(notification_id)}/read",
        method="PATCH",
        auth=auth,
        correlation_id=correlation_id,
        operation="mark_notification_read",
    )
    return passthrough_envelope(raw)


@router.post("/read-all")
@inject
async def mark_all_notifications_read(
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    raw = await upstream.call(
        "/api/notifications/read-all",
        method="POST",
        auth=auth,
        correlation_id=correlation_id,
        operation="mark_all_notifications_read",
        params={"audience": NOTIFICATION_AUDIENCE},
    )
    return passthrough_envelope(raw)
