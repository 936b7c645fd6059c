"""Provider promocode routes."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Request

from services.dashboard_bff_service.api._helpers import (
    envelope,
    forwarded_params,
    passthrough_envelope,
    path_segment,
    read_json_body,
    require_identifier,
)
from services.dashboard_bff_service.auth_context import AuthContext
from services.dashboard_bff_service.normalizers.promocodes import (
    normalize_promocode,
    pick_promocode,
    pick_promocode_list,
)
from services.dashboard_bff_service.protocols import UpstreamClientProtocol

router = APIRouter(prefix="/provider/promocodes", tags=["Promocodes"])


def _promocode_path(promocode_id: str) -> str:
    return f"/api/promo/{path_segment(promocode_id)}"


@router.get("")
@inject
async def list_promocodes(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    raw = await upstream.call(
        "/api/promo",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_promocodes",
        params=forwarded_params(request),
    )
    promocodes = [normalize_promocode(item).to_wire() for item in pick_promocode_list(raw)]
    return envelope({"promocodes": promocodes}, success=True, promocodes=promocodes)


@router.post("")
@inject
async def create_promocode(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    body = await read_json_body(request)
    raw = await upstream.call(
        "/api/promo",
        method="POST",
        auth=auth,
        correlation_id=correlation_id,
        operation="create_promocode",
        json=body,
    )
    promocode = normalize_promocode(pick_promocode(raw)).to_wire()
    return envelope({"promocode": promocode}, success=True, promocode=promocode)


@router.get("/{promocode_id}")
@inject
async def get_promocode(
    promocode_id: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    promocode_id = require_identifier(promocode_id, "id", "get_promocode", correlation_id)
    raw = await upstream.call(
        _promocode_path(promocode_id),
        auth=auth,
        correlation_id=correlation_id,
        operation="get_promocode",
    )
    promocode = normalize_promocode(pick_promocode(raw)).to_wire()
    return envelope({"promocode": promocode}, success=True, promocode=promocode)


@router.patch("/{promocode_id}")
@inject
async def update_promocode(
    promocode_id: str,
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    promocode_id = require_identifier(promocode_id, "id", "update_promocode", correlation_id)
    body = await read_json_body(request)
    raw = await upstream.call(
        _promocode_path(promocode_id),
        method="PATCH",
        auth=auth,
        correlation_id=correlation_id,
        operation="update_promocode",
        json=body,
    )
    return passthrough_envelope(raw)


@router.delete("/{promocode_id}")
@inject
async def delete_promocode(
    promocode_id: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    promocode_id = require_identifier(promocode_id, "id", "delete_promocode", correlation_id)
    raw = await upstream.call(
        _promocode_path(promocode_id),
        method="DELETE",
        auth=auth,
        correlation_id=correlation_id,
        operation="delete_promocode",
    )
    return passthrough_envelope(raw)
