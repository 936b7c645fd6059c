"""Customer routes for the admin and provider panels."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter

from services.dashboard_bff_service.api._helpers import (
    envelope,
    passthrough_envelope,
    path_segment,
    require_identifier,
)
from services.dashboard_bff_service.auth_context import AuthContext, require_token
from services.dashboard_bff_service.normalizers.customers import normalize_customer_list
from services.dashboard_bff_service.protocols import UpstreamClientProtocol

router = APIRouter(tags=["Customers"])


@router.get("/bookings/customers")
@inject
async def list_admin_customers(
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    require_token(auth, correlation_id, "list_admin_customers")
    raw = await upstream.call(
        "/api/users/customers",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_admin_customers",
    )
    return passthrough_envelope(raw)


@router.get("/bookings/customers/{customer_id}/history")
@inject
async def get_admin_customer_history(
    customer_id: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    """Customer booking history; a configured admin key stands in for a token."""
    customer_id = require_identifier(
        customer_id, "customerId", "get_admin_customer_history", correlation_id
    )
    require_token(auth, correlation_id, "get_admin_customer_history", allow_admin_key=True)
    raw = await upstream.call(
        f"/api/users/customers/{path_segment(customer_id)}/history",
        auth=auth,
        correlation_id=correlation_id,
        operation="get_admin_customer_history",
        admin_key=True,
    )
    return passthrough_envelope(raw)


@router.get("/provider/customers")
@inject
async def list_provider_customers(
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    raw = await upstream.call(
        "/api/providers/customers",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_provider_customers",
    )
    items = [customer.to_wire() for customer in normalize_customer_list(raw)]
    return envelope({"items": items})


@router.get("/provider/customers/{customer_id}/history")
@inject
async def get_provider_customer_history(
    customer_id: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    customer_id = require_identifier(
        customer_id, "customerId", "get_provider_customer_history", correlation_id
    )
    raw = await upstream.call(
        f"/api/providers/customers/{path_segment(customer_id)}/history",
        auth=auth,
        correlation_id=correlation_id,
        operation="get_provider_customer_history",
    )
    payload = raw.get("data", raw) if isinstance(raw, dict) else raw
    return envelope(payload)
