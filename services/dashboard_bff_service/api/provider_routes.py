"""Provider panel routes: profile, addons, bookings, categories and registration."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dashboard_service_libs.logging_utils import create_service_logger
from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Request

from services.dashboard_bff_service.api._helpers import (
    envelope,
    forwarded_params,
    passthrough_envelope,
    path_segment,
    read_json_body,
    require_identifier,
    require_object_id,
)
from services.dashboard_bff_service.auth_context import AuthContext
from services.dashboard_bff_service.normalizers.bookings import (
    pick_booking_detail,
    pick_booking_items,
    pick_pagination,
)
from services.dashboard_bff_service.normalizers.categories import normalize_provider_categories
from services.dashboard_bff_service.normalizers.providers import (
    normalize_provider_summary,
    pick_provider_list,
)
from services.dashboard_bff_service.protocols import UpstreamClientProtocol

router = APIRouter(prefix="/provider", tags=["Provider"])
logger = create_service_logger("dashboard_bff.provider_routes")


@router.post("")
@inject
async def register_provider(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    body = await read_json_body(request)
    raw = await upstream.call(
        "/api/providers",
        method="POST",
        auth=auth,
        correlation_id=correlation_id,
        operation="register_provider",
        json=body,
        forward_cookie=True,
    )
    return passthrough_envelope(raw)


# --- Profile ---


@router.get("/me")
@inject
async def get_provider_profile(
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    raw = await upstream.call(
        "/api/provider/me",
        auth=auth,
        correlation_id=correlation_id,
        operation="get_provider_profile",
        forward_cookie=True,
    )
    return passthrough_envelope(raw)


@router.patch("/me")
@inject
async def update_provider_profile(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    """Forward the profile update body byte-for-byte."""
    raw = await upstream.call(
        "/api/provider/me",
        method="PATCH",
        auth=auth,
        correlation_id=correlation_id,
        operation="update_provider_profile",
        content=await request.body(),
        headers={"Content-Type": "application/json"},
        forward_cookie=True,
    )
    return passthrough_envelope(raw)


# --- Addons ---


@router.get("/addons")
@inject
async def list_provider_addons(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    raw = await upstream.call(
        "/api/provider/addons",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_provider_addons",
        params=forwarded_params(request),
    )
    return passthrough_envelope(raw)


@router.post("/addons")
@inject
async def create_provider_addon(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    body = await read_json_body(request)
    raw = await upstream.call(
        "/api/provider/addons",
        method="POST",
        auth=auth,
        correlation_id=correlation_id,
        operation="create_provider_addon",
        json=body,
    )
    return passthrough_envelope(raw)


@router.api_route("/addons/{addon_id}", methods=["GET", "PATCH", "DELETE"])
@inject
async def provider_addon(
    addon_id: str,
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    """Read, update or delete one addon."""
    operation = f"{request.method.lower()}_provider_addon"
    addon_id = require_identifier(addon_id, "id", operation, correlation_id)
    body = await read_json_body(request) if request.method == "PATCH" else None
    raw = await upstream.call(
        f"/api/provider/addons/{path_segment(addon_id)}",
        method=request.method,
        auth=auth,
        correlation_id=correlation_id,
        operation=operation,
        json=body,
    )
    return passthrough_envelope(raw)


# --- Bookings ---


@router.get("/bookings")
@inject
async def list_provider_bookings(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    raw = await upstream.call(
        "/api/bookings",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_provider_bookings",
        params=forwarded_params(request),
    )
    items = pick_booking_items(raw)
    pagination = pick_pagination(raw)
    return envelope({"items": items, "pagination": pagination}, items=items, pagination=pagination)


@router.get("/bookings/{booking_id}")
@inject
async def get_provider_booking(
    booking_id: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    booking_id = require_object_id(booking_id, "id", "get_provider_booking", correlation_id)
    raw = await upstream.call(
        f"/api/bookings/{path_segment(booking_id)}",
        auth=auth,
        correlation_id=correlation_id,
        operation="get_provider_booking",
    )
    return envelope({"booking": pick_booking_detail(raw)})


# --- Categories ---


@router.get("/categories")
@inject
async def list_provider_categories(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    """Categories for the provider panel, resolved against the provider origin.

    ``onlyActive=true`` asks the backend for active categories and also filters
    locally.
    """
    only_active = request.query_params.get("onlyActive") == "true"
    raw = await upstream.call(
        "/api/category/admin/categories",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_provider_categories",
        params={"active": "true"} if only_active else None,
        provider_base=True,
    )
    items = [
        category.to_wire()
        for category in normalize_provider_categories(raw, only_active=only_active)
    ]
    logger.debug(
        "Provider categories normalized",
        count=len(items),
        only_active=only_active,
        correlation_id=str(correlation_id),
    )
    return envelope({"items": items, "count": len(items)}, items=items, count=len(items))


# --- Admin-facing lists served under /provider ---


@router.get("/providerlist")
@inject
async def list_providers(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    raw = await upstream.call(
        "/api/admin/providers",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_providers",
        params=forwarded_params(request),
        admin_key=True,
    )
    providers = [normalize_provider_summary(item).to_wire() for item in pick_provider_list(raw)]
    return envelope({"providers": providers}, success=True, providers=providers)


@router.get("/transactions/{transaction_id}")
@inject
async def get_provider_transaction(
    transaction_id: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    transaction_id = require_identifier(
        transaction_id, "id", "get_provider_transaction", correlation_id
    )
    raw = await upstream.call(
        f"/api/bookings/analytics/transactions/{path_segment(transaction_id)}",
        auth=auth,
        correlation_id=correlation_id,
        operation="get_provider_transaction",
    )
    return passthrough_envelope(raw)
