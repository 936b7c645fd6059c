"""Admin booking routes: the bookings table and single-booking operations."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dashboard_service_libs.logging_utils import create_service_logger
from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Request

from services.dashboard_bff_service.api._helpers import (
    envelope,
    passthrough_envelope,
    path_segment,
    read_json_body,
    require_identifier,
)
from services.dashboard_bff_service.auth_context import AuthContext
from services.dashboard_bff_service.normalizers._coercion import utc_now_iso
from services.dashboard_bff_service.normalizers.bookings import (
    build_admin_pagination,
    normalize_admin_booking,
    pick_admin_booking_items,
    pick_booking_detail,
    unwrap_admin_listing,
)
from services.dashboard_bff_service.protocols import UpstreamClientProtocol

router = APIRouter(prefix="/admin/bookings", tags=["Admin Bookings"])
logger = create_service_logger("dashboard_bff.admin_booking_routes")

ADMIN_BOOKING_FILTERS = ("page", "limit", "status", "serviceId", "from", "to", "q", "providerId")


@router.get("")
@inject
async def list_admin_bookings(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    """Bookings table for the admin panel.

    Only the known filters are forwarded. The response carries the legacy
    ``success``, ``bookings`` and ``pagination`` keys next to the envelope.
    """
    params = {
        key: request.query_params[key]
        for key in ADMIN_BOOKING_FILTERS
        if request.query_params.get(key)
    }
    raw = await upstream.call(
        "/api/bookings",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_admin_bookings",
        params=params,
    )

    listing = unwrap_admin_listing(raw)
    now = utc_now_iso()
    bookings = [
        normalize_admin_booking(item, now).to_wire() for item in pick_admin_booking_items(listing)
    ]
    pagination = build_admin_pagination(
        listing, params.get("page"), params.get("limit"), len(bookings)
    )

    logger.info(
        "Admin bookings listed",
        count=len(bookings),
        correlation_id=str(correlation_id),
    )
    return envelope(
        {"bookings": bookings, "pagination": pagination},
        success=True,
        bookings=bookings,
        pagination=pagination,
    )


@router.get("/{booking_id}")
@inject
async def get_admin_booking(
    booking_id: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    booking_id = require_identifier(booking_id, "id", "get_admin_booking", correlation_id)
    raw = await upstream.call(
        f"/api/bookings/{path_segment(booking_id)}",
        auth=auth,
        correlation_id=correlation_id,
        operation="get_admin_booking",
    )
    return envelope({"booking": pick_booking_detail(raw)})


@router.patch("/{booking_id}")
@inject
async def update_admin_booking(
    booking_id: str,
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    booking_id = require_identifier(booking_id, "id", "update_admin_booking", correlation_id)
    body = await read_json_body(request)
    raw = await upstream.call(
        f"/api/bookings/{path_segment(booking_id)}",
        method="PATCH",
        auth=auth,
        correlation_id=correlation_id,
        operation="update_admin_booking",
        json=body,
    )
    return passthrough_envelope(raw)


@router.delete("/{booking_id}")
@inject
async def delete_admin_booking(
    booking_id: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    booking_id = require_identifier(booking_id, "id", "delete_admin_booking", correlation_id)
    raw = await upstream.call(
        f"/api/bookings/{path_segment(booking_id)}",
        method="DELETE",
        auth=auth,
        correlation_id=correlation_id,
        operation="delete_admin_booking",
    )
    return passthrough_envelope(raw)
