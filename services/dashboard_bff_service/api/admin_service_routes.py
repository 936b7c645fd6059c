"""Admin service catalogue routes and the service-request review queue."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dashboard_service_libs.error_handling import raise_method_not_allowed, raise_validation_error
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
)
from services.dashboard_bff_service.auth_context import AuthContext, require_token
from services.dashboard_bff_service.config import SERVICE_ID
from services.dashboard_bff_service.normalizers.services import (
    build_service_payload,
    normalize_service_detail,
    pick_service_detail,
)
from services.dashboard_bff_service.protocols import UpstreamClientProtocol

router = APIRouter(prefix="/admin", tags=["Admin Services"])
logger = create_service_logger("dashboard_bff.admin_service_routes")

# Sentinel distinguishing a malformed body from a valid JSON null
_INVALID = object()


@router.get("/services")
@inject
async def list_admin_services_not_allowed(correlation_id: FromDishka[UUID]) -> None:
    raise_method_not_allowed(
        service=SERVICE_ID,
        operation="list_admin_services",
        message="Method not allowed. Use POST.",
        correlation_id=correlation_id,
    )


@router.post("/services")
@inject
async def create_admin_service(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    """Create a service from the admin form.

    The body must be a JSON object. Service-level price is fixed at 0 and
    every variant is sent with an absolute price, a duration and tags.
    """
    body = await read_json_body(request, default=_INVALID)
    if not isinstance(body, dict):
        raise_validation_error(
            service=SERVICE_ID,
            operation="create_admin_service",
            field="body",
            message="Invalid JSON",
            correlation_id=correlation_id,
        )

    payload = build_service_payload(body)
    raw = await upstream.call(
        "/api/services/admin/services",
        method="POST",
        auth=auth,
        correlation_id=correlation_id,
        operation="create_admin_service",
        json=payload,
        forward_cookie=True,
        api_key=True,
    )
    logger.info(
        "Service created",
        variants=len(payload["variants"]),
        correlation_id=str(correlation_id),
    )
    return passthrough_envelope(raw)


@router.get("/services/{id_or_slug}")
@inject
async def get_admin_service(
    id_or_slug: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    id_or_slug = require_identifier(id_or_slug, "idOrSlug", "get_admin_service", correlation_id)
    raw = await upstream.call(
        f"/api/services/{path_segment(id_or_slug)}",
        auth=auth,
        correlation_id=correlation_id,
        operation="get_admin_service",
    )
    service = normalize_service_detail(pick_service_detail(raw))
    return envelope({"service": service.to_wire()})


@router.patch("/services/{id_or_slug}")
@inject
async def update_admin_service(
    id_or_slug: str,
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    id_or_slug = require_identifier(
        id_or_slug, "idOrSlug", "update_admin_service", correlation_id
    )
    body = await read_json_body(request)
    raw = await upstream.call(
        f"/api/services/{path_segment(id_or_slug)}",
        method="PATCH",
        auth=auth,
        correlation_id=correlation_id,
        operation="update_admin_service",
        json=body,
    )
    return passthrough_envelope(raw)


@router.delete("/services/{id_or_slug}")
@inject
async def delete_admin_service(
    id_or_slug: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    id_or_slug = require_identifier(
        id_or_slug, "idOrSlug", "delete_admin_service", correlation_id
    )
    raw = await upstream.call(
        f"/api/services/{path_segment(id_or_slug)}",
        method="DELETE",
        auth=auth,
        correlation_id=correlation_id,
        operation="delete_admin_service",
    )
    return passthrough_envelope(raw)


@router.get("/servicesRequest")
@inject
async def list_service_requests(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    """Services awaiting review; ``status`` defaults to ``draft``."""
    require_token(auth, correlation_id, "list_service_requests")
    params = forwarded_params(request)
    if "status" not in request.query_params:
        params.append(("status", "draft"))
    raw = await upstream.call(
        "/api/services/admin/services",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_service_requests",
        params=params,
    )
    return passthrough_envelope(raw)


@router.get("/servicesRequest/{id_or_slug}")
@inject
async def get_service_request(
    id_or_slug: str,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    require_token(auth, correlation_id, "get_service_request")
    id_or_slug = require_identifier(id_or_slug, "idOrSlug", "get_service_request", correlation_id)
    raw = await upstream.call(
        f"/api/services/admin/services/{path_segment(id_or_slug)}",
        auth=auth,
        correlation_id=correlation_id,
        operation="get_service_request",
    )
    return passthrough_envelope(raw)


@router.patch("/servicesRequest/{id_or_slug}")
@inject
async def update_service_request(
    id_or_slug: str,
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    require_token(auth, correlation_id, "update_service_request")
    id_or_slug = require_identifier(
        id_or_slug, "idOrSlug", "update_service_request", correlation_id
    )
    body = await read_json_body(request)
    raw = await upstream.call(
        f"/api/services/admin/services/{path_segment(id_or_slug)}",
        method="PATCH",
        auth=auth,
        correlation_id=correlation_id,
        operation="update_service_request",
        json=body,
    )
    return passthrough_envelope(raw)
