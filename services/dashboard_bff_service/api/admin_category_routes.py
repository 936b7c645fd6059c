"""Admin category routes: listing, creation, image upload and the catalog views."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dashboard_service_libs.error_handling import raise_invalid_response
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
from services.dashboard_bff_service.config import SERVICE_ID
from services.dashboard_bff_service.normalizers._coercion import pick_list
from services.dashboard_bff_service.normalizers.categories import (
    build_category_payload,
    normalize_catalog_category,
    normalize_category,
    normalize_category_with_services,
    pick_category_list,
    pick_created_category,
)
from services.dashboard_bff_service.protocols import UpstreamClientProtocol

router = APIRouter(prefix="/admin", tags=["Admin Categories"])
logger = create_service_logger("dashboard_bff.admin_category_routes")

ADMIN_CATEGORIES_PATH = "/api/category/admin/categories"


@router.get("/categories")
@inject
async def list_admin_categories(
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    raw = await upstream.call(
        ADMIN_CATEGORIES_PATH,
        auth=auth,
        correlation_id=correlation_id,
        operation="list_admin_categories",
    )
    categories = [normalize_category(item).to_wire() for item in pick_category_list(raw)]
    return envelope({"categories": categories})


@router.post("/categories")
@inject
async def create_admin_category(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    """Create a category.

    The backend response must identify the created document; a success
    without an id is reported as an invalid backend response (502).
    """
    body = await read_json_body(request)
    payload = build_category_payload(body, correlation_id)

    raw = await upstream.call(
        ADMIN_CATEGORIES_PATH,
        method="POST",
        auth=auth,
        correlation_id=correlation_id,
        operation="create_admin_category",
        json=payload,
    )

    category = normalize_category(pick_created_category(raw))
    if not category.id:
        logger.error(
            "Created category has no id",
            correlation_id=str(correlation_id),
        )
        raise_invalid_response(
            service=SERVICE_ID,
            operation="create_admin_category",
            message="Created but no id returned from backend",
            correlation_id=correlation_id,
        )

    logger.info(
        "Category created",
        category_id=category.id,
        correlation_id=str(correlation_id),
    )
    return envelope({"category": category.to_wire()})


@router.post("/categories/{category_id}/image")
@inject
async def upload_category_image(
    category_id: str,
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    """Forward a multipart image upload; the transport writes the boundary."""
    category_id = require_identifier(category_id, "id", "upload_category_image", correlation_id)

    form = await request.form()
    files: list[tuple[str, tuple[str, bytes, str]]] = []
    fields: dict[str, str] = {}
    for key, value in form.multi_items():
        if isinstance(value, str):
            fields[key] = value
        else:
            files.append(
                (
                    key,
                    (
                        value.filename or key,
                        await value.read(),
                        value.content_type or "application/octet-stream",
                    ),
                )
            )

    raw = await upstream.call(
        f"{ADMIN_CATEGORIES_PATH}/{path_segment(category_id)}/image",
        method="POST",
        auth=auth,
        correlation_id=correlation_id,
        operation="upload_category_image",
        files=files,
        data=fields,
    )
    return passthrough_envelope(raw)


@router.get("/catalog")
@inject
async def list_catalog_categories(
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    raw = await upstream.call(
        "/api/category/catalog/categories",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_catalog_categories",
    )
    categories = [normalize_catalog_category(item).to_wire() for item in pick_category_list(raw)]
    return envelope({"categories": categories})


@router.get("/categories-with-services")
@inject
async def list_categories_with_services(
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    raw = await upstream.call(
        "/api/category/admin/categories-with-services",
        auth=auth,
        correlation_id=correlation_id,
        operation="list_categories_with_services",
        forward_cookie=True,
        api_key=True,
    )
    rows = pick_list(raw, (("data",), ()))
    return envelope([normalize_category_with_services(row).to_wire() for row in rows])
