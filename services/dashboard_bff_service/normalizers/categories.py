"""Category normalizers for admin, catalog and provider views."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dashboard_service_libs.error_handling import raise_validation_error

from services.dashboard_bff_service.config import SERVICE_ID
from services.dashboard_bff_service.dto.resources_v1 import (
    CatalogCategoryV1,
    CategoryServiceV1,
    CategorySummaryV1,
    CategoryV1,
    CategoryWithServicesV1,
    ProviderCategoryV1,
)
from services.dashboard_bff_service.normalizers._coercion import (
    as_record,
    coerce_bool,
    coerce_id,
    coerce_number,
    coerce_optional_str,
    coerce_str,
    coerce_str_list,
    first_present,
    pick_list,
    slugify,
    to_number,
)

CATEGORY_LIST_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("data",),
    ("categories",),
    (),
)

PROVIDER_CATEGORY_LIST_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("items",),
    ("data",),
    ("data", "items"),
    ("data", "categories"),
    ("categories",),
    (),
)


def _slug_for(record: dict[str, Any], name: str) -> str:
    return coerce_str(first_present(record, "slug")) or slugify(name)


def _provider_id(record: dict[str, Any]) -> str | None:
    return coerce_optional_str(first_present(record, "providerId", "provider_id"))


def normalize_category(raw: Any) -> CategoryV1:
    record = as_record(raw)
    category_id = coerce_id(record)
    name = coerce_str(first_present(record, "name"))
    return CategoryV1(
        id=category_id,
        mongo_id=coerce_str(first_present(record, "_id"), default=category_id),
        name=name,
        slug=_slug_for(record, name),
        description=coerce_optional_str(first_present(record, "description")),
        order=coerce_number(record, "order", "sort"),
        active=coerce_bool(record.get("active"), True),
        tags=coerce_str_list(record.get("tags")),
        image=coerce_str(first_present(record, "image")),
        provider_id=_provider_id(record),
        created_at=coerce_optional_str(first_present(record, "createdAt", "created_at")),
        updated_at=coerce_optional_str(first_present(record, "updatedAt", "updated_at")),
    )


def normalize_catalog_category(raw: Any) -> CatalogCategoryV1:
    record = as_record(raw)
    name = coerce_str(first_present(record, "name"))
    return CatalogCategoryV1(
        id=coerce_id(record),
        name=name,
        slug=_slug_for(record, name),
        order=coerce_number(record, "order", "sort"),
        icon=coerce_str(first_present(record, "icon")),
        active=coerce_bool(record.get("active"), True),
    )


def pick_category_list(raw: Any) -> list[Any]:
    return pick_list(raw, CATEGORY_LIST_CANDIDATES)


def pick_provider_category_list(raw: Any) -> list[Any]:
    return pick_list(raw, PROVIDER_CATEGORY_LIST_CANDIDATES)


def normalize_provider_category(raw: Any) -> ProviderCategoryV1 | None:
    """Provider-panel category, or None when the id or name is missing."""
    record = as_record(raw)
    category_id = coerce_id(record, ("_id", "id"))
    name = coerce_str(first_present(record, "name"))
    if not category_id or not name:
        return None
    return ProviderCategoryV1(
        id=category_id,
        mongo_id=category_id,
        name=name,
        slug=_slug_for(record, name),
        active=coerce_bool(record.get("active"), True),
        order=coerce_number(record, "order"),
        provider_id=_provider_id(record),
        created_at=coerce_optional_str(first_present(record, "createdAt")),
        updated_at=coerce_optional_str(first_present(record, "updatedAt")),
    )


def normalize_provider_categories(raw: Any, only_active: bool = False) -> list[ProviderCategoryV1]:
    categories = [normalize_provider_category(item) for item in pick_provider_category_list(raw)]
    return [
        category
        for category in categories
        if category is not None and (category.active or not only_active)
    ]


def normalize_category_with_services(raw: Any) -> CategoryWithServicesV1:
    record = as_record(raw)
    category = as_record(record.get("category"))
    services = record.get("services")
    name = coerce_str(first_present(category, "name"))

    return CategoryWithServicesV1(
        category=CategorySummaryV1(
            id=coerce_id(category),
            name=name,
            slug=_slug_for(category, name),
            order=coerce_number(category, "order", "sort"),
            image=coerce_str(first_present(category, "image")),
            active=coerce_bool(category.get("active"), True),
            tags=coerce_str_list(category.get("tags")),
        ),
        services=[
            _normalize_category_service(service)
            for service in (services if isinstance(services, list) else [])
        ],
    )


def _normalize_category_service(raw: Any) -> CategoryServiceV1:
    record = as_record(raw)
    images = record.get("images")
    if isinstance(images, list) and images:
        image = coerce_optional_str(images[0])
    else:
        image = coerce_optional_str(record.get("image"))
    return CategoryServiceV1(
        id=coerce_id(record),
        name=coerce_str(first_present(record, "name")),
        category_id=coerce_str(first_present(record, "categoryId", "category_id")),
        base_price=coerce_number(record, "basePrice", "base_price"),
        image=image,
    )


def build_category_payload(body: Any, correlation_id: UUID) -> dict[str, Any]:
    """Build the backend create-category payload from the admin form body.

    Raises:
        DashboardError: VALIDATION_ERROR when the name is missing
    """
    record = as_record(body)
    name = coerce_str(record.get("name")).strip()
    if not name:
        raise_validation_error(
            service=SERVICE_ID,
            operation="create_category",
            field="name",
            message="Category name is required",
            correlation_id=correlation_id,
        )

    payload: dict[str, Any] = {"name": name}

    slug = coerce_str(record.get("slug")).strip()
    if slug:
        payload["slug"] = slug
    if record.get("description"):
        payload["description"] = coerce_str(record["description"])
    if "active" in record:
        payload["active"] = record["active"]

    order = to_number(record.get("order"))
    if order is None:
        order = to_number(record.get("sort"))
    payload["order"] = 0 if order is None else order

    if "providerId" in record:
        provider_id = record["providerId"]
        if provider_id is None:
            payload["providerId"] = None
        elif provider_id != "":
            payload["providerId"] = coerce_str(provider_id)

    return payload


def pick_created_category(raw: Any) -> dict[str, Any]:
    """Locate the created document in the backend create response."""
    created = first_present(raw, "data.category", "data", "category", "item")
    return as_record(raw if created is None else created)
