"""Service catalogue normalizers and the admin create-service payload builder."""

from __future__ import annotations

from typing import Any

from services.dashboard_bff_service.dto.resources_v1 import ServiceDetailV1, ServiceVariantV1
from services.dashboard_bff_service.normalizers._coercion import (
    as_record,
    coerce_id,
    coerce_optional_number,
    coerce_optional_str,
    coerce_str,
    coerce_str_list,
    first_present,
    to_number,
)

DEFAULT_VARIANT_DURATION_MIN = 60
DEFAULT_POLICY: dict[str, int] = {
    "cancellationHours": 0,
    "rescheduleHours": 0,
    "sameDayCutoffMin": 0,
}


def _bool_with_snake(record: dict[str, Any], camel: str, snake: str) -> bool:
    value = record.get(camel)
    if isinstance(value, bool):
        return value
    return bool(record.get(snake) or False)


def _active_from(record: dict[str, Any]) -> bool | None:
    active = record.get("active")
    if isinstance(active, bool):
        return active
    status = coerce_str(record.get("status"))
    return status.lower() == "active" if status else None


def normalize_variant(raw: Any) -> ServiceVariantV1:
    record = as_record(raw)
    return ServiceVariantV1(
        mongo_id=coerce_id(record, ("_id", "id")),
        name=coerce_str(first_present(record, "name"), default="Variant"),
        price_delta=coerce_optional_number(record, "priceDelta", "price_delta"),
        duration_delta=coerce_optional_number(record, "durationDelta", "duration_delta"),
        default_selected=_bool_with_snake(record, "defaultSelected", "default_selected"),
        is_popular=_bool_with_snake(record, "isPopular", "is_popular"),
        code=coerce_optional_str(record.get("code")),
        image=coerce_optional_str(record.get("image")),
        absolute_price=coerce_optional_number(record, "absolutePrice", "absolute_price"),
        compare_at_price=coerce_optional_number(record, "compareAtPrice", "compare_at_price"),
        segment=coerce_optional_str(record.get("segment")),
    )


def normalize_service_detail(raw: Any) -> ServiceDetailV1:
    """Coerce a backend service document, accepting snake_case fallbacks."""
    record = as_record(raw)
    variants = record.get("variants")
    images = record.get("images")
    return ServiceDetailV1(
        id=coerce_id(record),
        mongo_id=coerce_optional_str(first_present(record, "_id")),
        name=coerce_str(first_present(record, "name"), default="Untitled Service"),
        slug=coerce_str(first_present(record, "slug")),
        description=coerce_str(record.get("description")),
        image=coerce_str(record.get("image")),
        images=coerce_str_list(images) if isinstance(images, list) else None,
        category_id=coerce_optional_str(first_present(record, "categoryId", "category_id")),
        pricing_model_id=coerce_optional_str(
            first_present(record, "pricingModelId", "pricing_model_id")
        ),
        form_template_id=coerce_optional_str(
            first_present(record, "formTemplateId", "form_template_id")
        ),
        variants=[normalize_variant(v) for v in variants] if isinstance(variants, list) else [],
        base_price=coerce_optional_number(record, "basePrice", "base_price"),
        currency=coerce_optional_str(record.get("currency")),
        status=coerce_optional_str(record.get("status")),
        active=_active_from(record),
        created_at=coerce_optional_str(first_present(record, "createdAt", "created_at")),
        updated_at=coerce_optional_str(first_present(record, "updatedAt", "updated_at")),
    )


def pick_service_detail(raw: Any) -> Any:
    service = first_present(raw, "data.service", "service", "data")
    return raw if service is None else service


def _number_or(value: Any, default: int | float) -> int | float:
    number = to_number(value)
    return default if number is None else number


def _variant_tags(value: Any) -> list[str]:
    return coerce_str_list(value) or ["default"]


def _build_variant(raw: Any) -> dict[str, Any]:
    record = as_record(raw)
    absolute_price = coerce_optional_number(record, "absolutePrice", "unitPrice", "price")

    variant: dict[str, Any] = {
        "name": coerce_str(record.get("name")).strip(),
        "absolutePrice": 0 if absolute_price is None else absolute_price,
        "durationMin": _number_or(record.get("durationMin"), DEFAULT_VARIANT_DURATION_MIN),
        "durationDelta": _number_or(record.get("durationDelta"), 0),
        "tags": _variant_tags(record.get("tags")),
        "defaultSelected": bool(record.get("defaultSelected")),
        "isPopular": bool(record.get("isPopular")),
    }
    if record.get("compareAtPrice") is not None:
        variant["compareAtPrice"] = _number_or(record["compareAtPrice"], 0)
    for key in ("code", "description", "image"):
        text = coerce_str(record.get(key)).strip()
        if text:
            variant[key] = text
    if record.get("segment") is not None:
        variant["segment"] = record["segment"]
    return variant


def _list_or_empty(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _default(record: dict[str, Any], key: str, default: Any) -> Any:
    value = record.get(key)
    return default if value is None else value


def build_service_payload(body: dict[str, Any]) -> dict[str, Any]:
    """Build the backend create-service payload.

    Service-level price is always 0; pricing lives on the variants, which
    always carry ``absolutePrice``, ``durationMin`` and ``tags``.
    """
    payload: dict[str, Any] = {
        "name": body.get("name"),
        "slug": body.get("slug"),
        "skuCode": body.get("skuCode"),
        "categoryId": body.get("categoryId"),
        "description": _default(body, "description", ""),
        "bookingType": _default(body, "bookingType", "HOURLY"),
        "quantityUnit": _default(body, "quantityUnit", "hours"),
        "basePrice": 0,
        "teamSize": _default(body, "teamSize", 1),
        "minQty": _default(body, "minQty", 1),
        "maxQty": body.get("maxQty"),
        "leadTimeMin": _default(body, "leadTimeMin", 0),
        "bufferAfterMin": _default(body, "bufferAfterMin", 0),
        "minProfessionals": _default(body, "minProfessionals", 1),
        "maxProfessionals": _default(body, "maxProfessionals", 4),
        "materialsAddonPrice": _default(body, "materialsAddonPrice", 0),
        "promoCode": body.get("promoCode"),
        "promoPercent": _default(body, "promoPercent", 0),
        "taxClass": _default(body, "taxClass", "standard"),
        "isInstantBookable": body.get("isInstantBookable") is not False,
        "requiresAddress": body.get("requiresAddress") is not False,
        "requiresSlot": body.get("requiresSlot") is not False,
        "images": _list_or_empty(body.get("images")),
        "tags": _list_or_empty(body.get("tags")),
        "cities": _list_or_empty(body.get("cities")),
        "variants": [_build_variant(v) for v in _list_or_empty(body.get("variants"))],
        "addonIds": _list_or_empty(body.get("addonIds")),
        "addons": _list_or_empty(body.get("addons")),
        "priceMatrix": _list_or_empty(body.get("priceMatrix")),
        "formQuestions": _list_or_empty(body.get("formQuestions")),
        "policy": _default(body, "policy", dict(DEFAULT_POLICY)),
        "active": body.get("active") is not False,
        "status": body.get("status") or "draft",
    }
    if body.get("formTemplateId") is not None:
        payload["formTemplateId"] = body["formTemplateId"]
    return payload
