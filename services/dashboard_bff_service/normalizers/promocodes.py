"""Provider promocode normalizers."""

from __future__ import annotations

from typing import Any

from services.dashboard_bff_service.dto.resources_v1 import PromocodeV1
from services.dashboard_bff_service.normalizers._coercion import (
    as_record,
    coerce_id,
    coerce_number,
    coerce_optional_number,
    coerce_optional_str,
    coerce_str,
    first_present,
    pick_list,
)

PROMOCODE_LIST_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("promocodes",),
    ("data",),
    ("data", "items"),
    ("items",),
    (),
)


def _embedded_id(value: Any) -> str | None:
    if isinstance(value, dict):
        return coerce_id(value, ("_id", "id")) or None
    return coerce_optional_str(value)


def normalize_promocode(raw: Any) -> PromocodeV1:
    record = as_record(raw)
    return PromocodeV1(
        mongo_id=coerce_id(record, ("_id", "id")),
        code=coerce_str(first_present(record, "code")),
        description=coerce_optional_str(first_present(record, "description")),
        discount_type=coerce_str(first_present(record, "discountType"), default="percentage"),
        amount=coerce_number(record, "amount"),
        currency=coerce_optional_str(first_present(record, "currency")),
        max_usage=coerce_optional_number(record, "maxUsage"),
        used_count=coerce_number(record, "usedCount"),
        starts_at=coerce_optional_str(first_present(record, "startsAt")),
        ends_at=coerce_optional_str(first_present(record, "endsAt")),
        status=coerce_str(first_present(record, "status"), default="active"),
        service_id=_embedded_id(record.get("serviceId")),
        provider_id=_embedded_id(record.get("providerId")),
        created_by=_embedded_id(record.get("createdBy")),
        created_at=coerce_optional_str(first_present(record, "createdAt")),
        updated_at=coerce_optional_str(first_present(record, "updatedAt")),
    )


def pick_promocode_list(raw: Any) -> list[Any]:
    return pick_list(raw, PROMOCODE_LIST_CANDIDATES)


def pick_promocode(raw: Any) -> Any:
    promocode = first_present(raw, "data.promocode", "promocode", "data")
    return raw if promocode is None else promocode
