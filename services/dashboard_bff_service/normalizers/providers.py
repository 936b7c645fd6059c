"""Provider summaries for the admin provider lists."""

from __future__ import annotations

from typing import Any

from services.dashboard_bff_service.dto.resources_v1 import ProviderSummaryV1
from services.dashboard_bff_service.normalizers._coercion import (
    as_record,
    coerce_id,
    coerce_optional_str,
    coerce_str,
    first_present,
    pick_list,
)

PROVIDER_LIST_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("providers",),
    ("data",),
    ("data", "items"),
    ("items",),
    (),
)


def normalize_provider_summary(raw: Any) -> ProviderSummaryV1:
    """``userId`` may arrive as a plain id or an embedded user document."""
    record = as_record(raw)
    user = record.get("userId")
    user_id = coerce_id(user, ("_id", "id")) if isinstance(user, dict) else coerce_str(user)
    return ProviderSummaryV1(
        mongo_id=coerce_id(record, ("_id", "id")),
        name_of_supplier=coerce_str(first_present(record, "nameOfSupplier", "name")),
        status=coerce_str(first_present(record, "status"), default="pending"),
        ded_license_no=coerce_str(first_present(record, "dedLicenseNo")),
        user_id=user_id,
        created_at=coerce_optional_str(first_present(record, "createdAt")),
        updated_at=coerce_optional_str(first_present(record, "updatedAt")),
    )


def pick_provider_list(raw: Any) -> list[Any]:
    return pick_list(raw, PROVIDER_LIST_CANDIDATES)
