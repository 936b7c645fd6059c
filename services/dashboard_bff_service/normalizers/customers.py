"""Provider customer summaries."""

from __future__ import annotations

from typing import Any

from services.dashboard_bff_service.dto.resources_v1 import (
    CustomerServiceCountV1,
    CustomerSummaryV1,
)
from services.dashboard_bff_service.normalizers._coercion import (
    as_record,
    coerce_number,
    coerce_optional_str,
    coerce_str,
    first_present,
    pick_list,
)

CUSTOMER_LIST_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("data", "items"),
    ("items",),
    ("data",),
    (),
)


def _service_count(raw: Any) -> CustomerServiceCountV1:
    record = as_record(raw)
    return CustomerServiceCountV1(
        service_id=coerce_optional_str(first_present(record, "serviceId", "_id")),
        service_name=coerce_optional_str(first_present(record, "serviceName", "name")),
        count=coerce_number(record, "count"),
    )


def normalize_customer_summary(raw: Any) -> CustomerSummaryV1:
    record = as_record(raw)
    services = record.get("services")
    return CustomerSummaryV1(
        customer_id=coerce_str(first_present(record, "customerId", "_id", "id")).strip(),
        customer_name=coerce_optional_str(first_present(record, "customerName", "name")),
        customer_email=coerce_optional_str(first_present(record, "customerEmail", "email")),
        phone=coerce_optional_str(first_present(record, "phone")),
        total_bookings=coerce_number(record, "totalBookings"),
        total_spent=coerce_number(record, "totalSpent"),
        services=[_service_count(s) for s in services] if isinstance(services, list) else [],
    )


def normalize_customer_list(raw: Any) -> list[CustomerSummaryV1]:
    return [normalize_customer_summary(item) for item in pick_list(raw, CUSTOMER_LIST_CANDIDATES)]
