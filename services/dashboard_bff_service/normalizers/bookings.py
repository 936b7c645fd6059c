"""Booking normalizers for the admin table and provider views."""

from __future__ import annotations

from typing import Any

from services.dashboard_bff_service.dto.resources_v1 import AdminBookingV1, PaginationV1
from services.dashboard_bff_service.normalizers._coercion import (
    as_record,
    coerce_id,
    coerce_number,
    coerce_str,
    dig,
    first_present,
    pick_list,
    to_iso_timestamp,
    to_number,
    utc_now_iso,
)

PROVIDER_BOOKING_LIST_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("items",),
    ("data", "items"),
    ("data",),
    (),
)

TOTAL_AMOUNT_KEYS = (
    "price.total",
    "total",
    "totalPrice",
    "grandTotal",
    "breakdown.total",
    "totalAmount",
)


def normalize_admin_booking(raw: Any, now: str | None = None) -> AdminBookingV1:
    """Coerce one backend booking into an admin table row.

    ``scheduledAt`` falls back through the schedule start, the booking date and
    the creation time, then to ``now``.
    """
    record = as_record(raw)
    now = now or utc_now_iso()

    schedule_start = first_present(record, "schedule.startAt", "scheduledAt", "date", "createdAt")
    scheduled_at = to_iso_timestamp(schedule_start) or now
    created_at = to_iso_timestamp(first_present(record, "createdAt")) or scheduled_at

    return AdminBookingV1(
        mongo_id=coerce_id(record, ("_id", "id")),
        code=coerce_str(first_present(record, "code", "bookingCode", "reference")),
        customer_name=coerce_str(first_present(record, "customerName")),
        customer_id=coerce_str(first_present(record, "customerId")),
        service_name=coerce_str(first_present(record, "serviceName")),
        status=coerce_str(first_present(record, "status"), default="pending"),
        scheduled_at=scheduled_at,
        created_at=created_at,
        total_amount=coerce_number(record, *TOTAL_AMOUNT_KEYS),
    )


def unwrap_admin_listing(raw: Any) -> Any:
    """Strip up to two ``data`` wrappers around the admin bookings listing."""
    listing = raw
    for _ in range(2):
        inner = dig(listing, "data")
        if inner is None:
            break
        listing = inner
    return listing


def pick_admin_booking_items(listing: Any) -> list[Any]:
    return pick_list(listing, (("items",), ()))


def build_admin_pagination(
    listing: Any,
    page: str | None,
    limit: str | None,
    count: int,
) -> dict[str, Any]:
    """Upstream pagination passes through unchanged; otherwise synthesize one."""
    upstream = dig(listing, "pagination")
    if isinstance(upstream, dict):
        return upstream

    page_number = to_number(page)
    limit_number = to_number(limit)
    return PaginationV1(
        page=1 if page_number is None else page_number,
        limit=20 if limit_number is None else limit_number,
        total=coerce_number(listing, "total", default=count),
        pages=coerce_number(listing, "pages", default=1),
    ).to_wire()


def pick_booking_items(raw: Any) -> list[Any]:
    return pick_list(raw, PROVIDER_BOOKING_LIST_CANDIDATES)


def pick_pagination(raw: Any) -> dict[str, Any] | None:
    pagination = first_present(raw, "pagination", "data.pagination")
    return pagination if isinstance(pagination, dict) else None


def pick_booking_detail(raw: Any) -> Any:
    """Locate the booking document: ``data.booking ?? booking ?? data ?? raw``."""
    booking = first_present(raw, "data.booking", "booking", "data")
    return raw if booking is None else booking
