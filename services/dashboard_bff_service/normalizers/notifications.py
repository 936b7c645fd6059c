"""Provider notification normalizers."""

from __future__ import annotations

from typing import Any

from services.dashboard_bff_service.dto.resources_v1 import NotificationV1
from services.dashboard_bff_service.normalizers._coercion import (
    as_record,
    coerce_optional_str,
    first_present,
    normalize_identifier,
    pick_list,
)

NOTIFICATION_LIST_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("items",),
    ("data", "items"),
    ("data",),
    (),
)


def normalize_notification(raw: Any) -> NotificationV1:
    """Force a string ``_id`` from ``_id|id``; other fields pass through."""
    record = dict(as_record(raw))
    record["_id"] = normalize_identifier(first_present(raw, "_id", "id"))
    return NotificationV1.model_validate(record)


def normalize_notification_list(raw: Any) -> dict[str, Any]:
    """Notification page as ``{items, nextCursor}``; invalid ids are dropped."""
    items = [normalize_notification(item) for item in pick_list(raw, NOTIFICATION_LIST_CANDIDATES)]
    return {
        "items": [item.to_wire() for item in items if item.mongo_id],
        "nextCursor": coerce_optional_str(first_present(raw, "nextCursor", "data.nextCursor")),
    }
