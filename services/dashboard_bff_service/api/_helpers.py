"""Shared helpers for the dashboard API routes: id validation, body reading
and the response envelope."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any
from urllib.parse import quote
from uuid import UUID

from dashboard_service_libs.error_handling import raise_validation_error
from fastapi import Request

from services.dashboard_bff_service.config import SERVICE_ID
from services.dashboard_bff_service.normalizers._coercion import normalize_identifier

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

# Envelope keys owned by this service; upstream values never override them
RESERVED_ENVELOPE_KEYS = frozenset({"ok", "data"})


def require_identifier(
    value: Any,
    field: str,
    operation: str,
    correlation_id: UUID,
) -> str:
    """Return the id, or raise 400 for empty, ``undefined`` or ``null`` values."""
    identifier = normalize_identifier(value)
    if not identifier:
        raise_validation_error(
            service=SERVICE_ID,
            operation=operation,
            field=field,
            message=f"{field} is required",
            correlation_id=correlation_id,
            value=value,
        )
    return identifier


def require_object_id(
    value: Any,
    field: str,
    operation: str,
    correlation_id: UUID,
) -> str:
    """Like require_identifier, but the id must also be 24 hex characters."""
    identifier = require_identifier(value, field, operation, correlation_id)
    if not OBJECT_ID_PATTERN.match(identifier):
        raise_validation_error(
            service=SERVICE_ID,
            operation=operation,
            field=field,
            message=f"Invalid {field}",
            correlation_id=correlation_id,
            value=value,
        )
    return identifier


def path_segment(identifier: str) -> str:
    return quote(identifier, safe="")


def forwarded_params(request: Request, exclude: Iterable[str] = ()) -> list[tuple[str, str]]:
    """The incoming query string as ordered pairs, minus ``exclude``."""
    skipped = set(exclude)
    return [(key, value) for key, value in request.query_params.multi_items() if key not in skipped]


async def read_json_body(request: Request, default: Any = None) -> Any:
    """Parse the request body as JSON; ``default`` (``{}``) when absent or malformed."""
    fallback = {} if default is None else default
    body = await request.body()
    if not body:
        return fallback
    try:
        return await request.json()
    except ValueError:
        return fallback


def envelope(data: Any, **aliases: Any) -> dict[str, Any]:
    """Canonical success envelope ``{ok: true, data}`` plus legacy top-level aliases."""
    return {"ok": True, "data": data, **aliases}


def passthrough_envelope(payload: Any) -> dict[str, Any]:
    """Wrap an upstream body that is returned as-is.

    Object keys are also spread at top level for consumers that read the legacy
    shape, and an upstream ``data`` member becomes the envelope ``data``.
    Non-JSON text is carried as ``{raw: text}``.
    """
    if isinstance(payload, str):
        payload = {"raw": payload}
    if isinstance(payload, dict):
        spread = {k: v for k, v in payload.items() if k not in RESERVED_ENVELOPE_KEYS}
        return {**spread, "ok": True, "data": payload.get("data", payload)}
    return {"ok": True, "data": payload}
