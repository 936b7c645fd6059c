"""Provider earnings routes."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Query, Request

from services.dashboard_bff_service.api._helpers import (
    envelope,
    forwarded_params,
    passthrough_envelope,
)
from services.dashboard_bff_service.auth_context import AuthContext
from services.dashboard_bff_service.protocols import EarningsServiceProtocol, UpstreamClientProtocol

router = APIRouter(prefix="/provider/earnings", tags=["Earnings"])


@router.get("")
@inject
async def get_earnings(
    earnings: FromDishka[EarningsServiceProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
    days: int = Query(30, ge=1, le=365, description="Series window in days"),
) -> dict[str, Any]:
    """KPI figures and the earnings series in one payload."""
    analytics = await earnings.fetch_earnings(auth, correlation_id, days=days)
    return envelope(analytics.to_wire())


@router.get("/series")
@inject
async def get_earnings_series(
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    auth: FromDishka[AuthContext],
    correlation_id: FromDishka[UUID],
) -> dict[str, Any]:
    raw = await upstream.call(
        "/api/bookings/analytics/earnings/series",
        auth=auth,
        correlation_id=correlation_id,
        operation="get_earnings_series",
        params=forwarded_params(request),
    )
    return passthrough_envelope(raw)
