"""Provider earnings aggregation over the backend analytics endpoints."""

from __future__ import annotations

import asyncio
from uuid import UUID

from dashboard_service_libs.logging_utils import create_service_logger

from services.dashboard_bff_service.auth_context import AuthContext
from services.dashboard_bff_service.dto.resources_v1 import EarningsAnalyticsV1
from services.dashboard_bff_service.normalizers.earnings import merge_earnings
from services.dashboard_bff_service.protocols import UpstreamClientProtocol

logger = create_service_logger("dashboard_bff.earnings_service")

EARNINGS_SUMMARY_PATH = "/api/bookings/analytics/earnings"
EARNINGS_SERIES_PATH = "/api/bookings/analytics/earnings/series"


class EarningsService:
    """Joins the earnings summary and series into one analytics payload."""

    def __init__(self, upstream: UpstreamClientProtocol) -> None:
        self._upstream = upstream

    async def fetch_earnings(
        self,
        auth: AuthContext,
        correlation_id: UUID,
        days: int = 30,
    ) -> EarningsAnalyticsV1:
        # The first failure propagates and fails the whole request
        summary, series = await asyncio.gather(
            self._upstream.call(
                EARNINGS_SUMMARY_PATH,
                auth=auth,
                correlation_id=correlation_id,
                operation="earnings_summary",
            ),
            self._upstream.call(
                EARNINGS_SERIES_PATH,
                auth=auth,
                correlation_id=correlation_id,
                operation="earnings_series",
                params={"days": days},
            ),
        )
        analytics = merge_earnings(summary, series)
        logger.debug(
            "Merged earnings analytics",
            days=days,
            series_points=len(analytics.series),
            correlation_id=str(correlation_id),
        )
        return analytics
