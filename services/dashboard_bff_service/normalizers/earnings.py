"""Merge of the earnings summary and series into the dashboard analytics."""

from __future__ import annotations

from typing import Any

from services.dashboard_bff_service.dto.resources_v1 import (
    EarningsAnalyticsV1,
    EarningsSeriesPointV1,
    MonthEarningsV1,
    SeriesRangeV1,
    TodayEarningsV1,
    WeekEarningsV1,
    YearEarningsV1,
)
from services.dashboard_bff_service.normalizers._coercion import (
    as_record,
    coerce_number,
    coerce_str,
    dig,
    first_present,
)

DEFAULT_CURRENCY = "AED"


def _unwrap(raw: Any) -> dict[str, Any]:
    record = as_record(raw)
    inner = record.get("data")
    return inner if isinstance(inner, dict) else record


def _series_point(raw: Any) -> EarningsSeriesPointV1:
    record = as_record(raw)
    return EarningsSeriesPointV1(
        date=coerce_str(first_present(record, "date", "day")),
        amount=coerce_number(record, "amount", "total"),
    )


def _series_range(series: dict[str, Any]) -> SeriesRangeV1 | None:
    start = coerce_str(dig(series, "range", "start"))
    end = coerce_str(dig(series, "range", "end"))
    if not start or not end:
        return None
    return SeriesRangeV1(start=start, end=end)


def merge_earnings(summary_raw: Any, series_raw: Any) -> EarningsAnalyticsV1:
    summary = _unwrap(summary_raw)
    series = _unwrap(series_raw)
    points = series.get("series")

    return EarningsAnalyticsV1(
        currency=(
            coerce_str(summary.get("currency"))
            or coerce_str(series.get("currency"))
            or DEFAULT_CURRENCY
        ),
        today=TodayEarningsV1(
            amount=coerce_number(summary, "today.amount"),
            delta_pct_vs_yesterday=coerce_number(summary, "today.deltaPctVsYesterday"),
        ),
        this_week=WeekEarningsV1(
            amount=coerce_number(summary, "thisWeek.amount"),
            delta_pct_vs_last_week=coerce_number(summary, "thisWeek.deltaPctVsLastWeek"),
        ),
        this_month=MonthEarningsV1(
            amount=coerce_number(summary, "thisMonth.amount"),
            delta_pct_vs_last_month=coerce_number(summary, "thisMonth.deltaPctVsLastMonth"),
        ),
        gmv_t12m=YearEarningsV1(
            amount=coerce_number(summary, "gmvT12M.amount"),
            delta_pct_yo_y=coerce_number(summary, "gmvT12M.deltaPctYoY"),
        ),
        ranges=summary.get("ranges"),
        series=[_series_point(p) for p in points] if isinstance(points, list) else [],
        series_range=_series_range(series),
    )
