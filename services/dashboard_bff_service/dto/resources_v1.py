"""Dashboard BFF v1 resource DTOs.

Canonical shapes returned to the dashboard frontend after normalization. The
wire form is camelCase (``model_dump(by_alias=True)``) and backend document ids
keep their ``_id`` key; Python attributes are snake_case.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = int | float


class CamelModel(BaseModel):
    """Base for DTOs serialized in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# --- Bookings ---


class AdminBookingV1(CamelModel):
    """Booking row for the admin bookings table."""

    mongo_id: str = Field(default="", alias="_id")
    code: str = ""
    customer_name: str = ""
    customer_id: str = ""
    service_name: str = ""
    status: str = "pending"
    scheduled_at: str
    created_at: str
    total_amount: Number = 0


class PaginationV1(CamelModel):
    """Pagination info synthesized when the backend omits one."""

    page: Number = 1
    limit: Number = 20
    total: Number = 0
    pages: Number = 1


# --- Categories ---


class CategoryV1(CamelModel):
    """Admin category."""

    id: str = ""
    mongo_id: str = Field(default="", alias="_id")
    name: str = ""
    slug: str = ""
    description: str | None = None
    order: Number = 0
    active: bool = True
    tags: list[str] = Field(default_factory=list)
    image: str = ""
    provider_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class CatalogCategoryV1(CamelModel):
    """Public catalog category."""

    id: str = ""
    name: str = ""
    slug: str = ""
    order: Number = 0
    icon: str = ""
    active: bool = True


class ProviderCategoryV1(CamelModel):
    """Category as listed in the provider panel."""

    id: str
    mongo_id: str = Field(alias="_id")
    name: str
    slug: str
    active: bool = True
    order: Number = 0
    provider_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class CategorySummaryV1(CamelModel):
    id: str = ""
    name: str = ""
    slug: str = ""
    order: Number = 0
    image: str = ""
    active: bool = True
    tags: list[str] = Field(default_factory=list)


class CategoryServiceV1(CamelModel):
    id: str = ""
    name: str = ""
    category_id: str = ""
    base_price: Number = 0
    image: str | None = None


class CategoryWithServicesV1(CamelModel):
    """A category with the services filed under it."""

    category: CategorySummaryV1
    services: list[CategoryServiceV1] = Field(default_factory=list)


# --- Services ---


class ServiceVariantV1(CamelModel):
    mongo_id: str = Field(default="", alias="_id")
    name: str = "Variant"
    price_delta: Number | None = None
    duration_delta: Number | None = None
    default_selected: bool = False
    is_popular: bool = False
    code: str | None = None
    image: str | None = None
    absolute_price: Number | None = None
    compare_at_price: Number | None = None
    segment: str | None = None


class ServiceDetailV1(CamelModel):
    """Service detail with its pricing variants."""

    id: str = ""
    mongo_id: str | None = Field(default=None, alias="_id")
    name: str = "Untitled Service"
    slug: str = ""
    description: str = ""
    image: str = ""
    images: list[str] | None = None
    category_id: str | None = None
    pricing_model_id: str | None = None
    form_template_id: str | None = None
    variants: list[ServiceVariantV1] = Field(default_factory=list)
    base_price: Number | None = None
    currency: str | None = None
    status: str | None = None
    active: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None


# --- Notifications ---


class NotificationV1(CamelModel):
    """Provider notification; unknown backend fields pass through."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    mongo_id: str = Field(alias="_id")


# --- Customers ---


class CustomerServiceCountV1(CamelModel):
    service_id: str | None = None
    service_name: str | None = None
    count: Number = 0


class CustomerSummaryV1(CamelModel):
    """Customer row in the provider customers list."""

    customer_id: str = ""
    customer_name: str | None = None
    customer_email: str | None = None
    phone: str | None = None
    total_bookings: Number = 0
    total_spent: Number = 0
    services: list[CustomerServiceCountV1] = Field(default_factory=list)


# --- Promocodes ---


class PromocodeV1(CamelModel):
    mongo_id: str = Field(default="", alias="_id")
    code: str = ""
    description: str | None = None
    discount_type: str = "percentage"
    amount: Number = 0
    currency: str | None = None
    max_usage: Number | None = None
    used_count: Number = 0
    starts_at: str | None = None
    ends_at: str | None = None
    status: str = "active"
    service_id: str | None = None
    provider_id: str | None = None
    created_by: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


# --- Providers ---


class ProviderSummaryV1(CamelModel):
    """Provider row for admin provider lists."""

    mongo_id: str = Field(default="", alias="_id")
    name_of_supplier: str = ""
    status: str = "pending"
    ded_license_no: str = ""
    user_id: str = ""
    created_at: str | None = None
    updated_at: str | None = None


# --- Earnings ---


class TodayEarningsV1(CamelModel):
    amount: Number = 0
    delta_pct_vs_yesterday: Number = 0


class WeekEarningsV1(CamelModel):
    amount: Number = 0
    delta_pct_vs_last_week: Number = 0


class MonthEarningsV1(CamelModel):
    amount: Number = 0
    delta_pct_vs_last_month: Number = 0


class YearEarningsV1(CamelModel):
    amount: Number = 0
    delta_pct_yo_y: Number = Field(default=0, alias="deltaPctYoY")


class EarningsSeriesPointV1(CamelModel):
    date: str = ""
    amount: Number = 0


class SeriesRangeV1(CamelModel):
    start: str
    end: str


class EarningsAnalyticsV1(CamelModel):
    """Provider earnings dashboard: KPI figures plus the chart series."""

    currency: str = "AED"
    today: TodayEarningsV1 = Field(default_factory=TodayEarningsV1)
    this_week: WeekEarningsV1 = Field(default_factory=WeekEarningsV1)
    this_month: MonthEarningsV1 = Field(default_factory=MonthEarningsV1)
    gmv_t12m: YearEarningsV1 = Field(default_factory=YearEarningsV1, alias="gmvT12M")
    ranges: Any = None
    series: list[EarningsSeriesPointV1] = Field(default_factory=list)
    series_range: SeriesRangeV1 | None = None

    def to_wire(self) -> dict[str, Any]:
        wire = super().to_wire()
        if self.series_range is None:
            wire.pop("seriesRange")
        return wire
