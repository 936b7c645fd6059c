"""Unit tests for the resource normalizers.

Backend responses come in several envelope shapes and with missing or
mistyped fields; every normalizer must produce the canonical DTO regardless.
"""

from __future__ import annotations

from uuid import uuid4

import pytest
from dashboard_core.error_enums import ErrorCode
from dashboard_service_libs.error_handling import DashboardError

from services.dashboard_bff_service.normalizers.bookings import (
    build_admin_pagination,
    normalize_admin_booking,
    pick_admin_booking_items,
    pick_booking_detail,
    unwrap_admin_listing,
)
from services.dashboard_bff_service.normalizers.categories import (
    build_category_payload,
    normalize_catalog_category,
    normalize_category,
    normalize_category_with_services,
    normalize_provider_categories,
    pick_created_category,
)
from services.dashboard_bff_service.normalizers.customers import normalize_customer_list
from services.dashboard_bff_service.normalizers.earnings import merge_earnings
from services.dashboard_bff_service.normalizers.notifications import (
    normalize_notification_list,
)
from services.dashboard_bff_service.normalizers.promocodes import (
    normalize_promocode,
    pick_promocode,
    pick_promocode_list,
)
from services.dashboard_bff_service.normalizers.providers import (
    normalize_provider_summary,
    pick_provider_list,
)
from services.dashboard_bff_service.normalizers.services import (
    build_service_payload,
    normalize_service_detail,
    pick_service_detail,
)

NOW = "2024-06-01T12:00:00.000Z"
OBJECT_ID = "65f1c2a9b4e3d2c1a0b9f8e7"


class TestAdminBookings:
    def test_full_booking(self) -> None:
        raw = {
            "_id": OBJECT_ID,
            "bookingCode": "BK-1",
            "customerName": "Sara",
            "serviceName": "Deep Clean",
            "status": "confirmed",
            "schedule": {"startAt": "2024-06-02T09:00:00Z"},
            "createdAt": 1717200000000,
            "price": {"total": "350"},
        }

        booking = normalize_admin_booking(raw, NOW).to_wire()

        assert booking["_id"] == OBJECT_ID
        assert booking["code"] == "BK-1"
        assert booking["status"] == "confirmed"
        assert booking["scheduledAt"] == "2024-06-02T09:00:00.000Z"
        assert booking["createdAt"] == "2024-06-01T00:00:00.000Z"
        assert booking["totalAmount"] == 350

    def test_empty_record_uses_defaults(self) -> None:
        booking = normalize_admin_booking({}, NOW).to_wire()

        assert booking["_id"] == ""
        assert booking["status"] == "pending"
        assert booking["scheduledAt"] == NOW
        assert booking["createdAt"] == NOW
        assert booking["totalAmount"] == 0

    def test_normalizing_twice_is_stable(self) -> None:
        raw = {"id": "b1", "date": "2024-06-02", "grandTotal": 12.5, "customerId": "c1"}

        once = normalize_admin_booking(raw, NOW).to_wire()
        twice = normalize_admin_booking(once, NOW).to_wire()

        assert once == twice

    def test_listing_unwraps_nested_data(self) -> None:
        raw = {"data": {"data": {"items": [{"_id": "a"}], "total": 41, "pages": 3}}}

        listing = unwrap_admin_listing(raw)
        items = pick_admin_booking_items(listing)
        pagination = build_admin_pagination(listing, "2", None, len(items))

        assert items == [{"_id": "a"}]
        assert pagination == {"page": 2, "limit": 20, "total": 41, "pages": 3}

    def test_upstream_pagination_passes_through(self) -> None:
        listing = {"items": [], "pagination": {"page": 5, "cursor": "x"}}
        assert build_admin_pagination(listing, "1", "10", 0) == {"page": 5, "cursor": "x"}

    def test_booking_detail_lookup_order(self) -> None:
        assert pick_booking_detail({"data": {"booking": {"a": 1}}}) == {"a": 1}
        assert pick_booking_detail({"booking": {"b": 2}}) == {"b": 2}
        assert pick_booking_detail({"c": 3}) == {"c": 3}


class TestCategories:
    def test_admin_category_derives_slug(self) -> None:
        category = normalize_category({"_id": "c1", "name": "Home Cleaning", "sort": "4"})

        assert category.id == "c1"
        assert category.mongo_id == "c1"
        assert category.slug == "home-cleaning"
        assert category.order == 4
        assert category.active is True
        assert category.tags == []

    def test_admin_category_is_idempotent(self) -> None:
        once = normalize_category(
            {"id": "c1", "_id": "m1", "name": "Spa", "active": False, "tags": ["x", ""]}
        ).to_wire()
        assert normalize_category(once).to_wire() == once

    def test_catalog_category(self) -> None:
        category = normalize_catalog_category({"id": 7, "name": "AC Repair", "icon": "snow"})
        assert category.to_wire() == {
            "id": "7",
            "name": "AC Repair",
            "slug": "ac-repair",
            "order": 0,
            "icon": "snow",
            "active": True,
        }

    def test_provider_categories_drop_incomplete_and_filter_active(self) -> None:
        raw = {
            "data": {
                "items": [
                    {"_id": "a", "name": "One", "active": True},
                    {"_id": "b", "name": "Two", "active": False},
                    {"_id": "", "name": "No id"},
                    {"_id": "d"},
                ]
            }
        }

        assert [c.id for c in normalize_provider_categories(raw)] == ["a", "b"]
        assert [c.id for c in normalize_provider_categories(raw, only_active=True)] == ["a"]

    def test_category_with_services_uses_first_image(self) -> None:
        row = normalize_category_with_services(
            {
                "category": {"_id": "c1", "name": "Salon"},
                "services": [
                    {"_id": "s1", "name": "Haircut", "images": ["a.png", "b.png"], "basePrice": 90},
                    {"_id": "s2", "name": "Shave", "image": "c.png"},
                ],
            }
        ).to_wire()

        assert row["category"]["slug"] == "salon"
        assert row["services"][0]["image"] == "a.png"
        assert row["services"][0]["basePrice"] == 90
        assert row["services"][1]["image"] == "c.png"

    def test_build_category_payload(self) -> None:
        payload = build_category_payload(
            {"name": "  Pest Control ", "sort": "2", "providerId": "", "active": False},
            uuid4(),
        )
        assert payload == {"name": "Pest Control", "order": 2, "active": False}

    def test_build_category_payload_keeps_explicit_null_provider(self) -> None:
        payload = build_category_payload({"name": "X", "providerId": None}, uuid4())
        assert payload["providerId"] is None
        assert payload["order"] == 0

    def test_build_category_payload_requires_name(self) -> None:
        with pytest.raises(DashboardError) as exc_info:
            build_category_payload({"name": "   "}, uuid4())

        assert exc_info.value.error_detail.error_code == ErrorCode.VALIDATION_ERROR
        assert exc_info.value.message == "Category name is required"

    def test_created_category_lookup(self) -> None:
        assert pick_created_category({"data": {"category": {"_id": "x"}}}) == {"_id": "x"}
        assert pick_created_category({"item": {"_id": "y"}}) == {"_id": "y"}
        assert pick_created_category({"_id": "z"}) == {"_id": "z"}


class TestServices:
    def test_service_detail_accepts_snake_case(self) -> None:
        service = normalize_service_detail(
            {
                "_id": "s1",
                "name": "Sofa Cleaning",
                "category_id": "c1",
                "base_price": "120",
                "status": "Active",
                "variants": [{"_id": "v1", "price_delta": 10, "is_popular": True}],
            }
        )

        assert service.id == "s1"
        assert service.mongo_id == "s1"
        assert service.category_id == "c1"
        assert service.base_price == 120
        assert service.active is True
        assert service.variants[0].name == "Variant"
        assert service.variants[0].price_delta == 10
        assert service.variants[0].is_popular is True

    def test_service_detail_defaults(self) -> None:
        service = normalize_service_detail(None)
        assert service.name == "Untitled Service"
        assert service.variants == []
        assert service.active is None

    def test_service_detail_lookup_order(self) -> None:
        assert pick_service_detail({"data": {"service": {"a": 1}}}) == {"a": 1}
        assert pick_service_detail({"service": {"b": 2}}) == {"b": 2}
        assert pick_service_detail({"data": {"c": 3}}) == {"c": 3}

    def test_build_service_payload_defaults(self) -> None:
        payload = build_service_payload({"name": "Deep Clean", "categoryId": "c1"})

        assert payload["basePrice"] == 0
        assert payload["bookingType"] == "HOURLY"
        assert payload["quantityUnit"] == "hours"
        assert payload["teamSize"] == 1
        assert payload["maxProfessionals"] == 4
        assert payload["isInstantBookable"] is True
        assert payload["requiresAddress"] is True
        assert payload["status"] == "draft"
        assert payload["variants"] == []
        assert payload["policy"] == {
            "cancellationHours": 0,
            "rescheduleHours": 0,
            "sameDayCutoffMin": 0,
        }
        assert "formTemplateId" not in payload

    def test_build_service_payload_variants(self) -> None:
        payload = build_service_payload(
            {
                "name": "Deep Clean",
                "basePrice": 500,
                "requiresSlot": False,
                "formTemplateId": "f1",
                "variants": [
                    {"name": " Studio ", "unitPrice": "150", "code": "  ", "compareAtPrice": "200"},
                    {"name": "Villa", "absolutePrice": 900, "durationMin": 240, "tags": ["big"]},
                ],
            }
        )

        studio, villa = payload["variants"]
        assert payload["basePrice"] == 0
        assert payload["requiresSlot"] is False
        assert payload["formTemplateId"] == "f1"
        assert studio == {
            "name": "Studio",
            "absolutePrice": 150,
            "durationMin": 60,
            "durationDelta": 0,
            "tags": ["default"],
            "defaultSelected": False,
            "isPopular": False,
            "compareAtPrice": 200,
        }
        assert villa["absolutePrice"] == 900
        assert villa["durationMin"] == 240
        assert villa["tags"] == ["big"]


class TestNotifications:
    def test_list_forces_string_ids_and_drops_invalid(self) -> None:
        raw = {
            "data": {
                "items": [
                    {"id": 12, "title": "New booking", "readAt": None},
                    {"_id": "undefined", "title": "broken"},
                ],
                "nextCursor": "abc",
            }
        }

        result = normalize_notification_list(raw)

        assert result["nextCursor"] == "abc"
        assert len(result["items"]) == 1
        assert result["items"][0]["_id"] == "12"
        assert result["items"][0]["title"] == "New booking"

    def test_missing_cursor_is_none(self) -> None:
        assert normalize_notification_list([]) == {"items": [], "nextCursor": None}


class TestCustomers:
    def test_customer_id_fallbacks(self) -> None:
        customers = normalize_customer_list(
            {
                "items": [
                    {"customerId": "c1", "name": "Ali", "totalBookings": "3"},
                    {"_id": "c2", "services": [{"serviceId": "s1", "count": 2}]},
                ]
            }
        )

        assert customers[0].customer_id == "c1"
        assert customers[0].customer_name == "Ali"
        assert customers[0].total_bookings == 3
        assert customers[1].customer_id == "c2"
        assert customers[1].services[0].count == 2


class TestPromocodes:
    def test_embedded_references_become_ids(self) -> None:
        promo = normalize_promocode(
            {
                "_id": "p1",
                "code": "SUMMER",
                "amount": "15",
                "serviceId": {"_id": "s1", "name": "Clean"},
                "providerId": "pr1",
                "createdBy": {"id": "u1"},
            }
        )

        assert promo.service_id == "s1"
        assert promo.provider_id == "pr1"
        assert promo.created_by == "u1"
        assert promo.amount == 15
        assert promo.discount_type == "percentage"
        assert promo.status == "active"

    def test_list_and_detail_lookup(self) -> None:
        assert pick_promocode_list({"promocodes": [1]}) == [1]
        assert pick_promocode_list({"data": {"items": [2]}}) == [2]
        assert pick_promocode({"data": {"promocode": {"a": 1}}}) == {"a": 1}
        assert pick_promocode({"promocode": {"b": 2}}) == {"b": 2}


class TestProviders:
    def test_user_may_be_embedded(self) -> None:
        embedded = normalize_provider_summary(
            {"_id": "p1", "userId": {"_id": "u1"}, "name": "Acme"}
        )
        plain = normalize_provider_summary({"id": "p2", "userId": "u2", "status": "approved"})

        assert embedded.user_id == "u1"
        assert embedded.name_of_supplier == "Acme"
        assert embedded.status == "pending"
        assert plain.mongo_id == "p2"
        assert plain.user_id == "u2"
        assert plain.status == "approved"

    def test_list_lookup(self) -> None:
        assert pick_provider_list({"providers": [1]}) == [1]
        assert pick_provider_list([2]) == [2]


class TestEarnings:
    def test_merge_summary_and_series(self) -> None:
        summary = {
            "data": {
                "currency": "USD",
                "today": {"amount": 100, "deltaPctVsYesterday": 5},
                "thisWeek": {"amount": "700"},
                "gmvT12M": {"amount": 9000, "deltaPctYoY": -2.5},
                "ranges": {"today": "x"},
            }
        }
        series = {
            "series": [{"date": "2024-06-01", "amount": 10}, {"day": "2024-06-02", "total": "20"}],
            "range": {"start": "2024-05-03", "end": "2024-06-02"},
        }

        analytics = merge_earnings(summary, series).to_wire()

        assert analytics["currency"] == "USD"
        assert analytics["today"] == {"amount": 100, "deltaPctVsYesterday": 5}
        assert analytics["thisWeek"] == {"amount": 700, "deltaPctVsLastWeek": 0}
        assert analytics["thisMonth"] == {"amount": 0, "deltaPctVsLastMonth": 0}
        assert analytics["gmvT12M"] == {"amount": 9000, "deltaPctYoY": -2.5}
        assert analytics["ranges"] == {"today": "x"}
        assert analytics["series"] == [
            {"date": "2024-06-01", "amount": 10},
            {"date": "2024-06-02", "amount": 20},
        ]
        assert analytics["seriesRange"] == {"start": "2024-05-03", "end": "2024-06-02"}

    def test_empty_inputs_use_defaults(self) -> None:
        analytics = merge_earnings(None, "not json").to_wire()

        assert analytics["currency"] == "AED"
        assert analytics["series"] == []
        assert "seriesRange" not in analytics
