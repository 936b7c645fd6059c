"""Dashboard BFF API routes, mounted under ``/api``."""

from fastapi import APIRouter

from services.dashboard_bff_service.api import (
    admin_booking_routes,
    admin_category_routes,
    admin_provider_routes,
    admin_service_routes,
    auth_routes,
    customer_routes,
    earnings_routes,
    notification_routes,
    preflight_routes,
    promocode_routes,
    provider_routes,
)

router = APIRouter()
# First, so HEAD never reaches the implicit HEAD of a GET route
router.include_router(preflight_routes.router)
router.include_router(auth_routes.router)
router.include_router(admin_booking_routes.router)
router.include_router(admin_category_routes.router)
router.include_router(admin_provider_routes.router)
router.include_router(admin_service_routes.router)
router.include_router(customer_routes.router)
router.include_router(earnings_routes.router)
router.include_router(notification_routes.router)
router.include_router(promocode_routes.router)
router.include_router(provider_routes.router)

__all__ = ["router"]
