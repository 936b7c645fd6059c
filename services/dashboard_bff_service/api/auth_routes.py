"""Auth routes: OTP and password login, profile completion and signout.

These mirror the backend status and JSON body instead of using the error
envelope, and manage the httpOnly session cookie.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dashboard_service_libs.error_handling import DashboardError
from dashboard_service_libs.logging_utils import create_service_logger
from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from services.dashboard_bff_service.api._helpers import read_json_body
from services.dashboard_bff_service.auth_context import AuthContext
from services.dashboard_bff_service.config import Settings
from services.dashboard_bff_service.protocols import UpstreamClientProtocol

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = create_service_logger("dashboard_bff.auth_routes")

# Routes whose successful response may carry a session token
TOKEN_ISSUING_PATHS = frozenset({"otp/verify", "login"})


def _not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "Not found"})


def _mirrored_error(error: DashboardError) -> JSONResponse:
    body = error.raw_body
    if not isinstance(body, (dict, list)):
        body = {"ok": False, "message": error.message}
    return JSONResponse(status_code=error.status_code or 500, content=body)


def set_session_cookie(response: JSONResponse, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.AUTH_COOKIE_MAX_AGE_SECONDS,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production(),
    )


async def _forward(
    upstream: UpstreamClientProtocol,
    auth_path: str,
    method: str,
    payload: Any,
    correlation_id: UUID,
    auth: AuthContext | None = None,
) -> tuple[Any, JSONResponse]:
    """Call the backend auth endpoint. Non-2xx statuses are mirrored as-is.

    Unreachable or unconfigured backends still raise and get the error envelope.
    """
    try:
        body = await upstream.call(
            f"/api/auth/{auth_path}",
            method=method,
            auth=auth,
            correlation_id=correlation_id,
            operation=f"auth_{auth_path.replace('/', '_').replace('-', '_')}",
            json=payload,
        )
    except DashboardError as error:
        if error.status_code is None:
            raise
        return None, _mirrored_error(error)
    return body, JSONResponse(status_code=200, content=body if body is not None else {})


@router.post("/{auth_path:path}")
@inject
async def auth_post(
    auth_path: str,
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    settings: FromDishka[Settings],
    correlation_id: FromDishka[UUID],
) -> JSONResponse:
    auth_path = auth_path.strip("/")

    if auth_path == "signout":
        response = JSONResponse(status_code=200, content={"ok": True})
        response.delete_cookie(settings.AUTH_COOKIE_NAME, path="/")
        return response

    if auth_path == "otp/start":
        body = await read_json_body(request)
        phone = body.get("phone") if isinstance(body, dict) else None
        _, response = await _forward(
            upstream, auth_path, "POST", {"phone": phone}, correlation_id
        )
        return response

    if auth_path in TOKEN_ISSUING_PATHS:
        payload = await read_json_body(request)
        result, response = await _forward(upstream, auth_path, "POST", payload, correlation_id)
        token = result.get("token") if isinstance(result, dict) else None
        if isinstance(token, str) and token:
            set_session_cookie(response, token, settings)
            logger.info("Session cookie issued", correlation_id=str(correlation_id))
        return response

    return _not_found()


@router.patch("/{auth_path:path}")
@inject
async def auth_patch(
    auth_path: str,
    request: Request,
    upstream: FromDishka[UpstreamClientProtocol],
    settings: FromDishka[Settings],
    correlation_id: FromDishka[UUID],
) -> JSONResponse:
    if auth_path.strip("/") != "complete-profile":
        return _not_found()

    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        return JSONResponse(status_code=401, content={"ok": False, "error": "Unauthorized"})

    payload = await read_json_body(request)
    _, response = await _forward(
        upstream,
        "complete-profile",
        "PATCH",
        payload,
        correlation_id,
        auth=AuthContext(bearer_token=token),
    )
    return response
