"""
FastAPI integration for the structured error framework.

Renders every error as the JSON error envelope ``{ok: false, message, error}``
with the HTTP status derived from the error code (or mirrored from the
backend for upstream failures).
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from dashboard_core.error_enums import ErrorCode
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..logging_utils import create_service_logger
from .dashboard_error import DashboardError

logger = create_service_logger("error_handling.fastapi")

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.AUTHENTICATION_ERROR: 401,
    ErrorCode.AUTHORIZATION_ERROR: 403,
    ErrorCode.RESOURCE_NOT_FOUND: 404,
    ErrorCode.METHOD_NOT_ALLOWED: 405,
    ErrorCode.CONFIGURATION_ERROR: 500,
    ErrorCode.CONNECTION_ERROR: 500,
    ErrorCode.TIMEOUT: 500,
    ErrorCode.UNKNOWN_ERROR: 500,
    ErrorCode.INVALID_RESPONSE: 502,
}

# Reachability failures never expose transport details to clients
GENERIC_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.CONNECTION_ERROR: "Upstream service unreachable",
    ErrorCode.TIMEOUT: "Upstream service unreachable",
}


def status_for_error(error: DashboardError) -> int:
    """Map a DashboardError onto the HTTP status returned to the client."""
    code = error.error_detail.error_code
    if code == ErrorCode.EXTERNAL_SERVICE_ERROR:
        upstream_status = error.status_code
        if upstream_status is not None and 400 <= upstream_status <= 599:
            return upstream_status
        return 500
    return ERROR_CODE_TO_STATUS.get(code, 500)


def error_envelope(message: str, error: dict[str, Any]) -> dict[str, Any]:
    return {"ok": False, "message": message, "error": error}


def register_error_handlers(app: FastAPI) -> None:
    """Register DashboardError, validation and fallback handlers on the app."""

    @app.exception_handler(DashboardError)
    async def handle_dashboard_error(request: Request, exc: DashboardError) -> JSONResponse:
        status_code = status_for_error(exc)
        message = GENERIC_MESSAGES.get(exc.error_detail.error_code, exc.message)
        logger.warning(
            "Request failed",
            path=request.url.path,
            method=request.method,
            error_code=exc.error_code,
            status_code=status_code,
            operation=exc.operation,
            correlation_id=exc.correlation_id,
        )
        error = exc.to_dict()
        error["message"] = message
        return JSONResponse(status_code=status_code, content=error_envelope(message, error))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        correlation_id = getattr(request.state, "correlation_id", None) or uuid4()
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        if first.get("type") == "json_invalid":
            message = "Invalid JSON"
        else:
            message = f"Invalid request: {first.get('msg', 'validation failed')}"
        error = {
            "code": ErrorCode.VALIDATION_ERROR.value,
            "message": message,
            "correlation_id": str(correlation_id),
            "details": {"field": field or "body"},
        }
        return JSONResponse(status_code=400, content=error_envelope(message, error))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        correlation_id = getattr(request.state, "correlation_id", None) or uuid4()
        logger.error(
            "Unhandled error",
            path=request.url.path,
            method=request.method,
            correlation_id=str(correlation_id),
            exc_info=True,
        )
        message = "Internal server error"
        error = {
            "code": ErrorCode.UNKNOWN_ERROR.value,
            "message": message,
            "correlation_id": str(correlation_id),
        }
        return JSONResponse(status_code=500, content=error_envelope(message, error))
