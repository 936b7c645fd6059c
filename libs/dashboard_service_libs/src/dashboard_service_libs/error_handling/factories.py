"""
Factory functions that build an ErrorDetail and raise DashboardError.

Every factory takes the failing service and operation plus the request
correlation ID so the error can be traced back to the request that caused it.
"""

from __future__ import annotations

from typing import Any, NoReturn
from uuid import UUID

from dashboard_core.error_enums import ErrorCode

from .dashboard_error import DashboardError
from .error_detail_factory import create_error_detail_with_context


def _raise(
    error_code: ErrorCode,
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None,
    details: dict[str, Any],
) -> NoReturn:
    error_detail = create_error_detail_with_context(
        error_code=error_code,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details=details,
    )
    raise DashboardError(error_detail)


def raise_validation_error(
    service: str,
    operation: str,
    field: str,
    message: str,
    correlation_id: UUID | None = None,
    value: Any = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise a VALIDATION_ERROR for a bad request field (rendered as 400)."""
    details: dict[str, Any] = {"field": field}
    if value is not None:
        details["value"] = value
    details.update(additional_context)
    _raise(ErrorCode.VALIDATION_ERROR, service, operation, message, correlation_id, details)


def raise_authentication_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise an AUTHENTICATION_ERROR when no usable credential is present (401)."""
    _raise(
        ErrorCode.AUTHENTICATION_ERROR,
        service,
        operation,
        message,
        correlation_id,
        additional_context,
    )


def raise_configuration_error(
    service: str,
    operation: str,
    config_key: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise a CONFIGURATION_ERROR for missing or invalid settings (500)."""
    details = {"config_key": config_key, **additional_context}
    _raise(ErrorCode.CONFIGURATION_ERROR, service, operation, message, correlation_id, details)


def raise_upstream_error(
    service: str,
    operation: str,
    status_code: int,
    message: str,
    correlation_id: UUID | None = None,
    raw_body: Any = None,
    **additional_context: Any,
) -> NoReturn:
    """
    Raise an EXTERNAL_SERVICE_ERROR for a non-2xx backend response.

    The backend status is kept in ``details["status_code"]`` so the HTTP
    boundary can mirror it, and the parsed body in ``details["upstream_body"]``.
    """
    details: dict[str, Any] = {
        "status_code": status_code,
        "upstream_body": raw_body,
        **additional_context,
    }
    _raise(ErrorCode.EXTERNAL_SERVICE_ERROR, service, operation, message, correlation_id, details)


def raise_connection_error(
    service: str,
    operation: str,
    target: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise a CONNECTION_ERROR when the backend cannot be reached."""
    details = {"target": target, **additional_context}
    _raise(ErrorCode.CONNECTION_ERROR, service, operation, message, correlation_id, details)


def raise_timeout_error(
    service: str,
    operation: str,
    timeout_seconds: float,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    details = {"timeout_seconds": timeout_seconds, **additional_context}
    _raise(ErrorCode.TIMEOUT, service, operation, message, correlation_id, details)


def raise_invalid_response(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise an INVALID_RESPONSE when a backend success lacks required data (502)."""
    _raise(ErrorCode.INVALID_RESPONSE, service, operation, message, correlation_id, additional_context)


def raise_method_not_allowed(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    _raise(
        ErrorCode.METHOD_NOT_ALLOWED,
        service,
        operation,
        message,
        correlation_id,
        additional_context,
    )
