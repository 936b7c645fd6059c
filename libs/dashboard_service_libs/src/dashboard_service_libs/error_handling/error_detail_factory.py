"""
Factory for creating ErrorDetail instances with automatic context capture.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from dashboard_core.error_enums import ErrorCode
from dashboard_core.models.error_models import ErrorDetail


def create_error_detail_with_context(
    error_code: ErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID | None = None,
    details: dict[str, Any] | None = None,
) -> ErrorDetail:
    """
    Create an ErrorDetail stamped with the current UTC time.

    Args:
        error_code: The error code from ErrorCode
        message: Human-readable error message
        service: Name of the service where the error occurred
        operation: Name of the operation that failed
        correlation_id: Request correlation ID (generated when absent)
        details: Additional error-specific context

    Returns:
        ErrorDetail instance
    """
    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id or uuid4(),
        timestamp=datetime.now(timezone.utc),
        service=service,
        operation=operation,
        details=details or {},
    )
