"""Structured error handling for dashboard services."""

from .dashboard_error import DashboardError
from .error_detail_factory import create_error_detail_with_context
from .factories import (
    raise_authentication_error,
    raise_configuration_error,
    raise_connection_error,
    raise_invalid_response,
    raise_method_not_allowed,
    raise_timeout_error,
    raise_upstream_error,
    raise_validation_error,
)

__all__ = [
    "DashboardError",
    "create_error_detail_with_context",
    "raise_authentication_error",
    "raise_configuration_error",
    "raise_connection_error",
    "raise_invalid_response",
    "raise_method_not_allowed",
    "raise_timeout_error",
    "raise_upstream_error",
    "raise_validation_error",
]
