"""
Core exception class for dashboard services.

DashboardError wraps an immutable ErrorDetail so every failure carries the
same structured context (code, service, operation, correlation ID) from the
point it is raised to the HTTP boundary that renders it.
"""

from __future__ import annotations

from typing import Any

from dashboard_core.models.error_models import ErrorDetail


class DashboardError(Exception):
    """Structured exception carrying an ErrorDetail."""

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    def __str__(self) -> str:
        return f"[{self.error_detail.error_code.value}] {self.error_detail.message}"

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def message(self) -> str:
        return self.error_detail.message

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def status_code(self) -> int | None:
        """Upstream HTTP status when the error mirrors a backend response."""
        value = self.error_detail.details.get("status_code")
        return value if isinstance(value, int) else None

    @property
    def raw_body(self) -> Any:
        """Parsed upstream body attached to the error, if any."""
        return self.error_detail.details.get("upstream_body")

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "code": self.error_code,
            "message": self.error_detail.message,
            "correlation_id": self.correlation_id,
            "service": self.service,
            "operation": self.operation,
            "details": self.error_detail.details,
            "timestamp": self.error_detail.timestamp.isoformat(),
        }
