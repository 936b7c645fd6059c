"""
Unit tests for error handling factory functions.

Validates ErrorDetail creation, DashboardError raising, parameter handling
and correlation ID propagation.
"""

from __future__ import annotations

import uuid
from uuid import UUID

import pytest
from dashboard_core.error_enums import ErrorCode
from dashboard_service_libs import error_handling
from dashboard_service_libs.error_handling import (
    DashboardError,
    create_error_detail_with_context,
    raise_authentication_error,
    raise_configuration_error,
    raise_connection_error,
    raise_invalid_response,
    raise_method_not_allowed,
    raise_timeout_error,
    raise_upstream_error,
    raise_validation_error,
)


@pytest.fixture
def test_service() -> str:
    """Provide consistent service name for testing."""
    return "test_service"


@pytest.fixture
def test_operation() -> str:
    """Provide consistent operation name for testing."""
    return "test_operation"


@pytest.fixture
def test_correlation_id() -> UUID:
    """Provide consistent correlation ID for testing."""
    return uuid.uuid4()


class TestCreateErrorDetail:
    """Tests for create_error_detail_with_context."""

    def test_generates_correlation_id_when_absent(
        self, test_service: str, test_operation: str
    ) -> None:
        detail = create_error_detail_with_context(
            error_code=ErrorCode.UNKNOWN_ERROR,
            message="boom",
            service=test_service,
            operation=test_operation,
        )

        assert isinstance(detail.correlation_id, UUID)
        assert detail.timestamp.tzinfo is not None
        assert detail.details == {}

    def test_keeps_given_correlation_id(
        self, test_service: str, test_operation: str, test_correlation_id: UUID
    ) -> None:
        detail = create_error_detail_with_context(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="bad",
            service=test_service,
            operation=test_operation,
            correlation_id=test_correlation_id,
            details={"field": "name"},
        )

        assert detail.correlation_id == test_correlation_id
        assert detail.details == {"field": "name"}


class TestFactories:
    """Each factory raises a DashboardError with the matching code and details."""

    def test_raise_validation_error(
        self, test_service: str, test_operation: str, test_correlation_id: UUID
    ) -> None:
        with pytest.raises(DashboardError) as exc_info:
            raise_validation_error(
                service=test_service,
                operation=test_operation,
                field="id",
                message="id is required",
                correlation_id=test_correlation_id,
                value="undefined",
            )

        error = exc_info.value
        assert error.error_detail.error_code == ErrorCode.VALIDATION_ERROR
        assert error.error_detail.details["field"] == "id"
        assert error.error_detail.details["value"] == "undefined"
        assert error.correlation_id == str(test_correlation_id)
        assert str(error) == "[VALIDATION_ERROR] id is required"

    def test_raise_authentication_error(self, test_service: str, test_operation: str) -> None:
        with pytest.raises(DashboardError) as exc_info:
            raise_authentication_error(
                service=test_service, operation=test_operation, message="Unauthorized"
            )

        assert exc_info.value.error_code == ErrorCode.AUTHENTICATION_ERROR.value
        assert exc_info.value.status_code is None

    def test_raise_configuration_error(self, test_service: str, test_operation: str) -> None:
        with pytest.raises(DashboardError) as exc_info:
            raise_configuration_error(
                service=test_service,
                operation=test_operation,
                config_key="API_BASE",
                message="API_BASE (or NEXT_PUBLIC_API_BASE) is not set",
            )

        assert exc_info.value.error_detail.error_code == ErrorCode.CONFIGURATION_ERROR
        assert exc_info.value.error_detail.details == {"config_key": "API_BASE"}

    def test_raise_upstream_error_keeps_status_and_body(
        self, test_service: str, test_operation: str, test_correlation_id: UUID
    ) -> None:
        with pytest.raises(DashboardError) as exc_info:
            raise_upstream_error(
                service=test_service,
                operation=test_operation,
                status_code=503,
                message="db down",
                correlation_id=test_correlation_id,
                raw_body={"message": "db down"},
            )

        error = exc_info.value
        assert error.error_detail.error_code == ErrorCode.EXTERNAL_SERVICE_ERROR
        assert error.status_code == 503
        assert error.raw_body == {"message": "db down"}
        assert error.message == "db down"

    @pytest.mark.parametrize(
        "raise_fn, kwargs, expected_code",
        [
            (raise_connection_error, {"target": "backend"}, ErrorCode.CONNECTION_ERROR),
            (raise_timeout_error, {"timeout_seconds": 30.0}, ErrorCode.TIMEOUT),
            (raise_invalid_response, {}, ErrorCode.INVALID_RESPONSE),
        ],
    )
    def test_reachability_and_response_errors(
        self,
        test_service: str,
        test_operation: str,
        raise_fn,
        kwargs: dict,
        expected_code: ErrorCode,
    ) -> None:
        with pytest.raises(DashboardError) as exc_info:
            raise_fn(service=test_service, operation=test_operation, message="failed", **kwargs)

        assert exc_info.value.error_detail.error_code == expected_code
        assert exc_info.value.status_code is None

    def test_raise_method_not_allowed(self, test_service: str, test_operation: str) -> None:
        with pytest.raises(DashboardError) as exc_info:
            raise_method_not_allowed(
                service=test_service,
                operation=test_operation,
                message="Method not allowed. Use POST.",
                allowed="POST",
            )

        assert exc_info.value.error_detail.error_code == ErrorCode.METHOD_NOT_ALLOWED
        assert exc_info.value.error_detail.details["allowed"] == "POST"

    def test_exported_factories_are_the_raised_ones(self) -> None:
        exported = {name for name in error_handling.__all__ if name.startswith("raise_")}

        assert exported == {
            "raise_authentication_error",
            "raise_configuration_error",
            "raise_connection_error",
            "raise_invalid_response",
            "raise_method_not_allowed",
            "raise_timeout_error",
            "raise_upstream_error",
            "raise_validation_error",
        }

    def test_to_dict_is_json_ready(self, test_service: str, test_operation: str) -> None:
        with pytest.raises(DashboardError) as exc_info:
            raise_validation_error(
                service=test_service, operation=test_operation, field="name", message="bad"
            )

        payload = exc_info.value.to_dict()
        assert payload["code"] == "VALIDATION_ERROR"
        assert payload["service"] == test_service
        assert payload["operation"] == test_operation
        assert isinstance(payload["timestamp"], str)
        assert isinstance(payload["correlation_id"], str)
