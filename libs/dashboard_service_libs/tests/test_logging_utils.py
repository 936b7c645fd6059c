"""Tests for logging_utils processors."""

import os
from typing import Any

from dashboard_service_libs.logging_utils import (
    REDACTED,
    add_service_context,
    create_service_logger,
    redact_sensitive,
)


class TestAddServiceContext:
    """Tests for the add_service_context processor."""

    def test_adds_service_name_and_environment(self) -> None:
        """Verify service.name and deployment.environment come from the environment."""
        os.environ["SERVICE_NAME"] = "test_service"
        os.environ["ENVIRONMENT"] = "testing"
        event_dict: dict[str, Any] = {"event": "test message"}

        result = add_service_context(None, "", event_dict)

        assert result["service.name"] == "test_service"
        assert result["deployment.environment"] == "testing"
        assert result["event"] == "test message"


class TestRedactSensitive:
    """Tests for the redact_sensitive processor."""

    def test_masks_credential_keys(self) -> None:
        event_dict: dict[str, Any] = {
            "event": "Backend call completed",
            "authorization": "Bearer abc.def",
            "cookie": "token=abc",
            "x-admin-api-key": "k-123",
            "status_code": 200,
        }

        result = redact_sensitive(None, "", event_dict)

        assert result["authorization"] == REDACTED
        assert result["cookie"] == REDACTED
        assert result["x-admin-api-key"] == REDACTED
        assert result["status_code"] == 200
        assert result["event"] == "Backend call completed"

    def test_masks_nested_header_values(self) -> None:
        event_dict: dict[str, Any] = {
            "event": "request",
            "headers": {"Authorization": "Bearer abc", "Accept": "application/json"},
        }

        result = redact_sensitive(None, "", event_dict)

        assert result["headers"]["Authorization"] == REDACTED
        assert result["headers"]["Accept"] == "application/json"

    def test_leaves_plain_fields_untouched(self) -> None:
        event_dict: dict[str, Any] = {"event": "x", "path": "/api/bookings", "method": "GET"}

        result = redact_sensitive(None, "", dict(event_dict))

        assert result == event_dict


def test_create_service_logger_binds_name() -> None:
    logger = create_service_logger("dashboard_bff.test")

    assert logger is not None
