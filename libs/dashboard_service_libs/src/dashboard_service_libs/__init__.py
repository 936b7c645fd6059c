"""
Dashboard Service Libraries Package.

Shared utilities used across dashboard services: structured logging and the
structured error handling framework.
"""

from .logging_utils import configure_service_logging, create_service_logger

__all__ = ["configure_service_logging", "create_service_logger"]
