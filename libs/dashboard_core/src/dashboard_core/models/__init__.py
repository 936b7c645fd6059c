"""Pure data models shared across dashboard services."""

from .error_models import ErrorDetail

__all__ = ["ErrorDetail"]
