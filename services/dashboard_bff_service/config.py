"""Configuration for the Dashboard BFF Service.

Uses Pydantic settings for environment-based configuration. The backend origin
and key settings accept the bare environment names shared with the dashboard
frontend deployment (API_BASE, NEXT_PUBLIC_API_BASE, ADMIN_API_KEY, ...) as
well as the service-prefixed names.
"""

from __future__ import annotations

from uuid import UUID

from dashboard_core.config_enums import Environment
from dashboard_service_libs.error_handling import raise_configuration_error
from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

SERVICE_ID = "dashboard_bff_service"


def _strip_trailing_slash(value: str | None) -> str:
    return (value or "").strip().rstrip("/")


class Settings(BaseSettings):
    """Configuration settings for the Dashboard BFF Service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DASHBOARD_BFF_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Service identity
    SERVICE_NAME: str = "dashboard-bff-service"
    SERVICE_VERSION: str = "0.1.0"

    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",
        description="Runtime environment for the service",
    )

    # HTTP server configuration
    HTTP_HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    HTTP_PORT: int = Field(default=4200, description="HTTP server port")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # CORS configuration for the dashboard frontend
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins for the dashboard frontend",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True, description="Allow credentials (cookies) in CORS requests"
    )
    CORS_ALLOW_METHODS: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS", "HEAD"],
        description="Allowed HTTP methods for CORS",
    )
    CORS_ALLOW_HEADERS: list[str] = Field(
        default=["*"], description="Allowed headers for CORS requests"
    )

    # Backend origin
    API_BASE: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DASHBOARD_BFF_API_BASE", "API_BASE"),
        description="Backend REST API origin (checked first)",
    )
    PUBLIC_API_BASE: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DASHBOARD_BFF_PUBLIC_API_BASE", "NEXT_PUBLIC_API_BASE"),
        description="Public backend origin, used when API_BASE is unset",
    )
    PROVIDER_API_BASE: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "DASHBOARD_BFF_PROVIDER_API_BASE",
            "PROVIDER_API_BASE",
            "API_BASE_PROVIDER",
            "NEXT_PUBLIC_PROVIDER_API_BASE_URL",
            "NEXT_PUBLIC_PROVIDER_API_BASE",
        ),
        description="Provider-panel backend origin override",
    )

    # Optional trust headers sent to the backend
    ADMIN_API_KEY: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("DASHBOARD_BFF_ADMIN_API_KEY", "ADMIN_API_KEY"),
        description="Server-side admin key sent as x-admin-api-key",
    )
    API_KEY: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("DASHBOARD_BFF_API_KEY", "API_KEY"),
        description="Optional API key sent under API_KEY_HEADER",
    )
    API_KEY_HEADER: str = Field(
        default="x-api-key",
        validation_alias=AliasChoices("DASHBOARD_BFF_API_KEY_HEADER", "API_KEY_HEADER"),
        description="Header name used for API_KEY",
    )

    # Session cookie issued by the auth routes
    AUTH_COOKIE_NAME: str = Field(default="token", description="Session cookie name")
    AUTH_COOKIE_MAX_AGE_SECONDS: int = Field(
        default=60 * 60 * 24 * 7, description="Session cookie lifetime (7 days)"
    )

    # HTTP client configuration
    HTTP_CLIENT_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Upstream request timeout in seconds",
    )
    HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Upstream connection timeout in seconds",
    )

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    def get_admin_api_key(self) -> str | None:
        return self.ADMIN_API_KEY.get_secret_value() if self.ADMIN_API_KEY else None

    def get_api_key(self) -> str | None:
        return self.API_KEY.get_secret_value() if self.API_KEY else None

    def resolve_base(self, provider: bool = False, correlation_id: UUID | None = None) -> str:
        """Resolve the backend origin without a trailing slash.

        API_BASE wins over NEXT_PUBLIC_API_BASE; provider routes consult the
        provider override first.

        Raises:
            DashboardError: CONFIGURATION_ERROR when no origin is configured
        """
        candidates = [self.API_BASE, self.PUBLIC_API_BASE]
        if provider:
            candidates.insert(0, self.PROVIDER_API_BASE)

        for candidate in candidates:
            base = _strip_trailing_slash(candidate)
            if base:
                return base

        raise_configuration_error(
            service=SERVICE_ID,
            operation="resolve_base",
            config_key="API_BASE",
            message="API_BASE (or NEXT_PUBLIC_API_BASE) is not set",
            correlation_id=correlation_id,
        )

    def __str__(self) -> str:
        """Secure string representation that masks sensitive data."""
        return (
            f"Settings(service={self.SERVICE_NAME}, environment={self.ENVIRONMENT.value}, "
            f"api_base={self.API_BASE or self.PUBLIC_API_BASE}, "
            f"admin_api_key={'***' if self.ADMIN_API_KEY else None}, "
            f"api_key={'***' if self.API_KEY else None})"
        )


# Global settings instance
settings = Settings()
