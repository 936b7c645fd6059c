"""Per-request auth context derived from incoming cookies and headers.

One precedence order applies to every route: an explicit incoming
``Authorization`` header is passed through verbatim, otherwise the first
non-empty cookie among ``accessToken``, ``token`` and ``cm_admin_token``
becomes the bearer token.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from uuid import UUID

from dashboard_service_libs.error_handling import raise_authentication_error

from services.dashboard_bff_service.config import SERVICE_ID, Settings

TOKEN_COOKIE_PRECEDENCE: tuple[str, ...] = ("accessToken", "token", "cm_admin_token")

ADMIN_API_KEY_HEADER = "x-admin-api-key"


@dataclass(frozen=True)
class AuthContext:
    """Outbound credentials for one proxied request."""

    bearer_token: str | None = None
    authorization: str | None = None
    cookie_header: str | None = None
    admin_api_key: str | None = None
    api_key: tuple[str, str] | None = None

    @property
    def has_token(self) -> bool:
        return bool(self.authorization or self.bearer_token)

    @property
    def authorization_value(self) -> str | None:
        if self.authorization:
            return self.authorization
        if self.bearer_token:
            return f"Bearer {self.bearer_token}"
        return None

    def outbound_headers(
        self,
        forward_cookie: bool = False,
        admin_key: bool = False,
        api_key: bool = False,
    ) -> dict[str, str]:
        """Compose the auth headers sent to the backend.

        Args:
            forward_cookie: Forward the full incoming Cookie header
            admin_key: Attach x-admin-api-key when configured
            api_key: Attach the named API key when configured
        """
        headers: dict[str, str] = {}
        authorization = self.authorization_value
        if authorization:
            headers["Authorization"] = authorization
        if forward_cookie and self.cookie_header:
            headers["Cookie"] = self.cookie_header
        if admin_key and self.admin_api_key:
            headers[ADMIN_API_KEY_HEADER] = self.admin_api_key
        if api_key and self.api_key:
            name, value = self.api_key
            headers[name] = value
        return headers


def extract_auth_context(
    cookies: Mapping[str, str],
    headers: Mapping[str, str],
    settings: Settings,
    token_cookies: tuple[str, ...] = TOKEN_COOKIE_PRECEDENCE,
) -> AuthContext:
    """Derive the AuthContext for a request. Never raises.

    Callers decide whether a missing token means 401 or anonymous access.
    """
    incoming_authorization = (headers.get("authorization") or "").strip() or None

    bearer_token = None
    for name in token_cookies:
        value = (cookies.get(name) or "").strip()
        if value:
            bearer_token = value
            break

    cookie_header = "; ".join(f"{name}={value}" for name, value in cookies.items()) or None

    api_key_value = settings.get_api_key()
    api_key = (settings.API_KEY_HEADER, api_key_value) if api_key_value else None

    return AuthContext(
        bearer_token=bearer_token,
        authorization=incoming_authorization,
        cookie_header=cookie_header,
        admin_api_key=settings.get_admin_api_key(),
        api_key=api_key,
    )


def require_token(
    auth: AuthContext,
    correlation_id: UUID,
    operation: str,
    allow_admin_key: bool = False,
) -> None:
    """Reject anonymous callers with 401.

    ``allow_admin_key`` accepts a configured server-side admin key in place of a
    user token.
    """
    if auth.has_token:
        return
    if allow_admin_key and auth.admin_api_key:
        return
    raise_authentication_error(
        service=SERVICE_ID,
        operation=operation,
        message="Unauthorized",
        correlation_id=correlation_id,
    )
