"""HTTP clients for the Dashboard BFF Service."""

from services.dashboard_bff_service.clients.upstream_client import UpstreamClient

__all__ = ["UpstreamClient"]
