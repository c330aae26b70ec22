"""Master Tour API client and request signing."""

from mastertour_mcp.clients.mastertour import (
    ApiError,
    AuthenticationError,
    MasterTourClient,
    MasterTourClientError,
    NotFoundError,
    PermissionDeniedError,
    TransportError,
    classify_error,
)
from mastertour_mcp.clients.oauth import OAuthSigner

__all__ = [
    "ApiError",
    "AuthenticationError",
    "MasterTourClient",
    "MasterTourClientError",
    "NotFoundError",
    "OAuthSigner",
    "PermissionDeniedError",
    "TransportError",
    "classify_error",
]
