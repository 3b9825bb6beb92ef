from app.exceptions import UpstreamAuthError, UpstreamError


class ConnectorError(UpstreamError):
    """Base exception for document source failures."""


class ConnectorAuthError(ConnectorError, UpstreamAuthError):
    """Raised when the source rejects credentials even after a token refresh."""
