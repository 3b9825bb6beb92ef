"""Error taxonomy shared by every external collaborator.

Integration packages subclass these in their own ``exceptions`` modules so the
pipeline can react to the category of failure without knowing the provider.
"""


class UpstreamError(Exception):
    """Base exception for failures of an external service."""


class UpstreamAuthError(UpstreamError):
    """Credentials were rejected. Fatal to the current document attempt."""


class UpstreamRateLimitError(UpstreamError):
    """The provider throttled the request. Retryable, ideally with longer backoff."""


class UpstreamNetworkError(UpstreamError):
    """Transport or server-side failure. Retryable."""


class UpstreamResponseError(UpstreamError):
    """The provider answered with a payload that cannot be used."""
