from app.exceptions import (
    UpstreamAuthError,
    UpstreamError,
    UpstreamNetworkError,
    UpstreamRateLimitError,
    UpstreamResponseError,
)


class AnalysisError(UpstreamError):
    """Raised when document analysis fails."""


class AnalysisAuthError(AnalysisError, UpstreamAuthError):
    """Raised when the AI provider rejects the API key."""


class AnalysisRateLimitError(AnalysisError, UpstreamRateLimitError):
    """Raised when the AI provider throttles requests."""


class AnalysisNetworkError(AnalysisError, UpstreamNetworkError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class AnalysisResponseError(AnalysisError, UpstreamResponseError):
    """Raised when the AI provider returns no usable content."""


class AnalysisValidationError(AnalysisError):
    """Raised when the analysis payload fails structural validation."""
