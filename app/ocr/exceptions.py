from app.exceptions import (
    UpstreamAuthError,
    UpstreamError,
    UpstreamNetworkError,
    UpstreamRateLimitError,
    UpstreamResponseError,
)


class ExtractionError(UpstreamError):
    """Base exception for text extraction failures."""


class ExtractionAuthError(ExtractionError, UpstreamAuthError):
    """Raised when the OCR provider rejects the API key."""


class ExtractionRateLimitError(ExtractionError, UpstreamRateLimitError):
    """Raised when the OCR provider throttles requests."""


class ExtractionNetworkError(ExtractionError, UpstreamNetworkError):
    """Raised on transport failures or server-side errors."""


class ExtractionResponseError(ExtractionError, UpstreamResponseError):
    """Raised when the provider response cannot be interpreted."""


class InvalidDocumentFileError(ExtractionError):
    """Raised when the document content is empty, too large, or of an unsupported type."""
