class PdfReadError(Exception):
    """Raised when a PDF text layer cannot be read."""
