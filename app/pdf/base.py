from abc import ABC, abstractmethod


class BasePdfReader(ABC):
    """Contract for PDF text-layer readers."""

    @abstractmethod
    def read_pages(self, pdf_bytes: bytes) -> list[str]:
        """Return the embedded text of each page.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            One string per page, empty for pages without a text layer.

        Raises:
            PdfReadError: if the PDF cannot be opened or parsed.
        """
