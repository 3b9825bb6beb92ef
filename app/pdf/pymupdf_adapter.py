import pymupdf

from app.pdf.base import BasePdfReader
from app.pdf.exceptions import PdfReadError


class PyMuPdfAdapter(BasePdfReader):
    """Reads the PDF text layer using PyMuPDF."""

    def read_pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [page.get_text().strip() for page in doc]
        except Exception as exc:
            raise PdfReadError(f"pymupdf could not read PDF: {exc}") from exc
