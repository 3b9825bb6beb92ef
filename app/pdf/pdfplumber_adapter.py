import io

import pdfplumber

from app.pdf.base import BasePdfReader
from app.pdf.exceptions import PdfReadError


class PdfPlumberAdapter(BasePdfReader):
    """Reads the PDF text layer using pdfplumber."""

    def read_pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [(page.extract_text() or "").strip() for page in pdf.pages]
        except Exception as exc:
            raise PdfReadError(f"pdfplumber could not read PDF: {exc}") from exc
