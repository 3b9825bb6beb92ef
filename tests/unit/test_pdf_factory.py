import pytest

from app.pdf.factory import PdfReaderFactory
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.pdf.pymupdf_adapter import PyMuPdfAdapter


class TestPdfReaderFactory:
    def test_creates_pdfplumber_adapter(self) -> None:
        assert isinstance(PdfReaderFactory.create("pdfplumber"), PdfPlumberAdapter)

    def test_creates_pymupdf_adapter(self) -> None:
        assert isinstance(PdfReaderFactory.create("pymupdf"), PyMuPdfAdapter)

    def test_is_case_insensitive(self) -> None:
        assert isinstance(PdfReaderFactory.create("PdfPlumber"), PdfPlumberAdapter)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfReaderFactory.create("unknown")
