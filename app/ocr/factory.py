from typing import ClassVar

from app.config.settings import Settings
from app.ocr.base import BaseTextExtractor
from app.ocr.ocr_space_adapter import OcrSpaceExtractor
from app.ocr.pdf_layer_adapter import PdfTextLayerExtractor
from app.ocr.synthetic_adapter import SyntheticExtractor
from app.pdf.factory import PdfReaderFactory


class TextExtractorFactory:
    """Creates the configured text extraction adapter."""

    PROVIDERS: ClassVar[tuple[str, ...]] = ("ocr_space", "pdfplumber", "pymupdf", "synthetic")

    @classmethod
    def create(cls, settings: Settings) -> BaseTextExtractor:
        provider = settings.ocr_provider.lower()
        if provider == "ocr_space":
            return OcrSpaceExtractor(
                endpoint=settings.ocr_endpoint,
                api_key=settings.ocr_api_key,
                timeout_seconds=settings.ocr_timeout_seconds,
                max_file_size_bytes=settings.ocr_max_file_size_bytes,
            )
        if provider in PdfReaderFactory.ADAPTERS:
            return PdfTextLayerExtractor(PdfReaderFactory.create(provider), engine=provider)
        if provider == "synthetic":
            return SyntheticExtractor()
        raise ValueError(
            f"Unknown OCR provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
