from app.documents.models import SYNTHETIC_PROVIDER, DocumentType, ExtractionResult
from app.ocr.base import BaseTextExtractor
from app.ocr.synthetic import synthetic_extraction


class SyntheticExtractor(BaseTextExtractor):
    """Offline extractor that always returns the canned sample for the category."""

    provider_name = SYNTHETIC_PROVIDER

    async def _extract(
        self,
        data: bytes,
        document_id: str,
        document_type: DocumentType,
        mime_type: str | None,
    ) -> ExtractionResult:
        _ = data, mime_type
        return synthetic_extraction(document_id, document_type)
