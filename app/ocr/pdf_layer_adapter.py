import asyncio

from app.documents.models import DocumentType, ExtractionResult
from app.ocr.base import BaseTextExtractor
from app.ocr.exceptions import ExtractionResponseError, InvalidDocumentFileError
from app.pdf.base import BasePdfReader
from app.pdf.exceptions import PdfReadError


class PdfTextLayerExtractor(BaseTextExtractor):
    """Local extraction from the embedded PDF text layer, no OCR service involved.

    Plain-text content is decoded as is. Scanned PDFs without a text layer
    degrade to the synthetic result like any other extraction failure.
    """

    def __init__(self, reader: BasePdfReader, engine: str) -> None:
        self._reader = reader
        self.provider_name = engine

    async def _extract(
        self,
        data: bytes,
        document_id: str,
        document_type: DocumentType,
        mime_type: str | None,
    ) -> ExtractionResult:
        if not data:
            raise InvalidDocumentFileError("Document is empty")

        if data.startswith(b"%PDF"):
            try:
                pages = await asyncio.to_thread(self._reader.read_pages, data)
            except PdfReadError as exc:
                raise ExtractionResponseError(str(exc)) from exc
        else:
            try:
                pages = [data.decode("utf-8")]
            except UnicodeDecodeError as exc:
                raise InvalidDocumentFileError(
                    f"Unsupported content for text-layer extraction ({mime_type or 'unknown type'})"
                ) from exc

        text = "\n".join(page for page in pages if page).strip()
        if not text:
            raise ExtractionResponseError(f"Document {document_id} has no text layer")

        return self._build_result(
            text=text,
            document_id=document_id,
            document_type=document_type,
            confidence=0.9 if len(text) > 100 else 0.8,
            page_count=max(len(pages), 1),
        )
