from abc import ABC, abstractmethod

from app.documents.models import DocumentType, ExtractionResult
from app.logging.logger import Log
from app.ocr.exceptions import ExtractionAuthError, ExtractionError, ExtractionRateLimitError
from app.ocr.fields import extract_fields
from app.ocr.synthetic import synthetic_extraction
from app.ocr.tables import extract_tables


class BaseTextExtractor(ABC):
    """Contract for all text extraction adapters.

    ``extract`` never fails on provider unavailability: transport errors,
    unexpected responses and unusable files degrade to a synthetic result.
    Authentication and rate-limit errors are raised so the caller can decide.
    """

    provider_name: str = ""

    async def extract(
        self,
        data: bytes,
        document_id: str,
        document_type: DocumentType,
        mime_type: str | None = None,
    ) -> ExtractionResult:
        """Extract text, confidence and category-specific fields from document bytes.

        Raises:
            ExtractionAuthError: if the provider rejects credentials.
            ExtractionRateLimitError: if the provider throttles the request.
        """
        Log.info(f"Extracting text from document {document_id} with {self.provider_name}")
        try:
            result = await self._extract(data, document_id, document_type, mime_type)
        except (ExtractionAuthError, ExtractionRateLimitError):
            raise
        except ExtractionError as exc:
            Log.warning(
                f"Text extraction failed for document {document_id}, "
                f"using synthetic result: {exc}"
            )
            return synthetic_extraction(document_id, document_type)
        Log.info(
            f"Extraction completed for document {document_id} - "
            f"confidence {result.confidence:.2f}"
        )
        return result

    @abstractmethod
    async def _extract(
        self,
        data: bytes,
        document_id: str,
        document_type: DocumentType,
        mime_type: str | None,
    ) -> ExtractionResult:
        """Provider-specific extraction. Raise ExtractionError subclasses on failure."""

    def _build_result(
        self,
        *,
        text: str,
        document_id: str,
        document_type: DocumentType,
        confidence: float,
        page_count: int,
        language: str = "en",
    ) -> ExtractionResult:
        return ExtractionResult(
            document_id=document_id,
            document_type=document_type,
            extracted_text=text,
            confidence=max(0.0, min(1.0, confidence)),
            page_count=page_count,
            extracted_fields=extract_fields(text, document_type),
            tables=extract_tables(text),
            provider=self.provider_name,
            language=language,
        )

    async def aclose(self) -> None:
        """Release network resources. No-op by default."""
