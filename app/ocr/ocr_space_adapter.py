from typing import Any, ClassVar

import httpx

from app.documents.models import DocumentType, ExtractionResult
from app.ocr.base import BaseTextExtractor
from app.ocr.exceptions import (
    ExtractionAuthError,
    ExtractionNetworkError,
    ExtractionRateLimitError,
    ExtractionResponseError,
    InvalidDocumentFileError,
)


class OcrSpaceExtractor(BaseTextExtractor):
    """Text extraction through an OCR.space-compatible HTTP API."""

    SUPPORTED_MIME_TYPES: ClassVar[frozenset[str]] = frozenset(
        {
            "application/pdf",
            "image/jpeg",
            "image/jpg",
            "image/png",
            "image/tiff",
            "image/bmp",
        }
    )

    def __init__(
        self,
        *,
        endpoint: str,
        api_key: str,
        timeout_seconds: int = 60,
        max_file_size_bytes: int = 10 * 1024 * 1024,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._max_file_size_bytes = max_file_size_bytes
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self.provider_name = self.provider_for_endpoint(endpoint)

    @staticmethod
    def provider_for_endpoint(endpoint: str) -> str:
        if "ocr.space" in endpoint:
            return "OCR.space"
        if "googleapis.com" in endpoint:
            return "Google Vision"
        if "azure.com" in endpoint:
            return "Azure Computer Vision"
        return "Custom OCR"

    async def _extract(
        self,
        data: bytes,
        document_id: str,
        document_type: DocumentType,
        mime_type: str | None,
    ) -> ExtractionResult:
        self._validate_file(data, mime_type)
        try:
            response = await self._client.post(
                self._endpoint,
                data={
                    "apikey": self._api_key,
                    "language": "eng",
                    "isOverlayRequired": "true",
                    "detectOrientation": "true",
                    "isTable": "true",
                },
                files={"file": (document_id, data, mime_type or "application/octet-stream")},
            )
        except httpx.HTTPError as exc:
            raise ExtractionNetworkError(f"OCR API request failed: {exc}") from exc

        if response.status_code == 401:
            raise ExtractionAuthError("Invalid OCR API key")
        if response.status_code == 429:
            raise ExtractionRateLimitError("OCR API rate limit exceeded")
        if response.is_error:
            raise ExtractionNetworkError(f"OCR API error: {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise ExtractionResponseError(f"OCR API returned invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise ExtractionResponseError("OCR API response must be an object")

        parsed_results = payload.get("ParsedResults")
        if payload.get("IsErroredOnProcessing") or not parsed_results:
            message = payload.get("ErrorMessage") or "Unknown error"
            raise ExtractionResponseError(f"OCR processing failed: {message}")
        if not isinstance(parsed_results, list) or not all(
            isinstance(page, dict) for page in parsed_results
        ):
            raise ExtractionResponseError("OCR API ParsedResults must be a list of objects")

        texts = [page.get("ParsedText") or "" for page in parsed_results]
        if not all(isinstance(page_text, str) for page_text in texts):
            raise ExtractionResponseError("OCR API ParsedText must be a string")
        text = "\n".join(texts).strip()
        first_page = parsed_results[0]
        language = first_page.get("Language")
        return self._build_result(
            text=text,
            document_id=document_id,
            document_type=document_type,
            confidence=self._confidence(text, first_page),
            page_count=len(parsed_results),
            language=language if isinstance(language, str) and language else "en",
        )

    def _validate_file(self, data: bytes, mime_type: str | None) -> None:
        if not data:
            raise InvalidDocumentFileError("Document is empty")
        if len(data) > self._max_file_size_bytes:
            raise InvalidDocumentFileError(
                f"Document size {len(data)} exceeds limit {self._max_file_size_bytes}"
            )
        if mime_type and mime_type.lower() not in self.SUPPORTED_MIME_TYPES:
            raise InvalidDocumentFileError(f"Unsupported file type '{mime_type}'")

    @staticmethod
    def _confidence(text: str, page: dict[str, Any]) -> float:
        confidence = 0.8
        if len(text) > 100:
            confidence += 0.1
        overlay = page.get("TextOverlay")
        if isinstance(overlay, dict) and overlay.get("HasOverlay"):
            confidence += 0.05
        return min(confidence, 1.0)

    async def aclose(self) -> None:
        await self._client.aclose()
