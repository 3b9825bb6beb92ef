"""Single-document pipeline: download -> extract -> analyze -> persist."""

import asyncio
from collections.abc import Awaitable, Callable

from app.analysis.base import BaseDocumentAnalyzer
from app.connector.base import BaseSourceConnector
from app.database.base import BaseRecordStore
from app.documents.models import (
    AnalysisContext,
    AnalysisResult,
    ComplianceStatus,
    DocumentReference,
    DocumentType,
    RiskLevel,
    ValidityStatus,
    utc_now,
)
from app.exceptions import UpstreamAuthError
from app.logging.logger import Log
from app.ocr.base import BaseTextExtractor

SleepFn = Callable[[float], Awaitable[None]]


class DocumentPipeline:
    """Processes one document with bounded retries and exponential backoff.

    ``process`` never raises: once retries are exhausted a "Processing Failed"
    record is stored and returned instead.
    """

    def __init__(
        self,
        *,
        connector: BaseSourceConnector,
        extractor: BaseTextExtractor,
        analyzer: BaseDocumentAnalyzer,
        store: BaseRecordStore,
        max_retries: int = 3,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self._connector = connector
        self._extractor = extractor
        self._analyzer = analyzer
        self._store = store
        self._max_retries = max_retries
        self._sleep = sleep

    async def process(self, doc: DocumentReference) -> AnalysisResult:
        last_error: Exception | None = None
        for attempt in range(1, self._max_retries + 1):
            Log.info("Processing document", document_id=doc.id, attempt=attempt)
            try:
                result = await self._attempt(doc)
            except UpstreamAuthError as exc:
                Log.error(f"Authentication failed, not retrying: {exc}", document_id=doc.id)
                last_error = exc
                break
            except Exception as exc:
                Log.error(f"Error processing document: {exc}", document_id=doc.id, attempt=attempt)
                last_error = exc
                if attempt < self._max_retries:
                    await self._sleep(2**attempt)
                continue
            Log.info("Successfully processed document", document_id=doc.id)
            return result

        return await self._store_failure(doc, last_error)

    async def _attempt(self, doc: DocumentReference) -> AnalysisResult:
        data = await self._connector.download(doc.id)
        metadata = await self._connector.get_metadata(doc.id)

        document_type = doc.source_type
        if document_type is DocumentType.UNKNOWN:
            document_type = metadata.document_type

        extraction = await self._extractor.extract(
            data, doc.id, document_type, mime_type=doc.mime_type or metadata.mime_type
        )
        await self._store.save_extraction(extraction)

        analysis = await self._analyzer.analyze(
            extraction,
            AnalysisContext(employee_id=doc.employee_id, department=doc.department),
        )
        await self._store.save_analysis(analysis)
        return analysis

    async def _store_failure(
        self, doc: DocumentReference, error: Exception | None
    ) -> AnalysisResult:
        message = str(error) if error is not None else "unknown error"
        failure = processing_failed_result(doc, message)
        try:
            await self._store.save_analysis(failure)
        except Exception as exc:
            Log.error(f"Error storing failed processing record: {exc}", document_id=doc.id)
        return failure


def processing_failed_result(doc: DocumentReference, message: str) -> AnalysisResult:
    return AnalysisResult(
        document_id=doc.id,
        document_type=doc.source_type,
        analyzed_at=utc_now(),
        is_valid=None,
        validity_status=ValidityStatus.PROCESSING_FAILED,
        compliance_status=ComplianceStatus.UNKNOWN,
        risk_level=RiskLevel.HIGH,
        data_consistency="Unknown",
        missing_information=["Processing failed"],
        data_quality_issues=[message],
        document_score=0,
        requires_manual_review=True,
        raw_analysis=f"Processing failed: {message}",
        ocr_confidence=0.0,
        verification_required=True,
        employee_id=doc.employee_id,
        department=doc.department,
    )
