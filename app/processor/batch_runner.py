import asyncio
from collections.abc import Awaitable, Callable

from app.documents.models import AnalysisResult, DocumentReference, ValidityStatus
from app.logging.logger import Log
from app.processor.models import BatchResult
from app.processor.pipeline import DocumentPipeline

WindowCallback = Callable[[BatchResult], Awaitable[None]]


class BatchRunner:
    """Runs the pipeline over a batch in windows of bounded concurrency.

    A window starts only after every document of the previous window has
    settled, so at most ``concurrency`` documents are in flight.
    """

    def __init__(self, pipeline: DocumentPipeline, concurrency: int = 3) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._pipeline = pipeline
        self._concurrency = concurrency

    async def run_batch(
        self,
        documents: list[DocumentReference],
        on_window: WindowCallback | None = None,
    ) -> BatchResult:
        totals = BatchResult()
        for start in range(0, len(documents), self._concurrency):
            window = documents[start : start + self._concurrency]
            outcomes = await asyncio.gather(
                *(self._pipeline.process(doc) for doc in window),
                return_exceptions=True,
            )
            totals = totals + self._tally(window, outcomes)
            if on_window is not None:
                await on_window(totals)
        return totals

    @staticmethod
    def _tally(
        window: list[DocumentReference],
        outcomes: list[AnalysisResult | BaseException],
    ) -> BatchResult:
        processed = failed = degraded = 0
        for doc, outcome in zip(window, outcomes):
            if isinstance(outcome, BaseException):
                failed += 1
                Log.error(f"Failed to process document: {outcome}", document_id=doc.id)
            elif outcome.validity_status is ValidityStatus.PROCESSING_FAILED:
                failed += 1
            else:
                processed += 1
                if outcome.degraded:
                    degraded += 1
        return BatchResult(processed=processed, failed=failed, degraded=degraded)
