import asyncio
import time
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from app.documents.models import (
    AnalysisResult,
    ComplianceStatus,
    DocumentReference,
    DocumentType,
    RiskLevel,
    ValidityStatus,
)
from app.processor.batch_runner import BatchRunner
from app.processor.models import BatchResult
from app.processor.pipeline import processing_failed_result


def _make_doc(i: int) -> DocumentReference:
    return DocumentReference(
        id=f"DOC-{i}",
        source_type=DocumentType.PASSPORT,
        size_bytes=10,
        mime_type="application/pdf",
    )


def _make_result(doc: DocumentReference, degraded: bool = False) -> AnalysisResult:
    return AnalysisResult(
        document_id=doc.id,
        document_type=doc.source_type,
        analyzed_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        is_valid=True,
        validity_status=ValidityStatus.VALID,
        compliance_status=ComplianceStatus.COMPLIANT,
        risk_level=RiskLevel.LOW,
        degraded=degraded,
    )


class ConcurrencyProbe:
    def __init__(self, delay: float) -> None:
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0

    async def process(self, doc: DocumentReference) -> AnalysisResult:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(self.delay)
        self.in_flight -= 1
        return _make_result(doc)


class TestBatchRunner:
    @pytest.mark.asyncio
    async def test_at_most_three_in_flight(self) -> None:
        probe = ConcurrencyProbe(delay=0.01)
        runner = BatchRunner(probe, concurrency=3)  # type: ignore[arg-type]
        result = await runner.run_batch([_make_doc(i) for i in range(10)])
        assert probe.max_in_flight == 3
        assert result == BatchResult(processed=10)

    @pytest.mark.asyncio
    async def test_windows_run_one_after_another(self) -> None:
        delay = 0.02
        runner = BatchRunner(ConcurrencyProbe(delay), concurrency=3)  # type: ignore[arg-type]
        started = time.monotonic()
        await runner.run_batch([_make_doc(i) for i in range(10)])
        assert time.monotonic() - started >= 4 * delay

    @pytest.mark.asyncio
    async def test_counts_failures_and_degraded(self) -> None:
        docs = [_make_doc(i) for i in range(4)]

        async def process(doc: DocumentReference) -> AnalysisResult:
            if doc.id == "DOC-0":
                raise RuntimeError("unexpected")
            if doc.id == "DOC-1":
                return processing_failed_result(doc, "gave up")
            return _make_result(doc, degraded=doc.id == "DOC-2")

        pipeline = MagicMock()
        pipeline.process = process
        result = await BatchRunner(pipeline, concurrency=2).run_batch(docs)
        assert result == BatchResult(processed=2, failed=2, degraded=1)

    @pytest.mark.asyncio
    async def test_reports_running_totals_per_window(self) -> None:
        seen: list[BatchResult] = []

        async def on_window(totals: BatchResult) -> None:
            seen.append(totals)

        runner = BatchRunner(ConcurrencyProbe(0), concurrency=2)  # type: ignore[arg-type]
        await runner.run_batch([_make_doc(i) for i in range(5)], on_window=on_window)
        assert [t.processed for t in seen] == [2, 4, 5]

    @pytest.mark.asyncio
    async def test_empty_batch(self) -> None:
        runner = BatchRunner(ConcurrencyProbe(0))  # type: ignore[arg-type]
        assert await runner.run_batch([]) == BatchResult()

    def test_rejects_zero_concurrency(self) -> None:
        with pytest.raises(ValueError, match="concurrency"):
            BatchRunner(MagicMock(), concurrency=0)
