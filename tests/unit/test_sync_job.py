import asyncio
from collections.abc import Sequence
from datetime import date, datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.analysis.synthetic_analyzer import SyntheticDocumentAnalyzer
from app.connector.base import BaseSourceConnector
from app.connector.demo_adapter import DemoSourceConnector
from app.database.memory_store import InMemoryRecordStore
from app.database.models import JobStatus, SyncJobRecord
from app.documents.models import DocumentBatch, DocumentReference, DocumentType
from app.ocr.synthetic_adapter import SyntheticExtractor
from app.processor.batch_runner import BatchRunner
from app.processor.models import RunState
from app.processor.pipeline import DocumentPipeline
from app.processor.sync_job import SyncJob, make_job_id

NOW = datetime(2025, 1, 1, 12, tzinfo=timezone.utc)


class PagedConnector(DemoSourceConnector):
    """Serves fixed pages and records the arguments of every listing call."""

    def __init__(self, pages: list[DocumentBatch]) -> None:
        self.pages = pages
        self.calls: list[tuple[datetime | None, int | None]] = []
        self.release = asyncio.Event()
        self.release.set()

    async def list_batch(
        self,
        since: datetime | None,
        type_filter: Sequence[DocumentType],
        cursor: int | None = None,
    ) -> DocumentBatch:
        self.calls.append((since, cursor))
        await self.release.wait()
        return self.pages[len(self.calls) - 1]


def _make_doc(doc_id: str) -> DocumentReference:
    return DocumentReference(
        id=doc_id,
        source_type=DocumentType.PASSPORT,
        size_bytes=10,
        mime_type="application/pdf",
    )


def _make_job(
    connector: BaseSourceConnector, store: InMemoryRecordStore
) -> SyncJob:
    pipeline = DocumentPipeline(
        connector=connector,
        extractor=SyntheticExtractor(),
        analyzer=SyntheticDocumentAnalyzer(today=lambda: date(2025, 1, 1)),
        store=store,
    )
    return SyncJob(
        connector=connector,
        runner=BatchRunner(pipeline, concurrency=3),
        store=store,
        clock=lambda: NOW,
    )


class TestMakeJobId:
    def test_uses_epoch_milliseconds(self) -> None:
        assert make_job_id("document_sync", NOW) == f"document_sync_{int(NOW.timestamp() * 1000)}"


class TestSyncJob:
    @pytest.mark.asyncio
    async def test_demo_source_run_completes(self) -> None:
        store = InMemoryRecordStore()
        result = await _make_job(DemoSourceConnector(), store).run("job_1")
        assert result is not None
        assert (result.processed, result.failed, result.degraded) == (3, 0, 3)
        record = store.job_records["job_1"]
        assert record.status is JobStatus.COMPLETED
        assert record.documents_processed == 3
        assert record.completed_at == NOW
        assert record.last_sync_timestamp == NOW
        assert set(store.analyses) == {"DOC-001", "DOC-002", "DOC-003"}

    @pytest.mark.asyncio
    async def test_passes_last_watermark(self) -> None:
        store = InMemoryRecordStore()
        watermark = NOW - timedelta(hours=4)
        await store.save_job_record(
            SyncJobRecord(
                job_id="previous",
                status=JobStatus.COMPLETED,
                started_at=watermark - timedelta(minutes=1),
                last_sync_timestamp=watermark,
            )
        )
        connector = PagedConnector([DocumentBatch()])
        await _make_job(connector, store).run("job_2")
        assert connector.calls == [(watermark, None)]

    @pytest.mark.asyncio
    async def test_follows_page_cursor(self) -> None:
        connector = PagedConnector(
            [
                DocumentBatch(documents=[_make_doc("A")], has_more=True, next_cursor=2),
                DocumentBatch(documents=[_make_doc("B")], has_more=False),
            ]
        )
        store = InMemoryRecordStore()
        result = await _make_job(connector, store).run("job_1")
        assert connector.calls == [(None, None), (None, 2)]
        assert result is not None and result.processed == 2

    @pytest.mark.asyncio
    async def test_more_without_cursor_stops(self) -> None:
        connector = PagedConnector(
            [DocumentBatch(documents=[_make_doc("A")], has_more=True, next_cursor=None)]
        )
        result = await _make_job(connector, InMemoryRecordStore()).run("job_1")
        assert len(connector.calls) == 1
        assert result is not None and result.processed == 1

    @pytest.mark.asyncio
    async def test_concurrent_run_is_skipped(self) -> None:
        connector = PagedConnector([DocumentBatch()])
        connector.release.clear()
        store = InMemoryRecordStore()
        job = _make_job(connector, store)

        first = asyncio.create_task(job.run("job_1"))
        await asyncio.sleep(0)
        assert job.is_running is True
        assert await job.run("job_2") is None
        assert list(store.job_records) == ["job_1"]

        connector.release.set()
        assert await first is not None
        assert job.state is RunState.IDLE

    @pytest.mark.asyncio
    async def test_failure_is_recorded_and_raised(self) -> None:
        connector = MagicMock(spec=BaseSourceConnector)
        connector.list_batch = AsyncMock(side_effect=RuntimeError("listing exploded"))
        store = InMemoryRecordStore()
        job = _make_job(connector, store)
        with pytest.raises(RuntimeError, match="listing exploded"):
            await job.run("job_1")
        record = store.job_records["job_1"]
        assert record.status is JobStatus.FAILED
        assert record.error_message == "listing exploded"
        assert job.is_running is False

    @pytest.mark.asyncio
    async def test_watermark_read_error_syncs_everything(self) -> None:
        store = InMemoryRecordStore()
        store.last_completed_job_record = AsyncMock(side_effect=RuntimeError("db"))  # type: ignore[method-assign]
        connector = PagedConnector([DocumentBatch()])
        await _make_job(connector, store).run("job_1")
        assert connector.calls == [(None, None)]
