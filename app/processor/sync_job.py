"""Incremental sync run: page through the source since the last watermark."""

import time
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from app.connector.base import BaseSourceConnector
from app.database.base import BaseRecordStore
from app.database.models import JobStatus, SyncJobRecord
from app.documents.models import SUPPORTED_DOCUMENT_TYPES, utc_now
from app.logging.logger import Log
from app.processor.batch_runner import BatchRunner
from app.processor.models import BatchResult, RunState, SyncRunResult


def make_job_id(job_name: str, now: datetime | None = None) -> str:
    moment = now or utc_now()
    return f"{job_name}_{int(moment.timestamp() * 1000)}"


class SyncJob:
    """Owns the run state of the sync; at most one run is in flight per instance.

    The watermark of a completed run is the time the run finished, so documents
    modified while a run is in progress are only picked up if they are modified
    again later.
    """

    def __init__(
        self,
        *,
        connector: BaseSourceConnector,
        runner: BatchRunner,
        store: BaseRecordStore,
        job_type: str = "document_sync",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._connector = connector
        self._runner = runner
        self._store = store
        self._job_type = job_type
        self._clock = clock
        self._state = RunState.IDLE

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is RunState.RUNNING

    async def run(self, job_id: str | None = None) -> SyncRunResult | None:
        """Run one sync. Returns None without side effects if a run is in progress."""
        if self._state is RunState.RUNNING:
            Log.info("Sync already in progress, skipping")
            return None
        self._state = RunState.RUNNING
        try:
            return await self._run(job_id or make_job_id(self._job_type, self._clock()))
        finally:
            self._state = RunState.IDLE

    async def _run(self, job_id: str) -> SyncRunResult:
        started = time.monotonic()
        record = SyncJobRecord(
            job_id=job_id,
            status=JobStatus.RUNNING,
            started_at=self._clock(),
            job_type=self._job_type,
        )
        totals = BatchResult()
        Log.info("Starting sync job", job_id=job_id)
        try:
            await self._store.save_job_record(record)
            watermark = await self._watermark()
            Log.info(f"Syncing documents modified since {watermark or 'the beginning'}")

            cursor: int | None = None
            while True:
                batch = await self._connector.list_batch(
                    watermark, SUPPORTED_DOCUMENT_TYPES, cursor
                )
                if not batch.documents:
                    break
                Log.info(f"Processing batch of {len(batch.documents)} documents", job_id=job_id)

                base = totals

                async def save_progress(window_totals: BatchResult) -> None:
                    await self._save_progress(record, base + window_totals)

                totals = base + await self._runner.run_batch(
                    batch.documents, on_window=save_progress
                )
                if not batch.has_more:
                    break
                if batch.next_cursor is None:
                    Log.warning("Source reported more documents without a cursor, stopping")
                    break
                cursor = batch.next_cursor
        except Exception as exc:
            Log.error(f"Sync job failed: {exc}", job_id=job_id)
            await self._save_failure(record, totals, exc)
            raise

        finished = self._clock()
        await self._store.save_job_record(
            replace(
                self._with_totals(record, totals),
                status=JobStatus.COMPLETED,
                completed_at=finished,
                last_sync_timestamp=finished,
            )
        )
        duration_ms = int((time.monotonic() - started) * 1000)
        Log.info(
            f"Job {job_id} completed. Processed: {totals.processed}, "
            f"Failed: {totals.failed}, Degraded: {totals.degraded}"
        )
        return SyncRunResult(
            job_id=job_id,
            processed=totals.processed,
            failed=totals.failed,
            degraded=totals.degraded,
            duration_ms=duration_ms,
        )

    async def _watermark(self) -> datetime | None:
        try:
            last = await self._store.last_completed_job_record()
        except Exception as exc:
            Log.error(f"Error getting last sync timestamp, syncing everything: {exc}")
            return None
        return last.last_sync_timestamp if last is not None else None

    async def _save_progress(self, record: SyncJobRecord, totals: BatchResult) -> None:
        await self._store.save_job_record(self._with_totals(record, totals))

    async def _save_failure(
        self, record: SyncJobRecord, totals: BatchResult, error: Exception
    ) -> None:
        try:
            await self._store.save_job_record(
                replace(
                    self._with_totals(record, totals),
                    status=JobStatus.FAILED,
                    completed_at=self._clock(),
                    error_message=str(error),
                )
            )
        except Exception as exc:
            Log.error(f"Could not record failure of job {record.job_id}: {exc}")

    @staticmethod
    def _with_totals(record: SyncJobRecord, totals: BatchResult) -> SyncJobRecord:
        return replace(
            record,
            documents_processed=totals.processed,
            documents_failed=totals.failed,
            documents_degraded=totals.degraded,
        )
