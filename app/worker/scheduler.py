"""Fixed-interval scheduler for the sync job on the running asyncio loop."""

import asyncio
import time
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta

from app.database.base import BaseRecordStore
from app.database.models import ExecutionStatus, JobExecutionEntry
from app.documents.models import utc_now
from app.logging.logger import Log
from app.processor.models import SyncRunResult
from app.processor.sync_job import SyncJob, make_job_id

DEFAULT_JOB_NAME = "document_sync"


@dataclass(frozen=True)
class TriggerResult:
    job_name: str
    triggered: bool
    started: bool
    result: SyncRunResult | None = None
    error: str | None = None


class Scheduler:
    """Runs the sync job immediately on start and then every interval.

    Each tick spawns the run as its own task, so a slow run never delays the
    ticker; ticks that land during a run are skipped by the sync job itself.
    """

    def __init__(
        self,
        sync_job: SyncJob,
        store: BaseRecordStore,
        *,
        interval_seconds: float = 4 * 60 * 60,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._sync_job = sync_job
        self._store = store
        self._default_interval = interval_seconds
        self._clock = clock
        self._tickers: dict[str, asyncio.Task[None]] = {}
        self._intervals: dict[str, float] = {}
        self._next_runs: dict[str, datetime] = {}
        self._runs: set[asyncio.Task[None]] = set()

    def start(
        self, job_name: str = DEFAULT_JOB_NAME, interval_seconds: float | None = None
    ) -> dict[str, object]:
        """Schedule the job. Must be called from a running event loop."""
        if job_name in self._tickers:
            Log.info(f"Job {job_name} is already scheduled")
            return self._describe(job_name)
        interval = interval_seconds or self._default_interval
        Log.info(f"Starting scheduled job: {job_name} (every {interval / 60:g} minutes)")
        self._intervals[job_name] = interval
        self._tickers[job_name] = asyncio.create_task(
            self._tick(job_name, interval), name=f"scheduler-{job_name}"
        )
        return self._describe(job_name)

    def stop(self, job_name: str) -> bool:
        """Cancel the ticker of a job. An in-flight run is left to finish."""
        ticker = self._tickers.pop(job_name, None)
        if ticker is None:
            Log.info(f"Job {job_name} not found or not running")
            return False
        ticker.cancel()
        self._intervals.pop(job_name, None)
        self._next_runs.pop(job_name, None)
        Log.info(f"Stopped scheduled job: {job_name}")
        return True

    def stop_all(self) -> list[str]:
        stopped = [name for name in list(self._tickers) if self.stop(name)]
        Log.info(f"Stopped {len(stopped)} scheduled jobs: {stopped}")
        return stopped

    async def wait_idle(self) -> None:
        """Wait for in-flight runs spawned by the tickers to finish."""
        if self._runs:
            await asyncio.gather(*self._runs, return_exceptions=True)

    async def trigger_now(self, job_name: str = DEFAULT_JOB_NAME) -> TriggerResult:
        Log.info(f"Manually triggering job: {job_name}")
        try:
            result = await self.run_job(job_name)
        except Exception as exc:
            return TriggerResult(job_name=job_name, triggered=False, started=True, error=str(exc))
        if result is None:
            return TriggerResult(
                job_name=job_name,
                triggered=False,
                started=False,
                error="Sync already in progress",
            )
        return TriggerResult(job_name=job_name, triggered=True, started=True, result=result)

    async def run_job(self, job_name: str) -> SyncRunResult | None:
        """Run the sync once and record the execution in the job log."""
        job_id = make_job_id(job_name, self._clock())
        Log.info(f"Executing job: {job_name} (ID: {job_id})")
        started = time.monotonic()
        try:
            result = await self._sync_job.run(job_id)
        except Exception as exc:
            Log.error(f"Job {job_name} failed: {exc}")
            await self._log_execution(
                job_name, job_id, ExecutionStatus.FAILED, None, started, str(exc)
            )
            raise

        if result is None:
            await self._log_execution(job_name, job_id, ExecutionStatus.SKIPPED, None, started)
            return None
        Log.info(
            f"Job {job_name} completed successfully in {result.duration_ms}ms. "
            f"Processed: {result.processed}, Failed: {result.failed}"
        )
        await self._log_execution(job_name, job_id, ExecutionStatus.SUCCESS, result, started)
        return result

    def status(self, job_name: str | None = None) -> dict[str, object]:
        status: dict[str, object] = {
            "timestamp": self._clock().isoformat(),
            "scheduled_jobs": sorted(self._tickers),
            "sync_in_progress": self._sync_job.is_running,
        }
        if job_name is not None:
            status.update(self._describe(job_name))
        return status

    async def history(
        self, job_name: str | None = None, limit: int = 10
    ) -> list[JobExecutionEntry]:
        try:
            return await self._store.job_history(job_name, limit)
        except Exception as exc:
            Log.error(f"Error retrieving job history: {exc}")
            return []

    def _describe(self, job_name: str) -> dict[str, object]:
        scheduled = job_name in self._tickers
        next_run = self._next_runs.get(job_name)
        return {
            "job_name": job_name,
            "is_scheduled": scheduled,
            "interval_seconds": self._intervals.get(job_name),
            "next_run": next_run.isoformat() if scheduled and next_run else None,
        }

    async def _tick(self, job_name: str, interval: float) -> None:
        while True:
            task = asyncio.create_task(self._run_in_background(job_name))
            self._runs.add(task)
            task.add_done_callback(self._runs.discard)
            self._next_runs[job_name] = self._clock() + timedelta(seconds=interval)
            await asyncio.sleep(interval)

    async def _run_in_background(self, job_name: str) -> None:
        try:
            await self.run_job(job_name)
        except Exception:
            Log.exception(f"Scheduled run of {job_name} failed")

    async def _log_execution(
        self,
        job_name: str,
        job_id: str,
        status: ExecutionStatus,
        result: SyncRunResult | None,
        started: float,
        error_message: str | None = None,
    ) -> None:
        entry = JobExecutionEntry(
            job_name=job_name,
            job_id=job_id,
            status=status,
            executed_at=self._clock(),
            duration_ms=int((time.monotonic() - started) * 1000),
            result=asdict(result) if result is not None else None,
            error_message=error_message,
        )
        try:
            await self._store.save_job_execution(entry)
        except Exception as exc:
            Log.error(f"Error logging job execution: {exc}")
