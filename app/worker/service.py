"""Service facade: lifecycle, manual trigger, status, stats and health."""

from dataclasses import asdict
from typing import Any

from app.analysis.base import BaseDocumentAnalyzer
from app.analysis.factory import DocumentAnalyzerFactory
from app.config.settings import Settings
from app.connector.base import BaseSourceConnector
from app.connector.factory import SourceConnectorFactory
from app.database.base import BaseRecordStore
from app.database.factory import RecordStoreFactory
from app.database.models import DocumentStats
from app.documents.models import SYNTHETIC_PROVIDER, utc_now
from app.logging.logger import Log
from app.ocr.base import BaseTextExtractor
from app.ocr.factory import TextExtractorFactory
from app.processor.batch_runner import BatchRunner
from app.processor.pipeline import DocumentPipeline
from app.processor.sync_job import SyncJob
from app.worker.scheduler import Scheduler


class DocumentAnalyticsService:
    """Owns the collaborators of one worker process and exposes its operations."""

    def __init__(
        self,
        *,
        settings: Settings,
        store: BaseRecordStore,
        connector: BaseSourceConnector,
        extractor: BaseTextExtractor,
        analyzer: BaseDocumentAnalyzer,
        sync_job: SyncJob,
        scheduler: Scheduler,
    ) -> None:
        self._settings = settings
        self._store = store
        self._connector = connector
        self._extractor = extractor
        self._analyzer = analyzer
        self._sync_job = sync_job
        self._scheduler = scheduler
        self._running = False
        self._started_at: str | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> dict[str, Any]:
        Log.info(f"Starting Document Analytics Service in {self._settings.app_env} mode")
        await self._store.init()
        if self._settings.schedule_enabled:
            self._scheduler.start(
                self._settings.sync_job_name, self._settings.schedule_interval_seconds
            )
            Log.info("Scheduled document processing job started")
        self._running = True
        self._started_at = utc_now().isoformat()
        return {
            "status": "started",
            "environment": self._settings.app_env,
            "scheduled_jobs": self._settings.schedule_enabled,
            "timestamp": self._started_at,
        }

    async def stop(self) -> dict[str, Any]:
        """Stop scheduling, let an in-flight run finish, then release resources."""
        Log.info("Stopping Document Analytics Service")
        self._scheduler.stop_all()
        await self._scheduler.wait_idle()
        await self._connector.aclose()
        await self._extractor.aclose()
        await self._analyzer.aclose()
        await self._store.close()
        self._running = False
        Log.info("Document Analytics Service stopped")
        return {"status": "stopped", "timestamp": utc_now().isoformat()}

    async def trigger_sync(self) -> dict[str, Any]:
        outcome = await self._scheduler.trigger_now(self._settings.sync_job_name)
        if not outcome.started:
            return {"job_id": None, "status": "skipped", "error": outcome.error}
        if not outcome.triggered or outcome.result is None:
            return {"job_id": None, "status": "failed", "error": outcome.error}
        return {
            "job_id": outcome.result.job_id,
            "status": "completed",
            "result": asdict(outcome.result),
        }

    async def get_status(self) -> dict[str, Any]:
        try:
            last = await self._store.latest_job_record()
            last_job: dict[str, Any] | None = asdict(last) if last is not None else None
        except Exception as exc:
            Log.error(f"Error retrieving last sync status: {exc}")
            last_job = {"error": str(exc)}
        return {
            "running": self._running,
            "started_at": self._started_at,
            "environment": self._settings.app_env,
            "last_job": last_job,
            "active_schedule": self._scheduler.status(self._settings.sync_job_name),
        }

    async def get_stats(self) -> DocumentStats:
        return await self._store.aggregate_stats()

    async def health_check(self) -> dict[str, Any]:
        subsystems: dict[str, dict[str, Any]] = {
            "database": await self._database_health(),
            "source": await self._source_health(),
            "ocr": {
                "provider": self._extractor.provider_name,
                "degraded": self._extractor.provider_name == SYNTHETIC_PROVIDER,
            },
            "llm": {
                "provider": self._analyzer.provider_name,
                "degraded": self._analyzer.provider_name == SYNTHETIC_PROVIDER,
            },
            "scheduler": self._scheduler.status(),
        }
        if subsystems["database"]["status"] != "healthy":
            status = "unhealthy"
        elif (
            subsystems["source"].get("status") != "healthy"
            or subsystems["ocr"]["degraded"]
            or subsystems["llm"]["degraded"]
        ):
            status = "degraded"
        else:
            status = "healthy"
        return {
            "status": status,
            "service": "running" if self._running else "stopped",
            "subsystems": subsystems,
            "timestamp": utc_now().isoformat(),
        }

    async def get_processing_stats(self) -> dict[str, Any]:
        recent = await self._scheduler.history(self._settings.sync_job_name, 10)
        try:
            stats: dict[str, Any] = asdict(await self._store.aggregate_stats())
        except Exception as exc:
            Log.error(f"Error getting processing stats: {exc}")
            stats = {"error": str(exc)}
        return {
            "recent_jobs": [asdict(entry) for entry in recent],
            "document_stats": stats,
            "timestamp": utc_now().isoformat(),
        }

    async def _database_health(self) -> dict[str, Any]:
        try:
            await self._store.ping()
        except Exception as exc:
            return {"status": "unhealthy", "error": str(exc)}
        return {"status": "healthy"}

    async def _source_health(self) -> dict[str, Any]:
        try:
            return dict(await self._connector.health_check())
        except Exception as exc:
            return {"status": "unhealthy", "error": str(exc)}


def build_service(settings: Settings) -> DocumentAnalyticsService:
    """Build the service with all adapters selected by settings."""
    store = RecordStoreFactory.create(settings)
    connector = SourceConnectorFactory.create(settings)
    extractor = TextExtractorFactory.create(settings)
    analyzer = DocumentAnalyzerFactory.create(settings)
    pipeline = DocumentPipeline(
        connector=connector,
        extractor=extractor,
        analyzer=analyzer,
        store=store,
        max_retries=settings.processing_max_retries,
    )
    sync_job = SyncJob(
        connector=connector,
        runner=BatchRunner(pipeline, concurrency=settings.processing_concurrency),
        store=store,
        job_type=settings.sync_job_name,
    )
    scheduler = Scheduler(
        sync_job, store, interval_seconds=settings.schedule_interval_seconds
    )
    return DocumentAnalyticsService(
        settings=settings,
        store=store,
        connector=connector,
        extractor=extractor,
        analyzer=analyzer,
        sync_job=sync_job,
        scheduler=scheduler,
    )
