from app.database.base import BaseRecordStore
from app.database.connection import Database
from app.database.models import (
    DepartmentCompliance,
    DocumentFilters,
    DocumentStats,
    JobExecutionEntry,
    JobStatus,
    SyncJobRecord,
    TypeDistribution,
)
from app.database.repositories.analysis_repository import AnalysisRepository
from app.database.repositories.extraction_repository import ExtractionRepository
from app.database.repositories.job_execution_repository import JobExecutionRepository
from app.database.repositories.sync_job_repository import SyncJobRepository
from app.database.schema import SCHEMA_STATEMENTS
from app.documents.models import AnalysisResult, ExtractionResult
from app.logging.logger import Log


class PostgresRecordStore(BaseRecordStore):
    """Record store backed by PostgreSQL through an async psycopg pool."""

    def __init__(self, db: Database) -> None:
        self._db = db
        self._extractions = ExtractionRepository(db)
        self._analyses = AnalysisRepository(db)
        self._sync_jobs = SyncJobRepository(db)
        self._executions = JobExecutionRepository(db)

    async def init(self) -> None:
        await self._db.open()
        async with self._db.connection() as conn:
            for statement in SCHEMA_STATEMENTS:
                await conn.execute(statement)
            await conn.commit()
        Log.info("Database schema ready")

    async def save_extraction(self, extraction: ExtractionResult) -> None:
        await self._extractions.insert(extraction)

    async def save_analysis(self, analysis: AnalysisResult) -> None:
        await self._analyses.upsert(analysis)

    async def save_job_record(self, record: SyncJobRecord) -> None:
        await self._sync_jobs.upsert(record)

    async def latest_job_record(self) -> SyncJobRecord | None:
        return await self._sync_jobs.find_latest()

    async def last_completed_job_record(self) -> SyncJobRecord | None:
        return await self._sync_jobs.find_latest(JobStatus.COMPLETED)

    async def query_documents(self, filters: DocumentFilters) -> list[AnalysisResult]:
        return await self._analyses.find(filters)

    async def aggregate_stats(self) -> DocumentStats:
        return await self._analyses.stats()

    async def document_type_distribution(self) -> list[TypeDistribution]:
        return await self._analyses.type_distribution()

    async def compliance_by_department(self) -> list[DepartmentCompliance]:
        return await self._analyses.department_compliance()

    async def save_job_execution(self, entry: JobExecutionEntry) -> None:
        await self._executions.insert(entry)

    async def job_history(
        self, job_name: str | None = None, limit: int = 10
    ) -> list[JobExecutionEntry]:
        return await self._executions.find_recent(job_name, limit)

    async def ping(self) -> bool:
        async with self._db.connection() as conn:
            await conn.execute("SELECT 1")
        return True

    async def close(self) -> None:
        await self._db.close()
