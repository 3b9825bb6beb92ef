from abc import ABC, abstractmethod

from app.database.models import (
    DepartmentCompliance,
    DocumentFilters,
    DocumentStats,
    JobExecutionEntry,
    SyncJobRecord,
    TypeDistribution,
)
from app.documents.models import AnalysisResult, ExtractionResult


class BaseRecordStore(ABC):
    """Contract for persisting extraction, analysis and job records.

    Analyses are upserted by document id and job records by job id, so
    writing the same record twice leaves a single row.
    """

    @abstractmethod
    async def init(self) -> None:
        """Prepare the backing storage. Safe to call more than once."""

    @abstractmethod
    async def save_extraction(self, extraction: ExtractionResult) -> None: ...

    @abstractmethod
    async def save_analysis(self, analysis: AnalysisResult) -> None: ...

    @abstractmethod
    async def save_job_record(self, record: SyncJobRecord) -> None: ...

    @abstractmethod
    async def latest_job_record(self) -> SyncJobRecord | None: ...

    @abstractmethod
    async def last_completed_job_record(self) -> SyncJobRecord | None: ...

    @abstractmethod
    async def query_documents(self, filters: DocumentFilters) -> list[AnalysisResult]: ...

    @abstractmethod
    async def aggregate_stats(self) -> DocumentStats: ...

    @abstractmethod
    async def document_type_distribution(self) -> list[TypeDistribution]: ...

    @abstractmethod
    async def compliance_by_department(self) -> list[DepartmentCompliance]: ...

    @abstractmethod
    async def save_job_execution(self, entry: JobExecutionEntry) -> None: ...

    @abstractmethod
    async def job_history(
        self, job_name: str | None = None, limit: int = 10
    ) -> list[JobExecutionEntry]: ...

    @abstractmethod
    async def ping(self) -> bool:
        """Return True when the storage answers a trivial query."""

    @abstractmethod
    async def close(self) -> None: ...
