from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from app.documents.models import DocumentType, ValidityStatus


class JobStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class ExecutionStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class SyncJobRecord:
    """Represents a row from the sync_jobs table."""

    job_id: str
    status: JobStatus
    started_at: datetime
    completed_at: datetime | None = None
    documents_processed: int = 0
    documents_failed: int = 0
    documents_degraded: int = 0
    last_sync_timestamp: datetime | None = None
    error_message: str | None = None
    job_type: str = "document_sync"


@dataclass
class JobExecutionEntry:
    """Represents a row from the job_execution_log table."""

    job_name: str
    job_id: str
    status: ExecutionStatus
    executed_at: datetime
    duration_ms: int = 0
    result: dict[str, object] | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class DocumentFilters:
    document_type: DocumentType | None = None
    validity_status: ValidityStatus | None = None
    expiring_within_days: int | None = None
    limit: int = 100


@dataclass(frozen=True)
class DocumentStats:
    total_documents: int = 0
    valid_documents: int = 0
    expired_documents: int = 0
    expiring_soon: int = 0
    avg_document_score: float = 0.0
    requires_review: int = 0
    synthetic_documents: int = 0


@dataclass(frozen=True)
class TypeDistribution:
    document_type: str
    count: int
    valid_count: int
    expired_count: int


@dataclass(frozen=True)
class DepartmentCompliance:
    department: str
    total_documents: int
    compliant_documents: int
    avg_score: float
    needs_review: int
