import asyncio
from collections import defaultdict
from dataclasses import replace
from datetime import timedelta

from app.database.base import BaseRecordStore
from app.database.models import (
    DepartmentCompliance,
    DocumentFilters,
    DocumentStats,
    JobExecutionEntry,
    JobStatus,
    SyncJobRecord,
    TypeDistribution,
)
from app.documents.models import (
    SYNTHETIC_PROVIDER,
    AnalysisResult,
    ComplianceStatus,
    ExtractionResult,
    ValidityStatus,
    utc_now,
)


class InMemoryRecordStore(BaseRecordStore):
    """Dict-backed record store with the same upsert semantics as PostgreSQL.

    Useful for local development, tests, and demo mode.
    """

    def __init__(self) -> None:
        self.extractions: list[ExtractionResult] = []
        self.analyses: dict[str, AnalysisResult] = {}
        self.job_records: dict[str, SyncJobRecord] = {}
        self.executions: list[JobExecutionEntry] = []
        self._lock = asyncio.Lock()

    async def init(self) -> None:
        """Nothing to prepare."""

    async def save_extraction(self, extraction: ExtractionResult) -> None:
        async with self._lock:
            self.extractions.append(extraction)

    async def save_analysis(self, analysis: AnalysisResult) -> None:
        async with self._lock:
            self.analyses[analysis.document_id] = analysis

    async def save_job_record(self, record: SyncJobRecord) -> None:
        async with self._lock:
            self.job_records[record.job_id] = replace(record)

    async def latest_job_record(self) -> SyncJobRecord | None:
        return self._latest(None)

    async def last_completed_job_record(self) -> SyncJobRecord | None:
        return self._latest(JobStatus.COMPLETED)

    def _latest(self, status: JobStatus | None) -> SyncJobRecord | None:
        records = [
            r for r in self.job_records.values() if status is None or r.status is status
        ]
        if not records:
            return None
        return max(records, key=lambda r: r.started_at)

    async def query_documents(self, filters: DocumentFilters) -> list[AnalysisResult]:
        results = list(self.analyses.values())
        if filters.document_type is not None:
            results = [a for a in results if a.document_type is filters.document_type]
        if filters.validity_status is not None:
            results = [a for a in results if a.validity_status is filters.validity_status]
        if filters.expiring_within_days is not None:
            cutoff = utc_now().date() + timedelta(days=filters.expiring_within_days)
            results = [a for a in results if a.expiry_date is not None and a.expiry_date <= cutoff]
        results.sort(key=lambda a: a.analyzed_at, reverse=True)
        return results[: filters.limit]

    async def aggregate_stats(self) -> DocumentStats:
        analyses = list(self.analyses.values())
        if not analyses:
            return DocumentStats()
        today = utc_now().date()
        soon = today + timedelta(days=30)
        return DocumentStats(
            total_documents=len(analyses),
            valid_documents=sum(a.validity_status is ValidityStatus.VALID for a in analyses),
            expired_documents=sum(a.validity_status is ValidityStatus.EXPIRED for a in analyses),
            expiring_soon=sum(
                a.expiry_date is not None and today < a.expiry_date <= soon for a in analyses
            ),
            avg_document_score=round(
                sum(a.document_score for a in analyses) / len(analyses), 2
            ),
            requires_review=sum(a.requires_manual_review for a in analyses),
            synthetic_documents=sum(a.provider == SYNTHETIC_PROVIDER for a in analyses),
        )

    async def document_type_distribution(self) -> list[TypeDistribution]:
        groups: dict[str, list[AnalysisResult]] = defaultdict(list)
        for analysis in self.analyses.values():
            groups[analysis.document_type.value].append(analysis)
        rows = [
            TypeDistribution(
                document_type=doc_type,
                count=len(items),
                valid_count=sum(a.validity_status is ValidityStatus.VALID for a in items),
                expired_count=sum(a.validity_status is ValidityStatus.EXPIRED for a in items),
            )
            for doc_type, items in groups.items()
        ]
        return sorted(rows, key=lambda r: (-r.count, r.document_type))

    async def compliance_by_department(self) -> list[DepartmentCompliance]:
        groups: dict[str, list[AnalysisResult]] = defaultdict(list)
        for analysis in self.analyses.values():
            groups[analysis.department or "Unknown"].append(analysis)
        rows = [
            DepartmentCompliance(
                department=department,
                total_documents=len(items),
                compliant_documents=sum(
                    a.compliance_status is ComplianceStatus.COMPLIANT for a in items
                ),
                avg_score=round(sum(a.document_score for a in items) / len(items), 2),
                needs_review=sum(a.requires_manual_review for a in items),
            )
            for department, items in groups.items()
        ]
        return sorted(rows, key=lambda r: (-r.total_documents, r.department))

    async def save_job_execution(self, entry: JobExecutionEntry) -> None:
        async with self._lock:
            self.executions.append(entry)

    async def job_history(
        self, job_name: str | None = None, limit: int = 10
    ) -> list[JobExecutionEntry]:
        entries = [e for e in self.executions if job_name is None or e.job_name == job_name]
        entries.sort(key=lambda e: e.executed_at, reverse=True)
        return entries[:limit]

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        """Nothing to release."""
