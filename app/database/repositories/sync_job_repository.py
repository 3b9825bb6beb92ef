from typing import Any

from psycopg.rows import dict_row

from app.database.connection import Database
from app.database.models import JobStatus, SyncJobRecord

_COLUMNS = (
    "job_id, job_type, status, started_at, completed_at, documents_processed, "
    "documents_failed, documents_degraded, last_sync_timestamp, error_message"
)


class SyncJobRepository:
    """Database operations for the sync_jobs table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def upsert(self, record: SyncJobRecord) -> None:
        async with self._db.connection() as conn:
            await conn.execute(
                f"""
                INSERT INTO sync_jobs ({_COLUMNS})
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                ON CONFLICT (job_id) DO UPDATE SET
                    status = EXCLUDED.status,
                    completed_at = EXCLUDED.completed_at,
                    documents_processed = EXCLUDED.documents_processed,
                    documents_failed = EXCLUDED.documents_failed,
                    documents_degraded = EXCLUDED.documents_degraded,
                    last_sync_timestamp = EXCLUDED.last_sync_timestamp,
                    error_message = EXCLUDED.error_message
                """,
                (
                    record.job_id,
                    record.job_type,
                    record.status.value,
                    record.started_at,
                    record.completed_at,
                    record.documents_processed,
                    record.documents_failed,
                    record.documents_degraded,
                    record.last_sync_timestamp,
                    record.error_message,
                ),
            )
            await conn.commit()

    async def find_latest(self, status: JobStatus | None = None) -> SyncJobRecord | None:
        """Most recently started job, optionally restricted to one status."""
        where = "WHERE status = %s" if status is not None else ""
        params = (status.value,) if status is not None else ()
        async with self._db.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM sync_jobs
                    {where}
                    ORDER BY started_at DESC
                    LIMIT 1
                    """,
                    params,
                )
                row = await cur.fetchone()

        if row is None:
            return None
        return _to_record(row)


def _to_record(row: dict[str, Any]) -> SyncJobRecord:
    return SyncJobRecord(
        job_id=row["job_id"],
        status=JobStatus(row["status"]),
        started_at=row["started_at"],
        completed_at=row["completed_at"],
        documents_processed=row["documents_processed"],
        documents_failed=row["documents_failed"],
        documents_degraded=row["documents_degraded"],
        last_sync_timestamp=row["last_sync_timestamp"],
        error_message=row["error_message"],
        job_type=row["job_type"],
    )
