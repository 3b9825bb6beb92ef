from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.database.connection import Database
from app.database.models import ExecutionStatus, JobExecutionEntry


class JobExecutionRepository:
    """Database operations for the job_execution_log table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def insert(self, entry: JobExecutionEntry) -> None:
        async with self._db.connection() as conn:
            await conn.execute(
                """
                INSERT INTO job_execution_log (
                    job_name, job_id, status, executed_at, duration_ms, result, error_message
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    entry.job_name,
                    entry.job_id,
                    entry.status.value,
                    entry.executed_at,
                    entry.duration_ms,
                    Jsonb(entry.result) if entry.result is not None else None,
                    entry.error_message,
                ),
            )
            await conn.commit()

    async def find_recent(
        self, job_name: str | None = None, limit: int = 10
    ) -> list[JobExecutionEntry]:
        where = "WHERE job_name = %s" if job_name is not None else ""
        params = (job_name, limit) if job_name is not None else (limit,)
        async with self._db.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    f"""
                    SELECT job_name, job_id, status, executed_at, duration_ms,
                           result, error_message
                    FROM job_execution_log
                    {where}
                    ORDER BY executed_at DESC, id DESC
                    LIMIT %s
                    """,
                    params,
                )
                rows = await cur.fetchall()

        return [
            JobExecutionEntry(
                job_name=row["job_name"],
                job_id=row["job_id"],
                status=ExecutionStatus(row["status"]),
                executed_at=row["executed_at"],
                duration_ms=row["duration_ms"] or 0,
                result=row["result"],
                error_message=row["error_message"],
            )
            for row in rows
        ]
