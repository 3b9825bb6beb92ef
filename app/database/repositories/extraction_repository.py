from dataclasses import asdict

from psycopg.types.json import Jsonb

from app.database.connection import Database
from app.documents.models import ExtractionResult


class ExtractionRepository:
    """Database operations for the ocr_metadata table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def insert(self, extraction: ExtractionResult) -> None:
        """Append one extraction. Every attempt keeps its own row."""
        async with self._db.connection() as conn:
            await conn.execute(
                """
                INSERT INTO ocr_metadata (
                    document_id, document_type, extracted_text, confidence, pages,
                    extracted_fields, tables, provider, language, degraded, processed_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    extraction.document_id,
                    extraction.document_type.value,
                    extraction.extracted_text,
                    round(extraction.confidence, 2),
                    extraction.page_count,
                    Jsonb(extraction.extracted_fields),
                    Jsonb([asdict(table) for table in extraction.tables]),
                    extraction.provider,
                    extraction.language,
                    extraction.degraded,
                    extraction.processed_at,
                ),
            )
            await conn.commit()
