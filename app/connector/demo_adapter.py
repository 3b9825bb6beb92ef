"""Offline source adapter.

Serves the fixed demo set without any network calls. Useful for local
development and as the ``source_provider=demo`` mode.
"""

from collections.abc import Sequence
from datetime import datetime

from app.connector.base import BaseSourceConnector
from app.connector.demo_data import demo_batch, demo_document_content, demo_metadata
from app.documents.models import DocumentBatch, DocumentMetadata, DocumentType


class DemoSourceConnector(BaseSourceConnector):
    """Source adapter that always returns the demo documents."""

    async def authenticate(self) -> str:
        return "demo_token"

    async def list_batch(
        self,
        since: datetime | None,
        type_filter: Sequence[DocumentType],
        cursor: int | None = None,
    ) -> DocumentBatch:
        _ = since, type_filter, cursor
        return demo_batch()

    async def download(self, document_id: str) -> bytes:
        return demo_document_content(document_id)

    async def get_metadata(self, document_id: str) -> DocumentMetadata:
        return demo_metadata(document_id)

    async def health_check(self) -> dict[str, object]:
        return {
            "status": "demo_mode",
            "authenticated": True,
            "message": "Serving built-in demo documents",
        }
