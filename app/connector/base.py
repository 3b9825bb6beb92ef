from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime

from app.documents.models import DocumentBatch, DocumentMetadata, DocumentType


class BaseSourceConnector(ABC):
    """Contract for document-management source adapters.

    Implementations must tolerate an unreachable backend by serving demo data
    instead of raising, so a sync run never halts for lack of a real source.
    Only authentication failures are allowed to escape.
    """

    @abstractmethod
    async def authenticate(self) -> str:
        """Return a valid session token, refreshing it if expired."""

    @abstractmethod
    async def list_batch(
        self,
        since: datetime | None,
        type_filter: Sequence[DocumentType],
        cursor: int | None = None,
    ) -> DocumentBatch:
        """List one page of documents modified after ``since``.

        Args:
            since: Watermark; None lists everything.
            type_filter: Document categories to include.
            cursor: Page cursor returned by the previous call, None for the first page.

        Raises:
            ConnectorAuthError: if credentials are rejected after a refresh.
        """

    @abstractmethod
    async def download(self, document_id: str) -> bytes:
        """Return the raw document content."""

    @abstractmethod
    async def get_metadata(self, document_id: str) -> DocumentMetadata:
        """Return descriptive metadata for a document."""

    @abstractmethod
    async def health_check(self) -> dict[str, object]:
        """Report reachability of the source."""

    async def aclose(self) -> None:
        """Release network resources. No-op by default."""
