from abc import ABC, abstractmethod

from app.documents.models import AnalysisContext, AnalysisResult, ExtractionResult


class BaseDocumentAnalyzer(ABC):
    """Contract for document compliance analyzers."""

    provider_name: str = ""

    @abstractmethod
    async def analyze(
        self, extraction: ExtractionResult, context: AnalysisContext
    ) -> AnalysisResult:
        """Assess validity, expiry and compliance of an extracted document.

        Authentication and rate-limit failures are raised. Other provider
        failures produce a synthetic result flagged ``degraded``.
        """

    async def aclose(self) -> None:
        """Release network resources. No-op by default."""
