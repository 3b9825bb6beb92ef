from collections.abc import Callable
from datetime import date

from app.analysis.base import BaseDocumentAnalyzer
from app.analysis.synthetic import synthetic_analysis
from app.documents.models import (
    SYNTHETIC_PROVIDER,
    AnalysisContext,
    AnalysisResult,
    ExtractionResult,
    utc_now,
)


class SyntheticDocumentAnalyzer(BaseDocumentAnalyzer):
    """Offline analyzer returning the per-category stand-in analysis.

    Useful for local development, tests, and running without an API key.
    """

    provider_name = SYNTHETIC_PROVIDER

    def __init__(
        self,
        *,
        expiring_soon_days: int = 30,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._expiring_soon_days = expiring_soon_days
        self._today = today or (lambda: utc_now().date())

    async def analyze(
        self, extraction: ExtractionResult, context: AnalysisContext
    ) -> AnalysisResult:
        return synthetic_analysis(
            extraction,
            context,
            today=self._today(),
            expiring_soon_days=self._expiring_soon_days,
        )
