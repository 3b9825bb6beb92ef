"""AI-powered document compliance analyzer."""

import json
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

from app.analysis.base import BaseDocumentAnalyzer
from app.analysis.client_base import BaseAnalysisClient
from app.analysis.exceptions import (
    AnalysisAuthError,
    AnalysisError,
    AnalysisRateLimitError,
    AnalysisValidationError,
)
from app.analysis.prompt_loader import (
    load_prompt_template,
    load_response_structure,
    load_system_prompt,
)
from app.analysis.result_builder import analysis_failed_result, build_analysis_result
from app.analysis.synthetic import synthetic_analysis
from app.analysis.text_fallback import extract_payload_from_text
from app.analysis.validator import validate_payload
from app.documents.models import (
    AnalysisContext,
    AnalysisResult,
    ExtractionResult,
    utc_now,
)
from app.logging.logger import Log


def _utc_today() -> date:
    return utc_now().date()


class LlmDocumentAnalyzer(BaseDocumentAnalyzer):
    """Analyzes extracted document text with a chat-completion model."""

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 2000,
        provider_name: str = "openai",
        expiring_soon_days: int = 30,
        prompt_template_path: Path | None = None,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._max_tokens = max_tokens
        self.provider_name = provider_name
        self._expiring_soon_days = expiring_soon_days
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._response_structure = load_response_structure()
        self._today = today

    async def analyze(
        self, extraction: ExtractionResult, context: AnalysisContext
    ) -> AnalysisResult:
        prompt = self._build_prompt(extraction, context)
        Log.debug(f"Analysis prompt for {extraction.document_id}:\n{prompt}")

        try:
            raw_response = await self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                system_prompt=load_system_prompt(extraction.document_type),
                user_prompt=prompt,
            )
        except (AnalysisAuthError, AnalysisRateLimitError):
            raise
        except AnalysisError as exc:
            Log.warning(
                f"Analysis provider failed for {extraction.document_id}, "
                f"using synthetic analysis: {exc}"
            )
            return synthetic_analysis(
                extraction,
                context,
                today=self._today(),
                expiring_soon_days=self._expiring_soon_days,
            )
        Log.debug(f"AI raw response:\n{raw_response}")

        result = self._interpret(raw_response, extraction, context)
        Log.info(
            f"Document {extraction.document_id} analysis completed - "
            f"Status: {result.validity_status.value}"
        )
        return result

    def _build_prompt(self, extraction: ExtractionResult, context: AnalysisContext) -> str:
        return self._prompt_template.format(
            document_type=extraction.document_type.value,
            document_id=extraction.document_id,
            confidence=extraction.confidence,
            extracted_text=extraction.extracted_text,
            extracted_fields=json.dumps(extraction.extracted_fields, indent=2),
            employee_id=context.employee_id or "Not provided",
            department=context.department or "Not provided",
            source=context.source,
            response_structure=self._response_structure,
        )

    def _interpret(
        self, raw: str, extraction: ExtractionResult, context: AnalysisContext
    ) -> AnalysisResult:
        data = self._parse_json(raw)
        if data is None:
            Log.info("Analysis response is not JSON, extracting from text")
            data = extract_payload_from_text(raw)
        try:
            payload = validate_payload(data)
        except AnalysisValidationError as exc:
            Log.warning(f"Analysis response rejected for {extraction.document_id}: {exc}")
            return analysis_failed_result(
                extraction, context, raw_analysis=raw, provider=self.provider_name
            )
        return build_analysis_result(
            payload,
            extraction,
            context,
            raw_analysis=raw,
            provider=self.provider_name,
            today=self._today(),
            expiring_soon_days=self._expiring_soon_days,
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any] | None:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError:
            return None
        return parsed if isinstance(parsed, dict) else None

    async def aclose(self) -> None:
        await self._client.aclose()
