import json
from datetime import date
from typing import Any

import pytest

from app.analysis.analyzer import LlmDocumentAnalyzer
from app.analysis.client_base import BaseAnalysisClient
from app.analysis.exceptions import (
    AnalysisAuthError,
    AnalysisNetworkError,
    AnalysisRateLimitError,
    AnalysisResponseError,
)
from app.analysis.synthetic_analyzer import SyntheticDocumentAnalyzer
from app.documents.models import (
    SYNTHETIC_PROVIDER,
    AnalysisContext,
    ComplianceStatus,
    DocumentType,
    ExtractionResult,
    RiskLevel,
    ValidityStatus,
)

TODAY = date(2025, 1, 1)

VALID_ANSWER: dict[str, Any] = {
    "documentValidation": {"isValid": True, "validityStatus": "Valid", "confidenceScore": 95},
    "expiryAnalysis": {"expiryDate": "2029-05-11", "issueDate": "2019-05-12"},
    "dataQuality": {"ocrQuality": "High", "missingFields": [], "inconsistencies": []},
    "complianceCheck": {"status": "Compliant", "issues": [], "riskLevel": "Low"},
    "recommendations": {"actions": ["Monitor expiry date"], "priority": "Low"},
}


class FakeAnalysisClient(BaseAnalysisClient):
    def __init__(self, response: str | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    async def create_chat_completion(self, **kwargs: Any) -> str:  # type: ignore[override]
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response

    async def aclose(self) -> None:
        self.closed = True


def _make_extraction(doc_type: DocumentType = DocumentType.PASSPORT) -> ExtractionResult:
    return ExtractionResult(
        document_id="DOC-1",
        document_type=doc_type,
        extracted_text="Passport No.: A12345678",
        confidence=0.95,
        extracted_fields={"passport_number": "A12345678"},
    )


def _make_analyzer(client: FakeAnalysisClient, **kwargs: Any) -> LlmDocumentAnalyzer:
    return LlmDocumentAnalyzer(client=client, model="gpt-4", today=lambda: TODAY, **kwargs)


async def _analyze(client: FakeAnalysisClient, **kwargs: Any) -> Any:
    analyzer = _make_analyzer(client, **kwargs)
    return await analyzer.analyze(
        _make_extraction(), AnalysisContext(employee_id="EMP-5432", department="HR")
    )


class TestLlmDocumentAnalyzer:
    @pytest.mark.asyncio
    async def test_valid_json_answer(self) -> None:
        client = FakeAnalysisClient(json.dumps(VALID_ANSWER))
        result = await _analyze(client)
        assert result.validity_status == ValidityStatus.VALID
        assert result.is_valid is True
        assert result.compliance_status == ComplianceStatus.COMPLIANT
        assert result.risk_level == RiskLevel.LOW
        assert result.expiry_date == date(2029, 5, 11)
        assert result.document_score == 100
        assert result.requires_manual_review is False
        assert result.provider == "openai"
        assert result.degraded is False

    @pytest.mark.asyncio
    async def test_answer_in_code_fence(self) -> None:
        client = FakeAnalysisClient("```json\n" + json.dumps(VALID_ANSWER) + "\n```")
        result = await _analyze(client)
        assert result.validity_status == ValidityStatus.VALID
        assert result.confidence_score == 95

    @pytest.mark.asyncio
    async def test_plain_text_answer_uses_text_extraction(self) -> None:
        client = FakeAnalysisClient(
            "Validity: valid\nExpiry: 05/11/2029\nCompliance: Compliant\nRisk level: Low"
        )
        result = await _analyze(client)
        assert result.validity_status == ValidityStatus.VALID
        assert result.expiry_date == date(2029, 5, 11)
        assert result.risk_level == RiskLevel.LOW
        assert result.raw_analysis.startswith("Validity")

    @pytest.mark.asyncio
    async def test_ill_typed_json_is_analysis_failed(self) -> None:
        client = FakeAnalysisClient(json.dumps({"documentValidation": {"isValid": "yes"}}))
        result = await _analyze(client)
        assert result.validity_status == ValidityStatus.ANALYSIS_FAILED
        assert result.document_score == 50
        assert result.provider == "openai"
        assert result.degraded is False

    @pytest.mark.asyncio
    async def test_overflowing_number_is_analysis_failed(self) -> None:
        client = FakeAnalysisClient('{"expiryAnalysis": {"daysUntilExpiry": 1e400}}')
        result = await _analyze(client)
        assert result.validity_status == ValidityStatus.ANALYSIS_FAILED
        assert result.document_score == 50
        assert result.requires_manual_review is True

    @pytest.mark.asyncio
    async def test_network_error_degrades_to_synthetic(self) -> None:
        client = FakeAnalysisClient(error=AnalysisNetworkError("down"))
        result = await _analyze(client)
        assert result.provider == SYNTHETIC_PROVIDER
        assert result.degraded is True
        assert result.employee_id == "EMP-5432"

    @pytest.mark.asyncio
    async def test_empty_response_degrades_to_synthetic(self) -> None:
        client = FakeAnalysisClient(error=AnalysisResponseError("AI returned empty response"))
        result = await _analyze(client)
        assert result.degraded is True

    @pytest.mark.asyncio
    async def test_auth_error_is_raised(self) -> None:
        client = FakeAnalysisClient(error=AnalysisAuthError("bad key"))
        with pytest.raises(AnalysisAuthError):
            await _analyze(client)

    @pytest.mark.asyncio
    async def test_rate_limit_error_is_raised(self) -> None:
        client = FakeAnalysisClient(error=AnalysisRateLimitError("slow down"))
        with pytest.raises(AnalysisRateLimitError):
            await _analyze(client)

    @pytest.mark.asyncio
    async def test_prompt_carries_document_and_context(self) -> None:
        client = FakeAnalysisClient(json.dumps(VALID_ANSWER))
        await _analyze(client, max_tokens=500)
        call = client.calls[0]
        assert call["model"] == "gpt-4"
        assert call["max_tokens"] == 500
        assert "DOC-1" in call["user_prompt"]
        assert "EMP-5432" in call["user_prompt"]
        assert '"passport_number": "A12345678"' in call["user_prompt"]
        assert "For passport documents" in call["system_prompt"]

    @pytest.mark.asyncio
    async def test_missing_context_is_reported_as_not_provided(self) -> None:
        client = FakeAnalysisClient(json.dumps(VALID_ANSWER))
        analyzer = _make_analyzer(client)
        await analyzer.analyze(_make_extraction(), AnalysisContext())
        assert "Not provided" in client.calls[0]["user_prompt"]

    @pytest.mark.asyncio
    async def test_temperature_is_clamped(self) -> None:
        client = FakeAnalysisClient(json.dumps(VALID_ANSWER))
        await _analyze(client, temperature=3.0)
        assert client.calls[0]["temperature"] == 1.0

    @pytest.mark.asyncio
    async def test_aclose_closes_client(self) -> None:
        client = FakeAnalysisClient("{}")
        await _make_analyzer(client).aclose()
        assert client.closed is True


class TestSyntheticDocumentAnalyzer:
    @pytest.mark.asyncio
    async def test_passport_profile_is_valid(self) -> None:
        analyzer = SyntheticDocumentAnalyzer(today=lambda: TODAY)
        result = await analyzer.analyze(_make_extraction(), AnalysisContext())
        assert result.validity_status == ValidityStatus.VALID
        assert result.compliance_status == ComplianceStatus.COMPLIANT
        assert result.requires_manual_review is False
        assert result.confidence_score == 92
        assert result.degraded is True
        assert result.raw_analysis == "Synthetic analysis for passport document DOC-1"

    @pytest.mark.asyncio
    async def test_work_permit_profile_is_expired_high_risk(self) -> None:
        analyzer = SyntheticDocumentAnalyzer(today=lambda: TODAY)
        result = await analyzer.analyze(
            _make_extraction(DocumentType.WORK_PERMIT), AnalysisContext()
        )
        assert result.validity_status == ValidityStatus.EXPIRED
        assert result.risk_level == RiskLevel.HIGH
        assert result.compliance_issues == ["Document expired", "Renewal required"]
        assert result.requires_manual_review is True
        assert result.priority == "High"

    @pytest.mark.asyncio
    async def test_expiry_is_judged_against_today(self) -> None:
        analyzer = SyntheticDocumentAnalyzer(today=lambda: date(2024, 10, 1))
        result = await analyzer.analyze(_make_extraction(DocumentType.VISA), AnalysisContext())
        assert result.validity_status == ValidityStatus.EXPIRING_SOON
        assert result.days_until_expiry == 18
