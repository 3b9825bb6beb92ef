"""Deterministic stand-in analyses, one per document category.

Used when the analysis provider is unreachable and by the offline
``synthetic`` provider. Payloads have the same shape as a model answer and
go through the same validation and scoring.
"""

from datetime import date
from typing import Any

from app.analysis.result_builder import build_analysis_result
from app.analysis.validator import validate_payload
from app.documents.models import (
    SYNTHETIC_PROVIDER,
    AnalysisContext,
    AnalysisResult,
    DocumentType,
    ExtractionResult,
)

_RECOMMENDED_ACTIONS = ["Monitor expiry date", "Schedule renewal if needed"]

_PROFILES: dict[DocumentType, dict[str, Any]] = {
    DocumentType.PASSPORT: {
        "is_valid": True,
        "validity": "Valid",
        "expiry": "2029-05-11",
        "issue": "2019-05-12",
        "compliance": "Compliant",
        "risk": "Low",
        "missing": [],
        "issues": [],
    },
    DocumentType.WORK_PERMIT: {
        "is_valid": False,
        "validity": "Expired",
        "expiry": "2023-04-29",
        "issue": "2021-04-30",
        "compliance": "Non-Compliant",
        "risk": "High",
        "missing": [],
        "issues": ["Document expired", "Renewal required"],
    },
    DocumentType.CERTIFICATION: {
        "is_valid": True,
        "validity": "Expiring Soon",
        "expiry": "2024-06-21",
        "issue": "2022-06-22",
        "compliance": "Compliant",
        "risk": "Medium",
        "missing": [],
        "issues": ["Renewal notification required"],
    },
    DocumentType.EMPLOYMENT_CONTRACT: {
        "is_valid": True,
        "validity": "Valid",
        "expiry": "2025-01-09",
        "issue": "2022-01-10",
        "compliance": "Needs Review",
        "risk": "Low",
        "missing": ["Signature verification"],
        "issues": ["Missing signature page"],
    },
    DocumentType.VISA: {
        "is_valid": True,
        "validity": "Valid",
        "expiry": "2024-10-19",
        "issue": "2021-10-20",
        "compliance": "Needs Review",
        "risk": "Medium",
        "missing": [],
        "issues": ["Data mismatch with passport"],
    },
}


def synthetic_payload(document_type: DocumentType) -> dict[str, Any]:
    """Model-shaped answer for the category, the passport one for unknown types."""
    profile = _PROFILES.get(document_type, _PROFILES[DocumentType.PASSPORT])
    return {
        "documentValidation": {
            "isValid": profile["is_valid"],
            "validityStatus": profile["validity"],
            "confidenceScore": 92,
        },
        "expiryAnalysis": {
            "hasExpiryDate": True,
            "expiryDate": profile["expiry"],
            "issueDate": profile["issue"],
        },
        "dataQuality": {
            "ocrQuality": "High",
            "missingFields": list(profile["missing"]),
            "inconsistencies": [],
            "dataCompleteness": 95,
        },
        "complianceCheck": {
            "status": profile["compliance"],
            "issues": list(profile["issues"]),
            "riskLevel": profile["risk"],
        },
        "recommendations": {
            "actions": list(_RECOMMENDED_ACTIONS),
            "priority": "High" if profile["risk"] == "High" else "Medium",
            "requiresManualReview": profile["risk"] == "High" or bool(profile["issues"]),
        },
    }


def synthetic_analysis(
    extraction: ExtractionResult,
    context: AnalysisContext,
    *,
    today: date,
    expiring_soon_days: int = 30,
) -> AnalysisResult:
    payload = validate_payload(synthetic_payload(extraction.document_type))
    return build_analysis_result(
        payload,
        extraction,
        context,
        raw_analysis=(
            f"Synthetic analysis for {extraction.document_type.value} "
            f"document {extraction.document_id}"
        ),
        provider=SYNTHETIC_PROVIDER,
        today=today,
        expiring_soon_days=expiring_soon_days,
        degraded=True,
    )
