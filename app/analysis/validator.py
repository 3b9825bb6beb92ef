"""Validates the parsed analysis JSON and builds an AnalysisPayload.

Every section and every field is optional; only wrong types are rejected.
"""

import math
from typing import Any

from app.analysis.exceptions import AnalysisValidationError
from app.analysis.models import (
    AnalysisPayload,
    ComplianceCheck,
    DataQuality,
    DocumentValidation,
    ExpiryAnalysis,
    Recommendations,
)


def validate_payload(data: dict[str, Any]) -> AnalysisPayload:
    """Validate raw parsed JSON and build an AnalysisPayload.

    Raises:
        AnalysisValidationError: when a section or field has the wrong type.
    """
    validation = _section(data, "documentValidation")
    expiry = _section(data, "expiryAnalysis")
    quality = _section(data, "dataQuality")
    compliance = _section(data, "complianceCheck")
    recommendations = _section(data, "recommendations")
    return AnalysisPayload(
        validation=DocumentValidation(
            is_valid=_optional_bool(validation, "documentValidation", "isValid"),
            validity_status=_optional_str(validation, "documentValidation", "validityStatus"),
            confidence_score=_optional_percent(
                validation, "documentValidation", "confidenceScore"
            ),
        ),
        expiry=ExpiryAnalysis(
            expiry_date=_optional_str(expiry, "expiryAnalysis", "expiryDate"),
            issue_date=_optional_str(expiry, "expiryAnalysis", "issueDate"),
            days_until_expiry=_optional_int(expiry, "expiryAnalysis", "daysUntilExpiry"),
            is_expired=_optional_bool(expiry, "expiryAnalysis", "isExpired"),
            is_expiring_soon=_optional_bool(expiry, "expiryAnalysis", "isExpiringSoon"),
        ),
        quality=DataQuality(
            ocr_quality=_optional_str(quality, "dataQuality", "ocrQuality"),
            missing_fields=_str_list(quality, "dataQuality", "missingFields"),
            inconsistencies=_str_list(quality, "dataQuality", "inconsistencies"),
            data_completeness=_optional_percent(quality, "dataQuality", "dataCompleteness"),
        ),
        compliance=ComplianceCheck(
            status=_optional_str(compliance, "complianceCheck", "status"),
            issues=_str_list(compliance, "complianceCheck", "issues"),
            risk_level=_optional_str(compliance, "complianceCheck", "riskLevel"),
        ),
        recommendations=Recommendations(
            actions=_str_list(recommendations, "recommendations", "actions"),
            priority=_optional_str(recommendations, "recommendations", "priority"),
            requires_manual_review=_optional_bool(
                recommendations, "recommendations", "requiresManualReview"
            ),
        ),
    )


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    raw = data.get(name)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise AnalysisValidationError(f"'{name}' must be an object")
    return raw


def _optional_bool(section: dict[str, Any], name: str, key: str) -> bool | None:
    raw = section.get(key)
    if raw is None:
        return None
    if not isinstance(raw, bool):
        raise AnalysisValidationError(f"'{name}.{key}' must be a boolean or null")
    return raw


def _optional_str(section: dict[str, Any], name: str, key: str) -> str | None:
    raw = section.get(key)
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise AnalysisValidationError(f"'{name}.{key}' must be a string or null")
    return raw.strip() or None


def _optional_int(section: dict[str, Any], name: str, key: str) -> int | None:
    raw = section.get(key)
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise AnalysisValidationError(f"'{name}.{key}' must be a number or null")
    if isinstance(raw, float) and not math.isfinite(raw):
        raise AnalysisValidationError(f"'{name}.{key}' must be a finite number, got {raw}")
    return int(raw)


def _optional_percent(section: dict[str, Any], name: str, key: str) -> int | None:
    value = _optional_int(section, name, key)
    if value is None:
        return None
    if not 0 <= value <= 100:
        raise AnalysisValidationError(f"'{name}.{key}' must be between 0 and 100, got {value}")
    return value


def _str_list(section: dict[str, Any], name: str, key: str) -> list[str]:
    raw = section.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise AnalysisValidationError(f"'{name}.{key}' must be a list")
    items: list[str] = []
    for i, item in enumerate(raw):
        if not isinstance(item, str):
            raise AnalysisValidationError(f"'{name}.{key}' item {i} must be a string")
        if item.strip():
            items.append(item.strip())
    return items
