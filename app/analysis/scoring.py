"""Deterministic document score and manual-review rules."""

from app.documents.models import RiskLevel

MAX_SCORE = 100

LOW_OCR_CONFIDENCE = 0.9
VERY_LOW_OCR_CONFIDENCE = 0.7
REVIEW_OCR_CONFIDENCE = 0.8


def calculate_document_score(
    *,
    ocr_confidence: float,
    inconsistencies: int,
    missing_fields: int,
    is_expired: bool,
    is_expiring_soon: bool,
    risk_level: RiskLevel,
    compliance_issues: int,
) -> int:
    """Start at 100 and subtract a penalty per finding, never below 0."""
    score = MAX_SCORE
    if ocr_confidence < LOW_OCR_CONFIDENCE:
        score -= 10
    if ocr_confidence < VERY_LOW_OCR_CONFIDENCE:
        score -= 20
    score -= 5 * inconsistencies
    score -= 3 * missing_fields
    if is_expired:
        score -= 30
    elif is_expiring_soon:
        score -= 10
    if risk_level is RiskLevel.HIGH:
        score -= 25
    elif risk_level is RiskLevel.MEDIUM:
        score -= 10
    score -= 5 * compliance_issues
    return max(0, score)


def requires_manual_review(
    *,
    ocr_confidence: float,
    inconsistencies: int,
    missing_fields: int,
    is_expired: bool,
    risk_level: RiskLevel,
    compliance_issues: int,
) -> bool:
    return (
        ocr_confidence < REVIEW_OCR_CONFIDENCE
        or inconsistencies > 0
        or risk_level is RiskLevel.HIGH
        or missing_fields > 2
        or is_expired
        or compliance_issues > 0
    )
