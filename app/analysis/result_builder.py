"""Turns a validated AnalysisPayload into an AnalysisResult.

Expiry flags are recomputed from the expiry date against ``today`` so the
stored status never depends on the model's own date arithmetic.
"""

import re
from datetime import date
from enum import Enum
from typing import TypeVar

from app.analysis.models import AnalysisPayload
from app.analysis.scoring import calculate_document_score, requires_manual_review
from app.documents.dates import parse_date
from app.documents.models import (
    AnalysisContext,
    AnalysisResult,
    ComplianceStatus,
    ExtractionResult,
    RiskLevel,
    ValidityStatus,
    utc_now,
)

DEFAULT_CONFIDENCE_SCORE = 85
DEFAULT_DATA_COMPLETENESS = 80
FAILED_ANALYSIS_SCORE = 50

_MODEL_VALIDITY_STATUSES = (
    ValidityStatus.VALID,
    ValidityStatus.INVALID,
    ValidityStatus.EXPIRED,
    ValidityStatus.EXPIRING_SOON,
)

_E = TypeVar("_E", bound=Enum)


def _key(raw: str) -> str:
    return re.sub(r"[\s_\-]+", "", raw).lower()


def _match(members: tuple[_E, ...], raw: str | None) -> _E | None:
    if not raw:
        return None
    wanted = _key(raw)
    for member in members:
        if _key(member.value) == wanted:
            return member
    return None


def _expiry_flags(
    expiry_date: date | None,
    payload: AnalysisPayload,
    today: date,
    expiring_soon_days: int,
) -> tuple[int | None, bool, bool]:
    if expiry_date is None:
        return (
            payload.expiry.days_until_expiry,
            bool(payload.expiry.is_expired),
            bool(payload.expiry.is_expiring_soon),
        )
    days = (expiry_date - today).days
    return days, days < 0, 0 <= days <= expiring_soon_days


def build_analysis_result(
    payload: AnalysisPayload,
    extraction: ExtractionResult,
    context: AnalysisContext,
    *,
    raw_analysis: str,
    provider: str,
    today: date,
    expiring_soon_days: int = 30,
    degraded: bool = False,
) -> AnalysisResult:
    fields = extraction.extracted_fields
    expiry_date = parse_date(payload.expiry.expiry_date) or parse_date(fields.get("expiry_date"))
    issue_date = parse_date(payload.expiry.issue_date) or parse_date(fields.get("issue_date"))
    days_until_expiry, is_expired, is_expiring_soon = _expiry_flags(
        expiry_date, payload, today, expiring_soon_days
    )

    is_valid = payload.validation.is_valid if payload.validation.is_valid is not None else True
    validity = _match(_MODEL_VALIDITY_STATUSES, payload.validation.validity_status)
    if validity is None:
        validity = ValidityStatus.VALID if is_valid else ValidityStatus.INVALID
    if is_expired:
        validity, is_valid = ValidityStatus.EXPIRED, False
    elif is_expiring_soon:
        if validity in (ValidityStatus.VALID, ValidityStatus.EXPIRED):
            validity, is_valid = ValidityStatus.EXPIRING_SOON, True
    elif expiry_date is not None and validity in (
        ValidityStatus.EXPIRED,
        ValidityStatus.EXPIRING_SOON,
    ):
        validity, is_valid = ValidityStatus.VALID, True

    if payload.compliance.status is None:
        compliance = ComplianceStatus.COMPLIANT
    else:
        compliance = _match(tuple(ComplianceStatus), payload.compliance.status)
        compliance = compliance or ComplianceStatus.UNKNOWN
    if payload.compliance.risk_level is None:
        risk = RiskLevel.LOW
    else:
        risk = _match(tuple(RiskLevel), payload.compliance.risk_level) or RiskLevel.MEDIUM

    quality = payload.quality
    issues = payload.compliance.issues
    score = calculate_document_score(
        ocr_confidence=extraction.confidence,
        inconsistencies=len(quality.inconsistencies),
        missing_fields=len(quality.missing_fields),
        is_expired=is_expired,
        is_expiring_soon=is_expiring_soon,
        risk_level=risk,
        compliance_issues=len(issues),
    )
    manual_review = payload.recommendations.requires_manual_review
    if manual_review is None:
        manual_review = requires_manual_review(
            ocr_confidence=extraction.confidence,
            inconsistencies=len(quality.inconsistencies),
            missing_fields=len(quality.missing_fields),
            is_expired=is_expired,
            risk_level=risk,
            compliance_issues=len(issues),
        )
        verification = compliance is ComplianceStatus.NEEDS_REVIEW
    else:
        verification = manual_review

    priority = _match(tuple(RiskLevel), payload.recommendations.priority)
    return AnalysisResult(
        document_id=extraction.document_id,
        document_type=extraction.document_type,
        analyzed_at=utc_now(),
        is_valid=is_valid,
        validity_status=validity,
        compliance_status=compliance,
        risk_level=risk,
        expiry_date=expiry_date,
        issue_date=issue_date,
        data_consistency=quality.ocr_quality or "Medium",
        missing_information=list(quality.missing_fields),
        data_quality_issues=list(quality.inconsistencies),
        document_score=score,
        requires_manual_review=manual_review,
        raw_analysis=raw_analysis,
        confidence_score=(
            payload.validation.confidence_score
            if payload.validation.confidence_score is not None
            else DEFAULT_CONFIDENCE_SCORE
        ),
        is_expired=is_expired,
        is_expiring_soon=is_expiring_soon,
        days_until_expiry=days_until_expiry,
        data_completeness=(
            quality.data_completeness
            if quality.data_completeness is not None
            else DEFAULT_DATA_COMPLETENESS
        ),
        compliance_issues=list(issues),
        recommendations=list(payload.recommendations.actions),
        priority=priority.value if priority else "Medium",
        ocr_confidence=extraction.confidence,
        verification_required=verification,
        employee_id=context.employee_id,
        department=context.department,
        provider=provider,
        degraded=degraded,
    )


def analysis_failed_result(
    extraction: ExtractionResult,
    context: AnalysisContext,
    *,
    raw_analysis: str,
    provider: str,
) -> AnalysisResult:
    """Placeholder for an answer that arrived but could not be interpreted."""
    return AnalysisResult(
        document_id=extraction.document_id,
        document_type=extraction.document_type,
        analyzed_at=utc_now(),
        is_valid=None,
        validity_status=ValidityStatus.ANALYSIS_FAILED,
        compliance_status=ComplianceStatus.UNKNOWN,
        risk_level=RiskLevel.MEDIUM,
        data_consistency="Unknown",
        missing_information=["Analysis could not be completed"],
        data_quality_issues=["Analysis response could not be interpreted"],
        document_score=FAILED_ANALYSIS_SCORE,
        requires_manual_review=True,
        raw_analysis=raw_analysis or "Analysis failed",
        ocr_confidence=extraction.confidence,
        verification_required=True,
        employee_id=context.employee_id,
        department=context.department,
        provider=provider,
    )
