from datetime import timedelta
from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.database.connection import Database
from app.database.models import (
    DepartmentCompliance,
    DocumentFilters,
    DocumentStats,
    TypeDistribution,
)
from app.documents.models import (
    SYNTHETIC_PROVIDER,
    AnalysisResult,
    ComplianceStatus,
    DocumentType,
    RiskLevel,
    ValidityStatus,
    utc_now,
)

_COLUMNS = (
    "document_id, document_type, employee_id, department, analysis_timestamp, "
    "is_valid, validity_status, compliance_status, risk_level, expiry_date, "
    "issue_date, days_until_expiry, is_expired, is_expiring_soon, "
    "data_consistency, missing_information, data_quality_issues, "
    "compliance_issues, recommendations, priority, confidence_score, "
    "data_completeness, ocr_confidence, requires_manual_review, "
    "verification_required, document_score, raw_analysis, provider, degraded"
)


class AnalysisRepository:
    """Database operations for the document_analysis table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def upsert(self, analysis: AnalysisResult) -> None:
        """Insert the analysis or replace the stored one for the same document."""
        async with self._db.connection() as conn:
            await conn.execute(
                f"""
                INSERT INTO document_analysis ({_COLUMNS})
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s,
                        %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                ON CONFLICT (document_id) DO UPDATE SET
                    document_type = EXCLUDED.document_type,
                    employee_id = EXCLUDED.employee_id,
                    department = EXCLUDED.department,
                    analysis_timestamp = EXCLUDED.analysis_timestamp,
                    is_valid = EXCLUDED.is_valid,
                    validity_status = EXCLUDED.validity_status,
                    compliance_status = EXCLUDED.compliance_status,
                    risk_level = EXCLUDED.risk_level,
                    expiry_date = EXCLUDED.expiry_date,
                    issue_date = EXCLUDED.issue_date,
                    days_until_expiry = EXCLUDED.days_until_expiry,
                    is_expired = EXCLUDED.is_expired,
                    is_expiring_soon = EXCLUDED.is_expiring_soon,
                    data_consistency = EXCLUDED.data_consistency,
                    missing_information = EXCLUDED.missing_information,
                    data_quality_issues = EXCLUDED.data_quality_issues,
                    compliance_issues = EXCLUDED.compliance_issues,
                    recommendations = EXCLUDED.recommendations,
                    priority = EXCLUDED.priority,
                    confidence_score = EXCLUDED.confidence_score,
                    data_completeness = EXCLUDED.data_completeness,
                    ocr_confidence = EXCLUDED.ocr_confidence,
                    requires_manual_review = EXCLUDED.requires_manual_review,
                    verification_required = EXCLUDED.verification_required,
                    document_score = EXCLUDED.document_score,
                    raw_analysis = EXCLUDED.raw_analysis,
                    provider = EXCLUDED.provider,
                    degraded = EXCLUDED.degraded,
                    updated_at = NOW()
                """,
                (
                    analysis.document_id,
                    analysis.document_type.value,
                    analysis.employee_id,
                    analysis.department,
                    analysis.analyzed_at,
                    analysis.is_valid,
                    analysis.validity_status.value,
                    analysis.compliance_status.value,
                    analysis.risk_level.value,
                    analysis.expiry_date,
                    analysis.issue_date,
                    analysis.days_until_expiry,
                    analysis.is_expired,
                    analysis.is_expiring_soon,
                    analysis.data_consistency,
                    Jsonb(analysis.missing_information),
                    Jsonb(analysis.data_quality_issues),
                    Jsonb(analysis.compliance_issues),
                    Jsonb(analysis.recommendations),
                    analysis.priority,
                    analysis.confidence_score,
                    analysis.data_completeness,
                    round(analysis.ocr_confidence, 2),
                    analysis.requires_manual_review,
                    analysis.verification_required,
                    analysis.document_score,
                    analysis.raw_analysis,
                    analysis.provider,
                    analysis.degraded,
                ),
            )
            await conn.commit()

    async def find(self, filters: DocumentFilters) -> list[AnalysisResult]:
        """Return stored analyses matching the filters, newest first."""
        clauses = ["processing_status = 'completed'"]
        params: list[Any] = []
        if filters.document_type is not None:
            clauses.append("document_type = %s")
            params.append(filters.document_type.value)
        if filters.validity_status is not None:
            clauses.append("validity_status = %s")
            params.append(filters.validity_status.value)
        if filters.expiring_within_days is not None:
            clauses.append("expiry_date <= %s")
            params.append(utc_now().date() + timedelta(days=filters.expiring_within_days))
        params.append(filters.limit)
        where = " AND ".join(clauses)
        async with self._db.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM document_analysis
                    WHERE {where}
                    ORDER BY analysis_timestamp DESC
                    LIMIT %s
                    """,
                    params,
                )
                rows = await cur.fetchall()
        return [_to_analysis(row) for row in rows]

    async def stats(self) -> DocumentStats:
        async with self._db.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    """
                    SELECT
                        COUNT(*) AS total_documents,
                        COUNT(*) FILTER (WHERE validity_status = 'Valid') AS valid_documents,
                        COUNT(*) FILTER (WHERE validity_status = 'Expired') AS expired_documents,
                        COUNT(*) FILTER (
                            WHERE expiry_date > CURRENT_DATE
                              AND expiry_date <= CURRENT_DATE + INTERVAL '30 days'
                        ) AS expiring_soon,
                        COALESCE(AVG(document_score), 0) AS avg_document_score,
                        COUNT(*) FILTER (WHERE requires_manual_review) AS requires_review,
                        COUNT(*) FILTER (WHERE provider = %s) AS synthetic_documents
                    FROM document_analysis
                    WHERE processing_status = 'completed'
                    """,
                    (SYNTHETIC_PROVIDER,),
                )
                row = await cur.fetchone()
        if row is None:
            return DocumentStats()
        return DocumentStats(
            total_documents=row["total_documents"],
            valid_documents=row["valid_documents"],
            expired_documents=row["expired_documents"],
            expiring_soon=row["expiring_soon"],
            avg_document_score=round(float(row["avg_document_score"]), 2),
            requires_review=row["requires_review"],
            synthetic_documents=row["synthetic_documents"],
        )

    async def type_distribution(self) -> list[TypeDistribution]:
        async with self._db.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    """
                    SELECT
                        document_type,
                        COUNT(*) AS count,
                        COUNT(*) FILTER (WHERE validity_status = 'Valid') AS valid_count,
                        COUNT(*) FILTER (WHERE validity_status = 'Expired') AS expired_count
                    FROM document_analysis
                    WHERE processing_status = 'completed'
                    GROUP BY document_type
                    ORDER BY count DESC, document_type
                    """
                )
                rows = await cur.fetchall()
        return [
            TypeDistribution(
                document_type=row["document_type"],
                count=row["count"],
                valid_count=row["valid_count"],
                expired_count=row["expired_count"],
            )
            for row in rows
        ]

    async def department_compliance(self) -> list[DepartmentCompliance]:
        async with self._db.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    """
                    SELECT
                        COALESCE(department, 'Unknown') AS department,
                        COUNT(*) AS total_documents,
                        COUNT(*) FILTER (WHERE compliance_status = 'Compliant')
                            AS compliant_documents,
                        COALESCE(AVG(document_score), 0) AS avg_score,
                        COUNT(*) FILTER (WHERE requires_manual_review) AS needs_review
                    FROM document_analysis
                    WHERE processing_status = 'completed'
                    GROUP BY COALESCE(department, 'Unknown')
                    ORDER BY total_documents DESC, department
                    """
                )
                rows = await cur.fetchall()
        return [
            DepartmentCompliance(
                department=row["department"],
                total_documents=row["total_documents"],
                compliant_documents=row["compliant_documents"],
                avg_score=round(float(row["avg_score"]), 2),
                needs_review=row["needs_review"],
            )
            for row in rows
        ]


def _to_analysis(row: dict[str, Any]) -> AnalysisResult:
    return AnalysisResult(
        document_id=row["document_id"],
        document_type=DocumentType.parse(row["document_type"]),
        analyzed_at=row["analysis_timestamp"],
        is_valid=row["is_valid"],
        validity_status=ValidityStatus(row["validity_status"]),
        compliance_status=ComplianceStatus(row["compliance_status"]),
        risk_level=RiskLevel(row["risk_level"]),
        expiry_date=row["expiry_date"],
        issue_date=row["issue_date"],
        data_consistency=row["data_consistency"] or "Unknown",
        missing_information=row["missing_information"] or [],
        data_quality_issues=row["data_quality_issues"] or [],
        document_score=row["document_score"] or 0,
        requires_manual_review=row["requires_manual_review"],
        raw_analysis=row["raw_analysis"] or "",
        confidence_score=row["confidence_score"] or 0,
        is_expired=row["is_expired"],
        is_expiring_soon=row["is_expiring_soon"],
        days_until_expiry=row["days_until_expiry"],
        data_completeness=row["data_completeness"] or 0,
        compliance_issues=row["compliance_issues"] or [],
        recommendations=row["recommendations"] or [],
        priority=row["priority"] or "Medium",
        ocr_confidence=float(row["ocr_confidence"] or 0),
        verification_required=row["verification_required"],
        employee_id=row["employee_id"],
        department=row["department"],
        provider=row["provider"] or "",
        degraded=row["degraded"],
    )
