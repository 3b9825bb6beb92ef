from app.documents.models import (
    SUPPORTED_DOCUMENT_TYPES,
    SYNTHETIC_PROVIDER,
    AnalysisContext,
    AnalysisResult,
    ComplianceStatus,
    DocumentBatch,
    DocumentMetadata,
    DocumentReference,
    DocumentType,
    ExtractionResult,
    RiskLevel,
    Table,
    ValidityStatus,
    utc_now,
)

__all__ = [
    "SUPPORTED_DOCUMENT_TYPES",
    "SYNTHETIC_PROVIDER",
    "AnalysisContext",
    "AnalysisResult",
    "ComplianceStatus",
    "DocumentBatch",
    "DocumentMetadata",
    "DocumentReference",
    "DocumentType",
    "ExtractionResult",
    "RiskLevel",
    "Table",
    "ValidityStatus",
    "utc_now",
]
