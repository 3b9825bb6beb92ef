from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentType(str, Enum):
    """Document categories known to the source and the analysis strategies."""

    PASSPORT = "passport"
    WORK_PERMIT = "work_permit"
    CERTIFICATION = "certification"
    EMPLOYMENT_CONTRACT = "employment_contract"
    VISA = "visa"
    ID_CARD = "id_card"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: str | None) -> "DocumentType":
        """Map a free-form type string to a category, ``UNKNOWN`` if unrecognized."""
        if not raw:
            return cls.UNKNOWN
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.UNKNOWN


SUPPORTED_DOCUMENT_TYPES: tuple[DocumentType, ...] = (
    DocumentType.PASSPORT,
    DocumentType.WORK_PERMIT,
    DocumentType.CERTIFICATION,
    DocumentType.EMPLOYMENT_CONTRACT,
    DocumentType.VISA,
)


class ValidityStatus(str, Enum):
    VALID = "Valid"
    INVALID = "Invalid"
    EXPIRED = "Expired"
    EXPIRING_SOON = "Expiring Soon"
    PROCESSING_FAILED = "Processing Failed"
    ANALYSIS_FAILED = "Analysis Failed"


class ComplianceStatus(str, Enum):
    COMPLIANT = "Compliant"
    NON_COMPLIANT = "Non-Compliant"
    NEEDS_REVIEW = "Needs Review"
    UNKNOWN = "Unknown"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


SYNTHETIC_PROVIDER = "synthetic"


@dataclass(frozen=True)
class DocumentReference:
    """A document as listed by the source. Immutable once returned."""

    id: str
    source_type: DocumentType
    size_bytes: int
    mime_type: str
    created_at: datetime | None = None
    modified_at: datetime | None = None
    employee_id: str | None = None
    department: str | None = None
    name: str = ""
    url: str = ""
    version: int = 1


@dataclass(frozen=True)
class DocumentBatch:
    """One page of documents from the source."""

    documents: list[DocumentReference] = field(default_factory=list)
    has_more: bool = False
    total_count: int = 0
    next_cursor: int | None = None


@dataclass(frozen=True)
class DocumentMetadata:
    document_id: str
    document_type: DocumentType
    name: str = ""
    size_bytes: int = 0
    mime_type: str = "application/pdf"
    created_at: datetime | None = None
    modified_at: datetime | None = None
    created_by: str | None = None
    modified_by: str | None = None
    version: int = 1
    categories: list[str] = field(default_factory=list)
    custom_attributes: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Table:
    headers: list[str]
    rows: list[list[str]] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractionResult:
    """Output of the OCR step for one document attempt."""

    document_id: str
    document_type: DocumentType
    extracted_text: str
    confidence: float
    page_count: int = 1
    extracted_fields: dict[str, str | None] = field(default_factory=dict)
    tables: list[Table] = field(default_factory=list)
    processed_at: datetime = field(default_factory=utc_now)
    provider: str = ""
    language: str = "en"
    degraded: bool = False


@dataclass(frozen=True)
class AnalysisContext:
    """Caller-supplied context passed to the analyzer alongside the extraction."""

    employee_id: str | None = None
    department: str | None = None
    source: str = "OpenText DMS"
    requires_verification: bool = True


@dataclass(frozen=True)
class AnalysisResult:
    """Compliance assessment of one processed document attempt."""

    document_id: str
    document_type: DocumentType
    analyzed_at: datetime
    is_valid: bool | None
    validity_status: ValidityStatus
    compliance_status: ComplianceStatus
    risk_level: RiskLevel
    expiry_date: date | None = None
    issue_date: date | None = None
    data_consistency: str = "Unknown"
    missing_information: list[str] = field(default_factory=list)
    data_quality_issues: list[str] = field(default_factory=list)
    document_score: int = 0
    requires_manual_review: bool = True
    raw_analysis: str = ""
    confidence_score: int = 0
    is_expired: bool = False
    is_expiring_soon: bool = False
    days_until_expiry: int | None = None
    data_completeness: int = 0
    compliance_issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    priority: str = "Medium"
    ocr_confidence: float = 0.0
    verification_required: bool = False
    employee_id: str | None = None
    department: str | None = None
    provider: str = ""
    degraded: bool = False
