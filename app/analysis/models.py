from dataclasses import dataclass, field


@dataclass(frozen=True)
class DocumentValidation:
    is_valid: bool | None = None
    validity_status: str | None = None
    confidence_score: int | None = None


@dataclass(frozen=True)
class ExpiryAnalysis:
    expiry_date: str | None = None
    issue_date: str | None = None
    days_until_expiry: int | None = None
    is_expired: bool | None = None
    is_expiring_soon: bool | None = None


@dataclass(frozen=True)
class DataQuality:
    ocr_quality: str | None = None
    missing_fields: list[str] = field(default_factory=list)
    inconsistencies: list[str] = field(default_factory=list)
    data_completeness: int | None = None


@dataclass(frozen=True)
class ComplianceCheck:
    status: str | None = None
    issues: list[str] = field(default_factory=list)
    risk_level: str | None = None


@dataclass(frozen=True)
class Recommendations:
    actions: list[str] = field(default_factory=list)
    priority: str | None = None
    requires_manual_review: bool | None = None


@dataclass(frozen=True)
class AnalysisPayload:
    """Structured answer of the analysis model, every section optional."""

    validation: DocumentValidation = field(default_factory=DocumentValidation)
    expiry: ExpiryAnalysis = field(default_factory=ExpiryAnalysis)
    quality: DataQuality = field(default_factory=DataQuality)
    compliance: ComplianceCheck = field(default_factory=ComplianceCheck)
    recommendations: Recommendations = field(default_factory=Recommendations)
