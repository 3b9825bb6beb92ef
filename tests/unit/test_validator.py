import pytest

from app.analysis.exceptions import AnalysisValidationError
from app.analysis.validator import validate_payload


class TestValidatePayload:
    def test_reads_every_section(self) -> None:
        payload = validate_payload(
            {
                "documentValidation": {
                    "isValid": True,
                    "validityStatus": "Valid",
                    "confidenceScore": 95,
                },
                "expiryAnalysis": {"expiryDate": "2029-05-11", "daysUntilExpiry": 1200.0},
                "dataQuality": {
                    "ocrQuality": "High",
                    "missingFields": ["Signature"],
                    "dataCompleteness": 90,
                },
                "complianceCheck": {"status": "Compliant", "issues": [], "riskLevel": "Low"},
                "recommendations": {
                    "actions": ["Monitor"],
                    "priority": "Low",
                    "requiresManualReview": False,
                },
            }
        )
        assert payload.validation.is_valid is True
        assert payload.validation.confidence_score == 95
        assert payload.expiry.expiry_date == "2029-05-11"
        assert payload.expiry.days_until_expiry == 1200
        assert payload.quality.missing_fields == ["Signature"]
        assert payload.compliance.risk_level == "Low"
        assert payload.recommendations.requires_manual_review is False

    def test_empty_object_is_valid(self) -> None:
        payload = validate_payload({})
        assert payload.validation.is_valid is None
        assert payload.quality.missing_fields == []
        assert payload.recommendations.actions == []

    def test_null_fields_are_accepted(self) -> None:
        payload = validate_payload({"expiryAnalysis": {"expiryDate": None, "isExpired": None}})
        assert payload.expiry.expiry_date is None
        assert payload.expiry.is_expired is None

    def test_blank_strings_become_none(self) -> None:
        payload = validate_payload({"complianceCheck": {"status": "   "}})
        assert payload.compliance.status is None

    def test_blank_list_items_are_dropped(self) -> None:
        payload = validate_payload({"dataQuality": {"inconsistencies": ["", " name mismatch "]}})
        assert payload.quality.inconsistencies == ["name mismatch"]

    def test_rejects_non_object_section(self) -> None:
        with pytest.raises(AnalysisValidationError, match="documentValidation"):
            validate_payload({"documentValidation": "yes"})

    def test_rejects_string_boolean(self) -> None:
        with pytest.raises(AnalysisValidationError, match="isValid"):
            validate_payload({"documentValidation": {"isValid": "true"}})

    def test_rejects_boolean_number(self) -> None:
        with pytest.raises(AnalysisValidationError, match="daysUntilExpiry"):
            validate_payload({"expiryAnalysis": {"daysUntilExpiry": True}})

    def test_rejects_out_of_range_percent(self) -> None:
        with pytest.raises(AnalysisValidationError, match="between 0 and 100"):
            validate_payload({"documentValidation": {"confidenceScore": 150}})

    def test_rejects_non_list(self) -> None:
        with pytest.raises(AnalysisValidationError, match="must be a list"):
            validate_payload({"complianceCheck": {"issues": "none"}})

    def test_rejects_non_string_list_item(self) -> None:
        with pytest.raises(AnalysisValidationError, match="item 1"):
            validate_payload({"recommendations": {"actions": ["Renew", 3]}})

    @pytest.mark.parametrize("raw", [float("inf"), float("-inf"), float("nan")])
    def test_rejects_non_finite_number(self, raw: float) -> None:
        with pytest.raises(AnalysisValidationError, match="finite number"):
            validate_payload({"expiryAnalysis": {"daysUntilExpiry": raw}})
