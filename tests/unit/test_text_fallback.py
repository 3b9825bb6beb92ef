from app.analysis.text_fallback import extract_payload_from_text
from app.analysis.validator import validate_payload


class TestExtractPayloadFromText:
    def test_reads_labelled_values(self) -> None:
        text = (
            "Validity: valid document\n"
            "Expiry: 05/11/2029\n"
            "Issued: 05/12/2019\n"
            "Compliance: Non-Compliant\n"
            "Risk level: High"
        )
        data = extract_payload_from_text(text)
        assert data["documentValidation"]["isValid"] is True
        assert data["expiryAnalysis"]["expiryDate"] == "05/11/2029"
        assert data["expiryAnalysis"]["issueDate"] == "05/12/2019"
        assert data["complianceCheck"]["status"] == "Non-Compliant"
        assert data["complianceCheck"]["riskLevel"] == "High"

    def test_detects_negative_validity(self) -> None:
        data = extract_payload_from_text("Validity: invalid, the photo page is missing")
        assert data["documentValidation"]["isValid"] is False

    def test_defaults_when_nothing_matches(self) -> None:
        data = extract_payload_from_text("I cannot help with that.")
        assert data["documentValidation"]["isValid"] is None
        assert data["expiryAnalysis"]["expiryDate"] is None
        assert data["complianceCheck"]["status"] == "Unknown"
        assert data["complianceCheck"]["riskLevel"] == "Medium"

    def test_result_passes_validation(self) -> None:
        payload = validate_payload(extract_payload_from_text("Risk: Low"))
        assert payload.compliance.risk_level == "Low"
