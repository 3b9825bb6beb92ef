"""Best-effort recovery of an analysis from a free-text model answer."""

import re
from typing import Any

_VALIDITY_RE = re.compile(r"(?:validity|valid)[:\s]*([a-zA-Z ]+)", re.IGNORECASE)
_EXPIRY_RE = re.compile(
    r"(?:expir[ye]|expires?)[:\s]*(\d{1,2}[-/]\d{1,2}[-/]\d{2,4})", re.IGNORECASE
)
_ISSUE_RE = re.compile(r"(?:issue|issued)[:\s]*(\d{1,2}[-/]\d{1,2}[-/]\d{2,4})", re.IGNORECASE)
_COMPLIANCE_RE = re.compile(r"(?:compliance|compliant)[:\s]*([a-zA-Z\- ]+)", re.IGNORECASE)
_RISK_RE = re.compile(r"risk(?:\s+level)?[:\s]*([a-zA-Z]+)", re.IGNORECASE)


def extract_payload_from_text(text: str) -> dict[str, Any]:
    """Pull the fields a JSON answer would carry out of plain text.

    The result has the same shape as the JSON answer so it travels the same
    validation path.
    """
    validity = _VALIDITY_RE.search(text)
    is_valid: bool | None = None
    if validity:
        phrase = validity.group(1).strip().lower()
        is_valid = not phrase.startswith(("invalid", "not", "no "))
    expiry = _EXPIRY_RE.search(text)
    issue = _ISSUE_RE.search(text)
    compliance = _COMPLIANCE_RE.search(text)
    risk = _RISK_RE.search(text)
    return {
        "documentValidation": {"isValid": is_valid},
        "expiryAnalysis": {
            "expiryDate": expiry.group(1) if expiry else None,
            "issueDate": issue.group(1) if issue else None,
        },
        "dataQuality": {},
        "complianceCheck": {
            "status": compliance.group(1).strip() if compliance else "Unknown",
            "riskLevel": risk.group(1) if risk else "Medium",
        },
        "recommendations": {},
    }
