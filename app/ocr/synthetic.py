"""Deterministic stand-in OCR output, one sample per document category."""

from app.documents.models import SYNTHETIC_PROVIDER, DocumentType, ExtractionResult

SYNTHETIC_CONFIDENCE = 0.92

_SAMPLES: dict[DocumentType, tuple[str, dict[str, str | None]]] = {
    DocumentType.PASSPORT: (
        """PASSPORT
United States of America
Type: P
Code: USA
Passport No.: A12345678
Surname: SMITH
Given Names: JOHN MICHAEL
Nationality: UNITED STATES OF AMERICA
Date of Birth: 15 MAY 1985
Place of Birth: NEW YORK, USA
Sex: M
Date of Issue: 12 MAY 2019
Date of Expiry: 11 MAY 2029
Authority: U.S. DEPARTMENT OF STATE""",
        {
            "passport_number": "A12345678",
            "holder_name": "JOHN MICHAEL SMITH",
            "nationality": "UNITED STATES OF AMERICA",
            "date_of_birth": "1985-05-15",
            "gender": "M",
            "issuing_country": "USA",
            "issue_date": "2019-05-12",
            "expiry_date": "2029-05-11",
        },
    ),
    DocumentType.WORK_PERMIT: (
        """EMPLOYMENT AUTHORIZATION DOCUMENT
U.S. Citizenship and Immigration Services
Name: RODRIGUEZ, MARIA ELENA
USCIS#: 123-456-789
Category: C09
Card#: MSC1234567890
Country of Birth: MEXICO
Date of Birth: 03/15/1990
Sex: F
Valid From: 04/30/2021
Card Expires: 04/29/2023
Employer: TECH SOLUTIONS INC""",
        {
            "permit_number": "MSC1234567890",
            "employee_name": "MARIA ELENA RODRIGUEZ",
            "employer": "TECH SOLUTIONS INC",
            "start_date": "2021-04-30",
            "expiry_date": "2023-04-29",
        },
    ),
    DocumentType.CERTIFICATION: (
        """CERTIFICATE OF COMPLETION
This certifies that
DAVID CHEN
has successfully completed the requirements for
PROJECT MANAGEMENT PROFESSIONAL (PMP)
Certificate Number: PMP-789012
Issued by: PROJECT MANAGEMENT INSTITUTE
Date of Issue: 22 JUN 2022
Valid Until: 21 JUN 2025
Continuing Education Required""",
        {
            "certificate_number": "PMP-789012",
            "certificate_name": "PROJECT MANAGEMENT PROFESSIONAL (PMP)",
            "holder_name": "DAVID CHEN",
            "issuing_authority": "PROJECT MANAGEMENT INSTITUTE",
            "issue_date": "2022-06-22",
            "expiry_date": "2025-06-21",
        },
    ),
    DocumentType.EMPLOYMENT_CONTRACT: (
        """EMPLOYMENT AGREEMENT
Employee: SARAH JOHNSON
Employee ID: EMP-4567
Position: SOFTWARE ENGINEER
Department: ENGINEERING
Employer: INNOVATIVE TECH CORP
Start Date: January 10, 2022
Contract Period: 3 Years
End Date: January 9, 2025
Annual Salary: $95,000
Benefits: Health, Dental, 401k
Signature Required""",
        {
            "employee_name": "SARAH JOHNSON",
            "employee_id": "EMP-4567",
            "employer": "INNOVATIVE TECH CORP",
            "position": "SOFTWARE ENGINEER",
            "department": "ENGINEERING",
            "start_date": "2022-01-10",
            "end_date": "2025-01-09",
            "salary": "$95,000",
        },
    ),
    DocumentType.VISA: (
        """NONIMMIGRANT VISA
UNITED STATES OF AMERICA
Name: KUMAR, RAJESH
Passport Number: J1234567
Nationality: INDIA
Visa Type: H-1B
Control Number: 2023AB123456
Issued: 20 OCT 2021
Expires: 19 OCT 2024
Entries: Multiple
Classification: H1B
Annotation: TECH WORKER""",
        {
            "visa_number": "2023AB123456",
            "visa_type": "H-1B",
            "holder_name": "RAJESH KUMAR",
            "nationality": "INDIA",
            "passport_number": "J1234567",
            "issue_date": "2021-10-20",
            "expiry_date": "2024-10-19",
            "entry_type": "Multiple",
        },
    ),
}


def synthetic_extraction(document_id: str, document_type: DocumentType) -> ExtractionResult:
    """Build the canned extraction for a category (passport sample for unknown ones)."""
    text, fields = _SAMPLES.get(document_type, _SAMPLES[DocumentType.PASSPORT])
    return ExtractionResult(
        document_id=document_id,
        document_type=document_type,
        extracted_text=text,
        confidence=SYNTHETIC_CONFIDENCE,
        page_count=1,
        extracted_fields=dict(fields),
        tables=[],
        provider=SYNTHETIC_PROVIDER,
        language="en",
        degraded=True,
    )
