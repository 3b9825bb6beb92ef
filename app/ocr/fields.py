"""Per-category field extraction strategies for OCR text.

Each document category maps to a strategy ``(text) -> fields``. Strategies
here are regex based; anything honoring the same signature can be
registered in ``FIELD_STRATEGIES``.
"""

import re
from collections.abc import Callable

from app.documents.dates import normalize_date_string
from app.documents.models import DocumentType

FieldStrategy = Callable[[str], dict[str, str | None]]

_I = re.IGNORECASE
_IM = re.IGNORECASE | re.MULTILINE

_DATE = (
    r"(\d{4}-\d{1,2}-\d{1,2}"
    r"|\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}"
    r"|\d{1,2}\s+[A-Za-z]{3,9}\s+\d{4}"
    r"|[A-Za-z]{3,9}\s+\d{1,2},\s*\d{4})"
)
_SEP = r"\s*[:\-]?\s*"
_LINE_VALUE = r"([^\n]+?)\s*$"


def _p(pattern: str, flags: int = _I) -> re.Pattern[str]:
    return re.compile(pattern, flags)


_PASSPORT_NUMBER = (
    _p(r"passport\s*(?:no\.?|number|#)?" + _SEP + r"([A-Z]\d{8}|[A-Z]{2}\d{7}|[A-Z]\d{7}|\d{9})\b"),
    _p(r"document\s*(?:no\.?|number)" + _SEP + r"([A-Z]\d{8}|[A-Z]{2}\d{7}|\d{9})\b"),
    re.compile(r"\b([A-Z]\d{8}|[A-Z]{2}\d{7})\b"),
)
_LABELLED_NAME = (
    _p(r"^\s*(?:full\s+name|name|holder(?:'s)?\s+name|holder|employee(?:\s+name)?)\s*:\s*" + _LINE_VALUE, _IM),
    _p(r"certifies\s+that\s*\n\s*([A-Za-z][A-Za-z .'\-]+?)\s*$", _IM),
)
_SURNAME = _p(r"^\s*surname\s*:\s*" + _LINE_VALUE, _IM)
_GIVEN_NAMES = _p(r"^\s*given\s+names?\s*:\s*" + _LINE_VALUE, _IM)
_EXPIRY_DATE = (
    _p(r"(?:date\s+of\s+expiry|expiry\s+date|expir(?:y|es|ation)|card\s+expires|valid\s+until)" + _SEP + _DATE),
    _p(r"\bexp\b" + _SEP + _DATE),
)
_ISSUE_DATE = (
    _p(r"(?:date\s+of\s+issue|issue\s+date|issued\s+on|issued)" + _SEP + _DATE),
)
_START_DATE = (
    _p(r"(?:start\s+date|valid\s+from|commencement\s+date|effective\s+date)" + _SEP + _DATE),
)
_END_DATE = (
    _p(r"(?:end\s+date|termination\s+date|contract\s+end)" + _SEP + _DATE),
)
_DATE_OF_BIRTH = (_p(r"(?:date\s+of\s+birth|\bdob\b|\bborn\b)" + _SEP + _DATE),)
_PLACE_OF_BIRTH = (_p(r"^\s*(?:place|country)\s+of\s+birth\s*:\s*" + _LINE_VALUE, _IM),)
_NATIONALITY = (
    _p(r"^\s*nationality\s*:\s*" + _LINE_VALUE, _IM),
    _p(r"citizen\s+of" + _SEP + r"([A-Za-z][A-Za-z ]+?)\s*$", _IM),
)
_GENDER = (_p(r"\b(?:sex|gender)\s*[:\-]?\s*(male|female|m|f)\b"),)
_ISSUING_COUNTRY = (
    _p(r"^\s*(?:issuing\s+country|country\s+of\s+issue|code)\s*:\s*" + _LINE_VALUE, _IM),
)
_EMPLOYEE_ID = (
    _p(r"employee\s*(?:id|number|no\.?)" + _SEP + r"(EMP-?\d+|\d{4,8})\b"),
    _p(r"\b(?:emp)\s*[:\-]?\s*(EMP-?\d+|\d{4,8})\b"),
)
_EMPLOYER = (
    _p(r"^\s*(?:employer|company)\s*:\s*" + _LINE_VALUE, _IM),
)
_JOB_TITLE = (_p(r"^\s*(?:job\s+title|position|role|occupation)\s*:\s*" + _LINE_VALUE, _IM),)
_WORK_LOCATION = (_p(r"^\s*(?:work\s+location|place\s+of\s+work|location)\s*:\s*" + _LINE_VALUE, _IM),)
_DEPARTMENT = (_p(r"^\s*(?:department|dept\.?)\s*:\s*" + _LINE_VALUE, _IM),)
_PERMIT_NUMBER = (
    _p(r"(?:permit|authorization|card)\s*(?:no\.?|number|#)" + _SEP + r"([A-Z0-9\-]{6,15})\b"),
)
_CERTIFICATE_NUMBER = (
    _p(r"certificate\s*(?:no\.?|number)" + _SEP + r"([A-Z0-9\-]{6,20})\b"),
    _p(r"\bcert\.?\s*(?:no\.?|#)" + _SEP + r"([A-Z0-9\-]{6,20})\b"),
)
_CERTIFICATE_NAME = (
    _p(r"requirements\s+for\s*\n\s*([^\n]+?)\s*$", _IM),
    _p(r"^\s*(?:certification|certificate\s+name|course)\s*:\s*" + _LINE_VALUE, _IM),
)
_CERTIFICATION_LEVEL = (_p(r"^\s*(?:level|grade)\s*:\s*" + _LINE_VALUE, _IM),)
_ISSUING_AUTHORITY = (
    _p(r"^\s*(?:issued\s+by|issuing\s+authority|authority)\s*:\s*" + _LINE_VALUE, _IM),
)
_CONTRACT_NUMBER = (
    _p(r"(?:contract|agreement)\s*(?:no\.?|number|#)" + _SEP + r"([A-Z0-9\-]{4,20})\b"),
)
_SALARY = (_p(r"(?:annual\s+)?salary" + _SEP + r"([$€£]?\s?[\d,]+(?:\.\d{2})?)"),)
_VISA_NUMBER = (
    _p(r"(?:visa|control)\s*(?:no\.?|number)" + _SEP + r"([A-Z0-9\-]{8,15})\b"),
)
_VISA_TYPE = (
    _p(r"visa\s+type" + _SEP + r"([A-Z0-9\-]{1,5})\b"),
    _p(r"\bcategory" + _SEP + r"([A-Z0-9\-]{1,5})\b"),
)
_ENTRY_TYPE = (_p(r"^\s*entr(?:y|ies)(?:\s+type)?\s*:\s*" + _LINE_VALUE, _IM),)
_DOCUMENT_NUMBER = (
    _p(r"(?:document|reference|ref)\s*(?:no\.?|number|#)" + _SEP + r"([A-Z0-9\-]{4,20})\b"),
)


def first_match(text: str, patterns: tuple[re.Pattern[str], ...]) -> str | None:
    """Return the first captured group of the first matching pattern."""
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1):
            return match.group(1).strip()
    return None


def first_date(text: str, patterns: tuple[re.Pattern[str], ...]) -> str | None:
    return normalize_date_string(first_match(text, patterns))


def holder_name(text: str) -> str | None:
    """Holder name, reordering ``SURNAME, GIVEN`` and joining split name fields."""
    surname = first_match(text, (_SURNAME,))
    given = first_match(text, (_GIVEN_NAMES,))
    if surname and given:
        return f"{given} {surname}"
    name = first_match(text, _LABELLED_NAME)
    if name and "," in name:
        last, _, first = name.partition(",")
        return f"{first.strip()} {last.strip()}".strip()
    return name or surname or given


def gender(text: str) -> str | None:
    value = first_match(text, _GENDER)
    if value is None:
        return None
    return "M" if value.upper().startswith("M") else "F"


def passport_fields(text: str) -> dict[str, str | None]:
    return {
        "passport_number": first_match(text, _PASSPORT_NUMBER),
        "holder_name": holder_name(text),
        "nationality": first_match(text, _NATIONALITY),
        "date_of_birth": first_date(text, _DATE_OF_BIRTH),
        "place_of_birth": first_match(text, _PLACE_OF_BIRTH),
        "gender": gender(text),
        "issuing_country": first_match(text, _ISSUING_COUNTRY),
        "issue_date": first_date(text, _ISSUE_DATE),
        "expiry_date": first_date(text, _EXPIRY_DATE),
    }


def work_permit_fields(text: str) -> dict[str, str | None]:
    return {
        "permit_number": first_match(text, _PERMIT_NUMBER),
        "employee_id": first_match(text, _EMPLOYEE_ID),
        "employee_name": holder_name(text),
        "employer": first_match(text, _EMPLOYER),
        "job_title": first_match(text, _JOB_TITLE),
        "start_date": first_date(text, _START_DATE),
        "expiry_date": first_date(text, _EXPIRY_DATE),
        "work_location": first_match(text, _WORK_LOCATION),
    }


def certification_fields(text: str) -> dict[str, str | None]:
    return {
        "certificate_number": first_match(text, _CERTIFICATE_NUMBER),
        "certificate_name": first_match(text, _CERTIFICATE_NAME),
        "holder_name": holder_name(text),
        "issuing_authority": first_match(text, _ISSUING_AUTHORITY),
        "issue_date": first_date(text, _ISSUE_DATE),
        "expiry_date": first_date(text, _EXPIRY_DATE),
        "certification_level": first_match(text, _CERTIFICATION_LEVEL),
    }


def employment_contract_fields(text: str) -> dict[str, str | None]:
    return {
        "contract_number": first_match(text, _CONTRACT_NUMBER),
        "employee_name": holder_name(text),
        "employee_id": first_match(text, _EMPLOYEE_ID),
        "employer": first_match(text, _EMPLOYER),
        "position": first_match(text, _JOB_TITLE),
        "department": first_match(text, _DEPARTMENT),
        "start_date": first_date(text, _START_DATE),
        "end_date": first_date(text, _END_DATE),
        "salary": first_match(text, _SALARY),
    }


def visa_fields(text: str) -> dict[str, str | None]:
    return {
        "visa_number": first_match(text, _VISA_NUMBER),
        "visa_type": first_match(text, _VISA_TYPE),
        "holder_name": holder_name(text),
        "nationality": first_match(text, _NATIONALITY),
        "passport_number": first_match(text, _PASSPORT_NUMBER),
        "issuing_country": first_match(text, _ISSUING_COUNTRY),
        "issue_date": first_date(text, _ISSUE_DATE),
        "expiry_date": first_date(text, _EXPIRY_DATE),
        "entry_type": first_match(text, _ENTRY_TYPE),
    }


def general_fields(text: str) -> dict[str, str | None]:
    return {
        "document_number": first_match(text, _DOCUMENT_NUMBER),
        "holder_name": holder_name(text),
        "issue_date": first_date(text, _ISSUE_DATE),
        "expiry_date": first_date(text, _EXPIRY_DATE),
    }


FIELD_STRATEGIES: dict[DocumentType, FieldStrategy] = {
    DocumentType.PASSPORT: passport_fields,
    DocumentType.WORK_PERMIT: work_permit_fields,
    DocumentType.CERTIFICATION: certification_fields,
    DocumentType.EMPLOYMENT_CONTRACT: employment_contract_fields,
    DocumentType.VISA: visa_fields,
}


def clean_text(text: str) -> str:
    """Collapse runs of blanks inside lines, keeping line breaks."""
    lines = (" ".join(line.split()) for line in text.replace("\r\n", "\n").split("\n"))
    return "\n".join(line for line in lines if line)


def extract_fields(text: str, document_type: DocumentType) -> dict[str, str | None]:
    """Run the category's strategy and drop fields that were not found."""
    strategy = FIELD_STRATEGIES.get(document_type, general_fields)
    fields = strategy(clean_text(text))
    return {key: value for key, value in fields.items() if value is not None}
