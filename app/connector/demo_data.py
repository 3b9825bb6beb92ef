"""Fixed demo documents served when the document source is unreachable."""

from datetime import datetime, timezone

from app.documents.models import DocumentBatch, DocumentMetadata, DocumentReference, DocumentType

DEMO_DOCUMENTS: tuple[DocumentReference, ...] = (
    DocumentReference(
        id="DOC-001",
        name="John_Smith_Passport.pdf",
        source_type=DocumentType.PASSPORT,
        size_bytes=2457600,
        mime_type="application/pdf",
        created_at=datetime(2023, 1, 15, 10, 30, tzinfo=timezone.utc),
        modified_at=datetime(2023, 1, 15, 10, 30, tzinfo=timezone.utc),
        employee_id="EMP-5432",
        department="HR",
        url="demo://document/DOC-001",
    ),
    DocumentReference(
        id="DOC-002",
        name="Maria_Rodriguez_WorkPermit.pdf",
        source_type=DocumentType.WORK_PERMIT,
        size_bytes=1843200,
        mime_type="application/pdf",
        created_at=datetime(2023, 1, 16, 9, 15, tzinfo=timezone.utc),
        modified_at=datetime(2023, 1, 16, 9, 15, tzinfo=timezone.utc),
        employee_id="EMP-6543",
        department="IT",
        url="demo://document/DOC-002",
    ),
    DocumentReference(
        id="DOC-003",
        name="David_Chen_Certificate.pdf",
        source_type=DocumentType.CERTIFICATION,
        size_bytes=3200000,
        mime_type="application/pdf",
        created_at=datetime(2023, 1, 17, 14, 20, tzinfo=timezone.utc),
        modified_at=datetime(2023, 1, 17, 14, 20, tzinfo=timezone.utc),
        employee_id="EMP-7654",
        department="Finance",
        url="demo://document/DOC-003",
    ),
)

_DEMO_CONTENT_TEMPLATE = """Demo Document Content for {document_id}

This is simulated document content that would normally come from OpenText DMS.
Document Type: Passport
Employee: John Smith
Passport Number: A12345678
Issue Date: 2019-05-12
Expiry Date: 2029-05-11
Issuing Country: United States

This content would normally be extracted from the actual PDF or image file
stored in the OpenText Document Management System.
"""


def demo_batch() -> DocumentBatch:
    return DocumentBatch(
        documents=list(DEMO_DOCUMENTS),
        has_more=False,
        total_count=len(DEMO_DOCUMENTS),
        next_cursor=None,
    )


def demo_metadata(document_id: str) -> DocumentMetadata:
    known = next((d for d in DEMO_DOCUMENTS if d.id == document_id), None)
    return DocumentMetadata(
        document_id=document_id,
        document_type=known.source_type if known else DocumentType.PASSPORT,
        name=known.name if known else f"Demo_Document_{document_id}.pdf",
        size_bytes=known.size_bytes if known else 2457600,
        mime_type="application/pdf",
        created_at=known.created_at if known else None,
        modified_at=known.modified_at if known else None,
        created_by="system",
        modified_by="system",
        version=1,
        categories=["HR Documents"],
    )


def demo_document_content(document_id: str) -> bytes:
    return _DEMO_CONTENT_TEMPLATE.format(document_id=document_id).encode("utf-8")
