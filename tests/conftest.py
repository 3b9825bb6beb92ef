import io

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


def _render_pdf(pages: list[list[str]]) -> bytes:
    """Draw each page's lines top-down and return the PDF bytes."""
    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=A4)
    for lines in pages:
        y = 780
        for line in lines:
            pdf.drawString(72, y, line)
            y -= 18
        pdf.showPage()
    pdf.save()
    return buf.getvalue()


@pytest.fixture()
def passport_pdf_bytes() -> bytes:
    """Single-page scan with a text layer carrying passport fields."""
    return _render_pdf(
        [["Passport Number: A12345678", "Expiry Date: 2029-05-11"]]
    )


@pytest.fixture()
def contract_pdf_bytes() -> bytes:
    """Two-page employment contract."""
    return _render_pdf(
        [["Employment Agreement"], ["Signed by employer and employee"]]
    )


@pytest.fixture()
def blank_pdf_bytes() -> bytes:
    """Valid PDF whose only page has no text layer."""
    return _render_pdf([[]])
