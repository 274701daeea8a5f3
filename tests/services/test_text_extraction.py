"""
Text extraction tests
"""
import io

from docx import Document

from narrata.services.text_extraction import (
    DOCX_TYPE,
    PDF_TYPE,
    clean_text,
    extract_metadata,
    extract_text,
)


def test_clean_text_normalizes_whitespace():
    assert clean_text("  Jane\r\nDoe  ") == "Jane\nDoe"
    assert clean_text("a    b\t\tc") == "a b c"
    assert clean_text("a\n\n\n\nb") == "a b"


def test_extract_plain_text():
    result = extract_text("Jane Doe\r\nProduct Manager".encode(), "text/plain")
    assert result.success is True
    assert result.text == "Jane Doe\nProduct Manager"


def test_extract_markdown():
    result = extract_text(b"# Jane Doe", "text/markdown")
    assert result.success is True
    assert result.text == "# Jane Doe"


def test_extract_docx_paragraphs_and_tables():
    document = Document()
    document.add_paragraph("Jane Doe")
    document.add_paragraph("Senior Product Manager")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Acme"
    table.rows[0].cells[1].text = "2020 - 2024"
    buffer = io.BytesIO()
    document.save(buffer)

    result = extract_text(buffer.getvalue(), DOCX_TYPE)
    assert result.success is True
    assert "Jane Doe" in result.text
    assert "Senior Product Manager" in result.text
    assert "Acme | 2020 - 2024" in result.text


def test_broken_pdf_is_reported_not_raised():
    result = extract_text(b"definitely not a pdf", PDF_TYPE)
    assert result.success is False
    assert result.error


def test_unsupported_type():
    result = extract_text(b"\x89PNG", "image/png")
    assert result.success is False
    assert result.error == "Unsupported file type"


def test_extract_metadata():
    metadata = extract_metadata("Jane Doe\njane@example.com\n555-123-4567\nlinkedin.com/in/janedoe")
    assert metadata.line_count == 4
    assert metadata.word_count == 5
    assert metadata.has_email is True
    assert metadata.has_phone is True
    assert metadata.has_linkedin is True

    metadata = extract_metadata("No contact details here")
    assert metadata.has_email is False
    assert metadata.has_phone is False
    assert metadata.has_linkedin is False
