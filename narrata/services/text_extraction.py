"""
Text extraction

PDF via pypdf, DOCX via python-docx, plain text and markdown decoded as UTF-8.
Never raises; failures come back as a result object.
"""
import io
import re
from dataclasses import dataclass
from typing import Optional

from docx import Document
from loguru import logger
from pypdf import PdfReader

PDF_TYPE = "application/pdf"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_TYPES = ("text/plain", "text/markdown")

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b")
PHONE_PATTERN = re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b")
LINKEDIN_PATTERN = re.compile(r"linkedin\.com/in/", re.IGNORECASE)


@dataclass
class TextExtractionResult:
    success: bool
    text: Optional[str] = None
    error: Optional[str] = None


@dataclass
class TextMetadata:
    word_count: int
    line_count: int
    has_email: bool
    has_phone: bool
    has_linkedin: bool


def clean_text(text: str) -> str:
    """Normalize line endings and collapse whitespace runs"""
    text = text.replace("\r\n", "\n")
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip()


def extract_metadata(text: str) -> TextMetadata:
    """Basic counts and contact-detail flags"""
    return TextMetadata(
        word_count=len(re.split(r"\s+", text)),
        line_count=len(text.split("\n")),
        has_email=bool(EMAIL_PATTERN.search(text)),
        has_phone=bool(PHONE_PATTERN.search(text)),
        has_linkedin=bool(LINKEDIN_PATTERN.search(text)),
    )


def _extract_pdf(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n".join(pages)


def _extract_docx(data: bytes) -> str:
    document = Document(io.BytesIO(data))
    parts = [p.text for p in document.paragraphs if p.text]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                parts.append(" | ".join(cells))
    return "\n".join(parts)


def extract_text(data: bytes, content_type: str) -> TextExtractionResult:
    """
    Extract plain text from a document

    Args:
        data: file bytes
        content_type: MIME type of the file
    """
    try:
        if content_type == PDF_TYPE:
            raw = _extract_pdf(data)
        elif content_type == DOCX_TYPE:
            raw = _extract_docx(data)
        elif content_type in TEXT_TYPES:
            raw = data.decode("utf-8", errors="replace")
        else:
            return TextExtractionResult(success=False, error="Unsupported file type")
    except Exception as e:
        logger.warning("Text extraction failed for {}: {}", content_type, e)
        return TextExtractionResult(success=False, error=str(e) or "Text extraction failed")

    return TextExtractionResult(success=True, text=clean_text(raw))
