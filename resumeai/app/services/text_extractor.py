"""
Text extraction for uploaded resumes - pdfplumber for PDF, python-docx for DOCX.
"""
import io

import pdfplumber
from docx import Document

from resumeai.app.core.config import ALLOWED_MEDIA_TYPES
from resumeai.app.core.errors import ExtractionError, ValidationError
from resumeai.app.core.logging_config import get_logger

logger = get_logger("services.text_extractor")


def file_type_for(media_type: str | None) -> str:
    """Map a declared media type to pdf/docx/txt. Raises ValidationError when unsupported."""
    base = (media_type or "").split(";")[0].strip().lower()
    file_type = ALLOWED_MEDIA_TYPES.get(base)
    if not file_type:
        raise ValidationError("Invalid file type. Only PDF, DOCX, and TXT files are allowed.")
    return file_type


def extract_text_from_pdf(content: bytes) -> str:
    """Extract raw text from PDF bytes using pdfplumber."""
    text_parts = []
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        for page in pdf.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
    return "\n".join(text_parts)


def extract_text_from_docx(content: bytes) -> str:
    """Paragraph text followed by table rows (cells joined with ' | ')."""
    doc = Document(io.BytesIO(content))
    parts = [p.text for p in doc.paragraphs if p.text]
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text.strip()]
            if cells:
                parts.append(" | ".join(cells))
    return "\n".join(parts)


def extract_text(content: bytes, file_type: str) -> str:
    """
    Convert an uploaded buffer to plain text.
    Raises ExtractionError when the content cannot be parsed.
    """
    try:
        if file_type == "pdf":
            return extract_text_from_pdf(content)
        if file_type == "docx":
            return extract_text_from_docx(content)
        if file_type == "txt":
            return content.decode("utf-8-sig")
    except Exception as e:
        logger.warning("Text extraction failed file_type=%s bytes=%d: %s", file_type, len(content), e)
        raise ExtractionError(detail=str(e)) from e
    raise ValidationError(f"Unsupported file type: {file_type}")
