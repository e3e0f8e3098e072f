"""Tests for uploaded-file text extraction"""
import io

import pytest
from docx import Document

from resumeai.app.core.errors import ExtractionError, ValidationError
from resumeai.app.services.text_extractor import extract_text, file_type_for


@pytest.mark.parametrize(
    "media,expected",
    [
        ("application/pdf", "pdf"),
        ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", "docx"),
        ("text/plain", "txt"),
        ("text/plain; charset=utf-8", "txt"),
    ],
)
def test_file_type_for_supported(media, expected):
    assert file_type_for(media) == expected


@pytest.mark.parametrize("media", ["application/msword", "image/png", "", None])
def test_file_type_for_unsupported(media):
    with pytest.raises(ValidationError):
        file_type_for(media)


def test_extract_txt_strips_bom():
    assert extract_text("\ufeffHello".encode("utf-8"), "txt") == "Hello"


def test_extract_txt_invalid_utf8():
    with pytest.raises(ExtractionError):
        extract_text(b"\xff\xfe\xfa", "txt")


def test_extract_docx_paragraphs_and_tables():
    doc = Document()
    doc.add_paragraph("Skills")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Python"
    table.rows[0].cells[1].text = "SQL"
    buf = io.BytesIO()
    doc.save(buf)
    text = extract_text(buf.getvalue(), "docx")
    assert "Skills" in text
    assert "Python | SQL" in text


def test_extract_corrupted_docx():
    with pytest.raises(ExtractionError):
        extract_text(b"PK-not-a-zip", "docx")


def test_extract_corrupted_pdf():
    with pytest.raises(ExtractionError):
        extract_text(b"%PDF-garbage", "pdf")
