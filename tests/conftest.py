from __future__ import annotations

import io

import docx
import fitz
import pytest

from studydeck.extractor import BaseExtractor

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def build_pdf(pages: list[list[str]], **save_options) -> bytes:
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        for offset, line in enumerate(lines):
            page.insert_text((72, 72 + 24 * offset), line)
    data = doc.tobytes(**save_options)
    doc.close()
    return data


def build_docx() -> bytes:
    document = docx.Document()
    document.add_heading("Cell Biology", level=1)
    document.add_paragraph("Mitochondria produce ATP.")
    styled = document.add_paragraph()
    styled.add_run("Ribosomes").bold = True
    styled.add_run(" build proteins.")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Term"
    table.cell(0, 1).text = "Definition"
    table.cell(1, 0).text = "Nucleus"
    table.cell(1, 1).text = "Holds DNA"
    document.add_paragraph("End of chapter.")

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class CountingExtractor(BaseExtractor):
    """Extractor stub recording how often it is invoked."""

    name = "counting"

    def __init__(self, text: str = "stub text", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls = 0

    def extract_bytes(self, data: bytes, file_name: str) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def sample_pdf() -> bytes:
    return build_pdf(
        [
            ["Page one heading", "Page one body"],
            ["Page two body"],
            ["Page three body"],
        ]
    )


@pytest.fixture
def sample_docx() -> bytes:
    return build_docx()
