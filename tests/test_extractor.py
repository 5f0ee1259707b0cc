from __future__ import annotations

import io
import zipfile

import fitz
import pytest

from conftest import build_pdf
from studydeck.config import PdfConfig, TextConfig
from studydeck.exceptions import ParseError, ReadError
from studydeck.extractor import BaseExtractor, DocxExtractor, PdfExtractor, PlainTextExtractor
from studydeck.models import SourceFile


class FakePage:
    def __init__(self, spans: list[dict] | None = None, error: Exception | None = None):
        self.spans = spans or []
        self.error = error

    def get_text(self, kind: str, flags: int | None = None) -> dict:
        if self.error is not None:
            raise self.error
        return {"blocks": [{"type": 1}, {"lines": [{"spans": self.spans}]}]}


class FakeDocument:
    def __init__(self, pages: list[FakePage], needs_pass: bool = False):
        self.pages = pages
        self.needs_pass = needs_pass
        self.closed = False
        self.loaded: list[int] = []

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def load_page(self, index: int) -> FakePage:
        self.loaded.append(index)
        return self.pages[index]

    def authenticate(self, password: str) -> int:
        return 0

    def close(self) -> None:
        self.closed = True


def test_base_extractor_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        BaseExtractor()


# --- plain text ---


def test_plain_text_is_returned_verbatim() -> None:
    content = "  Leading spaces\r\nПривет\n\ttabs and trailing  \n\n"
    source = SourceFile.from_bytes(content.encode("utf-8"), "notes.txt", "text/plain")

    assert PlainTextExtractor().extract(source) == content


def test_plain_text_replaces_undecodable_bytes_by_default() -> None:
    source = SourceFile.from_bytes(b"ok \xff end", "notes.txt")

    assert PlainTextExtractor().extract(source) == "ok � end"


def test_plain_text_strict_decoding_raises_parse_error() -> None:
    source = SourceFile.from_bytes(b"ok \xff end", "notes.txt")

    with pytest.raises(ParseError):
        PlainTextExtractor(TextConfig(errors="strict")).extract(source)


def test_unreadable_source_raises_read_error(tmp_path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("soon gone", encoding="utf-8")
    source = SourceFile.from_path(path)
    path.unlink()

    with pytest.raises(ReadError) as excinfo:
        PlainTextExtractor().extract(source)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


# --- pdf ---


def test_pdf_pages_are_newline_terminated_in_order(sample_pdf: bytes) -> None:
    text = PdfExtractor().extract(SourceFile.from_bytes(sample_pdf, "chapter.pdf"))

    assert text == "Page one heading Page one body\nPage two body\nPage three body\n"
    assert text.count("\n") == 3


def test_pdf_with_blank_page_keeps_an_empty_segment() -> None:
    data = build_pdf([["Intro"], [], ["Outro"]])

    text = PdfExtractor().extract(SourceFile.from_bytes(data, "gaps.pdf"))

    assert text.split("\n") == ["Intro", "", "Outro", ""]


def test_pdf_runs_are_joined_with_single_spaces_including_empty_runs() -> None:
    document = FakeDocument([FakePage([{"text": "Hello"}, {"text": ""}, {"text": "World"}])])
    extractor = PdfExtractor(opener=lambda data: document)

    assert extractor.extract_bytes(b"%PDF", "fake.pdf") == "Hello  World\n"
    assert document.closed


def test_pdf_run_without_text_payload_contributes_empty_string() -> None:
    document = FakeDocument([FakePage([{"text": "A"}, {"size": 11.0}, {"text": "B"}])])

    text = PdfExtractor(opener=lambda data: document).extract_bytes(b"", "fake.pdf")

    assert text == "A  B\n"


def test_pdf_with_zero_pages_yields_empty_string() -> None:
    document = FakeDocument([])

    assert PdfExtractor(opener=lambda data: document).extract_bytes(b"", "empty.pdf") == ""


def test_pdf_page_failure_aborts_whole_document() -> None:
    document = FakeDocument(
        [
            FakePage([{"text": "fine"}]),
            FakePage(error=RuntimeError("broken content stream")),
            FakePage([{"text": "never reached"}]),
        ]
    )

    with pytest.raises(ParseError, match="page 2"):
        PdfExtractor(opener=lambda data: document).extract_bytes(b"", "broken.pdf")
    assert document.loaded == [0, 1]
    assert document.closed


def test_mupdf_diagnostics_follow_config_and_are_restored() -> None:
    before = fitz.TOOLS.mupdf_display_errors()
    seen: list[bool] = []

    def opener(data: bytes) -> FakeDocument:
        seen.append(fitz.TOOLS.mupdf_display_errors())
        return FakeDocument([])

    def failing_opener(data: bytes) -> FakeDocument:
        seen.append(fitz.TOOLS.mupdf_display_errors())
        raise RuntimeError("no objects found")

    config = PdfConfig(display_errors=not before)
    PdfExtractor(config, opener=opener).extract_bytes(b"", "a.pdf")
    with pytest.raises(ParseError):
        PdfExtractor(config, opener=failing_opener).extract_bytes(b"", "b.pdf")

    assert seen == [not before, not before]
    assert fitz.TOOLS.mupdf_display_errors() == before


def test_pdf_separators_come_from_injected_config() -> None:
    document = FakeDocument([FakePage([{"text": "a"}, {"text": "b"}]), FakePage([{"text": "c"}])])
    config = PdfConfig(run_separator="|", page_separator="\f")

    text = PdfExtractor(config, opener=lambda data: document).extract_bytes(b"", "fake.pdf")

    assert text == "a|b\fc\f"


def test_malformed_pdf_raises_parse_error() -> None:
    with pytest.raises(ParseError):
        PdfExtractor().extract(SourceFile.from_bytes(b"this is not a pdf at all", "fake.pdf"))


def test_encrypted_pdf_raises_parse_error_without_password() -> None:
    data = build_pdf(
        [["Secret notes"]],
        encryption=fitz.PDF_ENCRYPT_AES_256,
        owner_pw="owner-pass",
        user_pw="user-pass",
    )

    with pytest.raises(ParseError, match="password"):
        PdfExtractor().extract(SourceFile.from_bytes(data, "locked.pdf"))

    unlocked = PdfExtractor(PdfConfig(password="user-pass")).extract(
        SourceFile.from_bytes(data, "locked.pdf")
    )
    assert unlocked == "Secret notes\n"


# --- docx ---


def test_docx_text_keeps_body_order_and_drops_formatting(sample_docx: bytes) -> None:
    text = DocxExtractor().extract(SourceFile.from_bytes(sample_docx, "biology.docx"))

    assert text == (
        "Cell Biology\n\n"
        "Mitochondria produce ATP.\n\n"
        "Ribosomes build proteins.\n\n"
        "Term\tDefinition\nNucleus\tHolds DNA\n\n"
        "End of chapter."
    )


def test_corrupted_docx_raises_parse_error() -> None:
    with pytest.raises(ParseError):
        DocxExtractor().extract(SourceFile.from_bytes(b"PK\x03\x04garbage", "broken.docx"))


def test_zip_without_document_parts_raises_parse_error() -> None:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("hello.txt", "not a word document")

    with pytest.raises(ParseError):
        DocxExtractor().extract(SourceFile.from_bytes(buffer.getvalue(), "fake.docx"))
