"""Per-format text extractors built on PyMuPDF and python-docx."""

import abc
import io
from contextlib import contextmanager
from typing import Any, Callable, Optional

import docx
import fitz  # PyMuPDF
from docx.table import Table
from docx.text.paragraph import Paragraph

from studydeck.config import PdfConfig, TextConfig
from studydeck.exceptions import ParseError, ReadError
from studydeck.logger import Timer, get_logger
from studydeck.models import SourceFile

logger = get_logger(__name__)


class BaseExtractor(abc.ABC):
    """Reads a :class:`SourceFile` and turns its bytes into plain text.

    Subclasses implement :meth:`extract_bytes`; reading is shared so that
    every format reports I/O failures the same way.
    """

    name = "base"

    def extract(self, source: SourceFile) -> str:
        data = self._read(source)
        with Timer(f"{self.name}_extraction") as timer:
            text = self.extract_bytes(data, source.file_name)

        logger.debug(
            "Extractor finished",
            extra_data={
                "extractor": self.name,
                "file_name": source.file_name,
                "file_size_bytes": len(data),
                "characters_extracted": len(text),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return text

    @abc.abstractmethod
    def extract_bytes(self, data: bytes, file_name: str) -> str:
        """Turn raw file bytes into text, raising ParseError on malformed input."""

    @staticmethod
    def _read(source: SourceFile) -> bytes:
        try:
            return source.read()
        except OSError as exc:
            raise ReadError(
                "The file could not be read. Please select it again."
            ) from exc


class PlainTextExtractor(BaseExtractor):
    """Decodes text files verbatim, without trimming or normalizing."""

    name = "plain_text"

    def __init__(self, config: Optional[TextConfig] = None):
        self.config = config or TextConfig()

    def extract_bytes(self, data: bytes, file_name: str) -> str:
        try:
            return data.decode(self.config.encoding, errors=self.config.errors)
        except (UnicodeDecodeError, LookupError) as exc:
            raise ParseError(
                f"Unable to decode text file (not valid {self.config.encoding})"
            ) from exc


def open_pdf(data: bytes) -> fitz.Document:
    return fitz.open(stream=data, filetype="pdf")


@contextmanager
def mupdf_diagnostics(enabled: bool):
    """Switch MuPDF stderr diagnostics for the duration of the block."""
    previous = fitz.TOOLS.mupdf_display_errors()
    fitz.TOOLS.mupdf_display_errors(enabled)
    try:
        yield
    finally:
        fitz.TOOLS.mupdf_display_errors(previous)


class PdfExtractor(BaseExtractor):
    """Extracts page text from PDFs, one newline-terminated segment per page.

    Within a page, text spans are joined with ``config.run_separator``.
    Original line breaks are not reconstructed; the output is lossy but
    deterministic. Any page failure aborts the whole document.
    """

    name = "pdf"

    def __init__(
        self,
        config: Optional[PdfConfig] = None,
        opener: Optional[Callable[[bytes], Any]] = None,
    ):
        """Initialize extractor.

        Args:
            config: PDF engine configuration. If None, uses defaults.
            opener: Callable turning bytes into an open document. Defaults to
                PyMuPDF; tests substitute an in-memory fake.
        """
        self.config = config or PdfConfig()
        self.opener = opener or open_pdf

    def extract_bytes(self, data: bytes, file_name: str) -> str:
        with mupdf_diagnostics(self.config.display_errors):
            return self._extract_pages(data, file_name)

    def _extract_pages(self, data: bytes, file_name: str) -> str:
        try:
            document = self.opener(data)
        except Exception as exc:
            raise ParseError("The file is not a readable PDF document.") from exc

        try:
            self._unlock(document)
            page_count = document.page_count
            segments = []
            for index in range(page_count):
                try:
                    page = document.load_page(index)
                    runs = self._page_runs(page)
                except Exception as exc:
                    raise ParseError(
                        f"Failed to read page {index + 1} of the PDF document."
                    ) from exc
                segments.append(self.config.run_separator.join(runs) + self.config.page_separator)
        finally:
            document.close()

        logger.debug(
            "PDF pages extracted",
            extra_data={"file_name": file_name, "page_count": page_count},
        )
        return "".join(segments)

    def _unlock(self, document) -> None:
        if not document.needs_pass:
            return
        if self.config.password and document.authenticate(self.config.password):
            return
        raise ParseError("The PDF document is password-protected.")

    def _page_runs(self, page) -> list[str]:
        """Return the page's text spans in block, line, span order."""
        content = page.get_text("dict", flags=self.config.text_flags)
        runs: list[str] = []
        for block in content.get("blocks", []):
            # image blocks carry no "lines"
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    runs.append(span.get("text") or "")
        return runs


class DocxExtractor(BaseExtractor):
    """Extracts raw text from Word (.docx) documents.

    Paragraphs and tables are emitted in body order. Styling is dropped;
    table rows become tab-separated lines.
    """

    name = "docx"

    def extract_bytes(self, data: bytes, file_name: str) -> str:
        try:
            document = docx.Document(io.BytesIO(data))
            parts = []
            for item in document.iter_inner_content():
                if isinstance(item, Paragraph):
                    text = item.text.strip()
                    if text:
                        parts.append(text)
                elif isinstance(item, Table):
                    table_text = self._table_text(item)
                    if table_text:
                        parts.append(table_text)
        except Exception as exc:
            raise ParseError("The file is not a readable Word document.") from exc

        logger.debug(
            "DOCX body extracted",
            extra_data={"file_name": file_name, "block_count": len(parts)},
        )
        return "\n\n".join(parts)

    @staticmethod
    def _table_text(table: Table) -> str:
        rows = []
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells]
            if any(cells):
                rows.append("\t".join(cells))
        return "\n".join(rows)
