"""Extraction orchestration."""

from typing import Mapping, Optional

from studydeck.config import ExtractorConfig
from studydeck.detector import FormatDetector
from studydeck.exceptions import ExtractionError, ParseError, UnsupportedFormatError
from studydeck.extractor import (
    BaseExtractor,
    DocxExtractor,
    PdfExtractor,
    PlainTextExtractor,
)
from studydeck.logger import Timer, get_logger, set_request_id
from studydeck.models import DocumentFormat, ExtractionOutcome, SourceFile

logger = get_logger(__name__)


def build_default_extractors(
    config: Optional[ExtractorConfig] = None,
) -> dict[DocumentFormat, BaseExtractor]:
    """Return the default extractor for every supported format."""
    config = config or ExtractorConfig()
    return {
        DocumentFormat.PLAIN_TEXT: PlainTextExtractor(config.text),
        DocumentFormat.PDF: PdfExtractor(config.pdf),
        DocumentFormat.STRUCTURED_DOCUMENT: DocxExtractor(),
    }


class DocumentHandler:
    def __init__(
        self,
        detector: Optional[FormatDetector] = None,
        extractors: Optional[Mapping[DocumentFormat, BaseExtractor]] = None,
        config: Optional[ExtractorConfig] = None,
    ) -> None:
        """Initialize document handler.

        Args:
            detector: Format detector. If None, creates default.
            extractors: Extractor per format. If None, builds defaults from config.
            config: Extractor configuration. Only used if extractors is None.
        """
        self.detector = detector or FormatDetector()
        self.extractors = dict(extractors) if extractors is not None else build_default_extractors(config)

    def extract(self, source: SourceFile) -> ExtractionOutcome:
        """Classify ``source``, run the matching extractor once, and report the outcome.

        Never raises for a bad file: unsupported types, unreadable sources
        and malformed documents all come back as an outcome carrying an
        :class:`ExtractionError`. The underlying fault is only logged.
        """
        set_request_id()
        document_format = self.detector.classify(source.mime_type, source.file_name)
        extractor = self.extractors.get(document_format)

        if extractor is None:
            error = UnsupportedFormatError()
            logger.warning(
                "Rejected unsupported document",
                extra_data={
                    "file_name": source.file_name,
                    "mime_type": source.mime_type,
                    "format": document_format.value,
                },
            )
            return ExtractionOutcome(file_name=source.file_name, format=document_format, error=error)

        with Timer("extraction") as timer:
            try:
                text = extractor.extract(source)
            except ExtractionError as exc:
                error = exc
            except Exception as exc:
                error = ParseError("The document could not be processed.")
                error.__cause__ = exc
            else:
                error = None

        if error is not None:
            logger.error(
                "Document extraction failed",
                extra_data={
                    "file_name": source.file_name,
                    "format": document_format.value,
                    "error_kind": error.kind.value,
                    "cause": repr(error.__cause__),
                    "extraction_time_ms": timer.get_elapsed_ms(),
                },
                exc_info=(type(error), error, error.__traceback__),
            )
            return ExtractionOutcome(file_name=source.file_name, format=document_format, error=error)

        logger.info(
            "Extracted text from document",
            extra_data={
                "file_name": source.file_name,
                "format": document_format.value,
                "character_count": len(text),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return ExtractionOutcome(file_name=source.file_name, format=document_format, text=text)
