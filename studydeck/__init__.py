"""Turn study documents into question/answer flashcards."""

from studydeck.config import ExtractorConfig, GenerationConfig, PdfConfig, TextConfig
from studydeck.detector import FormatDetector
from studydeck.exceptions import (
    ExtractionError,
    ExtractionErrorKind,
    GenerationError,
    GenerationTimeoutError,
    InvalidStudyTextError,
    MalformedResponseError,
    ParseError,
    ReadError,
    StudyDeckError,
    UnsupportedFormatError,
)
from studydeck.export import flashcards_to_csv, write_csv
from studydeck.extractor import DocxExtractor, PdfExtractor, PlainTextExtractor
from studydeck.generator import FlashcardGenerator, decode_flashcards
from studydeck.handler import DocumentHandler
from studydeck.models import DocumentFormat, ExtractionOutcome, Flashcard, SourceFile
from studydeck.parser import parse_document
from studydeck.session import ExtractionSession

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "parse_document",
    "flashcards_to_csv",
    "write_csv",
    # Core classes
    "DocumentHandler",
    "FormatDetector",
    "PlainTextExtractor",
    "PdfExtractor",
    "DocxExtractor",
    "ExtractionSession",
    "FlashcardGenerator",
    "decode_flashcards",
    # Data models
    "SourceFile",
    "DocumentFormat",
    "ExtractionOutcome",
    "Flashcard",
    # Configuration
    "ExtractorConfig",
    "PdfConfig",
    "TextConfig",
    "GenerationConfig",
    # Exceptions
    "StudyDeckError",
    "ExtractionError",
    "ExtractionErrorKind",
    "UnsupportedFormatError",
    "ReadError",
    "ParseError",
    "GenerationError",
    "InvalidStudyTextError",
    "MalformedResponseError",
    "GenerationTimeoutError",
]
