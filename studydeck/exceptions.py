"""Custom exceptions for studydeck."""

from enum import Enum


ACCEPTED_FORMATS_MESSAGE = (
    "Unsupported file type. Please upload a plain text (.txt), "
    "PDF (.pdf), or Word document (.docx) file."
)


class StudyDeckError(Exception):
    """Base exception for studydeck errors."""

    pass


class ExtractionErrorKind(str, Enum):
    UNSUPPORTED_FORMAT = "unsupported_format"
    READ_ERROR = "read_error"
    PARSE_ERROR = "parse_error"


class ExtractionError(StudyDeckError):
    """Raised when text extraction fails.

    Carries a ``kind`` so callers can tell a bad file type from a broken
    file without inspecting the message.
    """

    kind = ExtractionErrorKind.PARSE_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExtractionError):
            return NotImplemented
        return self.kind == other.kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))


class UnsupportedFormatError(ExtractionError):
    """Raised when a file cannot be mapped to a known extractor."""

    kind = ExtractionErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, message: str = ACCEPTED_FORMATS_MESSAGE):
        super().__init__(message)


class ReadError(ExtractionError):
    """Raised when the underlying byte source cannot be read."""

    kind = ExtractionErrorKind.READ_ERROR


class ParseError(ExtractionError):
    """Raised when file bytes do not match the structure of their format."""

    kind = ExtractionErrorKind.PARSE_ERROR


class GenerationError(StudyDeckError):
    """Raised when the flashcard generation service fails."""

    pass


class InvalidStudyTextError(GenerationError):
    """Raised when the study text is empty or unusable."""

    pass


class MalformedResponseError(GenerationError):
    """Raised when the service response is not a valid flashcard array."""

    pass


class GenerationTimeoutError(GenerationError):
    """Raised when the service does not answer in time."""

    pass
