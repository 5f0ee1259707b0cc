"""Data models for studydeck."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from studydeck.exceptions import ExtractionError


class DocumentFormat(str, Enum):
    PLAIN_TEXT = "plain_text"
    PDF = "pdf"
    STRUCTURED_DOCUMENT = "structured_document"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class SourceFile:
    """Read-only handle to a user-supplied file.

    ``mime_type`` and ``file_name`` are classification hints only; the bytes
    are fetched through ``reader`` each time :meth:`read` is called.
    """

    file_name: str
    mime_type: Optional[str]
    reader: Callable[[], bytes] = field(repr=False, compare=False)

    @classmethod
    def from_bytes(
        cls, data: bytes, file_name: str, mime_type: Optional[str] = None
    ) -> "SourceFile":
        payload = bytes(data)
        return cls(file_name=file_name, mime_type=mime_type, reader=lambda: payload)

    @classmethod
    def from_path(
        cls, path: Union[str, Path], mime_type: Optional[str] = None
    ) -> "SourceFile":
        path = Path(path)
        return cls(file_name=path.name, mime_type=mime_type, reader=path.read_bytes)

    def read(self) -> bytes:
        return self.reader()


@dataclass(frozen=True)
class ExtractionOutcome:
    """Result of one extraction attempt: either ``text`` or ``error``."""

    file_name: str
    format: DocumentFormat
    text: Optional[str] = None
    error: Optional[ExtractionError] = None

    def __post_init__(self):
        if (self.text is None) == (self.error is None):
            raise ValueError("ExtractionOutcome needs exactly one of text or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def character_count(self) -> int:
        return len(self.text) if self.text is not None else 0

    def unwrap(self) -> str:
        """Return the extracted text or raise the extraction error."""
        if self.error is not None:
            raise self.error.with_traceback(None)
        return self.text


@dataclass(frozen=True)
class Flashcard:
    """A single question/answer pair."""

    id: str
    question: str
    answer: str
