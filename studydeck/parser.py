"""High-level API for document parsing."""

import mimetypes
from pathlib import Path
from typing import Optional

from studydeck.config import ExtractorConfig
from studydeck.handler import DocumentHandler
from studydeck.models import ExtractionOutcome, SourceFile


def parse_document(
    file_path: Optional[str] = None,
    file_bytes: Optional[bytes] = None,
    file_name: Optional[str] = None,
    mime_type: Optional[str] = None,
    config: Optional[ExtractorConfig] = None,
) -> ExtractionOutcome:
    """Extract study text from a document.

    Convenience wrapper accepting either a file path or raw bytes.

    Args:
        file_path: Path to document file (alternative to file_bytes)
        file_bytes: Raw document bytes (alternative to file_path)
        file_name: Original filename (required if using file_bytes)
        mime_type: MIME type hint (guessed from the extension for paths)
        config: Extractor configuration (optional, uses defaults if not provided)

    Returns:
        ExtractionOutcome holding the text or the extraction error

    Raises:
        ValueError: If neither or both of file_path and file_bytes are given,
            or if file_bytes is given without file_name

    Examples:
        >>> outcome = parse_document(file_path="notes.pdf")
        >>> print(outcome.unwrap())

        >>> outcome = parse_document(file_bytes=b"Mitosis ...", file_name="notes.txt")
    """
    if file_path is not None and file_bytes is not None:
        raise ValueError("Provide either file_path or file_bytes, not both")
    if file_path is None and file_bytes is None:
        raise ValueError("Must provide either file_path or file_bytes")

    if file_path is not None:
        path = Path(file_path)
        if not mime_type:
            mime_type, _ = mimetypes.guess_type(path.name)
        source = SourceFile.from_path(path, mime_type=mime_type)
    else:
        if not file_name:
            raise ValueError("file_name is required when using file_bytes")
        source = SourceFile.from_bytes(file_bytes, file_name=file_name, mime_type=mime_type)

    return DocumentHandler(config=config).extract(source)
