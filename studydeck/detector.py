"""Document format detection."""

from typing import Optional

from studydeck.logger import get_logger
from studydeck.models import DocumentFormat

logger = get_logger(__name__)


DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

MIME_FORMATS = {
    "text/plain": DocumentFormat.PLAIN_TEXT,
    "application/pdf": DocumentFormat.PDF,
    DOCX_MIME_TYPE: DocumentFormat.STRUCTURED_DOCUMENT,
}

SUFFIX_FORMATS = {
    ".txt": DocumentFormat.PLAIN_TEXT,
    ".pdf": DocumentFormat.PDF,
    ".docx": DocumentFormat.STRUCTURED_DOCUMENT,
}


class FormatDetector:
    """Classifies a file from its declared MIME type and filename extension.

    The declared MIME type wins when it is one we know; otherwise the
    extension decides. File contents are never inspected.
    """

    def classify(self, mime_type: Optional[str], file_name: Optional[str]) -> DocumentFormat:
        detected = MIME_FORMATS.get(mime_type or "")
        source = "mime_type"

        if detected is None:
            lowered = (file_name or "").lower()
            detected = next(
                (fmt for suffix, fmt in SUFFIX_FORMATS.items() if lowered.endswith(suffix)),
                DocumentFormat.UNSUPPORTED,
            )
            source = "extension"

        logger.debug(
            "Classified document",
            extra_data={
                "file_name": file_name,
                "mime_type": mime_type,
                "format": detected.value,
                "decided_by": source,
            },
        )
        return detected
