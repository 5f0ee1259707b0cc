"""Configuration classes for studydeck."""

import os
from dataclasses import dataclass, field
from typing import Optional

import fitz  # PyMuPDF


@dataclass
class PdfConfig:
    """Configuration for the PDF engine.

    Passed to :class:`studydeck.extractor.PdfExtractor` at construction time
    instead of being applied as process-wide state, so tests can run with
    their own settings side by side.

    Examples:
        >>> # Default configuration
        >>> config = PdfConfig()

        >>> # Open documents protected with a known user password
        >>> config = PdfConfig(password="s3cret")
    """

    run_separator: str = " "
    """Joins the text runs of a single page."""

    page_separator: str = "\n"
    """Appended after every page, including the last one."""

    password: Optional[str] = None
    """Password tried on encrypted documents. Without it they fail to parse."""

    display_errors: bool = False
    """Let MuPDF print its own diagnostics to stderr while a document is processed.
    The previous setting is restored once extraction finishes."""

    text_flags: int = fitz.TEXTFLAGS_DICT & ~fitz.TEXT_PRESERVE_IMAGES
    """Flags passed to ``page.get_text("dict")``. Images are never needed."""


@dataclass
class TextConfig:
    """Configuration for plain text decoding."""

    encoding: str = "utf-8"
    errors: str = "replace"
    """Codec error handler. ``"strict"`` turns undecodable bytes into a ParseError."""


@dataclass
class ExtractorConfig:
    """Configuration for document extraction."""

    pdf: PdfConfig = field(default_factory=PdfConfig)
    text: TextConfig = field(default_factory=TextConfig)


@dataclass
class GenerationConfig:
    """Configuration for the flashcard generation service."""

    api_key: Optional[str] = None
    model_name: str = "gemini-2.5-flash"
    temperature: float = 0.3
    max_output_tokens: int = 8192
    timeout_seconds: float = 120.0

    @classmethod
    def from_env(cls, **overrides) -> "GenerationConfig":
        """Build a config from ``GEMINI_API_KEY`` (or ``API_KEY``) and optional overrides."""
        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
        model_name = os.getenv("STUDYDECK_MODEL")
        values = {"api_key": api_key}
        if model_name:
            values["model_name"] = model_name
        values.update(overrides)
        return cls(**values)
