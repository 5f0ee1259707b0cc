"""Flashcard generation via Google Gemini."""

import asyncio
import json
from typing import Any, Optional

from google import genai
from google.genai import types

from studydeck.config import GenerationConfig
from studydeck.exceptions import (
    GenerationError,
    GenerationTimeoutError,
    InvalidStudyTextError,
    MalformedResponseError,
)
from studydeck.logger import Timer, get_logger
from studydeck.models import Flashcard

logger = get_logger(__name__)


SERVICE_FAILURE_MESSAGE = (
    "Failed to generate flashcards. The AI model may be temporarily unavailable "
    "or the input text could not be processed."
)

PROMPT_TEMPLATE = """Analyze the following study material. Identify the most important concepts, definitions, and key information.
Based on this analysis, generate a concise set of flashcards. Each flashcard should have a clear 'question' (a term or concept) and a corresponding 'answer' (its definition or explanation).
Focus on creating high-quality, effective study aids.

Study Material:
---
{text}
---
"""


FLASHCARD_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "question": types.Schema(
                type=types.Type.STRING,
                description="A question or key term from the text.",
            ),
            "answer": types.Schema(
                type=types.Type.STRING,
                description="The corresponding answer or definition for the question/term.",
            ),
        },
        required=["question", "answer"],
    ),
)


def build_prompt(study_text: str) -> str:
    return PROMPT_TEMPLATE.format(text=study_text)


def decode_flashcards(payload: Any) -> list[Flashcard]:
    """Validate a decoded JSON payload and turn it into flashcards.

    The payload must be a list of objects, each with non-empty string
    ``question`` and ``answer`` fields. A single invalid element rejects
    the whole batch.

    Raises:
        MalformedResponseError: If the payload does not have that shape
    """
    if not isinstance(payload, list):
        raise MalformedResponseError("AI response was not in the expected array format.")

    cards = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise MalformedResponseError(f"Flashcard {index} is not an object.")
        fields = {}
        for name in ("question", "answer"):
            value = item.get(name)
            if not isinstance(value, str) or not value.strip():
                raise MalformedResponseError(f"Flashcard {index} has no {name}.")
            fields[name] = value.strip()
        cards.append(Flashcard(id=f"card-{index}", **fields))
    return cards


class FlashcardGenerator:
    """Turns study text into flashcards with a Gemini model."""

    def __init__(self, config: Optional[GenerationConfig] = None, client: Any = None):
        """Initialize generator.

        Args:
            config: Generation configuration. If None, reads it from the environment.
            client: ``google.genai.Client`` (or an object with the same
                ``aio.models.generate_content``). If None, one is created on
                first use from ``config.api_key``.
        """
        self.config = config or GenerationConfig.from_env()
        self._client = client

    def _get_client(self):
        if self._client is None:
            if not self.config.api_key:
                raise GenerationError("GEMINI_API_KEY environment variable is not set.")
            self._client = genai.Client(api_key=self.config.api_key)
            logger.info(
                "Gemini client configured",
                extra_data={"model": self.config.model_name},
            )
        return self._client

    def _request_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_output_tokens,
            response_mime_type="application/json",
            response_schema=FLASHCARD_SCHEMA,
        )

    async def generate(self, study_text: str) -> list[Flashcard]:
        """Generate flashcards for ``study_text``.

        Raises:
            InvalidStudyTextError: If the text is empty or whitespace
            GenerationTimeoutError: If the service does not answer in time
            MalformedResponseError: If the response is not a valid flashcard array
            GenerationError: For any other service failure
        """
        if not study_text or not study_text.strip():
            raise InvalidStudyTextError(
                "Please enter some text or upload a document to generate flashcards from."
            )

        client = self._get_client()
        prompt = build_prompt(study_text)

        with Timer("generation") as timer:
            try:
                response = await asyncio.wait_for(
                    client.aio.models.generate_content(
                        model=self.config.model_name,
                        contents=prompt,
                        config=self._request_config(),
                    ),
                    timeout=self.config.timeout_seconds,
                )
            except asyncio.TimeoutError as exc:
                logger.error(
                    "Flashcard generation timed out",
                    extra_data={"timeout_seconds": self.config.timeout_seconds},
                )
                raise GenerationTimeoutError(SERVICE_FAILURE_MESSAGE) from exc
            except Exception as exc:
                logger.error(
                    "Flashcard generation request failed",
                    extra_data={"error_type": type(exc).__name__, "error": str(exc)},
                    exc_info=True,
                )
                raise GenerationError(SERVICE_FAILURE_MESSAGE) from exc

        # text is None when the response was blocked or has no candidates
        if not response.text:
            raise MalformedResponseError("AI response was empty.")
        try:
            payload = json.loads(response.text.strip())
        except ValueError as exc:
            raise MalformedResponseError("AI response was not valid JSON.") from exc

        cards = decode_flashcards(payload)
        logger.info(
            "Generated flashcards",
            extra_data={
                "card_count": len(cards),
                "input_characters": len(study_text),
                "generation_time_ms": timer.get_elapsed_ms(),
            },
        )
        return cards
