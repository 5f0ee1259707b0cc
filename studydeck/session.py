"""Latest-selection-wins extraction state for interactive front ends."""

import asyncio
import itertools
from dataclasses import dataclass
from typing import Optional

from studydeck.exceptions import ExtractionError
from studydeck.handler import DocumentHandler
from studydeck.logger import get_logger
from studydeck.models import ExtractionOutcome, SourceFile

logger = get_logger(__name__)


@dataclass
class SessionState:
    file_name: Optional[str] = None
    study_text: str = ""
    error: Optional[ExtractionError] = None
    is_parsing: bool = False


class ExtractionSession:
    """Tracks the file a user most recently selected.

    Each call to :meth:`extract` takes a new request token. When the
    extraction finishes, its outcome is applied only if no newer selection
    (or :meth:`clear`) happened in the meantime; stale outcomes are dropped
    and ``None`` is returned to the superseded caller.
    """

    def __init__(self, handler: Optional[DocumentHandler] = None):
        self.handler = handler or DocumentHandler()
        self.state = SessionState()
        self._tokens = itertools.count(1)
        self._latest_token = 0

    def _issue_token(self) -> int:
        self._latest_token = next(self._tokens)
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    async def extract(self, source: SourceFile) -> Optional[ExtractionOutcome]:
        token = self._issue_token()
        self.state = SessionState(file_name=source.file_name, is_parsing=True)

        try:
            outcome = await asyncio.to_thread(self.handler.extract, source)
        except BaseException:
            if self.is_current(token):
                self.state = SessionState()
            raise

        if not self.is_current(token):
            logger.info(
                "Discarding superseded extraction result",
                extra_data={
                    "file_name": source.file_name,
                    "token": token,
                    "latest_token": self._latest_token,
                },
            )
            return None

        if outcome.ok:
            self.state = SessionState(file_name=outcome.file_name, study_text=outcome.text)
        else:
            # the file name is dropped so the user can pick another file
            self.state = SessionState(error=outcome.error)
        return outcome

    def set_study_text(self, text: str) -> None:
        """Replace the study text with pasted input, discarding any selected file."""
        self._issue_token()
        self.state = SessionState(study_text=text)

    def clear(self) -> None:
        self._issue_token()
        self.state = SessionState()
